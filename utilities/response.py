from typing import Any, Dict, Optional

def success_response(data: Any = None, message: Optional[str] = None) -> Dict:
    """Create a success envelope; `data` is omitted when there is nothing to return"""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body

def error_response(message: str) -> Dict:
    """Create an error envelope"""
    return {"success": False, "message": message}
