from typing import Optional

from schemas.common import CamelModel

class WalletSave(CamelModel):
    address: str
    chain: str
    user_id: Optional[str] = None

class WalletResponse(WalletSave):
    connected_time: Optional[int] = None
