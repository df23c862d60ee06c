from contextlib import contextmanager
from typing import Optional
import logging

import httpx
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

class MarketplaceError(Exception):
    """Base for failures surfaced to callers as a success=false envelope"""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def to_message(self) -> str:
        if self.operation:
            return f"Error occured during {self.operation}: {self.message}"
        return self.message

class ValidationError(MarketplaceError):
    """Missing or malformed input. Never retried."""

    def to_message(self) -> str:
        return f"Validation Error: {self.message}"

class AuthorizationError(ValidationError):
    """Invalid API key or access token"""
    pass

class NotFoundError(MarketplaceError):
    """Merge or increment target does not exist"""
    pass

class UpstreamError(MarketplaceError):
    """Store, blob storage or pinning call failed; details stay in the server log"""

    def __init__(self, operation: Optional[str] = None, message: str = "upstream service unavailable"):
        super().__init__(message, operation)

class PartialBatchError(MarketplaceError):
    """An item of a multi-item create failed; earlier items stay persisted"""

    def __init__(self, operation: str, completed: int, total: int, cause: MarketplaceError):
        super().__init__(
            f"{completed} of {total} items completed before failure: {cause.message}",
            operation
        )
        self.completed = completed
        self.total = total
        self.cause = cause

UPSTREAM_EXCEPTIONS = (SQLAlchemyError, httpx.HTTPError)

@contextmanager
def upstream_guard(operation: str):
    """Convert third-party failures raised inside the block into UpstreamError"""
    try:
        yield
    except MarketplaceError as e:
        if e.operation is None and not isinstance(e, ValidationError):
            e.operation = operation
        raise
    except UPSTREAM_EXCEPTIONS as e:
        logger.error(f"Upstream failure during {operation}: {e}", exc_info=True)
        raise UpstreamError(operation) from e
