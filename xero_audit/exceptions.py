"""
Exceptions raised by the datastore and Xero API layers
"""
from typing import Optional


class AuditError(Exception):
    """Base class for all audit service errors"""


class DataAccessError(AuditError):
    """The datastore was unreachable or a query failed"""


class NoActiveConnectionError(DataAccessError):
    """No Xero connection is marked active"""

    def __init__(self, message: str = "No active Xero connection found"):
        super().__init__(message)


class XeroAPIError(AuditError):
    """Non-success response from the Xero API"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Xero API error {status_code}: {message}")


class XeroAuthError(XeroAPIError):
    """Access token rejected - the connection must be re-authorised"""

    def __init__(self, message: str = "Access token may have expired"):
        super().__init__(401, message)


class XeroRateLimitError(XeroAPIError):
    """Xero rate limit hit"""

    def __init__(self, retry_after: Optional[int] = None):
        self.retry_after = retry_after or 0
        super().__init__(429, f"Rate limited, retry after {self.retry_after} seconds")
