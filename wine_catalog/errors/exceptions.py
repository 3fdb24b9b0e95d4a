"""Custom exception hierarchy for wine catalog errors."""
from typing import Optional


class WineCatalogError(Exception):
    """Base exception for all wine catalog errors."""

    def __init__(self, message: str, *args, **kwargs):
        """Initialize error with message."""
        self.message = message
        super().__init__(message, *args, **kwargs)


class CatalogClientError(WineCatalogError):
    """Raised when a request to the catalog API fails."""
    pass


class CatalogTransportError(CatalogClientError):
    """Raised when the catalog API is unreachable or times out."""
    pass


class CatalogHTTPError(CatalogClientError):
    """Raised when the catalog API answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class CatalogResponseError(CatalogClientError):
    """Raised when a catalog API payload does not match the expected shape."""
    pass


class FilterSpecError(WineCatalogError):
    """Raised when a filter specification is invalid."""
    pass


class SelectionLimitError(WineCatalogError):
    """Raised when the comparison selection is already full."""
    pass
