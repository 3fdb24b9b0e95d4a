"""Error handling module."""
from wine_catalog.errors.exceptions import (
    WineCatalogError,
    CatalogClientError,
    CatalogTransportError,
    CatalogHTTPError,
    CatalogResponseError,
    FilterSpecError,
    SelectionLimitError,
)

__all__ = [
    "WineCatalogError",
    "CatalogClientError",
    "CatalogTransportError",
    "CatalogHTTPError",
    "CatalogResponseError",
    "FilterSpecError",
    "SelectionLimitError",
]
