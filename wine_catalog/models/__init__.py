"""Pydantic models for catalog records, pages and filter specifications."""

from wine_catalog.models.wine import (
    WineRecord,
    PageResult,
    FilterOptionsCatalog,
)
from wine_catalog.models.filters import (
    DEFAULT_RANGES,
    RANGE_DIMENSIONS,
    VALUE_DIMENSIONS,
    NumericRange,
    FilterSpec,
    SparseFilterRequest,
    default_range,
)

__all__ = [
    "WineRecord",
    "PageResult",
    "FilterOptionsCatalog",
    "DEFAULT_RANGES",
    "RANGE_DIMENSIONS",
    "VALUE_DIMENSIONS",
    "NumericRange",
    "FilterSpec",
    "SparseFilterRequest",
    "default_range",
]
