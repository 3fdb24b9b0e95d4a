"""Translation between FilterSpec and the sparse ``POST /wines/filter`` body.

A bound or list is sent only when it differs from the dimension's default.
Subregion and aroma are never sent; they are applied locally after the
response arrives.
"""
from typing import Any, Dict, Tuple

from wine_catalog.models import (
    DEFAULT_RANGES,
    FilterSpec,
    NumericRange,
    SparseFilterRequest,
)

# Range dimension -> (min field, max field) on the request
RANGE_FIELDS: Dict[str, Tuple[str, str]] = {
    dimension: (f"{dimension}_min", f"{dimension}_max") for dimension in DEFAULT_RANGES
}

# FilterSpec value set -> request list field
LIST_FIELDS: Dict[str, str] = {
    "wine_types": "wine_type",
    "countries": "country",
    "vintages": "vintage",
    "grape_or_styles": "grape_or_style",
}

LOCAL_ONLY_DIMENSIONS = ("subregions", "aromas")


def _wire_number(dimension: str, value: float) -> Any:
    # Prices are whole KRW on the wire; FilterSpec refuses fractional bounds
    if dimension == "price_krw":
        return int(value)
    return value


def to_request(spec: FilterSpec, page: int = 1) -> SparseFilterRequest:
    """Build the sparse filter request for ``spec``."""
    fields: Dict[str, Any] = {"page": page}

    for dimension, (min_field, max_field) in RANGE_FIELDS.items():
        default_low, default_high = DEFAULT_RANGES[dimension]
        current = spec.range_for(dimension)
        if current.min != default_low:
            fields[min_field] = _wire_number(dimension, current.min)
        if current.max != default_high:
            fields[max_field] = _wire_number(dimension, current.max)

    for dimension, list_field in LIST_FIELDS.items():
        values = spec.values_for(dimension)
        if values:
            fields[list_field] = sorted(values)

    return SparseFilterRequest(**fields)


def from_request(request: SparseFilterRequest) -> FilterSpec:
    """Decode a sparse request back into a FilterSpec.

    Omitted bounds and lists decode to their defaults; subregion and aroma
    are always empty.
    """
    updates: Dict[str, Any] = {}

    for dimension, (min_field, max_field) in RANGE_FIELDS.items():
        default_low, default_high = DEFAULT_RANGES[dimension]
        low = getattr(request, min_field)
        high = getattr(request, max_field)
        updates[dimension] = NumericRange(
            min=default_low if low is None else low,
            max=default_high if high is None else high,
        )

    for dimension, list_field in LIST_FIELDS.items():
        values = getattr(request, list_field)
        updates[dimension] = frozenset(values or ())

    return FilterSpec(**updates)
