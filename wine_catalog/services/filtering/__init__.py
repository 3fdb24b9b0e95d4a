"""Filtering over catalog records.

Key Components:
    - FilterEngine: local multi-dimension filter evaluation
    - toggle_value / toggle_country: selection changes with subregion cascade
    - available_options: selectable values derived from loaded records
    - to_request / from_request: FilterSpec <-> sparse server request
"""
from wine_catalog.services.filtering.engine import (
    FilterEngine,
    apply_filters,
    build_region_index,
    claim_unowned_subregions,
)
from wine_catalog.services.filtering.cascade import (
    deselect_country,
    toggle_country,
    toggle_value,
)
from wine_catalog.services.filtering.options import (
    AvailableOptions,
    available_options,
    subregions_for_countries,
)
from wine_catalog.services.filtering.request_mapper import (
    LOCAL_ONLY_DIMENSIONS,
    from_request,
    to_request,
)

__all__ = [
    "FilterEngine",
    "apply_filters",
    "claim_unowned_subregions",
    "build_region_index",
    "deselect_country",
    "toggle_country",
    "toggle_value",
    "AvailableOptions",
    "available_options",
    "subregions_for_countries",
    "LOCAL_ONLY_DIMENSIONS",
    "from_request",
    "to_request",
]
