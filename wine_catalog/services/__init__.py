"""Catalog services: HTTP client, page aggregation, filtering, search, comparison."""
from wine_catalog.services.catalog_client import CatalogClient
from wine_catalog.services.page_aggregator import AggregatedResult, PageAggregator
from wine_catalog.services.catalog_loader import load_catalog, load_filtered
from wine_catalog.services.filter_state import FilterState
from wine_catalog.services.comparison import (
    ComparisonSelection,
    combined_aromas,
    tasting_profile,
)
from wine_catalog.services.search.session import SearchSession

__all__ = [
    "CatalogClient",
    "AggregatedResult",
    "PageAggregator",
    "load_catalog",
    "load_filtered",
    "FilterState",
    "ComparisonSelection",
    "combined_aromas",
    "tasting_profile",
    "SearchSession",
]
