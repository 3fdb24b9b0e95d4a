"""Top-level catalog loads built on PageAggregator.

Failures here propagate: the presentation layer turns them into a
retryable error state.
"""
from typing import Optional

import structlog

from wine_catalog.config import settings
from wine_catalog.models import FilterSpec, PageResult
from wine_catalog.services.catalog_client import CatalogClient
from wine_catalog.services.filtering import (
    FilterEngine,
    build_region_index,
    claim_unowned_subregions,
    to_request,
)
from wine_catalog.services.filtering.engine import RegionIndex
from wine_catalog.services.page_aggregator import AggregatedResult, PageAggregator

logger = structlog.get_logger(__name__)


async def load_catalog(
    client: CatalogClient,
    limit: Optional[int] = None,
) -> AggregatedResult:
    """Fetch up to ``limit`` records of the unfiltered catalog."""
    aggregator = PageAggregator(client.get_wines_page)
    return await aggregator.fetch_up_to(limit or settings.fetch_limit)


async def load_filtered(
    client: CatalogClient,
    spec: FilterSpec,
    limit: Optional[int] = None,
    engine: Optional[FilterEngine] = None,
    regions: Optional[RegionIndex] = None,
) -> AggregatedResult:
    """
    Fetch records through the filter endpoint, then finish filtering locally.

    The server applies the sparse request; subregion and aroma constraints,
    which it does not support, are applied afterwards by FilterEngine.
    ``total`` stays the server-reported count.

    Args:
        client: Open catalog client
        spec: Filter specification snapshot
        limit: Maximum records to fetch
        engine: Local filter engine
        regions: Country -> subregions ownership over the whole catalog,
            e.g. ``build_region_index`` of the ``load_catalog`` result.
            Without it ownership is read from the server-filtered records,
            and selected subregions missing from them restrict every
            selected country.
    """
    request = to_request(spec)

    async def fetch_page(page: int) -> PageResult:
        return await client.filter_wines(request.for_page(page))

    aggregated = await PageAggregator(fetch_page).fetch_up_to(limit or settings.fetch_limit)
    if regions is None:
        regions = claim_unowned_subregions(build_region_index(aggregated.items), spec)
    items = (engine or FilterEngine()).apply(aggregated.items, spec, regions)

    logger.info(
        "filtered_load_completed",
        server_total=aggregated.total,
        fetched=len(aggregated.items),
        kept=len(items),
    )
    return AggregatedResult(
        total=aggregated.total,
        items=items,
        failed_pages=aggregated.failed_pages,
    )
