"""Reconstructs a complete result set from a server that serves fixed-size pages.

The server picks its own page size (observed as 100) and ignores the
requested one, so the aggregator reads the grand total and page size from
page 1, then fetches the remaining pages through a bounded worker pool.
Results are stitched in page order regardless of arrival order.
"""
import asyncio
import math
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import structlog

from wine_catalog.config import settings
from wine_catalog.errors import CatalogClientError
from wine_catalog.models import PageResult, WineRecord

logger = structlog.get_logger(__name__)

PageFetcher = Callable[[int], Awaitable[PageResult]]


@dataclass
class AggregatedResult:
    """Merged pages.

    Attributes:
        total: Server-reported record count across all pages
        items: Records in page order, at most ``limit`` of them
        failed_pages: Pages whose request failed and contributed nothing
    """
    total: int
    items: List[WineRecord] = field(default_factory=list)
    failed_pages: List[int] = field(default_factory=list)


class PageAggregator:
    """
    Fetches up to ``limit`` records across pages.

    A failed page (any CatalogClientError) is logged and contributes zero
    records; only a page 1 failure propagates to the caller.

    Usage:
        async with CatalogClient() as client:
            aggregator = PageAggregator(client.get_wines_page)
            result = await aggregator.fetch_up_to(10000)
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        concurrency: Optional[int] = None,
        delay_seconds: Optional[float] = None,
    ):
        """
        Args:
            fetch_page: Coroutine function returning the given 1-based page
            concurrency: Maximum requests in flight (defaults to config)
            delay_seconds: Pause after each fetch before its slot is released
                (defaults to config)
        """
        self.fetch_page = fetch_page
        self.concurrency = concurrency or settings.page_concurrency
        self.delay_seconds = (
            settings.page_delay_seconds if delay_seconds is None else delay_seconds
        )

    async def _fetch_one(
        self,
        page: int,
        semaphore: asyncio.Semaphore,
        results: Dict[int, Tuple[WineRecord, ...]],
        failed: List[int],
    ) -> None:
        async with semaphore:
            try:
                result = await self.fetch_page(page)
            except CatalogClientError as e:
                logger.warning("page_fetch_failed", page=page, error=str(e))
                failed.append(page)
            else:
                results[page] = result.items
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)

    async def fetch_up_to(self, limit: int) -> AggregatedResult:
        """
        Fetch records until ``limit`` or the server total is reached.

        Args:
            limit: Maximum number of records to return (> 0)

        Returns:
            AggregatedResult with ``len(items) <= min(limit, total)`` and the
            server-reported total

        Raises:
            ValueError: If limit is not positive
            CatalogClientError: If page 1 cannot be fetched
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")

        first = await self.fetch_page(1)
        total = first.total
        page_size = len(first.items)

        if page_size == 0 or limit <= page_size or total <= page_size:
            return AggregatedResult(total=total, items=list(first.items[: min(limit, total)]))

        target_count = min(limit, total)
        total_pages = math.ceil(target_count / page_size)

        logger.info(
            "aggregation_started",
            total=total,
            limit=limit,
            page_size=page_size,
            total_pages=total_pages,
            concurrency=self.concurrency,
        )

        semaphore = asyncio.Semaphore(self.concurrency)
        results: Dict[int, Tuple[WineRecord, ...]] = {1: first.items}
        failed: List[int] = []

        await asyncio.gather(
            *(
                self._fetch_one(page, semaphore, results, failed)
                for page in range(2, total_pages + 1)
            )
        )

        items: List[WineRecord] = []
        for page in sorted(results):
            items.extend(results[page])
        items = items[:target_count]

        logger.info(
            "aggregation_completed",
            total=total,
            fetched=len(items),
            failed_pages=sorted(failed),
        )
        return AggregatedResult(total=total, items=items, failed_pages=sorted(failed))
