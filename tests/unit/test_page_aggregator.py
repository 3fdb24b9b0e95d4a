"""Unit tests for PageAggregator.

Tests cover:
    - Page arithmetic from page 1's total and size
    - Short-circuit when page 1 already suffices
    - Per-page failure tolerance
    - Deterministic page ordering under out-of-order completion
    - Concurrency bound
"""
import asyncio

import pytest
from unittest.mock import AsyncMock

from wine_catalog.errors import CatalogHTTPError, CatalogTransportError
from wine_catalog.services.page_aggregator import PageAggregator


def requested_pages(fetch: AsyncMock):
    return sorted(call.args[0] for call in fetch.call_args_list)


class TestPageAggregator:
    """Tests for fetch_up_to."""

    @pytest.fixture
    def server(self, make_page):
        """Build a fetcher serving ``total`` records in pages of 100."""

        def _server(total: int, failing=(), page_size: int = 100):
            async def fetch(page: int):
                if page in failing:
                    raise CatalogTransportError(f"page {page} unreachable")
                return make_page(page, total, page_size)

            return AsyncMock(side_effect=fetch)

        return _server

    @pytest.mark.asyncio
    async def test_fetches_exactly_needed_pages(self, server):
        """250 records at 100 per page take 3 requests."""
        fetch = server(total=250)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(250)

        assert requested_pages(fetch) == [1, 2, 3]
        assert result.total == 250
        assert len(result.items) == 250
        assert len({wine.name for wine in result.items}) == 250
        assert result.failed_pages == []

    @pytest.mark.asyncio
    async def test_results_are_in_page_order(self, server):
        fetch = server(total=250)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(250)

        assert [wine.name for wine in result.items] == [
            f"wine-{index:05d}" for index in range(250)
        ]

    @pytest.mark.asyncio
    async def test_failed_page_contributes_nothing(self, server):
        """Page 2 failing leaves pages 1 and 3 (100 + 50 records)."""
        fetch = server(total=250, failing={2})
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(250)

        assert result.total == 250
        assert len(result.items) == 150
        assert result.items[99].name == "wine-00099"
        assert result.items[100].name == "wine-00200"
        assert result.failed_pages == [2]

    @pytest.mark.asyncio
    async def test_http_error_is_tolerated(self, make_page):
        async def fetch(page: int):
            if page == 3:
                raise CatalogHTTPError("Unexpected response: HTTP 502", status_code=502)
            return make_page(page, 400)

        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(400)
        assert len(result.items) == 300
        assert result.failed_pages == [3]

    @pytest.mark.asyncio
    async def test_first_page_failure_propagates(self, server):
        """Without page 1 there is no total, so the caller sees the error."""
        fetch = server(total=250, failing={1})
        with pytest.raises(CatalogTransportError):
            await PageAggregator(fetch, delay_seconds=0).fetch_up_to(250)

    @pytest.mark.asyncio
    async def test_limit_within_first_page(self, server):
        """A limit under one page needs no more requests and is honoured."""
        fetch = server(total=1000)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(40)

        assert requested_pages(fetch) == [1]
        assert len(result.items) == 40
        assert result.total == 1000

    @pytest.mark.asyncio
    async def test_total_within_first_page(self, server):
        fetch = server(total=75)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(10000)

        assert requested_pages(fetch) == [1]
        assert len(result.items) == 75

    @pytest.mark.asyncio
    async def test_truncates_to_limit(self, server):
        """150 of 1000 needs two pages and drops the overrun."""
        fetch = server(total=1000)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(150)

        assert requested_pages(fetch) == [1, 2]
        assert len(result.items) == 150
        assert result.items[-1].name == "wine-00149"

    @pytest.mark.asyncio
    async def test_never_exceeds_total(self, make_page):
        """A server overfilling pages cannot push results past its total."""

        async def fetch(page: int):
            page_result = make_page(page, 1000)
            return page_result.model_copy(update={"total": 250})

        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(10000)
        assert len(result.items) == 250

    @pytest.mark.asyncio
    async def test_empty_catalog(self, server):
        fetch = server(total=0)
        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(100)
        assert result.total == 0
        assert result.items == []

    @pytest.mark.asyncio
    async def test_rejects_non_positive_limit(self, server):
        with pytest.raises(ValueError):
            await PageAggregator(server(total=10), delay_seconds=0).fetch_up_to(0)

    @pytest.mark.asyncio
    async def test_order_independent_of_completion(self, make_page):
        """Later pages finishing first do not reorder results."""

        async def fetch(page: int):
            await asyncio.sleep(0.001 * (10 - page))
            return make_page(page, 800)

        result = await PageAggregator(fetch, delay_seconds=0).fetch_up_to(800)
        assert [wine.name for wine in result.items] == [
            f"wine-{index:05d}" for index in range(800)
        ]

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, make_page):
        """No more than ``concurrency`` requests are in flight at once."""
        in_flight = 0
        peak = 0

        async def fetch(page: int):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.005)
            in_flight -= 1
            return make_page(page, 1500)

        result = await PageAggregator(fetch, concurrency=5, delay_seconds=0).fetch_up_to(1500)

        assert len(result.items) == 1500
        assert peak == 5
