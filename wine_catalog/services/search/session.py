"""Debounced remote search guarded by a generation counter.

Every submitted query bumps the generation. A query still inside its
debounce window is cancelled by the next keystroke; a request already in
flight is left to finish, and its response is dropped if the generation
has moved on by the time it arrives.
"""
import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

import structlog

from wine_catalog.config import settings
from wine_catalog.errors import CatalogClientError
from wine_catalog.models import WineRecord

logger = structlog.get_logger(__name__)

SearchFunction = Callable[[str], Awaitable[Sequence[WineRecord]]]
ResultListener = Callable[[str, List[WineRecord]], None]


class SearchSession:
    """
    Keystroke-driven search state.

    Usage:
        session = SearchSession.for_client(client)
        session.submit("cab")
        task = session.submit("cabernet")
        await task
        session.results
    """

    def __init__(
        self,
        search: SearchFunction,
        debounce_seconds: Optional[float] = None,
        on_results: Optional[ResultListener] = None,
    ):
        self._search = search
        self.debounce_seconds = (
            settings.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.on_results = on_results
        self.generation = 0
        self.query = ""
        self.results: List[WineRecord] = []
        self.error: Optional[CatalogClientError] = None
        self._pending: Optional[asyncio.Task] = None

    @classmethod
    def for_client(cls, client, **kwargs) -> "SearchSession":
        """Session backed by ``CatalogClient.search`` (first page only)."""

        async def search(query: str) -> Sequence[WineRecord]:
            page = await client.search(query)
            return page.items

        return cls(search, **kwargs)

    def submit(self, query: str) -> Optional[asyncio.Task]:
        """
        Register a keystroke.

        Must be called from a running event loop. Returns the scheduled task,
        or None for a blank query, which clears results without a request.
        """
        self.generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

        if not query.strip():
            self._publish(query, [])
            return None

        self._pending = asyncio.get_running_loop().create_task(
            self._run(query, self.generation)
        )
        return self._pending

    async def _run(self, query: str, generation: int) -> bool:
        await asyncio.sleep(self.debounce_seconds)
        # Past the debounce window: later keystrokes no longer cancel this
        if self._pending is asyncio.current_task():
            self._pending = None

        try:
            items = await self._search(query)
        except CatalogClientError as e:
            if generation != self.generation:
                return False
            logger.warning("search_failed", query=query, error=str(e))
            self.error = e
            return False

        if generation != self.generation:
            logger.debug(
                "stale_search_discarded",
                query=query,
                generation=generation,
                current=self.generation,
            )
            return False

        self._publish(query, list(items))
        return True

    def _publish(self, query: str, items: List[WineRecord]) -> None:
        self.query = query
        self.results = items
        self.error = None
        if self.on_results is not None:
            self.on_results(query, items)
