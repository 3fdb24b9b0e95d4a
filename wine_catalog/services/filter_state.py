"""Single owner of the session's FilterSpec.

The FilterSpec is only ever replaced as a whole value; listeners are told about
every change.
"""
from typing import Callable, List, Optional

import structlog

from wine_catalog.errors import FilterSpecError
from wine_catalog.models import FilterSpec

logger = structlog.get_logger(__name__)

FilterListener = Callable[[FilterSpec], None]


class FilterState:
    """Holds the current FilterSpec snapshot and notifies on replacement.

    Usage:
        state = FilterState()
        unsubscribe = state.subscribe(lambda spec: reload(spec))
        state.set(state.get().with_range("tannin", 2, 4))
    """

    def __init__(self, initial: Optional[FilterSpec] = None):
        self._spec = initial or FilterSpec()
        self._listeners: List[FilterListener] = []

    def get(self) -> FilterSpec:
        return self._spec

    def set(self, next_spec: FilterSpec) -> None:
        """Replace the current spec; no notification if nothing changed."""
        if not isinstance(next_spec, FilterSpec):
            raise FilterSpecError(
                f"Expected FilterSpec, got {type(next_spec).__name__}"
            )
        if next_spec == self._spec:
            return
        self._spec = next_spec
        logger.debug("filter_state_changed", is_default=next_spec.is_default())
        for listener in list(self._listeners):
            listener(next_spec)

    def update(self, transform: Callable[[FilterSpec], FilterSpec]) -> FilterSpec:
        """Replace the spec with ``transform(current)`` and return it."""
        self.set(transform(self._spec))
        return self._spec

    def reset(self) -> None:
        self.set(FilterSpec())

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
