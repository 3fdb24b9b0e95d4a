"""Comparison selection and tasting-profile data.

Selection is keyed by wine name, which the catalog does not guarantee to
be unique: two vintages sharing a name are selected together.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from wine_catalog.config import settings
from wine_catalog.errors import SelectionLimitError
from wine_catalog.models import WineRecord

# Attributes on the tasting radar, all on a 0-5 scale after scaling
TASTING_ATTRIBUTES: Tuple[str, ...] = ("tannin", "sweetness", "acidity", "body", "alcohol")

# Alcohol percentage mapped so that 20% sits at the top of the 0-5 scale
ALCOHOL_SCALE_MAX = 20.0


class ComparisonSelection:
    """Ordered set of wine names picked for side-by-side comparison."""

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity or settings.max_compare
        self._names: List[str] = []

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def toggle(self, name: str) -> bool:
        """Select or deselect ``name``; returns whether it is now selected.

        Raises:
            SelectionLimitError: If selecting while already at capacity
        """
        if name in self._names:
            self._names.remove(name)
            return False
        if len(self._names) >= self.capacity:
            raise SelectionLimitError(
                f"At most {self.capacity} wines can be compared"
            )
        self._names.append(name)
        return True

    def clear(self) -> None:
        self._names = []

    def selected_records(self, records: Iterable[WineRecord]) -> List[WineRecord]:
        """Records whose name is selected, in catalog order."""
        selected = set(self._names)
        return [record for record in records if record.name in selected]


def tasting_profile(record: WineRecord) -> Dict[str, float]:
    """Tasting values on a common 0-5 scale; missing values count as 0."""
    profile = {
        attribute: float(getattr(record, attribute) or 0)
        for attribute in TASTING_ATTRIBUTES
    }
    profile["alcohol"] = profile["alcohol"] / ALCOHOL_SCALE_MAX * 5
    return profile


def combined_aromas(records: Sequence[WineRecord]) -> List[str]:
    """Sorted union of the aromas of ``records``."""
    return sorted({aroma for record in records for aroma in record.aromas})
