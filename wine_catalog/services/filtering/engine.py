"""Multi-dimensional filter evaluation over catalog records.

Per-record predicate is the conjunction of per-dimension predicates:
    - Range dimensions (price, tannin, sweetness, acidity, body, alcohol):
      inclusive bounds; a missing value fails only a narrowed range.
    - Multi-select dimensions (type, country, vintage, grape/style):
      membership, or no restriction when the accepted set is empty.
    - Aromas: any overlap with the accepted set.
    - Subregions: only restrict records of a selected country that owns
      at least one of the selected subregions.

Pure functions over their inputs; no I/O.
"""
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence

import structlog

from wine_catalog.models import FilterSpec, WineRecord, RANGE_DIMENSIONS

logger = structlog.get_logger(__name__)

RegionIndex = Mapping[str, FrozenSet[str]]

# FilterSpec value set -> WineRecord attribute, for single-valued attributes
_MEMBERSHIP_DIMENSIONS = {
    "wine_types": "wine_type",
    "countries": "country",
    "vintages": "vintage",
    "grape_or_styles": "grape_or_style",
}


def build_region_index(records: Iterable[WineRecord]) -> Dict[str, FrozenSet[str]]:
    """Map each country to the subregions its records carry."""
    regions: Dict[str, set] = defaultdict(set)
    for record in records:
        if record.country is not None and record.subregion is not None:
            regions[record.country].add(record.subregion)
    return {country: frozenset(subs) for country, subs in regions.items()}


def claim_unowned_subregions(
    regions: RegionIndex, spec: FilterSpec
) -> Dict[str, FrozenSet[str]]:
    """Attribute selected subregions no country owns to every selected country.

    Used when ownership comes from a partial record set, where a selected
    subregion may have no records left to show which country it belongs to.
    """
    owned = frozenset().union(*regions.values())
    unowned = spec.subregions - owned
    claimed = dict(regions)
    if unowned:
        for country in spec.countries:
            claimed[country] = claimed.get(country, frozenset()) | unowned
    return claimed


def _passes_ranges(record: WineRecord, spec: FilterSpec) -> bool:
    for dimension in RANGE_DIMENSIONS:
        if spec.is_default_range(dimension):
            continue
        value = getattr(record, dimension)
        if value is None or not spec.range_for(dimension).contains(value):
            return False
    return True


def _passes_membership(record: WineRecord, spec: FilterSpec) -> bool:
    for dimension, attribute in _MEMBERSHIP_DIMENSIONS.items():
        accepted = spec.values_for(dimension)
        if accepted and getattr(record, attribute) not in accepted:
            return False
    return True


def _passes_aromas(record: WineRecord, spec: FilterSpec) -> bool:
    if not spec.aromas:
        return True
    return not spec.aromas.isdisjoint(record.aromas)


def _passes_subregion(record: WineRecord, spec: FilterSpec, regions: RegionIndex) -> bool:
    if not spec.subregions or record.country not in spec.countries:
        return True
    restricting = spec.subregions & regions.get(record.country, frozenset())
    if not restricting:
        return True
    return record.subregion in restricting


class FilterEngine:
    """Applies a FilterSpec to a sequence of records.

    The result keeps input order. A spec at its defaults returns every record.
    """

    def matches(
        self,
        record: WineRecord,
        spec: FilterSpec,
        regions: Optional[RegionIndex] = None,
    ) -> bool:
        if regions is None:
            regions = build_region_index([record])
        return (
            _passes_ranges(record, spec)
            and _passes_membership(record, spec)
            and _passes_aromas(record, spec)
            and _passes_subregion(record, spec, regions)
        )

    def apply(
        self,
        records: Sequence[WineRecord],
        spec: FilterSpec,
        regions: Optional[RegionIndex] = None,
    ) -> List[WineRecord]:
        """Return the records satisfying every dimension of ``spec``.

        Args:
            records: Records to filter
            spec: Filter specification snapshot
            regions: Country -> subregions ownership; derived from ``records``
                when omitted
        """
        if spec.is_default():
            return list(records)
        if regions is None:
            regions = build_region_index(records)
        result = [record for record in records if self.matches(record, spec, regions)]
        logger.debug("filter_applied", input_count=len(records), output_count=len(result))
        return result


def apply_filters(records: Sequence[WineRecord], spec: FilterSpec) -> List[WineRecord]:
    """Shortcut for ``FilterEngine().apply``."""
    return FilterEngine().apply(records, spec)
