"""Selectable filter values derived from loaded records."""
from dataclasses import dataclass, field
from typing import Collection, Iterable, List

from wine_catalog.models import WineRecord


@dataclass
class AvailableOptions:
    """Sorted distinct values per filterable dimension.

    Covers subregions and aromas, which the server's filter-options
    catalog does not list.
    """
    wine_types: List[str] = field(default_factory=list)
    countries: List[str] = field(default_factory=list)
    subregions: List[str] = field(default_factory=list)
    vintages: List[int] = field(default_factory=list)
    grape_or_styles: List[str] = field(default_factory=list)
    aromas: List[str] = field(default_factory=list)


def available_options(records: Iterable[WineRecord]) -> AvailableOptions:
    wine_types, countries, subregions = set(), set(), set()
    vintages, grapes, aromas = set(), set(), set()
    for record in records:
        if record.wine_type:
            wine_types.add(record.wine_type)
        if record.country:
            countries.add(record.country)
        if record.subregion:
            subregions.add(record.subregion)
        if record.vintage is not None:
            vintages.add(record.vintage)
        if record.grape_or_style:
            grapes.add(record.grape_or_style)
        aromas.update(record.aromas)
    return AvailableOptions(
        wine_types=sorted(wine_types),
        countries=sorted(countries),
        subregions=sorted(subregions),
        vintages=sorted(vintages),
        grape_or_styles=sorted(grapes),
        aromas=sorted(aromas),
    )


def subregions_for_countries(
    records: Iterable[WineRecord],
    countries: Collection[str],
) -> List[str]:
    """Subregions selectable under the current country selection.

    Subregion choices only take effect under a selected country, so none
    are offered until one is picked.
    """
    if not countries:
        return []
    return sorted(
        {
            record.subregion
            for record in records
            if record.subregion and record.country in countries
        }
    )
