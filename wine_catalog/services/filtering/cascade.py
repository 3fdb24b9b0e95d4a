"""Selection toggles, including the country -> subregion cascade."""
from typing import Any, Iterable, Optional

from wine_catalog.errors import FilterSpecError
from wine_catalog.models import FilterSpec, WineRecord
from wine_catalog.services.filtering.engine import RegionIndex, build_region_index


def toggle_value(spec: FilterSpec, dimension: str, value: Any) -> FilterSpec:
    """Add ``value`` to a multi-select dimension, or remove it if present.

    Country toggles go through ``toggle_country`` so subregions stay in step.
    """
    if dimension == "countries":
        raise FilterSpecError("Use toggle_country to change the country selection")
    current = spec.values_for(dimension)
    if value in current:
        return spec.with_values(dimension, current - {value})
    return spec.with_values(dimension, current | {value})


def deselect_country(spec: FilterSpec, country: str, regions: RegionIndex) -> FilterSpec:
    """Drop ``country`` and every selected subregion only it owns.

    Subregions also owned by a still-selected country are kept.
    """
    remaining = spec.countries - {country}
    still_owned = set()
    for other in remaining:
        still_owned |= regions.get(other, frozenset())
    orphaned = regions.get(country, frozenset()) - still_owned
    return spec.model_copy(
        update={
            "countries": remaining,
            "subregions": spec.subregions - orphaned,
        }
    )


def toggle_country(
    spec: FilterSpec,
    country: str,
    records: Iterable[WineRecord] = (),
    regions: Optional[RegionIndex] = None,
) -> FilterSpec:
    """Select or deselect a country, cascading deselection to subregions."""
    if country not in spec.countries:
        return spec.model_copy(update={"countries": spec.countries | {country}})
    if regions is None:
        regions = build_region_index(records)
    return deselect_country(spec, country, regions)
