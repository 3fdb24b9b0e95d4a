"""Filter specification models.

FilterSpec is an immutable snapshot: every user change produces a new value
through the ``with_*`` helpers, never an in-place edit.
"""
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from wine_catalog.errors import FilterSpecError


# Full-domain default per range dimension. A range equal to its default
# means "no filter applied" on that dimension.
DEFAULT_RANGES: Dict[str, Tuple[float, float]] = {
    "price_krw": (0, 1_000_000),
    "tannin": (0, 5),
    "sweetness": (0, 5),
    "acidity": (0, 5),
    "body": (0, 5),
    "alcohol": (0, 25),
}

RANGE_DIMENSIONS: Tuple[str, ...] = tuple(DEFAULT_RANGES)

# Range dimensions whose bounds must be whole numbers
WHOLE_NUMBER_DIMENSIONS: Tuple[str, ...] = ("price_krw",)

# Multi-select dimension -> WineRecord attribute it constrains
VALUE_DIMENSIONS: Dict[str, str] = {
    "wine_types": "wine_type",
    "countries": "country",
    "subregions": "subregion",
    "vintages": "vintage",
    "grape_or_styles": "grape_or_style",
    "aromas": "aromas",
}


class NumericRange(BaseModel):
    """Closed inclusive interval ``[min, max]``."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def check_order(self) -> "NumericRange":
        if self.min > self.max:
            raise ValueError(f"range min {self.min} is greater than max {self.max}")
        return self

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def as_tuple(self) -> Tuple[float, float]:
        return (self.min, self.max)


def default_range(dimension: str) -> NumericRange:
    """Full-domain range for a range dimension."""
    try:
        low, high = DEFAULT_RANGES[dimension]
    except KeyError:
        raise FilterSpecError(f"Unknown range dimension: {dimension}")
    return NumericRange(min=low, max=high)


class FilterSpec(BaseModel):
    """The full set of user-chosen range and categorical constraints.

    An empty value set means no restriction on that dimension.
    """

    model_config = ConfigDict(frozen=True)

    price_krw: NumericRange = Field(default_factory=lambda: default_range("price_krw"))
    tannin: NumericRange = Field(default_factory=lambda: default_range("tannin"))
    sweetness: NumericRange = Field(default_factory=lambda: default_range("sweetness"))
    acidity: NumericRange = Field(default_factory=lambda: default_range("acidity"))
    body: NumericRange = Field(default_factory=lambda: default_range("body"))
    alcohol: NumericRange = Field(default_factory=lambda: default_range("alcohol"))

    wine_types: FrozenSet[str] = frozenset()
    countries: FrozenSet[str] = frozenset()
    subregions: FrozenSet[str] = frozenset()
    vintages: FrozenSet[int] = frozenset()
    grape_or_styles: FrozenSet[str] = frozenset()
    aromas: FrozenSet[str] = frozenset()

    @field_validator(*WHOLE_NUMBER_DIMENSIONS)
    @classmethod
    def check_whole_bounds(cls, value: NumericRange) -> NumericRange:
        if not (float(value.min).is_integer() and float(value.max).is_integer()):
            raise ValueError(f"bounds must be whole numbers, got {value.as_tuple()}")
        return value

    def range_for(self, dimension: str) -> NumericRange:
        if dimension not in DEFAULT_RANGES:
            raise FilterSpecError(f"Unknown range dimension: {dimension}")
        return getattr(self, dimension)

    def values_for(self, dimension: str) -> FrozenSet[Any]:
        if dimension not in VALUE_DIMENSIONS:
            raise FilterSpecError(f"Unknown value dimension: {dimension}")
        return getattr(self, dimension)

    def is_default_range(self, dimension: str) -> bool:
        return self.range_for(dimension) == default_range(dimension)

    def is_default(self) -> bool:
        """True when no dimension restricts anything."""
        return all(self.is_default_range(d) for d in RANGE_DIMENSIONS) and not any(
            self.values_for(d) for d in VALUE_DIMENSIONS
        )

    def with_range(self, dimension: str, low: float, high: float) -> "FilterSpec":
        """Return a copy with one range replaced.

        Raises:
            FilterSpecError: If the dimension is unknown, low > high, or a
                whole-number dimension gets a fractional bound
        """
        self.range_for(dimension)
        if low > high:
            raise FilterSpecError(
                f"Invalid {dimension} range: min {low} is greater than max {high}"
            )
        if dimension in WHOLE_NUMBER_DIMENSIONS and not (
            float(low).is_integer() and float(high).is_integer()
        ):
            raise FilterSpecError(
                f"Invalid {dimension} range: bounds must be whole numbers, got {low}, {high}"
            )
        return self.model_copy(update={dimension: NumericRange(min=low, max=high)})

    def with_values(self, dimension: str, values: Iterable[Any]) -> "FilterSpec":
        """Return a copy with one value set replaced."""
        self.values_for(dimension)
        return self.model_copy(update={dimension: frozenset(values)})


class SparseFilterRequest(BaseModel):
    """
    Request body for ``POST /wines/filter``.

    Only fields that narrow the result are set; omitted bounds and lists
    mean unrestricted. Subregion and aroma are absent because the server
    cannot filter on them.
    """

    page: int = Field(default=1, ge=1)

    price_krw_min: Optional[int] = None
    price_krw_max: Optional[int] = None

    wine_type: Optional[List[str]] = None
    country: Optional[List[str]] = None
    vintage: Optional[List[int]] = None
    grape_or_style: Optional[List[str]] = None

    tannin_min: Optional[float] = None
    tannin_max: Optional[float] = None
    sweetness_min: Optional[float] = None
    sweetness_max: Optional[float] = None
    acidity_min: Optional[float] = None
    acidity_max: Optional[float] = None
    body_min: Optional[float] = None
    body_max: Optional[float] = None
    alcohol_min: Optional[float] = None
    alcohol_max: Optional[float] = None

    def for_page(self, page: int) -> "SparseFilterRequest":
        return self.model_copy(update={"page": page})

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with unset fields dropped."""
        return self.model_dump(mode="json", exclude_none=True)
