"""
Wine Catalog Pydantic Models

Models for the records and page envelopes returned by the catalog API.
Every payload is parsed through these models at the network boundary, so a
malformed response fails at parse time instead of deep inside filtering.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Catalog Records
# =============================================================================


class WineRecord(BaseModel):
    """
    Immutable snapshot of one catalog item.

    Parsed from the API's ``WineRow`` shape (``wine_name``, ``wine_type``,
    ``grape_or_style``, ``price_krw``). ``name`` is used as the identity key
    for selection even though the catalog does not guarantee it is unique.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, description="Server-assigned id, when sent")
    name: str = Field(alias="wine_name", description="Display name of the wine")
    country: Optional[str] = None
    subregion: Optional[str] = None
    vintage: Optional[int] = None
    wine_type: Optional[str] = None
    grape_or_style: Optional[str] = None
    alcohol: Optional[float] = Field(default=None, ge=0)
    tannin: Optional[float] = Field(default=None, ge=0)
    sweetness: Optional[float] = Field(default=None, ge=0)
    acidity: Optional[float] = Field(default=None, ge=0)
    body: Optional[float] = Field(default=None, ge=0)
    aromas: Tuple[str, ...] = Field(default=(), description="Aroma notes, in server order")
    price_krw: Optional[int] = Field(default=None, ge=0, description="Price in KRW")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric ids and keep them as strings."""
        if v is None:
            return None
        return str(v)

    @field_validator("aromas", mode="before")
    @classmethod
    def coerce_aromas(cls, v):
        """Treat a null aroma list as empty."""
        if v is None:
            return ()
        return v


# =============================================================================
# Response Envelopes
# =============================================================================


class PageResult(BaseModel):
    """
    One page of records.

    Returned by ``GET /wines``, ``GET /wines/search``, ``POST /wines/filter``
    and ``POST /wines/compare``. ``total`` counts records across all pages and
    may exceed ``len(items)``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    total: int = Field(ge=0, description="Record count across all pages")
    page: int = Field(default=1, ge=1, description="1-based page number")
    items: Tuple[WineRecord, ...] = Field(alias="wines", default=())

    @classmethod
    def empty(cls) -> "PageResult":
        """Page returned for requests that never reach the network."""
        return cls(total=0, page=1, items=())


class FilterOptionsCatalog(BaseModel):
    """
    Distinct categorical values present in the dataset.

    Returned from ``GET /wines/filter-options``. Used to populate selectable
    filter controls, not to validate input.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    wine_type: List[str] = Field(default_factory=list)
    country: List[str] = Field(default_factory=list)
    vintage: List[int] = Field(default_factory=list)
    grape_or_style: List[str] = Field(default_factory=list)
