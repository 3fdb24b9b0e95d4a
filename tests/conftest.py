"""Pytest configuration and fixtures for test suite.

This is the root-level conftest.py that provides:
- Python path setup (so we can import wine_catalog without installing)
- Environment defaults that keep tests fast (no debounce or page delay)
- Shared record fixtures
"""
import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Settings are read when wine_catalog.config is first imported, which happens
# while test modules are collected, so defaults are set at conftest import.
os.environ.setdefault("WINE_CATALOG_API_BASE_URL", "http://catalog.test")
os.environ.setdefault("WINE_CATALOG_PAGE_DELAY_SECONDS", "0")
os.environ.setdefault("WINE_CATALOG_SEARCH_DEBOUNCE_SECONDS", "0")
os.environ.setdefault("WINE_CATALOG_MAX_RETRIES", "1")
os.environ.setdefault("WINE_CATALOG_LOG_LEVEL", "WARNING")

from wine_catalog.models import PageResult, WineRecord  # noqa: E402


@pytest.fixture
def make_wine() -> Callable[..., WineRecord]:
    """Factory for WineRecord with sensible defaults."""

    def _make(name: str = "Test Wine", **overrides) -> WineRecord:
        fields = {
            "name": name,
            "country": "France",
            "subregion": "Bordeaux",
            "vintage": 2018,
            "wine_type": "Red",
            "grape_or_style": "Merlot",
            "alcohol": 13.5,
            "tannin": 3.0,
            "sweetness": 1.0,
            "acidity": 3.0,
            "body": 3.0,
            "aromas": ("Plum",),
            "price_krw": 50000,
        }
        fields.update(overrides)
        return WineRecord(**fields)

    return _make


@pytest.fixture
def catalog(make_wine) -> List[WineRecord]:
    """Small mixed catalog covering every filter dimension."""
    return [
        make_wine(
            "Chateau Margaux",
            country="France",
            subregion="Bordeaux",
            vintage=2015,
            grape_or_style="Cabernet Sauvignon",
            tannin=4.0,
            alcohol=13.5,
            aromas=("Cassis", "Oak"),
            price_krw=120000,
        ),
        make_wine(
            "Domaine Leroy Bourgogne",
            country="France",
            subregion="Burgundy",
            vintage=2018,
            grape_or_style="Pinot Noir",
            tannin=2.0,
            alcohol=13.0,
            aromas=("Cherry", "Earth"),
            price_krw=90000,
        ),
        make_wine(
            "Tignanello",
            country="Italy",
            subregion="Tuscany",
            vintage=2016,
            grape_or_style="Sangiovese",
            tannin=3.0,
            alcohol=14.0,
            aromas=("Cherry", "Leather"),
            price_krw=60000,
        ),
        make_wine(
            "Casillero del Diablo",
            country="Chile",
            subregion="Central Valley",
            vintage=None,
            wine_type="White",
            grape_or_style="Sauvignon Blanc",
            tannin=None,
            alcohol=12.5,
            aromas=("Citrus",),
            price_krw=None,
        ),
        make_wine(
            "Opus One",
            country="USA",
            subregion="Napa Valley",
            vintage=2019,
            grape_or_style="Cabernet Sauvignon",
            tannin=5.0,
            alcohol=14.5,
            aromas=("Blackberry", "Vanilla"),
            price_krw=250000,
        ),
    ]


@pytest.fixture
def make_page() -> Callable[..., PageResult]:
    """Factory for a page of numbered records, like the server returns."""

    def _make(page: int, total: int, page_size: int = 100) -> PageResult:
        start = (page - 1) * page_size
        stop = min(start + page_size, total)
        items = tuple(
            WineRecord(name=f"wine-{index:05d}", id=str(index))
            for index in range(start, stop)
        )
        return PageResult(total=total, page=page, items=items)

    return _make
