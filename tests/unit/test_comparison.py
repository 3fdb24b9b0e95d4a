"""Unit tests for comparison selection and tasting profiles."""
import pytest

from wine_catalog.errors import SelectionLimitError
from wine_catalog.services import ComparisonSelection, combined_aromas, tasting_profile


class TestComparisonSelection:
    """Tests for the capped, name-keyed selection."""

    def test_toggle_selects_and_deselects(self):
        selection = ComparisonSelection(capacity=5)
        assert selection.toggle("Opus One") is True
        assert "Opus One" in selection
        assert selection.toggle("Opus One") is False
        assert len(selection) == 0

    def test_capacity_is_enforced(self):
        selection = ComparisonSelection(capacity=5)
        for index in range(5):
            selection.toggle(f"wine-{index}")

        with pytest.raises(SelectionLimitError):
            selection.toggle("wine-5")
        assert len(selection) == 5

    def test_deselect_allowed_at_capacity(self):
        selection = ComparisonSelection(capacity=2)
        selection.toggle("a")
        selection.toggle("b")
        assert selection.toggle("a") is False
        assert selection.names == ("b",)

    def test_default_capacity_from_settings(self):
        assert ComparisonSelection().capacity == 5

    def test_selected_records_in_catalog_order(self, catalog):
        selection = ComparisonSelection()
        selection.toggle("Opus One")
        selection.toggle("Chateau Margaux")

        assert [wine.name for wine in selection.selected_records(catalog)] == [
            "Chateau Margaux",
            "Opus One",
        ]

    def test_same_name_records_are_selected_together(self, make_wine):
        """Name identity: two vintages of one wine cannot be told apart."""
        records = [
            make_wine("Opus One", vintage=2018),
            make_wine("Opus One", vintage=2019),
        ]
        selection = ComparisonSelection()
        selection.toggle("Opus One")

        assert len(selection.selected_records(records)) == 2

    def test_clear(self):
        selection = ComparisonSelection()
        selection.toggle("a")
        selection.clear()
        assert selection.names == ()


class TestTastingProfile:
    """Tests for tasting chart data."""

    def test_alcohol_rescaled(self, make_wine):
        profile = tasting_profile(make_wine(alcohol=14.0, tannin=4.0, sweetness=1.0, acidity=3.0, body=4.0))
        assert profile == {
            "tannin": 4.0,
            "sweetness": 1.0,
            "acidity": 3.0,
            "body": 4.0,
            "alcohol": pytest.approx(3.5),
        }

    def test_missing_values_are_zero(self, make_wine):
        profile = tasting_profile(make_wine(tannin=None, alcohol=None))
        assert profile["tannin"] == 0.0
        assert profile["alcohol"] == 0.0

    def test_combined_aromas(self, catalog):
        assert combined_aromas(catalog[:3]) == ["Cassis", "Cherry", "Earth", "Leather", "Oak"]
