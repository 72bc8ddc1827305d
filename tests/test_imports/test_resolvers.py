"""Tests for category reference resolution."""

import pytest

from cafe_admin.imports.errors import MissingRequiredField, ReferenceNotFound
from cafe_admin.imports.resolvers import CategoryResolver


class TestCategoryResolver:
    """Tests for resolving category references."""

    def test_resolve_by_name(self, coffee, pastries):
        """Test lookup by primary name."""
        resolver = CategoryResolver([coffee, pastries])

        assert resolver.resolve({"category_name": "Coffee"}) == "cat-coffee"

    def test_resolve_case_insensitive(self, coffee):
        """Test lookup ignores case."""
        resolver = CategoryResolver([coffee])

        assert resolver.resolve({"category_name": "COFFEE"}) == "cat-coffee"
        assert resolver.resolve({"category_name": "coffee"}) == "cat-coffee"

    def test_resolve_by_spanish_name(self, coffee, pastries):
        """Test lookup by the Spanish name."""
        resolver = CategoryResolver([coffee, pastries])

        assert resolver.resolve({"category_name": "pasteles"}) == "cat-pastries"
        assert resolver.resolve({"category_name": "Café"}) == "cat-coffee"

    def test_known_category_id_wins(self, coffee, pastries):
        """Test a known category_id is used over the name."""
        resolver = CategoryResolver([coffee, pastries])

        fields = {"category_id": "cat-pastries", "category_name": "Coffee"}
        assert resolver.resolve(fields) == "cat-pastries"

    def test_unknown_id_falls_back_to_name(self, coffee):
        """Test an unknown category_id falls back to category_name."""
        resolver = CategoryResolver([coffee])

        fields = {"category_id": "gone", "category_name": "Coffee"}
        assert resolver.resolve(fields) == "cat-coffee"

    def test_unknown_name(self, coffee):
        """Test an unknown name raises with the attempted name."""
        resolver = CategoryResolver([coffee])

        with pytest.raises(ReferenceNotFound) as exc_info:
            resolver.resolve({"category_name": "Smoothies"})

        assert exc_info.value.value == "Smoothies"
        assert exc_info.value.message == "Category not found: Smoothies"

    def test_unknown_id_without_name(self, coffee):
        """Test an unknown category_id alone is not found."""
        resolver = CategoryResolver([coffee])

        with pytest.raises(ReferenceNotFound) as exc_info:
            resolver.resolve({"category_id": "gone", "category_name": ""})

        assert exc_info.value.value == "gone"

    def test_no_reference(self, coffee):
        """Test rows without any category reference."""
        resolver = CategoryResolver([coffee])

        with pytest.raises(MissingRequiredField):
            resolver.resolve({"name": "Latte"})

    def test_empty_snapshot(self):
        """Test every name misses against an empty snapshot."""
        with pytest.raises(ReferenceNotFound):
            CategoryResolver([]).resolve({"category_name": "Coffee"})
