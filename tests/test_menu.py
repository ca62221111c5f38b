"""Tests for the static menu catalog."""

import pytest

from src.tools.menu import MENU_ITEMS, MenuCategory, get_menu_by_category, get_menu_summary


class TestMenuSummary:
    def test_lists_every_course(self):
        summary = get_menu_summary()
        for title in ("**Starters:**", "**Main Course:**", "**Desserts:**", "**Beverages:**"):
            assert title in summary

    def test_names_restaurant(self):
        assert "La Maison" in get_menu_summary()


class TestMenuByCategory:
    @pytest.mark.parametrize("category", list(MenuCategory))
    def test_every_category_has_dishes(self, category):
        listing = get_menu_by_category(category.value)
        assert listing.startswith("**")
        assert "- **" in listing

    def test_course_listing(self):
        listing = get_menu_by_category("dessert")
        assert listing.startswith("**Desserts**")
        assert "Gulab Jamun" in listing
        assert "Paneer Tikka" not in listing

    def test_dietary_filter(self):
        listing = get_menu_by_category("vegan")
        vegan = [d["name"] for d in MENU_ITEMS if "vegan" in d["tags"]]
        for name in vegan:
            assert name in listing
        assert "Lamb Rogan Josh" not in listing

    def test_accepts_enum_member(self):
        assert get_menu_by_category(MenuCategory.GLUTEN_FREE).startswith("**Gluten-Free")

    def test_prices_formatted(self):
        assert "($9.00)" in get_menu_by_category("starter")

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            get_menu_by_category("brunch")
