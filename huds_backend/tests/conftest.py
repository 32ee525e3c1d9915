"""
Shared fixtures for the menu backend tests.

Raw records use the HUDS API JSON field names so they exercise the same
validation path as real responses.
"""

from typing import Any, Callable

import pytest

from huds_backend.domain.menu.models import CondensedMenu, CondensedMenuItem, RawMenuItem


def raw_record(**overrides: Any) -> dict[str, Any]:
    """HUDS API record with sensible defaults, overridable by JSON name."""
    record: dict[str, Any] = {
        "ID": 1001,
        "Meal_Number": 3,
        "Meal_Name": "Dinner Menu",
        "Location_Name": "Currier House",
        "Location_Number": "05",
        "Menu_Category_Name": "Entrees",
        "Menu_Category_Number": "02",
        "Recipe_Number": "042011",
        "Recipe_Name": "Roast Chicken",
        "Recipe_Print_As_Name": "Roast Chicken",
        "Recipe_Web_Codes": "",
        "Allergens": "",
        "Calories": "250",
        "Serve_Date": "03/04/2024",
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_raw_item() -> Callable[..., RawMenuItem]:
    """Factory building RawMenuItem from JSON-name overrides."""

    def _make(**overrides: Any) -> RawMenuItem:
        return RawMenuItem.model_validate(raw_record(**overrides))

    return _make


@pytest.fixture
def api_payload() -> list[dict[str, Any]]:
    """Two serve dates, three meals, canonical and duplicate locations."""
    return [
        # 03/04/2024 breakfast
        raw_record(
            ID=1,
            Meal_Number=1,
            Location_Name="Annenberg Hall",
            Menu_Category_Name="Breakfast Entrees",
            Recipe_Print_As_Name="Scrambled Eggs",
            Recipe_Web_Codes="VGT",
            Allergens="Eggs",
            Calories="180",
        ),
        raw_record(
            ID=2,
            Meal_Number=1,
            Location_Name="Currier House",
            Menu_Category_Name="Breakfast Entrees",
            Recipe_Print_As_Name="Scrambled Eggs",
            Recipe_Web_Codes="VGT",
            Allergens="Eggs",
            Calories="180",
        ),
        # 03/04/2024 lunch
        raw_record(
            ID=3,
            Meal_Number=2,
            Location_Name="Currier House",
            Menu_Category_Name="Soups",
            Recipe_Print_As_Name="Lentil Soup",
            Recipe_Web_Codes="VGN VGT",
            Allergens="",
            Calories="120",
        ),
        raw_record(
            ID=4,
            Meal_Number=2,
            Location_Name="Adams House",
            Menu_Category_Name="Soups",
            Recipe_Print_As_Name="Lentil Soup",
            Recipe_Web_Codes="VGN VGT",
            Calories="120",
        ),
        # 03/04/2024 dinner
        raw_record(
            ID=5,
            Meal_Number=3,
            Location_Name="Currier House",
            Menu_Category_Name="Entrees",
            Recipe_Print_As_Name="Roast Chicken",
            Recipe_Web_Codes="LCL",
            Allergens="Soy",
            Calories="250",
        ),
        raw_record(
            ID=6,
            Meal_Number=3,
            Location_Name="Annenberg Hall",
            Menu_Category_Name="Entrees",
            Recipe_Print_As_Name="Roast Chicken",
            Calories="250",
        ),
        # 03/05/2024 breakfast and dinner
        raw_record(
            ID=7,
            Meal_Number=1,
            Location_Name="Annenberg Hall",
            Menu_Category_Name="Breakfast Breads",
            Recipe_Print_As_Name="Blueberry Muffin",
            Recipe_Web_Codes=None,
            Allergens="Wheat, Milk",
            Calories=320,
            Serve_Date="03/05/2024",
        ),
        raw_record(
            ID=8,
            Meal_Number=3,
            Location_Name="Currier House",
            Menu_Category_Name="Vegan Entrees",
            Recipe_Print_As_Name="Tofu Stir Fry",
            Recipe_Web_Codes="VGN",
            Allergens="Soy",
            Calories="310",
            Serve_Date="03/05/2024",
        ),
    ]


@pytest.fixture
def api_items(api_payload: list[dict[str, Any]]) -> list[RawMenuItem]:
    return [RawMenuItem.model_validate(record) for record in api_payload]


def menu_item(food_name: str, **fields: Any) -> CondensedMenuItem:
    return CondensedMenuItem(food_name=food_name, **fields)


@pytest.fixture
def make_menu() -> Callable[..., CondensedMenu]:
    """Factory building a CondensedMenu with one item per meal by default."""

    def _make(serve_date: str, dinner: bool = True) -> CondensedMenu:
        return CondensedMenu(
            serve_date=serve_date,
            breakfast=[menu_item("Oatmeal", house_location=False, vegan=True)],
            lunch=[menu_item("Lentil Soup", vegan=True, vegetarian=True)],
            dinner=[menu_item("Roast Chicken", allergens="Soy")] if dinner else [],
        )

    return _make
