"""
Menu condensation.

HUDS publishes one copy of every menu per dining location. All houses
serve identical lunch and dinner menus, so Currier House is kept as the
canonical source for those meals; breakfast is taken from Annenberg Hall.
Every other location's records are duplicates and are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from huds_backend.domain.menu.models import (
    CondensedMenu,
    CondensedMenuItem,
    MealNumber,
    RawMenuItem,
)

ANNENBERG_HALL = "Annenberg Hall"
CURRIER_HOUSE = "Currier House"

VEGAN_CODE = "VGN"
VEGETARIAN_CODE = "VGT"

# serve_date -> meal number -> items in upstream order
GroupedMenu = dict[str, dict[int, list[CondensedMenuItem]]]


def condense_item(item: RawMenuItem) -> Optional[CondensedMenuItem]:
    """
    Condense one raw record, or return None if its location is not canonical.

    Args:
        item: Raw HUDS record

    Returns:
        Condensed item still carrying its serve date and meal number,
        or None for non-canonical duplicates
    """
    if item.meal_number == MealNumber.BREAKFAST:
        # Breakfast comes from Annenberg only, house copies are duplicates
        if item.location_name != ANNENBERG_HALL:
            return None
        house_location = False
    elif item.location_name == CURRIER_HOUSE:
        house_location = True
    else:
        return None

    return CondensedMenuItem(
        food_name=item.recipe_print_as_name,
        allergens=item.allergens,
        calories=item.calories,
        menu_category=item.menu_category_name,
        vegan=VEGAN_CODE in item.recipe_web_codes,
        vegetarian=VEGETARIAN_CODE in item.recipe_web_codes,
        house_location=house_location,
        serve_date=item.serve_date,
        meal_number=item.meal_number,
    )


def condense_menu_items(items: Iterable[RawMenuItem]) -> GroupedMenu:
    """
    Group canonical records by serve date and meal number.

    Breakfast items are kept whenever they pass the location filter;
    lunch and dinner items only when they come from the house source.
    Grouped items have their serve date and meal number cleared.
    Never raises: filtered records simply do not appear.
    """
    grouped: GroupedMenu = {}

    for item in items:
        condensed = condense_item(item)
        if condensed is None:
            continue

        meal_number = item.meal_number
        is_breakfast = meal_number == MealNumber.BREAKFAST
        is_house_meal = (
            meal_number in (MealNumber.LUNCH, MealNumber.DINNER) and condensed.house_location
        )
        if not (is_breakfast or is_house_meal):
            continue

        meals = grouped.setdefault(item.serve_date, {})
        meals.setdefault(meal_number, []).append(condensed.without_grouping_keys())

    return grouped


def build_condensed_menus(grouped: GroupedMenu) -> list[CondensedMenu]:
    """Assemble one CondensedMenu per serve date, missing meals empty."""
    return [
        CondensedMenu(
            serve_date=serve_date,
            breakfast=meals.get(MealNumber.BREAKFAST, []),
            lunch=meals.get(MealNumber.LUNCH, []),
            dinner=meals.get(MealNumber.DINNER, []),
        )
        for serve_date, meals in grouped.items()
    ]
