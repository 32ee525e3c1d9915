"""
Menu domain models.

Raw HUDS API records and the condensed, display-ready menu built from
them. Field aliases match the JSON names used by the HUDS API and by the
``/huds-data`` response.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class MealNumber(IntEnum):
    """HUDS meal numbers."""

    BREAKFAST = 1
    LUNCH = 2
    DINNER = 3


class RawMenuItem(BaseModel):
    """One served food item as returned by the HUDS recipes API.

    Nutrition and descriptive fields are kept as free-form text: the
    upstream format is inconsistent (``"150"``, ``"1.5g"``, ``""``, null).

    Example:
        >>> item = RawMenuItem.model_validate(
        ...     {"Meal_Number": 1, "Location_Name": "Annenberg Hall",
        ...      "Recipe_Print_As_Name": "Scrambled Eggs",
        ...      "Serve_Date": "10/19/2026"}
        ... )
        >>> assert item.meal_number == MealNumber.BREAKFAST
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int = Field(0, alias="ID")
    meal_number: int = Field(0, alias="Meal_Number")
    meal_name: str = Field("", alias="Meal_Name")
    location_name: str = Field("", alias="Location_Name")
    location_number: str = Field("", alias="Location_Number")
    menu_category_name: str = Field("", alias="Menu_Category_Name")
    menu_category_number: str = Field("", alias="Menu_Category_Number")

    recipe_number: str = Field("", alias="Recipe_Number")
    recipe_name: str = Field("", alias="Recipe_Name")
    recipe_print_as_name: str = Field("", alias="Recipe_Print_As_Name")
    recipe_print_as_color: str = Field("", alias="Recipe_Print_As_Color")
    recipe_print_as_character: str = Field("", alias="Recipe_Print_As_Character")
    recipe_product_information: str = Field("", alias="Recipe_Product_Information")
    recipe_web_codes: str = Field("", alias="Recipe_Web_Codes")
    serving_size: str = Field("", alias="Serving_Size")
    ingredient_list: str = Field("", alias="Ingredient_List")
    allergens: str = Field("", alias="Allergens")

    calories: str = Field("", alias="Calories")
    calories_from_fat: str = Field("", alias="Calories_From_Fat")
    total_fat: str = Field("", alias="Total_Fat")
    total_fat_dv: str = Field("", alias="Total_Fat_DV")
    sat_fat: str = Field("", alias="Sat_Fat")
    sat_fat_dv: str = Field("", alias="Sat_Fat_DV")
    trans_fat: str = Field("", alias="Trans_Fat")
    trans_fat_dv: str = Field("", alias="Trans_Fat_DV")
    cholesterol: str = Field("", alias="Cholesterol")
    cholesterol_dv: str = Field("", alias="Cholesterol_DV")
    sodium: str = Field("", alias="Sodium")
    sodium_dv: str = Field("", alias="Sodium_DV")
    total_carb: str = Field("", alias="Total_Carb")
    total_carb_dv: str = Field("", alias="Total_Carb_DV")
    dietary_fiber: str = Field("", alias="Dietary_Fiber")
    dietary_fiber_dv: str = Field("", alias="Dietary_Fiber_DV")
    sugars: str = Field("", alias="Sugars")
    sugars_dv: str = Field("", alias="Sugars_DV")
    protein: str = Field("", alias="Protein")
    protein_dv: str = Field("", alias="Protein_DV")

    catering_department: str = Field("", alias="Catering_Department")
    production_department: str = Field("", alias="Production_Department")
    service_department: str = Field("", alias="Service_Department")

    serve_date: str = Field("", alias="Serve_Date")
    update_date: str = Field("", alias="Update_Date")
    portion_cost: str = Field("", alias="portion_cost")
    selling_price: str = Field("", alias="selling_price")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v: Any, info: ValidationInfo) -> Any:
        """Null becomes empty text; numbers in text fields become text."""
        if info.field_name in ("id", "meal_number"):
            return 0 if v is None else v
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class CondensedMenuItem(BaseModel):
    """Normalized, display-ready menu entry.

    ``serve_date`` and ``meal_number`` are grouping keys used only while
    condensing; items stored in a ``CondensedMenu`` have them cleared and
    they are omitted from serialized output.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    food_name: str = Field(..., alias="Food_Name")
    allergens: str = Field("", alias="Allergens")
    calories: str = Field("", alias="Calories")
    menu_category: str = Field("", alias="Menu_Category_Name")
    vegan: bool = Field(False, alias="Vegan")
    vegetarian: bool = Field(False, alias="Vegetarian")
    house_location: bool = Field(True, alias="House_Location")
    serve_date: Optional[str] = Field(None, alias="Serve_Date")
    meal_number: Optional[int] = Field(None, alias="Meal_Number")

    def without_grouping_keys(self) -> CondensedMenuItem:
        """Copy with the transient serve date and meal number cleared."""
        return self.model_copy(update={"serve_date": None, "meal_number": None})

    def to_dict(self) -> dict[str, Any]:
        """Serialize with API field names, omitting unset grouping keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CondensedMenu(BaseModel):
    """One serve date's condensed menu."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    serve_date: str = Field(..., alias="Serve_Date")
    breakfast: list[CondensedMenuItem] = Field(default_factory=list, alias="Breakfast")
    lunch: list[CondensedMenuItem] = Field(default_factory=list, alias="Lunch")
    dinner: list[CondensedMenuItem] = Field(default_factory=list, alias="Dinner")

    @property
    def has_dinner(self) -> bool:
        """A menu without dinner items is treated as incomplete."""
        return len(self.dinner) > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize with API field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
