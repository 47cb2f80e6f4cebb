# backend/storefront/schemas/menu.py

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class DietaryInfo(BaseModel):
    vegan: bool = False
    vegetarian: bool = False
    gluten_free: bool = False
    dairy_free: bool = False

    model_config = CAMEL


class NutritionalInfo(BaseModel):
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0


class MenuItemIn(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    image: str = ""
    additional_images: list[str] = []
    category: str = Field(min_length=1)
    popular: bool = False
    dietary_info: DietaryInfo = Field(default_factory=DietaryInfo)
    nutritional_info: NutritionalInfo = Field(default_factory=NutritionalInfo)
    ingredients: list[str] = []

    model_config = CAMEL

    @field_validator("additional_images", mode="before")
    @classmethod
    def _images_list(cls, value: Any) -> Any:
        if value is None or not isinstance(value, list):
            return []
        return value


class MenuItem(MenuItemIn):
    id: int


class MenuDocument(BaseModel):
    items: list[MenuItem] = []


# ── API envelopes ────────────────────────────────────────────────────────


class MenuItemResponse(BaseModel):
    success: bool = True
    message: str | None = None
    item: MenuItem


class MenuItemsResponse(BaseModel):
    success: bool = True
    items: list[MenuItem]


class CategoriesResponse(BaseModel):
    success: bool = True
    categories: list[str]
