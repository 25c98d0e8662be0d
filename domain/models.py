from collections.abc import Mapping
from typing import Any, Self

from domain.errors import MalformedResponse


type Meal = Mapping[str, Any]


MAX_SLOTS = 20


class Recipe:
    """One TheMealDB meal record.

    Ingredient and measure slots are positional: measure ``i`` belongs to
    ingredient ``i``. Text fields that the record leaves out read as empty.
    """

    @classmethod
    def from_meal(cls, meal: Any) -> Self:
        if not isinstance(meal, Mapping):
            raise MalformedResponse(f"Expected a meal record, got {type(meal).__name__}")
        return cls(meal)

    def __init__(self, meal: Meal) -> None:
        self.meal = meal

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"

    def __str__(self) -> str:
        return self.name

    def _text(self, key: str) -> str:
        value = self.meal.get(key)
        return value if isinstance(value, str) else ""

    @property
    def id(self) -> str | None:
        return self.meal.get("idMeal")

    @property
    def name(self) -> str:
        return self._text("strMeal")

    @property
    def image_url(self) -> str:
        return self._text("strMealThumb")

    @property
    def instructions(self) -> str:
        return self._text("strInstructions")

    def ingredient(self, slot: int) -> str | None:
        return self.meal.get(f"strIngredient{slot}")

    def measure(self, slot: int) -> str | None:
        return self.meal.get(f"strMeasure{slot}")

    def to_dict(self) -> dict[str, Any]:
        return dict(self.meal)
