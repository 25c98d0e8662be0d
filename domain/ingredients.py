from domain.models import MAX_SLOTS, Recipe


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def extract_ingredients(recipe: Recipe) -> list[str]:
    """Formatted "measure ingredient" entries for slots 1 to 20, in slot order.

    A slot with a blank ingredient is skipped even when its measure is set.
    """
    entries: list[str] = []
    for slot in range(1, MAX_SLOTS + 1):
        ingredient = recipe.ingredient(slot)
        if _blank(ingredient):
            continue
        measure = recipe.measure(slot)
        entries.append(ingredient if _blank(measure) else f"{measure} {ingredient}")
    return entries


def ingredients_text(recipe: Recipe) -> str:
    return ", ".join(extract_ingredients(recipe))
