from domain.ingredients import ingredients_text
from domain.models import Recipe


REMIX_SYSTEM_PROMPT = (
    "You are a creative chef who loves to remix recipes. "
    "Give short, fun, creative, and totally doable recipe remixes. "
    "Highlight any changed ingredients or cooking instructions. "
    "Keep responses under 300 words."
)


RECIPE_TEXT = """Recipe: {name}
Ingredients: {ingredients}
Instructions: {instructions}"""


REMIX_PROMPT = 'Please remix this recipe with the theme: "{theme}"\n\n{recipe_text}'


class RemixPrompt:
    def __init__(self, recipe: Recipe, theme: str) -> None:
        self.recipe = recipe
        self.theme = theme

    @property
    def recipe_text(self) -> str:
        return RECIPE_TEXT.format(
            name=self.recipe.name,
            ingredients=ingredients_text(self.recipe),
            instructions=self.recipe.instructions,
        )

    def __str__(self) -> str:
        return REMIX_PROMPT.format(theme=self.theme, recipe_text=self.recipe_text)
