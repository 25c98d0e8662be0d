"""Operations behind the page's buttons.

Each operation catches the domain errors of its own calls and turns them into
a fixed message in the display region it owns.
"""

import logging

from domain.errors import EmptyResult, RecipeRemixError
from domain.ingredients import extract_ingredients
from domain.llm_service import LLMService
from domain.mealdb import MealDBClient
from domain.models import Recipe
from domain.saved import SavedRecipeStore
from domain.state import AppState, Status
from domain.views import (
    Action,
    ActionName,
    Notice,
    NoticeKind,
    RecipeCard,
    RemixCard,
    SavedList,
    SavedRow,
    View,
    split_lines,
)


LOADING = "Loading..."
LOAD_FAILED = "Sorry, couldn't load a recipe."
NOT_FOUND = "Sorry, we couldn't find that recipe."
LOOKUP_FAILED = "Sorry, couldn't load that recipe."
REMIX_NEEDS_RECIPE = "Please load a recipe first before remixing!"
REMIX_IN_PROGRESS = "🎨 Creating your remix masterpiece..."
REMIX_FAILED = "Oops! Something went wrong while creating your remix. Please try again!"
SAVE_NEEDS_RECIPE = "Please load a recipe first before saving!"
ALREADY_SAVED = '"{name}" is already in your saved recipes.'


logger = logging.getLogger(__name__)


def recipe_card(recipe: Recipe, *, saving: bool = True) -> RecipeCard:
    actions = [Action(ActionName.save, recipe.name)] if saving else []
    return RecipeCard(
        title=recipe.name,
        image_url=recipe.image_url,
        ingredients=extract_ingredients(recipe),
        instruction_lines=split_lines(recipe.instructions),
        actions=actions,
    )


def render_recipe(
    recipe: Recipe,
    *,
    state: AppState,
    seq: int | None = None,
    saving: bool = True,
) -> RecipeCard:
    """Show ``recipe`` and make it the current recipe.

    With ``seq`` the render only lands if it answers the latest request on the
    recipe display.
    """
    card = recipe_card(recipe, saving=saving)
    region = state.recipe_display
    seq = region.begin(LOADING) if seq is None else seq
    if region.commit(seq, card, status=Status.rendered):
        state.set_current_recipe(recipe)
    return card


def _show_error(state: AppState, seq: int, message: str) -> None:
    state.recipe_display.commit(
        seq, Notice(message, kind=NoticeKind.error), status=Status.error
    )


async def fetch_random(
    *,
    state: AppState,
    mealdb: MealDBClient,
    saving: bool = True,
) -> View | None:
    seq = state.recipe_display.begin(LOADING)
    try:
        recipe = await mealdb.random()
    except RecipeRemixError as e:
        logger.warning("Random recipe failed: %r", e)
        _show_error(state, seq, LOAD_FAILED)
    else:
        render_recipe(recipe, state=state, seq=seq, saving=saving)
    return state.recipe_display.content


async def fetch_by_name(
    name: str,
    *,
    state: AppState,
    mealdb: MealDBClient,
    saving: bool = True,
) -> View | None:
    seq = state.recipe_display.begin(LOADING)
    try:
        # A blank search would match the whole catalogue.
        matches = await mealdb.search(name) if name.strip() else []
        if not matches:
            raise EmptyResult(name)
    except EmptyResult:
        logger.info("No recipe named %r", name)
        _show_error(state, seq, NOT_FOUND)
    except RecipeRemixError as e:
        logger.warning("Recipe lookup for %r failed: %r", name, e)
        _show_error(state, seq, LOOKUP_FAILED)
    else:
        # First match wins.
        render_recipe(matches[0], state=state, seq=seq, saving=saving)
    return state.recipe_display.content


async def remix(theme: str, *, state: AppState, llm: LLMService) -> View | None:
    region = state.remix_output
    recipe = state.current_recipe
    seq = region.begin(REMIX_IN_PROGRESS)
    if recipe is None:
        region.commit(seq, Notice(REMIX_NEEDS_RECIPE), status=Status.error)
        return region.content

    try:
        text = await llm.remix_recipe(recipe, theme)
    except RecipeRemixError as e:
        logger.warning("Remix of %r failed: %r", recipe.name, e)
        notice = Notice(REMIX_FAILED, kind=NoticeKind.error, detail=f"Error: {e}")
        region.commit(seq, notice, status=Status.error)
    else:
        region.commit(seq, RemixCard(theme=theme, text=text), status=Status.rendered)
    return region.content


def saved_rows(names: list[str]) -> SavedList:
    return SavedList(
        rows=[
            SavedRow(
                name=name,
                actions=[Action(ActionName.view, name), Action(ActionName.delete, name)],
            )
            for name in names
        ]
    )


async def saved_list(*, store: SavedRecipeStore) -> SavedList:
    return saved_rows(await store.list())


async def save_current(
    *,
    state: AppState,
    store: SavedRecipeStore,
) -> tuple[SavedList, Notice | None]:
    recipe = state.current_recipe
    if recipe is None:
        return await saved_list(store=store), Notice(
            SAVE_NEEDS_RECIPE, kind=NoticeKind.alert
        )

    notice = None
    if await store.add(recipe.name):
        logger.info("Saved %r", recipe.name)
    else:
        notice = Notice(ALREADY_SAVED.format(name=recipe.name), kind=NoticeKind.alert)
    return await saved_list(store=store), notice


async def delete_saved(name: str, *, store: SavedRecipeStore) -> SavedList:
    await store.remove(name)
    logger.info("Removed %r from saved recipes", name)
    return await saved_list(store=store)
