import asyncio

import httpx
import pytest

from domain import services
from domain.models import Recipe
from domain.saved import SavedRecipeStore
from domain.state import AppState, Status
from domain.views import ActionName, Notice, NoticeKind, RecipeCard, RemixCard
from fakes import (
    SOUP,
    TEA,
    MemoryStorage,
    completion,
    completion_handler,
    llm_with,
    meals_handler,
    mealdb_with,
)


def assert_notice(view: object, message: str) -> Notice:
    assert isinstance(view, Notice)
    assert view.message == message
    return view


def test_render_recipe(state: AppState, tea: Recipe) -> None:
    card = services.render_recipe(tea, state=state)
    assert card.title == "Tea"
    assert card.image_url == TEA["strMealThumb"]
    assert card.image_alt == "Tea"
    assert card.ingredients == ["1 cup Water"]
    assert card.instruction_lines == ["Boil.", "Serve."]
    assert [(a.name, a.target) for a in card.actions] == [(ActionName.save, "Tea")]
    assert state.current_recipe is tea
    assert state.recipe_display.content == card
    assert state.recipe_display.status == Status.rendered


def test_render_recipe_without_saving(state: AppState, tea: Recipe) -> None:
    assert services.render_recipe(tea, state=state, saving=False).actions == []


def test_render_recipe_handles_crlf(state: AppState) -> None:
    card = services.render_recipe(Recipe.from_meal(SOUP), state=state)
    assert card.instruction_lines == ["Chop the leeks.", "Simmer in stock."]


def test_render_recipe_missing_fields(state: AppState) -> None:
    card = services.render_recipe(Recipe.from_meal({"strMeal": "Bare"}), state=state)
    assert card.ingredients == []
    assert card.instruction_lines == [""]
    assert card.image_url == ""


@pytest.mark.asyncio
async def test_fetch_random(state: AppState) -> None:
    mealdb, _ = mealdb_with(meals_handler())
    view = await services.fetch_random(state=state, mealdb=mealdb)
    assert isinstance(view, RecipeCard)
    assert view.ingredients == ["1 cup Water"]
    assert view.instruction_lines == ["Boil.", "Serve."]
    assert state.current_recipe is not None
    assert state.current_recipe.name == "Tea"


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(500),
        httpx.Response(200, json={"meals": None}),
        httpx.Response(200, json={"meals": []}),
        httpx.Response(200, json={"nope": []}),
        httpx.Response(200, text="not json"),
    ),
)
@pytest.mark.asyncio
async def test_fetch_random_failure(state: AppState, response: httpx.Response) -> None:
    mealdb, _ = mealdb_with(lambda request: response)
    view = await services.fetch_random(state=state, mealdb=mealdb)
    notice = assert_notice(view, services.LOAD_FAILED)
    assert notice.kind == NoticeKind.error
    assert state.recipe_display.status == Status.error
    assert state.current_recipe is None


@pytest.mark.asyncio
async def test_fetch_random_connection_error(state: AppState) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    mealdb, _ = mealdb_with(handler)
    assert_notice(await services.fetch_random(state=state, mealdb=mealdb), services.LOAD_FAILED)


@pytest.mark.asyncio
async def test_fetch_random_shows_loading_while_pending(state: AppState) -> None:
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        await release.wait()
        return httpx.Response(200, json={"meals": [TEA]})

    mealdb, recorder = mealdb_with(handler)
    task = asyncio.create_task(services.fetch_random(state=state, mealdb=mealdb))
    while not recorder.requests:
        await asyncio.sleep(0)

    assert state.recipe_display.status == Status.loading
    assert_notice(state.recipe_display.content, services.LOADING)

    release.set()
    assert isinstance(await task, RecipeCard)


@pytest.mark.asyncio
async def test_stale_fetch_does_not_overwrite_newer(state: AppState) -> None:
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        if len(recorder.requests) == 1:
            await release.wait()
            return httpx.Response(200, json={"meals": [TEA]})
        return httpx.Response(200, json={"meals": [SOUP]})

    mealdb, recorder = mealdb_with(handler)
    slow = asyncio.create_task(services.fetch_random(state=state, mealdb=mealdb))
    while not recorder.requests:
        await asyncio.sleep(0)

    fast = await services.fetch_random(state=state, mealdb=mealdb)
    assert isinstance(fast, RecipeCard)
    assert fast.title == "Leek Soup"

    release.set()
    await slow

    assert state.current_recipe is not None
    assert state.current_recipe.name == "Leek Soup"
    content = state.recipe_display.content
    assert isinstance(content, RecipeCard)
    assert content.title == "Leek Soup"


@pytest.mark.asyncio
async def test_fetch_by_name(state: AppState) -> None:
    mealdb, recorder = mealdb_with(meals_handler(search={"meals": [SOUP, TEA]}))
    view = await services.fetch_by_name("Leek Soup", state=state, mealdb=mealdb)
    assert isinstance(view, RecipeCard)
    assert view.title == "Leek Soup"
    assert state.current_recipe is not None
    assert state.current_recipe.name == "Leek Soup"
    assert recorder.requests[0].url.params["s"] == "Leek Soup"


@pytest.mark.asyncio
async def test_fetch_by_name_not_found_keeps_current(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    mealdb, _ = mealdb_with(meals_handler(search={"meals": None}))
    view = await services.fetch_by_name("Nothing", state=state, mealdb=mealdb)
    assert_notice(view, services.NOT_FOUND)
    assert state.current_recipe is tea


@pytest.mark.parametrize("name", ("", "   "))
@pytest.mark.asyncio
async def test_fetch_by_blank_name(state: AppState, tea: Recipe, name: str) -> None:
    services.render_recipe(tea, state=state)
    mealdb, recorder = mealdb_with(meals_handler(search={"meals": [SOUP]}))
    view = await services.fetch_by_name(name, state=state, mealdb=mealdb)
    assert_notice(view, services.NOT_FOUND)
    assert recorder.requests == []
    assert state.current_recipe is tea


@pytest.mark.asyncio
async def test_fetch_by_name_failure(state: AppState) -> None:
    mealdb, _ = mealdb_with(lambda request: httpx.Response(502))
    view = await services.fetch_by_name("Tea", state=state, mealdb=mealdb)
    assert_notice(view, services.LOOKUP_FAILED)


@pytest.mark.asyncio
async def test_remix_without_recipe(state: AppState) -> None:
    llm, recorder = llm_with(completion_handler())
    view = await services.remix("Make it vegan", state=state, llm=llm)
    assert_notice(view, services.REMIX_NEEDS_RECIPE)
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_remix(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    llm, recorder = llm_with(completion_handler("Iced tea!\nAdd lemon."))
    view = await services.remix("Make it cold", state=state, llm=llm)
    assert isinstance(view, RemixCard)
    assert view.title == "🎨 Your Remixed Recipe: Make it cold"
    assert view.lines == ["Iced tea!", "Add lemon."]
    assert len(recorder.requests) == 1
    assert state.current_recipe is tea
    assert state.remix_output.status == Status.rendered


@pytest.mark.asyncio
async def test_remix_bad_status(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    llm, _ = llm_with(lambda request: httpx.Response(500))
    view = await services.remix("Make it vegan", state=state, llm=llm)
    notice = assert_notice(view, services.REMIX_FAILED)
    assert notice.detail == "Error: OpenAI API error: 500"
    assert state.remix_output.status == Status.error


@pytest.mark.asyncio
async def test_remix_malformed(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    llm, _ = llm_with(lambda request: httpx.Response(200, json={"choices": []}))
    view = await services.remix("Make it vegan", state=state, llm=llm)
    notice = assert_notice(view, services.REMIX_FAILED)
    assert notice.detail is not None
    assert notice.detail.startswith("Error: ")


@pytest.mark.asyncio
async def test_latest_remix_wins(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        if len(recorder.requests) == 1:
            await release.wait()
            return httpx.Response(200, json=completion("old"))
        return httpx.Response(200, json=completion("new"))

    llm, recorder = llm_with(handler)
    slow = asyncio.create_task(services.remix("First", state=state, llm=llm))
    while not recorder.requests:
        await asyncio.sleep(0)
    await services.remix("Second", state=state, llm=llm)
    release.set()
    await slow

    content = state.remix_output.content
    assert isinstance(content, RemixCard)
    assert content.text == "new"
    assert content.theme == "Second"


@pytest.mark.asyncio
async def test_save_current_without_recipe(state: AppState) -> None:
    store = SavedRecipeStore(MemoryStorage())
    saved, notice = await services.save_current(state=state, store=store)
    assert notice is not None
    assert notice.message == services.SAVE_NEEDS_RECIPE
    assert notice.kind == NoticeKind.alert
    assert not saved.visible
    assert await store.list() == []


@pytest.mark.asyncio
async def test_save_current(state: AppState, tea: Recipe) -> None:
    services.render_recipe(tea, state=state)
    store = SavedRecipeStore(MemoryStorage())

    saved, notice = await services.save_current(state=state, store=store)
    assert notice is None
    assert saved.names == ["Tea"]

    saved, notice = await services.save_current(state=state, store=store)
    assert notice is not None
    assert notice.message == services.ALREADY_SAVED.format(name="Tea")
    assert saved.names == ["Tea"]


@pytest.mark.asyncio
async def test_saved_rows_carry_actions() -> None:
    store = SavedRecipeStore(MemoryStorage())
    await store.add("Tea")
    await store.add("Leek Soup")
    saved = await services.saved_list(store=store)
    assert saved.visible
    row = saved.rows[1]
    assert row.name == "Leek Soup"
    assert [(a.name, a.target) for a in row.actions] == [
        (ActionName.view, "Leek Soup"),
        (ActionName.delete, "Leek Soup"),
    ]


@pytest.mark.asyncio
async def test_delete_saved() -> None:
    store = SavedRecipeStore(MemoryStorage())
    await store.add("Tea")
    saved = await services.delete_saved("Tea", store=store)
    assert not saved.visible
    assert saved.rows == []
