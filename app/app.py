import contextlib
import functools
import json
import logging
import uuid
from typing import Any, AsyncIterator, Awaitable, Callable

from databases import Database
import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route

import config
import db
from app.html.recipe_detail import render_view
from app.html.saved_list import SavedListDetail
from domain import services
from domain.aopenai import openai_client_factory
from domain.llm_service import LLMService
from domain.mealdb import MealDBClient, mealdb_client_factory
from domain.saved import SavedRecipeStore, saved_recipes_key
from domain.state import AppState, ClientStates
from domain.views import SavedList


CLIENT_ID = "client"


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def client_id(request: Request) -> str:
    """Id of the browser behind ``request``, minted on its first visit."""
    if CLIENT_ID not in request.session:
        request.session[CLIENT_ID] = uuid.uuid4().hex
    return request.session[CLIENT_ID]


def client_state(request: Request) -> AppState:
    return request.app.state.clients.get(client_id(request))


def client_store(request: Request) -> SavedRecipeStore:
    return SavedRecipeStore(
        request.app.state.storage, key=saved_recipes_key(client_id(request))
    )


def saved_html(request: Request, saved: SavedList) -> str:
    return SavedListDetail(saved, environment=request.app.state.templates).render()


@aHTMLResponse
async def homepage(request: Request) -> str:
    client_id(request)
    cfg: config.Config = request.app.state.config
    return request.app.state.templates.get_template("index.html").render(
        themes=cfg.remix_themes,
        saving=cfg.saved_recipes_enabled,
        loading=services.LOADING,
        remixing=services.REMIX_IN_PROGRESS,
    )


@aHTMLResponse
async def random_recipe(request: Request) -> str:
    view = await services.fetch_random(
        state=client_state(request),
        mealdb=request.app.state.mealdb,
        saving=request.app.state.config.saved_recipes_enabled,
    )
    return render_view(view, request.app.state.templates)


@aHTMLResponse
async def search_recipe(request: Request) -> str:
    name = request.query_params.get("name", "")
    view = await services.fetch_by_name(
        name,
        state=client_state(request),
        mealdb=request.app.state.mealdb,
        saving=request.app.state.config.saved_recipes_enabled,
    )
    return render_view(view, request.app.state.templates)


@aHTMLResponse
async def remix(request: Request) -> str:
    async with request.form() as form:
        theme = str(form.get("theme", ""))
    view = await services.remix(
        theme, state=client_state(request), llm=request.app.state.llm
    )
    return render_view(view, request.app.state.templates)


@aHTMLResponse
async def saved(request: Request) -> str:
    return saved_html(request, await services.saved_list(store=client_store(request)))


async def save(request: Request) -> HTMLResponse:
    saved_recipes, notice = await services.save_current(
        state=client_state(request), store=client_store(request)
    )
    headers: dict[str, str] = {}
    if notice is not None:
        headers["HX-Trigger"] = json.dumps({"notice": notice.message})
    return HTMLResponse(saved_html(request, saved_recipes), headers=headers)


@aHTMLResponse
async def delete(request: Request) -> str:
    async with request.form() as form:
        name = str(form.get("name", ""))
    saved_recipes = await services.delete_saved(name, store=client_store(request))
    return saved_html(request, saved_recipes)


def create_app(
    cfg: config.Config | None = None,
    *,
    mealdb_client: httpx.AsyncClient | None = None,
    openai_client: httpx.AsyncClient | None = None,
) -> Starlette:
    cfg = config.Config() if cfg is None else cfg
    configure_logging(cfg.log_level)

    database = Database(cfg.db_url)
    mealdb = MealDBClient(
        mealdb_client_factory(cfg.mealdb_url, cfg.http_timeout)
        if mealdb_client is None
        else mealdb_client
    )
    llm = LLMService(
        openai_client_factory(
            cfg.openai_api_key, base_url=cfg.openai_url, timeout=cfg.http_timeout
        )
        if openai_client is None
        else openai_client,
        model=cfg.openai_model,
        max_tokens=cfg.remix_max_tokens,
        temperature=cfg.remix_temperature,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        await database.connect()
        await db.create_db(database)
        logger.info("Saved recipes stored at %s", cfg.db_url)
        yield
        await database.disconnect()
        await mealdb.close()
        await llm.close()

    routes = [
        Route("/", homepage),
        Route("/recipes/random", random_recipe),
        Route("/recipes/search", search_recipe),
        Route("/remix", remix, methods=["POST"]),
    ]
    if cfg.saved_recipes_enabled:
        routes += [
            Route("/saved", saved, methods=["GET"]),
            Route("/saved", save, methods=["POST"]),
            Route("/saved/delete", delete, methods=["POST"]),
        ]

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=routes,
        middleware=[
            Middleware(
                SessionMiddleware,
                secret_key=cfg.session_secret,
                max_age=cfg.session_max_age,
                https_only=cfg.env == config.Env.prod,
            )
        ],
        lifespan=lifespan,
    )

    app.state.config = cfg
    app.state.templates = Environment(
        loader=FileSystemLoader(cfg.html_dir),
        autoescape=select_autoescape(),
    )
    app.state.clients = ClientStates()
    app.state.mealdb = mealdb
    app.state.llm = llm
    app.state.storage = db.LocalStorage(database)
    return app


app = create_app()
