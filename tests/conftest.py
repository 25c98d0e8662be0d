from pathlib import Path
from typing import AsyncIterator

from databases import Database
import pytest
import pytest_asyncio

import db
from domain.models import Recipe
from domain.saved import SavedRecipeStore
from domain.state import AppState
from fakes import TEA


@pytest.fixture
def tea() -> Recipe:
    return Recipe.from_meal(TEA)


@pytest.fixture
def state() -> AppState:
    return AppState()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def database(db_url: str) -> AsyncIterator[Database]:
    database = Database(db_url)
    await database.connect()
    await db.create_db(database)
    yield database
    await database.disconnect()


@pytest_asyncio.fixture
async def store(database: Database) -> SavedRecipeStore:
    return SavedRecipeStore(db.LocalStorage(database))
