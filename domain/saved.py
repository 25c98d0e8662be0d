import json
import logging
from typing import Protocol


SAVED_RECIPES_KEY = "savedRecipes"


logger = logging.getLogger(__name__)


def saved_recipes_key(client_id: str) -> str:
    """Storage key of one browser's saved list."""
    return f"{SAVED_RECIPES_KEY}:{client_id}"


class Storage(Protocol):
    async def get_item(self, key: str) -> str | None:
        ...

    async def set_item(self, key: str, value: str) -> None:
        ...

    async def remove_item(self, key: str) -> None:
        ...


class SavedRecipeStore:
    """Saved recipe names, unique and kept in the order they were added."""

    def __init__(self, storage: Storage, *, key: str = SAVED_RECIPES_KEY) -> None:
        self.storage = storage
        self.key = key

    # Defined ahead of ``list`` so the annotation still means the builtin.
    async def _write(self, names: list[str]) -> None:
        await self.storage.set_item(self.key, json.dumps(names))

    async def list(self) -> list[str]:
        raw = await self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            names = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable saved recipes value: %r", raw)
            return []
        if not isinstance(names, list):
            logger.warning("Ignoring saved recipes value that is not a list: %r", raw)
            return []
        return [n for n in names if isinstance(n, str)]

    async def add(self, name: str) -> bool:
        names = await self.list()
        if name in names:
            return False
        names.append(name)
        await self._write(names)
        return True

    async def remove(self, name: str) -> None:
        names = await self.list()
        remaining = [n for n in names if n != name]
        if len(remaining) == len(names):
            return
        if remaining:
            await self._write(remaining)
        else:
            await self.storage.remove_item(self.key)
