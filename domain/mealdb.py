import logging
from typing import Any

import httpx

from domain.errors import EmptyResult, MalformedResponse, NetworkFailure
from domain.models import Recipe


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"


logger = logging.getLogger(__name__)


def mealdb_client_factory(
    base_url: str = BASE_URL,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    if timeout is None:
        return httpx.AsyncClient(base_url=base_url)
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def meals_from(data: Any) -> list[Recipe]:
    """Recipes from a ``{"meals": [...] | null}`` payload. ``null`` reads as none."""
    if not isinstance(data, dict) or "meals" not in data:
        raise MalformedResponse("Response has no 'meals' key.")
    meals = data["meals"]
    if meals is None:
        return []
    if not isinstance(meals, list):
        raise MalformedResponse(f"Expected a list of meals, got {type(meals).__name__}")
    return [Recipe.from_meal(m) for m in meals]


class MealDBClient:
    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self.http_client = mealdb_client_factory() if http_client is None else http_client

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            resp = await self.http_client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise NetworkFailure(str(e)) from e
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponse(f"Response is not JSON: {e}") from e

    async def random(self) -> Recipe:
        meals = meals_from(await self._get("random.php"))
        if not meals:
            raise EmptyResult("No random recipe returned.")
        return meals[0]

    async def search(self, name: str) -> list[Recipe]:
        meals = meals_from(await self._get("search.php", params={"s": name}))
        logger.debug("Search %r matched %d recipes", name, len(meals))
        return meals

    async def close(self) -> None:
        await self.http_client.aclose()
