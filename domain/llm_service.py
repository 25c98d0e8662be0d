import logging
from typing import Any

import httpx
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from domain.aopenai import DEFAULT_MODEL, MAX_TOKENS, TEMPERATURE
from domain.errors import BadStatus, MalformedResponse, NetworkFailure
from domain.models import Recipe
from domain.prompts import REMIX_SYSTEM_PROMPT, RemixPrompt


logger = logging.getLogger(__name__)


def completion_text(data: Any) -> str:
    """Text of the first choice of a chat completion payload."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse(f"Unexpected completion shape: {e!r}") from e
    if not isinstance(content, str):
        raise MalformedResponse("Completion has no text content.")
    return content


class LLMService:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> None:
        self.http_client = http_client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def remix_messages(
        self, recipe: Recipe, theme: str
    ) -> list[ChatCompletionMessageParam]:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": REMIX_SYSTEM_PROMPT,
        }
        user_message: ChatCompletionUserMessageParam = {
            "role": "user",
            "content": str(RemixPrompt(recipe, theme)),
        }
        return [system_message, user_message]

    async def complete(self, messages: list[ChatCompletionMessageParam]) -> str:
        try:
            resp = await self.http_client.post(
                "chat/completions",
                json={
                    "model": self.model,
                    "messages": messages,
                    "max_tokens": self.max_tokens,
                    "temperature": self.temperature,
                },
            )
        except httpx.HTTPError as e:
            raise NetworkFailure(str(e)) from e

        if not resp.is_success:
            raise BadStatus(resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponse(f"Response is not JSON: {e}") from e

        return completion_text(data)

    async def remix_recipe(self, recipe: Recipe, theme: str) -> str:
        logger.info("Remixing %r with theme %r", recipe.name, theme)
        return await self.complete(self.remix_messages(recipe, theme))

    async def close(self) -> None:
        await self.http_client.aclose()
