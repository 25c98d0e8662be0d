from enum import Enum
from pathlib import Path
import secrets

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain import aopenai, mealdb


ROOT = Path(__file__).parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


REMIX_THEMES = [
    "Make it vegan",
    "Make it spicy",
    "Make it a dessert",
    "Make it kid-friendly",
    "Make it fancy",
    "Make it a street food",
]


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RECIPE_REMIX_")

    env: Env = Env.local
    log_level: str = "INFO"
    html_dir: Path = ROOT / "assets" / "html"
    db_url: str = "sqlite+aiosqlite:///recipe_remix.db"
    mealdb_url: str = mealdb.BASE_URL
    openai_url: str = aopenai.BASE_URL
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
    )
    openai_model: str = aopenai.DEFAULT_MODEL
    remix_max_tokens: int = aopenai.MAX_TOKENS
    remix_temperature: float = aopenai.TEMPERATURE
    remix_themes: list[str] = Field(default_factory=lambda: list(REMIX_THEMES))
    saved_recipes_enabled: bool = True
    # None keeps httpx's own default timeout.
    http_timeout: float | None = None
    # Signs the session cookie. A random secret forgets every browser on restart.
    session_secret: str = Field(default_factory=lambda: secrets.token_hex(32))
    session_max_age: int = 60 * 60 * 24 * 365
