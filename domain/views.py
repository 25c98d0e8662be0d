"""Display view-models.

Plain data handed to the rendering layer. Each interactive element names the
action it triggers so the templates never have to decide what a button does.
"""

from dataclasses import dataclass, field
from enum import Enum
import re


LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    return LINE_BREAK.split(text)


class ActionName(Enum):
    save = "save"
    view = "view"
    delete = "delete"


@dataclass(frozen=True)
class Action:
    name: ActionName
    target: str


class NoticeKind(Enum):
    info = "info"
    loading = "loading"
    error = "error"
    alert = "alert"


@dataclass(frozen=True)
class Notice:
    message: str
    kind: NoticeKind = NoticeKind.info
    detail: str | None = None


@dataclass(frozen=True)
class RecipeCard:
    title: str
    image_url: str
    ingredients: list[str]
    instruction_lines: list[str]
    actions: list[Action] = field(default_factory=list)

    @property
    def image_alt(self) -> str:
        return self.title


@dataclass(frozen=True)
class RemixCard:
    theme: str
    text: str

    @property
    def title(self) -> str:
        return f"🎨 Your Remixed Recipe: {self.theme}"

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)


@dataclass(frozen=True)
class SavedRow:
    name: str
    actions: list[Action]


@dataclass(frozen=True)
class SavedList:
    rows: list[SavedRow]

    @property
    def visible(self) -> bool:
        return bool(self.rows)

    @property
    def names(self) -> list[str]:
        return [row.name for row in self.rows]


type View = RecipeCard | RemixCard | Notice
