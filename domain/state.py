from enum import Enum
import logging

from domain.models import Recipe
from domain.views import Notice, NoticeKind, View


logger = logging.getLogger(__name__)


class Status(Enum):
    idle = "idle"
    loading = "loading"
    rendered = "rendered"
    error = "error"


class DisplayRegion:
    """One area of the page plus the number of the latest request aimed at it.

    Only the response to the most recently issued request may change what the
    region shows.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.status = Status.idle
        self.content: View | None = None
        self._seq = 0

    @property
    def seq(self) -> int:
        return self._seq

    def begin(self, placeholder: str) -> int:
        self._seq += 1
        self.status = Status.loading
        self.content = Notice(placeholder, kind=NoticeKind.loading)
        return self._seq

    def is_latest(self, seq: int) -> bool:
        return seq == self._seq

    def commit(self, seq: int, content: View, *, status: Status) -> bool:
        if not self.is_latest(seq):
            logger.debug(
                "Dropping stale %s response %s, latest is %s", self.name, seq, self._seq
            )
            return False
        self.content = content
        self.status = status
        return True


class AppState:
    def __init__(self) -> None:
        self._current_recipe: Recipe | None = None
        self.recipe_display = DisplayRegion("recipe")
        self.remix_output = DisplayRegion("remix")

    @property
    def current_recipe(self) -> Recipe | None:
        return self._current_recipe

    def set_current_recipe(self, recipe: Recipe) -> None:
        self._current_recipe = recipe


class ClientStates:
    """One ``AppState`` per browser, keyed by the client id in its session."""

    def __init__(self) -> None:
        self._states: dict[str, AppState] = {}

    def __len__(self) -> int:
        return len(self._states)

    def get(self, client_id: str) -> AppState:
        state = self._states.get(client_id)
        if state is None:
            logger.debug("Starting state for client %s", client_id)
            state = self._states[client_id] = AppState()
        return state
