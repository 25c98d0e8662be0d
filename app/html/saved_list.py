from jinja2 import Environment

from domain.views import ActionName, SavedList


class SavedListDetail:
    def __init__(
        self,
        saved: SavedList,
        *,
        environment: Environment,
        template_name: str = "saved-list.html",
    ) -> None:
        self.saved = saved
        self.env = environment
        self.name = template_name

    @property
    def hidden(self) -> bool:
        return not self.saved.visible

    def render(self) -> str:
        return self.env.get_template(self.name).render(
            saved=self.saved, hidden=self.hidden, actions=ActionName
        )
