from jinja2 import Environment
from markupsafe import Markup

from domain.views import Notice, RecipeCard, RemixCard, View


class RecipeDetail:
    def __init__(
        self,
        card: RecipeCard,
        *,
        environment: Environment,
        template_name: str = "recipe-detail.html",
    ) -> None:
        self.card = card
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.card.title

    def render(self) -> str:
        return self.env.get_template(self.name).render(recipe=self.card)


class RemixDetail:
    def __init__(
        self,
        card: RemixCard,
        *,
        environment: Environment,
        template_name: str = "remix-detail.html",
    ) -> None:
        self.card = card
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.card.title

    @property
    def content(self) -> Markup:
        # Each line is escaped; only the breaks are markup.
        return Markup("<br>").join(self.card.lines)

    def render(self) -> str:
        return self.env.get_template(self.name).render(remix=self)


def render_notice(notice: Notice, environment: Environment) -> str:
    return environment.get_template("notice.html").render(notice=notice)


def render_view(view: View | None, environment: Environment) -> str:
    match view:
        case RecipeCard():
            return RecipeDetail(view, environment=environment).render()
        case RemixCard():
            return RemixDetail(view, environment=environment).render()
        case Notice():
            return render_notice(view, environment)
        case None:
            return ""
