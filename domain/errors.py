class RecipeRemixError(Exception):
    """Base for failures that end up as a message on the page."""


class NetworkFailure(RecipeRemixError):
    pass


class EmptyResult(RecipeRemixError):
    pass


class MalformedResponse(RecipeRemixError):
    pass


class BadStatus(RecipeRemixError):
    def __init__(self, status_code: int, service: str = "OpenAI API") -> None:
        self.status_code = status_code
        self.service = service
        super().__init__(f"{service} error: {status_code}")


class PreconditionUnmet(RecipeRemixError):
    pass
