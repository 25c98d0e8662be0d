import httpx


BASE_URL = "https://api.openai.com/v1/"
DEFAULT_MODEL = "gpt-4o"
MAX_TOKENS = 400
TEMPERATURE = 0.8


def openai_client_factory(
    token: str,
    *,
    base_url: str = BASE_URL,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    if timeout is None:
        return httpx.AsyncClient(base_url=base_url, headers=headers)
    return httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)
