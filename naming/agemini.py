import asyncio
from typing import Any

import httpx

from naming.exceptions import UpstreamNetworkError


BASE_URL = "https://generativelanguage.googleapis.com/v1beta/"
DEFAULT_MODEL = "gemini-2.5-pro"
TIMEOUT = 60 * 2


def gemini_client_factory(
    token: str | None = None,
    *,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=BASE_URL,
        headers={"x-goog-api-key": token or ""},
        timeout=timeout,
    )


class GeminiClient:
    """Single-turn text generation against the Gemini REST api."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        *,
        token: str | None = None,
        aclient: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
    ) -> None:
        self.model = model
        self.aclient = (
            gemini_client_factory(token, timeout=timeout) if aclient is None else aclient
        )

    def payload(self, prompt: str) -> dict[str, Any]:
        return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

    async def generate(self, prompt: str) -> str:
        try:
            resp = await self.aclient.post(
                f"models/{self.model}:generateContent", json=self.payload(prompt)
            )
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamNetworkError(f"Gemini request failed. {e}") from e

        if not isinstance(data, dict) or "error" in data or resp.is_error:
            raise UpstreamNetworkError(f"Problem generating content. {data}")

        # A blocked or empty candidate has no parts. Treat it as no text.
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts).strip()

    async def close(self) -> None:
        await self.aclient.aclose()


async def main() -> None:
    from app.config import Config

    provider = Config().gemini_provider()
    cl = GeminiClient(
        provider.model, token=provider.credential, timeout=provider.timeout
    )

    while True:
        qu = input("Qu: ")
        if qu.lower() in ("q", "quit", "exit"):
            break
        ans = await cl.generate(qu)
        print(ans)

    await cl.close()


if __name__ == "__main__":
    from rich import print

    asyncio.run(main())
