from typing import Any, Iterable

import openai

from naming.agemini import GeminiClient
from naming.aopenai import openai_client_factory, parse_json_object, quick_chat
from naming.exceptions import ConfigurationError
from naming.models import BrandEssence
from naming.prompts import creator_prompt, critic_prompt, strategist_prompt


class ProviderConfig:
    def __init__(
        self,
        *,
        credential: str | None,
        model: str,
        timeout: float = 60 * 2,
    ) -> None:
        self.credential = credential
        self.model = model
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.credential)

    def __repr__(self) -> str:
        return f"<ProviderConfig(model={self.model}, configured={self.configured})>"


class LLMService:
    """Both text generation providers behind one handle.

    Clients are built on first use so a service without credentials can still
    be constructed. `ensure_configured` is the request-time check.
    """

    def __init__(
        self,
        *,
        openai_config: ProviderConfig,
        gemini_config: ProviderConfig,
        openai_client: openai.AsyncClient | None = None,
        gemini_client: GeminiClient | None = None,
    ) -> None:
        self.openai_config = openai_config
        self.gemini_config = gemini_config
        self._openai_client = openai_client
        self._gemini_client = gemini_client

    def ensure_configured(self) -> None:
        if not (self.openai_config.configured and self.gemini_config.configured):
            raise ConfigurationError("API keys for OpenAI and Gemini are required.")

    @property
    def openai_client(self) -> openai.AsyncClient:
        if self._openai_client is None:
            self._openai_client = openai_client_factory(
                self.openai_config.credential, timeout=self.openai_config.timeout
            )
        return self._openai_client

    @property
    def gemini_client(self) -> GeminiClient:
        if self._gemini_client is None:
            self._gemini_client = GeminiClient(
                self.gemini_config.model,
                token=self.gemini_config.credential,
                timeout=self.gemini_config.timeout,
            )
        return self._gemini_client

    async def _openai(self, msg: str, **kwargs: Any) -> str:
        return await quick_chat(
            msg,
            openai_client=self.openai_client,
            model=self.openai_config.model,
            **kwargs,
        )

    async def brand_essence(
        self, industry: str, keywords: str, tone: str
    ) -> BrandEssence:
        ans = await self._openai(
            strategist_prompt(industry, keywords, tone), json_mode=True
        )
        return BrandEssence.from_dict(parse_json_object(ans))

    async def openai_names(
        self, essence: BrandEssence, *, avoid: Iterable[str] = (), n: int = 25
    ) -> str:
        prompt = creator_prompt(essence, avoid=avoid, n=n)
        return await self._openai(prompt, temperature=1.3, top_p=0.9)

    async def gemini_names(
        self, essence: BrandEssence, *, avoid: Iterable[str] = (), n: int = 25
    ) -> str:
        prompt = creator_prompt(essence, avoid=avoid, n=n)
        return await self.gemini_client.generate(prompt)

    async def critique(
        self, names: list[str], essence: BrandEssence, *, n: int = 10
    ) -> dict[str, Any]:
        ans = await self._openai(critic_prompt(names, essence, n=n), json_mode=True)
        return parse_json_object(ans)

    async def close(self) -> None:
        if self._openai_client is not None:
            await self._openai_client.close()
        if self._gemini_client is not None:
            await self._gemini_client.close()
