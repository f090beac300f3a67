from enum import Enum

from pydantic_settings import BaseSettings

from naming.llm_service import ProviderConfig


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    log_level: str = "INFO"

    openai_api_key: str | None = None
    gemini_api_key: str | None = None
    openai_model: str = "gpt-4o"
    gemini_model: str = "gemini-2.5-pro"
    llm_timeout: float = 60 * 2

    dns_resolver_url: str = "https://dns.google/resolve"
    dns_timeout: float = 10

    max_attempts: int = 2
    min_available_domains: int = 5

    def openai_provider(self) -> ProviderConfig:
        return ProviderConfig(
            credential=self.openai_api_key,
            model=self.openai_model,
            timeout=self.llm_timeout,
        )

    def gemini_provider(self) -> ProviderConfig:
        return ProviderConfig(
            credential=self.gemini_api_key,
            model=self.gemini_model,
            timeout=self.llm_timeout,
        )
