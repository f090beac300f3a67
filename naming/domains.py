"""Domain availability from public DNS.

A name with no A record is treated as free. This is a heuristic, a registered
but parked domain with no A record will look available.
"""

import asyncio
import logging
import re
from typing import Iterable

import httpx

from naming.exceptions import UpstreamNetworkError, ValidationError
from naming.models import DomainVerdict


logger = logging.getLogger(__name__)


DEFAULT_RESOLVER_URL = "https://dns.google/resolve"
NXDOMAIN = 3
TIMEOUT = 10

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_domain(name: str) -> str:
    clean = _WHITESPACE_RE.sub("", name.lower())
    if not clean:
        raise ValidationError("Domain is required")
    return clean if "." in clean else f"{clean}.com"


def is_available(status: int | None, has_answer: bool) -> bool:
    return status == NXDOMAIN or not has_answer


def dns_client_factory(timeout: float = TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"Accept": "application/dns-json"},
        timeout=timeout,
    )


class DomainChecker:
    def __init__(
        self,
        *,
        resolver_url: str = DEFAULT_RESOLVER_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
    ) -> None:
        self.resolver_url = resolver_url
        self.http_client = (
            dns_client_factory(timeout) if http_client is None else http_client
        )

    async def lookup(self, name: str) -> DomainVerdict:
        """Ask the resolver for an A record. Raises on any upstream failure."""
        domain = normalize_domain(name)
        try:
            resp = await self.http_client.get(
                self.resolver_url, params={"name": domain, "type": "A"}
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamNetworkError(f"DNS lookup failed for {domain}: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamNetworkError(f"Unexpected DNS response for {domain}.")

        status = data.get("Status")
        status = status if isinstance(status, int) else None
        return DomainVerdict(
            domain=domain,
            available=is_available(status, bool(data.get("Answer"))),
            status=status,
        )

    async def check(self, name: str) -> DomainVerdict:
        """Like `lookup` but a failed lookup becomes an unknown verdict."""
        domain = normalize_domain(name)
        try:
            return await self.lookup(domain)
        except UpstreamNetworkError as e:
            logger.warning("Domain check failed: %s", e)
            return DomainVerdict(domain=domain, available=None)

    async def check_many(self, names: Iterable[str]) -> list[DomainVerdict]:
        return list(await asyncio.gather(*(self.check(n) for n in names)))

    async def close(self) -> None:
        await self.http_client.aclose()
