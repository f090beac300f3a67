from typing import Any, Self

from naming.exceptions import UpstreamParseError


ESSENCE_LIST_SIZE = 3


def _text_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list):
        raise UpstreamParseError(f"Brand essence is missing a '{key}' list.")
    items = [str(v).strip() for v in value if str(v).strip()]
    if not items:
        raise UpstreamParseError(f"Brand essence has an empty '{key}' list.")
    # Shorter lists are accepted, longer ones cut to size.
    return tuple(items[:ESSENCE_LIST_SIZE])


class BrandEssence:
    """Creative brief shared by the generation and critique stages."""

    __slots__ = ("_narrative", "_metaphors", "_territories")

    def __init__(
        self,
        *,
        narrative: str,
        metaphors: tuple[str, ...],
        territories: tuple[str, ...],
    ) -> None:
        self._narrative = narrative
        self._metaphors = tuple(metaphors)
        self._territories = tuple(territories)

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        if not isinstance(data, dict):
            raise UpstreamParseError("Brand essence is not a JSON object.")
        narrative = data.get("brandStory")
        if not isinstance(narrative, str) or not narrative.strip():
            raise UpstreamParseError("Brand essence is missing 'brandStory'.")
        return cls(
            narrative=narrative.strip(),
            metaphors=_text_list(data, "coreMetaphors"),
            territories=_text_list(data, "namingTerritories"),
        )

    @property
    def narrative(self) -> str:
        return self._narrative

    @property
    def metaphors(self) -> tuple[str, ...]:
        return self._metaphors

    @property
    def territories(self) -> tuple[str, ...]:
        return self._territories

    def __repr__(self) -> str:
        return f"<BrandEssence(metaphors={self.metaphors})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BrandEssence):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return {
            "brandStory": self.narrative,
            "coreMetaphors": list(self.metaphors),
            "namingTerritories": list(self.territories),
        }


class CriticizedName:
    def __init__(self, name: str, rationale: str = "") -> None:
        self.name = name
        self.rationale = rationale

    def __repr__(self) -> str:
        return f"<CriticizedName(name={self.name})>"


class DomainVerdict:
    """Availability of a single domain.

    `available` is `None` when the resolver could not be asked, which counts
    as neither available nor taken.
    """

    def __init__(
        self,
        domain: str,
        available: bool | None,
        status: int | None = None,
    ) -> None:
        self.domain = domain
        self.available = available
        self.status = status

    def __repr__(self) -> str:
        return f"<DomainVerdict(domain={self.domain}, available={self.available})>"

    @property
    def unknown(self) -> bool:
        return self.available is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "available": self.available,
            "status": self.status,
        }


class ResultRecord:
    def __init__(
        self,
        *,
        name: str,
        rationale: str,
        domain: str,
        available: bool | None,
    ) -> None:
        self.name = name
        self.rationale = rationale
        self.domain = domain
        self.available = available

    @classmethod
    def join(cls, critiqued: CriticizedName, verdict: DomainVerdict) -> Self:
        return cls(
            name=critiqued.name,
            rationale=critiqued.rationale,
            domain=verdict.domain,
            available=verdict.available,
        )

    def __repr__(self) -> str:
        return f"<ResultRecord(name={self.name}, available={self.available})>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "rationale": self.rationale,
            "domain": self.domain,
            "available": self.available,
        }


def sort_records(records: list[ResultRecord]) -> list[ResultRecord]:
    """Available domains first, then by name."""
    return sorted(records, key=lambda r: (r.available is not True, r.name))


def count_available(records: list[ResultRecord]) -> int:
    return sum(1 for r in records if r.available is True)
