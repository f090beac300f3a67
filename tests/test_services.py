import asyncio

import pytest

from naming.exceptions import UpstreamNetworkError, UpstreamParseError
from naming.models import BrandEssence, CriticizedName, ResultRecord, sort_records
from naming.services import (
    clean_names,
    critique_candidates,
    generate_candidates,
    merge_candidates,
    synthesize_brand_essence,
    verify_names,
)
from tests.fakes import ESSENCE, FakeChecker, FakeLLM, batch, make_names, top_names


def test_clean_names_trims_and_bounds_length() -> None:
    text = "  Lumen  \n\nab\nabc\nFourteenLetter\nFifteenLetters!\n\tVela\t"
    assert clean_names(text) == ["Lumen", "abc", "FourteenLetter", "Vela"]


def test_merge_candidates_is_case_sensitive_and_ordered() -> None:
    got = merge_candidates(["Lumen", "Aura", "Lumen"], ["aura", "Lumen", "Vela"])
    assert got == ["Lumen", "Aura", "aura", "Vela"]
    assert len(got) == len(set(got))


def test_brand_essence_from_dict() -> None:
    essence = BrandEssence.from_dict(
        {
            "brandStory": " Quiet power. ",
            "coreMetaphors": ["tide", "ember", "keel", "extra"],
            "namingTerritories": ["sea", "fire", "craft"],
        }
    )
    assert essence.narrative == "Quiet power."
    assert essence.metaphors == ("tide", "ember", "keel")
    assert essence.territories == ("sea", "fire", "craft")


def test_brand_essence_accepts_short_lists() -> None:
    essence = BrandEssence.from_dict(
        {
            "brandStory": "x",
            "coreMetaphors": ["tide"],
            "namingTerritories": ["sea", " "],
        }
    )
    assert essence.metaphors == ("tide",)
    assert essence.territories == ("sea",)


@pytest.mark.parametrize(
    "data",
    (
        [],
        {"coreMetaphors": ["a"], "namingTerritories": ["b"]},
        {"brandStory": "x", "coreMetaphors": "a", "namingTerritories": ["b"]},
        {"brandStory": "x", "coreMetaphors": ["a"], "namingTerritories": []},
    ),
)
def test_brand_essence_rejects_malformed(data: object) -> None:
    with pytest.raises(UpstreamParseError):
        BrandEssence.from_dict(data)


def test_sort_records_puts_available_first() -> None:
    records = [
        ResultRecord(name=n, rationale="", domain=f"{n}.com", available=a)
        for n, a in (("Zeta", True), ("Beta", None), ("Alpha", False), ("Kilo", True))
    ]
    got = sort_records(records)
    assert [r.name for r in got] == ["Kilo", "Zeta", "Alpha", "Beta"]


@pytest.mark.asyncio
async def test_synthesize_defaults_tone() -> None:
    llm = FakeLLM()
    essence = await synthesize_brand_essence("tech", "fast payments", llm=llm)
    assert essence == ESSENCE
    assert llm.strategy_calls == [("tech", "fast payments", "modern")]


@pytest.mark.asyncio
async def test_generate_candidates_merges_both_providers() -> None:
    llm = FakeLLM(
        openai_batches=[batch(["Lumen", "Aura", "x", "Vela"])],
        gemini_batches=[batch(["Vela", "Orin", "WayTooLongForABrand"])],
    )
    got = await generate_candidates(ESSENCE, llm=llm)
    assert got == ["Lumen", "Aura", "Vela", "Orin"]


@pytest.mark.asyncio
async def test_generate_candidates_survives_an_empty_provider() -> None:
    llm = FakeLLM(openai_batches=[batch(["Lumen", "Aura"])], gemini_batches=[""])
    got = await generate_candidates(ESSENCE, llm=llm)
    assert got == ["Lumen", "Aura"]


@pytest.mark.asyncio
async def test_generate_candidates_cancels_the_other_provider_on_failure() -> None:
    llm = FakeLLM(
        openai_batches=[UpstreamNetworkError("OpenAI is down")],
        gemini_delay=0.2,
    )
    with pytest.raises(UpstreamNetworkError, match="OpenAI is down"):
        await generate_candidates(ESSENCE, llm=llm)
    await asyncio.sleep(0.4)
    assert not llm.gemini_finished


@pytest.mark.asyncio
async def test_generate_candidates_caps_avoidance_to_most_recent() -> None:
    llm = FakeLLM()
    avoid = make_names("Old", 12)
    await generate_candidates(ESSENCE, avoid, llm=llm)
    assert llm.avoid_seen == [avoid[-10:]]


@pytest.mark.asyncio
async def test_critique_candidates_skips_bad_entries() -> None:
    data = {
        "topNames": [
            {"name": "Lumen", "rationale": "Bright."},
            {"rationale": "No name."},
            "Aura",
            {"name": "  ", "rationale": "Blank."},
            {"name": "Vela"},
        ]
    }
    llm = FakeLLM(critiques=[data])
    got = await critique_candidates(["Lumen", "Vela"], ESSENCE, llm=llm)
    assert [(c.name, c.rationale) for c in got] == [("Lumen", "Bright."), ("Vela", "")]


@pytest.mark.asyncio
async def test_critique_candidates_keeps_at_most_ten() -> None:
    llm = FakeLLM(critiques=[top_names(make_names("Name", 14))])
    got = await critique_candidates(make_names("Name", 14), ESSENCE, llm=llm)
    assert len(got) == 10


@pytest.mark.asyncio
async def test_critique_candidates_without_top_names() -> None:
    llm = FakeLLM(critiques=[{"verdict": "nothing good"}])
    assert await critique_candidates(["Lumen"], ESSENCE, llm=llm) == []


@pytest.mark.asyncio
async def test_verify_names_joins_verdicts() -> None:
    critiqued = [CriticizedName("Lumen", "Bright."), CriticizedName("Aura", "Soft.")]
    got = await verify_names(critiqued, checker=FakeChecker(available=["Lumen"]))
    assert [r.to_dict() for r in got] == [
        {"name": "Lumen", "rationale": "Bright.", "domain": "lumen.com", "available": True},
        {"name": "Aura", "rationale": "Soft.", "domain": "aura.com", "available": False},
    ]
