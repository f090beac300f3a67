"""The stages of the naming pipeline.

Each stage is a thin function over the `LLMService` or the `DomainChecker`
so the pipeline can be driven with fakes.
"""

import asyncio
import logging
from typing import Any, Iterable

from naming.domains import DomainChecker
from naming.llm_service import LLMService
from naming.models import BrandEssence, CriticizedName, ResultRecord


logger = logging.getLogger(__name__)


DEFAULT_TONE = "modern"
GENERATION_BATCH = 25
CRITIC_TOP_N = 10
AVOIDANCE_WINDOW = 10
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 14


def clean_names(text: str) -> list[str]:
    names = (line.strip() for line in text.split("\n"))
    return [n for n in names if MIN_NAME_LENGTH <= len(n) <= MAX_NAME_LENGTH]


def merge_candidates(*batches: Iterable[str]) -> list[str]:
    """Union of the batches in order of first appearance. Case sensitive."""
    return list(dict.fromkeys(n for batch in batches for n in batch))


async def synthesize_brand_essence(
    industry: str,
    keywords: str,
    tone: str | None = None,
    *,
    llm: LLMService,
) -> BrandEssence:
    essence = await llm.brand_essence(industry, keywords, tone or DEFAULT_TONE)
    logger.info("Brand essence defined: %s", essence.metaphors)
    return essence


async def generate_candidates(
    essence: BrandEssence,
    avoid: Iterable[str] = (),
    *,
    llm: LLMService,
) -> list[str]:
    recent = list(avoid)[-AVOIDANCE_WINDOW:]
    # Either provider failing cancels the other and fails the step.
    try:
        async with asyncio.TaskGroup() as tg:
            openai_task = tg.create_task(
                llm.openai_names(essence, avoid=recent, n=GENERATION_BATCH)
            )
            gemini_task = tg.create_task(
                llm.gemini_names(essence, avoid=recent, n=GENERATION_BATCH)
            )
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg
    openai_names = clean_names(openai_task.result())
    gemini_names = clean_names(gemini_task.result())
    logger.info("OpenAI generated %d names: %s", len(openai_names), openai_names)
    logger.info("Gemini generated %d names: %s", len(gemini_names), gemini_names)

    combined = merge_candidates(openai_names, gemini_names)
    logger.info("Generated %d unique candidates.", len(combined))
    return combined


def _critiqued(data: dict[str, Any]) -> list[CriticizedName]:
    items = data.get("topNames")
    if not isinstance(items, list):
        return []
    out: list[CriticizedName] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        rationale = item.get("rationale")
        out.append(
            CriticizedName(
                name=name.strip(),
                rationale=rationale if isinstance(rationale, str) else "",
            )
        )
    return out[:CRITIC_TOP_N]


async def critique_candidates(
    names: list[str],
    essence: BrandEssence,
    *,
    llm: LLMService,
) -> list[CriticizedName]:
    data = await llm.critique(names, essence, n=CRITIC_TOP_N)
    top = _critiqued(data)
    logger.info("Critic selected %d names: %s", len(top), [c.name for c in top])
    return top


async def verify_names(
    critiqued: list[CriticizedName],
    *,
    checker: DomainChecker,
) -> list[ResultRecord]:
    verdicts = await checker.check_many(c.name for c in critiqued)
    records = [ResultRecord.join(c, v) for c, v in zip(critiqued, verdicts)]
    available = sum(1 for v in verdicts if v.available is True)
    checked = sum(1 for v in verdicts if not v.unknown)
    logger.info(
        "Domain results: %d/%d available out of %d names.",
        available,
        checked,
        len(records),
    )
    return records
