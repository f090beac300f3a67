"""The self-correcting naming pipeline.

Strategy runs once. Then each attempt generates, critiques and verifies a
batch of names until enough domains are free or the attempts run out.

    INIT -> STRATEGY_DONE -> (GENERATE -> CRITIQUE -> VERIFY -> EVALUATE)* -> DONE | FAILED

Only domain scarcity is retried. Anything a stage raises ends the run.
"""

import asyncio
from enum import Enum
import logging
from typing import Awaitable, Callable

from naming.domains import DomainChecker
from naming.exceptions import PipelineExhaustedError, ValidationError
from naming.llm_service import LLMService
from naming.models import (
    BrandEssence,
    CriticizedName,
    ResultRecord,
    count_available,
    sort_records,
)
from naming.services import (
    critique_candidates,
    generate_candidates,
    synthesize_brand_essence,
    verify_names,
)


logger = logging.getLogger(__name__)


MAX_ATTEMPTS = 2
MIN_AVAILABLE_DOMAINS = 5
MIN_CANDIDATES = 10


class State(Enum):
    INIT = "init"
    STRATEGY_DONE = "strategy_done"
    GENERATE = "generate"
    CRITIQUE = "critique"
    VERIFY = "verify"
    EVALUATE = "evaluate"
    DONE = "done"
    FAILED = "failed"


TERMINAL = (State.DONE, State.FAILED)


class PipelineRun:
    """Everything one run knows. Lives for a single request."""

    def __init__(self, industry: str, keywords: str, tone: str | None = None) -> None:
        self.industry = industry
        self.keywords = keywords
        self.tone = tone
        self.state = State.INIT
        self.history: list[State] = [State.INIT]
        self.essence: BrandEssence | None = None
        self.attempt = 0
        self.avoid: list[str] = []
        self.candidates: list[str] = []
        self.critiqued: list[CriticizedName] = []
        self.batch: list[ResultRecord] = []
        self.records: list[ResultRecord] = []

    def __repr__(self) -> str:
        return f"<PipelineRun(state={self.state.name}, attempt={self.attempt})>"

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL


class PipelineResult:
    def __init__(
        self,
        *,
        records: list[ResultRecord],
        essence: BrandEssence,
        attempts: int,
    ) -> None:
        self.records = sort_records(records)
        self.essence = essence
        self.attempts = attempts

    @property
    def available_count(self) -> int:
        return count_available(self.records)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "names": [r.to_dict() for r in self.records],
            "brandEssence": self.essence.to_dict(),
            "availableCount": self.available_count,
        }


Handler = Callable[[PipelineRun], Awaitable[State]]


class NamingPipeline:
    def __init__(
        self,
        *,
        llm: LLMService,
        checker: DomainChecker,
        max_attempts: int = MAX_ATTEMPTS,
        min_available: int = MIN_AVAILABLE_DOMAINS,
        min_candidates: int = MIN_CANDIDATES,
    ) -> None:
        self.llm = llm
        self.checker = checker
        self.max_attempts = max_attempts
        self.min_available = min_available
        self.min_candidates = min_candidates
        self._transitions: dict[State, Handler] = {
            State.INIT: self._init,
            State.STRATEGY_DONE: self._next_attempt,
            State.GENERATE: self._generate,
            State.CRITIQUE: self._critique,
            State.VERIFY: self._verify,
            State.EVALUATE: self._evaluate,
        }

    async def step(self, run: PipelineRun) -> State:
        if run.finished:
            raise ValueError(f"Run already finished in {run.state.name}.")
        run.state = await self._transitions[run.state](run)
        run.history.append(run.state)
        return run.state

    async def run(
        self, industry: str, keywords: str, tone: str | None = None
    ) -> PipelineResult:
        run = PipelineRun(industry, keywords, tone)
        logger.info("Starting naming pipeline for %r / %r", industry, keywords)
        while not run.finished:
            await self.step(run)

        if run.state is State.FAILED or run.essence is None:
            raise PipelineExhaustedError(
                "Pipeline failed to produce any results after multiple attempts."
            )

        result = PipelineResult(
            records=run.records, essence=run.essence, attempts=run.attempt
        )
        logger.info(
            "Pipeline complete after %d attempt(s): %d/%d available.",
            result.attempts,
            result.available_count,
            len(result.records),
        )
        return result

    async def _init(self, run: PipelineRun) -> State:
        self.llm.ensure_configured()
        if not (run.industry.strip() and run.keywords.strip()):
            raise ValidationError("Industry and keywords are required")
        run.essence = await synthesize_brand_essence(
            run.industry, run.keywords, run.tone, llm=self.llm
        )
        return State.STRATEGY_DONE

    async def _next_attempt(self, run: PipelineRun) -> State:
        if run.attempt >= self.max_attempts:
            if run.records:
                logger.info("Max attempts reached. Returning the last batch.")
                return State.DONE
            return State.FAILED
        run.attempt += 1
        run.candidates, run.critiqued, run.batch = [], [], []
        logger.info("Attempt #%d", run.attempt)
        return State.GENERATE

    async def _generate(self, run: PipelineRun) -> State:
        assert run.essence is not None
        run.candidates = await generate_candidates(
            run.essence, run.avoid, llm=self.llm
        )
        if len(run.candidates) < self.min_candidates:
            logger.info(
                "Only %d candidates, abandoning attempt #%d.",
                len(run.candidates),
                run.attempt,
            )
            return await self._next_attempt(run)
        return State.CRITIQUE

    async def _critique(self, run: PipelineRun) -> State:
        assert run.essence is not None
        run.critiqued = await critique_candidates(
            run.candidates, run.essence, llm=self.llm
        )
        if not run.critiqued:
            logger.info("Critic kept nothing, abandoning attempt #%d.", run.attempt)
            return await self._next_attempt(run)
        return State.VERIFY

    async def _verify(self, run: PipelineRun) -> State:
        run.batch = await verify_names(run.critiqued, checker=self.checker)
        return State.EVALUATE

    async def _evaluate(self, run: PipelineRun) -> State:
        run.records = run.batch
        available = count_available(run.batch)
        if available >= self.min_available:
            logger.info("Found %d available domains.", available)
            return State.DONE

        logger.info(
            "Batch rejected (%d/%d available).", available, self.min_available
        )
        run.avoid.extend(c.name for c in run.critiqued)
        return await self._next_attempt(run)


async def main() -> None:
    from rich import print

    from app.config import Config

    cfg = Config()
    llm = LLMService(
        openai_config=cfg.openai_provider(),
        gemini_config=cfg.gemini_provider(),
    )
    checker = DomainChecker(resolver_url=cfg.dns_resolver_url, timeout=cfg.dns_timeout)
    pipeline = NamingPipeline(
        llm=llm,
        checker=checker,
        max_attempts=cfg.max_attempts,
        min_available=cfg.min_available_domains,
    )

    industry = input("Industry: ")
    keywords = input("Keywords: ")
    tone = input("Tone: ") or None
    try:
        result = await pipeline.run(industry, keywords, tone)
        print(result.to_dict())
    finally:
        await llm.close()
        await checker.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
