from __future__ import annotations

import logging
from typing import Callable, Optional

from .config import Settings
from .demo import demo_analysis
from .fetcher import ListingFetcher
from .models import (
    AnalysisOutcome,
    AnalysisResult,
    AnalysisRun,
    AnalysisState,
    PipelineFailure,
)
from .recommender import OptimizationRequester

logger = logging.getLogger(__name__)

StateListener = Callable[[AnalysisState], None]

__all__ = ["AnalysisOrchestrator", "analyze", "demo_analysis"]


class AnalysisOrchestrator:
    """
    Runs fetch -> generate for one input:

        idle -> fetching -> generating -> done
                   |            |
                   +-> failed <-+

    A failed stage short-circuits; generation never runs after a fetch failure.
    The orchestrator keeps no per-run state, so concurrent calls are independent.
    """

    def __init__(self,
                 fetcher: ListingFetcher,
                 requester: OptimizationRequester,
                 on_state: Optional[StateListener] = None):
        self.fetcher = fetcher
        self.requester = requester
        self.on_state = on_state

    @classmethod
    def from_settings(cls, settings: Settings, on_state: Optional[StateListener] = None) -> "AnalysisOrchestrator":
        return cls(ListingFetcher(settings), OptimizationRequester(settings), on_state=on_state)

    def _advance(self, run: AnalysisRun, state: AnalysisState) -> None:
        logger.debug("analysis %r: %s -> %s", run.input, run.state.value, state.value)
        run.advance(state)
        if self.on_state is not None:
            self.on_state(state)

    def _fail(self, run: AnalysisRun, failure: PipelineFailure) -> AnalysisRun:
        logger.warning("analysis %r failed during %s: %s (%s)",
                       run.input, run.state.value, failure.message, failure.reason.value)
        run.outcome = failure
        self._advance(run, AnalysisState.FAILED)
        return run

    async def run(self, raw: str) -> AnalysisRun:
        run = AnalysisRun(input=raw)

        self._advance(run, AnalysisState.FETCHING)
        product = await self.fetcher.fetch(raw)
        if isinstance(product, PipelineFailure):
            return self._fail(run, product)

        self._advance(run, AnalysisState.GENERATING)
        bundle = await self.requester.request_optimizations(product)
        if isinstance(bundle, PipelineFailure):
            return self._fail(run, bundle)

        run.outcome = AnalysisResult(product=product, bundle=bundle)
        self._advance(run, AnalysisState.DONE)
        return run

    async def analyze(self, raw: str) -> AnalysisOutcome:
        run = await self.run(raw)
        return run.outcome

    async def aclose(self) -> None:
        await self.requester.aclose()


async def analyze(raw: str, settings: Optional[Settings] = None) -> AnalysisOutcome:
    """One-shot entry point for callers that don't manage their own orchestrator."""
    orchestrator = AnalysisOrchestrator.from_settings(settings or Settings.from_env())
    try:
        return await orchestrator.analyze(raw)
    finally:
        await orchestrator.aclose()
