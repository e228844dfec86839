from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class SuggestionType(str, Enum):
    BRAND_VOICE = "brand-voice"
    BULLETS = "bullets"
    DESCRIPTION = "description"


class FailureReason(str, Enum):
    INVALID_INPUT = "invalid-input"
    FETCH_FAILED = "fetch-failed"
    EXTRACTION_FAILED = "extraction-failed"
    GENERATION_FAILED = "generation-failed"


class AnalysisState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ProductRecord:
    identifier: str              # '' or 10 uppercase alphanumerics
    title: str
    brand: str
    description: str
    bullets: List[str] = field(default_factory=list)
    price: Optional[str] = None
    images: Optional[List[str]] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    category: Optional[str] = None
    rank: Optional[int] = None


@dataclass(frozen=True)
class OptimizationSuggestion:
    type: SuggestionType
    current: str
    suggested: str
    reasoning: str
    improvements: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SuggestionBundle:
    suggestions: List[OptimizationSuggestion]
    seo_score: int
    bsr_potential: int
    keyword_opportunities: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    product: ProductRecord
    bundle: SuggestionBundle

    @property
    def suggestions(self) -> List[OptimizationSuggestion]:
        return self.bundle.suggestions

    @property
    def seo_score(self) -> int:
        return self.bundle.seo_score

    @property
    def bsr_potential(self) -> int:
        return self.bundle.bsr_potential

    @property
    def keyword_opportunities(self) -> List[str]:
        return self.bundle.keyword_opportunities


@dataclass(frozen=True)
class PipelineFailure:
    reason: FailureReason
    message: str
    status_code: Optional[int] = None


@dataclass
class AnalysisRun:
    """State of one `analyze` call. Never shared between calls."""
    input: str
    state: AnalysisState = AnalysisState.IDLE
    history: List[AnalysisState] = field(default_factory=lambda: [AnalysisState.IDLE])
    outcome: Optional[Union[AnalysisResult, PipelineFailure]] = None

    def advance(self, state: AnalysisState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, AnalysisResult)


FetchOutcome = Union[ProductRecord, PipelineFailure]
GenerationOutcome = Union[SuggestionBundle, PipelineFailure]
AnalysisOutcome = Union[AnalysisResult, PipelineFailure]
