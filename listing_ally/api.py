from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import Settings
from .demo import demo_analysis
from .fetcher import ListingFetcher
from .models import (
    AnalysisResult,
    FailureReason,
    OptimizationSuggestion,
    PipelineFailure,
    ProductRecord,
    SuggestionType,
)
from .pipeline import AnalysisOrchestrator
from .recommender import OptimizationRequester
from .render import render_markdown_report

# ---------- Pydantic DTOs ----------

ContentField = Union[str, List[str]]


class AnalyzeRequest(BaseModel):
    input: str = Field(..., description="ASIN or Amazon product page URL.")


class ProductDTO(BaseModel):
    asin: str
    title: str
    brand: str
    price: Optional[str] = None
    description: str
    bullets: List[str]
    images: Optional[List[str]] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    category: Optional[str] = None
    bsr: Optional[int] = None


class SuggestionDTO(BaseModel):
    type: str
    current: str
    suggested: str
    reasoning: str
    improvements: List[str] = []


class AnalysisResponse(BaseModel):
    product: ProductDTO
    suggestions: List[SuggestionDTO]
    seo_score: int
    bsr_potential: int
    keyword_opportunities: List[str]
    report_markdown: str


class OptimizeRequest(BaseModel):
    current: ContentField = Field(..., description="Current brand voice, bullet list, or description.")
    context: str = Field(default="", description="Free-text product context for the rewrite.")


class OptimizeResponse(BaseModel):
    section: str
    suggested: ContentField


class FailureDTO(BaseModel):
    reason: str
    message: str


# ---------- Serialization helpers ----------

FAILURE_STATUS = {
    FailureReason.INVALID_INPUT: 400,
    FailureReason.EXTRACTION_FAILED: 422,
    FailureReason.FETCH_FAILED: 502,
    FailureReason.GENERATION_FAILED: 502,
}


def _serialize_product(p: ProductRecord) -> ProductDTO:
    return ProductDTO(
        asin=p.identifier,
        title=p.title,
        brand=p.brand,
        price=p.price,
        description=p.description,
        bullets=list(p.bullets),
        images=list(p.images) if p.images is not None else None,
        rating=p.rating,
        review_count=p.review_count,
        category=p.category,
        bsr=p.rank,
    )


def _serialize_suggestion(s: OptimizationSuggestion) -> SuggestionDTO:
    return SuggestionDTO(
        type=s.type.value,
        current=s.current,
        suggested=s.suggested,
        reasoning=s.reasoning,
        improvements=list(s.improvements),
    )


def _serialize_result(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        product=_serialize_product(result.product),
        suggestions=[_serialize_suggestion(s) for s in result.suggestions],
        seo_score=result.seo_score,
        bsr_potential=result.bsr_potential,
        keyword_opportunities=list(result.keyword_opportunities),
        report_markdown=render_markdown_report(result),
    )


def _raise_failure(failure: PipelineFailure) -> None:
    detail = FailureDTO(reason=failure.reason.value, message=failure.message)
    raise HTTPException(status_code=FAILURE_STATUS[failure.reason], detail=detail.model_dump())


# ---------- Dependencies ----------

@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


# One generation client per process, shared by every request.
@lru_cache
def get_requester() -> OptimizationRequester:
    return OptimizationRequester(get_settings())


@lru_cache
def get_orchestrator() -> AnalysisOrchestrator:
    settings = get_settings()
    return AnalysisOrchestrator(ListingFetcher(settings), get_requester())


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_requester.cache_info().currsize:
        await get_requester().aclose()
    get_orchestrator.cache_clear()
    get_requester.cache_clear()


# ---------- FastAPI application ----------

app = FastAPI(
    title="Listing Ally: Amazon Listing Optimization API",
    version="1.0.0",
    description="Fetches an Amazon listing and returns LLM-generated optimization suggestions.",
    lifespan=lifespan,
)


@app.post("/analyze", response_model=AnalysisResponse)
async def analyze(req: AnalyzeRequest,
                  orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)) -> AnalysisResponse:
    outcome = await orchestrator.analyze(req.input)
    if isinstance(outcome, PipelineFailure):
        _raise_failure(outcome)
    return _serialize_result(outcome)


@app.get("/demo", response_model=AnalysisResponse)
def demo() -> AnalysisResponse:
    return _serialize_result(demo_analysis())


@app.post("/optimize/{section}", response_model=OptimizeResponse)
async def optimize(section: SuggestionType,
                   req: OptimizeRequest,
                   requester: OptimizationRequester = Depends(get_requester)) -> OptimizeResponse:
    if section is SuggestionType.BULLETS:
        current = req.current if isinstance(req.current, list) else [
            line for line in req.current.splitlines() if line.strip()
        ]
        outcome = await requester.optimize_bullets(current, req.context)
    else:
        current_text = req.current if isinstance(req.current, str) else "\n".join(req.current)
        if section is SuggestionType.BRAND_VOICE:
            outcome = await requester.optimize_brand_voice(current_text, req.context)
        else:
            outcome = await requester.optimize_description(current_text, req.context)

    if isinstance(outcome, PipelineFailure):
        _raise_failure(outcome)
    return OptimizeResponse(section=section.value, suggested=outcome)
