from .config import Settings
from .demo import demo_analysis
from .models import (
    AnalysisResult,
    AnalysisRun,
    AnalysisState,
    FailureReason,
    OptimizationSuggestion,
    PipelineFailure,
    ProductRecord,
    SuggestionBundle,
    SuggestionType,
)
from .pipeline import AnalysisOrchestrator, analyze

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisResult",
    "AnalysisRun",
    "AnalysisState",
    "FailureReason",
    "OptimizationSuggestion",
    "PipelineFailure",
    "ProductRecord",
    "Settings",
    "SuggestionBundle",
    "SuggestionType",
    "analyze",
    "demo_analysis",
]
