"""Rule-based IV needle recommendation engine"""

from .catalog import NeedleCatalog
from .engine import RecommendationEngine, generate_recommendation
from .models import (
    AgeGroup,
    ConfidenceTier,
    PatientHistory,
    Recommendation,
    RecommendationInput,
    RecommendationResult,
    Severity,
)

__all__ = [
    "NeedleCatalog",
    "RecommendationEngine",
    "generate_recommendation",
    "AgeGroup",
    "ConfidenceTier",
    "PatientHistory",
    "Recommendation",
    "RecommendationInput",
    "RecommendationResult",
    "Severity",
]
