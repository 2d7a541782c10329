"""Multi-vein comparison and ranking"""

from .analyzer import VeinAnalyzer, build_context, calculate_insertion_angle, rank_analyses
from .models import PatientContext, VeinAnalysis, VeinAnalysisError, VeinMeasurement
from .registry import VeinRegistry

__all__ = [
    "VeinAnalyzer",
    "build_context",
    "calculate_insertion_angle",
    "rank_analyses",
    "PatientContext",
    "VeinAnalysis",
    "VeinAnalysisError",
    "VeinMeasurement",
    "VeinRegistry",
]
