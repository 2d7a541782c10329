"""
Recommendation Engine - maps vein geometry and patient context to a needle choice

Pipeline (all deterministic, no I/O):
  1. Validate and coerce inputs
  2. Baseline gauge from vein diameter
  3. One-step adjustments for age group, then patient history
  4. Needle length from vein depth
  5. First-attempt success probability and confidence tier
  6. Risks, alternatives and a reasoning trace
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .catalog import NeedleCatalog
from .models import (
    AgeGroup,
    AlternativeGauge,
    ConfidenceLevel,
    ConfidenceTier,
    GaugeSelection,
    NeedleLength,
    PatientHistory,
    Recommendation,
    RecommendationInput,
    RecommendationResult,
)
from .reasoning import build_reasoning
from .risk import assess_risks
from .validation import parse_inputs

logger = logging.getLogger(__name__)


# (maximum depth in mm, length), evaluated top-down
NEEDLE_LENGTHS = (
    (2.0, NeedleLength(19, "0.75 inch", "Short")),
    (4.0, NeedleLength(25, "1.00 inch", "Standard")),
    (6.0, NeedleLength(32, "1.25 inch", "Long")),
)
EXTENDED_LENGTH = NeedleLength(38, "1.50 inch", "Extended")

# (minimum vein-to-needle ratio, score adjustment)
RATIO_ADJUSTMENTS = ((3.0, 8.0), (2.0, 4.0), (1.5, 0.0))
NARROW_RATIO_PENALTY = -10.0

# (maximum depth in mm, score adjustment)
DEPTH_ADJUSTMENTS = ((2.0, 5.0), (4.0, 0.0), (6.0, -5.0))
DEEP_VEIN_PENALTY = -12.0

STABILITY_PIVOT = 50.0
STABILITY_FACTOR = 0.15

AGE_PENALTIES = {
    AgeGroup.PEDIATRIC: -8.0,
    AgeGroup.ADULT: 0.0,
    AgeGroup.GERIATRIC: -6.0,
}

HISTORY_PENALTIES = {
    PatientHistory.NONE: 0.0,
    PatientHistory.DIABETES: -5.0,
    PatientHistory.CHEMOTHERAPY: -12.0,
    PatientHistory.OBESITY: -7.0,
    PatientHistory.DEHYDRATION: -10.0,
}

# Patient factors that call for one gauge smaller than the vein alone suggests
CONSERVATIVE_AGE_GROUPS = frozenset({AgeGroup.PEDIATRIC, AgeGroup.GERIATRIC})
CONSERVATIVE_HISTORIES = frozenset({PatientHistory.CHEMOTHERAPY, PatientHistory.DEHYDRATION})

CONFIDENCE_LEVELS = (
    (85, ConfidenceLevel(ConfidenceTier.HIGH, "#22c55e", "rgba(34,197,94,0.15)")),
    (65, ConfidenceLevel(ConfidenceTier.MODERATE, "#eab308", "rgba(234,179,8,0.15)")),
)
LOW_CONFIDENCE = ConfidenceLevel(ConfidenceTier.LOW, "#ef4444", "rgba(239,68,68,0.15)")

LARGER_REASON = "Larger: use if higher flow rate needed"
SMALLER_REASON = "Smaller: use if vein is more fragile than expected"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (round() would go to even)."""
    return int(math.floor(value + 0.5))


# ----------------------------------------------------------------------
# Gauge selection
# ----------------------------------------------------------------------

def select_base_gauge(diameter: float, catalog: NeedleCatalog) -> str:
    for min_diameter, gauge in catalog.diameter_thresholds:
        if diameter >= min_diameter:
            return gauge
    return catalog.smallest


def adjust_for_age(gauge: str, age_group: AgeGroup, catalog: NeedleCatalog) -> str:
    if age_group in CONSERVATIVE_AGE_GROUPS:
        return catalog.step_smaller(gauge)
    return gauge


def adjust_for_history(gauge: str, history: PatientHistory, catalog: NeedleCatalog) -> str:
    if history in CONSERVATIVE_HISTORIES:
        return catalog.step_smaller(gauge)
    return gauge


def select_gauge(inputs: RecommendationInput, catalog: NeedleCatalog) -> GaugeSelection:
    """Run the diameter baseline and both adjustment stages, keeping each intermediate gauge."""
    base = select_base_gauge(inputs.vein_diameter, catalog)
    after_age = adjust_for_age(base, inputs.age_group, catalog)
    final = adjust_for_history(after_age, inputs.patient_history, catalog)
    return GaugeSelection(base=base, after_age=after_age, final=final)


def select_needle_length(depth: float) -> NeedleLength:
    for max_depth, length in NEEDLE_LENGTHS:
        if depth <= max_depth:
            return length
    return EXTENDED_LENGTH


# ----------------------------------------------------------------------
# Scoring
# ----------------------------------------------------------------------

def ratio_adjustment(ratio: float) -> float:
    for min_ratio, adjustment in RATIO_ADJUSTMENTS:
        if ratio >= min_ratio:
            return adjustment
    return NARROW_RATIO_PENALTY


def depth_adjustment(depth: float) -> float:
    for max_depth, adjustment in DEPTH_ADJUSTMENTS:
        if depth <= max_depth:
            return adjustment
    return DEEP_VEIN_PENALTY


def calculate_success_probability(
    inputs: RecommendationInput,
    needle_od_mm: float,
    base_score: float = 85.0,
    min_probability: float = 35.0,
    max_probability: float = 99.0,
) -> float:
    """Clamped, unrounded first-attempt success estimate in percent."""
    score = base_score
    score += ratio_adjustment(inputs.vein_diameter / needle_od_mm)
    score += depth_adjustment(inputs.vein_depth)
    score += (inputs.stability_index - STABILITY_PIVOT) * STABILITY_FACTOR
    score += AGE_PENALTIES[inputs.age_group]
    score += HISTORY_PENALTIES[inputs.patient_history]
    return max(min_probability, min(max_probability, score))


def get_confidence_level(probability: int) -> ConfidenceLevel:
    for min_probability, level in CONFIDENCE_LEVELS:
        if probability >= min_probability:
            return level
    return LOW_CONFIDENCE


def get_alternatives(gauge: str, catalog: NeedleCatalog) -> List[AlternativeGauge]:
    alternatives = []
    larger = catalog.larger_neighbor(gauge)
    if larger is not None:
        alternatives.append(AlternativeGauge(larger, LARGER_REASON, catalog.get(larger)))
    smaller = catalog.smaller_neighbor(gauge)
    if smaller is not None:
        alternatives.append(AlternativeGauge(smaller, SMALLER_REASON, catalog.get(smaller)))
    return alternatives


# ----------------------------------------------------------------------
# Engine
# ----------------------------------------------------------------------

class RecommendationEngine:
    """
    Stateless needle recommender.

    Holds only read-only configuration and a needle catalog, so one instance
    can serve concurrent callers.
    """

    def __init__(self, config: Dict[str, Any] = None, catalog: Optional[NeedleCatalog] = None):
        self.config = config or {}
        self.catalog = catalog or NeedleCatalog.default()

        self.base_score = float(self.config.get('base_score', 85.0))
        self.min_probability = float(self.config.get('min_probability', 35))
        self.max_probability = float(self.config.get('max_probability', 99))

    def generate(
        self,
        vein_depth: Any,
        vein_diameter: Any,
        age_group: Any = None,
        stability_index: Any = None,
        patient_history: Any = None,
    ) -> RecommendationResult:
        """
        Produce a recommendation from raw measurement values.

        Args:
            vein_depth: mm below the skin surface (0.5-15)
            vein_diameter: mm (0.3-8)
            age_group: "pediatric" | "adult" | "geriatric" (default adult)
            stability_index: 0-100 (default 75)
            patient_history: "none" | "diabetes" | "chemotherapy" | "obesity" | "dehydration"

        Returns:
            RecommendationResult: error=True with messages when inputs are invalid
        """
        inputs, errors = parse_inputs(
            vein_depth, vein_diameter, age_group, stability_index, patient_history
        )
        if errors:
            logger.info("Recommendation rejected: %d validation error(s)", len(errors))
            return RecommendationResult.failure(errors)
        return RecommendationResult.success(self.recommend(inputs))

    def recommend(self, inputs: RecommendationInput) -> Recommendation:
        """Recommendation for inputs that are already validated and typed."""
        selection = select_gauge(inputs, self.catalog)
        gauge_details = self.catalog.get(selection.final)
        needle_length = select_needle_length(inputs.vein_depth)

        raw_probability = calculate_success_probability(
            inputs,
            gauge_details.outer_diameter_mm,
            base_score=self.base_score,
            min_probability=self.min_probability,
            max_probability=self.max_probability,
        )
        success_probability = round_half_up(raw_probability)

        logger.debug(
            "Gauge %s -> %s -> %s, length %s, probability %.2f",
            selection.base, selection.after_age, selection.final,
            needle_length.label, raw_probability,
        )

        return Recommendation(
            gauge=selection.final,
            gauge_details=gauge_details,
            needle_length=needle_length,
            success_probability=success_probability,
            raw_probability=raw_probability,
            confidence_level=get_confidence_level(success_probability),
            risks=tuple(assess_risks(inputs, gauge_details.outer_diameter_mm)),
            reasoning=tuple(build_reasoning(inputs, selection, needle_length, success_probability)),
            alternative_gauges=tuple(get_alternatives(selection.final, self.catalog)),
            input_snapshot=inputs,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


_default_engine: Optional[RecommendationEngine] = None


def generate_recommendation(
    vein_depth: Any,
    vein_diameter: Any,
    age_group: Any = None,
    stability_index: Any = None,
    patient_history: Any = None,
) -> RecommendationResult:
    """Module-level shortcut using the default catalog and configuration."""
    global _default_engine
    if _default_engine is None:
        from ..config import config
        _default_engine = RecommendationEngine(config.recommender_config)
    return _default_engine.generate(
        vein_depth, vein_diameter, age_group, stability_index, patient_history
    )
