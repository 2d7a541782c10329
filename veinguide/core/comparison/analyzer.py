"""
VeinAnalyzer - "which vein should I use?"

Runs the recommendation engine for each candidate vein, blends the result
with site geometry into a composite score and ranks the candidates.

Composite score (0-100):
    success probability x 0.40
  + stability           x 0.20
  + depth score         x 0.15   (100 at the skin surface, 0 at 6mm or deeper)
  + diameter score      x 0.15   (saturates at 100 from 5mm)
  + puncture score      x 0.10   (site quality supplied with the measurement)
"""

import dataclasses
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..recommender.engine import RecommendationEngine
from ..recommender.models import AgeGroup, PatientHistory, Recommendation
from ..recommender.validation import InputRange, is_blank, to_enum, to_number, validate_choices
from .models import (
    InsertionAngle,
    PatientContext,
    ProcedureStep,
    SegmentAnalysis,
    VeinAnalysis,
    VeinAnalysisError,
    VeinMeasurement,
    VeinSite,
)
from .registry import VeinRegistry

logger = logging.getLogger(__name__)

PUNCTURE_RANGE = InputRange(0.0, 100.0, "Puncture score")
ANCHOR_STABILITY = 75.0

AnalysisOutcome = Union[VeinAnalysis, VeinAnalysisError]


def build_context(age_group: Any = None, patient_history: Any = None) -> Tuple[Optional[PatientContext], List[str]]:
    """PatientContext from raw strings; blanks take the defaults, unknown values are reported."""
    errors = validate_choices(age_group, patient_history)
    if errors:
        return None, errors
    default = PatientContext()
    return PatientContext(
        age_group=default.age_group if is_blank(age_group) else to_enum(AgeGroup, age_group),
        patient_history=(
            default.patient_history if is_blank(patient_history)
            else to_enum(PatientHistory, patient_history)
        ),
    ), []


# ----------------------------------------------------------------------
# Site geometry helpers
# ----------------------------------------------------------------------

def calculate_insertion_angle(depth: float, diameter: float) -> InsertionAngle:
    """Shallow veins take a flat approach, deep veins a steeper one; narrow veins go 5 degrees flatter."""
    if depth <= 1.5:
        angle = 10
    elif depth <= 2.5:
        angle = 15
    elif depth <= 4.0:
        angle = 20
    elif depth <= 6.0:
        angle = 25
    else:
        angle = 30

    if diameter < 2.0:
        angle = max(10, angle - 5)

    label = "Shallow" if angle <= 15 else "Standard" if angle <= 25 else "Steep"

    guidance = f"Insert at {angle}° angle"
    if angle <= 15:
        guidance += ", keep nearly flat for this superficial vein"
    elif angle >= 25:
        guidance += ", steeper approach needed for depth"

    return InsertionAngle(degrees=angle, label=label, guidance=guidance)


def segment_quality(stability: float) -> str:
    if stability >= 80:
        return "good"
    if stability >= 60:
        return "fair"
    return "poor"


def generate_procedure_guidance(
    vein: VeinSite, recommendation: Recommendation, context: PatientContext
) -> List[ProcedureStep]:
    """Bedside steps for cannulating this vein with the recommended needle."""
    steps: List[ProcedureStep] = []

    def add(title: str, instruction: str, duration: str) -> None:
        steps.append(ProcedureStep(len(steps) + 1, title, instruction, duration))

    add(
        "Prepare",
        f"Apply tourniquet 10-15cm proximal to the {vein.anatomical_region}. "
        f"Select {recommendation.gauge} "
        f"{recommendation.gauge_details.color_name.lower()} catheter.",
        "30s",
    )

    if context.patient_history is PatientHistory.DEHYDRATION:
        add(
            "Pre-treat",
            "Apply warm compress for 2-3 minutes to promote vasodilation. "
            "Dehydrated veins respond well to warmth.",
            "2-3 min",
        )
    elif context.patient_history is PatientHistory.CHEMOTHERAPY:
        add(
            "Pre-treat",
            "Apply warm compress gently. Inspect for signs of phlebitis or scarring. "
            "Avoid previously treated sites.",
            "2 min",
        )
    elif context.age_group is AgeGroup.PEDIATRIC:
        add(
            "Comfort",
            "Apply topical anesthetic cream if time permits. "
            "Use age-appropriate distraction technique.",
            "1-2 min",
        )

    seg = vein.hotspot_segment
    add(
        "Identify site",
        f"Target the {vein.name} at the marked hotspot. "
        f"Vein is {seg.depth:g}mm deep with {seg.diameter:g}mm diameter.",
        "15s",
    )

    if vein.avg_stability < ANCHOR_STABILITY:
        add(
            "Anchor vein",
            f"This vein has moderate stability ({round(vein.avg_stability)}/100). "
            "Apply firm distal traction with your non-dominant thumb to prevent rolling.",
            "5s",
        )

    angle = calculate_insertion_angle(seg.depth, seg.diameter)
    add(
        "Insert",
        f"{angle.guidance}. Advance until flashback is observed, then reduce angle "
        f"and advance catheter {recommendation.needle_length.inches} into the vein.",
        "5-10s",
    )

    add(
        "Secure",
        "Remove tourniquet. Flush with saline. Apply transparent dressing and secure catheter.",
        "30s",
    )
    return steps


# ----------------------------------------------------------------------
# Ranking
# ----------------------------------------------------------------------

def rank_analyses(analyses: Iterable[VeinAnalysis]) -> List[VeinAnalysis]:
    """
    Sort by composite score, best first, and number the ranks from 1.

    The sort is stable: veins with equal scores keep their input order.
    """
    ordered = sorted(analyses, key=lambda a: a.composite_score, reverse=True)
    return [dataclasses.replace(a, rank=i + 1) for i, a in enumerate(ordered)]


class VeinAnalyzer:
    """Per-vein analysis and multi-vein ranking on top of a RecommendationEngine."""

    def __init__(
        self,
        config: Dict[str, Any] = None,
        engine: Optional[RecommendationEngine] = None,
        registry: Optional[VeinRegistry] = None,
    ):
        self.config = config or {}
        self.engine = engine or RecommendationEngine()
        if registry is None:
            registry = VeinRegistry()
            registry.initialize()
        self.registry = registry

        self.weights = np.array([
            self.config.get('success_weight', 0.40),
            self.config.get('stability_weight', 0.20),
            self.config.get('depth_weight', 0.15),
            self.config.get('diameter_weight', 0.15),
            self.config.get('puncture_weight', 0.10),
        ], dtype=float)
        if np.any(self.weights < 0) or not np.isclose(self.weights.sum(), 1.0):
            raise ValueError(f"Composite weights must be non-negative and sum to 1.0, got {self.weights.tolist()}")

        self.depth_reference_mm = float(self.config.get('depth_reference_mm', 6.0))
        self.diameter_reference_mm = float(self.config.get('diameter_reference_mm', 5.0))

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def composite_score(self, recommendation: Recommendation, puncture_score: float) -> float:
        """Weighted blend of the engine's estimate and site geometry, rounded to 0.1."""
        inputs = recommendation.input_snapshot
        depth_score = max(0.0, 100.0 - (inputs.vein_depth / self.depth_reference_mm) * 100.0)
        diameter_score = min(100.0, (inputs.vein_diameter / self.diameter_reference_mm) * 100.0)

        components = np.array([
            recommendation.raw_probability,
            inputs.stability_index,
            depth_score,
            diameter_score,
            puncture_score,
        ], dtype=float)
        return round(float(np.dot(self.weights, components)), 1)

    # ------------------------------------------------------------------
    # Single vein
    # ------------------------------------------------------------------

    def analyze_measurement(
        self,
        measurement: VeinMeasurement,
        context: Optional[PatientContext] = None,
        vein: Optional[VeinSite] = None,
    ) -> AnalysisOutcome:
        """Recommendation plus composite score for one measurement bundle."""
        context = context or PatientContext()

        result = self.engine.generate(
            vein_depth=measurement.depth,
            vein_diameter=measurement.diameter,
            age_group=context.age_group,
            stability_index=measurement.stability,
            patient_history=context.patient_history,
        )
        messages = list(result.messages)

        puncture = to_number(measurement.puncture_score)
        if puncture is None or not PUNCTURE_RANGE.contains(puncture):
            messages.append(PUNCTURE_RANGE.message())

        if messages:
            return VeinAnalysisError(measurement.vein_id, tuple(messages))

        rec = result.recommendation
        inputs = rec.input_snapshot
        analysis = VeinAnalysis(
            measurement=dataclasses.replace(measurement, puncture_score=puncture),
            recommendation=rec,
            composite_score=self.composite_score(rec, puncture),
            insertion_angle=calculate_insertion_angle(inputs.vein_depth, inputs.vein_diameter),
            vein=vein,
        )
        if vein is not None:
            analysis = dataclasses.replace(
                analysis,
                procedure_steps=tuple(generate_procedure_guidance(vein, rec, context)),
                segment_analysis=tuple(self.analyze_segments(vein, context)),
            )
        return analysis

    def analyze_vein(self, vein_id: str, context: Optional[PatientContext] = None) -> AnalysisOutcome:
        """Full analysis of a reference vein at its hotspot."""
        vein = self.registry.get(vein_id)
        if vein is None:
            return VeinAnalysisError(vein_id, (f"Unknown vein: {vein_id}",))
        return self.analyze_measurement(self.registry.measurement_for(vein_id), context, vein)

    def analyze_segments(self, vein: VeinSite, context: Optional[PatientContext] = None) -> List[SegmentAnalysis]:
        """Gauge and success estimate at every measured point along the vein."""
        context = context or PatientContext()
        segments = []
        for idx, seg in enumerate(vein.segments):
            result = self.engine.generate(
                vein_depth=seg.depth,
                vein_diameter=seg.diameter,
                age_group=context.age_group,
                stability_index=seg.stability,
                patient_history=context.patient_history,
            )
            rec = result.recommendation
            segments.append(SegmentAnalysis(
                segment_index=idx,
                segment=seg,
                gauge=None if result.error else rec.gauge,
                success_probability=None if result.error else rec.success_probability,
                is_hotspot=idx == vein.hotspot.segment_index,
                quality=segment_quality(seg.stability),
            ))
        return segments

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_measurements(
        self,
        measurements: Sequence[VeinMeasurement],
        context: Optional[PatientContext] = None,
    ) -> List[VeinAnalysis]:
        """Rank externally supplied measurement bundles; invalid ones are dropped."""
        outcomes = [self.analyze_measurement(m, context) for m in measurements]
        return self._rank_outcomes(outcomes)

    def compare_veins(
        self,
        vein_ids: Optional[Sequence[str]] = None,
        context: Optional[PatientContext] = None,
    ) -> List[VeinAnalysis]:
        """Rank reference veins (all of them when vein_ids is None); unknown ids are dropped."""
        ids = self.registry.all_ids() if vein_ids is None else list(vein_ids)
        outcomes = [self.analyze_vein(vein_id, context) for vein_id in ids]
        return self._rank_outcomes(outcomes)

    def _rank_outcomes(self, outcomes: Sequence[AnalysisOutcome]) -> List[VeinAnalysis]:
        analyses = []
        for outcome in outcomes:
            if outcome.error:
                logger.warning("Skipping vein %s: %s", outcome.vein_id, "; ".join(outcome.messages))
                continue
            analyses.append(outcome)

        ranked = rank_analyses(analyses)
        if ranked:
            logger.info(
                "Ranked %d vein(s); best: %s (composite %.1f)",
                len(ranked), ranked[0].vein_id, ranked[0].composite_score,
            )
        return ranked

    # ------------------------------------------------------------------
    # AR tooltip
    # ------------------------------------------------------------------

    def quick_recommend_from_hotspot(
        self, hotspot: Dict[str, Any], context: Optional[PatientContext] = None
    ) -> Dict[str, Any]:
        """Compact payload for a tapped hotspot in the AR overlay."""
        context = context or PatientContext()
        result = self.engine.generate(
            vein_depth=hotspot.get("depth"),
            vein_diameter=hotspot.get("diameter"),
            age_group=context.age_group,
            stability_index=hotspot.get("stability"),
            patient_history=context.patient_history,
        )

        recommendation = None
        if not result.error:
            rec = result.recommendation
            inputs = rec.input_snapshot
            angle = calculate_insertion_angle(inputs.vein_depth, inputs.vein_diameter)
            recommendation = {
                "gauge": rec.gauge,
                "gaugeColor": rec.gauge_details.color,
                "gaugeColorName": rec.gauge_details.color_name,
                "needleLength": rec.needle_length.inches,
                "successProbability": rec.success_probability,
                "confidenceLevel": rec.confidence_level.level,
                "insertionAngle": angle.degrees,
                "topRisk": rec.risks[0].message if rec.risks else "No significant risks",
            }

        return {
            "veinName": hotspot.get("name"),
            "veinColor": hotspot.get("color"),
            "measurement": {
                "depth": hotspot.get("depth"),
                "diameter": hotspot.get("diameter"),
                "stability": hotspot.get("stability"),
                "confidence": hotspot.get("confidence"),
            },
            "recommendation": recommendation,
            "messages": list(result.messages),
            "punctureScore": hotspot.get("punctureScore"),
        }
