"""Data models for multi-vein comparison."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..recommender.models import AgeGroup, PatientHistory, Recommendation

RANK_LABELS = ("RECOMMENDED", "ALTERNATIVE")
BACKUP_LABEL = "BACKUP"


@dataclass(frozen=True)
class VeinSegment:
    """One measured point along a vein path (x, y are relative 0-1 image coordinates)."""
    x: float
    y: float
    depth: float
    diameter: float
    stability: float
    confidence: float


@dataclass(frozen=True)
class Hotspot:
    """Best puncture site on a vein."""
    x: float
    y: float
    segment_index: int
    puncture_score: float  # 0-100
    reason: str


@dataclass(frozen=True)
class VeinSite:
    """A reference vein: anatomy, measured segments and its best puncture site."""
    id: str
    name: str
    anatomical_region: str
    clinical_notes: str
    color: str
    segments: Tuple[VeinSegment, ...]
    hotspot: Hotspot
    access_difficulty: str   # Easy / Moderate / Difficult
    avg_stability: float     # device-reported average over the scan, not the segment mean

    @property
    def hotspot_segment(self) -> VeinSegment:
        return self.segments[self.hotspot.segment_index]


@dataclass(frozen=True)
class PatientContext:
    age_group: AgeGroup = AgeGroup.ADULT
    patient_history: PatientHistory = PatientHistory.NONE


@dataclass(frozen=True)
class VeinMeasurement:
    """
    Measurement bundle for one candidate vein, from live sensing or fixtures.

    Values are kept raw so they pass through the engine's validation.
    """
    vein_id: str
    depth: Any
    diameter: Any
    stability: Any = None
    puncture_score: Any = 0.0
    name: str = ""
    anatomical_region: str = ""


@dataclass(frozen=True)
class InsertionAngle:
    degrees: int
    label: str  # Shallow / Standard / Steep
    guidance: str

    def to_dict(self) -> Dict[str, Any]:
        return {"degrees": self.degrees, "label": self.label, "guidance": self.guidance}


@dataclass(frozen=True)
class ProcedureStep:
    step: int
    title: str
    instruction: str
    duration: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "title": self.title,
            "instruction": self.instruction,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class SegmentAnalysis:
    segment_index: int
    segment: VeinSegment
    gauge: Optional[str]
    success_probability: Optional[int]
    is_hotspot: bool
    quality: str  # good / fair / poor

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segmentIndex": self.segment_index,
            "x": self.segment.x,
            "y": self.segment.y,
            "depth": self.segment.depth,
            "diameter": self.segment.diameter,
            "stability": self.segment.stability,
            "confidence": self.segment.confidence,
            "gauge": self.gauge,
            "successProbability": self.success_probability,
            "isHotspot": self.is_hotspot,
            "quality": self.quality,
        }


@dataclass(frozen=True)
class VeinAnalysis:
    """A recommendation for one vein plus its site metadata and ranking."""
    measurement: VeinMeasurement
    recommendation: Recommendation
    composite_score: float
    insertion_angle: InsertionAngle
    rank: int = 0
    vein: Optional[VeinSite] = None
    procedure_steps: Tuple[ProcedureStep, ...] = field(default_factory=tuple)
    segment_analysis: Tuple[SegmentAnalysis, ...] = field(default_factory=tuple)

    @property
    def vein_id(self) -> str:
        return self.measurement.vein_id

    @property
    def error(self) -> bool:
        return False

    @property
    def rank_label(self) -> str:
        if 1 <= self.rank <= len(RANK_LABELS):
            return RANK_LABELS[self.rank - 1]
        return BACKUP_LABEL

    @property
    def is_best_choice(self) -> bool:
        return self.rank == 1

    def to_dict(self) -> Dict[str, Any]:
        m = self.measurement
        inputs = self.recommendation.input_snapshot
        data = {
            "error": False,
            "vein": {
                "id": m.vein_id,
                "name": m.name,
                "anatomicalRegion": m.anatomical_region,
            },
            "hotspot": {
                "depth": inputs.vein_depth,
                "diameter": inputs.vein_diameter,
                "stability": inputs.stability_index,
                "punctureScore": m.puncture_score,
                "insertionAngle": self.insertion_angle.to_dict(),
            },
            "recommendation": self.recommendation.to_dict(),
            "compositeScore": self.composite_score,
            "procedureSteps": [s.to_dict() for s in self.procedure_steps],
            "segmentAnalysis": [s.to_dict() for s in self.segment_analysis],
        }
        if self.vein is not None:
            data["vein"].update(
                clinicalNotes=self.vein.clinical_notes,
                accessDifficulty=self.vein.access_difficulty,
            )
            data["hotspot"].update(
                x=self.vein.hotspot.x,
                y=self.vein.hotspot.y,
                reason=self.vein.hotspot.reason,
                confidence=self.vein.hotspot_segment.confidence,
            )
        if self.rank:
            data.update(rank=self.rank, rankLabel=self.rank_label, isBestChoice=self.is_best_choice)
        return data


@dataclass(frozen=True)
class VeinAnalysisError:
    """Placeholder for a vein that could not be analyzed; filtered out of rankings."""
    vein_id: str
    messages: Tuple[str, ...]
    error: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"error": True, "veinId": self.vein_id, "messages": list(self.messages)}
