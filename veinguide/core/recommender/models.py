"""Data models for needle recommendation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class AgeGroup(Enum):
    PEDIATRIC = "pediatric"
    ADULT = "adult"
    GERIATRIC = "geriatric"


class PatientHistory(Enum):
    NONE = "none"
    DIABETES = "diabetes"
    CHEMOTHERAPY = "chemotherapy"
    OBESITY = "obesity"
    DEHYDRATION = "dehydration"


class Severity(Enum):
    """Risk severity levels, most urgent first"""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"

    @property
    def label(self) -> str:
        return SEVERITY_LABELS[self]

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


SEVERITY_LABELS = {
    Severity.CRITICAL: "CRITICAL",
    Severity.WARNING: "WARNING",
    Severity.INFO: "INFO",
    Severity.SUCCESS: "OK",
}


class ConfidenceTier(Enum):
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


@dataclass(frozen=True)
class NeedleSpec:
    """One row of the needle reference table."""
    label: str  # "16G" .. "24G"
    gauge: int
    outer_diameter_mm: float
    typical_use: str
    color: str
    color_name: str
    flow_rate: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gauge": self.gauge,
            "outerDiameterMm": self.outer_diameter_mm,
            "typicalUse": self.typical_use,
            "color": self.color,
            "colorName": self.color_name,
            "flowRate": self.flow_rate,
        }


@dataclass(frozen=True)
class GaugeSelection:
    """Gauge after each selection stage: diameter baseline, age step, history step."""
    base: str
    after_age: str
    final: str


@dataclass(frozen=True)
class NeedleLength:
    mm: int
    inches: str
    label: str  # Short / Standard / Long / Extended

    def to_dict(self) -> Dict[str, Any]:
        return {"mm": self.mm, "inches": self.inches, "label": self.label}


@dataclass(frozen=True)
class ConfidenceLevel:
    tier: ConfidenceTier
    color: str
    bg_color: str

    @property
    def level(self) -> str:
        return self.tier.value

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "color": self.color, "bgColor": self.bg_color}


@dataclass(frozen=True)
class Risk:
    severity: Severity
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"severity": self.severity.value, "message": self.message}


@dataclass(frozen=True)
class AlternativeGauge:
    gauge: str
    reason: str
    spec: NeedleSpec

    def to_dict(self) -> Dict[str, Any]:
        data = self.spec.to_dict()
        data["gaugeNumber"] = data.pop("gauge")
        data.update(gauge=self.gauge, reason=self.reason)
        return data


@dataclass(frozen=True)
class RecommendationInput:
    """
    Validated, numeric inputs for a single recommendation.

    Defaults for the optional fields are part of the contract: an omitted
    age group is treated as adult, an omitted stability index as 75 and an
    omitted history as none.
    """
    vein_depth: float
    vein_diameter: float
    age_group: AgeGroup = AgeGroup.ADULT
    stability_index: float = 75.0
    patient_history: PatientHistory = PatientHistory.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "veinDepth": self.vein_depth,
            "veinDiameter": self.vein_diameter,
            "ageGroup": self.age_group.value,
            "stabilityIndex": self.stability_index,
            "patientHistory": self.patient_history.value,
        }


@dataclass(frozen=True)
class Recommendation:
    """Final needle recommendation for one vein measurement"""
    gauge: str
    gauge_details: NeedleSpec
    needle_length: NeedleLength
    success_probability: int      # rounded, clamped to [35, 99]
    raw_probability: float        # clamped, before rounding
    confidence_level: ConfidenceLevel
    risks: Tuple[Risk, ...]
    reasoning: Tuple[str, ...]
    alternative_gauges: Tuple[AlternativeGauge, ...]
    input_snapshot: RecommendationInput
    timestamp: str = field(default="", compare=False)

    def to_dict(self, include_timestamp: bool = False) -> Dict[str, Any]:
        data = {
            "gauge": self.gauge,
            "gaugeDetails": self.gauge_details.to_dict(),
            "needleLength": self.needle_length.to_dict(),
            "successProbability": self.success_probability,
            "confidenceLevel": self.confidence_level.to_dict(),
            "risks": [r.to_dict() for r in self.risks],
            "reasoning": list(self.reasoning),
            "alternativeGauges": [a.to_dict() for a in self.alternative_gauges],
            "inputSnapshot": self.input_snapshot.to_dict(),
        }
        if include_timestamp:
            data["timestamp"] = self.timestamp
        return data


@dataclass(frozen=True)
class RecommendationResult:
    """Either a recommendation or the list of validation messages that blocked it."""
    error: bool
    messages: Tuple[str, ...] = field(default_factory=tuple)
    recommendation: Optional[Recommendation] = None

    @classmethod
    def failure(cls, messages: List[str]) -> "RecommendationResult":
        return cls(error=True, messages=tuple(messages))

    @classmethod
    def success(cls, recommendation: Recommendation) -> "RecommendationResult":
        return cls(error=False, recommendation=recommendation)

    def to_dict(self, include_timestamp: bool = False) -> Dict[str, Any]:
        if self.error:
            return {"error": True, "messages": list(self.messages)}
        return {
            "error": False,
            "recommendation": self.recommendation.to_dict(include_timestamp),
        }
