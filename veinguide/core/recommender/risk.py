"""
Risk assessment for a chosen needle.

Each predicate is checked on its own; a single call can report several risks.
"""

from typing import Iterable, List

from .models import AgeGroup, PatientHistory, RecommendationInput, Risk, Severity

TIGHT_RATIO_THRESHOLD = 1.8
DEEP_VEIN_MM = 5.0
LOW_STABILITY = 40.0

NO_RISK_MESSAGE = "No significant risk factors. Standard insertion procedure recommended."

_HISTORY_RISKS = {
    PatientHistory.CHEMOTHERAPY: Risk(
        Severity.WARNING,
        "Chemo-compromised veins. Consider warm compress for visibility.",
    ),
    PatientHistory.DEHYDRATION: Risk(
        Severity.INFO,
        "Dehydrated patient. Vein may appear smaller than normal.",
    ),
    PatientHistory.DIABETES: Risk(
        Severity.INFO,
        "Diabetic patient. Check for peripheral neuropathy before insertion.",
    ),
}

_AGE_RISKS = {
    AgeGroup.GERIATRIC: Risk(
        Severity.INFO,
        "Geriatric patient. Apply gentle traction, vein walls are fragile.",
    ),
    AgeGroup.PEDIATRIC: Risk(
        Severity.INFO,
        "Pediatric patient. Use distraction techniques. Secure IV firmly.",
    ),
}


def assess_risks(inputs: RecommendationInput, needle_od_mm: float) -> List[Risk]:
    """Risks for inserting a needle of the given outer diameter into this vein."""
    risks: List[Risk] = []

    if inputs.vein_diameter / needle_od_mm < TIGHT_RATIO_THRESHOLD:
        risks.append(Risk(
            Severity.WARNING,
            "Tight vein-to-needle ratio. Stabilize vein before insertion.",
        ))
    if inputs.vein_depth > DEEP_VEIN_MM:
        risks.append(Risk(
            Severity.WARNING,
            "Deep vein access required. Use ultrasound guidance if available.",
        ))
    if inputs.stability_index < LOW_STABILITY:
        risks.append(Risk(
            Severity.CRITICAL,
            "Low vein stability. High risk of rolling. Anchor vein firmly.",
        ))

    # history order: chemotherapy, dehydration, diabetes
    for history in (PatientHistory.CHEMOTHERAPY, PatientHistory.DEHYDRATION, PatientHistory.DIABETES):
        if inputs.patient_history is history:
            risks.append(_HISTORY_RISKS[history])

    for age_group in (AgeGroup.GERIATRIC, AgeGroup.PEDIATRIC):
        if inputs.age_group is age_group:
            risks.append(_AGE_RISKS[age_group])

    if not risks:
        risks.append(Risk(Severity.SUCCESS, NO_RISK_MESSAGE))

    return risks


def sort_risks_by_severity(risks: Iterable[Risk]) -> List[Risk]:
    """Critical first, then warning, info, success; ties keep their original order."""
    return sorted(risks, key=lambda r: r.severity.rank)


def overall_risk_level(risks: Iterable[Risk]) -> str:
    severities = {r.severity for r in risks}
    if Severity.CRITICAL in severities:
        return "critical"
    if Severity.WARNING in severities:
        return "warning"
    return "low"
