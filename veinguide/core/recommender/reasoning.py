"""Human-readable trace of how a recommendation was reached."""

from typing import List

from .models import AgeGroup, GaugeSelection, NeedleLength, PatientHistory, RecommendationInput

SUPPORTIVE_STABILITY = 70.0


def build_reasoning(
    inputs: RecommendationInput,
    selection: GaugeSelection,
    needle_length: NeedleLength,
    success_probability: int,
) -> List[str]:
    """One line per decision, in the order the engine made them."""
    steps = [f"Vein diameter of {_measure(inputs.vein_diameter)}mm → baseline gauge: {selection.base}."]

    if inputs.age_group is not AgeGroup.ADULT:
        steps.append(_adjustment_line(
            f"Patient is {inputs.age_group.value}",
            selection.base,
            selection.after_age,
            "shifted to more conservative gauge",
        ))

    if inputs.patient_history is not PatientHistory.NONE:
        prefix = f"History: {inputs.patient_history.value}"
        if selection.after_age == selection.final and inputs.patient_history in (
            PatientHistory.DIABETES, PatientHistory.OBESITY
        ):
            steps.append(f"{prefix} → gauge unchanged, first-attempt estimate reduced.")
        else:
            steps.append(_adjustment_line(
                prefix, selection.after_age, selection.final, "further gauge adjustment applied"
            ))

    steps.append(
        f"Depth {_measure(inputs.vein_depth)}mm → {needle_length.label.lower()} needle ({needle_length.inches})."
    )

    effect = "supports" if inputs.stability_index >= SUPPORTIVE_STABILITY else "reduces"
    steps.append(f"Stability {_measure(inputs.stability_index)}/100 {effect} first-attempt confidence.")

    steps.append(
        f"Final: {selection.final}, {needle_length.inches}. "
        f"Success probability: {success_probability}%."
    )
    return steps


def _adjustment_line(prefix: str, before: str, after: str, action: str) -> str:
    if before == after:
        return f"{prefix} → already at smallest gauge ({after}), no further shift possible."
    return f"{prefix} → {action} ({before} → {after})."


def _measure(value: float) -> str:
    # drops the trailing ".0" but keeps every digit the caller supplied
    return f"{value:.15g}"
