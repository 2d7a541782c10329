"""
Input validation for the recommendation engine.

Every rule is checked independently so a caller gets one message per
violated constraint instead of stopping at the first problem.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type, TypeVar

from .models import AgeGroup, PatientHistory, RecommendationInput


@dataclass(frozen=True)
class InputRange:
    min: float
    max: float
    label: str
    unit: str = ""

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def message(self) -> str:
        return f"{self.label} must be between {self.min:g}{self.unit} and {self.max:g}{self.unit}"


INPUT_RANGES = {
    "vein_depth": InputRange(0.5, 15.0, "Vein depth", "mm"),
    "vein_diameter": InputRange(0.3, 8.0, "Vein diameter", "mm"),
    "stability_index": InputRange(0.0, 100.0, "Stability index"),
}

E = TypeVar("E", AgeGroup, PatientHistory)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def to_number(value: Any) -> Optional[float]:
    """Coerce a raw form/JSON value to a finite float, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return None


def _check_measurement(name: str, value: Any, errors: List[str]) -> None:
    spec = INPUT_RANGES[name]
    if is_blank(value):
        errors.append(f"{spec.label} is required")
        return
    number = to_number(value)
    if number is None or not spec.contains(number):
        errors.append(spec.message())


def _check_choice(enum_cls: Type[E], label: str, value: Any, errors: List[str]) -> None:
    if is_blank(value):
        return
    if to_enum(enum_cls, value) is None:
        choices = ", ".join(member.value for member in enum_cls)
        errors.append(f"{label} must be one of: {choices}")


def validate_inputs(
    vein_depth: Any,
    vein_diameter: Any,
    age_group: Any = None,
    stability_index: Any = None,
    patient_history: Any = None,
) -> List[str]:
    """Return human-readable validation errors; an empty list means the inputs are usable."""
    errors: List[str] = []

    _check_measurement("vein_depth", vein_depth, errors)
    _check_measurement("vein_diameter", vein_diameter, errors)

    if not is_blank(stability_index):
        stability = to_number(stability_index)
        if stability is None or not INPUT_RANGES["stability_index"].contains(stability):
            errors.append(INPUT_RANGES["stability_index"].message())

    errors.extend(validate_choices(age_group, patient_history))

    return errors


def validate_choices(age_group: Any = None, patient_history: Any = None) -> List[str]:
    """Errors for age group / history values outside their enumerations; blanks are allowed."""
    errors: List[str] = []
    _check_choice(AgeGroup, "Age group", age_group, errors)
    _check_choice(PatientHistory, "Patient history", patient_history, errors)
    return errors


def parse_inputs(
    vein_depth: Any,
    vein_diameter: Any,
    age_group: Any = None,
    stability_index: Any = None,
    patient_history: Any = None,
) -> Tuple[Optional[RecommendationInput], List[str]]:
    """
    Validate raw values and build a RecommendationInput from them.

    Blank optional fields take the defaults declared on RecommendationInput.
    Returns (None, errors) when anything is invalid.
    """
    errors = validate_inputs(vein_depth, vein_diameter, age_group, stability_index, patient_history)
    if errors:
        return None, errors

    defaults = RecommendationInput(vein_depth=0.0, vein_diameter=0.0)
    parsed = RecommendationInput(
        vein_depth=to_number(vein_depth),
        vein_diameter=to_number(vein_diameter),
        age_group=defaults.age_group if is_blank(age_group) else to_enum(AgeGroup, age_group),
        stability_index=(
            defaults.stability_index if is_blank(stability_index) else to_number(stability_index)
        ),
        patient_history=(
            defaults.patient_history if is_blank(patient_history)
            else to_enum(PatientHistory, patient_history)
        ),
    )
    return parsed, []
