"""
Peripheral IV catheter reference table.
Outer diameters and ISO 10555 hub colors for the five gauges in routine use,
ordered from largest (16G) to smallest (24G).
"""

from ..models import NeedleSpec

NEEDLE_SPECS = [
    NeedleSpec(
        label="16G",
        gauge=16,
        outer_diameter_mm=1.65,
        typical_use="Rapid fluid/blood transfusion",
        color="#9ca3af",
        color_name="Gray",
        flow_rate="Very High",
    ),
    NeedleSpec(
        label="18G",
        gauge=18,
        outer_diameter_mm=1.27,
        typical_use="Blood transfusion, CT contrast",
        color="#22c55e",
        color_name="Green",
        flow_rate="High",
    ),
    NeedleSpec(
        label="20G",
        gauge=20,
        outer_diameter_mm=0.91,
        typical_use="General IV access, most medications",
        color="#ec4899",
        color_name="Pink",
        flow_rate="Moderate",
    ),
    NeedleSpec(
        label="22G",
        gauge=22,
        outer_diameter_mm=0.72,
        typical_use="Pediatric, fragile veins, routine meds",
        color="#3b82f6",
        color_name="Blue",
        flow_rate="Low",
    ),
    NeedleSpec(
        label="24G",
        gauge=24,
        outer_diameter_mm=0.56,
        typical_use="Neonatal, very small/fragile veins",
        color="#eab308",
        color_name="Yellow",
        flow_rate="Very Low",
    ),
]
