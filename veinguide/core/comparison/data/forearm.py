"""
Reference forearm veins for the comparison demo.
Coordinates are relative (0-1) to the camera frame; depth and diameter in mm.
Anatomy: cephalic runs laterally (thumb side), basilic medially, median cubital
bridges them at the elbow crease, accessory cephalic branches off the cephalic
and the dorsal arch sits on the back of the hand.
"""

from ..models import Hotspot, VeinSegment, VeinSite

FOREARM_VEINS = [
    VeinSite(
        id="cephalic",
        name="Cephalic Vein",
        anatomical_region="lateral forearm",
        clinical_notes="Most accessible superficial vein. Preferred for routine IV access.",
        color="#00e5ff",
        segments=(
            VeinSegment(0.64, 0.94, depth=1.8, diameter=2.2, stability=72, confidence=98.1),
            VeinSegment(0.63, 0.86, depth=2.0, diameter=2.5, stability=76, confidence=98.5),
            VeinSegment(0.61, 0.76, depth=2.3, diameter=2.7, stability=80, confidence=99.0),
            VeinSegment(0.58, 0.65, depth=2.6, diameter=2.9, stability=83, confidence=99.2),
            VeinSegment(0.55, 0.54, depth=2.8, diameter=3.1, stability=85, confidence=99.4),
            VeinSegment(0.52, 0.44, depth=3.0, diameter=3.3, stability=87, confidence=99.1),
            VeinSegment(0.50, 0.34, depth=3.2, diameter=3.5, stability=84, confidence=98.8),
            VeinSegment(0.48, 0.24, depth=3.5, diameter=3.4, stability=80, confidence=98.4),
            VeinSegment(0.46, 0.14, depth=3.8, diameter=3.2, stability=76, confidence=97.9),
            VeinSegment(0.45, 0.06, depth=4.0, diameter=3.0, stability=72, confidence=97.5),
        ),
        hotspot=Hotspot(
            x=0.55,
            y=0.54,
            segment_index=4,
            puncture_score=92,
            reason="Optimal depth-to-diameter ratio with high stability",
        ),
        access_difficulty="Easy",
        avg_stability=85,
    ),
    VeinSite(
        id="basilic",
        name="Basilic Vein",
        anatomical_region="medial forearm",
        clinical_notes="Deeper than cephalic. Can roll easily. Anchor firmly before puncture.",
        color="#00bcd4",
        segments=(
            VeinSegment(0.36, 0.94, depth=2.5, diameter=1.8, stability=58, confidence=97.2),
            VeinSegment(0.37, 0.86, depth=2.8, diameter=2.0, stability=62, confidence=97.6),
            VeinSegment(0.38, 0.76, depth=3.2, diameter=2.2, stability=66, confidence=97.9),
            VeinSegment(0.39, 0.65, depth=3.5, diameter=2.4, stability=70, confidence=98.2),
            VeinSegment(0.41, 0.55, depth=3.6, diameter=2.5, stability=73, confidence=98.5),
            VeinSegment(0.43, 0.45, depth=3.8, diameter=2.7, stability=76, confidence=98.8),
            VeinSegment(0.44, 0.35, depth=4.0, diameter=2.9, stability=74, confidence=98.4),
            VeinSegment(0.46, 0.25, depth=4.2, diameter=3.1, stability=70, confidence=97.9),
            VeinSegment(0.47, 0.15, depth=4.5, diameter=3.3, stability=66, confidence=97.4),
            VeinSegment(0.48, 0.06, depth=4.8, diameter=3.5, stability=62, confidence=96.8),
        ),
        hotspot=Hotspot(
            x=0.43,
            y=0.45,
            segment_index=5,
            puncture_score=78,
            reason="Best stability in the basilic; anchor vein firmly at this site",
        ),
        access_difficulty="Moderate",
        avg_stability=76,
    ),
    VeinSite(
        id="medianCubital",
        name="Median Cubital Vein",
        anatomical_region="antecubital fossa",
        clinical_notes="Preferred venipuncture site. Large, superficial, and well-anchored.",
        color="#26c6da",
        segments=(
            VeinSegment(0.54, 0.40, depth=1.8, diameter=3.6, stability=86, confidence=99.0),
            VeinSegment(0.52, 0.37, depth=2.0, diameter=3.9, stability=89, confidence=99.3),
            VeinSegment(0.50, 0.34, depth=2.2, diameter=4.2, stability=92, confidence=99.5),
            VeinSegment(0.47, 0.33, depth=2.1, diameter=4.0, stability=90, confidence=99.4),
            VeinSegment(0.45, 0.35, depth=2.0, diameter=3.7, stability=87, confidence=99.1),
            VeinSegment(0.43, 0.38, depth=2.2, diameter=3.4, stability=84, confidence=98.8),
        ),
        hotspot=Hotspot(
            x=0.50,
            y=0.34,
            segment_index=2,
            puncture_score=97,
            reason="Highest-scoring site: shallowest depth, largest diameter, peak stability",
        ),
        access_difficulty="Easy",
        avg_stability=89,
    ),
    VeinSite(
        id="accessoryCephalic",
        name="Accessory Cephalic Vein",
        anatomical_region="dorsolateral forearm",
        clinical_notes="Backup site when cephalic is unavailable. Smaller but accessible.",
        color="#4dd0e1",
        segments=(
            VeinSegment(0.68, 0.80, depth=1.5, diameter=1.6, stability=68, confidence=97.0),
            VeinSegment(0.70, 0.70, depth=1.7, diameter=1.8, stability=72, confidence=97.5),
            VeinSegment(0.71, 0.60, depth=1.9, diameter=1.9, stability=74, confidence=97.8),
            VeinSegment(0.70, 0.50, depth=2.1, diameter=1.7, stability=70, confidence=97.2),
            VeinSegment(0.67, 0.42, depth=2.3, diameter=1.5, stability=66, confidence=96.8),
        ),
        hotspot=Hotspot(
            x=0.71,
            y=0.60,
            segment_index=2,
            puncture_score=72,
            reason="Shallowest and most stable point on the accessory cephalic",
        ),
        access_difficulty="Moderate",
        avg_stability=70,
    ),
    VeinSite(
        id="dorsalArch",
        name="Dorsal Venous Arch",
        anatomical_region="dorsum of hand / wrist",
        clinical_notes="Last resort for IV. Very superficial but small and fragile. Painful.",
        color="#80deea",
        segments=(
            VeinSegment(0.40, 0.92, depth=1.0, diameter=1.2, stability=50, confidence=95.5),
            VeinSegment(0.45, 0.90, depth=1.1, diameter=1.4, stability=54, confidence=96.0),
            VeinSegment(0.50, 0.88, depth=1.2, diameter=1.5, stability=58, confidence=96.5),
            VeinSegment(0.55, 0.90, depth=1.1, diameter=1.3, stability=55, confidence=96.2),
            VeinSegment(0.60, 0.92, depth=1.0, diameter=1.1, stability=50, confidence=95.8),
        ),
        hotspot=Hotspot(
            x=0.50,
            y=0.88,
            segment_index=2,
            puncture_score=55,
            reason="Best point on dorsal arch, but small; use only if other sites unavailable",
        ),
        access_difficulty="Difficult",
        avg_stability=53,
    ),
]
