"""
VeinRegistry: lookup of reference veins by id.
Veins are loaded from static data modules; an alternate list can be injected
for tests or for a different body site.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .models import VeinMeasurement, VeinSite

logger = logging.getLogger(__name__)

PRIMARY_VEIN_IDS = ("cephalic", "basilic", "medianCubital")


class VeinRegistry:
    """Reference veins keyed by id, in data-module order."""

    def __init__(self, veins: Optional[Sequence[VeinSite]] = None):
        self._veins: Dict[str, VeinSite] = {}
        self._loaded = False
        if veins is not None:
            self._load(veins)

    def initialize(self) -> None:
        """Load the reference forearm veins."""
        from .data.forearm import FOREARM_VEINS

        self._load(FOREARM_VEINS)

    def _load(self, veins: Sequence[VeinSite]) -> None:
        self._veins = {v.id: v for v in veins}
        self._loaded = True
        logger.info("VeinRegistry loaded %d veins", len(self._veins))

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, vein_id: str) -> Optional[VeinSite]:
        return self._veins.get(vein_id)

    def all_ids(self) -> List[str]:
        return list(self._veins)

    def primary_ids(self) -> List[str]:
        return [vein_id for vein_id in PRIMARY_VEIN_IDS if vein_id in self._veins]

    def by_puncture_score(self) -> List[VeinSite]:
        """All veins, best puncture site first."""
        return sorted(self._veins.values(), key=lambda v: v.hotspot.puncture_score, reverse=True)

    def measurement_for(self, vein_id: str) -> Optional[VeinMeasurement]:
        """Hotspot measurement bundle for a vein, or None for unknown ids."""
        vein = self.get(vein_id)
        if vein is None:
            return None
        seg = vein.hotspot_segment
        return VeinMeasurement(
            vein_id=vein.id,
            depth=seg.depth,
            diameter=seg.diameter,
            stability=seg.stability,
            puncture_score=vein.hotspot.puncture_score,
            name=vein.name,
            anatomical_region=vein.anatomical_region,
        )

    def hotspot_data(self, vein_id: str) -> Optional[Dict]:
        vein = self.get(vein_id)
        if vein is None:
            return None
        seg = vein.hotspot_segment
        return {
            "veinId": vein.id,
            "name": vein.name,
            "x": vein.hotspot.x,
            "y": vein.hotspot.y,
            "depth": seg.depth,
            "diameter": seg.diameter,
            "stability": seg.stability,
            "confidence": seg.confidence,
            "punctureScore": vein.hotspot.puncture_score,
            "reason": vein.hotspot.reason,
            "color": vein.color,
        }
