"""
NeedleCatalog: immutable needle reference table with a fixed gauge order.

The catalog is built once and handed to the engine, so tests and callers can
swap in a different set of needles without touching module state.
"""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .models import NeedleSpec

logger = logging.getLogger(__name__)

# (minimum vein diameter in mm, gauge label), evaluated top-down.
# Anything below the last bound falls through to the smallest gauge.
DEFAULT_DIAMETER_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (5.0, "16G"),
    (3.5, "18G"),
    (2.5, "20G"),
    (1.5, "22G"),
)


class NeedleCatalog:
    """
    Needle specs keyed by gauge label, ordered largest diameter first.

    Stepping never leaves the catalog: stepping smaller from the last entry
    returns the last entry.
    """

    def __init__(
        self,
        specs: Iterable[NeedleSpec],
        diameter_thresholds: Sequence[Tuple[float, str]] = DEFAULT_DIAMETER_THRESHOLDS,
    ):
        specs = tuple(specs)
        if not specs:
            raise ValueError("Needle catalog needs at least one needle spec")

        labels = [s.label for s in specs]
        if len(set(labels)) != len(labels):
            raise ValueError(f"Duplicate gauge labels in catalog: {labels}")

        for larger, smaller in zip(specs, specs[1:]):
            if smaller.outer_diameter_mm >= larger.outer_diameter_mm:
                raise ValueError(
                    "Needle specs must be ordered from largest to smallest outer "
                    f"diameter ({larger.label} {larger.outer_diameter_mm}mm before "
                    f"{smaller.label} {smaller.outer_diameter_mm}mm)"
                )

        thresholds = tuple((float(bound), label) for bound, label in diameter_thresholds)
        for bound, label in thresholds:
            if label not in labels:
                raise ValueError(f"Diameter threshold {bound}mm refers to unknown gauge {label}")
        bounds = [bound for bound, _ in thresholds]
        if bounds != sorted(bounds, reverse=True):
            raise ValueError("Diameter thresholds must be listed in descending order")

        self._specs = MappingProxyType({s.label: s for s in specs})
        self._order: Tuple[str, ...] = tuple(labels)
        self._thresholds = thresholds

    @classmethod
    def default(cls) -> "NeedleCatalog":
        """Catalog of the five standard peripheral IV gauges (16G..24G)."""
        from .data.needles import NEEDLE_SPECS

        catalog = cls(NEEDLE_SPECS)
        logger.debug("NeedleCatalog loaded %d gauges: %s", len(catalog), ", ".join(catalog.gauge_order))
        return catalog

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def gauge_order(self) -> Tuple[str, ...]:
        return self._order

    @property
    def diameter_thresholds(self) -> Tuple[Tuple[float, str], ...]:
        return self._thresholds

    @property
    def smallest(self) -> str:
        return self._order[-1]

    def get(self, label: str) -> NeedleSpec:
        """Spec for a gauge label; raises KeyError for labels not in the catalog."""
        try:
            return self._specs[label]
        except KeyError:
            raise KeyError(f"Unknown gauge: {label}") from None

    def index(self, label: str) -> int:
        self.get(label)
        return self._order.index(label)

    def __contains__(self, label: object) -> bool:
        return label in self._specs

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[NeedleSpec]:
        return (self._specs[label] for label in self._order)

    # ------------------------------------------------------------------
    # Stepping within the gauge order
    # ------------------------------------------------------------------

    def larger_neighbor(self, label: str) -> Optional[str]:
        idx = self.index(label)
        return self._order[idx - 1] if idx > 0 else None

    def smaller_neighbor(self, label: str) -> Optional[str]:
        idx = self.index(label)
        return self._order[idx + 1] if idx < len(self._order) - 1 else None

    def step_smaller(self, label: str) -> str:
        """One position toward the smallest gauge, stopping at the end of the order."""
        return self.smaller_neighbor(label) or label
