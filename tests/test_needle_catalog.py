"""Tests for NeedleCatalog and catalog injection into the engine."""

import pytest

from veinguide.core.recommender import NeedleCatalog, RecommendationEngine
from veinguide.core.recommender.data.needles import NEEDLE_SPECS


def _specs(*labels):
    by_label = {s.label: s for s in NEEDLE_SPECS}
    return [by_label[label] for label in labels]


class TestDefaultCatalog:
    def test_gauge_order(self, catalog):
        assert catalog.gauge_order == ("16G", "18G", "20G", "22G", "24G")
        assert len(catalog) == 5
        assert catalog.smallest == "24G"

    def test_outer_diameters_strictly_decrease(self, catalog):
        diameters = [spec.outer_diameter_mm for spec in catalog]
        assert diameters == [1.65, 1.27, 0.91, 0.72, 0.56]

    def test_get(self, catalog):
        spec = catalog.get("22G")
        assert spec.gauge == 22
        assert spec.color_name == "Blue"
        assert "22G" in catalog
        assert "26G" not in catalog

    def test_unknown_gauge_raises_key_error(self, catalog):
        with pytest.raises(KeyError, match="Unknown gauge: 26G"):
            catalog.get("26G")
        with pytest.raises(KeyError):
            catalog.step_smaller("26G")

    def test_neighbors(self, catalog):
        assert catalog.larger_neighbor("16G") is None
        assert catalog.smaller_neighbor("16G") == "18G"
        assert catalog.larger_neighbor("24G") == "22G"
        assert catalog.smaller_neighbor("24G") is None

    def test_step_smaller_stops_at_end(self, catalog):
        assert catalog.step_smaller("20G") == "22G"
        assert catalog.step_smaller("24G") == "24G"


class TestCatalogValidation:
    def test_empty(self):
        with pytest.raises(ValueError):
            NeedleCatalog([])

    def test_duplicate_labels(self):
        with pytest.raises(ValueError, match="Duplicate"):
            NeedleCatalog(_specs("18G", "18G"), diameter_thresholds=())

    def test_wrong_order(self):
        with pytest.raises(ValueError, match="largest to smallest"):
            NeedleCatalog(_specs("20G", "18G"), diameter_thresholds=())

    def test_threshold_for_unknown_gauge(self):
        with pytest.raises(ValueError, match="unknown gauge"):
            NeedleCatalog(_specs("20G", "22G"), diameter_thresholds=((3.0, "16G"),))

    def test_thresholds_must_descend(self):
        with pytest.raises(ValueError, match="descending"):
            NeedleCatalog(
                _specs("18G", "20G", "22G"),
                diameter_thresholds=((2.5, "20G"), (3.5, "18G")),
            )


class TestInjectedCatalog:
    @pytest.fixture
    def small_engine(self):
        catalog = NeedleCatalog(
            _specs("18G", "20G", "22G"),
            diameter_thresholds=((3.5, "18G"), (2.5, "20G")),
        )
        return RecommendationEngine(catalog=catalog)

    def test_smallest_of_injected_catalog_is_fallback(self, small_engine):
        rec = small_engine.generate(vein_depth=3.0, vein_diameter=1.0).recommendation
        assert rec.gauge == "22G"

    def test_alternatives_follow_injected_order(self, small_engine):
        rec = small_engine.generate(vein_depth=3.0, vein_diameter=1.0).recommendation
        assert [a.gauge for a in rec.alternative_gauges] == ["20G"]

    def test_adjustment_clamps_to_injected_smallest(self, small_engine):
        rec = small_engine.generate(
            vein_depth=3.0, vein_diameter=3.0, age_group="pediatric", patient_history="chemotherapy"
        ).recommendation
        assert rec.gauge == "22G"
