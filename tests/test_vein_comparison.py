"""Tests for multi-vein analysis and ranking."""

import dataclasses

import pytest

from veinguide.core.comparison import (
    PatientContext,
    VeinAnalyzer,
    VeinAnalysisError,
    VeinMeasurement,
    build_context,
    calculate_insertion_angle,
    rank_analyses,
)
from veinguide.core.comparison.analyzer import segment_quality
from veinguide.core.recommender import AgeGroup, PatientHistory
from veinguide.core.recommender.risk import NO_RISK_MESSAGE


def _measurement(vein_id, **overrides):
    values = dict(depth=3.0, diameter=3.2, stability=75, puncture_score=50, name=vein_id.title())
    values.update(overrides)
    return VeinMeasurement(vein_id=vein_id, **values)


# ------------------------------------------------------------------
# Ranking
# ------------------------------------------------------------------

class TestRanking:
    @pytest.fixture
    def analysis(self, analyzer):
        return analyzer.analyze_measurement(_measurement("sample"))

    def test_rank_labels_by_score(self, analysis):
        scored = [
            dataclasses.replace(analysis, measurement=_measurement(name), composite_score=score)
            for name, score in (("a", 60.0), ("b", 90.0), ("c", 75.0))
        ]
        ranked = rank_analyses(scored)

        assert [a.vein_id for a in ranked] == ["b", "c", "a"]
        assert [a.rank for a in ranked] == [1, 2, 3]
        assert [a.rank_label for a in ranked] == ["RECOMMENDED", "ALTERNATIVE", "BACKUP"]
        assert [a.is_best_choice for a in ranked] == [True, False, False]

    def test_ties_keep_input_order(self, analysis):
        scored = [
            dataclasses.replace(analysis, measurement=_measurement(name), composite_score=80.0)
            for name in ("first", "second", "third")
        ]
        assert [a.vein_id for a in rank_analyses(scored)] == ["first", "second", "third"]

    def test_fourth_place_is_backup(self, analysis):
        scored = [
            dataclasses.replace(analysis, measurement=_measurement(str(i)), composite_score=float(i))
            for i in range(4)
        ]
        assert rank_analyses(scored)[-1].rank_label == "BACKUP"

    def test_identical_measurements_tie(self, analyzer):
        ranked = analyzer.compare_measurements([_measurement("left"), _measurement("right")])
        assert [a.vein_id for a in ranked] == ["left", "right"]
        assert ranked[0].composite_score == ranked[1].composite_score

    def test_invalid_measurements_are_dropped(self, analyzer):
        ranked = analyzer.compare_measurements([
            _measurement("too-deep", depth=20),
            _measurement("ok"),
            _measurement("bad-puncture", puncture_score=120),
        ])
        assert [a.vein_id for a in ranked] == ["ok"]
        assert ranked[0].rank == 1

    def test_non_numeric_puncture_drops_only_that_vein(self, analyzer):
        ranked = analyzer.compare_measurements([
            _measurement("a", puncture_score="high"),
            _measurement("b"),
        ])
        assert [a.vein_id for a in ranked] == ["b"]

    def test_payload_uses_coerced_values(self, analyzer):
        analysis = analyzer.analyze_measurement(
            _measurement("s", depth="3.0", diameter="3.2", stability=None, puncture_score="50")
        )
        hotspot = analysis.to_dict()["hotspot"]
        assert hotspot["depth"] == 3.0
        assert isinstance(hotspot["depth"], float)
        assert hotspot["stability"] == 75.0
        assert hotspot["punctureScore"] == 50.0
        assert isinstance(hotspot["punctureScore"], float)

    def test_empty_input(self, analyzer):
        assert analyzer.compare_measurements([]) == []


# ------------------------------------------------------------------
# Composite score
# ------------------------------------------------------------------

class TestCompositeScore:
    def test_weighted_blend(self, analyzer):
        # 96.75*.4 + 75*.2 + 50*.15 + 64*.15 + 50*.1
        analysis = analyzer.analyze_measurement(_measurement("sample"))
        assert analysis.composite_score == pytest.approx(75.8)

    def test_depth_and_diameter_scores_saturate(self, analyzer):
        shallow_wide = analyzer.analyze_measurement(
            _measurement("s", depth=1.2, diameter=8.0, stability=100, puncture_score=100)
        )
        # 99*.4 + 100*.2 + 80*.15 + 100*.15 + 100*.1
        assert shallow_wide.composite_score == pytest.approx(96.6)

    def test_puncture_out_of_range(self, analyzer):
        outcome = analyzer.analyze_measurement(_measurement("x", puncture_score=-1))
        assert isinstance(outcome, VeinAnalysisError)
        assert outcome.messages == ("Puncture score must be between 0 and 100",)

    def test_engine_errors_are_carried(self, analyzer):
        outcome = analyzer.analyze_measurement(_measurement("x", depth=None))
        assert outcome.error
        assert outcome.to_dict() == {
            "error": True,
            "veinId": "x",
            "messages": ["Vein depth is required"],
        }

    def test_weights_must_sum_to_one(self, engine, registry):
        with pytest.raises(ValueError, match="sum to 1.0"):
            VeinAnalyzer({'success_weight': 0.5}, engine=engine, registry=registry)

    def test_negative_weight_rejected(self, engine, registry):
        with pytest.raises(ValueError):
            VeinAnalyzer(
                {'success_weight': 0.6, 'puncture_weight': -0.1},
                engine=engine,
                registry=registry,
            )


# ------------------------------------------------------------------
# Reference veins
# ------------------------------------------------------------------

class TestReferenceVeins:
    def test_registry_loaded(self, registry):
        assert registry.is_loaded
        assert registry.all_ids() == [
            "cephalic", "basilic", "medianCubital", "accessoryCephalic", "dorsalArch"
        ]
        assert registry.primary_ids() == ["cephalic", "basilic", "medianCubital"]

    def test_by_puncture_score(self, registry):
        assert [v.id for v in registry.by_puncture_score()] == [
            "medianCubital", "cephalic", "basilic", "accessoryCephalic", "dorsalArch"
        ]

    def test_unknown_vein(self, registry, analyzer):
        assert registry.get("radial") is None
        assert registry.measurement_for("radial") is None
        assert registry.hotspot_data("radial") is None
        outcome = analyzer.analyze_vein("radial")
        assert outcome.messages == ("Unknown vein: radial",)

    def test_measurement_uses_hotspot_segment(self, registry):
        m = registry.measurement_for("cephalic")
        assert (m.depth, m.diameter, m.stability, m.puncture_score) == (2.8, 3.1, 85, 92)

    def test_compare_all_veins(self, analyzer):
        ranked = analyzer.compare_veins()
        assert [a.vein_id for a in ranked] == [
            "medianCubital", "cephalic", "accessoryCephalic", "basilic", "dorsalArch"
        ]
        assert ranked[1].composite_score == pytest.approx(82.8)
        assert ranked[0].rank_label == "RECOMMENDED"

    def test_compare_skips_unknown_ids(self, analyzer):
        ranked = analyzer.compare_veins(["basilic", "radial", "cephalic"])
        assert [a.vein_id for a in ranked] == ["cephalic", "basilic"]

    def test_analysis_payload(self, analyzer):
        payload = analyzer.compare_veins(["cephalic"])[0].to_dict()
        assert payload["vein"]["accessDifficulty"] == "Easy"
        assert payload["hotspot"]["insertionAngle"]["degrees"] == 20
        assert payload["recommendation"]["gauge"] == "20G"
        assert payload["rank"] == 1
        assert payload["isBestChoice"] is True


# ------------------------------------------------------------------
# Procedure guidance and segments
# ------------------------------------------------------------------

class TestProcedureGuidance:
    def test_stable_vein_adult(self, analyzer):
        analysis = analyzer.analyze_vein("cephalic")
        steps = analysis.procedure_steps
        assert [s.title for s in steps] == ["Prepare", "Identify site", "Insert", "Secure"]
        assert [s.step for s in steps] == [1, 2, 3, 4]
        assert "Select 20G pink catheter." in steps[0].instruction

    def test_unstable_vein_gets_anchor_step(self, analyzer):
        titles = [s.title for s in analyzer.analyze_vein("dorsalArch").procedure_steps]
        assert titles == ["Prepare", "Identify site", "Anchor vein", "Insert", "Secure"]
        basilic = [s.title for s in analyzer.analyze_vein("basilic").procedure_steps]
        assert "Anchor vein" not in basilic

    def test_chemotherapy_pretreatment(self, analyzer):
        context = PatientContext(patient_history=PatientHistory.CHEMOTHERAPY)
        steps = analyzer.analyze_vein("cephalic", context).procedure_steps
        assert [s.title for s in steps][:2] == ["Prepare", "Pre-treat"]
        assert [s.step for s in steps] == [1, 2, 3, 4, 5]

    def test_pediatric_comfort(self, analyzer):
        context = PatientContext(age_group=AgeGroup.PEDIATRIC)
        titles = [s.title for s in analyzer.analyze_vein("cephalic", context).procedure_steps]
        assert titles[1] == "Comfort"

    def test_measurement_bundle_has_no_steps(self, analyzer):
        analysis = analyzer.analyze_measurement(_measurement("sample"))
        assert analysis.procedure_steps == ()
        assert analysis.segment_analysis == ()


class TestSegments:
    def test_segment_analysis(self, analyzer, registry):
        segments = analyzer.analyze_segments(registry.get("cephalic"))
        assert len(segments) == 10
        assert [s.segment_index for s in segments if s.is_hotspot] == [4]
        assert segments[0].gauge == "22G"
        assert segments[0].quality == "fair"
        assert segments[4].quality == "good"

    @pytest.mark.parametrize("stability, quality", [(80, "good"), (79, "fair"), (60, "fair"), (59, "poor")])
    def test_segment_quality(self, stability, quality):
        assert segment_quality(stability) == quality


# ------------------------------------------------------------------
# Insertion angle
# ------------------------------------------------------------------

class TestInsertionAngle:
    @pytest.mark.parametrize("depth, diameter, degrees, label", [
        (1.2, 1.5, 10, "Shallow"),
        (2.0, 3.0, 15, "Shallow"),
        (2.0, 1.9, 10, "Shallow"),
        (2.8, 3.1, 20, "Standard"),
        (5.0, 3.0, 25, "Standard"),
        (7.0, 3.0, 30, "Steep"),
    ])
    def test_angle_table(self, depth, diameter, degrees, label):
        angle = calculate_insertion_angle(depth, diameter)
        assert angle.degrees == degrees
        assert angle.label == label

    def test_guidance_text(self):
        assert calculate_insertion_angle(1.0, 3.0).guidance.endswith("superficial vein")
        assert calculate_insertion_angle(5.0, 3.0).guidance.endswith("needed for depth")
        assert calculate_insertion_angle(3.0, 3.0).guidance == "Insert at 20° angle"


# ------------------------------------------------------------------
# Patient context and hotspot tooltip
# ------------------------------------------------------------------

class TestContextAndHotspot:
    def test_build_context_defaults(self):
        context, errors = build_context(None, "")
        assert errors == []
        assert context == PatientContext()

    def test_build_context_rejects_unknown(self):
        context, errors = build_context("toddler", "none")
        assert context is None
        assert errors == ["Age group must be one of: pediatric, adult, geriatric"]

    def test_quick_recommend(self, analyzer, registry):
        payload = analyzer.quick_recommend_from_hotspot(registry.hotspot_data("cephalic"))
        rec = payload["recommendation"]
        assert payload["veinName"] == "Cephalic Vein"
        assert payload["punctureScore"] == 92
        assert rec["gauge"] == "20G"
        assert rec["gaugeColorName"] == "Pink"
        assert rec["insertionAngle"] == 20
        assert rec["confidenceLevel"] == "HIGH"
        assert rec["topRisk"] == NO_RISK_MESSAGE
        assert payload["messages"] == []

    def test_quick_recommend_invalid_hotspot(self, analyzer):
        payload = analyzer.quick_recommend_from_hotspot({"name": "Broken", "diameter": 3.0})
        assert payload["recommendation"] is None
        assert payload["messages"] == ["Vein depth is required"]
