"""
Main application entry point
Demonstrates how to use the Vein Guide recommendation engine
"""

import argparse

from veinguide.core.config import config
from veinguide.core.comparison import VeinAnalyzer, build_context
from veinguide.core.recommender import RecommendationEngine
from veinguide.core.recommender.risk import sort_risks_by_severity


def parse_args():
    parser = argparse.ArgumentParser(description="Vein Guide - IV needle recommendation demo")
    parser.add_argument("--depth", type=float, default=3.0, help="Vein depth in mm")
    parser.add_argument("--diameter", type=float, default=3.2, help="Vein diameter in mm")
    parser.add_argument("--stability", type=float, default=None, help="Stability index 0-100")
    parser.add_argument("--age-group", default="adult", help="pediatric | adult | geriatric")
    parser.add_argument("--history", default="none",
                        help="none | diabetes | chemotherapy | obesity | dehydration")
    return parser.parse_args()


def main():
    """Main application workflow"""
    args = parse_args()

    print("=" * 60)
    print("Vein Guide - IV Needle Recommendation")
    print("=" * 60)

    engine = RecommendationEngine(config.recommender_config)
    analyzer = VeinAnalyzer(config.get_comparison_config(), engine=engine)

    # 1. Single measurement
    print("\n[1/2] Recommendation for the supplied measurement...")
    result = engine.generate(
        vein_depth=args.depth,
        vein_diameter=args.diameter,
        age_group=args.age_group,
        stability_index=args.stability,
        patient_history=args.history,
    )
    if result.error:
        print("   ✗ Invalid input:")
        for message in result.messages:
            print(f"     - {message}")
        return 1

    rec = result.recommendation
    print(f"   ✓ Gauge: {rec.gauge} ({rec.gauge_details.color_name}, {rec.gauge_details.typical_use})")
    print(f"   ✓ Needle: {rec.needle_length.label} {rec.needle_length.mm}mm ({rec.needle_length.inches})")
    print(f"   ✓ Success probability: {rec.success_probability}% [{rec.confidence_level.level}]")
    print("\n   Risks:")
    for risk in sort_risks_by_severity(rec.risks):
        print(f"     [{risk.severity.label}] {risk.message}")
    print("\n   Reasoning:")
    for step in rec.reasoning:
        print(f"     - {step}")
    if rec.alternative_gauges:
        print("\n   Alternatives:")
        for alt in rec.alternative_gauges:
            print(f"     {alt.gauge}: {alt.reason}")

    # 2. Which reference vein should be used for this patient?
    print("\n[2/2] Ranking reference veins for this patient...")
    context, errors = build_context(args.age_group, args.history)
    if errors:
        print(f"   ✗ {'; '.join(errors)}")
        return 1

    for analysis in analyzer.compare_veins(context=context):
        r = analysis.recommendation
        print(
            f"   #{analysis.rank} {analysis.rank_label:<12} {analysis.measurement.name:<26} "
            f"score {analysis.composite_score:5.1f}  {r.gauge}  {r.success_probability}%"
        )

    print("\n" + "=" * 60)
    print("Decision support only. Not a medical device.")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
