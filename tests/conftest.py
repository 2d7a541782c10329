"""Test configuration and fixtures"""

import pytest

from veinguide.core.comparison import VeinAnalyzer, VeinRegistry
from veinguide.core.recommender import NeedleCatalog, RecommendationEngine


@pytest.fixture
def catalog():
    """Default 16G-24G needle catalog"""
    return NeedleCatalog.default()


@pytest.fixture
def engine(catalog):
    """Recommendation engine with default scoring"""
    return RecommendationEngine(catalog=catalog)


@pytest.fixture
def registry():
    """Reference forearm veins"""
    r = VeinRegistry()
    r.initialize()
    return r


@pytest.fixture
def analyzer(engine, registry):
    """Vein analyzer sharing the engine fixture"""
    return VeinAnalyzer(engine=engine, registry=registry)


@pytest.fixture
def baseline_adult():
    """Adult, no history, mid-forearm measurement"""
    return dict(
        vein_depth=3.0,
        vein_diameter=3.2,
        age_group="adult",
        stability_index=75,
        patient_history="none",
    )
