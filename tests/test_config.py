"""Tests for configuration sections"""

import numpy as np
import pytest

from veinguide.core.config import Config


class TestConfig:
    def test_comparison_weights_sum_to_one(self):
        cfg = Config().get_comparison_config()
        weights = [cfg[k] for k in (
            'success_weight', 'stability_weight', 'depth_weight', 'diameter_weight', 'puncture_weight'
        )]
        assert np.isclose(sum(weights), 1.0)

    def test_get_section(self):
        cfg = Config()
        assert cfg.get_section('Recommender')['base_score'] == 85.0
        assert cfg.get_section('missing') == {}

    def test_update_config(self):
        cfg = Config()
        cfg.update_config('recommender', {'base_score': 80.0})
        assert cfg.recommender_config['base_score'] == 80.0
        assert cfg.recommender_config['max_probability'] == 99

    def test_update_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown configuration section"):
            Config().update_config('database', {})

    def test_env_overrides_port(self, monkeypatch):
        monkeypatch.setenv('VEINGUIDE_PORT', '9100')
        assert Config().api_config['port'] == 9100
