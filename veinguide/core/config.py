"""
Configuration management for Vein Guide
"""

import os
from pathlib import Path
from typing import Dict, Any

from dotenv import load_dotenv


# Base paths
BASE_DIR = Path(__file__).parent.parent.parent

load_dotenv(BASE_DIR / ".env")


class Config:
    """Main configuration class for Vein Guide"""

    def __init__(self):
        # Recommendation engine scoring (input defaults live on RecommendationInput)
        self.recommender_config = {
            'base_score': 85.0,
            'min_probability': 35,
            'max_probability': 99,
        }

        # Multi-vein comparison weights (must sum to 1.0)
        self.comparison_config = {
            'success_weight': 0.40,
            'stability_weight': 0.20,
            'depth_weight': 0.15,      # shallower is better
            'diameter_weight': 0.15,   # bigger is better
            'puncture_weight': 0.10,
            'depth_reference_mm': 6.0,     # depth at which depth score reaches 0
            'diameter_reference_mm': 5.0,  # diameter at which diameter score saturates
        }

        # HTTP surface
        self.api_config = {
            'host': os.getenv('VEINGUIDE_HOST', '0.0.0.0'),
            'port': int(os.getenv('VEINGUIDE_PORT', '8000')),
            'cors_origins': [
                "http://localhost:5173",
                "http://localhost:5174",
                "http://localhost:3000",
            ],
        }

        # Logging
        self.logging_config = {
            'level': os.getenv('LOG_LEVEL', 'INFO'),
            'format': '%(asctime)s [%(name)s] %(levelname)s: %(message)s',
        }

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get configuration for a specific section"""
        config_map = {
            'recommender': self.recommender_config,
            'comparison': self.comparison_config,
            'api': self.api_config,
            'logging': self.logging_config,
        }
        return config_map.get(section.lower(), {})

    def get_comparison_config(self) -> Dict[str, Any]:
        """Get composite scoring configuration"""
        return self.comparison_config

    def update_config(self, section: str, updates: Dict[str, Any]) -> None:
        """Update a configuration section"""
        if hasattr(self, f'{section}_config'):
            config = getattr(self, f'{section}_config')
            config.update(updates)
        else:
            raise ValueError(f"Unknown configuration section: {section}")


# Global configuration instance
config = Config()
