"""Tests for engine configuration."""

import sys
import pytest
from unittest.mock import patch
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cropadvisor.config import EngineConfig


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.min_suitability == 40
        assert config.planting_month is None
        assert config.max_workers == 1
        assert config.region_multiplier("Idukki") == 1.2

    def test_region_lookup_case_insensitive(self):
        config = EngineConfig()
        assert config.region_multiplier("  ERNAKULAM ") == 1.15
        assert config.region_multiplier("Chennai") == 1.0
        assert config.region_multiplier("") == 1.0
        assert config.region_multiplier(None) == 1.0

    def test_explicit_none_regions_use_district_table(self):
        config = EngineConfig(region_price_multipliers=None)
        assert config.region_multiplier("Wayanad") == 1.15

    def test_custom_regions_normalized(self):
        config = EngineConfig(region_price_multipliers={"Coorg": 1.05})
        assert config.region_multiplier("coorg") == 1.05
        assert config.region_multiplier("Idukki") == 1.0

    @pytest.mark.parametrize("kwargs,match", [
        ({"min_suitability": 101}, "min_suitability"),
        ({"min_suitability": -1}, "min_suitability"),
        ({"planting_month": 0}, "planting_month"),
        ({"planting_month": 13}, "planting_month"),
        ({"max_workers": 0}, "max_workers"),
        ({"region_price_multipliers": {"idukki": 1.5}}, "idukki"),
        ({"region_price_multipliers": {"kollam": 0.9}}, "kollam"),
    ])
    def test_invalid_values_raise(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            EngineConfig(**kwargs)


class TestFromEnv:
    def test_reads_environment(self):
        env = {
            "CROPADVISOR_MIN_SUITABILITY": "55",
            "CROPADVISOR_PLANTING_MONTH": "9",
            "CROPADVISOR_MAX_WORKERS": "4",
        }
        with patch.dict("os.environ", env, clear=True):
            config = EngineConfig.from_env()
        assert config.min_suitability == 55
        assert config.planting_month == 9
        assert config.max_workers == 4

    def test_empty_environment_uses_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            config = EngineConfig.from_env()
        assert config.min_suitability == 40
        assert config.planting_month is None

    def test_overrides_win(self):
        with patch.dict("os.environ", {"CROPADVISOR_PLANTING_MONTH": "9"}, clear=True):
            config = EngineConfig.from_env(planting_month=6)
        assert config.planting_month == 6

    def test_invalid_environment_value_raises(self):
        with patch.dict("os.environ", {"CROPADVISOR_PLANTING_MONTH": "14"}, clear=True):
            with pytest.raises(ValueError, match="planting_month"):
                EngineConfig.from_env()
