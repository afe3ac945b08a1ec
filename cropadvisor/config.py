"""
Engine configuration: suitability threshold, planting month, regional price
multipliers and evaluation parallelism.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from cropadvisor.data.kerala_crops import DISTRICT_PRICE_MULTIPLIERS
from cropadvisor.data.schema import MONTHS

logger = logging.getLogger(__name__)

DEFAULT_MIN_SUITABILITY = 40

# Region multipliers must stay within this band
REGION_MULTIPLIER_RANGE = (1.00, 1.20)

ENV_MIN_SUITABILITY = "CROPADVISOR_MIN_SUITABILITY"
ENV_PLANTING_MONTH = "CROPADVISOR_PLANTING_MONTH"
ENV_MAX_WORKERS = "CROPADVISOR_MAX_WORKERS"


@dataclass
class EngineConfig:
    """Configuration for a recommendation run."""
    min_suitability: int = DEFAULT_MIN_SUITABILITY
    planting_month: Optional[int] = None   # 1-12; None means crops get the unrated timing score
    region_price_multipliers: Optional[Mapping[str, float]] = None
    max_workers: int = 1

    def __post_init__(self):
        if self.region_price_multipliers is None:
            self.region_price_multipliers = dict(DISTRICT_PRICE_MULTIPLIERS)
        else:
            self.region_price_multipliers = {
                k.lower().strip(): float(v) for k, v in self.region_price_multipliers.items()
            }

        if not 0 <= self.min_suitability <= 100:
            raise ValueError(f"min_suitability {self.min_suitability} out of range [0, 100]")
        if self.planting_month is not None and self.planting_month not in MONTHS:
            raise ValueError(f"planting_month {self.planting_month} out of range [1, 12]")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

        lo, hi = REGION_MULTIPLIER_RANGE
        for region, multiplier in self.region_price_multipliers.items():
            if not lo <= multiplier <= hi:
                raise ValueError(
                    f"Region multiplier for '{region}' is {multiplier}; expected [{lo}, {hi}]"
                )

    def region_multiplier(self, location: Optional[str]) -> float:
        """Price multiplier for a district/region; 1.0 when the region is not listed."""
        if not location:
            return 1.0
        return self.region_price_multipliers.get(location.lower().strip(), 1.0)

    @classmethod
    def from_env(cls, **overrides) -> "EngineConfig":
        """
        Build a config from CROPADVISOR_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        values: Dict = {}
        env = os.environ

        if env.get(ENV_MIN_SUITABILITY):
            values["min_suitability"] = int(env[ENV_MIN_SUITABILITY])
        if env.get(ENV_PLANTING_MONTH):
            values["planting_month"] = int(env[ENV_PLANTING_MONTH])
        if env.get(ENV_MAX_WORKERS):
            values["max_workers"] = int(env[ENV_MAX_WORKERS])

        values.update(overrides)
        logger.debug("Engine config from environment: %s", values)
        return cls(**values)
