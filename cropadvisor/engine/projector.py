"""
Financial projector: scales a crop's baseline yield, income and investment by
profile-derived multipliers, then derives return on investment.

All multipliers compose by simple product against the baseline. Yield is
rounded to hundredths (tons per acre), money to whole rupees. ROI is always
computed from the rounded figures, never multiplied directly.
"""

import logging
from dataclasses import dataclass

from cropadvisor.data.catalog import CropRecord
from cropadvisor.data.profile import FarmerProfile
from cropadvisor.data.schema import round_half_up

logger = logging.getLogger(__name__)

# ── Yield ──
SOIL_MATCH_YIELD = 1.10
SOIL_MISMATCH_YIELD = 0.80
EXPERIENCE_YIELD = {"beginner": 0.80, "intermediate": 1.00, "expert": 1.20}
WATER_STRESS_YIELD = 0.60      # high-need crop, scarce water
WATER_SURPLUS_YIELD = 1.10     # low-need crop, abundant water
ORGANIC_YIELD = 0.85           # early-transition yield penalty

# ── Income ──
ORGANIC_PRICE_PREMIUM = 1.25
MARKET_CHANNEL_INCOME = {
    "direct": 1.20,
    "cooperative": 1.15,
    "online": 1.10,
    "middleman": 0.90,
}

# ── Investment ──
ORGANIC_INVESTMENT = 1.15
LARGE_FARM_ACRES = 3
LARGE_FARM_INVESTMENT = 0.90   # bulk purchase
SMALL_FARM_ACRES = 1
SMALL_FARM_INVESTMENT = 1.10   # per-acre overhead


@dataclass(frozen=True)
class FinancialProjection:
    """Profile-adjusted per-acre figures for one crop."""
    expected_yield: float
    expected_income: int
    investment_required: int
    roi: int
    duration_days: int


def compute_roi(income: float, investment: float) -> int:
    """Return on investment as a whole percentage."""
    if investment <= 0:
        raise ValueError(f"Investment must be positive to compute ROI, got {investment}")
    return int(round_half_up(100 * (income - investment) / investment))


def yield_multiplier(profile: FarmerProfile, crop: CropRecord) -> float:
    multiplier = SOIL_MATCH_YIELD if profile.soil_type in crop.suitable_soils else SOIL_MISMATCH_YIELD
    multiplier *= EXPERIENCE_YIELD.get(profile.experience, 1.0)

    if crop.water_need == "high" and profile.water_availability == "scarce":
        multiplier *= WATER_STRESS_YIELD
    elif crop.water_need == "low" and profile.water_availability == "abundant":
        multiplier *= WATER_SURPLUS_YIELD

    if profile.organic_preference:
        multiplier *= ORGANIC_YIELD
    return multiplier


def income_multiplier(profile: FarmerProfile, region_multiplier: float = 1.0) -> float:
    multiplier = ORGANIC_PRICE_PREMIUM if profile.organic_preference else 1.0
    multiplier *= MARKET_CHANNEL_INCOME.get(profile.market_access, 1.0)
    return multiplier * region_multiplier


def investment_multiplier(profile: FarmerProfile) -> float:
    multiplier = ORGANIC_INVESTMENT if profile.organic_preference else 1.0
    if profile.farm_size > LARGE_FARM_ACRES:
        multiplier *= LARGE_FARM_INVESTMENT
    elif profile.farm_size < SMALL_FARM_ACRES:
        multiplier *= SMALL_FARM_INVESTMENT
    return multiplier


def project(
    profile: FarmerProfile, crop: CropRecord, region_multiplier: float = 1.0,
) -> FinancialProjection:
    """
    Project per-acre yield, income, investment and ROI for a crop.

    Args:
        profile: Validated farmer profile.
        crop: Crop record supplying the baseline figures.
        region_multiplier: Regional price factor for the farmer's location.
    """
    expected_yield = round_half_up(crop.base_yield * yield_multiplier(profile, crop), 2)
    income = int(round_half_up(crop.base_income * income_multiplier(profile, region_multiplier)))
    investment = int(round_half_up(crop.base_investment * investment_multiplier(profile)))

    projection = FinancialProjection(
        expected_yield=expected_yield,
        expected_income=income,
        investment_required=investment,
        roi=compute_roi(income, investment),
        duration_days=crop.duration_days,
    )
    logger.debug("Projected %s: %s", crop.key, projection)
    return projection
