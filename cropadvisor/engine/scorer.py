"""
Compatibility scorer: how well one crop fits one farmer profile.

ALGORITHM:
  Eleven independent sub-scores, each against a fixed maximum, are summed and
  normalized:  suitability = round(100 * total / 125)

      soil 20 | season 15 | water 15 | experience 10 | budget 10 | farm_size 10
      labor 10 | market 5 | timing 15 | irrigation 5 | soil_condition 10

  The compatibility matrices never award zero, so a single bad dimension
  cannot exclude a crop on its own. Unrecognized categorical values get the
  factor's floor score and a warning instead of an exception.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Mapping, Optional

from cropadvisor.data.catalog import CropRecord
from cropadvisor.data.profile import FarmerProfile
from cropadvisor.data.schema import BUDGET_CEILINGS, round_half_up
from cropadvisor.engine.soil import resolve_soil_condition

logger = logging.getLogger(__name__)

# ── Factor maxima ─────────────────────────────────────────────────────────────
FACTOR_MAXIMA: Dict[str, int] = {
    "soil": 20,
    "season": 15,
    "water": 15,
    "experience": 10,
    "budget": 10,
    "farm_size": 10,
    "labor": 10,
    "market": 5,
    "timing": 15,
    "irrigation": 5,
    "soil_condition": 10,
}
MAX_SCORE = sum(FACTOR_MAXIMA.values())  # 125

SOIL_MATCH, SOIL_MISMATCH = 20, 5
SEASON_MATCH, SEASON_MISMATCH = 15, 3

# ── Compatibility matrices: [crop attribute][farmer attribute] ────────────────
WATER_MATRIX: Dict[str, Dict[str, int]] = {
    "low":    {"abundant": 15, "moderate": 15, "scarce": 12},
    "medium": {"abundant": 15, "moderate": 15, "scarce": 8},
    "high":   {"abundant": 15, "moderate": 12, "scarce": 3},
}

EXPERIENCE_MATRIX: Dict[str, Dict[str, int]] = {
    "easy":   {"beginner": 10, "intermediate": 10, "expert": 10},
    "medium": {"beginner": 5,  "intermediate": 10, "expert": 10},
    "hard":   {"beginner": 2,  "intermediate": 7,  "expert": 10},
}

LABOR_MATRIX: Dict[str, Dict[str, int]] = {
    "low":    {"family": 10, "hired": 10, "mixed": 10},
    "medium": {"family": 7,  "hired": 10, "mixed": 10},
    "high":   {"family": 4,  "hired": 10, "mixed": 8},
}

IRRIGATION_MATRIX: Dict[str, Dict[str, int]] = {
    "low":    {"none": 5, "drip": 5, "sprinkler": 5, "flood": 5, "rain_fed": 5},
    "medium": {"none": 2, "drip": 5, "sprinkler": 5, "flood": 4, "rain_fed": 3},
    "high":   {"none": 1, "drip": 5, "sprinkler": 4, "flood": 5, "rain_fed": 2},
}

# Fraction of the budget ceiling -> points (checked in order)
BUDGET_TIERS = ((0.7, 10), (1.0, 7), (1.3, 4))
BUDGET_FLOOR = 1

FARM_SIZE_FLOOR = 4

MARKET_FULL_ACCESS = {"direct", "cooperative"}
MARKET_MIDDLEMAN_SCORE = 3
MARKET_FLOOR = 2

TIMING_POINTS: Dict[str, int] = {"very_high": 15, "high": 12, "medium": 8, "low": 3}
TIMING_UNRATED = 5

CONDITION_MATCH = 10
CONDITION_NEUTRAL_TOLERATED = 8
CONDITION_MISMATCH = 3
CONDITION_NO_PREFERENCE = 5


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points awarded per factor for one (profile, crop) pair."""
    soil: int
    season: int
    water: int
    experience: int
    budget: int
    farm_size: int
    labor: int
    market: int
    timing: int
    irrigation: int
    soil_condition: int

    @property
    def total(self) -> int:
        return sum(self.as_dict().values())

    @property
    def suitability(self) -> int:
        """Normalized 0-100 suitability score."""
        return int(round_half_up(100 * self.total / MAX_SCORE))

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def matrix_floor(matrix: Mapping[str, Mapping[str, int]]) -> int:
    """Smallest value anywhere in a compatibility matrix."""
    return min(min(row.values()) for row in matrix.values())


def _matrix_score(
    matrix: Mapping[str, Mapping[str, int]], crop_value: str, farmer_value: str, factor: str,
) -> int:
    try:
        return matrix[crop_value][farmer_value]
    except KeyError:
        floor = matrix_floor(matrix)
        logger.warning(
            "Unrecognized %s combination (%r, %r); awarding floor score %d",
            factor, crop_value, farmer_value, floor,
        )
        return floor


def water_score(water_need: str, availability: str) -> int:
    return _matrix_score(WATER_MATRIX, water_need, availability, "water")


def experience_score(difficulty: str, experience: str) -> int:
    return _matrix_score(EXPERIENCE_MATRIX, difficulty, experience, "experience")


def labor_score(labor_need: str, availability: str) -> int:
    return _matrix_score(LABOR_MATRIX, labor_need, availability, "labor")


def irrigation_score(water_need: str, irrigation: str) -> int:
    return _matrix_score(IRRIGATION_MATRIX, water_need, irrigation, "irrigation")


def budget_score(investment: float, budget: str) -> int:
    """Score the crop's baseline investment against the farmer's budget ceiling."""
    ceiling = BUDGET_CEILINGS.get(budget)
    if ceiling is None:
        logger.warning("Unrecognized budget tier %r; awarding floor score %d", budget, BUDGET_FLOOR)
        return BUDGET_FLOOR
    for fraction, points in BUDGET_TIERS:
        if investment <= ceiling * fraction:
            return points
    return BUDGET_FLOOR


def farm_size_score(farm_size: float, labor_need: str) -> int:
    """Larger farms absorb labor-hungry crops better."""
    if labor_need == "low":
        return 10
    if labor_need == "medium":
        return 10 if farm_size >= 1 else 6
    if labor_need == "high":
        if farm_size >= 2:
            return 10
        return 7 if farm_size >= 1 else 4
    logger.warning("Unrecognized labor need %r; awarding floor score %d", labor_need, FARM_SIZE_FLOOR)
    return FARM_SIZE_FLOOR


def market_score(market_access: str, high_value: bool) -> int:
    if market_access in MARKET_FULL_ACCESS:
        return 5
    if market_access == "online" and high_value:
        return 5
    if market_access == "middleman":
        return MARKET_MIDDLEMAN_SCORE
    return MARKET_FLOOR


def timing_score(rating: Optional[str]) -> int:
    """Planting-window bonus for the configured month; unrated crops get a flat 5."""
    if rating is None:
        return TIMING_UNRATED
    if rating not in TIMING_POINTS:
        logger.warning("Unrecognized planting rating %r; awarding unrated score %d", rating, TIMING_UNRATED)
        return TIMING_UNRATED
    return TIMING_POINTS[rating]


def soil_condition_score(crop: CropRecord, condition: str) -> int:
    preferred = crop.suitable_soil_conditions
    if preferred is None:
        return CONDITION_NO_PREFERENCE
    if condition in preferred:
        return CONDITION_MATCH
    # Most crops tolerate neutral soil even when they prefer something else
    if condition == "neutral":
        return CONDITION_NEUTRAL_TOLERATED
    return CONDITION_MISMATCH


def score_crop(
    profile: FarmerProfile,
    crop: CropRecord,
    planting_month: Optional[int] = None,
    soil_condition: Optional[str] = None,
) -> ScoreBreakdown:
    """
    Score one crop against a farmer profile.

    Args:
        profile: Validated farmer profile.
        crop: Crop record from the catalog.
        planting_month: Calendar month (1-12) used for the timing bonus.
        soil_condition: Pre-resolved soil condition; resolved from the
            profile (explicit or inferred) when omitted.

    Returns:
        ScoreBreakdown with per-factor points.
    """
    if soil_condition is None:
        soil_condition = resolve_soil_condition(profile)

    breakdown = ScoreBreakdown(
        soil=SOIL_MATCH if profile.soil_type in crop.suitable_soils else SOIL_MISMATCH,
        season=SEASON_MATCH if profile.season in crop.suitable_seasons else SEASON_MISMATCH,
        water=water_score(crop.water_need, profile.water_availability),
        experience=experience_score(crop.difficulty, profile.experience),
        budget=budget_score(crop.base_investment, profile.budget),
        farm_size=farm_size_score(profile.farm_size, crop.labor_need),
        labor=labor_score(crop.labor_need, profile.labor_availability),
        market=market_score(profile.market_access, crop.high_value),
        timing=timing_score(crop.suitability_for(planting_month)),
        irrigation=irrigation_score(crop.water_need, profile.irrigation_facility),
        soil_condition=soil_condition_score(crop, soil_condition),
    )

    logger.debug(
        "Scored %s: %d/%d -> %d %s",
        crop.key, breakdown.total, MAX_SCORE, breakdown.suitability, breakdown.as_dict(),
    )
    return breakdown


def suitability_score(
    profile: FarmerProfile,
    crop: CropRecord,
    planting_month: Optional[int] = None,
    soil_condition: Optional[str] = None,
) -> int:
    """Normalized 0-100 suitability of a crop for a profile."""
    return score_crop(profile, crop, planting_month, soil_condition).suitability
