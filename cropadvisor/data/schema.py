"""
Canonical vocabularies and shared constants for the crop advisory engine.
"""

import math
from typing import Dict, List


# ---------- Farmer profile vocabularies ----------
SOIL_TYPES: List[str] = ["clay", "sandy", "loamy", "laterite", "alluvial"]
WATER_AVAILABILITY: List[str] = ["abundant", "moderate", "scarce"]
EXPERIENCE_LEVELS: List[str] = ["beginner", "intermediate", "expert"]
BUDGET_TIERS: List[str] = ["low", "medium", "high"]
SEASONS: List[str] = ["summer", "monsoon", "winter"]
MARKET_ACCESS: List[str] = ["direct", "middleman", "cooperative", "online"]
LABOR_AVAILABILITY: List[str] = ["family", "hired", "mixed"]
IRRIGATION_FACILITIES: List[str] = ["none", "drip", "sprinkler", "flood", "rain_fed"]

SOIL_CONDITIONS: List[str] = [
    "very_acidic", "acidic", "neutral", "alkaline", "very_alkaline",
]
UNKNOWN_SOIL_CONDITION = "unknown"

# ---------- Soil indicator vocabularies ----------
PLANT_GROWTH: List[str] = ["poor", "average", "good"]
SOIL_COLORS: List[str] = ["dark_black", "brown", "red", "yellow", "white_patches"]
WATER_DRAINAGE: List[str] = ["very_slow", "slow", "good", "too_fast"]

# ---------- Crop record vocabularies ----------
NEED_LEVELS: List[str] = ["low", "medium", "high"]
DIFFICULTY_LEVELS: List[str] = ["easy", "medium", "hard"]
PLANTING_RATINGS: List[str] = ["very_high", "high", "medium", "low"]
MARKET_DEMAND_LEVELS: List[str] = ["low", "medium", "high"]

# Maximum comfortable per-acre investment for each budget tier (rupees)
BUDGET_CEILINGS: Dict[str, int] = {
    "low": 30000,
    "medium": 60000,
    "high": 100000,
}

DEFAULT_PLANTING_ADVICE = "Consult local agricultural officer"

MONTHS = range(1, 13)


def normalize_choice(value) -> str:
    """Normalize a categorical value to lowercase, stripped form."""
    if not isinstance(value, str):
        return str(value).lower().strip()
    return value.lower().strip()


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round with halves going up (2.5 -> 3, -2.5 -> -2).

    Python's built-in round() uses banker's rounding, which would make
    projected figures and ROI drift by one unit on exact halves.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
