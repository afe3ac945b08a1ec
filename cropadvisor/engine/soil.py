"""
Soil condition inference from farmer-observable cues.

Farmers rarely have a pH reading, but they can describe how plants grow, what
colour the soil is and how fast water drains. These cues are folded into a
running acidity score and mapped onto a coarse soil-condition category. This
is an explainable heuristic, not a lab measurement: it is only consulted when
the farmer reports the condition as unknown.

Note that both drainage extremes, and both yellow and white-patch colours,
push the score in the same direction. White patches usually indicate
alkalinity, so a high score maps to "alkaline" even though the middle of the
range reads as acidic.
"""

import logging
from typing import Dict, List, Optional

from cropadvisor.data.profile import FarmerProfile, SoilIndicators
from cropadvisor.data.schema import UNKNOWN_SOIL_CONDITION

logger = logging.getLogger(__name__)

PLANT_GROWTH_POINTS: Dict[str, int] = {"poor": 2, "average": 0, "good": 0}

SOIL_COLOR_POINTS: Dict[str, int] = {
    "dark_black": -1,
    "brown": 0,
    "red": 1,
    "yellow": 2,
    "white_patches": 3,
}

DRAINAGE_POINTS: Dict[str, int] = {"very_slow": 1, "slow": 0, "good": 0, "too_fast": 2}

SOIL_AMENDMENT_ADVICE: Dict[str, List[str]] = {
    "very_acidic": [
        "Apply lime (2-3 tons per acre) to reduce acidity",
        "Add organic compost to buffer pH",
        "Consider acid-tolerant crops like tea, coffee",
        "Test soil pH before major amendments",
    ],
    "acidic": [
        "Apply lime (1-2 tons per acre) if needed",
        "Good for crops like rice, tea, potatoes",
        "Add wood ash for gentle pH increase",
        "Monitor with simple pH test kit",
    ],
    "neutral": [
        "Excellent condition for most crops",
        "Maintain with regular organic matter",
        "Suitable for vegetables, grains, fruits",
        "No pH correction needed",
    ],
    "alkaline": [
        "Add organic compost to reduce alkalinity",
        "Apply sulfur (50-100 kg per acre)",
        "Good for crops like spinach, cabbage",
        "Improve drainage if waterlogged",
    ],
}


def acidity_score(indicators: SoilIndicators) -> int:
    """Sum the acidity points for a set of indicators; unknown cues add nothing."""
    return (
        PLANT_GROWTH_POINTS.get(indicators.plant_growth, 0)
        + SOIL_COLOR_POINTS.get(indicators.soil_color, 0)
        + DRAINAGE_POINTS.get(indicators.water_drainage, 0)
    )


def infer_soil_condition(indicators: SoilIndicators) -> str:
    """
    Map soil indicators onto a soil condition.

    Acidity score <= 1 -> neutral, 2-3 -> acidic, 4-5 -> very_acidic,
    above 5 -> alkaline.
    """
    score = acidity_score(indicators)
    if score <= 1:
        condition = "neutral"
    elif score <= 3:
        condition = "acidic"
    elif score <= 5:
        condition = "very_acidic"
    else:
        condition = "alkaline"

    logger.debug(
        "Inferred soil condition %s (acidity score %d) from growth=%s color=%s drainage=%s",
        condition, score, indicators.plant_growth,
        indicators.soil_color, indicators.water_drainage,
    )
    return condition


def resolve_soil_condition(profile: FarmerProfile) -> str:
    """
    The soil condition the scorer should use for this profile.

    An explicit condition always wins; indicators are only consulted when the
    farmer reported "unknown". Without indicators the condition stays unknown.
    """
    if not profile.has_unknown_soil_condition:
        return profile.soil_condition
    if profile.soil_indicators is None:
        return UNKNOWN_SOIL_CONDITION
    return infer_soil_condition(profile.soil_indicators)


def soil_amendment_advice(condition: Optional[str]) -> List[str]:
    """Practical amendment steps for a soil condition (empty when none apply)."""
    return list(SOIL_AMENDMENT_ADVICE.get(condition or "", []))
