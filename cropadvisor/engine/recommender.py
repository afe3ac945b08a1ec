"""
Recommendation assembler: scores every crop in the catalog against a farmer
profile, keeps the ones above the suitability threshold, projects their
finances and returns them ranked by score.

Usage:
    engine = RecommendationEngine(EngineConfig(planting_month=9))
    recs = engine.recommend(profile, load_kerala_catalog())

The result is never truncated; picking a top-N is the caller's choice. An
empty catalog, or no crop clearing the threshold, yields an empty list.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from cropadvisor.config import EngineConfig
from cropadvisor.data.catalog import CropRecord
from cropadvisor.data.profile import FarmerProfile, parse_profile
from cropadvisor.engine.projector import project
from cropadvisor.engine.scorer import score_crop
from cropadvisor.engine.soil import resolve_soil_condition

logger = logging.getLogger(__name__)


@dataclass
class Recommendation:
    """A crop worth planting, with its score and adjusted per-acre figures."""
    crop_key: str
    crop_name: str
    scientific_name: str
    suitability_score: int
    expected_yield: float
    expected_income: int
    investment_required: int
    roi: int
    growth_duration_days: int
    difficulty: str
    water_requirement: str
    labor_requirement: str
    market_demand: str
    risk_factors: List[str] = field(default_factory=list)
    advantages: List[str] = field(default_factory=list)
    best_planting_time: str = ""
    supporting_schemes: List[str] = field(default_factory=list)
    score_breakdown: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RecommendationEngine:
    """
    Rank a crop catalog for one farmer profile.

    The planting-window bonus only applies when config.planting_month is set.
    With the default (None) every crop gets the flat unrated timing score, so a
    crop rated very_high for the month scores 10 points (8 suitability) lower
    than it would with the month configured.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def recommend(
        self,
        profile: Union[FarmerProfile, Mapping[str, Any]],
        catalog: Iterable[CropRecord],
    ) -> List[Recommendation]:
        """
        Score, filter and rank every crop in the catalog.

        Args:
            profile: FarmerProfile, or a mapping validated into one.
            catalog: Ordered crop records; order breaks score ties.

        Returns:
            Recommendations sorted by suitability descending.

        Raises:
            InvalidProfileError: if the profile is missing a required field.
        """
        profile = parse_profile(profile)
        crops = self._unique_crops(catalog)
        soil_condition = resolve_soil_condition(profile)
        region_multiplier = self.config.region_multiplier(profile.location)

        def evaluate(crop: CropRecord) -> Optional[Recommendation]:
            return self._evaluate(profile, crop, soil_condition, region_multiplier)

        if self.config.max_workers > 1 and len(crops) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                evaluated = list(pool.map(evaluate, crops))
        else:
            evaluated = [evaluate(crop) for crop in crops]

        # Sort on (score desc, catalog position) so ties keep catalog order
        # however the entries were evaluated
        ranked = sorted(
            ((idx, rec) for idx, rec in enumerate(evaluated) if rec is not None),
            key=lambda pair: (-pair[1].suitability_score, pair[0]),
        )
        results = [rec for _, rec in ranked]

        logger.info(
            "Scored %d crops for %s (soil condition: %s); %d at or above %d",
            len(crops), profile.location, soil_condition,
            len(results), self.config.min_suitability,
        )
        return results

    def _unique_crops(self, catalog: Iterable[CropRecord]) -> List[CropRecord]:
        seen = set()
        crops = []
        for crop in catalog:
            if crop.key in seen:
                logger.warning("Duplicate crop '%s' in catalog; keeping first occurrence", crop.key)
                continue
            seen.add(crop.key)
            crops.append(crop)
        return crops

    def _evaluate(
        self,
        profile: FarmerProfile,
        crop: CropRecord,
        soil_condition: str,
        region_multiplier: float,
    ) -> Optional[Recommendation]:
        breakdown = score_crop(
            profile, crop,
            planting_month=self.config.planting_month,
            soil_condition=soil_condition,
        )
        score = breakdown.suitability
        if score < self.config.min_suitability:
            logger.debug("Dropping %s: score %d below threshold", crop.key, score)
            return None

        projection = project(profile, crop, region_multiplier)
        return Recommendation(
            crop_key=crop.key,
            crop_name=crop.name,
            scientific_name=crop.scientific_name,
            suitability_score=score,
            expected_yield=projection.expected_yield,
            expected_income=projection.expected_income,
            investment_required=projection.investment_required,
            roi=projection.roi,
            growth_duration_days=projection.duration_days,
            difficulty=crop.difficulty,
            water_requirement=crop.water_need,
            labor_requirement=crop.labor_need,
            market_demand=crop.market_demand,
            risk_factors=list(crop.risk_factors),
            advantages=list(crop.advantages),
            best_planting_time=crop.best_planting_time,
            supporting_schemes=list(crop.supporting_schemes),
            score_breakdown=breakdown.as_dict(),
        )


def recommend(
    profile: Union[FarmerProfile, Mapping[str, Any]],
    catalog: Iterable[CropRecord],
    config: Optional[EngineConfig] = None,
) -> List[Recommendation]:
    """
    Rank a catalog for a profile with a one-off engine.

    Pass EngineConfig(planting_month=...) to score planting windows; the
    default config leaves the month unset and awards the unrated timing score.
    """
    return RecommendationEngine(config).recommend(profile, catalog)


RECOMMENDATION_COLUMNS: Tuple[str, ...] = tuple(Recommendation.__dataclass_fields__)


def recommendations_to_frame(recommendations: Iterable[Recommendation]) -> pd.DataFrame:
    """Tabulate recommendations in ranked order (one row per crop)."""
    rows = [rec.to_dict() for rec in recommendations]
    return pd.DataFrame(rows, columns=list(RECOMMENDATION_COLUMNS))
