"""Tests for the compatibility scorer."""

import sys
import itertools
import pytest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cropadvisor.data.catalog import CropRecord
from cropadvisor.data.kerala_crops import load_kerala_catalog
from cropadvisor.data.profile import FarmerProfile, SoilIndicators
from cropadvisor.data.schema import (
    DIFFICULTY_LEVELS, EXPERIENCE_LEVELS, IRRIGATION_FACILITIES, LABOR_AVAILABILITY,
    NEED_LEVELS, WATER_AVAILABILITY,
)
from cropadvisor.engine.scorer import (
    EXPERIENCE_MATRIX, FACTOR_MAXIMA, IRRIGATION_MATRIX, LABOR_MATRIX, MAX_SCORE,
    WATER_MATRIX, ScoreBreakdown, budget_score, farm_size_score, market_score,
    matrix_floor, score_crop, soil_condition_score, suitability_score, timing_score,
)


@pytest.fixture
def profile():
    return FarmerProfile(
        farm_size=1, location="Palakkad", soil_type="loamy",
        water_availability="moderate", experience="beginner", budget="low",
        season="winter", organic_preference=False, market_access="direct",
        labor_availability="family", irrigation_facility="rain_fed",
        soil_condition="neutral",
    )


@pytest.fixture
def okra():
    return CropRecord(
        key="okra", name="Okra", scientific_name="Abelmoschus esculentus",
        suitable_soils={"loamy", "sandy"}, suitable_seasons={"winter", "summer"},
        water_need="medium", labor_need="medium", difficulty="easy",
        base_yield=4.5, base_income=35000, base_investment=12000, duration_days=90,
        planting_suitability={9: "very_high"},
        suitable_soil_conditions={"neutral"},
    )


class TestMatrices:
    @pytest.mark.parametrize("matrix,rows,cols", [
        (WATER_MATRIX, NEED_LEVELS, WATER_AVAILABILITY),
        (EXPERIENCE_MATRIX, DIFFICULTY_LEVELS, EXPERIENCE_LEVELS),
        (LABOR_MATRIX, NEED_LEVELS, LABOR_AVAILABILITY),
        (IRRIGATION_MATRIX, NEED_LEVELS, IRRIGATION_FACILITIES),
    ])
    def test_exhaustive_and_never_zero(self, matrix, rows, cols):
        assert set(matrix) == set(rows)
        for row in rows:
            assert set(matrix[row]) == set(cols)
            assert all(v > 0 for v in matrix[row].values())

    def test_matrix_values_within_factor_maxima(self):
        for matrix, factor in [(WATER_MATRIX, "water"), (EXPERIENCE_MATRIX, "experience"),
                               (LABOR_MATRIX, "labor"), (IRRIGATION_MATRIX, "irrigation")]:
            for row in matrix.values():
                assert max(row.values()) <= FACTOR_MAXIMA[factor]

    def test_max_score(self):
        assert MAX_SCORE == 125

    def test_floors(self):
        assert matrix_floor(WATER_MATRIX) == 3
        assert matrix_floor(EXPERIENCE_MATRIX) == 2
        assert matrix_floor(LABOR_MATRIX) == 4
        assert matrix_floor(IRRIGATION_MATRIX) == 1


class TestFactorScores:
    def test_budget_tiers(self):
        assert budget_score(20000, "low") == 10
        assert budget_score(25000, "low") == 7
        assert budget_score(30000, "low") == 7
        assert budget_score(38000, "low") == 4
        assert budget_score(40000, "low") == 1
        assert budget_score(40000, "medium") == 10
        assert budget_score(90000, "high") == 7

    def test_budget_unknown_tier_gets_floor(self):
        assert budget_score(1000, "unlimited") == 1

    def test_farm_size(self):
        assert farm_size_score(0.5, "low") == 10
        assert farm_size_score(0.5, "medium") == 6
        assert farm_size_score(1, "medium") == 10
        assert farm_size_score(0.5, "high") == 4
        assert farm_size_score(1.5, "high") == 7
        assert farm_size_score(2, "high") == 10
        assert farm_size_score(5, "extreme") == 4

    def test_market(self):
        assert market_score("direct", False) == 5
        assert market_score("cooperative", False) == 5
        assert market_score("online", True) == 5
        assert market_score("online", False) == 2
        assert market_score("middleman", True) == 3
        assert market_score("barter", False) == 2

    def test_timing(self):
        assert timing_score("very_high") == 15
        assert timing_score("high") == 12
        assert timing_score("medium") == 8
        assert timing_score("low") == 3
        assert timing_score(None) == 5
        assert timing_score("perfect") == 5

    def test_unrecognized_rating_warns(self):
        with patch("cropadvisor.engine.scorer.logger") as mock_logger:
            assert timing_score("perfect") == 5
            assert timing_score(None) == 5
        mock_logger.warning.assert_called_once()
        assert "perfect" in mock_logger.warning.call_args.args

    def test_soil_condition(self, okra):
        assert soil_condition_score(okra, "neutral") == 10
        assert soil_condition_score(okra, "acidic") == 3
        assert soil_condition_score(okra, "unknown") == 3

        rice_like = CropRecord(
            key="rice", name="Rice", scientific_name="", suitable_soils={"clay"},
            suitable_seasons={"monsoon"}, water_need="high", labor_need="medium",
            difficulty="medium", base_yield=3.5, base_income=45000,
            base_investment=25000, duration_days=120,
            suitable_soil_conditions={"acidic"},
        )
        assert soil_condition_score(rice_like, "neutral") == 8

    def test_soil_condition_without_preference(self, okra):
        no_pref = CropRecord(**{**okra.__dict__, "suitable_soil_conditions": None})
        assert soil_condition_score(no_pref, "neutral") == 5
        assert soil_condition_score(no_pref, "very_acidic") == 5


class TestScoreCrop:
    def test_worked_example(self, profile, okra):
        breakdown = score_crop(profile, okra, planting_month=9)
        assert breakdown.as_dict() == {
            "soil": 20, "season": 15, "water": 15, "experience": 10,
            "budget": 10, "farm_size": 10, "labor": 7, "market": 5,
            "timing": 15, "irrigation": 3, "soil_condition": 10,
        }
        assert breakdown.total == 120
        assert breakdown.suitability == 96

    def test_without_planting_month_uses_unrated_bonus(self, profile, okra):
        breakdown = score_crop(profile, okra)
        assert breakdown.timing == 5
        assert suitability_score(profile, okra) == 88

    def test_other_month_unrated(self, profile, okra):
        assert score_crop(profile, okra, planting_month=3).timing == 5

    def test_worst_case_mismatch_never_zero(self, okra):
        harsh = FarmerProfile(
            farm_size=0.5, location="Idukki", soil_type="clay",
            water_availability="scarce", experience="beginner", budget="low",
            season="monsoon", organic_preference=True, market_access="online",
            labor_availability="family", irrigation_facility="none",
            soil_condition="very_acidic",
        )
        hard_crop = CropRecord(
            key="cardamom", name="Cardamom", scientific_name="",
            suitable_soils={"laterite"}, suitable_seasons={"summer"},
            water_need="high", labor_need="high", difficulty="hard",
            base_yield=0.8, base_income=200000, base_investment=50000,
            duration_days=1095, suitable_soil_conditions={"neutral"},
        )
        breakdown = score_crop(harsh, hard_crop, planting_month=9)
        assert breakdown.water == 3
        assert breakdown.experience == 2
        assert breakdown.labor == 4
        assert breakdown.irrigation == 1
        assert all(v > 0 for v in breakdown.as_dict().values())
        assert 0 <= breakdown.suitability <= 100

    def test_unrecognized_values_degrade_to_floor(self, okra):
        odd = FarmerProfile(
            farm_size=1, location="Palakkad", soil_type="peat",
            water_availability="flooded", experience="guru", budget="unlimited",
            season="spring", organic_preference=False, market_access="barter",
            labor_availability="robots", irrigation_facility="canal",
            soil_condition="neutral",
        )
        breakdown = score_crop(odd, okra)
        assert breakdown.soil == 5
        assert breakdown.season == 3
        assert breakdown.water == 3
        assert breakdown.experience == 2
        assert breakdown.budget == 1
        assert breakdown.labor == 4
        assert breakdown.market == 2
        assert breakdown.irrigation == 1

    def test_inferred_condition_used_when_unknown(self, okra):
        profile = FarmerProfile(
            farm_size=1, location="Palakkad", soil_type="loamy",
            water_availability="moderate", experience="beginner", budget="low",
            season="winter", organic_preference=False, market_access="direct",
            labor_availability="family", irrigation_facility="rain_fed",
            soil_condition="unknown",
            soil_indicators=SoilIndicators(
                plant_growth="poor", soil_color="yellow", water_drainage="too_fast",
            ),
        )
        alkaline_crop = CropRecord(**{**okra.__dict__, "suitable_soil_conditions": {"alkaline"}})
        assert score_crop(profile, alkaline_crop).soil_condition == 10
        assert score_crop(profile, okra).soil_condition == 3

    def test_explicit_condition_overrides_resolution(self, profile, okra):
        assert score_crop(profile, okra, soil_condition="acidic").soil_condition == 3

    def test_bounds_across_catalog(self):
        catalog = load_kerala_catalog()
        options = itertools.product(
            ["clay", "laterite"], ["abundant", "scarce"], ["beginner", "expert"],
            ["low", "high"], ["monsoon", "summer"], ["middleman", "online"],
        )
        for soil, water, exp, budget, season, market in options:
            profile = FarmerProfile(
                farm_size=0.5, location="Wayanad", soil_type=soil,
                water_availability=water, experience=exp, budget=budget,
                season=season, organic_preference=False, market_access=market,
                labor_availability="mixed", irrigation_facility="drip",
                soil_condition="acidic",
            )
            for crop in catalog:
                score = suitability_score(profile, crop, planting_month=9)
                assert 0 <= score <= 100


class TestScoreBreakdown:
    def test_perfect_score(self):
        perfect = ScoreBreakdown(**FACTOR_MAXIMA)
        assert perfect.total == MAX_SCORE
        assert perfect.suitability == 100

    def test_normalizes_to_percentage(self):
        # 50 / 125 -> 40
        low = ScoreBreakdown(soil=5, season=3, water=3, experience=2, budget=1,
                             farm_size=4, labor=4, market=2, timing=15,
                             irrigation=1, soil_condition=10)
        assert low.total == 50
        assert low.suitability == 40
