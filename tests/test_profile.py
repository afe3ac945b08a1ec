"""Tests for the farmer profile model and validation."""

import sys
import pytest
from pathlib import Path
from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cropadvisor.data.profile import FarmerProfile, InvalidProfileError, parse_profile


@pytest.fixture
def payload():
    return {
        "farm_size": 2.5, "location": " Thrissur ", "soil_type": "Loamy ",
        "water_availability": "MODERATE", "experience": "expert", "budget": "medium",
        "season": "monsoon", "organic_preference": True, "market_access": "cooperative",
        "labor_availability": "mixed", "irrigation_facility": "rain_fed",
        "soil_condition": "unknown",
        "soil_indicators": {
            "plant_growth": "Poor", "soil_color": "red", "water_drainage": "slow",
            "common_weeds": ["Mimosa pudica"],
        },
    }


class TestParseProfile:
    def test_normalizes_values(self, payload):
        profile = parse_profile(payload)
        assert profile.location == "Thrissur"
        assert profile.soil_type == "loamy"
        assert profile.water_availability == "moderate"
        assert profile.soil_indicators.plant_growth == "poor"
        assert profile.soil_indicators.common_weeds == ["Mimosa pudica"]
        assert profile.previous_crops == []
        assert profile.has_unknown_soil_condition

    def test_passes_profile_through(self, payload):
        profile = FarmerProfile(**payload)
        assert parse_profile(profile) is profile

    def test_camel_case_keys(self):
        profile = parse_profile({
            "farmSize": 1, "location": "Kollam", "soilType": "laterite",
            "waterAvailability": "abundant", "experience": "beginner", "budget": "low",
            "season": "summer", "organicPreference": False, "marketAccess": "online",
            "laborAvailability": "family", "irrigationFacility": "drip",
            "soilCondition": "acidic", "previousCrops": ["rice"],
        })
        assert profile.farm_size == 1.0
        assert profile.soil_type == "laterite"
        assert profile.previous_crops == ["rice"]

    def test_unknown_enum_values_accepted(self, payload):
        profile = parse_profile({**payload, "soil_type": "peat", "market_access": "barter"})
        assert profile.soil_type == "peat"
        assert profile.market_access == "barter"

    @pytest.mark.parametrize("field", [
        "farm_size", "location", "soil_type", "water_availability", "experience",
        "budget", "season", "organic_preference", "market_access",
        "labor_availability", "irrigation_facility", "soil_condition",
    ])
    def test_missing_required_field(self, payload, field):
        del payload[field]
        with pytest.raises(InvalidProfileError, match="Field required") as exc:
            parse_profile(payload)
        camel = field.split("_")[0] + "".join(p.title() for p in field.split("_")[1:])
        assert exc.value.field in (field, camel)

    def test_none_is_not_a_choice(self, payload):
        with pytest.raises(InvalidProfileError):
            parse_profile({**payload, "irrigation_facility": None})

    def test_non_positive_farm_size(self, payload):
        with pytest.raises(InvalidProfileError) as exc:
            parse_profile({**payload, "farm_size": 0})
        assert exc.value.field in ("farm_size", "farmSize")

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidProfileError, match="expected a mapping"):
            parse_profile(["not", "a", "profile"])

    def test_profile_is_frozen(self, payload):
        profile = parse_profile(payload)
        with pytest.raises(ValidationError):
            profile.budget = "high"
