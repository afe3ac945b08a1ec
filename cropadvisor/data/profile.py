"""
Pydantic models for the farmer profile consumed by the recommendation engine.

Categorical fields are normalized but not restricted to the known
vocabularies: the scorer awards the "no match" floor for values it does not
recognize instead of rejecting the whole request. Missing required fields, on
the other hand, make scoring meaningless and are rejected up front.
"""

from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from cropadvisor.data.schema import UNKNOWN_SOIL_CONDITION, normalize_choice


class InvalidProfileError(ValueError):
    """A required farmer profile field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid farmer profile field '{field}': {message}")


class SoilIndicators(BaseModel):
    """Farmer-observable soil cues used when the soil condition is unknown."""
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True,
    )

    plant_growth: str = Field(..., description="How existing plants grow: poor, average, good")
    soil_color: str = Field(..., description="dark_black, brown, red, yellow, white_patches")
    water_drainage: str = Field(..., description="very_slow, slow, good, too_fast")
    # Accepted for future heuristics; not scored
    common_weeds: List[str] = Field(default_factory=list)

    @field_validator("plant_growth", "soil_color", "water_drainage", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        if value is None:
            return value
        return normalize_choice(value)


class FarmerProfile(BaseModel):
    """Input schema for a single recommendation request."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [{
                "farm_size": 1.0, "location": "Thrissur", "soil_type": "loamy",
                "water_availability": "moderate", "experience": "beginner",
                "budget": "low", "season": "winter", "organic_preference": False,
                "market_access": "direct", "labor_availability": "family",
                "irrigation_facility": "rain_fed", "soil_condition": "neutral",
            }]
        },
    )

    farm_size: float = Field(..., gt=0, description="Farm size (acres)")
    location: str = Field(..., min_length=1, description="District / region identifier")
    soil_type: str = Field(..., description="clay, sandy, loamy, laterite, alluvial")
    water_availability: str = Field(..., description="abundant, moderate, scarce")
    experience: str = Field(..., description="beginner, intermediate, expert")
    budget: str = Field(..., description="low, medium, high")
    season: str = Field(..., description="summer, monsoon, winter")
    organic_preference: bool = Field(..., description="Prefers organic farming")
    market_access: str = Field(..., description="direct, middleman, cooperative, online")
    labor_availability: str = Field(..., description="family, hired, mixed")
    irrigation_facility: str = Field(..., description="none, drip, sprinkler, flood, rain_fed")
    soil_condition: str = Field(
        ..., description="very_acidic, acidic, neutral, alkaline, very_alkaline, unknown",
    )
    soil_indicators: Optional[SoilIndicators] = None
    previous_crops: List[str] = Field(default_factory=list)

    @field_validator(
        "soil_type", "water_availability", "experience", "budget", "season",
        "market_access", "labor_availability", "irrigation_facility",
        "soil_condition", mode="before",
    )
    @classmethod
    def _normalize(cls, value: Any) -> Any:
        if value is None:
            return value
        return normalize_choice(value)

    @field_validator("location", mode="before")
    @classmethod
    def _strip_location(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @property
    def has_unknown_soil_condition(self) -> bool:
        return self.soil_condition == UNKNOWN_SOIL_CONDITION


def parse_profile(data: Union[FarmerProfile, Mapping[str, Any]]) -> FarmerProfile:
    """
    Build a FarmerProfile from a mapping, or pass an existing one through.

    Raises:
        InvalidProfileError: naming the first offending field.
    """
    if isinstance(data, FarmerProfile):
        return data
    if not isinstance(data, Mapping):
        raise InvalidProfileError("<profile>", f"expected a mapping, got {type(data).__name__}")

    try:
        return FarmerProfile.model_validate(dict(data))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "<profile>"
        raise InvalidProfileError(field, first.get("msg", "invalid value")) from e
