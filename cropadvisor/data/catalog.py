"""
Crop catalog access: immutable crop records and loaders that build them from
plain records or a pandas DataFrame.

The engine only needs an ordered iterable of CropRecord values; where the
records come from (curated module, CSV, database) is the caller's concern.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from cropadvisor.data.schema import DEFAULT_PLANTING_ADVICE, normalize_choice

logger = logging.getLogger(__name__)


class InvalidCropRecordError(ValueError):
    """A crop record is missing a required field or carries an impossible value."""

    def __init__(self, crop: str, field: str, message: str):
        self.crop = crop
        self.field = field
        super().__init__(f"Invalid crop record '{crop}', field '{field}': {message}")


# ---------- Column mapping from knowledge-base (camelCase) exports ------------
CATALOG_COLUMN_MAP = {
    "scientificName":         "scientific_name",
    "suitableSoils":          "suitable_soils",
    "suitableSeasons":        "suitable_seasons",
    "waterNeed":              "water_need",
    "laborNeed":              "labor_need",
    "baseYield":              "base_yield",
    "baseIncome":             "base_income",
    "baseInvestment":         "base_investment",
    "duration":               "duration_days",
    "suitableSoilConditions": "suitable_soil_conditions",
    "optimalPH":              "optimal_ph",
    "riskFactors":            "risk_factors",
    "schemes":                "supporting_schemes",
    "bestPlantingTime":       "best_planting_time",
    "marketDemand":           "market_demand",
    "highValue":              "high_value",
}

REQUIRED_RECORD_FIELDS = [
    "name", "suitable_soils", "suitable_seasons", "water_need", "labor_need",
    "difficulty", "base_yield", "base_income", "base_investment", "duration_days",
]

# Projected investment is rounded to whole units; the smallest multiplier is 0.90
MIN_BASE_INVESTMENT = 1

TRUE_STRINGS = {"true", "yes", "y", "1"}
FALSE_STRINGS = {"false", "no", "n", "0", ""}


@dataclass(frozen=True)
class CropRecord:
    """Reference data for one crop; all baseline figures are per acre per cycle."""
    key: str
    name: str
    scientific_name: str
    suitable_soils: FrozenSet[str]
    suitable_seasons: FrozenSet[str]
    water_need: str
    labor_need: str
    difficulty: str
    base_yield: float
    base_income: float
    base_investment: float
    duration_days: int
    planting_suitability: Mapping[int, str] = field(default_factory=dict)
    suitable_soil_conditions: Optional[FrozenSet[str]] = None
    optimal_ph: Optional[Tuple[float, float]] = None
    risk_factors: Tuple[str, ...] = ()
    advantages: Tuple[str, ...] = ()
    supporting_schemes: Tuple[str, ...] = ()
    best_planting_time: str = DEFAULT_PLANTING_ADVICE
    market_demand: str = "low"
    high_value: bool = False

    def __post_init__(self):
        # Coerce collections so records stay hashable and immutable
        object.__setattr__(self, "suitable_soils", frozenset(self.suitable_soils))
        object.__setattr__(self, "suitable_seasons", frozenset(self.suitable_seasons))
        if self.suitable_soil_conditions is not None:
            object.__setattr__(
                self, "suitable_soil_conditions", frozenset(self.suitable_soil_conditions),
            )
        if self.optimal_ph is not None:
            object.__setattr__(self, "optimal_ph", tuple(self.optimal_ph))
        object.__setattr__(
            self, "planting_suitability",
            {int(m): normalize_choice(r) for m, r in dict(self.planting_suitability).items()},
        )
        for name in ("risk_factors", "advantages", "supporting_schemes"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

        if self.base_investment < MIN_BASE_INVESTMENT:
            raise InvalidCropRecordError(
                self.key, "base_investment",
                f"must be at least {MIN_BASE_INVESTMENT}, got {self.base_investment}",
            )

    def __hash__(self):
        return hash(self.key)

    def suitability_for(self, month: Optional[int]) -> Optional[str]:
        """Planting rating for a calendar month, or None when unrated."""
        if month is None:
            return None
        return self.planting_suitability.get(month)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["suitable_soils"] = sorted(self.suitable_soils)
        d["suitable_seasons"] = sorted(self.suitable_seasons)
        if self.suitable_soil_conditions is not None:
            d["suitable_soil_conditions"] = sorted(self.suitable_soil_conditions)
        d["planting_suitability"] = dict(self.planting_suitability)
        return d


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    return False


def as_choices(value: Any) -> List[str]:
    """Normalize a list cell (list, set or comma-separated string) into choices."""
    if _is_missing(value):
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [normalize_choice(v) for v in value if str(v).strip()]


def _as_strings(value: Any) -> Tuple[str, ...]:
    if _is_missing(value):
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _as_planting_suitability(record: Mapping[str, Any]) -> Dict[int, str]:
    suitability = record.get("planting_suitability")
    if _is_missing(suitability):
        suitability = {}
    suitability = dict(suitability)
    # Knowledge-base exports only carry a September rating
    september = record.get("septemberSuitability", record.get("september_suitability"))
    if not _is_missing(september) and 9 not in suitability:
        suitability[9] = september
    return suitability


def _as_flag(crop_key: str, name: str, value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
        raise InvalidCropRecordError(crop_key, name, f"not a boolean: {value!r}")
    return bool(value)


def _as_ph_range(value: Any) -> Optional[Tuple[float, float]]:
    if _is_missing(value):
        return None
    if isinstance(value, Mapping):
        return float(value["min"]), float(value["max"])
    lo, hi = value
    return float(lo), float(hi)


def crop_record_from_mapping(record: Mapping[str, Any], key: Optional[str] = None) -> CropRecord:
    """
    Build a CropRecord from a plain mapping (snake_case or knowledge-base camelCase keys).

    Raises:
        InvalidCropRecordError: if a required field is missing.
    """
    data = {CATALOG_COLUMN_MAP.get(k, k): v for k, v in record.items()}
    crop_key = key or data.get("key") or normalize_choice(data.get("name", ""))

    for name in REQUIRED_RECORD_FIELDS:
        if _is_missing(data.get(name)):
            raise InvalidCropRecordError(crop_key or "<unnamed>", name, "required field is missing")

    conditions = data.get("suitable_soil_conditions")
    best_time = data.get("best_planting_time")
    market_demand = data.get("market_demand")
    high_value = data.get("high_value")

    return CropRecord(
        key=normalize_choice(crop_key),
        name=str(data["name"]),
        scientific_name=str(data.get("scientific_name") or ""),
        suitable_soils=frozenset(as_choices(data["suitable_soils"])),
        suitable_seasons=frozenset(as_choices(data["suitable_seasons"])),
        water_need=normalize_choice(data["water_need"]),
        labor_need=normalize_choice(data["labor_need"]),
        difficulty=normalize_choice(data["difficulty"]),
        base_yield=float(data["base_yield"]),
        base_income=float(data["base_income"]),
        base_investment=float(data["base_investment"]),
        duration_days=int(data["duration_days"]),
        planting_suitability=_as_planting_suitability(data),
        suitable_soil_conditions=(
            None if _is_missing(conditions) else frozenset(as_choices(conditions))
        ),
        optimal_ph=_as_ph_range(data.get("optimal_ph")),
        risk_factors=_as_strings(data.get("risk_factors")),
        advantages=_as_strings(data.get("advantages")),
        supporting_schemes=_as_strings(data.get("supporting_schemes")),
        best_planting_time=DEFAULT_PLANTING_ADVICE if _is_missing(best_time) else str(best_time),
        market_demand="low" if _is_missing(market_demand) else normalize_choice(market_demand),
        high_value=(
            False if _is_missing(high_value) else _as_flag(crop_key, "high_value", high_value)
        ),
    )


def catalog_from_records(
    records: Iterable[Mapping[str, Any]],
) -> Tuple[CropRecord, ...]:
    """Build an ordered, immutable catalog from plain records."""
    catalog = tuple(crop_record_from_mapping(r) for r in records)
    logger.debug("Loaded catalog with %d crops", len(catalog))
    return catalog


def catalog_from_frame(df: pd.DataFrame) -> Tuple[CropRecord, ...]:
    """
    Build a catalog from a DataFrame, one crop per row, in row order.

    Knowledge-base camelCase column names are renamed via CATALOG_COLUMN_MAP. List
    columns may hold Python lists or comma-separated strings.
    """
    df = df.rename(columns=CATALOG_COLUMN_MAP)
    return catalog_from_records(df.to_dict(orient="records"))


def catalog_to_frame(catalog: Iterable[CropRecord]) -> pd.DataFrame:
    """Flatten a catalog into a DataFrame (one row per crop, catalog order)."""
    rows = [record.to_dict() for record in catalog]
    if not rows:
        return pd.DataFrame(columns=[f.name for f in CropRecord.__dataclass_fields__.values()])
    return pd.DataFrame(rows)
