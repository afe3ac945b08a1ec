"""
Catalog validation suite — standalone checks over a crop catalog with clear
pass/fail reporting, run before a catalog is handed to the engine.

The engine itself tolerates unknown categorical values and missing optional
fields; this suite is where such gaps are surfaced to the catalog maintainer.
"""

import logging
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from cropadvisor.data.catalog import (
    REQUIRED_RECORD_FIELDS, CropRecord, as_choices, catalog_to_frame,
)
from cropadvisor.data.schema import (
    DIFFICULTY_LEVELS, MARKET_DEMAND_LEVELS, MONTHS, NEED_LEVELS, PLANTING_RATINGS,
    SEASONS, SOIL_CONDITIONS, SOIL_TYPES,
)

logger = logging.getLogger(__name__)

# Single-valued categorical columns and their vocabularies
CATEGORICAL_COLUMNS: Dict[str, List[str]] = {
    "water_need": NEED_LEVELS,
    "labor_need": NEED_LEVELS,
    "difficulty": DIFFICULTY_LEVELS,
    "market_demand": MARKET_DEMAND_LEVELS,
}

# Set-valued categorical columns and their vocabularies
SET_COLUMNS: Dict[str, List[str]] = {
    "suitable_soils": SOIL_TYPES,
    "suitable_seasons": SEASONS,
    "suitable_soil_conditions": SOIL_CONDITIONS,
}

POSITIVE_COLUMNS = ["base_yield", "base_income", "base_investment", "duration_days"]

OPTIONAL_COLUMNS = ["suitable_soil_conditions", "optimal_ph"]


class ValidationResult:
    """Container for a single validation check result."""

    def __init__(self, name: str, passed: bool, severity: str = "critical",
                 details: str = "", stats: dict = None):
        self.name = name
        self.passed = passed
        self.severity = severity  # "critical" | "warning" | "info"
        self.details = details
        self.stats = stats or {}

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "passed": self.passed,
            "severity": self.severity,
            "details": self.details,
            "stats": self.stats,
        }


def _is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and np.isnan(value):
        return True
    return False


class CatalogValidationSuite:
    """
    Validation checks for a crop catalog flattened into a DataFrame
    (see catalog_to_frame). Checks are chainable; run_all() runs every one.
    """

    def __init__(self, df: pd.DataFrame):
        self.df = df
        self.results: List[ValidationResult] = []

    def check_required_columns(self) -> "CatalogValidationSuite":
        """Every field the scorer needs must be a column."""
        missing = [c for c in REQUIRED_RECORD_FIELDS if c not in self.df.columns]
        self.results.append(ValidationResult(
            name="required_columns_present",
            passed=len(missing) == 0,
            severity="critical",
            details=f"Missing columns: {missing}" if missing else "All required columns present",
            stats={"missing_columns": missing, "total_required": len(REQUIRED_RECORD_FIELDS)},
        ))
        return self

    def check_no_duplicate_crops(self) -> "CatalogValidationSuite":
        """Crop keys must be unique; the engine keeps only the first of a duplicate."""
        if "key" not in self.df.columns:
            return self
        dups = sorted(self.df.loc[self.df["key"].duplicated(), "key"].unique().tolist())
        self.results.append(ValidationResult(
            name="no_duplicate_crops",
            passed=len(dups) == 0,
            severity="warning",
            details=f"Duplicate crop keys: {dups}" if dups else "No duplicates",
            stats={"duplicate_keys": dups},
        ))
        return self

    def check_positive_baselines(self) -> "CatalogValidationSuite":
        """Baseline figures and durations must be strictly positive."""
        violations = {}
        for col in POSITIVE_COLUMNS:
            if col not in self.df.columns:
                continue
            vals = pd.to_numeric(self.df[col], errors="coerce")
            bad = self.df.loc[~(vals > 0), "key"] if "key" in self.df.columns else vals[~(vals > 0)]
            if len(bad):
                violations[col] = bad.astype(str).tolist()
        self.results.append(ValidationResult(
            name="baselines_positive",
            passed=len(violations) == 0,
            severity="critical",
            details=(f"Non-positive values in {list(violations.keys())}"
                     if violations else "All baselines positive"),
            stats={"violations": violations},
        ))
        return self

    def check_categorical_values(self) -> "CatalogValidationSuite":
        """Categorical values should come from the known vocabularies."""
        unknown: Dict[str, List[str]] = {}
        for col, vocab in CATEGORICAL_COLUMNS.items():
            if col in self.df.columns:
                values = set(self.df[col].dropna().unique()) - set(vocab)
                if values:
                    unknown[col] = sorted(values)
        for col, vocab in SET_COLUMNS.items():
            if col not in self.df.columns:
                continue
            values = set()
            # List cells may also be comma-separated strings
            for cell in self.df[col]:
                if not _is_empty(cell):
                    values |= set(as_choices(cell)) - set(vocab)
            if values:
                unknown[col] = sorted(values)
        self.results.append(ValidationResult(
            name="categorical_values_known",
            passed=len(unknown) == 0,
            severity="warning",
            details=(f"Unknown values in {list(unknown.keys())}; these score as no match"
                     if unknown else "All categorical values recognized"),
            stats={"unknown_values": unknown},
        ))
        return self

    def check_planting_ratings(self) -> "CatalogValidationSuite":
        """Planting ratings must use valid months and rating levels."""
        if "planting_suitability" not in self.df.columns:
            return self
        invalid = {}
        for key, cell in zip(self.df.get("key", self.df.index), self.df["planting_suitability"]):
            if _is_empty(cell):
                continue
            bad = {m: r for m, r in dict(cell).items()
                   if m not in MONTHS or r not in PLANTING_RATINGS}
            if bad:
                invalid[str(key)] = bad
        self.results.append(ValidationResult(
            name="planting_ratings_valid",
            passed=len(invalid) == 0,
            severity="warning",
            details=f"Invalid planting ratings for {list(invalid.keys())}" if invalid else "All planting ratings valid",
            stats={"invalid_ratings": invalid},
        ))
        return self

    def check_optional_fields(self) -> "CatalogValidationSuite":
        """Report crops relying on default handling for optional fields."""
        missing = {}
        for col in OPTIONAL_COLUMNS:
            if col not in self.df.columns:
                missing[col] = len(self.df)
                continue
            missing[col] = int(sum(_is_empty(v) for v in self.df[col]))
        self.results.append(ValidationResult(
            name="optional_fields_coverage",
            passed=True,
            severity="info",
            details=", ".join(f"{col}: {n} crops use defaults" for col, n in missing.items()),
            stats={"crops_using_defaults": missing},
        ))
        return self

    def run_all(self) -> List[ValidationResult]:
        """Run all validation checks."""
        (
            self.check_required_columns()
            .check_no_duplicate_crops()
            .check_positive_baselines()
            .check_categorical_values()
            .check_planting_ratings()
            .check_optional_fields()
        )
        return self.results

    def report(self) -> dict:
        """Generate validation report."""
        if not self.results:
            self.run_all()

        critical_failures = sum(
            1 for r in self.results if not r.passed and r.severity == "critical"
        )
        warnings = sum(
            1 for r in self.results if not r.passed and r.severity == "warning"
        )
        total = len(self.results)
        passed = sum(1 for r in self.results if r.passed)

        for r in self.results:
            if not r.passed:
                logger.warning("[%s] %s: %s", r.severity.upper(), r.name, r.details)

        return {
            "summary": {
                "total_checks": total,
                "passed": passed,
                "critical_failures": critical_failures,
                "warnings": warnings,
                "overall_status": "PASS" if critical_failures == 0 else "FAIL",
            },
            "checks": [r.to_dict() for r in self.results],
        }


def validate_catalog(catalog: Iterable[CropRecord]) -> dict:
    """Flatten a catalog and run the full validation suite on it."""
    df = catalog_to_frame(catalog)
    report = CatalogValidationSuite(df).report()
    summary = report["summary"]
    logger.info(
        "Catalog validation: %d/%d passed, %d critical failures, %d warnings (%s)",
        summary["passed"], summary["total_checks"], summary["critical_failures"],
        summary["warnings"], summary["overall_status"],
    )
    return report
