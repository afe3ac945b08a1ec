"""
Crop advisory engine: scores a catalog of crops against a farmer profile and
projects yield, income, investment and return for the ones worth planting.

Modules:
    config              — Engine configuration (threshold, planting month, region prices)
    data.schema         — Categorical vocabularies and shared constants
    data.profile        — Farmer profile model and validation
    data.catalog        — Crop records and catalog loaders
    data.kerala_crops   — Curated Kerala crop catalog and district price multipliers
    data.validation     — Catalog validation suite
    engine.soil         — Soil condition inference from farmer-observable cues
    engine.scorer       — Multi-factor compatibility scoring
    engine.projector    — Yield / income / investment projection
    engine.recommender  — Ranked recommendation assembly
"""

__version__ = "1.0.0"
