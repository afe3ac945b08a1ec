"""
Reference data for the crop advisory engine.

Modules:
    schema        — Categorical vocabularies, budget ceilings, rounding helper
    profile       — FarmerProfile / SoilIndicators pydantic models
    catalog       — CropRecord and catalog loaders (records, DataFrames)
    kerala_crops  — Curated Kerala catalog and district price multipliers
    validation    — Catalog validation suite
"""
