"""
Curated Kerala crop catalog — per-acre baseline figures, agronomic needs and
support schemes for crops commonly grown across Kerala districts.

Baselines are approximate per-acre, per-cycle figures in rupees (yield in
tons, except coconut which is counted in nuts). Planting ratings are given for
September, the second-crop (Virippu) planting window.
"""

from typing import Dict, Tuple

from cropadvisor.data.catalog import CropRecord, catalog_from_records

SEPTEMBER = 9

# ---- District price multipliers ----
# Relative farm-gate price premium by district (hill and urban markets pay more)
DISTRICT_PRICE_MULTIPLIERS: Dict[str, float] = {
    "thiruvananthapuram": 1.10,
    "kollam": 1.05,
    "pathanamthitta": 1.00,
    "alappuzha": 1.05,
    "kottayam": 1.10,
    "idukki": 1.20,
    "ernakulam": 1.15,
    "thrissur": 1.10,
    "palakkad": 1.00,
    "malappuram": 1.00,
    "kozhikode": 1.05,
    "wayanad": 1.15,
    "kannur": 1.00,
    "kasaragod": 1.00,
}

KERALA_CROP_DATA: Dict[str, Dict] = {
    "rice": {
        "name": "Rice",
        "scientific_name": "Oryza sativa",
        "base_yield": 3.5,
        "base_income": 45000,
        "base_investment": 25000,
        "duration_days": 120,
        "water_need": "high",
        "labor_need": "medium",
        "suitable_soils": ["clay", "loamy", "alluvial"],
        "suitable_seasons": ["monsoon", "winter"],
        "planting_suitability": {SEPTEMBER: "high"},
        "optimal_ph": (5.5, 7.0),
        "suitable_soil_conditions": ["acidic", "neutral"],
        "difficulty": "medium",
        "risk_factors": ["Blast disease", "Brown plant hopper", "Flooding"],
        "advantages": ["High demand", "Government support", "Traditional knowledge"],
        "supporting_schemes": ["PM-KISAN", "Rice subsidy scheme"],
        "best_planting_time": "September-October for second crop (Virippu)",
        "market_demand": "high",
    },
    "coconut": {
        "name": "Coconut",
        "scientific_name": "Cocos nucifera",
        "base_yield": 8000,             # nuts per acre per year
        "base_income": 60000,
        "base_investment": 15000,
        "duration_days": 2555,          # 7 years to maturity
        "water_need": "medium",
        "labor_need": "low",
        "suitable_soils": ["sandy", "loamy", "laterite"],
        "suitable_seasons": ["monsoon", "summer"],
        "planting_suitability": {SEPTEMBER: "medium"},
        "difficulty": "easy",
        "risk_factors": ["Root wilt", "Rhinoceros beetle", "Red palm weevil"],
        "advantages": ["Long-term income", "Multiple products", "Low maintenance"],
        "supporting_schemes": ["Coconut Development Board schemes", "Crop insurance"],
        "best_planting_time": "September-October good for sapling planting after monsoon",
        "market_demand": "high",
    },
    "pepper": {
        "name": "Black Pepper",
        "scientific_name": "Piper nigrum",
        "base_yield": 1.5,
        "base_income": 180000,
        "base_investment": 45000,
        "duration_days": 1095,          # 3 years
        "water_need": "medium",
        "labor_need": "high",
        "suitable_soils": ["loamy", "laterite"],
        "suitable_seasons": ["monsoon"],
        "planting_suitability": {SEPTEMBER: "medium"},
        "difficulty": "hard",
        "risk_factors": ["Foot rot", "Pollu beetle", "Price volatility"],
        "advantages": ["High value crop", "Export potential", "Spice board support"],
        "supporting_schemes": ["Spice Board subsidies", "Export promotion schemes"],
        "best_planting_time": "September-October after good monsoon rains",
        "market_demand": "medium",
        "high_value": True,
    },
    "cardamom": {
        "name": "Cardamom",
        "scientific_name": "Elettaria cardamomum",
        "base_yield": 0.8,
        "base_income": 200000,
        "base_investment": 50000,
        "duration_days": 1095,
        "water_need": "high",
        "labor_need": "high",
        "suitable_soils": ["loamy", "laterite"],
        "suitable_seasons": ["monsoon"],
        "difficulty": "hard",
        "risk_factors": ["Capsule rot", "Thrips", "Shade management"],
        "advantages": ["Premium spice", "High returns", "Hill station suitable"],
        "supporting_schemes": ["Cardamom Board schemes", "Hill area development"],
        "best_planting_time": "April-May (Pre-monsoon)",
        "market_demand": "medium",
        "high_value": True,
    },
    "banana": {
        "name": "Banana",
        "scientific_name": "Musa acuminata",
        "base_yield": 25,
        "base_income": 75000,
        "base_investment": 30000,
        "duration_days": 365,
        "water_need": "high",
        "labor_need": "medium",
        "suitable_soils": ["loamy", "alluvial"],
        "suitable_seasons": ["monsoon", "summer"],
        "difficulty": "medium",
        "risk_factors": ["Panama disease", "Nematodes", "Wind damage"],
        "advantages": ["Quick returns", "High nutrition", "Processing potential"],
        "supporting_schemes": ["Banana mission", "Horticulture schemes"],
        "best_planting_time": "February-March, September-October",
        "market_demand": "high",
    },
    "rubber": {
        "name": "Rubber",
        "scientific_name": "Hevea brasiliensis",
        "base_yield": 1.8,
        "base_income": 85000,
        "base_investment": 20000,
        "duration_days": 2555,
        "water_need": "medium",
        "labor_need": "medium",
        "suitable_soils": ["laterite", "loamy"],
        "suitable_seasons": ["monsoon"],
        "difficulty": "medium",
        "risk_factors": ["Leaf fall diseases", "White root disease", "Market fluctuation"],
        "advantages": ["Steady income", "Long productive life", "Board support"],
        "supporting_schemes": ["Rubber Board schemes", "Replanting subsidies"],
        "best_planting_time": "April-May (Monsoon onset)",
        "market_demand": "medium",
    },
    "ginger": {
        "name": "Ginger",
        "scientific_name": "Zingiber officinale",
        "base_yield": 4.5,
        "base_income": 135000,
        "base_investment": 40000,
        "duration_days": 270,
        "water_need": "medium",
        "labor_need": "high",
        "suitable_soils": ["loamy", "laterite"],
        "suitable_seasons": ["monsoon"],
        "difficulty": "medium",
        "risk_factors": ["Soft rot", "Rhizome fly", "Storage losses"],
        "advantages": ["High value", "Medicinal properties", "Processing demand"],
        "supporting_schemes": ["Spice development schemes", "Organic certification support"],
        "best_planting_time": "April-May (Pre-monsoon)",
        "market_demand": "high",
        "high_value": True,
    },
    "turmeric": {
        "name": "Turmeric",
        "scientific_name": "Curcuma longa",
        "base_yield": 3.8,
        "base_income": 110000,
        "base_investment": 35000,
        "duration_days": 270,
        "water_need": "medium",
        "labor_need": "medium",
        "suitable_soils": ["loamy", "alluvial"],
        "suitable_seasons": ["monsoon"],
        "planting_suitability": {SEPTEMBER: "high"},
        "difficulty": "medium",
        "risk_factors": ["Leaf blotch", "Scale insects", "Curing challenges"],
        "advantages": ["Export quality", "Health benefits", "Value addition"],
        "supporting_schemes": ["Turmeric mission", "Quality improvement schemes"],
        "best_planting_time": "September-October is ideal for turmeric planting",
        "market_demand": "high",
    },
    "okra": {
        "name": "Okra (Lady's Finger)",
        "scientific_name": "Abelmoschus esculentus",
        "base_yield": 4.5,
        "base_income": 35000,
        "base_investment": 12000,
        "duration_days": 90,
        "water_need": "medium",
        "labor_need": "medium",
        "suitable_soils": ["loamy", "sandy", "alluvial"],
        "suitable_seasons": ["summer", "winter"],
        "planting_suitability": {SEPTEMBER: "very_high"},
        "optimal_ph": (6.0, 8.0),
        "suitable_soil_conditions": ["neutral", "alkaline"],
        "difficulty": "easy",
        "risk_factors": ["Yellow vein mosaic virus", "Fruit borer", "Root rot"],
        "advantages": ["Quick harvest", "High demand", "Multiple harvests"],
        "supporting_schemes": ["Vegetable development schemes", "Market linkage support"],
        "best_planting_time": "September-October perfect for post-monsoon planting",
    },
    "beans": {
        "name": "French Beans",
        "scientific_name": "Phaseolus vulgaris",
        "base_yield": 3.2,
        "base_income": 28000,
        "base_investment": 10000,
        "duration_days": 75,
        "water_need": "medium",
        "labor_need": "medium",
        "suitable_soils": ["loamy", "sandy"],
        "suitable_seasons": ["winter", "summer"],
        "planting_suitability": {SEPTEMBER: "very_high"},
        "optimal_ph": (6.0, 7.5),
        "suitable_soil_conditions": ["neutral", "alkaline"],
        "difficulty": "easy",
        "risk_factors": ["Anthracnose", "Bean fly", "Rust"],
        "advantages": ["Fast growing", "Protein rich", "Good market price"],
        "supporting_schemes": ["Vegetable mission", "Nutritional garden schemes"],
        "best_planting_time": "September-November ideal for beans cultivation",
    },
    "tomato": {
        "name": "Tomato",
        "scientific_name": "Solanum lycopersicum",
        "base_yield": 8.5,
        "base_income": 55000,
        "base_investment": 18000,
        "duration_days": 110,
        "water_need": "medium",
        "labor_need": "high",
        "suitable_soils": ["loamy", "sandy", "alluvial"],
        "suitable_seasons": ["winter", "summer"],
        "planting_suitability": {SEPTEMBER: "very_high"},
        "optimal_ph": (6.0, 7.0),
        "suitable_soil_conditions": ["neutral"],
        "difficulty": "medium",
        "risk_factors": ["Late blight", "Fruit borer", "Wilt diseases"],
        "advantages": ["High yield potential", "Good market demand", "Processing opportunities"],
        "supporting_schemes": ["Vegetable cluster development", "Processing support schemes"],
        "best_planting_time": "September planting ensures December-January harvest during peak prices",
    },
}


def load_kerala_catalog() -> Tuple[CropRecord, ...]:
    """Build the curated Kerala catalog, in the order crops are listed above."""
    return catalog_from_records(
        dict(data, key=key) for key, data in KERALA_CROP_DATA.items()
    )
