"""
Scoring and projection engine.

Modules:
    soil         — Infer soil condition from indicators; amendment advice
    scorer       — Per-crop suitability score from weighted sub-scores
    projector    — Adjust baseline yield/income/investment; derive ROI
    recommender  — Score the whole catalog, filter, sort
"""
