"""
Correlation Module

Lifestyle-flare correlations and the composed lifestyle risk score.
"""
from .stats import pearson, iso_week_key
from .lifestyle import (
    StressCorrelation,
    FoodCorrelation,
    FoodRecommendation,
    SleepCorrelation,
    analyze_stress_correlation,
    analyze_food_correlation,
    analyze_sleep_correlation,
)
from .emotion import EmotionFlareCorrelation, analyze_emotion_correlation
from .composer import (
    LifestyleLog,
    LifestyleRiskLevel,
    FlareRiskAnalysis,
    analyze_flare_risk,
)

__all__ = [
    "pearson",
    "iso_week_key",
    "StressCorrelation",
    "FoodCorrelation",
    "FoodRecommendation",
    "SleepCorrelation",
    "analyze_stress_correlation",
    "analyze_food_correlation",
    "analyze_sleep_correlation",
    "EmotionFlareCorrelation",
    "analyze_emotion_correlation",
    "LifestyleLog",
    "LifestyleRiskLevel",
    "FlareRiskAnalysis",
    "analyze_flare_risk",
]
