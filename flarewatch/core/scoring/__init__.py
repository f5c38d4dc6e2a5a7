"""
Scoring Module

Weighted per-disease flare risk scores with explainable contributions.
"""
from .normalizer import normalize, Orientation
from .disease_configs import IndicatorSpec, RiskModelConfig, ModelShape, MODEL_CONFIGS
from .classifier import RiskTier, RiskClassification, classify, classify_for
from .disease_models import (
    ScoredContribution,
    RiskResult,
    Driver,
    TopDriverResult,
    FullContributionModel,
    TopDriverModel,
    DiseaseAssessment,
    DISEASE_MODELS,
    score,
    get_model,
    assess_inputs,
    assess_observation,
)

__all__ = [
    "normalize",
    "Orientation",
    "IndicatorSpec",
    "RiskModelConfig",
    "ModelShape",
    "MODEL_CONFIGS",
    "RiskTier",
    "RiskClassification",
    "classify",
    "classify_for",
    "ScoredContribution",
    "RiskResult",
    "Driver",
    "TopDriverResult",
    "FullContributionModel",
    "TopDriverModel",
    "DiseaseAssessment",
    "DISEASE_MODELS",
    "score",
    "get_model",
    "assess_inputs",
    "assess_observation",
]
