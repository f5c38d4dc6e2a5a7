"""
Prediction Module

Point-based flare predictors: prodromal symptoms and lupus UV exposure.
"""
from .prodromal import (
    CommonSymptoms,
    ProdromalDiseaseSymptoms,
    ProdromalInput,
    ProdromalPrediction,
    ProdromalRiskLevel,
    predict_from_prodromal_symptoms,
)
from .uv_exposure import (
    DEFAULT_TIME_SLOTS,
    DailyUVIndex,
    UVTimeSlot,
    UVStatus,
    UVRiskLevel,
    UVFlarePrediction,
    uv_status,
    predict_lupus_flare,
    build_daily_uv,
)

__all__ = [
    "CommonSymptoms",
    "ProdromalDiseaseSymptoms",
    "ProdromalInput",
    "ProdromalPrediction",
    "ProdromalRiskLevel",
    "predict_from_prodromal_symptoms",
    "DEFAULT_TIME_SLOTS",
    "DailyUVIndex",
    "UVTimeSlot",
    "UVStatus",
    "UVRiskLevel",
    "UVFlarePrediction",
    "uv_status",
    "predict_lupus_flare",
    "build_daily_uv",
]
