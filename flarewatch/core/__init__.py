"""
Core Engine

Pure scoring, prediction and correlation functions. Nothing in this package
performs I/O; callers pass already-loaded records.
"""
from .base import Disease, AnalysisStatus
from .errors import (
    FlareWatchError,
    MalformedRecordError,
    UnknownDiseaseError,
    UnknownRecordKindError,
)

__all__ = [
    "Disease",
    "AnalysisStatus",
    "FlareWatchError",
    "MalformedRecordError",
    "UnknownDiseaseError",
    "UnknownRecordKindError",
]
