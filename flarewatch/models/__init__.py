"""
Data Models

Pydantic models for stored records and API payloads.
"""
from .records import (
    SymptomObservation,
    DiseaseSpecificSymptoms,
    FlareRecord,
    StressRecord,
    FoodRecord,
    SymptomsAfterMeal,
    SleepRecord,
    EmotionRecord,
    FlareDiaryEntry,
    Medication,
    LabResult,
    EnvironmentalReading,
)

__all__ = [
    "SymptomObservation",
    "DiseaseSpecificSymptoms",
    "FlareRecord",
    "StressRecord",
    "FoodRecord",
    "SymptomsAfterMeal",
    "SleepRecord",
    "EmotionRecord",
    "FlareDiaryEntry",
    "Medication",
    "LabResult",
    "EnvironmentalReading",
]
