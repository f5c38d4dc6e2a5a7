"""
Flare Diary Module

Trigger mining and clinic reports from the flare diary.
"""
from .triggers import (
    FlareTrigger,
    TriggerCategory,
    HospitalReport,
    Trend,
    update_flare_triggers,
    generate_hospital_report,
)

__all__ = [
    "FlareTrigger",
    "TriggerCategory",
    "HospitalReport",
    "Trend",
    "update_flare_triggers",
    "generate_hospital_report",
]
