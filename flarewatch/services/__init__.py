"""
Services Module

Record persistence, the activity hook and the orchestrating flare service.
"""
from .record_store import JsonRecordStore, upsert, RECORD_KINDS
from .activity import ActivityNotifier
from .flare_service import FlareManagementService, DailyFlareIndex, compute_daily_index

__all__ = [
    "JsonRecordStore",
    "upsert",
    "RECORD_KINDS",
    "ActivityNotifier",
    "FlareManagementService",
    "DailyFlareIndex",
    "compute_daily_index",
]
