"""
Shared fixtures for the unit tests.
"""
from datetime import date

import pytest

from flarewatch.services import ActivityNotifier, FlareManagementService, JsonRecordStore


@pytest.fixture
def today() -> date:
    """Fixed reference date so time-windowed analyses are deterministic."""
    return date(2024, 6, 15)


@pytest.fixture
def store(tmp_path) -> JsonRecordStore:
    """Record store backed by a throwaway file."""
    return JsonRecordStore(tmp_path / "records.json")


@pytest.fixture
def notifier() -> ActivityNotifier:
    return ActivityNotifier()


@pytest.fixture
def service(store, notifier) -> FlareManagementService:
    return FlareManagementService(store=store, notifier=notifier)
