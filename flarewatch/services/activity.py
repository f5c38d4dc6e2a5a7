"""
Activity Notifier

One-way "track activity" hook fired after the user saves something. The
rewards layer subscribes here; the engine never reads anything back.
"""
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

SYMPTOM_RECORD = "symptom-record"
FLARE_RECORD = "flare-record"
LIFESTYLE_RECORD = "lifestyle-record"
DIARY_ENTRY = "diary-entry"

ActivityCallback = Callable[[str], None]


class ActivityNotifier:
    """Fan-out of activity names to subscribed callbacks."""

    def __init__(self):
        self._subscribers: List[ActivityCallback] = []

    def subscribe(self, callback: ActivityCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ActivityCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def notify(self, activity: str) -> None:
        """Deliver ``activity`` to every subscriber; failures are only logged."""
        for callback in list(self._subscribers):
            try:
                callback(activity)
            except Exception as e:
                logger.warning(f"Activity hook failed for '{activity}' (non-critical): {e}")
