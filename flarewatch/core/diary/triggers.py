"""
Flare Diary Analysis

Mines probable triggers from the flare diary and the lifestyle logs, and
summarizes a reporting period for a clinic visit.
"""
import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from flarewatch.models.records import (
    EnvironmentalReading,
    FlareDiaryEntry,
    FoodRecord,
    SleepRecord,
    StressRecord,
)
from flarewatch.utils import round_half_up

logger = logging.getLogger(__name__)

HIGH_STRESS_LEVEL = 7
SHORT_SLEEP_HOURS = 6
LOOKBACK_DAYS = 3
FOOD_WINDOW_HOURS = 48
COLD_LIMIT_C = 5
HOT_LIMIT_C = 30
DEFAULT_MAX_TRIGGERS = 10
REPORT_TOP_TRIGGERS = 5


class TriggerCategory(str, Enum):
    FOOD = "food"
    STRESS = "stress"
    ENVIRONMENT = "environment"
    SLEEP = "sleep"
    OTHER = "other"


_CATEGORY_KEYWORDS = [
    (TriggerCategory.FOOD, ("food", "intake", "meal")),
    (TriggerCategory.STRESS, ("stress", "emotion")),
    (TriggerCategory.ENVIRONMENT, ("temperature", "humidity", "pressure", "weather")),
    (TriggerCategory.SLEEP, ("sleep",)),
]

_RECOMMENDATIONS = [
    ("stress", "Practice stress management techniques"),
    ("sleep", "Get enough sleep"),
    ("dairy", "Avoid dairy products"),
    ("temperature", "Keep indoor temperature comfortable"),
]


def categorize_trigger(name: str) -> TriggerCategory:
    lowered = name.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category
    return TriggerCategory.OTHER


def trigger_recommendation(name: str) -> str:
    lowered = name.lower()
    for keyword, text in _RECOMMENDATIONS:
        if keyword in lowered:
            return text
    return "Avoid this factor where possible"


def trigger_id(name: str) -> str:
    """Stable slug used as the trigger id."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "trigger"


@dataclass
class FlareTrigger:
    name: str
    category: TriggerCategory
    recommendation: str
    frequency: int = 0
    confidence: float = 0.0  # percent
    last_occurrence: Optional[date] = None

    @property
    def id(self) -> str:
        return trigger_id(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "confidence": round(self.confidence, 1),
            "frequency": self.frequency,
            "last_occurrence": self.last_occurrence.isoformat() if self.last_occurrence else None,
            "recommendation": self.recommendation,
        }


class _TriggerTally:
    """Insertion-ordered trigger counts."""

    def __init__(self):
        self.triggers: Dict[str, FlareTrigger] = {}

    def add(self, name: str, count: int = 1, category: Optional[TriggerCategory] = None,
            recommendation: Optional[str] = None, seen_on: Optional[date] = None) -> None:
        trigger = self.triggers.get(name)
        if trigger is None:
            trigger = FlareTrigger(
                name=name,
                category=category or categorize_trigger(name),
                recommendation=recommendation or trigger_recommendation(name),
            )
            self.triggers[name] = trigger
        trigger.frequency += count
        if seen_on is not None and (trigger.last_occurrence is None or seen_on > trigger.last_occurrence):
            trigger.last_occurrence = seen_on


def update_flare_triggers(
    diary: Sequence[FlareDiaryEntry],
    stress_records: Sequence[StressRecord],
    food_records: Sequence[FoodRecord],
    sleep_records: Sequence[SleepRecord],
    environment: Sequence[EnvironmentalReading],
    limit: int = DEFAULT_MAX_TRIGGERS,
) -> List[FlareTrigger]:
    """
    Rank likely flare triggers.

    Counts the triggers written in the diary, then adds evidence from the
    logs: stress >= 7 or sleep < 6 h within 0-3 days before a flare, meals
    0-48 h before, and extreme temperature on the flare date.

    Returns:
        At most ``limit`` triggers by descending frequency
    """
    if not diary:
        return []

    tally = _TriggerTally()

    for entry in diary:
        for name in entry.estimated_triggers:
            tally.add(name, seen_on=entry.date)

    for entry in diary:
        stressed = [
            s for s in stress_records
            if 0 <= (entry.date - s.date).days <= LOOKBACK_DAYS and s.level >= HIGH_STRESS_LEVEL
        ]
        if stressed:
            tally.add("High stress", count=len(stressed), category=TriggerCategory.STRESS,
                      recommendation="Practice stress management and get enough rest",
                      seen_on=entry.date)

    window = timedelta(hours=FOOD_WINDOW_HOURS)
    for entry in diary:
        onset = datetime.combine(entry.date, time())
        for meal in food_records:
            if timedelta(0) <= onset - meal.eaten_at <= window:
                for food in meal.foods:
                    tally.add(f"{food} intake", category=TriggerCategory.FOOD,
                              recommendation=f"Avoid or cut down on {food}",
                              seen_on=entry.date)

    for entry in diary:
        short_nights = [
            s for s in sleep_records
            if 0 <= (entry.date - s.date).days <= LOOKBACK_DAYS and s.total_hours < SHORT_SLEEP_HOURS
        ]
        if short_nights:
            tally.add("Sleep deficit", count=len(short_nights), category=TriggerCategory.SLEEP,
                      recommendation="Get enough sleep (7-8 hours recommended)",
                      seen_on=entry.date)

    readings = {r.date: r for r in reversed(list(environment))}
    for entry in diary:
        reading = readings.get(entry.date)
        if reading is not None and (reading.temperature < COLD_LIMIT_C or reading.temperature > HOT_LIMIT_C):
            tally.add("Extreme temperature", category=TriggerCategory.ENVIRONMENT,
                      recommendation="Keep indoor temperature steady and dress for the weather",
                      seen_on=entry.date)

    total = len(diary)
    for trigger in tally.triggers.values():
        trigger.confidence = min(100.0, trigger.frequency / total * 100)

    ranked = sorted(tally.triggers.values(), key=lambda t: t.frequency, reverse=True)
    logger.debug(f"Mined {len(ranked)} trigger(s) from {total} diary entries")
    return ranked[:limit]


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


@dataclass
class LabSeries:
    name: str
    values: List[Dict[str, str]] = field(default_factory=list)
    trend: Trend = Trend.STABLE

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "values": self.values, "trend": self.trend.value}


@dataclass
class HospitalReport:
    period_start: date
    period_end: date
    flare_count: int
    average_severity: float
    top_triggers: List[FlareTrigger]
    medication_adherence: int  # percent
    test_results: List[LabSeries]
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": {
                "start": self.period_start.isoformat(),
                "end": self.period_end.isoformat(),
            },
            "flare_count": self.flare_count,
            "average_severity": self.average_severity,
            "top_triggers": [t.to_dict() for t in self.top_triggers],
            "medication_adherence": self.medication_adherence,
            "test_results": [s.to_dict() for s in self.test_results],
            "summary": self.summary,
        }


def _parse_number(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def _trend(values: List[Dict[str, str]]) -> Trend:
    if len(values) < 2:
        return Trend.STABLE
    first = _parse_number(values[0]["value"])
    last = _parse_number(values[-1]["value"])
    if first is None or last is None:
        return Trend.STABLE
    if last < first * 0.9:
        return Trend.IMPROVING
    if last > first * 1.1:
        return Trend.WORSENING
    return Trend.STABLE


def generate_hospital_report(
    diary: Sequence[FlareDiaryEntry],
    today: date,
    period_days: int = 30,
) -> HospitalReport:
    """
    Summarize the last ``period_days`` of the flare diary for a clinician.

    Lab values are grouped per test in diary order. A test is improving when
    its last value drops below 90% of the first and worsening above 110%.
    """
    start = today - timedelta(days=period_days)
    entries = [e for e in diary if start <= e.date <= today]

    flare_count = len(entries)
    average_severity = (
        sum(e.severity for e in entries) / flare_count if flare_count else 0.0
    )

    counts: Dict[str, int] = {}
    for entry in entries:
        for name in entry.estimated_triggers:
            counts[name] = counts.get(name, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:REPORT_TOP_TRIGGERS]
    top_triggers = [
        FlareTrigger(
            name=name,
            category=categorize_trigger(name),
            recommendation=trigger_recommendation(name),
            frequency=frequency,
            confidence=frequency / flare_count * 100,
        )
        for name, frequency in ranked
    ]

    doses = [m.adherence for e in entries for m in e.medications]
    adherence = (sum(100 for taken in doses if taken) / len(doses)) if doses else 0.0

    series: Dict[str, List[Dict[str, str]]] = defaultdict(list)
    for entry in entries:
        for result in entry.test_results:
            series[result.name].append({"date": result.date.isoformat(), "value": result.value})
    lab_series = [LabSeries(name=name, values=values, trend=_trend(values)) for name, values in series.items()]

    summary = (
        f"Over the last {period_days} days: {flare_count} flare(s), "
        f"average severity {average_severity:.1f}/10. "
    )
    if top_triggers:
        summary += f"Main triggers: {', '.join(t.name for t in top_triggers)}. "
    summary += f"Medication adherence {int(round_half_up(adherence))}%."

    return HospitalReport(
        period_start=start,
        period_end=today,
        flare_count=flare_count,
        average_severity=round_half_up(average_severity, 1),
        top_triggers=top_triggers,
        medication_adherence=int(round_half_up(adherence)),
        test_results=lab_series,
        summary=summary,
    )
