"""
Lifestyle Correlation Engine

Correlates stress, food and sleep logs with recorded flares. Every analysis
is a pure function of the records passed in; empty inputs produce an
INSUFFICIENT_DATA result instead of an error.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, List, Sequence

import numpy as np

from flarewatch.core.base import AnalysisStatus
from flarewatch.models.records import FlareRecord, FoodRecord, SleepRecord, StressRecord
from flarewatch.utils import round_half_up
from .food_reference import inflammatory_score, is_anti_inflammatory
from .stats import iso_week_key, pearson

logger = logging.getLogger(__name__)

INSUFFICIENT_MESSAGE = "Not enough data to analyze yet."

STRESS_LOOKBACK_DAYS = 7
FOOD_WINDOW_HOURS = 48
DEFAULT_SYMPTOM_HOURS = 24.0
RECENT_FOOD_DAYS = 30
SLEEP_LOOKBACK_DAYS = 3
MIN_RECOMMENDED_SLEEP = 7.5


class FoodRecommendation(str, Enum):
    AVOID = "avoid"
    MODERATE = "moderate"
    SAFE = "safe"


@dataclass
class StressCorrelation:
    correlation: float
    average_days_to_flare: float
    high_stress_flare_count: int
    message: str
    status: AnalysisStatus = AnalysisStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "correlation": round(self.correlation, 3),
            "average_days_to_flare": self.average_days_to_flare,
            "high_stress_flare_count": self.high_stress_flare_count,
            "message": self.message,
        }


@dataclass
class FoodCorrelation:
    food: str
    flare_probability: float  # percent
    average_hours_to_symptom: float
    recommendation: FoodRecommendation
    message: str
    occurrences: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "food": self.food,
            "flare_probability": self.flare_probability,
            "average_hours_to_symptom": self.average_hours_to_symptom,
            "recommendation": self.recommendation.value,
            "message": self.message,
            "occurrences": self.occurrences,
        }


@dataclass
class SleepCorrelation:
    correlation: float
    recommended_hours: float
    message: str
    status: AnalysisStatus = AnalysisStatus.OK
    samples: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "correlation": self.correlation,
            "recommended_hours": self.recommended_hours,
            "message": self.message,
        }


def analyze_stress_correlation(
    flares: Sequence[FlareRecord],
    stress_records: Sequence[StressRecord],
) -> StressCorrelation:
    """
    Correlate weekly mean stress with weekly flare counts.

    High stress means above the mean of all stress records. Each flare's lag
    is the first day (1-7) before it with a stress record above that mean.
    """
    if not flares or not stress_records:
        return StressCorrelation(
            correlation=0.0,
            average_days_to_flare=0.0,
            high_stress_flare_count=0,
            message=INSUFFICIENT_MESSAGE,
            status=AnalysisStatus.INSUFFICIENT_DATA,
        )

    weekly_stress: Dict[str, List[float]] = defaultdict(list)
    for record in stress_records:
        weekly_stress[iso_week_key(record.date)].append(record.level)

    weekly_flares: Dict[str, int] = defaultdict(int)
    for flare in flares:
        weekly_flares[iso_week_key(flare.date)] += 1

    threshold = float(np.mean([r.level for r in stress_records]))

    weeks = sorted(weekly_stress)
    weekly_means = [float(np.mean(weekly_stress[w])) for w in weeks]
    flare_counts = [weekly_flares.get(w, 0) for w in weeks]

    high_stress_weeks = 0
    high_stress_flare_count = 0
    for mean_level, count in zip(weekly_means, flare_counts):
        if mean_level > threshold:
            high_stress_weeks += 1
            high_stress_flare_count += count

    levels_by_day: Dict[date, List[float]] = defaultdict(list)
    for record in stress_records:
        levels_by_day[record.date].append(record.level)

    lags = []
    for flare in flares:
        for days in range(1, STRESS_LOOKBACK_DAYS + 1):
            levels = levels_by_day.get(flare.date - timedelta(days=days), [])
            if any(level > threshold for level in levels):
                lags.append(days)
                break
    average_lag = float(np.mean(lags)) if lags else 0.0

    correlation = pearson(weekly_means, flare_counts)

    if high_stress_weeks > 0:
        message = f"{high_stress_flare_count} flare(s) occurred in high-stress weeks"
        if average_lag > 0:
            message += (
                f"\nOn average your flares start {int(round_half_up(average_lag))} day(s) "
                "after a high-stress day"
            )
    else:
        message = "No clear pattern between stress and flares was found."

    logger.debug(f"Stress correlation r={correlation:.3f} over {len(weeks)} week(s)")
    return StressCorrelation(
        correlation=correlation,
        average_days_to_flare=round_half_up(average_lag, 1),
        high_stress_flare_count=high_stress_flare_count,
        message=message,
    )


def analyze_food_correlation(
    flares: Sequence[FlareRecord],
    food_records: Sequence[FoodRecord],
    today: date,
) -> List[FoodCorrelation]:
    """
    Per-food flare probability and symptom onset.

    A meal counts as followed by a flare when a flare is dated 0-48 hours
    after the meal's timestamp. Results are sorted by flare probability,
    highest first; ties keep first-seen order.
    """
    if not food_records:
        return []

    counts: Dict[str, int] = {}
    flare_counts: Dict[str, int] = defaultdict(int)
    onset_hours: Dict[str, List[float]] = defaultdict(list)
    window = timedelta(hours=FOOD_WINDOW_HOURS)

    for record in food_records:
        eaten_at = record.eaten_at
        followed = any(
            timedelta(0) <= flare.onset - eaten_at <= window for flare in flares
        )
        for food in record.foods:
            counts[food] = counts.get(food, 0) + 1
            if record.symptoms_after is not None:
                onset_hours[food].append(record.symptoms_after.hours)
            if followed:
                flare_counts[food] += 1

    recent_counts: Dict[str, int] = defaultdict(int)
    for record in food_records:
        if (today - record.date).days <= RECENT_FOOD_DAYS:
            for food in record.foods:
                recent_counts[food] += 1

    correlations = []
    for food, count in counts.items():
        probability = flare_counts[food] / count * 100
        hours = onset_hours[food]
        average_hours = float(np.mean(hours)) if hours else DEFAULT_SYMPTOM_HOURS
        score = inflammatory_score(food)

        if probability > 50 or score > 0.5:
            recommendation = FoodRecommendation.AVOID
            message = (
                f"{int(round_half_up(probability))}% chance of worsening within "
                f"{int(round_half_up(average_hours))} hours after eating {food}"
            )
        elif probability > 30 or score > 0.3:
            recommendation = FoodRecommendation.MODERATE
            message = f"Eat {food} with caution."
        else:
            recommendation = FoodRecommendation.SAFE
            if is_anti_inflammatory(food):
                message = f"{food} is anti-inflammatory and safe to eat."
            else:
                message = f"{food} appears safe to eat."

        if recent_counts[food] < count * 0.5:
            message += f"\nFlare frequency appears reduced since cutting back on {food}"

        correlations.append(FoodCorrelation(
            food=food,
            flare_probability=round_half_up(probability, 1),
            average_hours_to_symptom=round_half_up(average_hours, 1),
            recommendation=recommendation,
            message=message,
            occurrences=count,
        ))

    return sorted(correlations, key=lambda c: c.flare_probability, reverse=True)


def analyze_sleep_correlation(
    flares: Sequence[FlareRecord],
    sleep_records: Sequence[SleepRecord],
) -> SleepCorrelation:
    """
    Correlate sleep duration in the 3 days before each flare with flares.

    Only pre-flare nights are sampled and each is paired with a positive
    flare indicator, so the indicator series is constant.
    """
    if not flares or not sleep_records:
        return SleepCorrelation(
            correlation=0.0,
            recommended_hours=MIN_RECOMMENDED_SLEEP,
            message=INSUFFICIENT_MESSAGE,
            status=AnalysisStatus.INSUFFICIENT_DATA,
        )

    first_by_day: Dict[date, SleepRecord] = {}
    for record in sleep_records:
        first_by_day.setdefault(record.date, record)

    hours: List[float] = []
    indicators: List[float] = []
    for flare in flares:
        for days in range(1, SLEEP_LOOKBACK_DAYS + 1):
            record = first_by_day.get(flare.date - timedelta(days=days))
            if record is not None:
                hours.append(record.total_hours)
                indicators.append(1.0)

    average_sleep = float(np.mean([r.total_hours for r in sleep_records]))
    correlation = pearson(hours, indicators) if hours else 0.0
    recommended = max(MIN_RECOMMENDED_SLEEP, average_sleep + 0.5)

    message = f"Sleep duration correlation: {correlation:.2f}"
    if abs(correlation) > 0.5:
        if correlation < 0:
            message += "\nShorter sleep is associated with a higher chance of flares."
    else:
        message += "\nNo clear relationship between sleep and flares was found."

    return SleepCorrelation(
        correlation=round_half_up(correlation, 2),
        recommended_hours=round_half_up(recommended, 1),
        message=message,
        samples=hours,
    )
