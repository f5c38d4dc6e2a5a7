"""
Aggregate Flare Risk Composer

Combines the last three days of lifestyle logs with the correlation
outputs into a single 0-100 lifestyle risk score. The stress threshold here
is the absolute level 7, unlike the relative threshold used by the stress
correlation.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

from flarewatch.models.records import FlareRecord, FoodRecord, SleepRecord, StressRecord, days_before
from flarewatch.utils import mean_or_none
from .food_reference import ANTI_INFLAMMATORY_SUGGESTION
from .lifestyle import (
    MIN_RECOMMENDED_SLEEP,
    FoodCorrelation,
    FoodRecommendation,
    SleepCorrelation,
    StressCorrelation,
)

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 3
HIGH_STRESS_LEVEL = 7.0

STRESS_POINTS = 30
SLEEP_POINTS = 25
FOOD_POINTS = 25
PATTERN_POINTS = 20

SIMILAR_PATTERN = "Pattern similar to the days before your last flare"


class LifestyleRiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, value: float) -> "LifestyleRiskLevel":
        if value >= 70:
            return cls.CRITICAL
        elif value >= 50:
            return cls.HIGH
        elif value >= 30:
            return cls.MEDIUM
        else:
            return cls.LOW


@dataclass
class LifestyleLog:
    """Everything the composer reads, already loaded from the store."""
    flares: List[FlareRecord] = field(default_factory=list)
    stress_records: List[StressRecord] = field(default_factory=list)
    food_records: List[FoodRecord] = field(default_factory=list)
    sleep_records: List[SleepRecord] = field(default_factory=list)


@dataclass
class RiskFactors:
    stress: bool = False
    food: bool = False
    sleep: bool = False
    pattern: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "stress": self.stress,
            "food": self.food,
            "sleep": self.sleep,
            "pattern": self.pattern,
        }


@dataclass
class FlareRiskAnalysis:
    """Lifestyle-based flare risk for the next few days."""
    risk_level: LifestyleRiskLevel
    risk_score: float
    factors: RiskFactors
    message: str
    recommendations: List[str] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
            "factors": self.factors.to_dict(),
            "message": self.message,
            "recommendations": self.recommendations,
            "risk_factors": self.risk_factors,
        }


@dataclass
class _WindowSummary:
    stress: Optional[float]
    sleep: Optional[float]
    foods: Set[str]


def _summarize(data: LifestyleLog, in_window: Callable[[date], bool]) -> _WindowSummary:
    return _WindowSummary(
        stress=mean_or_none(r.level for r in data.stress_records if in_window(r.date)),
        sleep=mean_or_none(r.total_hours for r in data.sleep_records if in_window(r.date)),
        foods={f for r in data.food_records if in_window(r.date) for f in r.foods},
    )


def _pattern_matches(current: _WindowSummary, before: _WindowSummary) -> int:
    matches = 0
    if current.stress is not None and before.stress is not None:
        if abs(current.stress - before.stress) < 1:
            matches += 1
    if current.sleep is not None and before.sleep is not None:
        if abs(current.sleep - before.sleep) < 1:
            matches += 1
    if current.foods & before.foods:
        matches += 1
    return matches


def analyze_flare_risk(
    data: LifestyleLog,
    stress_correlation: Optional[StressCorrelation],
    food_correlations: Sequence[FoodCorrelation],
    sleep_correlation: Optional[SleepCorrelation],
    today: date,
) -> FlareRiskAnalysis:
    """
    Compose the lifestyle flare risk.

    Args:
        data: Loaded flare and lifestyle records
        stress_correlation: Stress analysis output; only its lag is quoted,
            the stress factor itself uses the absolute threshold
        food_correlations: Food analysis output, used for avoid tags
        sleep_correlation: Sleep analysis output, used for recommended hours
        today: Reference date; the window covers records dated today-3 through today

    Returns:
        FlareRiskAnalysis with score capped at 100
    """
    window_start = today - timedelta(days=LOOKBACK_DAYS)
    current = _summarize(data, lambda day: window_start <= day <= today)

    total = 0
    factors = RiskFactors()
    risk_factors: List[str] = []

    if current.stress is not None and current.stress > HIGH_STRESS_LEVEL:
        factors.stress = True
        total += STRESS_POINTS
        risk_factors.append("High stress level")

    recommended_sleep = (
        sleep_correlation.recommended_hours if sleep_correlation is not None else MIN_RECOMMENDED_SLEEP
    )
    if current.sleep is not None and current.sleep < recommended_sleep - 1:
        factors.sleep = True
        total += SLEEP_POINTS
        risk_factors.append("Sleep deficit")

    recent_foods = [
        food for r in data.food_records if window_start <= r.date <= today for food in r.foods
    ]
    risky_foods = [
        c.food for c in food_correlations
        if c.recommendation == FoodRecommendation.AVOID and c.food in recent_foods
    ]
    if risky_foods:
        factors.food = True
        total += FOOD_POINTS
        risk_factors.append(f"Trigger foods eaten: {', '.join(risky_foods)}")

    if len(data.flares) >= 2:
        last_flare = max(data.flares, key=lambda f: f.date)
        before_days = set(days_before(last_flare.date, LOOKBACK_DAYS))
        before = _summarize(data, lambda day: day in before_days)
        if _pattern_matches(current, before) >= 2:
            factors.pattern = True
            total += PATTERN_POINTS
            risk_factors.append(SIMILAR_PATTERN)

    score = min(100, total)
    level = LifestyleRiskLevel.from_score(score)

    if level in (LifestyleRiskLevel.CRITICAL, LifestyleRiskLevel.HIGH):
        lines = ["Flare risk is high!"]
    elif level == LifestyleRiskLevel.MEDIUM:
        lines = ["There is a chance of a flare."]
    else:
        lines = ["Flare risk is currently low."]
    if risk_factors:
        lines.append(", ".join(risk_factors))
    if factors.pattern:
        lines.append("This resembles the days before your last flare.")
    if factors.stress and stress_correlation is not None and stress_correlation.average_days_to_flare > 0:
        lines.append(
            f"Your flares have typically followed high stress by "
            f"{stress_correlation.average_days_to_flare:g} day(s)."
        )

    recommendations: List[str] = []
    if factors.stress:
        recommendations.append("Practice stress management (meditation, exercise, rest)")
    if factors.sleep:
        recommendations.append(f"Get at least {recommended_sleep:g} hours of sleep")
    if factors.food:
        recommendations.append(f"Avoid these foods: {', '.join(risky_foods)}")
        recommendations.append(ANTI_INFLAMMATORY_SUGGESTION)
    if not recommendations:
        recommendations.append("Maintain your current routine")

    logger.debug(f"Lifestyle risk score={score} level={level.value}")
    return FlareRiskAnalysis(
        risk_level=level,
        risk_score=score,
        factors=factors,
        message="\n".join(lines),
        recommendations=recommendations,
        risk_factors=risk_factors,
    )
