"""
UV-Exposure Flare Predictor

Lupus flare risk from a short ultraviolet forecast (four time slots per
day) and self-reported sun exposure. Tiering uses the uncapped point total;
the reported score is capped at 100.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from flarewatch.core.base import AnalysisStatus

logger = logging.getLogger(__name__)

DEFAULT_TIME_SLOTS = ["06-09", "09-12", "12-15", "15-18"]

SAFE_EXPOSURE_HOURS = 2.0
CONSECUTIVE_PATTERN_BONUS = 20

BASELINE_RECOMMENDATIONS = [
    "Use sunscreen (SPF 30 or higher)",
    "Wear long sleeves, a hat and sunglasses",
    "Stay in the shade when outdoors",
]


class UVStatus(str, Enum):
    """Ordinal UV index categories."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    VERY_HIGH = "veryHigh"
    DANGER = "danger"

    @property
    def points(self) -> int:
        return _SLOT_POINTS[self]

    @property
    def is_elevated(self) -> bool:
        return self in (UVStatus.HIGH, UVStatus.VERY_HIGH, UVStatus.DANGER)

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_SLOT_POINTS = {
    UVStatus.DANGER: 25,
    UVStatus.VERY_HIGH: 15,
    UVStatus.HIGH: 10,
    UVStatus.NORMAL: 5,
    UVStatus.LOW: 0,
}

_STATUS_LABELS = {
    UVStatus.LOW: "Low",
    UVStatus.NORMAL: "Moderate",
    UVStatus.HIGH: "High",
    UVStatus.VERY_HIGH: "Very high",
    UVStatus.DANGER: "Extreme",
}


def uv_status(uv_index: float) -> UVStatus:
    """Categorize a numeric UV index."""
    if uv_index >= 11:
        return UVStatus.DANGER
    elif uv_index >= 8:
        return UVStatus.VERY_HIGH
    elif uv_index >= 6:
        return UVStatus.HIGH
    elif uv_index >= 3:
        return UVStatus.NORMAL
    else:
        return UVStatus.LOW


class UVRiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, raw_score: float) -> "UVRiskLevel":
        if raw_score >= 80:
            return cls.CRITICAL
        elif raw_score >= 60:
            return cls.VERY_HIGH
        elif raw_score >= 40:
            return cls.HIGH
        elif raw_score >= 20:
            return cls.MEDIUM
        else:
            return cls.LOW

    @property
    def probability(self) -> int:
        return {
            UVRiskLevel.CRITICAL: 85,
            UVRiskLevel.VERY_HIGH: 70,
            UVRiskLevel.HIGH: 50,
            UVRiskLevel.MEDIUM: 30,
            UVRiskLevel.LOW: 10,
        }[self]


@dataclass
class UVTimeSlot:
    time_range: str
    uv_index: float
    status: UVStatus


@dataclass
class DailyUVIndex:
    date: str  # YYYY-MM-DD
    day_name: str
    time_slots: List[UVTimeSlot] = field(default_factory=list)


@dataclass
class HighRiskSlot:
    """A forecast window the patient should avoid."""
    date: str
    day_name: str
    time_range: str
    uv_index: float
    status: UVStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "day_name": self.day_name,
            "time_range": self.time_range,
            "uv_index": self.uv_index,
            "status": self.status.value,
        }


@dataclass
class UVFlarePrediction:
    """Lupus flare prediction from UV exposure."""
    risk_level: UVRiskLevel
    risk_score: float  # capped at 100
    raw_score: float   # uncapped
    probability: int
    message: str
    risk_factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    high_risk_time_slots: List[HighRiskSlot] = field(default_factory=list)
    status: AnalysisStatus = AnalysisStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
            "raw_score": self.raw_score,
            "probability": self.probability,
            "message": self.message,
            "risk_factors": self.risk_factors,
            "recommendations": self.recommendations,
            "high_risk_time_slots": [s.to_dict() for s in self.high_risk_time_slots],
        }


def _day_of_month(date_str: str) -> str:
    return date_str.split("-")[-1]


def _format_number(value: float) -> str:
    return f"{value:g}"


def _message(level: UVRiskLevel, probability: int, high_risk_count: int) -> str:
    if level in (UVRiskLevel.CRITICAL, UVRiskLevel.VERY_HIGH):
        degree = "very high" if level == UVRiskLevel.CRITICAL else "high"
        lines = [f"Flare risk is {degree}!", f"Estimated probability: {probability}%"]
        if high_risk_count:
            lines.append(f"Hazardous UV levels in {high_risk_count} time slot(s)")
    elif level == UVRiskLevel.HIGH:
        lines = ["There is a risk of a flare.", f"Estimated probability: {probability}%"]
    elif level == UVRiskLevel.MEDIUM:
        lines = ["Flare risk is moderate.", f"Estimated probability: {probability}%"]
    else:
        lines = ["Flare risk is currently low.", f"Estimated probability: {probability}%"]
    return "\n".join(lines)


def predict_lupus_flare(
    daily_uv: List[DailyUVIndex],
    sun_exposure_hours: float,
) -> UVFlarePrediction:
    """
    Predict lupus flare risk from a UV forecast.

    Args:
        daily_uv: Forecast days, each with its time slots
        sun_exposure_hours: Self-reported daily sun exposure

    Returns:
        UVFlarePrediction; INSUFFICIENT_DATA with a zero score when the
        forecast is empty
    """
    if not daily_uv:
        return UVFlarePrediction(
            risk_level=UVRiskLevel.LOW,
            risk_score=0,
            raw_score=0,
            probability=0,
            message="No UV forecast data available.",
            recommendations=["Check the UV forecast data."],
            status=AnalysisStatus.INSUFFICIENT_DATA,
        )

    total = 0.0
    risk_factors: List[str] = []
    high_risk: List[HighRiskSlot] = []

    for day in daily_uv:
        for slot in day.time_slots:
            total += slot.status.points
            if slot.status in (UVStatus.DANGER, UVStatus.VERY_HIGH):
                risk_factors.append(
                    f"Day {_day_of_month(day.date)} {slot.time_range}: "
                    f"UV {slot.status.label.lower()} ({_format_number(slot.uv_index)})"
                )
                high_risk.append(HighRiskSlot(
                    date=day.date,
                    day_name=day.day_name,
                    time_range=slot.time_range,
                    uv_index=slot.uv_index,
                    status=slot.status,
                ))

    if sun_exposure_hours > SAFE_EXPOSURE_HOURS:
        total += sun_exposure_hours * 5
        risk_factors.append(
            f"Sun exposure of {_format_number(sun_exposure_hours)} hours "
            f"(recommended: {_format_number(SAFE_EXPOSURE_HOURS)} hours or less)"
        )

    elevated_days = sum(
        1 for day in daily_uv
        if sum(1 for slot in day.time_slots if slot.status.is_elevated) >= 2
    )
    if elevated_days >= 2:
        total += CONSECUTIVE_PATTERN_BONUS
        risk_factors.append("Consecutive days of high UV detected")

    level = UVRiskLevel.from_score(total)
    probability = level.probability

    recommendations: List[str] = []
    if high_risk:
        windows = ", ".join(
            f"day {_day_of_month(s.date)} {s.time_range}" for s in high_risk
        )
        recommendations.append(f"Avoid going outdoors during: {windows}")
    if sun_exposure_hours > SAFE_EXPOSURE_HOURS:
        recommendations.append(
            f"Reduce sun exposure to {_format_number(SAFE_EXPOSURE_HOURS)} hours or less "
            f"(currently {_format_number(sun_exposure_hours)} hours)"
        )
    recommendations.extend(BASELINE_RECOMMENDATIONS)
    if level == UVRiskLevel.LOW:
        recommendations.append("Maintain your current routine")

    logger.debug(f"UV flare raw={total} level={level.value} slots={len(high_risk)}")
    return UVFlarePrediction(
        risk_level=level,
        risk_score=min(100.0, total),
        raw_score=total,
        probability=probability,
        message=_message(level, probability, len(high_risk)),
        risk_factors=risk_factors or ["No current risk factors"],
        recommendations=recommendations,
        high_risk_time_slots=high_risk,
    )


def build_daily_uv(date: str, day_name: str, readings: List[float],
                   time_ranges: Optional[List[str]] = None) -> DailyUVIndex:
    """Build a forecast day from raw UV readings, one per time slot."""
    ranges = time_ranges or DEFAULT_TIME_SLOTS
    slots = [
        UVTimeSlot(time_range=r, uv_index=v, status=uv_status(v))
        for r, v in zip(ranges, readings)
    ]
    return DailyUVIndex(date=date, day_name=day_name, time_slots=slots)
