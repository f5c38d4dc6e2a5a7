"""
Emotion-Flare Correlation

Weekly mean emotional burden (depression, anxiety, stress, isolation) set
against whether a flare happened that week.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

import numpy as np

from flarewatch.core.base import AnalysisStatus
from flarewatch.models.records import EmotionRecord, FlareRecord
from flarewatch.utils import round_half_up
from .stats import pearson


@dataclass
class EmotionWeek:
    start: date
    emotion_score: float
    flare_occurred: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.start.isoformat(),
            "emotion_score": self.emotion_score,
            "flare_occurred": self.flare_occurred,
        }


@dataclass
class EmotionFlareCorrelation:
    correlation: float
    message: str
    weeks: List[EmotionWeek] = field(default_factory=list)
    status: AnalysisStatus = AnalysisStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "correlation": self.correlation,
            "message": self.message,
            "week_data": [w.to_dict() for w in self.weeks],
        }


def analyze_emotion_correlation(
    emotions: Sequence[EmotionRecord],
    flares: Sequence[FlareRecord],
    today: date,
    week_count: int = 4,
) -> EmotionFlareCorrelation:
    """
    Correlate weekly emotion scores with flare weeks.

    The window is the last ``week_count`` whole weeks ending today. Weeks
    without emotion records score 0.
    """
    if not emotions:
        return EmotionFlareCorrelation(
            correlation=0.0,
            message="No emotion records yet.",
            status=AnalysisStatus.INSUFFICIENT_DATA,
        )

    window_start = today - timedelta(days=week_count * 7 - 1)
    weeks = []
    for i in range(week_count):
        start = window_start + timedelta(days=i * 7)
        end = start + timedelta(days=6)
        scores = [e.score for e in emotions if start <= e.date <= end]
        occurred = any(start <= f.date <= end for f in flares)
        weeks.append(EmotionWeek(
            start=start,
            emotion_score=round_half_up(float(np.mean(scores)), 1) if scores else 0.0,
            flare_occurred=occurred,
        ))

    correlation = pearson(
        [w.emotion_score for w in weeks],
        [1.0 if w.flare_occurred else 0.0 for w in weeks],
    )

    if abs(correlation) > 0.5:
        if correlation > 0:
            message = (
                f"Strong positive correlation between emotional burden and flares "
                f"(r = {correlation:.2f}).\nManaging emotions matters for flare prevention."
            )
        else:
            message = f"Negative correlation between emotional burden and flares (r = {correlation:.2f})."
    else:
        message = (
            f"Emotion-flare correlation: {correlation:.2f}\n"
            "No clear relationship was found."
        )

    return EmotionFlareCorrelation(
        correlation=round_half_up(correlation, 2),
        message=message,
        weeks=weeks,
    )
