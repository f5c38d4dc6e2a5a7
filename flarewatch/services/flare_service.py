"""
Flare Management Service - record handling and analysis orchestration

Sits between the HTTP layer and the pure engine: loads records from the
store, runs the scoring and correlation functions, and fires the activity
hook after saves.
"""
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from flarewatch.config import settings
from flarewatch.core.base import Disease
from flarewatch.core.correlation import (
    LifestyleLog,
    analyze_emotion_correlation,
    analyze_flare_risk,
    analyze_food_correlation,
    analyze_sleep_correlation,
    analyze_stress_correlation,
)
from flarewatch.core.correlation.emotion import EmotionFlareCorrelation
from flarewatch.core.diary import HospitalReport, FlareTrigger, generate_hospital_report, update_flare_triggers
from flarewatch.core.prediction import ProdromalInput, predict_from_prodromal_symptoms
from flarewatch.core.scoring import DiseaseAssessment, assess_observation
from flarewatch.models.records import SymptomObservation
from flarewatch.utils import round_half_up
from . import activity
from .activity import ActivityNotifier
from .record_store import JsonRecordStore, record_model

logger = logging.getLogger(__name__)

_ACTIVITY_BY_KIND = {
    "observations": activity.SYMPTOM_RECORD,
    "flares": activity.FLARE_RECORD,
    "stress": activity.LIFESTYLE_RECORD,
    "food": activity.LIFESTYLE_RECORD,
    "sleep": activity.LIFESTYLE_RECORD,
    "emotions": activity.LIFESTYLE_RECORD,
    "diary": activity.DIARY_ENTRY,
}


class DailyIndexLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, value: float) -> "DailyIndexLevel":
        if value >= 70:
            return cls.CRITICAL
        elif value >= 50:
            return cls.HIGH
        elif value >= 30:
            return cls.MEDIUM
        else:
            return cls.LOW

    @property
    def probability(self) -> int:
        return {
            DailyIndexLevel.CRITICAL: 80,
            DailyIndexLevel.HIGH: 60,
            DailyIndexLevel.MEDIUM: 40,
            DailyIndexLevel.LOW: 20,
        }[self]


@dataclass
class DailyFlareIndex:
    """Today's blended flare index."""
    score: float
    level: DailyIndexLevel
    probability: int
    symptom_score: float
    environmental_score: float
    lifestyle_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "probability": self.probability,
            "components": {
                "symptom": self.symptom_score,
                "environment": self.environmental_score,
                "lifestyle": self.lifestyle_score,
            },
        }


def compute_daily_index(
    symptom_score: float,
    environmental_score: float,
    lifestyle_score: float,
    weights: Optional[Tuple[float, float, float]] = None,
) -> DailyFlareIndex:
    """
    Blend the three flare signals into one 0-100 index.

    Args:
        symptom_score: Prodromal total score
        environmental_score: External 0-100 environmental risk
        lifestyle_score: Composed lifestyle risk score
        weights: (symptom, environment, lifestyle); settings when omitted
    """
    w_symptom, w_env, w_life = weights or settings.daily_index_weights
    raw = w_symptom * symptom_score + w_env * environmental_score + w_life * lifestyle_score
    value = round_half_up(float(np.clip(raw, 0.0, 100.0)), 1)
    level = DailyIndexLevel.from_score(value)
    return DailyFlareIndex(
        score=value,
        level=level,
        probability=level.probability,
        symptom_score=symptom_score,
        environmental_score=environmental_score,
        lifestyle_score=lifestyle_score,
    )


class FlareManagementService:
    """
    Service class for flare tracking.

    Every analysis is recomputed from stored records; the cached analysis is
    written for display only.
    """

    def __init__(self, store: Optional[JsonRecordStore] = None,
                 notifier: Optional[ActivityNotifier] = None):
        self.store = store or JsonRecordStore()
        self.notifier = notifier or ActivityNotifier()

    def _notify(self, kind: str) -> None:
        name = _ACTIVITY_BY_KIND.get(kind)
        if name:
            self.notifier.notify(name)

    # ------------------------------------------------------------------
    # Symptom observations
    # ------------------------------------------------------------------

    def save_observation(self, observation: SymptomObservation) -> SymptomObservation:
        """Store today's check-in, replacing any earlier one for the date."""
        self.store.upsert("observations", observation, key_fn=lambda o: o.date)
        logger.info(f"Saved symptom observation for {observation.date}")
        self._notify("observations")
        return observation

    def list_observations(self) -> List[SymptomObservation]:
        return sorted(self.store.read_all("observations"), key=lambda o: o.date)

    def get_observation(self, day: date) -> Optional[SymptomObservation]:
        for observation in self.store.read_all("observations"):
            if observation.date == day:
                return observation
        return None

    def assess(self, observation: SymptomObservation, disease: Disease,
               baselines: Optional[Mapping[str, float]] = None) -> DiseaseAssessment:
        return assess_observation(observation, disease, baselines)

    def assess_day(self, day: date, diseases: Optional[Sequence[Disease]] = None) -> List[DiseaseAssessment]:
        """
        Score a stored observation for each selected disease.

        Returns an empty list when nothing was recorded that day.
        """
        observation = self.get_observation(day)
        if observation is None:
            return []
        targets = list(diseases) if diseases else self.store.get_selected_diseases()
        return [assess_observation(observation, disease) for disease in targets]

    # ------------------------------------------------------------------
    # Flare and lifestyle records
    # ------------------------------------------------------------------

    def add_record(self, kind: str, record: Any) -> Any:
        """Validate and store a record by id, then notify."""
        model = record_model(kind)
        if not isinstance(record, model):
            record = model.model_validate(record)
        if kind == "observations":
            return self.save_observation(record)
        key_fn = (lambda r: r.date) if kind == "environment" else (lambda r: r.id)
        self.store.upsert(kind, record, key_fn=key_fn)
        self._notify(kind)
        return record

    def list_records(self, kind: str) -> List[Any]:
        return self.store.read_all(kind)

    def delete_record(self, kind: str, record_id: str) -> bool:
        return self.store.delete(kind, record_id)

    def lifestyle_log(self) -> LifestyleLog:
        return LifestyleLog(
            flares=self.store.read_all("flares"),
            stress_records=self.store.read_all("stress"),
            food_records=self.store.read_all("food"),
            sleep_records=self.store.read_all("sleep"),
        )

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    def analyze_lifestyle(self, today: date) -> Dict[str, Any]:
        """Run the three correlations and the composer, then cache the result."""
        data = self.lifestyle_log()
        stress = analyze_stress_correlation(data.flares, data.stress_records)
        foods = analyze_food_correlation(data.flares, data.food_records, today)
        sleep = analyze_sleep_correlation(data.flares, data.sleep_records)
        risk = analyze_flare_risk(data, stress, foods, sleep, today)

        analysis = {
            "date": today.isoformat(),
            "stress_correlation": stress.to_dict(),
            "food_correlations": [f.to_dict() for f in foods],
            "sleep_correlation": sleep.to_dict(),
            "risk_analysis": risk.to_dict(),
        }
        try:
            self.store.cache_analysis(analysis)
        except OSError as e:
            logger.warning(f"Failed to cache analysis (non-critical): {e}")
        logger.info(f"Lifestyle analysis for {today}: {risk.risk_level.value} ({risk.risk_score})")
        return analysis

    def lifestyle_score(self, today: date) -> float:
        data = self.lifestyle_log()
        stress = analyze_stress_correlation(data.flares, data.stress_records)
        foods = analyze_food_correlation(data.flares, data.food_records, today)
        sleep = analyze_sleep_correlation(data.flares, data.sleep_records)
        return analyze_flare_risk(data, stress, foods, sleep, today).risk_score

    def emotion_correlation(self, today: date, week_count: int = 4) -> EmotionFlareCorrelation:
        return analyze_emotion_correlation(
            self.store.read_all("emotions"), self.store.read_all("flares"), today, week_count
        )

    def daily_index(self, prodromal: ProdromalInput, environmental_score: float,
                    today: date) -> Dict[str, Any]:
        """Prodromal prediction plus today's blended index."""
        prediction = predict_from_prodromal_symptoms(prodromal)
        index = compute_daily_index(
            prediction.total_score, environmental_score, self.lifestyle_score(today)
        )
        return {"prodromal": prediction.to_dict(), "index": index.to_dict()}

    # ------------------------------------------------------------------
    # Flare diary
    # ------------------------------------------------------------------

    def flare_triggers(self) -> List[FlareTrigger]:
        return update_flare_triggers(
            self.store.read_all("diary"),
            self.store.read_all("stress"),
            self.store.read_all("food"),
            self.store.read_all("sleep"),
            self.store.read_all("environment"),
            limit=settings.max_triggers,
        )

    def hospital_report(self, today: date, period_days: Optional[int] = None) -> HospitalReport:
        return generate_hospital_report(
            self.store.read_all("diary"), today, period_days or settings.report_period_days
        )
