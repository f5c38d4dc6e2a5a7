"""
Persisted Record Models

Everything the record store holds: daily symptom observations, flare events
and the lifestyle logs correlated against them.
"""
import uuid
from datetime import date as Date, datetime, time as Time, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from flarewatch.core.base import Disease


def new_record_id() -> str:
    return uuid.uuid4().hex


class RecordModel(BaseModel):
    """Base for stored records; unknown keys from older files are ignored."""
    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Disease-specific sub-records (keys match the scoring tables)
# ---------------------------------------------------------------------------

class RheumatoidArthritisSymptoms(RecordModel):
    joint_swelling: Optional[float] = None
    joint_stiffness: Optional[float] = None
    morning_worse: Optional[bool] = None


class PsoriasisSymptoms(RecordModel):
    erythema: Optional[float] = None
    skin_thickness: Optional[float] = None
    scaling: Optional[bool] = None


class CrohnsDiseaseSymptoms(RecordModel):
    stool_frequency: Optional[float] = Field(default=None, description="Bowel movements per day")
    stool_looseness: Optional[float] = None
    blood_mucus: Optional[bool] = None
    urgency: Optional[float] = None
    bloating: Optional[float] = None


class Type1DiabetesSymptoms(RecordModel):
    glucose_variability: Optional[float] = Field(default=None, description="Coefficient of variation, %")
    hypo_frequency: Optional[float] = None
    hyper_frequency: Optional[float] = None
    time_in_range: Optional[float] = Field(default=None, description="% of time in range")
    insulin_missed_dose: Optional[bool] = None
    ketone_warning: Optional[bool] = None


class MultipleSclerosisSymptoms(RecordModel):
    walking_score: Optional[float] = None
    vision_blur: Optional[bool] = None
    sensory_loss: Optional[float] = None
    balance_impairment: Optional[float] = None


class LupusSymptoms(RecordModel):
    sun_exposure: Optional[float] = Field(default=None, description="Minutes in direct sun")
    facial_rash: Optional[float] = None
    oral_ulcer: Optional[float] = None
    fever: Optional[float] = None


class SjogrensSyndromeSymptoms(RecordModel):
    oral_dryness: Optional[float] = None
    ocular_dryness: Optional[float] = None


class AutoimmuneThyroidSymptoms(RecordModel):
    resting_heart_rate: Optional[float] = None
    tremor_severity: Optional[float] = None
    heat_intolerance: Optional[float] = None
    weight_loss: Optional[float] = None


class DiseaseSpecificSymptoms(RecordModel):
    """Sub-records keyed by disease; only reported diseases are present."""
    rheumatoid_arthritis: Optional[RheumatoidArthritisSymptoms] = None
    psoriasis: Optional[PsoriasisSymptoms] = None
    crohns_disease: Optional[CrohnsDiseaseSymptoms] = None
    type1_diabetes: Optional[Type1DiabetesSymptoms] = None
    multiple_sclerosis: Optional[MultipleSclerosisSymptoms] = None
    lupus: Optional[LupusSymptoms] = None
    sjogrens_syndrome: Optional[SjogrensSyndromeSymptoms] = None
    autoimmune_thyroid: Optional[AutoimmuneThyroidSymptoms] = None

    def get(self, disease: Disease) -> Optional[RecordModel]:
        return getattr(self, disease.value)


GENERIC_FIELDS = (
    "fatigue",
    "body_temp",
    "myalgia",
    "anxiety",
    "depression",
    "stress",
    "sleep_disturbance",
    "appetite_loss",
    "abdominal_pain",
    "joint_pain",
    "function_loss",
    "skin_pain",
    "itchiness",
)


class SymptomObservation(RecordModel):
    """One day's symptom check-in. At most one per calendar date."""
    date: Date
    fatigue: Optional[float] = None
    body_temp: Optional[float] = Field(default=None, description="Degrees Celsius")
    myalgia: Optional[float] = None
    anxiety: Optional[float] = None
    depression: Optional[float] = None
    stress: Optional[float] = None
    sleep_disturbance: Optional[float] = None
    appetite_loss: Optional[bool] = None
    abdominal_pain: Optional[float] = None
    joint_pain: Optional[float] = None
    function_loss: Optional[float] = None
    skin_pain: Optional[float] = None
    itchiness: Optional[float] = None
    disease_specific: DiseaseSpecificSymptoms = Field(default_factory=DiseaseSpecificSymptoms)

    def indicator_values(self, disease: Disease) -> Optional[Dict[str, Optional[float]]]:
        """
        Flatten generic and disease-specific values into scorer inputs.

        Returns None when this observation has no sub-record for the disease.
        Flags become 1.0 / 0.0.
        """
        sub_record = self.disease_specific.get(disease)
        if sub_record is None:
            return None
        values: Dict[str, Optional[float]] = {}
        for name in GENERIC_FIELDS:
            values[name] = _as_number(getattr(self, name))
        for name, value in sub_record.model_dump().items():
            values[name] = _as_number(value)
        return values


def _as_number(value) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    return float(value)


# ---------------------------------------------------------------------------
# Flare and lifestyle logs
# ---------------------------------------------------------------------------

class FlareRecord(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    severity: int = Field(ge=1, le=10)
    symptoms: List[str] = Field(default_factory=list)
    duration: float = Field(default=1, ge=0, description="Days")

    @property
    def onset(self) -> datetime:
        """Flares are dated to the day; treat them as starting at midnight."""
        return datetime.combine(self.date, Time())


class StressRecord(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    level: float = Field(ge=0, le=10)
    note: Optional[str] = None


class SymptomsAfterMeal(RecordModel):
    hours: float = Field(ge=0)
    symptoms: List[str] = Field(default_factory=list)
    severity: float = Field(default=0, ge=0, le=10)


class FoodRecord(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    time: Time = Field(default=Time(12, 0), description="HH:MM")
    foods: List[str] = Field(default_factory=list)
    symptoms_after: Optional[SymptomsAfterMeal] = None

    @property
    def eaten_at(self) -> datetime:
        return datetime.combine(self.date, self.time)


class SleepRecord(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    sleep_time: Optional[Time] = None
    wake_time: Optional[Time] = None
    total_hours: float = Field(ge=0, le=24)
    quality: float = Field(default=5, ge=0, le=10)


class EmotionRecord(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    depression: float = Field(default=0, ge=0, le=10)
    anxiety: float = Field(default=0, ge=0, le=10)
    stress: float = Field(default=0, ge=0, le=10)
    isolation: float = Field(default=0, ge=0, le=10)
    note: Optional[str] = None

    @property
    def score(self) -> float:
        return (self.depression + self.anxiety + self.stress + self.isolation) / 4


class Medication(RecordModel):
    name: str
    dosage: str = ""
    adherence: bool = True


class LabResult(RecordModel):
    name: str
    value: str
    unit: Optional[str] = None
    date: Date


class FlareDiaryEntry(RecordModel):
    id: str = Field(default_factory=new_record_id)
    date: Date
    severity: int = Field(ge=1, le=10)
    duration: float = Field(default=1, ge=0)
    symptoms: List[str] = Field(default_factory=list)
    estimated_triggers: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    medications: List[Medication] = Field(default_factory=list)
    test_results: List[LabResult] = Field(default_factory=list)


class EnvironmentalReading(RecordModel):
    date: Date
    temperature: float  # Celsius
    humidity: float     # %
    pressure: float     # hPa
    weather_index: float = Field(default=0, ge=0, le=100)


def days_before(day: Date, count: int) -> List[Date]:
    """The ``count`` calendar days preceding ``day``, nearest first."""
    return [day - timedelta(days=i) for i in range(1, count + 1)]
