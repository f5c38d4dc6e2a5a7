"""
Flare API Models
"""
from datetime import date as Date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from flarewatch.core.prediction import prodromal
from flarewatch.core.prediction.uv_exposure import DailyUVIndex, UVStatus, UVTimeSlot, uv_status


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    components: Dict[str, str]


class ScoreRequest(BaseModel):
    """Flat indicator values to score for one disease."""
    disease: str = Field(..., description="Disease name or alias: ra, lupus, crohns, ...")
    inputs: Dict[str, Optional[float]] = Field(default_factory=dict)
    baselines: Optional[Dict[str, float]] = Field(default=None, description="Personal baseline overrides")


class AssessmentResponse(BaseModel):
    """Scored disease assessment."""
    disease: str
    index_name: str
    status: str
    score: Optional[float] = None
    message: str = ""
    classification: Optional[Dict[str, str]] = None
    contributions: Optional[List[Dict[str, Any]]] = None
    drivers: Optional[List[Dict[str, Any]]] = None


# ---- Prodromal ----

class CommonSymptomsInput(BaseModel):
    fatigue: int = Field(default=0, ge=0, le=5)
    anxiety_depression_concentration: int = Field(default=0, ge=0, le=5)
    appetite_digestion: int = Field(default=0, ge=0, le=5)
    joint_pain: int = Field(default=0, ge=0, le=5)
    skin_abnormalities: int = Field(default=0, ge=0, le=5)


class SkinAreaInput(BaseModel):
    redness: bool = False
    dryness: bool = False
    itching: bool = False
    scaling: bool = False


class RheumatoidProdromalInput(BaseModel):
    pain_locations: List[str] = Field(default_factory=list)


class PsoriasisProdromalInput(BaseModel):
    skin_areas: Dict[str, SkinAreaInput] = Field(default_factory=dict)


class CrohnsProdromalInput(BaseModel):
    stool_frequency: float = 0
    stool_form: str = "normal"
    abdominal_pain_locations: List[str] = Field(default_factory=list)


class Type1DiabetesProdromalInput(BaseModel):
    fasting_glucose: float = 0
    postprandial_glucose: float = 0


class MultipleSclerosisProdromalInput(BaseModel):
    vision_blur: bool = False
    sensory_dullness: bool = False
    walking_distance: float = 1000
    walking_time: float = 0


class LupusProdromalInput(BaseModel):
    facial_rash: bool = False
    oral_ulcers: bool = False
    sunlight_exposure: float = Field(default=0, ge=0, description="Hours")


class SjogrensProdromalInput(BaseModel):
    tear_secretion: float = Field(default=10, ge=0, le=10)
    saliva_secretion: float = Field(default=10, ge=0, le=10)


class ThyroidProdromalInput(BaseModel):
    pulse: float = 75
    body_temperature: float = 36.5
    weight_change: float = 0
    insomnia: float = Field(default=0, ge=0, le=5)
    irritability: float = Field(default=0, ge=0, le=5)
    lethargy: float = Field(default=0, ge=0, le=5)


class ProdromalDiseaseInput(BaseModel):
    rheumatoid_arthritis: Optional[RheumatoidProdromalInput] = None
    psoriasis: Optional[PsoriasisProdromalInput] = None
    crohns_disease: Optional[CrohnsProdromalInput] = None
    type1_diabetes: Optional[Type1DiabetesProdromalInput] = None
    multiple_sclerosis: Optional[MultipleSclerosisProdromalInput] = None
    lupus: Optional[LupusProdromalInput] = None
    sjogrens_syndrome: Optional[SjogrensProdromalInput] = None
    autoimmune_thyroid: Optional[ThyroidProdromalInput] = None


class ProdromalRequest(BaseModel):
    """Prodromal symptom check."""
    common: CommonSymptomsInput = Field(default_factory=CommonSymptomsInput)
    disease_specific: ProdromalDiseaseInput = Field(default_factory=ProdromalDiseaseInput)

    def to_input(self) -> prodromal.ProdromalInput:
        specific = self.disease_specific
        pso = None
        if specific.psoriasis is not None:
            pso = prodromal.PsoriasisProdromal(skin_areas={
                area: prodromal.SkinAreaSymptoms(**symptoms.model_dump())
                for area, symptoms in specific.psoriasis.skin_areas.items()
            })

        def convert(value, cls):
            return cls(**value.model_dump()) if value is not None else None

        return prodromal.ProdromalInput(
            common=prodromal.CommonSymptoms(**self.common.model_dump()),
            disease_specific=prodromal.ProdromalDiseaseSymptoms(
                rheumatoid_arthritis=convert(specific.rheumatoid_arthritis, prodromal.RheumatoidProdromal),
                psoriasis=pso,
                crohns_disease=convert(specific.crohns_disease, prodromal.CrohnsProdromal),
                type1_diabetes=convert(specific.type1_diabetes, prodromal.Type1DiabetesProdromal),
                multiple_sclerosis=convert(specific.multiple_sclerosis, prodromal.MultipleSclerosisProdromal),
                lupus=convert(specific.lupus, prodromal.LupusProdromal),
                sjogrens_syndrome=convert(specific.sjogrens_syndrome, prodromal.SjogrensProdromal),
                autoimmune_thyroid=convert(specific.autoimmune_thyroid, prodromal.ThyroidProdromal),
            ),
        )


class DailyIndexRequest(ProdromalRequest):
    """Prodromal symptoms plus the external environmental score."""
    environmental_score: float = Field(default=0, ge=0, le=100)
    today: Optional[Date] = Field(default=None, description="Reference date; defaults to the server date")


# ---- UV ----

class UVSlotInput(BaseModel):
    time_range: str
    uv_index: float = Field(ge=0)
    status: Optional[UVStatus] = Field(default=None, description="Derived from uv_index when omitted")


class UVDayInput(BaseModel):
    date: str
    day_name: str = ""
    time_slots: List[UVSlotInput] = Field(default_factory=list)


class UVPredictionRequest(BaseModel):
    forecast: List[UVDayInput] = Field(default_factory=list)
    sun_exposure_hours: float = Field(default=0, ge=0)

    def to_forecast(self) -> List[DailyUVIndex]:
        return [
            DailyUVIndex(
                date=day.date,
                day_name=day.day_name,
                time_slots=[
                    UVTimeSlot(
                        time_range=slot.time_range,
                        uv_index=slot.uv_index,
                        status=slot.status or uv_status(slot.uv_index),
                    )
                    for slot in day.time_slots
                ],
            )
            for day in self.forecast
        ]


# ---- Profile ----

class DiseaseSelection(BaseModel):
    diseases: List[str] = Field(default_factory=list)
