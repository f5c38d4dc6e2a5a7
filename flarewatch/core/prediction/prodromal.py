"""
Prodromal Flare Predictor

Early-warning score built from unweighted point additions: five graded
common symptoms (0-5 each) plus rule-based points for every disease the
patient reported on. Its tiers are fixed and independent of the per-disease
cut points used by the weighted models.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from flarewatch.utils import round_half_up

logger = logging.getLogger(__name__)

NO_NOTABLE_SYMPTOMS = "No notable symptoms"


class ProdromalRiskLevel(str, Enum):
    """Prodromal risk tiers."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, total: float) -> "ProdromalRiskLevel":
        if total >= 40:
            return cls.CRITICAL
        elif total >= 30:
            return cls.HIGH
        elif total >= 20:
            return cls.MEDIUM
        else:
            return cls.LOW

    @property
    def probability(self) -> int:
        return _PROBABILITY[self]


_PROBABILITY = {
    ProdromalRiskLevel.LOW: 15,
    ProdromalRiskLevel.MEDIUM: 40,
    ProdromalRiskLevel.HIGH: 60,
    ProdromalRiskLevel.CRITICAL: 80,
}


@dataclass
class CommonSymptoms:
    """Five generic prodromal symptoms graded 0-5."""
    fatigue: int = 0
    anxiety_depression_concentration: int = 0
    appetite_digestion: int = 0
    joint_pain: int = 0
    skin_abnormalities: int = 0

    @property
    def total(self) -> int:
        return (
            self.fatigue
            + self.anxiety_depression_concentration
            + self.appetite_digestion
            + self.joint_pain
            + self.skin_abnormalities
        )


@dataclass
class RheumatoidProdromal:
    pain_locations: List[str] = field(default_factory=list)


@dataclass
class SkinAreaSymptoms:
    redness: bool = False
    dryness: bool = False
    itching: bool = False
    scaling: bool = False

    @property
    def affected(self) -> bool:
        return self.redness or self.dryness or self.itching or self.scaling


@dataclass
class PsoriasisProdromal:
    skin_areas: Dict[str, SkinAreaSymptoms] = field(default_factory=dict)


@dataclass
class CrohnsProdromal:
    stool_frequency: float = 0.0  # per day
    stool_form: str = "normal"    # normal, loose, diarrhea, constipation
    abdominal_pain_locations: List[str] = field(default_factory=list)


@dataclass
class Type1DiabetesProdromal:
    fasting_glucose: float = 0.0       # mg/dL
    postprandial_glucose: float = 0.0  # mg/dL


@dataclass
class MultipleSclerosisProdromal:
    vision_blur: bool = False
    sensory_dullness: bool = False
    walking_distance: float = 1000.0  # metres
    walking_time: float = 0.0         # minutes


@dataclass
class LupusProdromal:
    facial_rash: bool = False
    oral_ulcers: bool = False
    sunlight_exposure: float = 0.0  # hours


@dataclass
class SjogrensProdromal:
    tear_secretion: float = 10.0   # 0-10
    saliva_secretion: float = 10.0  # 0-10


@dataclass
class ThyroidProdromal:
    pulse: float = 75.0
    body_temperature: float = 36.5
    weight_change: float = 0.0  # kg
    insomnia: float = 0.0       # 0-5
    irritability: float = 0.0   # 0-5
    lethargy: float = 0.0       # 0-5


@dataclass
class ProdromalDiseaseSymptoms:
    """Disease-specific prodromal inputs; only reported diseases are set."""
    rheumatoid_arthritis: Optional[RheumatoidProdromal] = None
    psoriasis: Optional[PsoriasisProdromal] = None
    crohns_disease: Optional[CrohnsProdromal] = None
    type1_diabetes: Optional[Type1DiabetesProdromal] = None
    multiple_sclerosis: Optional[MultipleSclerosisProdromal] = None
    lupus: Optional[LupusProdromal] = None
    sjogrens_syndrome: Optional[SjogrensProdromal] = None
    autoimmune_thyroid: Optional[ThyroidProdromal] = None


@dataclass
class ProdromalInput:
    common: CommonSymptoms = field(default_factory=CommonSymptoms)
    disease_specific: ProdromalDiseaseSymptoms = field(default_factory=ProdromalDiseaseSymptoms)


@dataclass
class ProdromalPrediction:
    """Result of the prodromal point score."""
    common_score: int
    disease_specific_score: float
    total_score: float
    risk_level: ProdromalRiskLevel
    probability: int
    message: str
    contributing_symptoms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "common_score": self.common_score,
            "disease_specific_score": self.disease_specific_score,
            "total_score": self.total_score,
            "risk_level": self.risk_level.value,
            "probability": self.probability,
            "message": self.message,
            "contributing_symptoms": self.contributing_symptoms,
        }


def _disease_points(specific: ProdromalDiseaseSymptoms, labels: List[str]) -> float:
    """Add up rule-based points, appending a label for every rule that fires."""
    points = 0.0

    ra = specific.rheumatoid_arthritis
    if ra is not None:
        count = len(ra.pain_locations)
        points += count * 2
        if count > 0:
            labels.append(f"Joint pain in {count} location(s)")

    pso = specific.psoriasis
    if pso is not None:
        affected = [area for area, symptoms in pso.skin_areas.items() if symptoms.affected]
        points += len(affected) * 2
        if affected:
            labels.append(f"Skin symptoms in {len(affected)} area(s)")

    crohn = specific.crohns_disease
    if crohn is not None:
        if crohn.stool_frequency > 3:
            points += 3
            labels.append("Increased bowel movements")
        if crohn.stool_form.strip().lower() == "diarrhea":
            points += 2
            labels.append("Diarrhea")
        if crohn.abdominal_pain_locations:
            points += len(crohn.abdominal_pain_locations) * 1.5
            labels.append("Abdominal pain")

    t1d = specific.type1_diabetes
    if t1d is not None:
        if t1d.fasting_glucose > 126:
            points += 3
            labels.append("Elevated fasting glucose")
        if t1d.postprandial_glucose > 200:
            points += 3
            labels.append("Elevated post-meal glucose")

    ms = specific.multiple_sclerosis
    if ms is not None:
        if ms.vision_blur:
            points += 4
            labels.append("Blurred vision")
        if ms.sensory_dullness:
            points += 4
            labels.append("Sensory dullness")
        if ms.walking_distance < 100:
            points += 3
            labels.append("Reduced walking distance")

    lupus = specific.lupus
    if lupus is not None:
        if lupus.facial_rash:
            points += 3
            labels.append("Facial rash")
        if lupus.oral_ulcers:
            points += 3
            labels.append("Oral ulcers")
        if lupus.sunlight_exposure > 2:
            points += 2
            labels.append("Increased sun exposure")

    sjogren = specific.sjogrens_syndrome
    if sjogren is not None:
        if sjogren.tear_secretion < 3:
            points += 2
            labels.append("Reduced tear secretion")
        if sjogren.saliva_secretion < 3:
            points += 2
            labels.append("Reduced saliva secretion")

    thyroid = specific.autoimmune_thyroid
    if thyroid is not None:
        if thyroid.pulse > 100 or thyroid.pulse < 60:
            points += 2
            labels.append("Abnormal pulse")
        if thyroid.body_temperature > 37.5 or thyroid.body_temperature < 36.0:
            points += 2
            labels.append("Abnormal body temperature")
        if abs(thyroid.weight_change) > 2:
            points += 2
            labels.append("Weight change")
        if thyroid.insomnia > 3:
            points += 1.5
            labels.append("Insomnia")
        if thyroid.irritability > 3:
            points += 1.5
            labels.append("Irritability")
        if thyroid.lethargy > 3:
            points += 1.5
            labels.append("Lethargy")

    return points


def _common_labels(common: CommonSymptoms) -> List[str]:
    labels = []
    if common.fatigue >= 3:
        labels.append("Fatigue")
    if common.anxiety_depression_concentration >= 3:
        labels.append("Anxiety / low mood / poor concentration")
    if common.joint_pain >= 3:
        labels.append("Joint pain")
    if common.skin_abnormalities >= 3:
        labels.append("Skin abnormalities")
    return labels


def _message(level: ProdromalRiskLevel, common: int, specific: float, total: float) -> str:
    if level in (ProdromalRiskLevel.CRITICAL, ProdromalRiskLevel.HIGH):
        degree = "very high" if level == ProdromalRiskLevel.CRITICAL else "high"
        lines = [f"Flare risk is {degree}!"]
    elif level == ProdromalRiskLevel.MEDIUM:
        lines = ["Flare risk is moderate."]
    else:
        lines = ["Flare risk is currently low."]
    lines.append(f"Common symptom score: {common}/25")
    lines.append(f"Disease-specific score: {specific}")
    if level in (ProdromalRiskLevel.CRITICAL, ProdromalRiskLevel.HIGH):
        lines.append(f"Total: {total}")
    return "\n".join(lines)


def predict_from_prodromal_symptoms(data: ProdromalInput) -> ProdromalPrediction:
    """
    Score prodromal symptoms.

    Args:
        data: Common symptoms plus disease-specific prodromal inputs

    Returns:
        ProdromalPrediction with scores rounded to one decimal
    """
    common_score = data.common.total
    labels: List[str] = []
    specific_points = _disease_points(data.disease_specific, labels)
    labels.extend(_common_labels(data.common))

    total = common_score + specific_points
    level = ProdromalRiskLevel.from_score(total)
    specific_rounded = round_half_up(specific_points, 1)
    total_rounded = round_half_up(total, 1)

    logger.debug(f"Prodromal total={total_rounded} level={level.value}")
    return ProdromalPrediction(
        common_score=common_score,
        disease_specific_score=specific_rounded,
        total_score=total_rounded,
        risk_level=level,
        probability=level.probability,
        message=_message(level, common_score, specific_rounded, total_rounded),
        contributing_symptoms=labels or [NO_NOTABLE_SYMPTOMS],
    )
