"""
Disease Risk Model Tables

One immutable table per condition: for every indicator its clinical weight,
the baseline where severity starts, the valid range and the orientation.
The generic scorer in ``disease_models`` turns any of these into a score.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from flarewatch.core.base import Disease
from .normalizer import Orientation


class ModelShape(str, Enum):
    """Output shape a model exposes to its consumers."""
    FULL_CONTRIBUTIONS = "full_contributions"  # every indicator, sorted
    TOP_DRIVERS = "top_drivers"                # top 3, relative percentages


@dataclass(frozen=True)
class IndicatorSpec:
    """Scoring parameters for one measurement."""
    key: str
    label: str
    weight: float
    baseline: float
    minimum: float = 0.0
    maximum: float = 10.0
    orientation: Orientation = Orientation.HIGHER_IS_WORSE


@dataclass(frozen=True)
class TierMessages:
    """User-facing message for each risk tier."""
    stable: str
    caution: str
    flare: str


@dataclass(frozen=True)
class RiskModelConfig:
    """Complete parameterization of one disease's weighted risk model."""
    disease: Disease
    index_name: str
    indicators: Tuple[IndicatorSpec, ...]
    messages: TierMessages
    cut_points: Tuple[float, float] = (30.0, 60.0)
    shape: ModelShape = ModelShape.FULL_CONTRIBUTIONS

    @property
    def total_weight(self) -> float:
        return sum(spec.weight for spec in self.indicators)

    @property
    def keys(self) -> List[str]:
        return [spec.key for spec in self.indicators]

    def baselines(self) -> Dict[str, float]:
        """Default baseline for every indicator, keyed by indicator."""
        return {spec.key: spec.baseline for spec in self.indicators}

    def with_baselines(self, overrides: Mapping[str, float]) -> "RiskModelConfig":
        """
        Copy of this config with personal baselines substituted.

        Unknown keys are ignored so a stored baseline profile written for a
        different condition can be passed through unchanged.
        """
        if not overrides:
            return self
        indicators = tuple(
            replace(spec, baseline=float(overrides[spec.key]))
            if overrides.get(spec.key) is not None else spec
            for spec in self.indicators
        )
        return replace(self, indicators=indicators)

    def validate(self) -> List[str]:
        """
        Check the table invariants.

        Returns:
            Human-readable problems; empty when the table is well formed
        """
        problems = []
        seen = set()
        for spec in self.indicators:
            if spec.key in seen:
                problems.append(f"{spec.key}: declared twice")
            seen.add(spec.key)
            if spec.weight < 0:
                problems.append(f"{spec.key}: negative weight {spec.weight}")
            if spec.minimum >= spec.maximum:
                problems.append(f"{spec.key}: empty range ({spec.minimum}, {spec.maximum})")
            if spec.orientation == Orientation.BINARY:
                continue
            # Zero-anchored scales (baseline == minimum) are allowed for higher-is-worse
            if spec.orientation == Orientation.HIGHER_IS_WORSE:
                inside = spec.minimum <= spec.baseline < spec.maximum
            else:
                inside = spec.minimum < spec.baseline <= spec.maximum
            if not inside:
                problems.append(
                    f"{spec.key}: baseline {spec.baseline} outside ({spec.minimum}, {spec.maximum})"
                )
        lower, upper = self.cut_points
        if not 0 <= lower < upper <= 100:
            problems.append(f"cut points {self.cut_points} not ordered within 0-100")
        return problems


LABELS: Dict[str, str] = {
    # Generic measurements
    "fatigue": "Fatigue",
    "body_temp": "Body temperature",
    "myalgia": "Body aches / myalgia",
    "anxiety": "Anxiety",
    "depression": "Low mood",
    "stress": "Stress",
    "sleep_disturbance": "Sleep disturbance",
    "appetite_loss": "Loss of appetite",
    "abdominal_pain": "Abdominal pain",
    "joint_pain": "Joint pain",
    "function_loss": "Loss of function",
    "skin_pain": "Skin pain",
    "itchiness": "Itchiness",
    # Rheumatoid arthritis
    "joint_swelling": "Joint swelling",
    "joint_stiffness": "Joint stiffness",
    "morning_worse": "Worse in the morning",
    # Psoriasis
    "erythema": "Redness",
    "skin_thickness": "Skin thickening",
    "scaling": "Scaling / flaking",
    # Crohn's disease
    "stool_frequency": "Bowel movement frequency",
    "stool_looseness": "Stool looseness",
    "blood_mucus": "Blood or mucus in stool",
    "urgency": "Bowel urgency",
    "bloating": "Bloating",
    # Type 1 diabetes
    "glucose_variability": "Glucose variability",
    "hypo_frequency": "Hypoglycemia",
    "hyper_frequency": "Hyperglycemia",
    "time_in_range": "Time in range",
    "insulin_missed_dose": "Missed insulin dose",
    "ketone_warning": "Ketone warning",
    # Multiple sclerosis
    "walking_score": "Walking impairment",
    "vision_blur": "Blurred vision",
    "sensory_loss": "Sensory dullness",
    "balance_impairment": "Balance impairment",
    # Lupus
    "facial_rash": "Facial rash",
    "sun_exposure": "Sun exposure",
    "oral_ulcer": "Oral ulcers",
    "fever": "Fever",
    # Sjogren's syndrome
    "oral_dryness": "Dry mouth",
    "ocular_dryness": "Dry eyes",
    # Autoimmune thyroid disease
    "resting_heart_rate": "Resting heart rate",
    "tremor_severity": "Tremor",
    "heat_intolerance": "Heat intolerance",
    "weight_loss": "Weight loss",
}


def _scale(key: str, weight: float, baseline: float, maximum: float = 10.0,
           minimum: float = 0.0) -> IndicatorSpec:
    return IndicatorSpec(key, LABELS[key], weight, baseline, minimum, maximum)


def _flag(key: str, weight: float, baseline: float = 0.0) -> IndicatorSpec:
    return IndicatorSpec(key, LABELS[key], weight, baseline, 0.0, 1.0, Orientation.BINARY)


def _body_temp(weight: float, baseline: float = 37.0) -> IndicatorSpec:
    return IndicatorSpec("body_temp", LABELS["body_temp"], weight, baseline, 34.5, 40.0)


_CONSULT = "Please consult your care team."

RHEUMATOID_ARTHRITIS = RiskModelConfig(
    disease=Disease.RHEUMATOID_ARTHRITIS,
    index_name="RAFI",
    indicators=(
        _scale("joint_pain", 3.0, 5.0),
        _scale("joint_swelling", 3.0, 3.0),
        _scale("joint_stiffness", 2.5, 4.0),
        _flag("morning_worse", 1.5),
        _scale("fatigue", 2.0, 5.0),
        _scale("function_loss", 1.0, 3.0),
        _body_temp(0.5),
        _scale("myalgia", 0.5, 3.0),
        _scale("stress", 0.5, 5.0),
        _scale("sleep_disturbance", 0.5, 4.0),
        _scale("anxiety", 0.5, 4.0),
        _scale("depression", 0.5, 4.0),
        _flag("appetite_loss", 0.3),
        _scale("abdominal_pain", 0.3, 2.0),
        _scale("skin_pain", 0.3, 2.0),
        _scale("itchiness", 0.3, 3.0),
    ),
    cut_points=(35.0, 65.0),
    messages=TierMessages(
        stable="No clear rheumatoid arthritis flare signal at the moment.",
        caution="Recent joint and systemic symptoms are worse than usual.",
        flare="Joint pain, swelling, stiffness and systemic symptoms have clearly increased. " + _CONSULT,
    ),
)

PSORIASIS = RiskModelConfig(
    disease=Disease.PSORIASIS,
    index_name="PSFI",
    indicators=(
        _scale("itchiness", 3.0, 3.0),
        _scale("erythema", 3.0, 3.0),
        _scale("skin_thickness", 2.5, 3.0),
        _flag("scaling", 2.0),
        _scale("skin_pain", 2.0, 2.0),
        _scale("function_loss", 1.5, 3.0),
        _scale("sleep_disturbance", 1.2, 4.0),
        _scale("stress", 0.8, 5.0),
        _scale("anxiety", 0.8, 4.0),
        _scale("depression", 0.8, 4.0),
        _scale("fatigue", 0.5, 5.0),
        _scale("myalgia", 0.3, 3.0),
        _body_temp(0.3),
        _scale("abdominal_pain", 0.2, 2.0),
        _flag("appetite_loss", 0.2),
        _scale("joint_pain", 0.2, 2.0),
    ),
    messages=TierMessages(
        stable="Skin lesions and itching show no significant worsening for now.",
        caution="Skin symptoms are worse than usual.",
        flare="Skin lesions and itching have clearly worsened. " + _CONSULT,
    ),
)

CROHNS_DISEASE = RiskModelConfig(
    disease=Disease.CROHNS_DISEASE,
    index_name="CFI",
    indicators=(
        _scale("stool_frequency", 3.0, 3.0, maximum=20.0),
        _scale("abdominal_pain", 3.0, 3.0),
        _scale("stool_looseness", 2.5, 3.0),
        _scale("urgency", 2.0, 3.0),
        _flag("blood_mucus", 2.0),
        _scale("fatigue", 1.5, 5.0),
        _scale("bloating", 1.0, 2.0),
        _scale("stress", 0.7, 5.0),
        _scale("anxiety", 0.7, 4.0),
        _scale("depression", 0.7, 4.0),
        _scale("sleep_disturbance", 0.7, 4.0),
        _body_temp(0.3),
        _scale("myalgia", 0.3, 3.0),
        _flag("appetite_loss", 0.3),
        _scale("joint_pain", 0.2, 2.0),
        _scale("skin_pain", 0.2, 2.0),
        _scale("itchiness", 0.2, 2.0),
    ),
    messages=TierMessages(
        stable="Bowel habits and abdominal pain are not fluctuating much.",
        caution="Bowel frequency, abdominal pain or urgency have increased.",
        flare="Diarrhea, abdominal pain and blood or mucus in stool have clearly worsened. " + _CONSULT,
    ),
)

TYPE1_DIABETES = RiskModelConfig(
    disease=Disease.TYPE1_DIABETES,
    index_name="T1D-FI",
    indicators=(
        _scale("glucose_variability", 3.0, 20.0, maximum=100.0),
        _scale("hypo_frequency", 3.0, 0.0),
        _scale("hyper_frequency", 2.5, 0.0),
        IndicatorSpec("time_in_range", LABELS["time_in_range"], 2.0, 70.0, 0.0, 100.0,
                      Orientation.LOWER_IS_WORSE),
        _scale("fatigue", 1.5, 5.0),
        _scale("sleep_disturbance", 1.2, 4.0),
        _scale("stress", 1.0, 5.0),
        _scale("anxiety", 1.0, 4.0),
        _scale("depression", 1.0, 4.0),
        _flag("insulin_missed_dose", 0.8),
        _flag("ketone_warning", 0.8),
        _flag("appetite_loss", 0.5),
        _scale("abdominal_pain", 0.3, 2.0),
        _body_temp(0.3),
        _scale("myalgia", 0.3, 3.0),
        _scale("function_loss", 0.3, 3.0),
    ),
    messages=TierMessages(
        stable="Glucose variability and hypo/hyperglycemia patterns are relatively stable.",
        caution="Glucose variability or the frequency of hypo/hyperglycemia has increased.",
        flare="Glucose variability, hypo/hyperglycemia and reduced time in range are pronounced. " + _CONSULT,
    ),
)

MULTIPLE_SCLEROSIS = RiskModelConfig(
    disease=Disease.MULTIPLE_SCLEROSIS,
    index_name="MS-FI",
    indicators=(
        _scale("walking_score", 3.0, 2.0),
        _flag("vision_blur", 2.5),
        _scale("sensory_loss", 2.0, 2.0),
        _scale("balance_impairment", 2.0, 2.0),
        _scale("fatigue", 2.0, 5.0),
        _scale("function_loss", 1.2, 3.0),
        _scale("stress", 0.8, 5.0),
        _scale("anxiety", 0.8, 4.0),
        _scale("depression", 0.8, 4.0),
        _scale("sleep_disturbance", 0.7, 4.0),
        _body_temp(0.3),
        _scale("myalgia", 0.3, 3.0),
        _flag("appetite_loss", 0.3),
        _scale("abdominal_pain", 0.3, 2.0),
        _scale("skin_pain", 0.2, 2.0),
        _scale("itchiness", 0.2, 2.0),
    ),
    messages=TierMessages(
        stable="Little clear evidence of neurological worsening.",
        caution="Some worsening in walking, sensation, vision or balance was detected.",
        flare="Vision, sensation, balance and walking symptoms have clearly worsened. " + _CONSULT,
    ),
)

# Lupus indicators are zero-anchored: severity is value / range maximum
LUPUS = RiskModelConfig(
    disease=Disease.LUPUS,
    index_name="LFI",
    indicators=(
        _scale("facial_rash", 4.0, 0.0),
        _scale("sun_exposure", 3.0, 0.0, maximum=120.0),
        _scale("oral_ulcer", 3.0, 0.0),
        _scale("fatigue", 2.0, 0.0),
        _scale("joint_pain", 2.0, 0.0),
        _scale("fever", 1.0, 0.0),
        _scale("myalgia", 1.0, 0.0),
        _scale("skin_pain", 1.0, 0.0),
        _scale("itchiness", 1.0, 0.0),
        _scale("stress", 0.5, 0.0),
        _scale("sleep_disturbance", 0.5, 0.0),
        _scale("anxiety", 0.3, 0.0),
        _scale("depression", 0.3, 0.0),
        _flag("appetite_loss", 0.3),
        _scale("abdominal_pain", 0.3, 0.0),
        _scale("function_loss", 0.3, 0.0),
    ),
    messages=TierMessages(
        stable="Skin, joint and systemic symptoms are relatively stable.",
        caution="Fatigue or skin and joint symptoms are worse than usual.",
        flare="Skin, joint and systemic symptoms have clearly worsened. " + _CONSULT,
    ),
)

SJOGRENS_SYNDROME = RiskModelConfig(
    disease=Disease.SJOGRENS_SYNDROME,
    index_name="SSI",
    indicators=(
        # Core dryness
        _scale("oral_dryness", 3.0, 3.0),
        _scale("ocular_dryness", 3.0, 3.0),
        # Fatigue / pain / sleep cluster
        _scale("fatigue", 2.5, 5.0),
        _scale("skin_pain", 2.0, 2.0),
        _scale("itchiness", 2.0, 2.0),
        _scale("sleep_disturbance", 1.5, 4.0),
        _scale("function_loss", 1.2, 3.0),
        # Mental burden
        _scale("stress", 1.0, 5.0),
        _scale("anxiety", 1.0, 4.0),
        _scale("depression", 1.0, 4.0),
        # Non-specific systemic burden
        _scale("abdominal_pain", 0.5, 2.0),
        _flag("appetite_loss", 0.3),
    ),
    messages=TierMessages(
        stable="Dryness, fatigue and pain are close to your baseline.",
        caution="Dryness, or fatigue, pain and itching, have increased compared with usual.",
        flare="Dryness together with the fatigue and pain cluster has clearly worsened. " + _CONSULT,
    ),
    shape=ModelShape.TOP_DRIVERS,
)

AUTOIMMUNE_THYROID = RiskModelConfig(
    disease=Disease.AUTOIMMUNE_THYROID,
    index_name="THFI",
    indicators=(
        # Thyrotoxicosis core
        _scale("resting_heart_rate", 3.0, 90.0, maximum=160.0, minimum=40.0),
        _scale("tremor_severity", 2.5, 2.0),
        _scale("heat_intolerance", 2.0, 3.0),
        _scale("weight_loss", 2.0, 1.0),
        # Hypermetabolic, sleep and fatigue
        _scale("fatigue", 1.5, 5.0),
        _scale("sleep_disturbance", 1.5, 4.0),
        _scale("anxiety", 1.2, 4.0),
        _scale("function_loss", 1.0, 3.0),
        _scale("stress", 1.0, 5.0),
        # Non-specific signals
        _body_temp(0.8),
        _scale("depression", 0.8, 4.0),
        _scale("myalgia", 0.3, 3.0),
        _scale("abdominal_pain", 0.3, 2.0),
        _flag("appetite_loss", 0.3),
    ),
    messages=TierMessages(
        stable="No clear worsening of hyperthyroid symptoms for now.",
        caution="Heart rate, tremor, heat intolerance or weight change have increased.",
        flare="Hyperthyroid symptoms such as heart rate, tremor and weight loss have clearly worsened. " + _CONSULT,
    ),
    shape=ModelShape.TOP_DRIVERS,
)


MODEL_CONFIGS: Dict[Disease, RiskModelConfig] = {
    config.disease: config
    for config in (
        RHEUMATOID_ARTHRITIS,
        PSORIASIS,
        CROHNS_DISEASE,
        TYPE1_DIABETES,
        MULTIPLE_SCLEROSIS,
        LUPUS,
        SJOGRENS_SYNDROME,
        AUTOIMMUNE_THYROID,
    )
}
