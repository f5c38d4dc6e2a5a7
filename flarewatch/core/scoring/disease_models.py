"""
Disease Risk Models

One weighted scorer shared by every condition. Each model normalizes its
indicators against their baselines, weights them and reports a 0-100 score
together with the per-indicator contributions that explain it.

Two output shapes exist: full contribution lists (six conditions) and a
top-3 driver summary with relative percentages (Sjogren's and thyroid).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import numpy as np

from flarewatch.core.base import AnalysisStatus, Disease
from flarewatch.utils import round_half_up
from .classifier import RiskClassification, classify_for
from .disease_configs import MODEL_CONFIGS, ModelShape, RiskModelConfig
from .normalizer import normalize

logger = logging.getLogger(__name__)

MAX_DRIVERS = 3


@dataclass
class ScoredContribution:
    """Weighted severity of one indicator."""
    key: str
    label: str
    normalized: float  # 0-1
    weight: float
    contribution: float  # normalized * weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "normalized": round(self.normalized, 4),
            "weight": self.weight,
            "contribution": round(self.contribution, 4),
        }


@dataclass
class RiskResult:
    """Score with every indicator's contribution, largest first."""
    score: float  # 0-100 scale
    contributions: List[ScoredContribution] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": round(self.score, 2),
            "contributions": [c.to_dict() for c in self.contributions],
        }


@dataclass
class Driver:
    """An indicator's share relative to the strongest one."""
    label: str
    contribution: int  # percent of the top driver

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "contribution": self.contribution}


@dataclass
class TopDriverResult:
    """Score with at most three leading drivers."""
    score: float
    drivers: List[Driver] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": round(self.score, 2),
            "drivers": [d.to_dict() for d in self.drivers],
        }


def score(inputs: Mapping[str, Optional[float]], config: RiskModelConfig) -> RiskResult:
    """
    Compute the weighted risk score for one disease table.

    Args:
        inputs: Indicator values keyed like the table; absent, None or
            non-finite values contribute nothing
        config: Disease table

    Returns:
        RiskResult with contributions for every configured indicator
    """
    contributions = []
    for spec in config.indicators:
        value = inputs.get(spec.key)
        # Non-finite readings count as missing
        if value is None or not np.isfinite(value):
            severity = 0.0
        else:
            severity = normalize(
                float(value), spec.baseline, spec.minimum, spec.maximum, spec.orientation
            )
        contributions.append(ScoredContribution(
            key=spec.key,
            label=spec.label,
            normalized=severity,
            weight=spec.weight,
            contribution=severity * spec.weight,
        ))

    total_weight = config.total_weight
    if total_weight > 0:
        raw = 100.0 * sum(c.contribution for c in contributions) / total_weight
    else:
        raw = 0.0
    value = float(np.clip(raw, 0.0, 100.0))

    # sorted() is stable: ties keep declaration order
    contributions = sorted(contributions, key=lambda c: c.contribution, reverse=True)
    logger.debug(f"{config.index_name} score={value:.2f}")
    return RiskResult(score=value, contributions=contributions)


class FullContributionModel:
    """Risk model reporting every indicator's contribution."""

    shape = ModelShape.FULL_CONTRIBUTIONS

    def __init__(self, config: RiskModelConfig):
        self.config = config

    @property
    def disease(self) -> Disease:
        return self.config.disease

    def assess(self, inputs: Mapping[str, Optional[float]]) -> RiskResult:
        return score(inputs, self.config)

    def classify(self, value: float) -> RiskClassification:
        return classify_for(self.config, value)

    def with_baselines(self, overrides: Mapping[str, float]) -> "FullContributionModel":
        return type(self)(self.config.with_baselines(overrides))


class TopDriverModel(FullContributionModel):
    """Risk model reporting only its three strongest drivers."""

    shape = ModelShape.TOP_DRIVERS

    def assess(self, inputs: Mapping[str, Optional[float]]) -> TopDriverResult:
        result = score(inputs, self.config)
        return TopDriverResult(score=result.score, drivers=top_drivers(result.contributions))


def top_drivers(contributions: List[ScoredContribution], limit: int = MAX_DRIVERS) -> List[Driver]:
    """
    Summarize contributions as relative percentages of the strongest.

    Only positive contributions are kept. The denominator is floored at 1 so
    a handful of weak signals is not inflated to 100%.
    """
    positive = [c for c in contributions if c.contribution > 0]
    positive = sorted(positive, key=lambda c: c.contribution, reverse=True)[:limit]
    if not positive:
        return []
    top = max(positive[0].contribution, 1.0)
    return [
        Driver(label=c.label, contribution=int(round_half_up(c.contribution / top * 100)))
        for c in positive
    ]


RiskModel = Union[FullContributionModel, TopDriverModel]


def _build_model(config: RiskModelConfig) -> RiskModel:
    if config.shape == ModelShape.TOP_DRIVERS:
        return TopDriverModel(config)
    return FullContributionModel(config)


DISEASE_MODELS: Dict[Disease, RiskModel] = {
    disease: _build_model(config) for disease, config in MODEL_CONFIGS.items()
}


def get_model(disease: Union[Disease, str]) -> RiskModel:
    """
    Look up the model for a disease.

    Raises:
        UnknownDiseaseError: If a string name matches no condition
    """
    if not isinstance(disease, Disease):
        disease = Disease.from_string(disease)
    return DISEASE_MODELS[disease]


@dataclass
class DiseaseAssessment:
    """Scored and classified observation for one disease."""
    disease: Disease
    index_name: str
    status: AnalysisStatus = AnalysisStatus.OK
    score: Optional[float] = None
    classification: Optional[RiskClassification] = None
    result: Optional[Union[RiskResult, TopDriverResult]] = None
    message: str = ""

    @property
    def is_sufficient(self) -> bool:
        return self.status == AnalysisStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "disease": self.disease.value,
            "index_name": self.index_name,
            "status": self.status.value,
            "score": round(self.score, 2) if self.score is not None else None,
            "message": self.message,
        }
        if self.classification:
            data["classification"] = self.classification.to_dict()
        if isinstance(self.result, TopDriverResult):
            data["drivers"] = [d.to_dict() for d in self.result.drivers]
        elif isinstance(self.result, RiskResult):
            data["contributions"] = [c.to_dict() for c in self.result.contributions]
        return data


def assess_inputs(
    inputs: Mapping[str, Optional[float]],
    disease: Union[Disease, str],
    baselines: Optional[Mapping[str, float]] = None,
) -> DiseaseAssessment:
    """Score and classify flat indicator inputs for a disease."""
    model = get_model(disease)
    if baselines:
        model = model.with_baselines(baselines)
    result = model.assess(inputs)
    classification = model.classify(result.score)
    return DiseaseAssessment(
        disease=model.disease,
        index_name=model.config.index_name,
        score=result.score,
        classification=classification,
        result=result,
        message=classification.message,
    )


def assess_observation(
    observation: Any,
    disease: Union[Disease, str],
    baselines: Optional[Mapping[str, float]] = None,
) -> DiseaseAssessment:
    """
    Assess a stored symptom observation for one disease.

    Args:
        observation: Object exposing ``indicator_values(disease)``, which
            returns flat inputs or None when the disease sub-record is absent
        disease: Condition to score
        baselines: Optional personal baselines overriding the table

    Returns:
        DiseaseAssessment; status INSUFFICIENT_DATA with no score when the
        disease-specific sub-record is missing
    """
    model = get_model(disease)
    inputs = observation.indicator_values(model.disease)
    if inputs is None:
        logger.debug(f"No {model.disease.value} sub-record; skipping score")
        return DiseaseAssessment(
            disease=model.disease,
            index_name=model.config.index_name,
            status=AnalysisStatus.INSUFFICIENT_DATA,
            message="Disease-specific symptoms were not recorded for this date.",
        )
    return assess_inputs(inputs, model.disease, baselines)
