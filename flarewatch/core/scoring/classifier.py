"""
Risk Classifier

Bands a 0-100 disease risk score into three tiers. Cut points are per
disease (rheumatoid arthritis uses 35/65, every other model 30/60); each
band is closed at its lower edge.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .disease_configs import RiskModelConfig, TierMessages

DEFAULT_CUT_POINTS: Tuple[float, float] = (30.0, 60.0)

DEFAULT_MESSAGES = TierMessages(
    stable="Symptoms are close to your baseline.",
    caution="Some symptoms are worse than usual.",
    flare="Symptoms have clearly worsened. Please consult your care team.",
)


class RiskTier(str, Enum):
    """Disease risk tiers."""
    STABLE = "stable"
    CAUTION = "caution"
    FLARE = "flare"

    @classmethod
    def from_score(
        cls,
        score: float,
        cut_points: Tuple[float, float] = DEFAULT_CUT_POINTS,
    ) -> "RiskTier":
        """Convert numeric score (0-100) to a tier."""
        caution_at, flare_at = cut_points
        if score < caution_at:
            return cls.STABLE
        elif score < flare_at:
            return cls.CAUTION
        else:
            return cls.FLARE

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS = {
    RiskTier.STABLE: "Stable",
    RiskTier.CAUTION: "Caution",
    RiskTier.FLARE: "High-risk flare",
}


@dataclass
class RiskClassification:
    """Tier, display label and message for a score."""
    tier: RiskTier
    label: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "label": self.label,
            "message": self.message,
        }


def classify(
    score: float,
    cut_points: Tuple[float, float] = DEFAULT_CUT_POINTS,
    messages: Optional[TierMessages] = None,
) -> RiskClassification:
    """
    Classify a disease risk score.

    Args:
        score: Score on the 0-100 scale
        cut_points: (caution, flare) lower bounds
        messages: Per-tier messages; generic wording when omitted

    Returns:
        RiskClassification for the band containing the score
    """
    messages = messages or DEFAULT_MESSAGES
    tier = RiskTier.from_score(score, cut_points)
    message = {
        RiskTier.STABLE: messages.stable,
        RiskTier.CAUTION: messages.caution,
        RiskTier.FLARE: messages.flare,
    }[tier]
    return RiskClassification(tier=tier, label=tier.label, message=message)


def classify_for(config: RiskModelConfig, score: float) -> RiskClassification:
    """Classify using a disease model's own cut points and wording."""
    return classify(score, config.cut_points, config.messages)
