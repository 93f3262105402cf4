"""
Weighting Profile Models
"""

import logging
import math
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from .schemas import Dimension, Tier
from ..config.settings import (
    ACTIVE_PROFILE,
    PROFILE_DEFINITIONS,
    WEIGHT_TOLERANCE,
)
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class CombinationStrategy(str, Enum):
    """How dimension scores are folded into one total"""
    LINEAR = "linear"
    LOGISTIC = "logistic"


class WeightScale(str, Enum):
    """Scale a profile declares its weights in"""
    FRACTION = "fraction"
    POINTS = "points"


class TierThresholds(BaseModel):
    """Lower bounds (inclusive) of the High and Medium tiers"""
    model_config = ConfigDict(frozen=True)

    high: int = 80
    medium: int = 60

    def ordered(self) -> List[tuple]:
        """Threshold table, highest tier first"""
        return [(self.high, Tier.HIGH), (self.medium, Tier.MEDIUM), (0, Tier.LOW)]


class ExplanationThresholds(BaseModel):
    """Dimension scores at/above positive or at/below negative get a factor"""
    model_config = ConfigDict(frozen=True)

    positive: int = 80
    negative: int = 40


class WeightingProfile(BaseModel):
    """
    Named, validated set of per-dimension weights.

    Weights are stored read-only, as fractions summing to 1.0. A ``points`` profile is
    declared in 0-100 caps (for example four dimensions at 25) and normalized
    here; ``max_points`` reports the original caps.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    strategy: CombinationStrategy = CombinationStrategy.LINEAR
    scale: WeightScale = WeightScale.FRACTION
    weights: Mapping[Dimension, float]
    bias: float = 0.0
    gain: float = 1.0
    tiers: TierThresholds = Field(default_factory=TierThresholds)
    explanation: ExplanationThresholds = Field(default_factory=ExplanationThresholds)

    @model_validator(mode="before")
    @classmethod
    def _validate_weights(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        name = data.get("name")
        weights = data.get("weights")
        if not isinstance(weights, Mapping) or not weights:
            raise ConfigurationError("weights must be a non-empty mapping", name)

        try:
            scale = WeightScale(data.get("scale", WeightScale.FRACTION))
        except ValueError:
            raise ConfigurationError(f"unknown weight scale {data.get('scale')!r}", name) from None

        normalized: Dict[Dimension, float] = {}
        for key, value in weights.items():
            try:
                dimension = Dimension(key)
            except ValueError:
                raise ConfigurationError(f"unknown dimension '{key}'", name) from None

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"weight for '{dimension.value}' is not a number", name)
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(
                    f"weight for '{dimension.value}' must be non-negative, got {value}", name
                )

            normalized[dimension] = value / 100.0 if scale is WeightScale.POINTS else float(value)

        total = sum(normalized.values())
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            declared = total * 100 if scale is WeightScale.POINTS else total
            expected = "100 points" if scale is WeightScale.POINTS else "1.0"
            raise ConfigurationError(
                f"weights sum to {declared:.6g}, expected {expected}", name
            )

        # Stored normalized, so a dumped profile loads back unchanged
        return {**data, "scale": WeightScale.FRACTION, "weights": normalized}

    @field_validator("weights", mode="after")
    @classmethod
    def _freeze_weights(cls, weights: Mapping[Dimension, float]) -> Mapping[Dimension, float]:
        # Shared by every engine using the profile; read-only after construction
        return MappingProxyType(dict(weights))

    @field_serializer("weights")
    def _serialize_weights(self, weights: Mapping[Dimension, float]) -> Dict[str, float]:
        return {dimension.value: weight for dimension, weight in weights.items()}

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "WeightingProfile":
        tiers = self.tiers
        if not 0 < tiers.medium < tiers.high <= 100:
            raise ConfigurationError(
                f"tier thresholds must satisfy 0 < medium < high <= 100, "
                f"got medium={tiers.medium} high={tiers.high}",
                self.name,
            )

        explanation = self.explanation
        if not 0 <= explanation.negative < explanation.positive <= 100:
            raise ConfigurationError(
                f"explanation thresholds must satisfy 0 <= negative < positive <= 100, "
                f"got negative={explanation.negative} positive={explanation.positive}",
                self.name,
            )

        if self.strategy is CombinationStrategy.LOGISTIC and self.gain <= 0:
            raise ConfigurationError("logistic gain must be positive", self.name)

        return self

    @property
    def dimensions(self) -> List[Dimension]:
        return list(self.weights)

    def max_points(self, dimension: Dimension) -> float:
        """Weight expressed as a 0-100 point cap"""
        return round(self.weights.get(dimension, 0.0) * 100, 4)


# =============================================================================
# Loading
# =============================================================================

def load_profile(definition: Mapping[str, Any]) -> WeightingProfile:
    """
    Build a profile from a plain definition (settings, JSON body, file).

    Raises:
        ConfigurationError: for any invalid definition, including type errors
            pydantic reports on individual fields.
    """
    try:
        profile = WeightingProfile(**definition)
    except ValidationError as exc:
        raise ConfigurationError(str(exc), definition.get("name")) from exc

    logger.debug("Loaded weighting profile %s (%s)", profile.name, profile.strategy.value)
    return profile


BUILTIN_PROFILES: Dict[str, WeightingProfile] = {
    name: load_profile(definition) for name, definition in PROFILE_DEFINITIONS.items()
}


def get_profile(name: str) -> WeightingProfile:
    """Look up a built-in profile by name"""
    try:
        return BUILTIN_PROFILES[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown profile; available: {', '.join(sorted(BUILTIN_PROFILES))}", name
        ) from None


def create_default_profile() -> WeightingProfile:
    """Profile selected by LEAD_SCORING_PROFILE"""
    return get_profile(ACTIVE_PROFILE)
