"""
Stage 2: Score Combination
==========================
Folds dimension scores into one 0-100 total using the active profile.

Strategies:
- Linear: clamp(sum(score * weight), 0, 100), rounded half up
- Logistic: sigmoid(gain * sum(weight * score/100) + bias) * 100
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping

from ..models.schemas import Dimension, DimensionBreakdown, DimensionFeature
from ..models.profile import CombinationStrategy, WeightingProfile


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero"""
    # Trim float noise first so 79.99999999999999 counts as 80
    return int(Decimal(repr(round(value, 6))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


class ScoreCombinerStage:
    """
    Stage 2: Combine per-dimension scores into a total score.
    """

    def __init__(self, profile: WeightingProfile):
        self.profile = profile

    def process(self, scores: Mapping[Dimension, float]) -> int:
        """
        Calculate the total score.

        Args:
            scores: Dimension scores (0-100). Dimensions outside the profile
                are ignored; profile dimensions missing here count as 0.

        Returns:
            Integer total score in [0, 100]
        """
        weighted_sum = sum(
            scores.get(dimension, 0) * weight
            for dimension, weight in self.profile.weights.items()
        )

        if self.profile.strategy is CombinationStrategy.LOGISTIC:
            linear = self.profile.gain * (weighted_sum / 100.0) + self.profile.bias
            return max(0, min(100, round_half_up(sigmoid(linear) * 100)))

        return round_half_up(max(0.0, min(100.0, weighted_sum)))

    def breakdown(self, features: Mapping[Dimension, DimensionFeature]) -> Dict[str, DimensionBreakdown]:
        """Per-dimension score/weight lines for the profile's dimensions"""
        lines = {}
        for dimension, weight in self.profile.weights.items():
            feature = features[dimension]
            lines[dimension.value] = DimensionBreakdown(
                score=feature.score,
                weight=round(weight, 6),
                weighted=round(feature.score * weight, 2),
                reasoning=feature.reasoning,
                defaulted=feature.defaulted,
            )
        return lines
