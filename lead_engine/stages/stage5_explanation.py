"""
Stage 5: Explanation
====================
Turns dimension scores into human-readable factors and recommendations.

- Factors: per profile dimension, positive at/above the profile's positive
  threshold, negative at/below its negative threshold, neutral otherwise.
- Recommendations: RECOMMENDATION_RULES evaluated in order, so identical
  input always yields identical, identically ordered output.

Never raises: malformed rules and factor templates are skipped and logged.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models.schemas import Dimension, DimensionFeature, Tier
from ..models.profile import WeightingProfile
from ..config.settings import (
    FACTOR_TEMPLATES,
    MISSING_VALUE_LABEL,
    RECOMMENDATION_RULES,
)

logger = logging.getLogger(__name__)


class ExplanationStage:
    """
    Stage 5: Generate factors and recommendations.
    """

    def __init__(
        self,
        profile: WeightingProfile,
        rules: Optional[Sequence[Mapping[str, Any]]] = None,
        templates: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        self.profile = profile
        self.rules = RECOMMENDATION_RULES if rules is None else rules
        self.templates = FACTOR_TEMPLATES if templates is None else templates

    def process(
        self,
        features: Mapping[Dimension, DimensionFeature],
        tier: Tier,
        confidence: int,
    ) -> Dict[str, List[str]]:
        """
        Explain a scored lead.

        Args:
            features: Extracted dimension features
            tier: Classified tier
            confidence: Estimated confidence

        Returns:
            Dict with "positive", "negative", "neutral" and "recommendations"
        """
        factors = self._analyze_factors(features)
        scores = {
            dimension: features[dimension].score
            for dimension in self.profile.dimensions
            if dimension in features
        }
        factors["recommendations"] = self._generate_recommendations(scores, tier, confidence)
        return factors

    def _analyze_factors(
        self, features: Mapping[Dimension, DimensionFeature]
    ) -> Dict[str, List[str]]:
        positive: List[str] = []
        negative: List[str] = []
        neutral: List[str] = []
        thresholds = self.profile.explanation

        if not isinstance(self.templates, Mapping):
            logger.warning("Factor templates are not a mapping; skipping factors")
            return {"positive": positive, "negative": negative, "neutral": neutral}

        for dimension in self.profile.dimensions:
            feature = features.get(dimension)
            templates = self.templates.get(dimension.value)
            if feature is None or not templates:
                continue

            if feature.score >= thresholds.positive:
                kind, bucket = "positive", positive
            elif feature.score <= thresholds.negative:
                kind, bucket = "negative", negative
            else:
                kind, bucket = "neutral", neutral

            try:
                text = templates[kind].format(value=feature.raw_value or MISSING_VALUE_LABEL)
            except (KeyError, IndexError, TypeError, ValueError, AttributeError) as e:
                logger.warning(
                    "Skipping %s factor for %s: bad template (%s)", kind, dimension.value, e
                )
                continue
            bucket.append(text)

        return {"positive": positive, "negative": negative, "neutral": neutral}

    def _generate_recommendations(
        self,
        scores: Mapping[Dimension, int],
        tier: Tier,
        confidence: int,
    ) -> List[str]:
        if not isinstance(self.rules, Sequence):
            logger.warning("Recommendation rules are not a list; skipping recommendations")
            return []

        recommendations: List[str] = []
        for index, rule in enumerate(self.rules):
            try:
                applies = self._rule_applies(rule, scores, tier, confidence)
                text = rule["text"]
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed recommendation rule #%d: %s", index, e)
                continue

            if applies and text not in recommendations:
                recommendations.append(text)

        return recommendations

    def _rule_applies(
        self,
        rule: Mapping[str, Any],
        scores: Mapping[Dimension, int],
        tier: Tier,
        confidence: int,
    ) -> bool:
        if "tier" in rule and Tier(rule["tier"]) is not tier:
            return False

        if "dimension" in rule:
            dimension = Dimension(rule["dimension"])
            if dimension not in scores:
                return False
            score = scores[dimension]
            if "min" in rule and score < rule["min"]:
                return False
            if "max" in rule and score > rule["max"]:
                return False

        if "confidence_below" in rule and confidence >= rule["confidence_below"]:
            return False

        return True
