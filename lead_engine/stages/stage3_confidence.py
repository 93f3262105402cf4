"""
Stage 3: Confidence Estimation
==============================
How much of the score rests on real data rather than defaults.

confidence = clamp(completeness - min(variance / K, cap), floor, 100)

High variance across dimensions (some very high, others very low) reads as
contradictory data and lowers confidence even for complete records.
"""

from typing import Dict, Iterable, Optional

from ..models.schemas import BuyingIntent, Lead
from ..config.settings import COMPLETENESS_FIELDS, CONFIDENCE_SETTINGS
from .stage2_combiner import round_half_up


class ConfidenceEstimationStage:
    """
    Stage 3: Derive a 0-100 confidence from completeness and dispersion.
    """

    def __init__(
        self,
        variance_divisor: Optional[float] = None,
        variance_penalty_cap: Optional[float] = None,
        floor: Optional[int] = None,
    ):
        self.variance_divisor = variance_divisor or CONFIDENCE_SETTINGS["variance_divisor"]
        self.variance_penalty_cap = (
            CONFIDENCE_SETTINGS["variance_penalty_cap"]
            if variance_penalty_cap is None
            else variance_penalty_cap
        )
        self.floor = CONFIDENCE_SETTINGS["floor"] if floor is None else floor

    def process(self, lead: Lead, scores: Iterable[float]) -> int:
        """
        Calculate confidence for a scored lead.

        Args:
            lead: The lead that was scored
            scores: Dimension scores used by the active profile

        Returns:
            Integer confidence in [floor, 100]
        """
        completeness = self.data_completeness(lead)
        penalty = min(self.variance(scores) / self.variance_divisor, self.variance_penalty_cap)
        confidence = completeness - penalty
        return round_half_up(max(self.floor, min(100, confidence)))

    def data_completeness(self, lead: Lead) -> float:
        """Percentage of expected fields carrying data"""
        present = self._present_fields(lead)
        populated = sum(1 for field in COMPLETENESS_FIELDS if present.get(field))
        return populated / len(COMPLETENESS_FIELDS) * 100

    @staticmethod
    def variance(scores: Iterable[float]) -> float:
        """Population variance"""
        values = list(scores)
        if not values:
            return 0.0
        mean = sum(values) / len(values)
        return sum((v - mean) ** 2 for v in values) / len(values)

    def _present_fields(self, lead: Lead) -> Dict[str, bool]:
        return {
            "company_size": bool(lead.company_size and lead.company_size.strip()),
            "industry": bool(lead.industry and lead.industry.strip()),
            "job_title": bool(lead.job_title and lead.job_title.strip()),
            "funding": bool(
                (lead.funding_info and lead.funding_info.strip())
                or (lead.funding_stage and lead.funding_stage.strip())
            ),
            "tech_stack": any(t and t.strip() for t in lead.tech_stack),
            "recent_activity": bool(lead.recent_activity and lead.recent_activity.strip()),
            "buying_intent": lead.buying_intent is not BuyingIntent.UNKNOWN,
            "website": bool(lead.website and lead.website.strip()),
            "location": bool(lead.location and lead.location.strip()),
            "employee_count": lead.employee_count is not None,
        }
