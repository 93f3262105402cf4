"""
Lead Quality Engine - Main Orchestrator
=======================================
Runs the five-stage pipeline once per lead:
  Stage 1: Feature Extraction → Stage 2: Score Combination →
  Stage 3: Confidence Estimation → Stage 4: Classification →
  Stage 5: Explanation

The engine holds no state between calls. All stages are pure with respect
to the lead and the weighting profile, so one engine can be shared across
threads and requests without locking.
"""

import logging
import time
from typing import Optional, List, Dict, Any
from concurrent.futures import ThreadPoolExecutor

from .models.schemas import (
    Lead,
    ScoringResult,
    BatchScoreResult,
    LeadStatistics,
    ScoreDistribution,
    Priority,
    Tier,
)
from .models.profile import WeightingProfile, create_default_profile, get_profile
from .config.settings import API_CONFIG, KEYWORD_TABLE_VERSION
from .stages.stage1_features import FeatureExtractionStage
from .stages.stage2_combiner import ScoreCombinerStage, round_half_up
from .stages.stage3_confidence import ConfidenceEstimationStage
from .stages.stage4_classifier import ClassificationStage
from .stages.stage5_explanation import ExplanationStage

logger = logging.getLogger(__name__)

SORT_KEYS = ("score", "confidence", "company_name", "input")


class LeadScoringEngine:
    """
    Main Lead Scoring Engine that orchestrates all five stages.
    """

    def __init__(self, profile: Optional[WeightingProfile] = None):
        """
        Initialize the scoring engine.

        Args:
            profile: Weighting profile (LEAD_SCORING_PROFILE if not provided)

        Raises:
            ConfigurationError: if the configured profile name is unknown
        """
        self.profile = profile or create_default_profile()

        self.stage1 = FeatureExtractionStage()
        self.stage2 = ScoreCombinerStage(self.profile)
        self.stage3 = ConfidenceEstimationStage()
        self.stage4 = ClassificationStage(self.profile)
        self.stage5 = ExplanationStage(self.profile)

    def score_lead(self, lead: Lead) -> ScoringResult:
        """
        Score a single lead through the five-stage pipeline.

        Args:
            lead: Lead to score

        Returns:
            Complete ScoringResult
        """
        # =====================================================================
        # STAGE 1: Feature Extraction
        # =====================================================================
        features = self.stage1.process(lead)

        # =====================================================================
        # STAGE 2: Score Combination
        # =====================================================================
        scores = {dimension: feature.score for dimension, feature in features.items()}
        total_score = self.stage2.process(scores)

        # =====================================================================
        # STAGE 3: Confidence Estimation
        # =====================================================================
        profile_scores = [scores[dimension] for dimension in self.profile.dimensions]
        confidence = self.stage3.process(lead, profile_scores)

        # =====================================================================
        # STAGE 4: Classification
        # =====================================================================
        tier, priority = self.stage4.process(total_score)

        # =====================================================================
        # STAGE 5: Explanation
        # =====================================================================
        explanation = self.stage5.process(features, tier, confidence)

        logger.debug(
            "Scored %r with %s: score=%d tier=%s confidence=%d",
            lead.company_name, self.profile.name, total_score, tier.value, confidence,
        )

        return ScoringResult(
            lead_id=lead.lead_id,
            company_name=lead.company_name,
            profile=self.profile.name,
            table_version=KEYWORD_TABLE_VERSION,
            total_score=total_score,
            tier=tier,
            priority=priority,
            confidence=confidence,
            data_completeness=round_half_up(self.stage3.data_completeness(lead)),
            breakdown=self.stage2.breakdown(features),
            positive_factors=explanation["positive"],
            negative_factors=explanation["negative"],
            neutral_factors=explanation["neutral"],
            recommendations=explanation["recommendations"],
        )

    def score_batch(
        self,
        leads: List[Lead],
        max_workers: Optional[int] = None,
        sort_by: str = "score",
    ) -> BatchScoreResult:
        """
        Score multiple leads.

        Args:
            leads: Leads to score
            max_workers: Number of parallel workers
            sort_by: "score", "confidence", "company_name" or "input"

        Returns:
            BatchScoreResult with all results and tier counts
        """
        if sort_by not in SORT_KEYS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_KEYS)}")

        start_time = time.time()
        workers = max_workers or API_CONFIG["batch_workers"]

        # map() keeps input order, so ties sort identically on every run
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(self.score_lead, leads))

        if sort_by == "score":
            results.sort(key=lambda r: r.total_score, reverse=True)
        elif sort_by == "confidence":
            results.sort(key=lambda r: r.confidence, reverse=True)
        elif sort_by == "company_name":
            results.sort(key=lambda r: r.company_name.lower())

        total_time = (time.time() - start_time) * 1000
        tiers = [r.tier for r in results]

        return BatchScoreResult(
            processed=len(results),
            high_priority=tiers.count(Tier.HIGH),
            medium_priority=tiers.count(Tier.MEDIUM),
            low_priority=tiers.count(Tier.LOW),
            average_score=round(
                sum(r.total_score for r in results) / len(results), 1
            ) if results else 0.0,
            processing_time_ms=round(total_time, 2),
            results=results,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def summarize(results: List[ScoringResult]) -> LeadStatistics:
    """
    Aggregate statistics over scoring results.

    Args:
        results: Results to aggregate

    Returns:
        LeadStatistics with averages and the hot/warm/cold distribution
    """
    if not results:
        return LeadStatistics(
            total_leads=0,
            average_score=0,
            average_confidence=0,
            score_distribution=ScoreDistribution(),
        )

    priorities = [r.priority for r in results]
    return LeadStatistics(
        total_leads=len(results),
        average_score=round_half_up(sum(r.total_score for r in results) / len(results)),
        average_confidence=round_half_up(sum(r.confidence for r in results) / len(results)),
        score_distribution=ScoreDistribution(
            hot=priorities.count(Priority.HOT),
            warm=priorities.count(Priority.WARM),
            cold=priorities.count(Priority.COLD),
        ),
    )


def create_engine(profile_name: Optional[str] = None) -> LeadScoringEngine:
    """
    Factory function to create an engine for a built-in profile.

    Args:
        profile_name: Built-in profile name (LEAD_SCORING_PROFILE if omitted)

    Returns:
        Configured LeadScoringEngine instance
    """
    profile = get_profile(profile_name) if profile_name else create_default_profile()
    return LeadScoringEngine(profile=profile)


def quick_score(lead_data: Dict[str, Any], profile_name: Optional[str] = None) -> ScoringResult:
    """
    Quick scoring function for a single lead.

    Args:
        lead_data: Dictionary with lead information (camelCase or snake_case)
        profile_name: Built-in profile name

    Returns:
        ScoringResult
    """
    engine = create_engine(profile_name)
    return engine.score_lead(Lead.model_validate(lead_data))
