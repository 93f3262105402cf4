"""
Lead repository seam.

The engine never touches storage. Callers that keep leads somewhere implement
``LeadRepository`` and use ``rescore_lead`` to fetch, score and write back the
score and priority.
"""

import logging
from typing import Any, List, Optional, Protocol

from .models.schemas import Lead, ScoringResult
from .engine import LeadScoringEngine

logger = logging.getLogger(__name__)


class LeadRepository(Protocol):
    """get/put/query-by-filter over leads keyed by integer id"""

    def get(self, lead_id: int) -> Optional[Lead]:
        ...

    def put(self, lead_id: int, lead: Lead) -> None:
        ...

    def query(self, **filters: Any) -> List[Lead]:
        ...


def rescore_lead(
    repository: LeadRepository,
    lead_id: int,
    engine: LeadScoringEngine,
) -> Optional[ScoringResult]:
    """
    Recompute and store the score of one lead.

    Args:
        repository: Where the lead lives
        lead_id: Lead to rescore
        engine: Engine carrying the deployment's profile

    Returns:
        The fresh ScoringResult, or None when the lead does not exist
    """
    lead = repository.get(lead_id)
    if lead is None:
        return None

    result = engine.score_lead(lead)
    repository.put(
        lead_id,
        lead.model_copy(update={"score": result.total_score, "priority": result.priority}),
    )
    logger.info("Rescored lead %d: %d (%s)", lead_id, result.total_score, result.priority.value)
    return result


def rescore_matching(
    repository: LeadRepository,
    engine: LeadScoringEngine,
    **filters: Any,
) -> List[ScoringResult]:
    """Rescore every lead returned by ``repository.query(**filters)``"""
    results = []
    for lead in repository.query(**filters):
        if lead.lead_id is None:
            logger.warning("Skipping lead %r without an id", lead.company_name)
            continue
        result = rescore_lead(repository, lead.lead_id, engine)
        if result is not None:
            results.append(result)
    return results
