"""
Stage 4: Classification
=======================
Maps a total score onto the profile's ordered tier table.
Lower bounds are inclusive: with the default table 80 is High, 79 Medium.
"""

from typing import Tuple

from ..models.schemas import Priority, Tier, TIER_PRIORITY
from ..models.profile import WeightingProfile


class ClassificationStage:
    """
    Stage 4: Assign tier and priority.
    """

    def __init__(self, profile: WeightingProfile):
        self.table = profile.tiers.ordered()

    def process(self, score: int) -> Tuple[Tier, Priority]:
        """Return (tier, priority) for a total score"""
        tier = self._map_to_tier(score)
        return tier, TIER_PRIORITY[tier]

    def _map_to_tier(self, score: int) -> Tier:
        for minimum, tier in self.table:
            if score >= minimum:
                return tier
        return Tier.LOW
