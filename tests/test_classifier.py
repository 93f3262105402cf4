import pytest

from lead_engine.models.profile import get_profile
from lead_engine.models.schemas import Priority, Tier
from lead_engine.stages.stage2_combiner import ScoreCombinerStage
from lead_engine.stages.stage4_classifier import ClassificationStage


@pytest.mark.parametrize("score, tier, priority", [
    (100, Tier.HIGH, Priority.HOT),
    (80, Tier.HIGH, Priority.HOT),
    (79, Tier.MEDIUM, Priority.WARM),
    (60, Tier.MEDIUM, Priority.WARM),
    (59, Tier.LOW, Priority.COLD),
    (0, Tier.LOW, Priority.COLD),
])
def test_default_tier_table(advanced, score, tier, priority):
    assert ClassificationStage(advanced).process(score) == (tier, priority)


def test_profile_specific_thresholds():
    classifier = ClassificationStage(get_profile("enhanced"))
    assert classifier.process(75) == (Tier.HIGH, Priority.HOT)
    assert classifier.process(50) == (Tier.MEDIUM, Priority.WARM)
    assert classifier.process(49) == (Tier.LOW, Priority.COLD)


@pytest.mark.parametrize("name", ["rule_based", "advanced"])
def test_weighted_sum_boundary(name):
    profile = get_profile(name)
    combiner = ScoreCombinerStage(profile)
    classifier = ClassificationStage(profile)

    at_80 = combiner.process({d: 80 for d in profile.dimensions})
    at_79 = combiner.process({d: 79 for d in profile.dimensions})

    assert classifier.process(at_80) == (Tier.HIGH, Priority.HOT)
    assert classifier.process(at_79) == (Tier.MEDIUM, Priority.WARM)
