import pytest

from lead_engine.config.settings import KEYWORD_TABLE_VERSION, MISSING_DATA_CONFIDENCE_CEILING
from lead_engine.engine import LeadScoringEngine, create_engine, quick_score, summarize
from lead_engine.errors import ConfigurationError
from lead_engine.models.profile import BUILTIN_PROFILES
from lead_engine.models.schemas import Lead, Priority, Tier

PROFILE_NAMES = sorted(BUILTIN_PROFILES)


def varied_leads():
    return [
        Lead(company_name="Empty", job_title="", industry=""),
        Lead(
            company_name="Google",
            job_title="Chief Executive Officer and Founder",
            industry="SaaS",
            employee_count=100000,
            funding_info="Public (NASDAQ), Series F",
            tech_stack=["Kubernetes", "Go", "Python", "React", "TypeScript"],
            recent_activity="requested a demo, hiring, expanding, launch, scaling",
            buying_intent="high",
            website="google.com",
            location="Mountain View",
        ),
        Lead(
            company_name="Old Corp",
            job_title="Junior Intern",
            industry="Non-profit",
            company_size="1-10",
            employee_count=0,
            funding_info="Bootstrapped",
            tech_stack=["COBOL", "Fortran", "Perl", "VB6"],
            buying_intent="low",
            website="oldcorp.wordpress.com",
        ),
        Lead(company_name="Odd", job_title="???", industry="!!!", company_size="n/a", funding_info="??"),
    ]


# ============================================================
# Scenarios
# ============================================================

def test_scenario_a_high_value_lead(scenario_a_lead):
    result = create_engine("rule_based").score_lead(scenario_a_lead)

    assert 80 <= result.total_score <= 100
    assert result.total_score == 86
    assert result.tier is Tier.HIGH
    assert result.priority is Priority.HOT
    assert "Large company size (1000+ employees)" in result.positive_factors
    assert "High-value industry (SaaS)" in result.positive_factors
    assert result.recommendations[0] == "Priority prospect - schedule immediate outreach"


def test_scenario_b_low_value_lead(scenario_b_lead):
    result = create_engine("rule_based").score_lead(scenario_b_lead)

    assert result.total_score == 31
    assert result.tier is Tier.LOW
    assert result.priority is Priority.COLD
    assert len(result.positive_factors) <= 1
    assert "Low priority - add to long-term nurturing campaign" in result.recommendations
    assert result.confidence == 30


def test_result_metadata(scenario_a_lead):
    result = create_engine("advanced").score_lead(scenario_a_lead)
    assert result.profile == "advanced"
    assert result.table_version == KEYWORD_TABLE_VERSION
    assert result.company_name == "Acme Cloud"
    assert set(result.breakdown) == {d.value for d in BUILTIN_PROFILES["advanced"].dimensions}


# ============================================================
# Properties
# ============================================================

@pytest.mark.parametrize("name", PROFILE_NAMES)
def test_scores_stay_in_range(name):
    engine = create_engine(name)
    for lead in varied_leads():
        result = engine.score_lead(lead)
        assert 0 <= result.total_score <= 100
        assert 0 <= result.confidence <= 100


@pytest.mark.parametrize("name", PROFILE_NAMES)
def test_scoring_is_idempotent(name, full_lead):
    engine = create_engine(name)
    assert engine.score_lead(full_lead).model_dump_json() == engine.score_lead(full_lead).model_dump_json()


def test_separate_engines_agree(full_lead):
    assert create_engine("enhanced").score_lead(full_lead) == create_engine("enhanced").score_lead(full_lead)


@pytest.mark.parametrize("name", PROFILE_NAMES)
def test_monotonic_in_employee_count(name):
    engine = create_engine(name)
    base = {
        "company_name": "Growthco",
        "job_title": "Head of Data",
        "industry": "Fintech",
        "funding_info": "Seed",
        "tech_stack": ["Python", "PHP"],
        "recent_activity": "hiring engineers",
        "website": "growthco.io",
    }
    counts = [0, 5, 10, 19, 20, 50, 99, 100, 101, 200, 500, 999, 1000, 25000]
    scores = [engine.score_lead(Lead(employee_count=c, **base)).total_score for c in counts]
    assert scores == sorted(scores)


@pytest.mark.parametrize("name", PROFILE_NAMES)
def test_required_only_lead(name, required_only_lead):
    result = create_engine(name).score_lead(required_only_lead)
    assert result.confidence <= MISSING_DATA_CONFIDENCE_CEILING
    assert result.data_completeness == 20
    assert result.recommendations


def test_default_profile_from_settings():
    from lead_engine.config.settings import ACTIVE_PROFILE

    assert LeadScoringEngine().profile.name == ACTIVE_PROFILE


def test_unknown_profile_name_fails_at_construction():
    with pytest.raises(ConfigurationError):
        create_engine("nonexistent")


def test_quick_score_accepts_camel_case_dict():
    result = quick_score(
        {"companyName": "Acme", "jobTitle": "CEO", "industry": "SaaS", "employeeCount": 1200},
        "rule_based",
    )
    assert result.breakdown["company_size"].score == 100
    assert result.breakdown["job_title_authority"].score == 100


# ============================================================
# Batch & statistics
# ============================================================

def test_batch_sorted_by_score(scenario_a_lead, scenario_b_lead, full_lead):
    engine = create_engine("rule_based")
    batch = engine.score_batch([scenario_b_lead, scenario_a_lead, full_lead], max_workers=2)

    assert batch.processed == 3
    scores = [r.total_score for r in batch.results]
    assert scores == sorted(scores, reverse=True)
    assert batch.high_priority + batch.medium_priority + batch.low_priority == 3
    assert batch.low_priority >= 1


def test_batch_keeps_input_order(scenario_a_lead, scenario_b_lead):
    engine = create_engine("rule_based")
    batch = engine.score_batch([scenario_b_lead, scenario_a_lead], sort_by="input")
    assert [r.company_name for r in batch.results] == ["Green Acres Farm", "Acme Cloud"]


def test_batch_results_match_single_scoring(scenario_a_lead, scenario_b_lead):
    engine = create_engine("advanced")
    batch = engine.score_batch([scenario_a_lead, scenario_b_lead], sort_by="input")
    assert batch.results == [engine.score_lead(scenario_a_lead), engine.score_lead(scenario_b_lead)]


def test_batch_rejects_unknown_sort_key(scenario_a_lead):
    with pytest.raises(ValueError):
        create_engine("advanced").score_batch([scenario_a_lead], sort_by="mood")


def test_empty_batch():
    batch = create_engine("advanced").score_batch([])
    assert batch.processed == 0
    assert batch.average_score == 0.0


def test_summarize(scenario_a_lead, scenario_b_lead):
    engine = create_engine("rule_based")
    results = [engine.score_lead(scenario_a_lead), engine.score_lead(scenario_b_lead)]
    stats = summarize(results)

    assert stats.total_leads == 2
    assert stats.average_score == 59  # (86 + 31) / 2 = 58.5
    assert stats.score_distribution.hot == 1
    assert stats.score_distribution.cold == 1
    assert stats.score_distribution.warm == 0


def test_summarize_empty():
    stats = summarize([])
    assert stats.total_leads == 0
    assert stats.score_distribution.hot == 0
