import pytest

from lead_engine.errors import ExtractionWarning
from lead_engine.models.schemas import BuyingIntent, Dimension, Lead


def make_lead(**fields) -> Lead:
    base = {"company_name": "Test Co", "job_title": "", "industry": ""}
    base.update(fields)
    return Lead(**base)


def score_of(extractor, dimension, **fields) -> int:
    return extractor.extract_scores(make_lead(**fields))[dimension]


# ============================================================
# Lead normalization
# ============================================================

def test_lead_accepts_camel_case_and_snake_case():
    camel = Lead.model_validate({"companyName": "A", "jobTitle": "CEO", "industry": "SaaS"})
    snake = Lead.model_validate({"company_name": "A", "job_title": "CEO", "industry": "SaaS"})
    assert camel == snake


def test_lead_normalizes_buying_intent_and_tech_stack():
    lead = make_lead(buying_intent="HIGH", tech_stack="React, Python ,")
    assert lead.buying_intent is BuyingIntent.HIGH
    assert lead.tech_stack == ["React", "Python"]
    assert make_lead(buying_intent="").buying_intent is BuyingIntent.UNKNOWN


def test_every_dimension_is_extracted(extractor, full_lead):
    features = extractor.process(full_lead)
    assert set(features) == set(Dimension)
    assert all(0 <= f.score <= 100 for f in features.values())


# ============================================================
# Company size
# ============================================================

@pytest.mark.parametrize("count, expected", [(5000, 100), (1000, 100), (250, 85), (60, 65), (5, 20), (0, 20)])
def test_company_size_from_employee_count(extractor, count, expected):
    assert score_of(extractor, Dimension.COMPANY_SIZE, employee_count=count) == expected


@pytest.mark.parametrize("label, expected", [("1000+", 100), ("201-500", 85), ("1-10", 20), ("about 300 staff", 85)])
def test_company_size_from_label(extractor, label, expected):
    assert score_of(extractor, Dimension.COMPANY_SIZE, company_size=label) == expected


def test_employee_count_takes_precedence_over_label(extractor):
    assert score_of(extractor, Dimension.COMPANY_SIZE, employee_count=5, company_size="1000+") == 20


def test_unparseable_company_size_defaults_with_warning(extractor):
    features, warnings = extractor.extract_with_warnings(make_lead(company_size="lots"))
    feature = features[Dimension.COMPANY_SIZE]
    assert feature.score == 50
    assert feature.defaulted
    assert len(warnings) == 1
    assert isinstance(warnings[0], ExtractionWarning)
    assert warnings[0].field == "company_size"
    assert warnings[0].default == 50


def test_missing_company_size_uses_default(extractor):
    feature = extractor.process(make_lead())[Dimension.COMPANY_SIZE]
    assert feature.score == 50
    assert feature.defaulted


# ============================================================
# Industry
# ============================================================

@pytest.mark.parametrize("industry, expected", [
    ("SaaS", 100),
    ("FinTech", 95),
    ("B2B SaaS / Analytics", 100),
    ("Agriculture", 40),
    ("Non-Profit", 25),
    ("Underwater basket weaving", 50),
])
def test_industry_value(extractor, industry, expected):
    assert score_of(extractor, Dimension.INDUSTRY_VALUE, industry=industry) == expected


def test_unranked_industry_is_not_marked_defaulted(extractor):
    feature = extractor.process(make_lead(industry="Underwater basket weaving"))[Dimension.INDUSTRY_VALUE]
    assert not feature.defaulted
    assert feature.raw_value == "Underwater basket weaving"


# ============================================================
# Job title
# ============================================================

@pytest.mark.parametrize("title, expected", [
    ("CTO", 95),
    ("CEO & Co-Founder", 100),
    ("Director of Engineering", 75),
    ("Vice President of Sales", 85),
    ("President", 90),
    ("Senior Software Engineer", 50),
    ("Intern", 15),
    ("International Sales Manager", 60),
])
def test_job_title_authority(extractor, title, expected):
    assert score_of(extractor, Dimension.JOB_TITLE_AUTHORITY, job_title=title) == expected


def test_abbreviation_inside_word_does_not_match(extractor):
    # "cto" appears inside "director"
    assert score_of(extractor, Dimension.JOB_TITLE_AUTHORITY, job_title="Director") == 75


def test_missing_title_defaults_low(extractor):
    feature = extractor.process(make_lead())[Dimension.JOB_TITLE_AUTHORITY]
    assert feature.score == 30
    assert feature.defaulted


# ============================================================
# Funding
# ============================================================

@pytest.mark.parametrize("info, expected", [
    ("Series C - $50M", 100),
    ("Series B", 90),
    ("Series A, $8M", 80),
    ("Pre-seed", 45),
    ("Seed round", 65),
    ("Bootstrapped", 30),
    ("Raised $12M", 70),
    ("Raised $1.5 billion", 100),
    ("$500k from angels", 40),
    ("Raised $1,500k from angels", 50),
    ("$2,000,000 from friends and family", 50),
    ("Closed $25,000,000", 80),
    ("Raised $250,000", 40),
])
def test_funding_stage(extractor, info, expected):
    assert score_of(extractor, Dimension.FUNDING_STAGE, funding_info=info) == expected


def test_funding_stage_field_is_read(extractor):
    assert score_of(extractor, Dimension.FUNDING_STAGE, funding_stage="Series B") == 90


@pytest.mark.parametrize("info", ["Founded in 2019 with 4,000 users", "B2B, undisclosed", "$40,000 grant"])
def test_small_or_bare_numbers_are_not_funding(extractor, info):
    feature = extractor.process(make_lead(funding_info=info))[Dimension.FUNDING_STAGE]
    assert feature.score == 50
    assert feature.defaulted


def test_malformed_funding_defaults_with_warning(extractor):
    features, warnings = extractor.extract_with_warnings(make_lead(funding_info="mysterious"))
    assert features[Dimension.FUNDING_STAGE].score == 50
    assert features[Dimension.FUNDING_STAGE].defaulted
    assert [w.field for w in warnings] == ["funding_info"]


# ============================================================
# Tech stack
# ============================================================

@pytest.mark.parametrize("stack, expected", [
    (["React", "Kubernetes"], 70),
    (["React", "Python", "Docker", "AWS", "Terraform", "Go"], 90),
    (["jQuery", "PHP"], 20),
    (["React", "PHP"], 45),
    (["Excel"], 50),
])
def test_tech_stack_modernity(extractor, stack, expected):
    assert score_of(extractor, Dimension.TECH_STACK_MODERNITY, tech_stack=stack) == expected


def test_short_tech_name_needs_whole_word(extractor):
    # "go" must not match inside "Google Cloud"; "google cloud" itself is modern
    assert score_of(extractor, Dimension.TECH_STACK_MODERNITY, tech_stack=["Google Cloud"]) == 60


# ============================================================
# Engagement
# ============================================================

def test_engagement_from_intent_only(extractor):
    assert score_of(extractor, Dimension.ENGAGEMENT_SIGNALS, buying_intent="high") == 85


def test_engagement_from_activity_only(extractor):
    assert score_of(extractor, Dimension.ENGAGEMENT_SIGNALS, recent_activity="Requested a demo") == 100


def test_engagement_combines_intent_and_activity(extractor):
    # (85 + 100) / 2 rounds half up
    score = score_of(extractor, Dimension.ENGAGEMENT_SIGNALS, buying_intent="high", recent_activity="Started a trial")
    assert score == 93


def test_activity_keyword_needs_word_start(extractor):
    # "trial" inside "industrial" is not a trial signup
    score = score_of(extractor, Dimension.ENGAGEMENT_SIGNALS, recent_activity="Read an industrial report")
    assert score == 40


@pytest.mark.parametrize("activity, expected", [
    ("Read the brand guidelines", 40),
    ("Stocks were roiling", 40),
    ("Downloaded two guides", 70),
    ("Attended webinars", 80),
    ("Requested pricing", 95),
])
def test_activity_keyword_allows_only_inflections(extractor, activity, expected):
    assert score_of(extractor, Dimension.ENGAGEMENT_SIGNALS, recent_activity=activity) == expected


def test_no_engagement_data_defaults(extractor):
    feature = extractor.process(make_lead())[Dimension.ENGAGEMENT_SIGNALS]
    assert feature.score == 50
    assert feature.defaulted


# ============================================================
# Market position & growth
# ============================================================

@pytest.mark.parametrize("fields, expected", [
    ({"company_name": "Stripe"}, 100),
    ({"funding_info": "Public (NASDAQ)"}, 85),
    ({"employee_count": 5000}, 75),
    ({"website": "https://acme.io"}, 60),
    ({"website": "acme.blogspot.com"}, 35),
    ({"website": "acme.example"}, 45),
])
def test_market_position(extractor, fields, expected):
    assert score_of(extractor, Dimension.MARKET_POSITION, **fields) == expected


def test_growth_indicators(extractor):
    assert score_of(extractor, Dimension.GROWTH_INDICATORS, recent_activity="We are hiring and expanding") == 80
    assert score_of(
        extractor,
        Dimension.GROWTH_INDICATORS,
        recent_activity="hiring",
        funding_info="Recently raised a seed round",
        employee_count=200,
    ) == 95


def test_growth_keyword_allows_only_inflections(extractor):
    assert score_of(extractor, Dimension.GROWTH_INDICATORS, recent_activity="Launched a new product") == 80
    feature = extractor.process(make_lead(recent_activity="Moved into a launchpad coworking space"))[
        Dimension.GROWTH_INDICATORS
    ]
    assert feature.score == 50
    assert feature.raw_value is None


def test_growth_without_signals_defaults(extractor):
    feature = extractor.process(make_lead())[Dimension.GROWTH_INDICATORS]
    assert feature.score == 50
    assert feature.defaulted


def test_required_only_lead_extracts_without_warnings(extractor, required_only_lead):
    features, warnings = extractor.extract_with_warnings(required_only_lead)
    assert warnings == []
    assert len(features) == len(Dimension)
