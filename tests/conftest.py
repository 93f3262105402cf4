"""
Lead Quality Engine Test Fixtures
Shared leads and stage instances for all test modules.
"""
import pytest

from lead_engine.models.schemas import Lead
from lead_engine.models.profile import get_profile
from lead_engine.stages.stage1_features import FeatureExtractionStage


@pytest.fixture
def scenario_a_lead() -> Lead:
    """Large SaaS company, technical executive, late-stage funding"""
    return Lead.model_validate({
        "companyName": "Acme Cloud",
        "companySize": "1000+",
        "jobTitle": "CTO",
        "industry": "SaaS",
        "fundingInfo": "Series C - $50M",
        "techStack": ["React", "Kubernetes"],
    })


@pytest.fixture
def scenario_b_lead() -> Lead:
    """Tiny agriculture company, junior contact, no funding or stack"""
    return Lead.model_validate({
        "companyName": "Green Acres Farm",
        "companySize": "1-10",
        "jobTitle": "Intern",
        "industry": "Agriculture",
        "fundingInfo": None,
        "techStack": [],
    })


@pytest.fixture
def required_only_lead() -> Lead:
    return Lead(company_name="Mystery Co", job_title="Consultant", industry="Consulting")


@pytest.fixture
def full_lead() -> Lead:
    """Every field that counts towards completeness is populated"""
    return Lead(
        lead_id=7,
        company_name="Northwind Analytics",
        contact_name="Sam Rivera",
        job_title="VP of Engineering",
        company_size="201-500",
        employee_count=320,
        industry="Data Analytics",
        location="Austin, TX",
        website="https://northwind.io",
        email="sam@northwind.io",
        tech_stack=["Python", "Snowflake", "Kafka"],
        funding_info="Series B - recently raised $40M",
        recent_activity="Requested a demo, hiring data engineers",
        buying_intent="high",
    )


@pytest.fixture(scope="session")
def extractor() -> FeatureExtractionStage:
    return FeatureExtractionStage()


@pytest.fixture
def rule_based():
    return get_profile("rule_based")


@pytest.fixture
def advanced():
    return get_profile("advanced")
