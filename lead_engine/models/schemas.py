"""
Pydantic schemas for the Lead Quality Engine
"""

from enum import Enum
from typing import List, Dict, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# ENUMS
# =============================================================================

class Dimension(str, Enum):
    """One scored aspect of a lead"""
    COMPANY_SIZE = "company_size"
    INDUSTRY_VALUE = "industry_value"
    JOB_TITLE_AUTHORITY = "job_title_authority"
    FUNDING_STAGE = "funding_stage"
    TECH_STACK_MODERNITY = "tech_stack_modernity"
    ENGAGEMENT_SIGNALS = "engagement_signals"
    MARKET_POSITION = "market_position"
    GROWTH_INDICATORS = "growth_indicators"


class BuyingIntent(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class Tier(str, Enum):
    """Lead quality tier"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Priority(str, Enum):
    """Pipeline priority mirroring the tier"""
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


TIER_PRIORITY = {
    Tier.HIGH: Priority.HOT,
    Tier.MEDIUM: Priority.WARM,
    Tier.LOW: Priority.COLD,
}


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Lead(CamelModel):
    """A company/contact profile under evaluation"""

    lead_id: Optional[int] = None
    company_name: str
    contact_name: Optional[str] = None
    job_title: str
    company_size: Optional[str] = None
    employee_count: Optional[int] = Field(None, ge=0)
    industry: str
    location: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    tech_stack: List[str] = Field(default_factory=list)
    funding_info: Optional[str] = None
    funding_stage: Optional[str] = None
    recent_activity: Optional[str] = None
    buying_intent: BuyingIntent = BuyingIntent.UNKNOWN

    # Written back by callers after scoring; never read by the engine
    score: Optional[int] = None
    priority: Optional[Priority] = None

    @field_validator("buying_intent", mode="before")
    @classmethod
    def _normalize_intent(cls, value: Any) -> Any:
        if value is None or value == "":
            return BuyingIntent.UNKNOWN
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("tech_stack", mode="before")
    @classmethod
    def _normalize_tech_stack(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value


# =============================================================================
# STAGE RESULT SCHEMAS
# =============================================================================

class DimensionFeature(BaseModel):
    """Extractor output for a single dimension"""
    score: int
    reasoning: str
    raw_value: Optional[str] = None
    defaulted: bool = False


class DimensionBreakdown(CamelModel):
    """Per-dimension line of a scoring result"""
    score: int
    weight: float
    weighted: float
    reasoning: str
    defaulted: bool = False


# =============================================================================
# UNIFIED OUTPUT SCHEMA
# =============================================================================

class ScoringResult(CamelModel):
    """Complete lead quality evaluation"""
    lead_id: Optional[int] = None
    company_name: str
    profile: str
    table_version: str
    total_score: int = Field(ge=0, le=100)
    tier: Tier
    priority: Priority
    confidence: int = Field(ge=0, le=100)
    data_completeness: int = Field(ge=0, le=100)
    breakdown: Dict[str, DimensionBreakdown]
    positive_factors: List[str] = Field(default_factory=list)
    negative_factors: List[str] = Field(default_factory=list)
    neutral_factors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class BatchScoreResult(CamelModel):
    """Result from batch scoring"""
    processed: int
    high_priority: int
    medium_priority: int
    low_priority: int
    average_score: float
    processing_time_ms: float
    results: List[ScoringResult]


class ScoreDistribution(CamelModel):
    hot: int = 0
    warm: int = 0
    cold: int = 0


class LeadStatistics(CamelModel):
    """Aggregate view over a set of scoring results"""
    total_leads: int
    average_score: int
    average_confidence: int
    score_distribution: ScoreDistribution


# =============================================================================
# API REQUEST SCHEMAS
# =============================================================================

class BatchScoreRequest(CamelModel):
    """Request to score multiple leads"""
    leads: List[Lead]
    profile: Optional[str] = None
    sort_by: str = "score"
