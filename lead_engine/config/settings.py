"""
Configuration settings for the Lead Quality Engine
"""

from typing import Dict, List, Any
import os

# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

ACTIVE_PROFILE = os.getenv("LEAD_SCORING_PROFILE", "advanced")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

API_CONFIG = {
    "host": os.getenv("API_HOST", "0.0.0.0"),
    "port": int(os.getenv("API_PORT", "8000")),
    "batch_workers": int(os.getenv("BATCH_WORKERS", "4")),
}

# Bumped whenever any keyword table below changes
KEYWORD_TABLE_VERSION = "2024.2"

# =============================================================================
# DIMENSION DEFAULTS
# =============================================================================

# Substituted when the underlying Lead field is missing. Never zero.
DIMENSION_DEFAULTS = {
    "company_size": 50,
    "industry_value": 50,
    "job_title_authority": 30,
    "funding_stage": 50,
    "tech_stack_modernity": 50,
    "engagement_signals": 50,
    "market_position": 50,
    "growth_indicators": 50,
}

# =============================================================================
# COMPANY SIZE
# =============================================================================

# (minimum employees, score), highest first
EMPLOYEE_COUNT_LADDER = [
    (1000, 100),
    (500, 95),
    (200, 85),
    (100, 75),
    (50, 65),
    (20, 50),
    (10, 35),
    (0, 20),
]

COMPANY_SIZE_BRACKETS = {
    "5000+": 100,
    "1001-5000": 100,
    "1000+": 100,
    "501-1000": 95,
    "500-1000": 95,
    "201-500": 85,
    "200-500": 85,
    "100-200": 75,
    "51-200": 70,
    "50-100": 65,
    "20-50": 50,
    "11-50": 45,
    "10-20": 35,
    "1-10": 20,
}

LARGE_COMPANY_EMPLOYEES = 1000

# =============================================================================
# INDUSTRY VALUE
# =============================================================================

# Ranked table: (score, keywords). Highest matching score wins.
INDUSTRY_VALUES = [
    (100, ["saas", "software as a service"]),
    (95, ["fintech", "financial technology"]),
    (90, ["cybersecurity", "cyber security", "infosec"]),
    (88, ["enterprise software"]),
    (85, ["ai/ml", "artificial intelligence", "machine learning"]),
    (82, ["data analytics", "analytics"]),
    (80, ["cloud", "cloud services", "cloud computing"]),
    (78, ["devops"]),
    (75, ["healthtech", "healthcare tech", "healthcare technology"]),
    (72, ["edtech"]),
    (70, ["e-commerce", "ecommerce"]),
    (68, ["martech", "adtech"]),
    (65, ["proptech", "insurtech"]),
    (62, ["legaltech", "hrtech"]),
    (60, ["technology", "software", "financial services"]),
    (58, ["healthcare", "media", "consulting"]),
    (55, ["manufacturing", "logistics", "transportation"]),
    (50, ["retail", "real estate", "travel", "hospitality"]),
    (45, ["construction"]),
    (40, ["agriculture", "farming"]),
    (38, ["energy", "utilities"]),
    (35, ["government", "public sector"]),
    (30, ["education"]),
    (25, ["non-profit", "nonprofit", "non profit", "charity"]),
]

# =============================================================================
# JOB TITLE AUTHORITY
# =============================================================================

# Ordered category table: category -> [(pattern, score)]. Patterns are
# regexes matched case-insensitively with word boundaries.
JOB_TITLE_CATEGORIES = {
    "c_level": [
        (r"ceo", 100),
        (r"co-?founder", 100),
        (r"founder", 100),
        (r"owner", 100),
        (r"chief", 95),
        (r"cto", 95),
        (r"cfo", 95),
        (r"coo", 95),
        (r"cio", 90),
        (r"cro", 90),
        (r"cmo", 90),
        (r"(?<!vice )president", 90),
    ],
    "vp": [
        (r"vp", 85),
        (r"svp", 85),
        (r"evp", 85),
        (r"vice president", 85),
    ],
    "director": [
        (r"director", 75),
        (r"head", 70),
    ],
    "manager": [
        (r"manager", 60),
        (r"principal", 55),
    ],
    "individual_contributor": [
        (r"senior", 50),
        (r"sr\.?", 50),
        (r"lead", 45),
        (r"architect", 40),
        (r"engineer", 30),
        (r"developer", 30),
        (r"analyst", 25),
        (r"coordinator", 25),
        (r"specialist", 25),
        (r"associate", 20),
        (r"junior", 15),
        (r"jr\.?", 15),
        (r"intern", 15),
    ],
}

# =============================================================================
# FUNDING STAGE
# =============================================================================

# Checked in order; first hit wins. "pre-seed" must precede "seed".
FUNDING_STAGE_KEYWORDS = [
    (r"series\s*[c-z]\b|series\s*c\+", 100, "Series C+"),
    (r"series\s*b\b", 90, "Series B"),
    (r"\bipo\b|\bpublic(ly traded)?\b|\bnasdaq\b|\bnyse\b", 85, "Public"),
    (r"series\s*a\b", 80, "Series A"),
    (r"\bacquired\b|\bacquisition\b", 70, "Acquired"),
    (r"\bpre-?seed\b", 45, "Pre-seed"),
    (r"\bseed\b", 65, "Seed"),
    (r"\bbootstrap(ped)?\b|\bself-?funded\b", 30, "Bootstrapped"),
]

FUNDING_AMOUNT_PATTERN = (
    r"(?<![\w.,])(\$)?\s*(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
    r"\s*(k|m|b|thousand|million|billion|mm|bn)?\b"
)

# Figures without a k/m/b suffix are read as whole dollars, and only from here up
FUNDING_BARE_DOLLAR_MINIMUM = 100_000

# (minimum amount in millions, score), highest first
FUNDING_AMOUNT_LADDER = [
    (100, 100),
    (50, 90),
    (20, 80),
    (10, 70),
    (5, 60),
    (1, 50),
    (0, 40),
]

RECENT_FUNDING_KEYWORDS = [
    "recent",
    "recently",
    "just raised",
    "just closed",
    "newly",
    "this year",
    "last month",
    "last quarter",
]

# =============================================================================
# TECH STACK
# =============================================================================

MODERN_TECH = [
    "react", "vue", "angular", "svelte", "next.js", "typescript",
    "node", "node.js", "nodejs", "python", "go", "golang", "rust",
    "kubernetes", "docker", "terraform", "aws", "azure", "gcp",
    "google cloud", "graphql", "serverless", "microservices",
    "tensorflow", "pytorch", "snowflake", "kafka", "redis",
    "postgresql", "mongodb", "elasticsearch",
]

LEGACY_TECH = [
    "jquery", "php", "perl", "cobol", "fortran", "visual basic", "vb6",
    "coldfusion", "delphi", "flash", "silverlight", "mainframe",
]

TECH_SCORING = {
    "base": 50,
    "modern_bonus": 10,
    "modern_cap": 40,
    "legacy_penalty": 15,
    "legacy_cap": 30,
}

# =============================================================================
# ENGAGEMENT SIGNALS
# =============================================================================

BUYING_INTENT_SCORES = {
    "high": 85,
    "medium": 65,
    "low": 35,
}

# (pattern, score); best match wins
ACTIVITY_KEYWORDS = [
    (r"request(ed)? (a )?demo|demo request|booked (a )?demo", 100),
    (r"trial", 100),
    (r"pricing", 95),
    (r"contacted sales|talk to sales", 95),
    (r"roi|calculator", 90),
    (r"case stud(y|ies)|technical documentation", 85),
    (r"webinar|product demo", 80),
    (r"whitepaper|white paper|guide|e-?book", 70),
    (r"careers|hiring", 60),
    (r"blog|newsletter", 50),
]

ACTIVITY_NO_MATCH_SCORE = 40

# =============================================================================
# MARKET POSITION
# =============================================================================

RECOGNIZED_COMPANIES = [
    "google", "microsoft", "apple", "amazon", "facebook", "meta", "netflix",
    "tesla", "uber", "airbnb", "stripe", "shopify", "salesforce", "slack",
    "zoom", "spotify", "github", "gitlab", "atlassian", "figma", "notion",
    "discord",
]

BLOG_PLATFORMS = [
    "blogspot", "wordpress.com", "wixsite", "medium.com", "substack",
    "tumblr", "weebly", "squarespace",
]

PROFESSIONAL_TLDS = [".com", ".io", ".ai", ".co", ".net", ".org", ".dev", ".tech"]

MARKET_POSITION_SCORES = {
    "recognized": 100,
    "public": 85,
    "large_company": 75,
    "professional_domain": 60,
    "other_domain": 45,
    "blog_platform": 35,
}

# =============================================================================
# GROWTH INDICATORS
# =============================================================================

GROWTH_KEYWORDS = [
    "hiring", "careers", "expansion", "expanding", "scaling", "new office",
    "new product", "launch", "partnership", "international", "growing",
    "headcount",
]

GROWTH_SCORING = {
    "base": 50,
    "keyword_bonus": 15,
    "keyword_cap": 30,
    "recent_funding_bonus": 20,
    "headcount_bonus": 10,
    "headcount_threshold": 100,
}

# =============================================================================
# CONFIDENCE
# =============================================================================

COMPLETENESS_FIELDS = [
    "company_size",
    "industry",
    "job_title",
    "funding",
    "tech_stack",
    "recent_activity",
    "buying_intent",
    "website",
    "location",
    "employee_count",
]

CONFIDENCE_SETTINGS = {
    "variance_divisor": 100.0,
    "variance_penalty_cap": 20.0,
    "floor": 30,
}

# A lead carrying only its required fields never exceeds this confidence
MISSING_DATA_CONFIDENCE_CEILING = 50

# =============================================================================
# EXPLANATION TEXT
# =============================================================================

FACTOR_TEMPLATES = {
    "company_size": {
        "positive": "Large company size ({value} employees)",
        "negative": "Small company size may limit budget ({value})",
        "neutral": "Medium company size ({value})",
    },
    "industry_value": {
        "positive": "High-value industry ({value})",
        "negative": "Lower-value industry segment ({value})",
        "neutral": "Moderate-value industry ({value})",
    },
    "job_title_authority": {
        "positive": "High decision-making authority ({value})",
        "negative": "Limited decision-making authority ({value})",
        "neutral": "Some decision-making influence ({value})",
    },
    "funding_stage": {
        "positive": "Strong funding status ({value})",
        "negative": "Limited funding may impact budget ({value})",
        "neutral": "Standard funding status ({value})",
    },
    "tech_stack_modernity": {
        "positive": "Modern technology stack ({value})",
        "negative": "Legacy technology stack ({value})",
        "neutral": "Mixed technology stack ({value})",
    },
    "engagement_signals": {
        "positive": "High buying intent signals ({value})",
        "negative": "Low engagement activity ({value})",
        "neutral": "Moderate engagement ({value})",
    },
    "market_position": {
        "positive": "Strong market position ({value})",
        "negative": "Limited market presence ({value})",
        "neutral": "Standard market position ({value})",
    },
    "growth_indicators": {
        "positive": "Strong growth signals ({value})",
        "negative": "Few growth indicators ({value})",
        "neutral": "Stable growth profile ({value})",
    },
}

MISSING_VALUE_LABEL = "not provided"

# =============================================================================
# RECOMMENDATION RULES
# =============================================================================

# Evaluated top to bottom. A rule fires when every condition it declares
# holds: "tier" (exact), "dimension" with "min"/"max" (inclusive),
# "confidence_below".
RECOMMENDATION_RULES: List[Dict[str, Any]] = [
    {"tier": "High", "text": "Priority prospect - schedule immediate outreach"},
    {"tier": "High", "text": "Prepare executive-level presentation materials"},
    {"tier": "High", "text": "Research recent company news and initiatives"},
    {"tier": "Medium", "text": "Qualified lead - initiate nurturing sequence"},
    {"tier": "Medium", "text": "Send relevant case studies and ROI materials"},
    {"tier": "Medium", "text": "Schedule discovery call within 1-2 weeks"},
    {"tier": "Low", "text": "Low priority - add to long-term nurturing campaign"},
    {"tier": "Low", "text": "Focus on educational content and industry insights"},
    {"tier": "Low", "text": "Monitor for company growth or role changes"},
    {
        "dimension": "job_title_authority",
        "max": 50,
        "text": "Identify and connect with senior decision-makers",
    },
    {
        "dimension": "engagement_signals",
        "min": 80,
        "text": "Strike while hot - contact within 24 hours",
    },
    {
        "dimension": "tech_stack_modernity",
        "max": 50,
        "text": "Research technical requirements and integration needs",
    },
    {
        "dimension": "funding_stage",
        "min": 80,
        "text": "Well-funded company - budget likely available",
    },
    {
        "dimension": "growth_indicators",
        "min": 80,
        "text": "Growing company - focus on scalability benefits",
    },
    {
        "confidence_below": 50,
        "text": "Enrich lead data before outreach - key fields are missing",
    },
]

# =============================================================================
# WEIGHTING PROFILES
# =============================================================================

WEIGHT_TOLERANCE = 1e-6

PROFILE_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    "rule_based": {
        "name": "rule_based",
        "description": "Four equally capped factors, 25 points each",
        "strategy": "linear",
        "scale": "points",
        "weights": {
            "company_size": 25,
            "industry_value": 25,
            "job_title_authority": 25,
            "engagement_signals": 25,
        },
        "tiers": {"high": 80, "medium": 60},
    },
    "advanced": {
        "name": "advanced",
        "description": "Eight-factor weighting tuned on sales conversion data",
        "strategy": "linear",
        "scale": "fraction",
        "weights": {
            "company_size": 0.25,
            "industry_value": 0.20,
            "funding_stage": 0.18,
            "job_title_authority": 0.15,
            "engagement_signals": 0.10,
            "tech_stack_modernity": 0.07,
            "market_position": 0.03,
            "growth_indicators": 0.02,
        },
        "tiers": {"high": 80, "medium": 60},
    },
    "enhanced": {
        "name": "enhanced",
        "description": "Authority and growth weighted, softer tier thresholds",
        "strategy": "linear",
        "scale": "fraction",
        "weights": {
            "company_size": 0.15,
            "industry_value": 0.12,
            "job_title_authority": 0.26,
            "funding_stage": 0.10,
            "tech_stack_modernity": 0.08,
            "market_position": 0.12,
            "growth_indicators": 0.12,
            "engagement_signals": 0.05,
        },
        "tiers": {"high": 75, "medium": 50},
    },
    "logistic": {
        "name": "logistic",
        "description": "Logistic composite over six normalized features",
        "strategy": "logistic",
        "scale": "fraction",
        "weights": {
            "company_size": 0.25,
            "job_title_authority": 0.30,
            "industry_value": 0.20,
            "funding_stage": 0.15,
            "tech_stack_modernity": 0.05,
            "engagement_signals": 0.05,
        },
        "gain": 8.0,
        "bias": -4.0,
        "tiers": {"high": 75, "medium": 50},
    },
}
