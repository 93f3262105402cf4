"""
FastAPI Endpoints for the Lead Quality Engine
=============================================
Stateless RESTful API around the scoring pipeline.

Base URL: http://localhost:8000

Endpoints:
- GET    /                         - API info
- GET    /api/health               - Health check
- POST   /api/leads/score          - Score a single lead
- POST   /api/leads/score/batch    - Score multiple leads
- POST   /api/leads/stats          - Score distribution for a set of leads
- GET    /api/profiles             - List weighting profiles
- GET    /api/profiles/{name}      - Get a weighting profile
- POST   /api/profiles             - Register a weighting profile
- DELETE /api/profiles/{name}      - Delete a registered profile
"""

import logging
from fastapi import FastAPI, HTTPException, Query, Body
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional, Dict, Any, List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from .. import __version__
from ..errors import ConfigurationError
from ..models.schemas import (
    Lead,
    ScoringResult,
    BatchScoreRequest,
    BatchScoreResult,
    LeadStatistics,
)
from ..models.profile import (
    BUILTIN_PROFILES,
    WeightingProfile,
    create_default_profile,
    load_profile,
)
from ..config.settings import ACTIVE_PROFILE, KEYWORD_TABLE_VERSION
from ..engine import LeadScoringEngine, summarize

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI App Initialization
# =============================================================================

app = FastAPI(
    title="Lead Quality Engine API",
    description="""
## Lead Quality Scoring & Qualification

Scores a company/contact profile and returns a 0-100 score, a confidence,
a High/Medium/Low tier (hot/warm/cold) and an explanation with recommendations.

### Features:
- **5-Stage Pipeline**: Features → Combination → Confidence → Tier → Explanation
- **Weighting Profiles**: rule_based, advanced, enhanced, logistic or your own
- **Batch Processing**: Score many leads with deterministic ordering
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - Allow all origins for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Profile Registry & Engines
# =============================================================================

# Registered profiles live in memory only; built-ins are always present
profiles: Dict[str, WeightingProfile] = dict(BUILTIN_PROFILES)
engines: Dict[str, LeadScoringEngine] = {}

default_engine = LeadScoringEngine(create_default_profile())
engines[default_engine.profile.name] = default_engine


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
async def root():
    """API information and available endpoints"""
    return {
        "service": "Lead Quality Engine",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "Score": "POST /api/leads/score",
            "Batch Score": "POST /api/leads/score/batch",
            "Stats": "POST /api/leads/stats",
            "Profiles": "GET /api/profiles",
            "Health": "GET /api/health",
        }
    }


@app.get("/api/health", tags=["Info"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "Lead Quality Engine",
        "version": __version__,
        "default_profile": ACTIVE_PROFILE,
        "table_version": KEYWORD_TABLE_VERSION,
    }


# =============================================================================
# Scoring Endpoints
# =============================================================================

@app.post("/api/leads/score", response_model=ScoringResult, tags=["Scoring"])
async def score_lead(
    lead: Lead,
    profile: Optional[str] = Query(None, description="Weighting profile name"),
):
    """Score a single lead with the default or the named profile"""
    engine = _get_engine(profile)
    return engine.score_lead(lead)


@app.post("/api/leads/score/batch", response_model=BatchScoreResult, tags=["Scoring"])
async def score_batch(request: BatchScoreRequest):
    """
    Score multiple leads at once

    - Parallel processing
    - Results sorted by `sortBy` (score, confidence, company_name or input)
    """
    engine = _get_engine(request.profile)
    try:
        return engine.score_batch(request.leads, sort_by=request.sort_by)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/leads/stats", response_model=LeadStatistics, tags=["Scoring"])
async def lead_stats(
    leads: List[Lead] = Body(..., description="Leads to score and aggregate"),
    profile: Optional[str] = Query(None, description="Weighting profile name"),
):
    """Average score, average confidence and hot/warm/cold distribution"""
    engine = _get_engine(profile)
    return summarize([engine.score_lead(lead) for lead in leads])


# =============================================================================
# Profile Endpoints
# =============================================================================

@app.get("/api/profiles", tags=["Profiles"])
async def list_profiles():
    """List all weighting profiles"""
    return {
        "count": len(profiles),
        "default": default_engine.profile.name,
        "profiles": [
            {
                "name": p.name,
                "description": p.description,
                "strategy": p.strategy.value,
                "builtin": p.name in BUILTIN_PROFILES,
            }
            for p in profiles.values()
        ],
    }


@app.get("/api/profiles/{name}", response_model=WeightingProfile, tags=["Profiles"])
async def get_profile(name: str):
    """Get a weighting profile by name"""
    if name not in profiles:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profiles[name]


@app.post("/api/profiles", status_code=201, tags=["Profiles"])
async def register_profile(definition: Dict[str, Any] = Body(...)):
    """Validate and register a weighting profile"""
    profile = load_profile(definition)
    if profile.name in BUILTIN_PROFILES:
        raise HTTPException(status_code=409, detail="Built-in profiles cannot be replaced")

    profiles[profile.name] = profile
    engines[profile.name] = LeadScoringEngine(profile)
    logger.info("Registered weighting profile %s", profile.name)

    return {
        "name": profile.name,
        "status": "created",
        "message": "Weighting profile saved successfully",
    }


@app.delete("/api/profiles/{name}", tags=["Profiles"])
async def delete_profile(name: str):
    """Delete a registered weighting profile"""
    if name not in profiles:
        raise HTTPException(status_code=404, detail="Profile not found")
    if name in BUILTIN_PROFILES:
        raise HTTPException(status_code=409, detail="Built-in profiles cannot be deleted")
    del profiles[name]
    engines.pop(name, None)
    logger.info("Deleted weighting profile %s", name)
    return {"status": "deleted", "name": name}


# =============================================================================
# Helper Functions
# =============================================================================

def _get_engine(name: Optional[str] = None) -> LeadScoringEngine:
    """Get engine by profile name or return default"""
    if not name:
        return default_engine
    if name not in profiles:
        raise HTTPException(status_code=404, detail=f"Profile '{name}' not found")
    if name not in engines:
        engines[name] = LeadScoringEngine(profiles[name])
    return engines[name]


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request, exc: ConfigurationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid weighting profile",
            "detail": str(exc),
            "profile": exc.profile,
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        }
    )
