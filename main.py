"""
Tracker Verification API

FastAPI application exposing:
- GET /health → JSON status
- POST /analyze → AnalysisReport JSON

/analyze re-scores tracking data forwarded by the registration form by
replaying its raw samples through a fresh ObservationSession, so the
verdict does not depend on the client's own arithmetic.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from tracker.config import ScoringConfig
from tracker.schemas.inputs import AnalyzeRequest
from tracker.schemas.outputs import AnalysisReport
from tracker.session import replay_session


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Application State
# =============================================================================

class AppState:
    """Application state container."""
    config: Optional[ScoringConfig] = None


state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting Tracker Verification API...")
    state.config = ScoringConfig.from_env()
    logger.info(
        f"Tracker ready (capacity={state.config.capacity}, "
        f"threshold={state.config.suspicion_threshold})"
    )

    yield

    # Shutdown
    logger.info("Shutting down Tracker Verification API...")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Interaction Tracker",
    description="Server-side verification of interaction-authenticity reports",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


# =============================================================================
# Analyze Endpoint (JSON Response)
# =============================================================================

@app.post("/analyze", response_model=AnalysisReport)
async def analyze(payload: AnalyzeRequest):
    """
    Re-score forwarded tracking data.

    - Replays samples into a capacity-bounded session
    - Runs every analyzer in the fixed order
    - Never blocks the registration itself; the caller decides
    """
    try:
        session = replay_session(
            payload.samples,
            started_at=payload.session_start,
            stopped_at=payload.session_end,
            config=state.config,
        )
        report = session.report(payload.viewport_width, payload.viewport_height)
    except Exception as e:
        logger.error(f"Analyze error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error during analysis"
        )

    if report.is_suspicious:
        logger.warning(
            f"Suspicious session (score={report.score}, ua={payload.user_agent!r}): {report.reasons}"
        )
    return report


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
