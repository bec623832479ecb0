"""
Tracker Scoring Configuration

All tunable constants of the engine live in ScoringConfig. The weights and
the suspicion threshold are empirical; treat them as tuning knobs.

Environment overrides (loaded from .env when present):
- TRACKER_CAPACITY: ring buffer capacity (default: 100)
- TRACKER_MIN_SAMPLES: samples required before scoring (default: 5)
- TRACKER_SUSPICION_THRESHOLD: score at which a session is suspicious (default: 50)
- TRACKER_FLAG_ZERO_INTERVAL_TIMING: flag all-simultaneous moves as regular (default: false)
"""

import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ScoringConfig(BaseModel):
    """Thresholds and penalty weights for every heuristic."""
    model_config = ConfigDict(frozen=True)

    # Buffer / gating
    capacity: int = Field(100, ge=1, description="Samples kept in the ring buffer")
    min_samples: int = Field(5, ge=0, description="Below this, the session is benign")
    suspicion_threshold: int = Field(50, ge=0, le=100)
    max_score: int = Field(100, ge=0, le=100)
    audit_tail: int = Field(20, ge=0, description="Raw samples echoed in report stats")

    # Linearity
    collinear_tolerance_px: float = 2.0
    linearity_ratio: float = 0.5
    linearity_weight: int = Field(40, ge=0)

    # Speed (px/ms)
    speed_std_min: float = 0.1
    speed_mean_max: float = 10.0
    speed_weight: int = Field(35, ge=0)

    # Distance variation
    variation_cv_min: float = 0.3
    variation_weight: int = Field(30, ge=0)

    # Coverage
    coverage_ratio_min: float = 0.2
    coverage_weight: int = Field(25, ge=0)
    viewport_width: int = Field(1920, gt=0)
    viewport_height: int = Field(1080, gt=0)

    # Timing
    timing_cv_min: float = 0.2
    timing_weight: int = Field(20, ge=0)
    flag_zero_interval_timing: bool = False

    # Composite activity
    idle_pointer_moves: int = 10
    idle_pointer_weight: int = Field(20, ge=0)
    fast_start_ms: float = 2000.0
    fast_start_moves: int = 5
    fast_start_weight: int = Field(15, ge=0)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ScoringConfig":
        """
        Build a config from TRACKER_* environment variables.

        Args:
            env_file: .env file to load first; defaults to the nearest
                      .env above the working directory. Variables already
                      set in the environment win.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))

        overrides = {}
        for field_name in ("capacity", "min_samples", "suspicion_threshold"):
            raw = os.getenv(f"TRACKER_{field_name.upper()}")
            if raw is not None:
                overrides[field_name] = int(raw)

        flag = os.getenv("TRACKER_FLAG_ZERO_INTERVAL_TIMING")
        if flag is not None:
            overrides["flag_zero_interval_timing"] = flag.strip().lower() in ("1", "true", "yes")

        if overrides:
            logger.info(f"Scoring config overrides from environment: {overrides}")
        return cls(**overrides)
