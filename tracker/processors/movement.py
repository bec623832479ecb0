"""
Pointer Movement Analyzers

Stateless heuristics over the ordered MOVE samples of a session window.
Each analyzer guards its own minimum-sample precondition and returns None
when it has nothing to say; otherwise it returns a SignalResult carrying
its intermediate measurements.

Analyzers:
- analyze_linearity: triangle-inequality collinearity of consecutive triples
- analyze_speed: mean / population std of instantaneous speed (px/ms)
- analyze_variation: coefficient of variation of step distances
- analyze_coverage: bounding-box area against the viewport area
- analyze_timing: coefficient of variation of inter-sample intervals
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from tracker.config import ScoringConfig
from tracker.schemas.inputs import InteractionSample
from tracker.schemas.outputs import SignalResult

logger = logging.getLogger(__name__)

# =============================================================================
# MINIMUM SAMPLE REQUIREMENTS
# =============================================================================

MIN_LINEARITY_MOVES = 3
MIN_SPEED_MOVES = 2
MIN_VARIATION_MOVES = 5
MIN_COVERAGE_MOVES = 3
MIN_TIMING_MOVES = 5

# =============================================================================
# REASONS
# =============================================================================

REASON_LINEARITY = "Too many perfectly straight movements"
REASON_SPEED = "Unnatural movement speed detected"
REASON_VARIATION = "Movement patterns too consistent (lacks human variation)"
REASON_COVERAGE = "Movements restricted to form areas only"
REASON_TIMING = "Movement timing too regular"


# =============================================================================
# ARRAY HELPERS
# =============================================================================

def _points(moves: Sequence[InteractionSample]) -> NDArray[np.float64]:
    return np.array([(m.x, m.y) for m in moves], dtype=np.float64)


def _timestamps(moves: Sequence[InteractionSample]) -> NDArray[np.float64]:
    return np.array([m.timestamp for m in moves], dtype=np.float64)


def _step_distances(points: NDArray[np.float64]) -> NDArray[np.float64]:
    deltas = np.diff(points, axis=0)
    return np.hypot(deltas[:, 0], deltas[:, 1])


def _coefficient_of_variation(values: NDArray[np.float64]) -> float:
    """std / mean, 0.0 when the mean is not positive."""
    mean = float(np.mean(values))
    if mean <= 0.0:
        return 0.0
    return float(np.std(values)) / mean


def _heading_spread(headings: NDArray[np.float64]) -> float:
    """Circular spread of headings, sqrt(-2 ln R) with R the mean resultant length."""
    if headings.size < 2:
        return 0.0
    r = float(np.clip(np.hypot(np.mean(np.sin(headings)), np.mean(np.cos(headings))), 0.0, 1.0))
    if r < 1e-9:
        return math.pi
    if r >= 0.999999:
        return 0.0
    return math.sqrt(-2.0 * math.log(r))


def _signal(name: str, triggered: bool, weight: int, reason: str, **metrics: float) -> SignalResult:
    if triggered:
        logger.debug(f"Signal {name} triggered (+{weight}): {metrics}")
    return SignalResult(
        name=name,
        triggered=bool(triggered),
        weight=weight,
        reason=reason,
        metrics={k: float(v) for k, v in metrics.items()},
    )


# =============================================================================
# ANALYZERS
# =============================================================================

def analyze_linearity(
    moves: Sequence[InteractionSample],
    config: ScoringConfig,
) -> Optional[SignalResult]:
    """
    Flag paths made mostly of straight-line triples.

    A triple (p1, p2, p3) is collinear when |d12 + d23 - d13| is below the
    pixel tolerance, i.e. p2 lies on the segment p1-p3.
    """
    if len(moves) < MIN_LINEARITY_MOVES:
        return None

    points = _points(moves)
    steps = _step_distances(points)
    spans = np.hypot(points[2:, 0] - points[:-2, 0], points[2:, 1] - points[:-2, 1])
    slack = np.abs(steps[:-1] + steps[1:] - spans)

    triples = len(slack)
    collinear = int(np.count_nonzero(slack < config.collinear_tolerance_px))
    ratio = collinear / triples

    return _signal(
        "linearity",
        ratio > config.linearity_ratio,
        config.linearity_weight,
        REASON_LINEARITY,
        collinear_triples=collinear,
        triples=triples,
        collinear_ratio=ratio,
    )


def analyze_speed(
    moves: Sequence[InteractionSample],
    config: ScoringConfig,
) -> Optional[SignalResult]:
    """
    Flag speeds that are too uniform (low std) or implausibly fast (high mean).

    A pair with a non-positive time delta contributes a speed of 0.
    """
    if len(moves) < MIN_SPEED_MOVES:
        return None

    distances = _step_distances(_points(moves))
    dt = np.diff(_timestamps(moves))
    safe_dt = np.where(dt > 0, dt, 1.0)
    speeds = np.where(dt > 0, distances / safe_dt, 0.0)

    mean_speed = float(np.mean(speeds))
    std_speed = float(np.std(speeds))
    too_uniform = std_speed < config.speed_std_min
    too_fast = mean_speed > config.speed_mean_max

    return _signal(
        "speed",
        too_uniform or too_fast,
        config.speed_weight,
        REASON_SPEED,
        mean_speed=mean_speed,
        std_speed=std_speed,
    )


def analyze_variation(
    moves: Sequence[InteractionSample],
    config: ScoringConfig,
) -> Optional[SignalResult]:
    """Flag step distances whose coefficient of variation is too low."""
    if len(moves) < MIN_VARIATION_MOVES:
        return None

    points = _points(moves)
    deltas = np.diff(points, axis=0)
    distances = np.hypot(deltas[:, 0], deltas[:, 1])
    headings = np.arctan2(deltas[:, 1], deltas[:, 0])

    coeff = _coefficient_of_variation(distances)

    return _signal(
        "variation",
        coeff < config.variation_cv_min,
        config.variation_weight,
        REASON_VARIATION,
        distance_cv=coeff,
        mean_distance=float(np.mean(distances)),
        heading_spread=_heading_spread(headings),
    )


def analyze_coverage(
    moves: Sequence[InteractionSample],
    config: ScoringConfig,
    viewport_width: float,
    viewport_height: float,
) -> Optional[SignalResult]:
    """Flag movement confined to a small share of the viewport."""
    if len(moves) < MIN_COVERAGE_MOVES:
        return None

    viewport_area = viewport_width * viewport_height
    if viewport_area <= 0:
        return None

    points = _points(moves)
    width = float(np.ptp(points[:, 0]))
    height = float(np.ptp(points[:, 1]))
    ratio = (width * height) / viewport_area

    return _signal(
        "coverage",
        ratio < config.coverage_ratio_min,
        config.coverage_weight,
        REASON_COVERAGE,
        area_ratio=ratio,
        width=width,
        height=height,
    )


def analyze_timing(
    moves: Sequence[InteractionSample],
    config: ScoringConfig,
) -> Optional[SignalResult]:
    """
    Flag inter-sample intervals that are too regular.

    When the mean interval is not positive (simultaneous timestamps) the
    coefficient is reported as 0 and the flag follows
    config.flag_zero_interval_timing.
    """
    if len(moves) < MIN_TIMING_MOVES:
        return None

    intervals = np.diff(_timestamps(moves))
    mean_interval = float(np.mean(intervals))

    # Neutral by default, although the literal 0 < timing_cv_min comparison would flag it
    if mean_interval <= 0.0:
        coeff = 0.0
        triggered = config.flag_zero_interval_timing
    else:
        coeff = float(np.std(intervals)) / mean_interval
        triggered = coeff < config.timing_cv_min

    return _signal(
        "timing",
        triggered,
        config.timing_weight,
        REASON_TIMING,
        interval_cv=coeff,
        mean_interval=mean_interval,
    )
