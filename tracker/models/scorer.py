"""
Interaction Authenticity Scorer

Deterministic, additive scoring of an observation window.
Zero ML, zero learning, zero drift.

Architecture:
    Samples -> movement / activity analyzers -> InteractionScorer -> AnalysisReport

Evaluation order (fixed, so reasons are reproducible):
    1. linearity      (+40)
    2. speed          (+35)
    3. variation      (+30)
    4. coverage       (+25)
    5. timing         (+20)
    6. idle pointer   (+20)
    7. fast start     (+15)

Decision:
    score = min(sum of triggered weights, max_score)
    suspicious when score >= suspicion_threshold
    fewer than min_samples samples -> benign, score 0
"""

import logging
from typing import List, Optional, Sequence

from tracker.config import ScoringConfig
from tracker.processors.activity import check_fast_start, check_idle_pointer
from tracker.processors.movement import (
    analyze_coverage,
    analyze_linearity,
    analyze_speed,
    analyze_timing,
    analyze_variation,
)
from tracker.schemas.inputs import InteractionKind, InteractionSample
from tracker.schemas.outputs import AnalysisReport, ReportStats, SignalResult

logger = logging.getLogger(__name__)


class InteractionScorer:
    """
    Combines analyzer outputs into a bounded risk score.

    Analyzers only ever add penalties; there is no partial credit. The
    scorer holds nothing but its configuration and can be shared.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def score(
        self,
        samples: Sequence[InteractionSample],
        duration_ms: float,
        viewport_width: Optional[float] = None,
        viewport_height: Optional[float] = None,
    ) -> AnalysisReport:
        """
        Score a window of samples.

        Args:
            samples: Retained samples, oldest first.
            duration_ms: Time from session start to stop (or to now).
            viewport_width: Viewport width in px, config default when None.
            viewport_height: Viewport height in px, config default when None.

        Returns:
            AnalysisReport for the window.
        """
        cfg = self.config
        if viewport_width is None:
            viewport_width = cfg.viewport_width
        if viewport_height is None:
            viewport_height = cfg.viewport_height

        moves = [s for s in samples if s.kind == InteractionKind.MOVE]
        click_count = sum(1 for s in samples if s.kind == InteractionKind.CLICK)
        key_count = sum(1 for s in samples if s.kind == InteractionKind.KEYDOWN)

        stats = ReportStats(
            total_samples=len(samples),
            move_count=len(moves),
            click_count=click_count,
            key_count=key_count,
            duration_ms=max(0.0, duration_ms),
            recent_samples=list(samples[-cfg.audit_tail:]) if cfg.audit_tail else [],
        )

        # Absence of evidence is not evidence of a bot
        if len(samples) < cfg.min_samples:
            logger.debug(f"Only {len(samples)} samples (need {cfg.min_samples}), skipping analysis")
            return AnalysisReport(is_suspicious=False, score=0, reasons=[], signals=[], stats=stats)

        evaluated: List[Optional[SignalResult]] = [
            analyze_linearity(moves, cfg),
            analyze_speed(moves, cfg),
            analyze_variation(moves, cfg),
            analyze_coverage(moves, cfg, viewport_width, viewport_height),
            analyze_timing(moves, cfg),
            check_idle_pointer(len(moves), click_count, key_count, cfg),
            check_fast_start(len(moves), stats.duration_ms, cfg),
        ]
        signals = [s for s in evaluated if s is not None]

        raw_score = sum(s.penalty for s in signals)
        score = min(raw_score, cfg.max_score)
        reasons = [s.reason for s in signals if s.triggered]
        is_suspicious = score >= cfg.suspicion_threshold

        if is_suspicious:
            logger.info(f"Session flagged: score={score} (raw {raw_score}) | reasons={reasons}")
        else:
            logger.info(f"Session passed: score={score}")

        return AnalysisReport(
            is_suspicious=is_suspicious,
            score=score,
            reasons=reasons,
            signals=signals,
            stats=stats,
        )
