"""
Interaction Scorer Unit Tests

Tests the aggregation of analyzer outputs: the insufficient-evidence gate,
additive penalties, the score cap, the suspicion threshold, reason order
and report statistics.
"""

import pytest

from tracker.config import ScoringConfig
from tracker.models.scorer import InteractionScorer
from tracker.processors.activity import REASON_FAST_START, REASON_IDLE_POINTER
from tracker.processors.movement import (
    REASON_COVERAGE,
    REASON_LINEARITY,
    REASON_SPEED,
    REASON_TIMING,
    REASON_VARIATION,
)
from tracker.schemas.inputs import InteractionKind

ALL_REASONS = [
    REASON_LINEARITY,
    REASON_SPEED,
    REASON_VARIATION,
    REASON_COVERAGE,
    REASON_TIMING,
    REASON_IDLE_POINTER,
    REASON_FAST_START,
]


@pytest.fixture
def flat_line(make_path):
    """20 moves on a horizontal line every 10ms: every heuristic fires."""
    return make_path([(i * 5, 300) for i in range(20)])


# =============================================================================
# Insufficient Evidence
# =============================================================================

class TestInsufficientSamples:
    """Fewer than five samples is always benign."""

    @pytest.mark.parametrize("count", [0, 1, 2, 3, 4])
    def test_short_window_scores_zero(self, scorer, flat_line, count):
        report = scorer.score(flat_line[:count], duration_ms=10.0)

        assert report.score == 0
        assert report.is_suspicious is False
        assert report.reasons == []
        assert report.signals == []

    def test_short_window_still_reports_stats(self, scorer, make_sample):
        samples = [
            make_sample(InteractionKind.MOVE, 1, 1, 0.0),
            make_sample(InteractionKind.CLICK, 1, 1, 5.0),
            make_sample(InteractionKind.KEYDOWN, timestamp=9.0, key="a"),
        ]
        report = scorer.score(samples, duration_ms=1234.0)

        assert report.stats.total_samples == 3
        assert report.stats.move_count == 1
        assert report.stats.click_count == 1
        assert report.stats.key_count == 1
        assert report.stats.duration_ms == 1234.0

    def test_five_samples_are_analyzed(self, scorer, flat_line):
        report = scorer.score(flat_line[:5], duration_ms=10_000.0)
        assert report.signals


# =============================================================================
# Aggregation
# =============================================================================

class TestAggregation:
    """Additive penalties, cap, threshold, ordering."""

    def test_linearity_alone_contributes_exactly_forty(self, scorer, humanish_line, make_sample):
        samples = humanish_line + [
            make_sample(InteractionKind.CLICK, 1900, 950, 600.0),
            make_sample(InteractionKind.KEYDOWN, timestamp=700.0, key="Tab"),
        ]
        report = scorer.score(samples, duration_ms=5000.0)

        assert report.reasons == [REASON_LINEARITY]
        assert report.score == 40
        assert report.is_suspicious is False

    def test_uniform_motion_flags_speed_and_variation(self, scorer, straight_path):
        report = scorer.score(straight_path, duration_ms=5000.0)

        assert REASON_SPEED in report.reasons
        assert REASON_VARIATION in report.reasons

    def test_all_flags_are_capped_at_one_hundred(self, scorer, flat_line):
        report = scorer.score(flat_line, duration_ms=500.0)

        assert report.reasons == ALL_REASONS
        assert sum(s.penalty for s in report.signals) == 185
        assert report.score == 100
        assert report.is_suspicious is True

    def test_reasons_match_triggered_signals(self, scorer, straight_path):
        report = scorer.score(straight_path, duration_ms=5000.0)
        triggered = [s for s in report.signals if s.triggered]

        assert len(report.reasons) == len(triggered)
        assert report.reasons == [s.reason for s in triggered]

    def test_reason_order_is_fixed(self, scorer, flat_line):
        first = scorer.score(flat_line, duration_ms=500.0)
        second = scorer.score(list(flat_line), duration_ms=500.0)

        assert first.reasons == second.reasons
        assert [ALL_REASONS.index(r) for r in first.reasons] == sorted(
            ALL_REASONS.index(r) for r in first.reasons
        )

    def test_score_never_decreases_as_anomalies_accumulate(self, scorer, flat_line):
        previous_score = 0
        previous_raw = 0
        for n in range(1, len(flat_line) + 1):
            report = scorer.score(flat_line[:n], duration_ms=500.0)
            raw = sum(s.penalty for s in report.signals)

            assert report.score >= previous_score
            assert raw >= previous_raw
            previous_score, previous_raw = report.score, raw

    def test_threshold_is_inclusive(self, humanish_line, make_sample):
        samples = humanish_line + [make_sample(InteractionKind.CLICK, 5, 5, 600.0)]
        scorer = InteractionScorer(ScoringConfig(suspicion_threshold=40))
        report = scorer.score(samples, duration_ms=5000.0)

        assert report.score == 40
        assert report.is_suspicious is True

    def test_custom_weights(self, flat_line):
        config = ScoringConfig(
            linearity_weight=1,
            speed_weight=2,
            variation_weight=3,
            coverage_weight=4,
            timing_weight=5,
            idle_pointer_weight=6,
            fast_start_weight=7,
        )
        report = InteractionScorer(config).score(flat_line, duration_ms=500.0)

        assert report.score == 28
        assert report.is_suspicious is False


# =============================================================================
# Viewport and Stats
# =============================================================================

class TestReportDetails:
    """Viewport defaults and the audit tail."""

    def test_viewport_defaults_come_from_config(self, make_path, make_sample):
        moves = make_path([(0, 0), (300, 40), (90, 200), (250, 10), (20, 180)], [0, 70, 95, 260, 300])
        clicks = [make_sample(InteractionKind.CLICK, 20, 180, 400.0)]
        small_screen = InteractionScorer(ScoringConfig(viewport_width=400, viewport_height=300))

        default_report = small_screen.score(moves + clicks, duration_ms=5000.0)
        wide_report = small_screen.score(moves + clicks, duration_ms=5000.0, viewport_width=3840, viewport_height=2160)

        assert REASON_COVERAGE not in default_report.reasons
        assert REASON_COVERAGE in wide_report.reasons

    def test_audit_tail_keeps_last_twenty(self, scorer, make_path):
        moves = make_path([(i, i * i) for i in range(30)])
        report = scorer.score(moves, duration_ms=5000.0)

        assert len(report.stats.recent_samples) == 20
        assert report.stats.recent_samples == moves[-20:]

    def test_audit_tail_can_be_disabled(self, flat_line):
        report = InteractionScorer(ScoringConfig(audit_tail=0)).score(flat_line, duration_ms=500.0)
        assert report.stats.recent_samples == []
