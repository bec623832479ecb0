"""
Tracker Processors

Public exports for the stateless signal analyzers.
"""

from tracker.processors.activity import check_fast_start, check_idle_pointer
from tracker.processors.movement import (
    analyze_coverage,
    analyze_linearity,
    analyze_speed,
    analyze_timing,
    analyze_variation,
)

__all__ = [
    "analyze_linearity",
    "analyze_speed",
    "analyze_variation",
    "analyze_coverage",
    "analyze_timing",
    "check_idle_pointer",
    "check_fast_start",
]
