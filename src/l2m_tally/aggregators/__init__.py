"""
Call aggregators.

These aggregators turn fetched L2M reports into per-team season totals.
"""

from .l2m import (
    AggregationError,
    AggregationResult,
    CallTally,
    L2MAggregator,
    MissingIdentityError,
    TeamAggregate,
    TeamCallSummary,
    build_identity_index,
    fold_report,
    record_missed,
    select_games,
    summarize,
    tally_report,
)

__all__ = [
    "AggregationError",
    "AggregationResult",
    "CallTally",
    "L2MAggregator",
    "MissingIdentityError",
    "TeamAggregate",
    "TeamCallSummary",
    "build_identity_index",
    "fold_report",
    "record_missed",
    "select_games",
    "summarize",
    "tally_report",
]
