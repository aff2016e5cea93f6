"""Logging configuration and utilities."""

from trip_planner.shared.logging.config import (
    StructuredFormatter,
    log_state_transition,
    setup_logging,
    summarize_state,
)

__all__ = [
    "setup_logging",
    "log_state_transition",
    "summarize_state",
    "StructuredFormatter",
]
