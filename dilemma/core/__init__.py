"""Core module for the dilemma package."""

from .config import (
    DEFAULT_ITERATIONS,
    MAX_ITERATIONS,
    DEFAULT_WORKERS,
    DEFAULT_LOG_LEVEL,
    CLASSIC_STRATEGIES,
    configure_logging,
)
from .errors import ConfigurationError, TournamentError
from .types import (
    Move,
    Outcome,
    History,
    HistoryView,
    MatchResult,
    MatchFailure,
)

__all__ = [
    # Configuration constants
    "DEFAULT_ITERATIONS",
    "MAX_ITERATIONS",
    "DEFAULT_WORKERS",
    "DEFAULT_LOG_LEVEL",
    "CLASSIC_STRATEGIES",
    "configure_logging",
    # Errors
    "ConfigurationError",
    "TournamentError",
    # Types
    "Move",
    "Outcome",
    "History",
    "HistoryView",
    "MatchResult",
    "MatchFailure",
]
