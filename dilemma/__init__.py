"""Iterated Prisoner's Dilemma tournaments over pluggable strategies."""

from .core import (
    DEFAULT_ITERATIONS,
    MAX_ITERATIONS,
    DEFAULT_WORKERS,
    CLASSIC_STRATEGIES,
    ConfigurationError,
    TournamentError,
    Move,
    Outcome,
    History,
    HistoryView,
    MatchResult,
    MatchFailure,
)
from .games import PAYOFF_MATRIX, payoff, round_payoffs
from .strategies import (
    Strategy,
    STRATEGY_REGISTRY,
    get_strategy,
    list_strategies,
    build_lineup,
)
from .engine import Player, MatchRecord, play_round, play_match
from .experiments import (
    TournamentConfig,
    TournamentResult,
    TournamentRunner,
    run_tournament,
    create_quick_tournament,
    create_classic_tournament,
)
from .metrics import RunMetrics
from .reporting import format_result, format_results, results_to_frame

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "DEFAULT_ITERATIONS",
    "MAX_ITERATIONS",
    "DEFAULT_WORKERS",
    "CLASSIC_STRATEGIES",
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
    # Payoffs
    "PAYOFF_MATRIX",
    "payoff",
    "round_payoffs",
    # Strategies
    "Strategy",
    "STRATEGY_REGISTRY",
    "get_strategy",
    "list_strategies",
    "build_lineup",
    # Engine
    "Player",
    "MatchRecord",
    "play_round",
    "play_match",
    # Tournaments
    "TournamentConfig",
    "TournamentResult",
    "TournamentRunner",
    "run_tournament",
    "create_quick_tournament",
    "create_classic_tournament",
    # Metrics
    "RunMetrics",
    # Reporting
    "format_result",
    "format_results",
    "results_to_frame",
]
