"""Experiments module: tournaments over strategy lineups."""

from .tournament import (
    TournamentConfig,
    TournamentResult,
    TournamentRunner,
    build_score_matrix,
    run_tournament,
    create_quick_tournament,
    create_classic_tournament,
)

__all__ = [
    "TournamentConfig",
    "TournamentResult",
    "TournamentRunner",
    "build_score_matrix",
    "run_tournament",
    "create_quick_tournament",
    "create_classic_tournament",
]
