"""Match engine."""

from .match import (
    Player,
    MatchRecord,
    play_round,
    play_match,
    validate_iterations,
)

__all__ = [
    "Player",
    "MatchRecord",
    "play_round",
    "play_match",
    "validate_iterations",
]
