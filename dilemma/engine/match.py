"""Pairwise match execution.

A match is strictly sequential: both strategies decide round r from the
history as it stood before round r, then the outcome is scored and
appended. Everything here is local to one call of `play_match`, so
matches on different threads share nothing but the strategy objects.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.config import MAX_ITERATIONS
from ..core.errors import ConfigurationError
from ..core.types import History, Move
from ..games.prisoners_dilemma import round_payoffs
from ..strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """A strategy and its running score for one match."""
    strategy: Strategy
    score: int = 0

    def pay(self, points: int) -> None:
        self.score += points


@dataclass
class MatchRecord:
    """Final state of a single match."""
    score_a: int
    score_b: int
    rounds: int
    history: Optional[History] = None

    @property
    def scores(self) -> Tuple[int, int]:
        return self.score_a, self.score_b


def validate_iterations(iterations: int) -> int:
    """Reject iteration counts that are not integers in [0, MAX_ITERATIONS]."""
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise ConfigurationError(f"iterations must be an integer, got {iterations!r}")
    if iterations < 0:
        raise ConfigurationError(f"iterations must be non-negative, got {iterations}")
    if iterations > MAX_ITERATIONS:
        raise ConfigurationError(
            f"iterations {iterations} exceeds the limit of {MAX_ITERATIONS}"
        )
    return iterations


def _decide(player: Player, history_view, perspective: int) -> Move:
    move = player.strategy.decide(history_view, perspective)
    if not isinstance(move, Move):
        raise TypeError(
            f"{player.strategy!r} returned {move!r} instead of a Move"
        )
    return move


def play_round(player_a: Player, player_b: Player, history: History) -> Tuple[int, int]:
    """Play one simultaneous round and record it.

    Both players receive the same pre-round snapshot of the history.

    Returns:
        Points awarded this round as (A, B).
    """
    snapshot = history.view()
    move_a = _decide(player_a, snapshot, 0)
    move_b = _decide(player_b, snapshot, 1)

    points_a, points_b = round_payoffs(move_a, move_b)
    player_a.pay(points_a)
    player_b.pay(points_b)

    history.append(move_a, move_b)
    return points_a, points_b


def play_match(
    strategy_a: Strategy,
    strategy_b: Strategy,
    iterations: int,
    keep_history: bool = False,
) -> MatchRecord:
    """Play `iterations` rounds between two strategies.

    Args:
        strategy_a: Strategy seated as player A (perspective 0).
        strategy_b: Strategy seated as player B (perspective 1).
        iterations: Number of rounds, zero allowed.
        keep_history: Return the full History in the record.

    Returns:
        MatchRecord with both cumulative scores.

    Raises:
        ConfigurationError: If iterations is invalid.
    """
    validate_iterations(iterations)

    player_a = Player(strategy_a)
    player_b = Player(strategy_b)
    history = History()

    for _ in range(iterations):
        play_round(player_a, player_b, history)

    logger.debug(
        "%s vs %s finished after %d rounds: %d vs %d",
        strategy_a.name, strategy_b.name, len(history), player_a.score, player_b.score,
    )

    return MatchRecord(
        score_a=player_a.score,
        score_b=player_b.score,
        rounds=len(history),
        history=history if keep_history else None,
    )
