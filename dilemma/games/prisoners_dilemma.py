"""Prisoner's Dilemma payoff table.

The matrix is fixed: mutual cooperation pays 2 each, mutual defection 1
each, and a lone defector takes 3 while the cooperator gets nothing.
"""

from itertools import product
from typing import Dict, Tuple

from ..core.types import Move

PayoffMatrix = Dict[Tuple[Move, Move], Tuple[int, int]]

PAYOFF_MATRIX: PayoffMatrix = {
    (Move.COOPERATE, Move.COOPERATE): (2, 2),
    (Move.COOPERATE, Move.DEFECT): (0, 3),
    (Move.DEFECT, Move.COOPERATE): (3, 0),
    (Move.DEFECT, Move.DEFECT): (1, 1),
}

MAX_ROUND_PAYOFF = max(p for pair in PAYOFF_MATRIX.values() for p in pair)


def validate_matrix(matrix: PayoffMatrix) -> None:
    """Check that a matrix covers every move pair with a two-player payoff.

    Raises:
        ValueError: If an entry is missing or malformed.
    """
    for moves in product(Move, repeat=2):
        if moves not in matrix:
            raise ValueError(f"Payoff matrix is missing entry for {moves}")
    for moves, payoffs in matrix.items():
        if len(moves) != 2 or len(payoffs) != 2:
            raise ValueError(
                f"Entry {moves} -> {payoffs} must map a move pair to a payoff pair"
            )
        if any(p < 0 for p in payoffs):
            raise ValueError(f"Negative payoff in entry {moves} -> {payoffs}")


validate_matrix(PAYOFF_MATRIX)


def payoff(self_move: Move, opponent_move: Move) -> int:
    """Points awarded to the player who chose `self_move`."""
    return PAYOFF_MATRIX[(self_move, opponent_move)][0]


def round_payoffs(move_a: Move, move_b: Move) -> Tuple[int, int]:
    """Points for both players of one round, as (A, B)."""
    return payoff(move_a, move_b), payoff(move_b, move_a)
