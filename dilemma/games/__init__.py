"""Game definitions."""

from .prisoners_dilemma import (
    PAYOFF_MATRIX,
    MAX_ROUND_PAYOFF,
    payoff,
    round_payoffs,
    validate_matrix,
)

__all__ = [
    "PAYOFF_MATRIX",
    "MAX_ROUND_PAYOFF",
    "payoff",
    "round_payoffs",
    "validate_matrix",
]
