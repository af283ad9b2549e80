"""Built-in Prisoner's Dilemma strategies."""

from typing import Optional

import numpy as np

from .base import Strategy
from ..core.errors import ConfigurationError
from ..core.types import HistoryView, Move, check_perspective
from ..games.prisoners_dilemma import payoff


class AlwaysCooperate(Strategy):
    """Cooperates every round."""

    display_name = "AlwaysCooperate"

    def decide(self, history: HistoryView, perspective: int) -> Move:
        return Move.COOPERATE


class AlwaysDefect(Strategy):
    """Defects every round."""

    display_name = "AlwaysDefect"

    def decide(self, history: HistoryView, perspective: int) -> Move:
        return Move.DEFECT


class TitForTat(Strategy):
    """Cooperate first, then copy the opponent's previous move."""

    display_name = "TitForTat"
    opening: Move = Move.COOPERATE

    def decide(self, history: HistoryView, perspective: int) -> Move:
        check_perspective(perspective)
        last = history.last
        if last is None:
            return self.opening
        return last[1 - perspective]


class SuspiciousTitForTat(TitForTat):
    """Tit-for-tat that opens with a defection."""

    display_name = "SuspiciousTitForTat"
    opening = Move.DEFECT


class TwoTitsForTat(Strategy):
    """Retaliate only after two consecutive opponent defections.

    With fewer than two completed rounds there is not enough evidence,
    so it cooperates.
    """

    display_name = "TwoTitsForTat"

    def decide(self, history: HistoryView, perspective: int) -> Move:
        check_perspective(perspective)
        if len(history) < 2:
            return Move.COOPERATE
        opponent = 1 - perspective
        if history[-1][opponent] is Move.DEFECT and history[-2][opponent] is Move.DEFECT:
            return Move.DEFECT
        return Move.COOPERATE


class GrimTrigger(Strategy):
    """Cooperate until the opponent defects once, then defect forever."""

    display_name = "GrimTrigger"

    def decide(self, history: HistoryView, perspective: int) -> Move:
        if Move.DEFECT in history.moves_of(1 - perspective):
            return Move.DEFECT
        return Move.COOPERATE


class Pavlov(Strategy):
    """Win-stay, lose-shift.

    Keeps its previous move after a round that paid 2 or 3 points and
    switches after one that paid 0 or 1.
    """

    display_name = "Pavlov"

    def decide(self, history: HistoryView, perspective: int) -> Move:
        last = history.last
        if last is None:
            return Move.COOPERATE
        own, opponent = last.for_player(perspective)
        if payoff(own, opponent) >= 2:
            return own
        return own.flip()


class Random(Strategy):
    """Cooperates or defects with equal probability.

    A fresh generator is built for every call so concurrent matches never
    share random state. When `seed` is given the generator is derived from
    (seed, round, perspective), which makes a match reproducible.
    """

    display_name = "Random"

    def __init__(
        self,
        name: Optional[str] = None,
        seed: Optional[int] = None,
        cooperate_probability: float = 0.5,
    ):
        super().__init__(name)
        if seed is not None and seed < 0:
            raise ConfigurationError(f"seed must be non-negative, got {seed}")
        if not 0.0 <= cooperate_probability <= 1.0:
            raise ConfigurationError(
                f"cooperate_probability must be in [0, 1], got {cooperate_probability}"
            )
        self.seed = seed
        self.cooperate_probability = cooperate_probability

    def _rng(self, history: HistoryView, perspective: int) -> np.random.Generator:
        if self.seed is None:
            return np.random.default_rng()
        return np.random.default_rng([self.seed, len(history), perspective])

    def decide(self, history: HistoryView, perspective: int) -> Move:
        check_perspective(perspective)
        if self._rng(history, perspective).random() < self.cooperate_probability:
            return Move.COOPERATE
        return Move.DEFECT
