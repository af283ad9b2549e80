"""Exception types raised by the tournament engine."""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .types import MatchFailure


class ConfigurationError(ValueError):
    """Invalid tournament input, rejected before any matchup runs."""


class TournamentError(RuntimeError):
    """One or more matchups failed while the tournament ran."""

    def __init__(self, failures: List["MatchFailure"]):
        self.failures = list(failures)
        pairs = ", ".join(f"{f.name_a} vs {f.name_b}" for f in self.failures)
        super().__init__(f"{len(self.failures)} matchup(s) failed: {pairs}")
