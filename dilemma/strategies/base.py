"""Strategy capability shared by every decision rule."""

from abc import ABC, abstractmethod
from typing import Optional

from ..core.types import HistoryView, Move


class Strategy(ABC):
    """A named decision rule for the iterated Prisoner's Dilemma.

    Implementations must hold no per-match state: one instance may be
    consulted by many matches running on different threads at once.
    `history[i][perspective]` is this strategy's own move in round i and
    `history[i][1 - perspective]` the opponent's.
    """

    display_name: str = "Strategy"

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.display_name

    @abstractmethod
    def decide(self, history: HistoryView, perspective: int) -> Move:
        """Choose the next move given all completed rounds."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
