"""Type definitions for the dilemma package."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union, overload


class Move(str, Enum):
    """A single-round choice."""
    COOPERATE = "cooperate"
    DEFECT = "defect"

    def flip(self) -> "Move":
        """Return the opposite move."""
        return Move.DEFECT if self is Move.COOPERATE else Move.COOPERATE


class Outcome(NamedTuple):
    """One round's pair of moves, stored as (player A, player B)."""
    first: Move
    second: Move

    def for_player(self, perspective: int) -> Tuple[Move, Move]:
        """Return (own move, opponent move) as seen from `perspective`."""
        check_perspective(perspective)
        return self[perspective], self[1 - perspective]


def check_perspective(perspective: int) -> None:
    if perspective not in (0, 1):
        raise ValueError(f"perspective must be 0 or 1, got {perspective!r}")


class HistoryView(Sequence):
    """Read-only window over the first `end` rounds of a match history.

    The underlying record is append-only, so a view taken before a round
    keeps showing exactly the rounds that existed at that moment.
    """

    __slots__ = ("_outcomes", "_end")

    def __init__(self, outcomes: List[Outcome], end: int):
        self._outcomes = outcomes
        self._end = end

    def __len__(self) -> int:
        return self._end

    @overload
    def __getitem__(self, index: int) -> Outcome: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Outcome, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return tuple(self._outcomes[i] for i in range(*index.indices(self._end)))
        if index < 0:
            index += self._end
        if not 0 <= index < self._end:
            raise IndexError("history index out of range")
        return self._outcomes[index]

    def __repr__(self) -> str:
        return f"HistoryView(rounds={self._end})"

    @property
    def last(self) -> Optional[Outcome]:
        """Most recent outcome, or None before the first round."""
        return self._outcomes[self._end - 1] if self._end else None

    def moves_of(self, perspective: int) -> Tuple[Move, ...]:
        """All moves made by one side, oldest first."""
        check_perspective(perspective)
        return tuple(self._outcomes[i][perspective] for i in range(self._end))


class History:
    """Append-only record of the outcomes of one match."""

    def __init__(self) -> None:
        self._outcomes: List[Outcome] = []

    def append(self, move_a: Move, move_b: Move) -> Outcome:
        """Record a round. Returns the stored outcome."""
        if not isinstance(move_a, Move) or not isinstance(move_b, Move):
            raise TypeError(f"moves must be Move values, got {move_a!r}, {move_b!r}")
        outcome = Outcome(move_a, move_b)
        self._outcomes.append(outcome)
        return outcome

    def view(self) -> HistoryView:
        """Snapshot of the rounds recorded so far."""
        return HistoryView(self._outcomes, len(self._outcomes))

    def __len__(self) -> int:
        return len(self._outcomes)

    def __getitem__(self, index):
        return self.view()[index]

    def __iter__(self):
        return iter(self.view())

    def __repr__(self) -> str:
        return f"History(rounds={len(self._outcomes)})"


@dataclass(frozen=True)
class MatchResult:
    """Final scores of one completed matchup."""
    name_a: str
    name_b: str
    score_a: int
    score_b: int
    index_a: int = 0
    index_b: int = 0
    rounds: int = 0

    @property
    def pairing(self) -> Tuple[int, int]:
        return self.index_a, self.index_b

    def __str__(self) -> str:
        return f"{self.name_a} vs {self.name_b}: {self.score_a} vs {self.score_b}"


@dataclass(frozen=True)
class MatchFailure:
    """A matchup whose execution raised instead of producing scores."""
    index_a: int
    index_b: int
    name_a: str
    name_b: str
    error: str

    @property
    def pairing(self) -> Tuple[int, int]:
        return self.index_a, self.index_b
