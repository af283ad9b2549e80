"""Round-robin tournament over a lineup of strategies.

Every ordered pair (i, j) of the lineup, self-pairs included, is played as
an independent match on a bounded thread pool. Results are handed back in
completion order.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import product
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
import time
import uuid

import numpy as np

from ..core.config import CLASSIC_STRATEGIES, DEFAULT_ITERATIONS, DEFAULT_WORKERS
from ..core.errors import ConfigurationError, TournamentError
from ..core.types import MatchFailure, MatchResult
from ..engine.match import play_match, validate_iterations
from ..metrics.tracker import RunMetrics
from ..strategies import Strategy, build_lineup

logger = logging.getLogger(__name__)

Lineup = List[Tuple[str, Strategy]]
ProgressCallback = Callable[[int, int, str], None]


def build_score_matrix(results: Iterable[MatchResult], n: int) -> np.ndarray:
    """Build the head-to-head score matrix.

    Args:
        results: Match results in any order
        n: Lineup size

    Returns:
        NxN float matrix where entry (i, j) is strategy i's total when seated
        as A against strategy j. Pairings with no result are NaN.
    """
    matrix = np.full((n, n), np.nan)
    for result in results:
        matrix[result.index_a, result.index_b] = result.score_a
    return matrix


@dataclass
class TournamentConfig:
    """Configuration for a tournament.

    Raises:
        ConfigurationError: On an empty or malformed lineup, a negative
            iteration count or a worker count below one.
    """
    strategies: Lineup
    iterations: int = DEFAULT_ITERATIONS
    workers: int = DEFAULT_WORKERS

    def __post_init__(self):
        self.strategies = list(self.strategies)
        if not self.strategies:
            raise ConfigurationError("tournament needs at least one strategy")
        for entry in self.strategies:
            if (
                not isinstance(entry, tuple)
                or len(entry) != 2
                or not isinstance(entry[0], str)
                or not isinstance(entry[1], Strategy)
            ):
                raise ConfigurationError(
                    f"lineup entries must be (name, Strategy) pairs, got {entry!r}"
                )
        validate_iterations(self.iterations)
        if isinstance(self.workers, bool) or not isinstance(self.workers, int):
            raise ConfigurationError(f"workers must be an integer, got {self.workers!r}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}")

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.strategies]

    @property
    def num_matchups(self) -> int:
        return len(self.strategies) ** 2


@dataclass
class TournamentResult:
    """Complete tournament results."""
    tournament_id: str
    config: TournamentConfig
    started_at: datetime
    completed_at: Optional[datetime]
    status: str  # "completed", "completed_with_failures"
    results: List[MatchResult]     # arrival order
    failures: List[MatchFailure] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def score_matrix(self) -> np.ndarray:
        """NxN matrix of raw A-side totals, see `build_score_matrix`."""
        return build_score_matrix(self.results, len(self.config.strategies))

    def sorted_results(self) -> List[MatchResult]:
        """Results in row-major (A index, B index) order."""
        return sorted(self.results, key=lambda r: r.pairing)

    def raise_for_failures(self) -> None:
        """Raise TournamentError if any matchup failed."""
        if self.failures:
            raise TournamentError(self.failures)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "tournament_id": self.tournament_id,
            "strategies": self.config.names,
            "iterations": self.config.iterations,
            "workers": self.config.workers,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "status": self.status,
            "results": [
                {
                    "index_a": r.index_a,
                    "index_b": r.index_b,
                    "strategy_a": r.name_a,
                    "strategy_b": r.name_b,
                    "score_a": r.score_a,
                    "score_b": r.score_b,
                    "rounds": r.rounds,
                }
                for r in self.results
            ],
            "failures": [
                {
                    "index_a": f.index_a,
                    "index_b": f.index_b,
                    "strategy_a": f.name_a,
                    "strategy_b": f.name_b,
                    "error": f.error,
                }
                for f in self.failures
            ],
            "metrics": self.metrics,
        }


class TournamentRunner:
    """Runs every ordered matchup of a lineup on a thread pool."""

    def __init__(
        self,
        config: TournamentConfig,
        progress_callback: Optional[ProgressCallback] = None,
        metrics: Optional[RunMetrics] = None,
    ):
        """Initialize tournament runner.

        Args:
            config: Tournament configuration
            progress_callback: Optional callback(completed, total, message),
                called on the initiating thread
            metrics: Optional tracker to record into
        """
        self.config = config
        self.progress_callback = progress_callback
        self.metrics = metrics or RunMetrics()
        self.failures: List[MatchFailure] = []

    def _generate_matchups(self) -> List[Tuple[int, int]]:
        """All ordered (A index, B index) pairs, self-pairs included."""
        n = len(self.config.strategies)
        return list(product(range(n), repeat=2))

    def _run_match(self, index_a: int, index_b: int) -> MatchResult:
        """Play one matchup. Runs on a worker thread."""
        name_a, strategy_a = self.config.strategies[index_a]
        name_b, strategy_b = self.config.strategies[index_b]

        started = time.perf_counter()
        try:
            record = play_match(strategy_a, strategy_b, self.config.iterations)
        except Exception:
            self.metrics.log_failure(time.perf_counter() - started)
            raise
        self.metrics.log_match(record.rounds, time.perf_counter() - started)

        return MatchResult(
            name_a=name_a,
            name_b=name_b,
            score_a=record.score_a,
            score_b=record.score_b,
            index_a=index_a,
            index_b=index_b,
            rounds=record.rounds,
        )

    def iter_results(self) -> Iterator[MatchResult]:
        """Run the tournament, yielding results as matchups finish.

        Failed matchups are not yielded; they are logged and collected in
        `self.failures`.
        """
        matchups = self._generate_matchups()
        total = len(matchups)
        names = self.config.names
        self.failures = []
        self.metrics.reset()

        logger.info(
            "Starting tournament: %d strategies, %d matchups, %d rounds each, %d workers",
            len(names), total, self.config.iterations, self.config.workers,
        )

        executor = ThreadPoolExecutor(
            max_workers=self.config.workers,
            thread_name_prefix="dilemma-match",
        )
        try:
            futures = {
                executor.submit(self._run_match, i, j): (i, j) for i, j in matchups
            }
            completed = 0
            for future in as_completed(futures):
                i, j = futures[future]
                completed += 1
                try:
                    result = future.result()
                except Exception as e:
                    logger.error(
                        "Matchup %s vs %s (%d, %d) failed: %s: %s",
                        names[i], names[j], i, j, type(e).__name__, e,
                        exc_info=e,
                    )
                    self.failures.append(MatchFailure(
                        index_a=i,
                        index_b=j,
                        name_a=names[i],
                        name_b=names[j],
                        error=f"{type(e).__name__}: {e}",
                    ))
                    result = None
                    message = f"{names[i]} vs {names[j]} failed"
                else:
                    message = str(result)

                if self.progress_callback:
                    self.progress_callback(completed, total, message)

                if result is not None:
                    yield result
        finally:
            # Abandoned early: drop matchups that have not started yet
            executor.shutdown(wait=True, cancel_futures=True)
            self.metrics.finish()

        logger.info(
            "Tournament finished: %d results, %d failures in %.2fs",
            total - len(self.failures), len(self.failures),
            self.metrics.get_elapsed_time(),
        )

    def run_tournament(self) -> TournamentResult:
        """Execute the tournament and collect every result.

        Returns:
            TournamentResult with results in arrival order.
        """
        tournament_id = str(uuid.uuid4())[:12]
        started_at = datetime.now(timezone.utc)

        results = list(self.iter_results())

        return TournamentResult(
            tournament_id=tournament_id,
            config=self.config,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            status="completed_with_failures" if self.failures else "completed",
            results=results,
            failures=list(self.failures),
            metrics=self.metrics.to_dict(),
        )


def run_tournament(
    strategies: Lineup,
    iterations: int = DEFAULT_ITERATIONS,
    workers: int = DEFAULT_WORKERS,
) -> TournamentResult:
    """Convenience wrapper: validate a lineup and run it to completion."""
    config = TournamentConfig(strategies=strategies, iterations=iterations, workers=workers)
    return TournamentRunner(config).run_tournament()


def create_quick_tournament(
    strategy_ids: Sequence[str],
    iterations: int = 10,
    workers: int = DEFAULT_WORKERS,
    seed: Optional[int] = None,
) -> TournamentConfig:
    """Create a short tournament configuration from registry ids.

    Args:
        strategy_ids: Registry ids, duplicates allowed
        iterations: Rounds per matchup
        workers: Worker threads
        seed: Seed for randomized strategies

    Returns:
        TournamentConfig for quick testing
    """
    return TournamentConfig(
        strategies=build_lineup(strategy_ids, seed=seed),
        iterations=iterations,
        workers=workers,
    )


def create_classic_tournament(
    iterations: int = DEFAULT_ITERATIONS,
    workers: int = DEFAULT_WORKERS,
    seed: Optional[int] = None,
) -> TournamentConfig:
    """Create a tournament over the five classic strategies."""
    return create_quick_tournament(
        CLASSIC_STRATEGIES, iterations=iterations, workers=workers, seed=seed,
    )
