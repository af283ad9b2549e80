"""Thread-safe counters for a tournament run."""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RunMetrics:
    """Thread-safe execution metrics for one tournament run.

    Workers record into it concurrently; the initiating thread reads it
    once the run is over.
    """

    matches_completed: int = 0
    matches_failed: int = 0
    rounds_played: int = 0
    match_durations: List[float] = field(default_factory=list)
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def reset(self) -> None:
        """Reset all metrics for a new run."""
        with self._lock:
            self.matches_completed = 0
            self.matches_failed = 0
            self.rounds_played = 0
            self.match_durations.clear()
            self.start_time = time.perf_counter()
            self.end_time = None

    def finish(self) -> None:
        with self._lock:
            self.end_time = time.perf_counter()

    def log_match(self, rounds: int, duration: float) -> None:
        """Log a completed matchup."""
        with self._lock:
            self.matches_completed += 1
            self.rounds_played += rounds
            self.match_durations.append(duration)

    def log_failure(self, duration: float) -> None:
        """Log a matchup that raised."""
        with self._lock:
            self.matches_failed += 1
            self.match_durations.append(duration)

    def get_elapsed_time(self) -> float:
        """Get elapsed time since start."""
        with self._lock:
            if self.start_time is None:
                return 0.0
            end = self.end_time if self.end_time is not None else time.perf_counter()
            return end - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        """Export metrics as a dictionary."""
        elapsed = self.get_elapsed_time()
        with self._lock:
            durations = self.match_durations
            return {
                "matches_completed": self.matches_completed,
                "matches_failed": self.matches_failed,
                "rounds_played": self.rounds_played,
                "elapsed_seconds": elapsed,
                "avg_match_seconds": sum(durations) / len(durations) if durations else 0.0,
                "max_match_seconds": max(durations) if durations else 0.0,
                "rounds_per_second": self.rounds_played / elapsed if elapsed > 0 else 0.0,
            }
