"""Tests for the round-robin tournament scheduler."""

import logging
import threading
import time
from collections import Counter
from itertools import product

import numpy as np
import pytest

from .tournament import (
    TournamentConfig,
    TournamentRunner,
    build_score_matrix,
    create_classic_tournament,
    create_quick_tournament,
    run_tournament,
)
from ..core.config import CLASSIC_STRATEGIES
from ..core.errors import ConfigurationError, TournamentError
from ..core.types import Move
from ..strategies import (
    AlwaysCooperate,
    AlwaysDefect,
    Strategy,
    TitForTat,
    TwoTitsForTat,
    build_lineup,
)


class ExplodingStrategy(Strategy):
    """Raises on its first decision."""

    display_name = "Exploding"

    def decide(self, history, perspective):
        raise RuntimeError("boom")


class SlowFirstStrategy(Strategy):
    """Stalls when seated as A so that later submissions finish first."""

    display_name = "Slow"

    def decide(self, history, perspective):
        if perspective == 0 and not history:
            time.sleep(0.2)
        return Move.COOPERATE


@pytest.fixture
def deterministic_lineup():
    return [
        ("AlwaysCooperate", AlwaysCooperate()),
        ("AlwaysDefect", AlwaysDefect()),
        ("TitForTat", TitForTat()),
        ("TwoTitsForTat", TwoTitsForTat()),
    ]


class TestTournamentConfig:

    def test_valid(self, deterministic_lineup):
        config = TournamentConfig(deterministic_lineup, iterations=5, workers=2)
        assert config.names[0] == "AlwaysCooperate"
        assert config.num_matchups == 16

    @pytest.mark.parametrize("workers", [0, -3, 1.5, None])
    def test_bad_workers(self, deterministic_lineup, workers):
        with pytest.raises(ConfigurationError):
            TournamentConfig(deterministic_lineup, iterations=5, workers=workers)

    def test_bad_iterations(self, deterministic_lineup):
        with pytest.raises(ConfigurationError):
            TournamentConfig(deterministic_lineup, iterations=-1, workers=1)

    def test_empty_lineup(self):
        with pytest.raises(ConfigurationError):
            TournamentConfig([], iterations=5, workers=1)

    @pytest.mark.parametrize(
        "entry", [("name", "not a strategy"), (1, TitForTat()), TitForTat()],
    )
    def test_malformed_entry(self, entry):
        with pytest.raises(ConfigurationError):
            TournamentConfig([entry], iterations=5, workers=1)

    def test_unknown_strategy_rejected_before_running(self):
        with pytest.raises(ConfigurationError):
            create_quick_tournament(["tit-for-tat", "nope"])


class TestScheduling:

    @pytest.mark.parametrize("n", [1, 2, 5])
    @pytest.mark.parametrize("workers", [1, 3, 8])
    def test_every_ordered_pair_exactly_once(self, n, workers):
        lineup = build_lineup(["tit-for-tat"] * n)
        result = run_tournament(lineup, iterations=3, workers=workers)

        pairings = Counter(r.pairing for r in result.results)
        assert len(result.results) == n * n
        assert set(pairings) == set(product(range(n), repeat=2))
        assert all(count == 1 for count in pairings.values())
        assert result.failures == []
        assert result.status == "completed"

    def test_known_scores(self, deterministic_lineup):
        k = 10
        result = run_tournament(deterministic_lineup, iterations=k, workers=4)
        scores = {r.pairing: (r.score_a, r.score_b) for r in result.results}

        assert scores[(0, 0)] == (2 * k, 2 * k)
        assert scores[(1, 1)] == (k, k)
        assert scores[(0, 1)] == (0, 3 * k)
        assert scores[(1, 0)] == (3 * k, 0)
        assert scores[(2, 1)] == (k - 1, 3 + (k - 1))
        assert scores[(2, 2)] == (2 * k, 2 * k)
        assert scores[(3, 1)] == (k - 2, 6 + (k - 2))

    def test_names_carried_through(self, deterministic_lineup):
        result = run_tournament(deterministic_lineup, iterations=1, workers=2)
        for r in result.results:
            assert r.name_a == deterministic_lineup[r.index_a][0]
            assert r.name_b == deterministic_lineup[r.index_b][0]
            assert r.rounds == 1

    def test_rerun_is_identical(self, deterministic_lineup):
        first = run_tournament(deterministic_lineup, iterations=25, workers=4)
        second = run_tournament(deterministic_lineup, iterations=25, workers=2)
        assert first.sorted_results() == second.sorted_results()
        assert np.array_equal(first.score_matrix(), second.score_matrix())

    def test_arrival_order_follows_completion(self):
        lineup = [("Slow", SlowFirstStrategy()), ("Fast", AlwaysCooperate())]
        result = run_tournament(lineup, iterations=2, workers=4)
        assert result.results[0].pairing != (0, 0)
        assert len(result.results) == 4

    def test_runs_on_worker_threads(self):
        seen = set()

        class ThreadRecorder(Strategy):
            display_name = "ThreadRecorder"

            def decide(self, history, perspective):
                seen.add(threading.current_thread().name)
                return Move.COOPERATE

        run_tournament([("T", ThreadRecorder())], iterations=2, workers=2)
        assert seen
        assert all(name.startswith("dilemma-match") for name in seen)

    def test_zero_iterations(self, deterministic_lineup):
        result = run_tournament(deterministic_lineup, iterations=0, workers=2)
        assert len(result.results) == 16
        assert all((r.score_a, r.score_b) == (0, 0) for r in result.results)


class TestFailures:

    @pytest.fixture
    def lineup(self):
        return [("TitForTat", TitForTat()), ("Exploding", ExplodingStrategy())]

    def test_failure_isolated_to_its_pairings(self, lineup):
        result = run_tournament(lineup, iterations=5, workers=2)

        assert [r.pairing for r in result.results] == [(0, 0)]
        assert sorted(f.pairing for f in result.failures) == [(0, 1), (1, 0), (1, 1)]
        assert all("RuntimeError: boom" in f.error for f in result.failures)
        assert result.status == "completed_with_failures"
        assert result.metrics["matches_failed"] == 3
        assert result.metrics["matches_completed"] == 1

    def test_raise_for_failures(self, lineup):
        result = run_tournament(lineup, iterations=5, workers=2)
        with pytest.raises(TournamentError, match="3 matchup"):
            result.raise_for_failures()

    def test_failure_logged_with_traceback(self, lineup, caplog):
        with caplog.at_level(logging.ERROR, logger="dilemma.experiments.tournament"):
            run_tournament(lineup, iterations=5, workers=2)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 3
        assert all(r.exc_info is not None for r in errors)
        assert all(r.exc_info[0] is RuntimeError for r in errors)

    def test_failed_pairings_are_nan_in_matrix(self, lineup):
        matrix = run_tournament(lineup, iterations=5, workers=2).score_matrix()
        assert matrix[0, 0] == 10
        assert np.isnan(matrix[0, 1])
        assert np.isnan(matrix[1, 1])


class TestRunner:

    def test_progress_callback(self, deterministic_lineup):
        calls = []
        config = TournamentConfig(deterministic_lineup, iterations=2, workers=2)
        TournamentRunner(
            config, progress_callback=lambda done, total, msg: calls.append((done, total, msg))
        ).run_tournament()

        assert [c[0] for c in calls] == list(range(1, 17))
        assert all(c[1] == 16 for c in calls)
        assert all(" vs " in c[2] for c in calls)

    def test_iter_results_streams(self, deterministic_lineup):
        config = TournamentConfig(deterministic_lineup, iterations=2, workers=2)
        stream = TournamentRunner(config).iter_results()
        first = next(stream)
        assert first.rounds == 2
        assert len([first, *stream]) == 16

    def test_iter_results_can_be_abandoned(self, deterministic_lineup):
        config = TournamentConfig(deterministic_lineup, iterations=2, workers=1)
        stream = TournamentRunner(config).iter_results()
        next(stream)
        stream.close()

    def test_metrics(self, deterministic_lineup):
        config = TournamentConfig(deterministic_lineup, iterations=7, workers=2)
        runner = TournamentRunner(config)
        result = runner.run_tournament()
        assert result.metrics["matches_completed"] == 16
        assert result.metrics["rounds_played"] == 16 * 7
        assert result.metrics["elapsed_seconds"] >= 0

    def test_to_dict(self, deterministic_lineup):
        result = run_tournament(deterministic_lineup, iterations=3, workers=2)
        data = result.to_dict()
        assert data["strategies"] == [name for name, _ in deterministic_lineup]
        assert data["iterations"] == 3
        assert len(data["results"]) == 16
        assert data["failures"] == []
        assert data["status"] == "completed"


class TestScoreMatrix:

    def test_layout(self, deterministic_lineup):
        result = run_tournament(deterministic_lineup, iterations=4, workers=2)
        matrix = result.score_matrix()
        assert matrix.shape == (4, 4)
        # Row is the A seat: cooperator vs defector earns 0, defector vs cooperator 12
        assert matrix[0, 1] == 0
        assert matrix[1, 0] == 12

    def test_build_from_partial_results(self):
        assert np.isnan(build_score_matrix([], 2)).all()


class TestFactories:

    def test_classic_tournament(self):
        config = create_classic_tournament(iterations=20, workers=2, seed=1)
        assert len(config.strategies) == len(CLASSIC_STRATEGIES)
        assert config.names[-1] == "Random"

    def test_seeded_classic_tournament_is_reproducible(self):
        first = TournamentRunner(create_classic_tournament(iterations=30, workers=3, seed=9))
        second = TournamentRunner(create_classic_tournament(iterations=30, workers=1, seed=9))
        assert (
            first.run_tournament().sorted_results()
            == second.run_tournament().sorted_results()
        )

    def test_classic_score_bounds(self):
        k = 50
        result = TournamentRunner(create_classic_tournament(iterations=k, workers=4)).run_tournament()
        assert len(result.results) == 25
        for r in result.results:
            assert 0 <= r.score_a <= 3 * k
            assert 0 <= r.score_b <= 3 * k
            assert 2 * k <= r.score_a + r.score_b <= 4 * k
