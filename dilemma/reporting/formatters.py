"""Formatting utilities for tournament results."""

from collections import Counter
from typing import Iterable, List, Sequence

import numpy as np
import polars as pl
from rich.table import Table

from ..core.types import MatchFailure, MatchResult

RESULT_SCHEMA = {
    "index_a": pl.Int64,
    "index_b": pl.Int64,
    "strategy_a": pl.Utf8,
    "strategy_b": pl.Utf8,
    "score_a": pl.Int64,
    "score_b": pl.Int64,
    "rounds": pl.Int64,
}


def format_result(result: MatchResult) -> str:
    """Render one result as "<NameA> vs <NameB>: <scoreA> vs <scoreB>"."""
    return f"{result.name_a} vs {result.name_b}: {result.score_a} vs {result.score_b}"


def format_results(results: Iterable[MatchResult]) -> str:
    """Render results one per line, in the order given."""
    return "\n".join(format_result(r) for r in results)


def format_failure(failure: MatchFailure) -> str:
    return f"{failure.name_a} vs {failure.name_b}: failed ({failure.error})"


def results_to_frame(results: Iterable[MatchResult]) -> pl.DataFrame:
    """Collect results into a DataFrame, one row per matchup."""
    rows = [
        {
            "index_a": r.index_a,
            "index_b": r.index_b,
            "strategy_a": r.name_a,
            "strategy_b": r.name_b,
            "score_a": r.score_a,
            "score_b": r.score_b,
            "rounds": r.rounds,
        }
        for r in results
    ]
    return pl.DataFrame(rows, schema=RESULT_SCHEMA)


def unique_labels(names: Sequence[str], reserved: Iterable[str] = ()) -> List[str]:
    """Disambiguate repeated lineup names as "Name#1", "Name#2", ...

    Names that occur once are returned unchanged unless they are in
    `reserved`. A suffix never reuses a label already taken by another
    name, so every returned label is distinct.
    """
    reserved = set(reserved)
    counts = Counter(names)
    taken = {name for name in names if counts[name] == 1 and name not in reserved}
    taken |= reserved
    next_suffix: Counter = Counter()
    labels = []
    for name in names:
        if counts[name] == 1 and name not in reserved:
            labels.append(name)
            continue
        while True:
            next_suffix[name] += 1
            label = f"{name}#{next_suffix[name]}"
            if label not in taken:
                break
        taken.add(label)
        labels.append(label)
    return labels


def score_matrix_frame(matrix: np.ndarray, names: Sequence[str]) -> pl.DataFrame:
    """Label an NxN score matrix for display.

    Row i, column j holds strategy i's total when seated as A against j.

    Args:
        matrix: Square matrix from TournamentResult.score_matrix()
        names: Lineup names in index order

    Returns:
        DataFrame with a "strategy" column followed by one column per opponent.
    """
    if matrix.shape != (len(names), len(names)):
        raise ValueError(
            f"matrix shape {matrix.shape} does not match {len(names)} strategies"
        )
    labels = unique_labels(names, reserved=("strategy",))
    data = {"strategy": labels}
    for j, label in enumerate(labels):
        data[label] = matrix[:, j].tolist()
    return pl.DataFrame(data)


def build_results_table(
    results: Iterable[MatchResult],
    title: str = "Tournament Results",
) -> Table:
    """Build a rich table of results in the order given."""
    table = Table(title=title)
    table.add_column("Strategy A", style="cyan")
    table.add_column("Strategy B", style="magenta")
    table.add_column("Score A", justify="right", style="green")
    table.add_column("Score B", justify="right", style="green")

    for r in results:
        table.add_row(r.name_a, r.name_b, str(r.score_a), str(r.score_b))

    return table
