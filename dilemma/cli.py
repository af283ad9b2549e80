"""Command line front end for running a tournament."""

from typing import Optional, Tuple

import click
from rich.console import Console

from .core.config import (
    CLASSIC_STRATEGIES,
    DEFAULT_ITERATIONS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_WORKERS,
    configure_logging,
)
from .core.errors import ConfigurationError
from .experiments.tournament import TournamentConfig, TournamentRunner, build_score_matrix
from .reporting.formatters import (
    build_results_table,
    format_failure,
    format_result,
    score_matrix_frame,
)
from .strategies import STRATEGY_REGISTRY, build_lineup, list_strategies

console = Console()


@click.command()
@click.option(
    "--strategy", "-s", "strategies", multiple=True,
    help="Strategy id to enter; repeat for more. Defaults to the classic five.",
)
@click.option("--iterations", "-n", default=DEFAULT_ITERATIONS, type=int, show_default=True,
              help="Rounds per matchup")
@click.option("--workers", "-w", default=DEFAULT_WORKERS, type=int, show_default=True,
              help="Worker threads")
@click.option("--seed", default=None, type=int, help="Seed for randomized strategies")
@click.option("--table", is_flag=True, help="Print a table once all matchups finish")
@click.option("--matrix", is_flag=True, help="Also print the head-to-head score matrix")
@click.option("--list", "list_only", is_flag=True, help="List strategy ids and exit")
@click.option("--log-level", default=DEFAULT_LOG_LEVEL, show_default=True,
              help="Logging level")
@click.pass_context
def main(
    ctx: click.Context,
    strategies: Tuple[str, ...],
    iterations: int,
    workers: int,
    seed: Optional[int],
    table: bool,
    matrix: bool,
    list_only: bool,
    log_level: str,
):
    """Run an iterated Prisoner's Dilemma round-robin tournament."""
    configure_logging(log_level)

    if list_only:
        for strategy_id in list_strategies():
            click.echo(f"{strategy_id}\t{STRATEGY_REGISTRY[strategy_id].display_name}")
        return

    try:
        lineup = build_lineup(strategies or CLASSIC_STRATEGIES, seed=seed)
        config = TournamentConfig(strategies=lineup, iterations=iterations, workers=workers)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    runner = TournamentRunner(config)
    results = []
    for result in runner.iter_results():
        results.append(result)
        if not table:
            click.echo(format_result(result))

    if table:
        console.print(build_results_table(sorted(results, key=lambda r: r.pairing)))

    if matrix:
        frame = score_matrix_frame(
            build_score_matrix(results, len(lineup)),
            config.names,
        )
        click.echo(str(frame))

    for failure in runner.failures:
        click.echo(format_failure(failure), err=True)

    if runner.failures:
        ctx.exit(1)


if __name__ == "__main__":
    main()
