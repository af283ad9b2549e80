"""Configuration constants for the dilemma package."""

import logging
import os
from typing import List

logger = logging.getLogger(__name__)

# Rounds per matchup (the reference program played 500)
DEFAULT_ITERATIONS = int(os.environ.get("DILEMMA_ITERATIONS", "500"))
MAX_ITERATIONS = int(os.environ.get("DILEMMA_MAX_ITERATIONS", "1000000"))

# Worker threads - defaults to the number of logical processors
DEFAULT_WORKERS = int(os.environ.get("DILEMMA_WORKERS", str(os.cpu_count() or 1)))

DEFAULT_LOG_LEVEL = os.environ.get("DILEMMA_LOG_LEVEL", "WARNING").upper()

# The five classic strategies, in lineup order
CLASSIC_STRATEGIES: List[str] = [
    "always-cooperate",
    "always-defect",
    "tit-for-tat",
    "two-tits-for-tat",
    "random",
]


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging for command line use.

    Args:
        level: Level name such as "DEBUG" or "INFO".
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        logger.warning("Unknown log level %r, falling back to WARNING", level)
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
