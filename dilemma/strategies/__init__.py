"""Strategy registry.

Strategies are looked up by kebab-case id. `get_strategy` builds a fresh
instance; `build_lineup` turns a list of ids into the (name, strategy)
pairs a tournament consumes.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ..core.errors import ConfigurationError
from .base import Strategy
from .classic import (
    AlwaysCooperate,
    AlwaysDefect,
    TitForTat,
    SuspiciousTitForTat,
    TwoTitsForTat,
    GrimTrigger,
    Pavlov,
    Random,
)

STRATEGY_REGISTRY: Dict[str, Callable[..., Strategy]] = {
    "always-cooperate": AlwaysCooperate,
    "always-defect": AlwaysDefect,
    "tit-for-tat": TitForTat,
    "two-tits-for-tat": TwoTitsForTat,
    "random": Random,
    "grim-trigger": GrimTrigger,
    "pavlov": Pavlov,
    "suspicious-tit-for-tat": SuspiciousTitForTat,
}

# Strategies whose constructor accepts a seed
RANDOMIZED_STRATEGIES = {"random"}


def get_strategy(strategy_id: str, seed: Optional[int] = None) -> Strategy:
    """Build a strategy by id.

    Args:
        strategy_id: Registry key, e.g. "tit-for-tat".
        seed: Seed for randomized strategies; ignored by the others.

    Returns:
        A new Strategy instance.

    Raises:
        ConfigurationError: If the id is not registered.
    """
    key = strategy_id.strip().lower()
    if key not in STRATEGY_REGISTRY:
        available = ", ".join(STRATEGY_REGISTRY.keys())
        raise ConfigurationError(
            f"Strategy '{strategy_id}' not found. Available strategies: {available}"
        )
    if key in RANDOMIZED_STRATEGIES:
        return STRATEGY_REGISTRY[key](seed=seed)
    return STRATEGY_REGISTRY[key]()


def list_strategies() -> List[str]:
    """List all registered strategy ids."""
    return list(STRATEGY_REGISTRY.keys())


def derive_seed(seed: Optional[int], position: int) -> Optional[int]:
    """Seed for the entry at `position`, or None when unseeded."""
    if seed is None:
        return None
    if seed < 0:
        raise ConfigurationError(f"seed must be non-negative, got {seed}")
    return int(np.random.SeedSequence([seed, position]).generate_state(1)[0])


def build_lineup(
    strategy_ids: Iterable[str],
    seed: Optional[int] = None,
) -> List[Tuple[str, Strategy]]:
    """Map ids to (display name, instance) pairs, keeping order and duplicates.

    Each entry gets its own seed derived from `seed` and its lineup position,
    so repeated randomized entries play as independent players.
    """
    lineup = []
    for position, strategy_id in enumerate(strategy_ids):
        strategy = get_strategy(strategy_id, seed=derive_seed(seed, position))
        lineup.append((strategy.name, strategy))
    return lineup


__all__ = [
    "Strategy",
    "AlwaysCooperate",
    "AlwaysDefect",
    "TitForTat",
    "SuspiciousTitForTat",
    "TwoTitsForTat",
    "GrimTrigger",
    "Pavlov",
    "Random",
    "STRATEGY_REGISTRY",
    "get_strategy",
    "list_strategies",
    "derive_seed",
    "build_lineup",
]
