"""
Entry point tying input validation to the parallel search.
"""

import math
import threading
from typing import Hashable, List, Optional, Sequence, Tuple

from .models import Competitor, Tournament
from .config import SchedulerConfig
from .optimizer import optimize, MIN_PLAYERS
from .exceptions import InvalidInputError


def validate_competitors(pairs: Sequence[Tuple[Hashable, float]]) -> None:
    """
    Reject inputs that cannot be scheduled, before any generation happens.

    Raises:
        InvalidInputError: fewer than 4 players, a non-positive rating or a
            repeated identifier
    """
    if len(pairs) < MIN_PLAYERS:
        raise InvalidInputError(
            f"At least {MIN_PLAYERS} players are required, got {len(pairs)}"
        )

    seen = set()
    for identifier, rating in pairs:
        if identifier in seen:
            raise InvalidInputError(f"Duplicate player: {identifier}")
        seen.add(identifier)

        try:
            value = float(rating)
        except (TypeError, ValueError):
            raise InvalidInputError(f"Invalid rating for {identifier}: {rating!r}")
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"Rating for {identifier} must be positive: {rating}")


def build_competitors(pairs: Sequence[Tuple[Hashable, float]]) -> List[Competitor]:
    """Validate (identifier, rating) pairs and number them 1..n in input order."""
    validate_competitors(pairs)
    return [
        Competitor(id=i, name=str(identifier), rating=float(rating))
        for i, (identifier, rating) in enumerate(pairs, start=1)
    ]


def schedule(pairs: Sequence[Tuple[Hashable, float]],
             config: Optional[SchedulerConfig] = None,
             stop_event: Optional[threading.Event] = None,
             verbose: bool = False) -> Tournament:
    """
    Convenience function to produce the fairest schedule found.

    Args:
        pairs: (identifier, rating) for every player
        config: Scheduler configuration (defaults when omitted)
        stop_event: Optional cancellation flag for the thread executor
        verbose: Print search progress

    Returns:
        Tournament: Players plus the optimisation result
    """
    if config is None:
        config = SchedulerConfig()

    competitors = build_competitors(pairs)
    result = optimize(
        len(competitors),
        [c.rating for c in competitors],
        config.search.trials,
        workers=config.search.workers,
        executor=config.search.executor,
        seed=config.search.seed,
        max_restarts=config.repair.max_restarts,
        pass_factor=config.repair.pass_factor,
        stop_event=stop_event,
        verbose=verbose,
    )
    return Tournament(competitors=competitors, result=result)
