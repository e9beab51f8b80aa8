"""
Last-resort schedule generation by rejection sampling.
"""

import random
from typing import Optional

from ..models import Schedule
from ..validation import is_valid
from ..teams import team_scope
from .pools import RolePools


def generate_fallback(n_players: int, rng: random.Random,
                      pools: Optional[RolePools] = None) -> Schedule:
    """
    Build a valid schedule by repeatedly reshuffling one pool.

    Slow but always correct: terminates with probability 1 for
    ``n_players >= 4``. Only used once the repair generator gives up.
    """
    if pools is None:
        pools = RolePools(n_players)
    pools.reshuffle(rng)
    scope = team_scope(n_players)

    while True:
        candidate = pools.to_schedule()
        if is_valid(candidate, n_players, scope):
            return candidate
        pools.reshuffle_one(rng)
