"""
Role pools: the generators' working representation of a schedule.
"""

import random
from typing import List

from ..models import Match, Schedule, N_ROLES


class RolePools:
    """
    One permutation of 1..n per role.

    Column ``g`` of the four pools is game ``g``, so every player fills every
    role exactly once by construction. The buffers belong to a single worker
    and are reshuffled in place for each attempt.
    """

    def __init__(self, n_players: int):
        self.n_players = n_players
        self.pools: List[List[int]] = [
            list(range(1, n_players + 1)) for _ in range(N_ROLES)
        ]

    def reshuffle(self, rng: random.Random) -> None:
        """Replace every pool with a fresh uniform permutation."""
        for pool in self.pools:
            rng.shuffle(pool)

    def reshuffle_one(self, rng: random.Random) -> int:
        """Reshuffle one randomly chosen pool and return its role index."""
        pos = rng.randrange(N_ROLES)
        rng.shuffle(self.pools[pos])
        return pos

    def match(self, g: int) -> Match:
        pools = self.pools
        return (pools[0][g], pools[1][g], pools[2][g], pools[3][g])

    def swap(self, pos: int, g: int, j: int) -> None:
        """Exchange the entries of games ``g`` and ``j`` in one role pool."""
        pool = self.pools[pos]
        pool[g], pool[j] = pool[j], pool[g]

    def to_schedule(self) -> Schedule:
        """Copy the pools out as an independent list of matches."""
        return [self.match(g) for g in range(self.n_players)]
