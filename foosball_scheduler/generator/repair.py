"""
Conflict-repair schedule generation.

Four independent random permutations (one per role) already give every
player every role exactly once. What is left is making the four players of
each game distinct and keeping every team unique, which is done by swapping
entries inside a single role pool so the permutation property never breaks.

The generator is a small state machine:

    RESTARTING   -> fresh permutations, or give up once the restart budget is spent
    REPAIRING    -> bounded swap passes, then validate
    FALLING_BACK -> rejection sampling, which always ends with a valid schedule
    DONE
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Optional, Tuple

from ..models import Schedule, N_ROLES, RED_ROLES, BLUE_ROLES
from ..teams import team_scope, team_fingerprints
from ..validation import is_valid, assert_valid
from ..exceptions import GenerationExhausted
from .pools import RolePools
from .fallback import generate_fallback

MAX_RESTARTS = 200
PASS_FACTOR = 20

Fingerprints = Tuple[Hashable, Hashable]


class GenerationState(Enum):
    """States of the repair generator."""
    RESTARTING = "restarting"
    REPAIRING = "repairing"
    FALLING_BACK = "falling_back"
    DONE = "done"


@dataclass
class GenerationStats:
    """Counters for the most recent run of a generator."""
    attempts: int = 0
    passes: int = 0
    swaps: int = 0
    used_fallback: bool = False


class ScheduleGenerator:
    """Builds one valid schedule per call to :meth:`run`."""

    def __init__(self, n_players: int, rng: random.Random,
                 pools: Optional[RolePools] = None,
                 max_restarts: int = MAX_RESTARTS,
                 pass_factor: int = PASS_FACTOR,
                 allow_fallback: bool = True):
        self.n_players = n_players
        self.rng = rng
        self.pools = pools if pools is not None else RolePools(n_players)
        self.max_restarts = max_restarts
        self.max_passes = n_players * pass_factor
        self.allow_fallback = allow_fallback
        self.scope = team_scope(n_players)

        self.state = GenerationState.DONE
        self.stats = GenerationStats()
        self._result: Optional[Schedule] = None

    def run(self) -> Schedule:
        """
        Generate a schedule satisfying every invariant.

        Raises:
            GenerationExhausted: restarts ran out and fallback is disabled
            InternalInvariantViolation: the finished schedule is invalid
        """
        self.stats = GenerationStats()
        self._result = None
        self.state = GenerationState.RESTARTING

        handlers = {
            GenerationState.RESTARTING: self._restart,
            GenerationState.REPAIRING: self._repair,
            GenerationState.FALLING_BACK: self._fall_back,
        }

        while self.state is not GenerationState.DONE:
            try:
                self.state = handlers[self.state]()
            except GenerationExhausted:
                if not self.allow_fallback:
                    raise
                self.state = GenerationState.FALLING_BACK

        assert_valid(self._result, self.n_players)
        return self._result

    # -- states ---------------------------------------------------------------

    def _restart(self) -> GenerationState:
        if self.stats.attempts >= self.max_restarts:
            raise GenerationExhausted(self.n_players, self.stats.attempts)

        self.stats.attempts += 1
        self.pools.reshuffle(self.rng)
        return GenerationState.REPAIRING

    def _repair(self) -> GenerationState:
        n = self.n_players
        for _ in range(self.max_passes):
            self.stats.passes += 1

            # Rebuild the registry from the pools on every pass
            fingerprints = [
                team_fingerprints(self.pools.match(g), self.scope) for g in range(n)
            ]

            changed = False
            for g in range(n):
                pos = self._conflict_position(g, fingerprints)
                if pos is None:
                    continue
                if self._resolve(g, pos, fingerprints):
                    changed = True

            if not changed:
                break

        candidate = self.pools.to_schedule()
        if is_valid(candidate, n, self.scope):
            self._result = candidate
            return GenerationState.DONE
        return GenerationState.RESTARTING

    def _fall_back(self) -> GenerationState:
        self.stats.used_fallback = True
        self._result = generate_fallback(self.n_players, self.rng, self.pools)
        return GenerationState.DONE

    # -- repair helpers -------------------------------------------------------

    def _conflict_position(self, g: int, fingerprints: List[Fingerprints]) -> Optional[int]:
        """Role to swap in game ``g``, or None when the game is clean."""
        match = self.pools.match(g)

        # Player duplicates come first
        seen = set()
        for pos, player in enumerate(match):
            if player in seen:
                return pos
            seen.add(player)

        red, blue = fingerprints[g]
        if self._used_elsewhere(red, g, fingerprints):
            return self.rng.choice(RED_ROLES)
        if self._used_elsewhere(blue, g, fingerprints):
            return self.rng.choice(BLUE_ROLES)
        return None

    def _resolve(self, g: int, pos: int, fingerprints: List[Fingerprints]) -> bool:
        """
        Try swap partners for role ``pos`` of game ``g`` in random order.

        A swap is kept when game ``g`` ends up with four distinct players and
        two fresh, different team fingerprints. The partner game is not
        checked here; the next pass picks up anything the swap broke there.
        """
        partners = [j for j in range(self.n_players) if j != g]
        self.rng.shuffle(partners)

        for j in partners:
            self.pools.swap(pos, g, j)

            new_g = self.pools.match(g)
            if len(set(new_g)) == N_ROLES:
                red, blue = team_fingerprints(new_g, self.scope)
                partner = team_fingerprints(self.pools.match(j), self.scope)
                if red != blue and self._is_free(red, blue, g, j, partner, fingerprints):
                    fingerprints[g] = (red, blue)
                    fingerprints[j] = partner
                    self.stats.swaps += 1
                    return True

            # Undo
            self.pools.swap(pos, g, j)

        return False

    def _used_elsewhere(self, key: Hashable, g: int,
                        fingerprints: List[Fingerprints]) -> bool:
        for x, keys in enumerate(fingerprints):
            if x != g and key in keys:
                return True
        return False

    def _is_free(self, red: Hashable, blue: Hashable, g: int, j: int,
                 partner: Fingerprints, fingerprints: List[Fingerprints]) -> bool:
        for x, keys in enumerate(fingerprints):
            if x == g:
                continue
            if x == j:
                keys = partner
            if red in keys or blue in keys:
                return False
        return True


def generate(n_players: int, rng: random.Random,
             pools: Optional[RolePools] = None,
             max_restarts: int = MAX_RESTARTS,
             pass_factor: int = PASS_FACTOR) -> Schedule:
    """
    Generate one valid candidate schedule.

    Never returns an invalid schedule: when the repair budget runs out the
    rejection-sampling fallback takes over.
    """
    generator = ScheduleGenerator(
        n_players, rng, pools,
        max_restarts=max_restarts,
        pass_factor=pass_factor,
    )
    return generator.run()
