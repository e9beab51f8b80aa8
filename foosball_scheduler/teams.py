"""
Team identity helpers.

A team is the unordered pair of players on one side of a match. Uniqueness
checks work on *fingerprints*: normally the canonical pair itself, so a pair
can only ever play together once whichever side they are on. With four
players there are only six pairs for eight team slots, so the fingerprint
also carries the side and a pair may appear once as red and once as blue.
"""

from typing import Hashable, Tuple

from .models import Match, RED_ROLES, BLUE_ROLES

TeamKey = Tuple[int, int]

GLOBAL_SCOPE = "global"
SIDE_SCOPE = "side"


def canonical_pair(a: int, b: int) -> TeamKey:
    """Canonical unordered pair: always (min, max)."""
    return (a, b) if a < b else (b, a)


def team_scope(n_players: int) -> str:
    """Uniqueness scope that is satisfiable for ``n_players``."""
    distinct_pairs = n_players * (n_players - 1) // 2
    team_slots = 2 * n_players
    return GLOBAL_SCOPE if distinct_pairs >= team_slots else SIDE_SCOPE


def team_fingerprints(match: Match, scope: str) -> Tuple[Hashable, Hashable]:
    """Red and blue fingerprints of a match."""
    red = canonical_pair(match[RED_ROLES[0]], match[RED_ROLES[1]])
    blue = canonical_pair(match[BLUE_ROLES[0]], match[BLUE_ROLES[1]])
    if scope == SIDE_SCOPE:
        return ("red", red), ("blue", blue)
    return red, blue
