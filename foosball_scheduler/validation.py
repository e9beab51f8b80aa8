"""
Structural validation of schedules.
"""

from typing import Dict, List, Optional

from .models import Schedule, Role, N_ROLES
from .teams import team_scope, team_fingerprints
from .exceptions import InternalInvariantViolation


def is_valid(schedule: Schedule, n_players: int, scope: Optional[str] = None) -> bool:
    """
    Check that a schedule satisfies every structural invariant.

    A schedule is valid when:
      (a) it has exactly ``n_players`` games,
      (b) every game has 4 distinct players,
      (c) each role column is a permutation of 1..n_players, and
      (d) no team fingerprint appears more than once across all games.

    Stops at the first failure and never mutates the schedule.
    """
    if len(schedule) != n_players:
        return False

    for match in schedule:
        if len(match) != N_ROLES or len(set(match)) != N_ROLES:
            return False

    expected = list(range(1, n_players + 1))
    for pos in range(N_ROLES):
        if sorted(match[pos] for match in schedule) != expected:
            return False

    if scope is None:
        scope = team_scope(n_players)
    seen = set()
    for match in schedule:
        red, blue = team_fingerprints(match, scope)
        if red in seen or blue in seen or red == blue:
            return False
        seen.add(red)
        seen.add(blue)

    return True


def find_violations(schedule: Schedule, n_players: int) -> Dict[str, List[str]]:
    """
    Report every invariant violation of a schedule.

    Args:
        schedule: Schedule to check
        n_players: Number of competitors

    Returns:
        Dict[str, List[str]]: Validation results
    """
    violations = {
        'errors': [],
        'warnings': []
    }

    if not schedule:
        violations['errors'].append("No games scheduled")
        return violations

    if len(schedule) != n_players:
        violations['errors'].append(
            f"Expected {n_players} games, found {len(schedule)}"
        )

    for game_no, match in enumerate(schedule, start=1):
        if len(match) != N_ROLES:
            violations['errors'].append(
                f"Game {game_no} has {len(match)} players instead of {N_ROLES}"
            )
        elif len(set(match)) != N_ROLES:
            violations['errors'].append(
                f"Game {game_no} has duplicate players: {list(match)}"
            )

    if violations['errors']:
        return violations

    expected = list(range(1, n_players + 1))
    for role in Role:
        column = sorted(match[role.index] for match in schedule)
        if column != expected:
            violations['errors'].append(
                f"Position {role.value} is not a valid permutation"
            )

    scope = team_scope(n_players)
    seen = {}
    for game_no, match in enumerate(schedule, start=1):
        red, blue = team_fingerprints(match, scope)
        for side, key, players in (("Red", red, match[0:2]), ("Blue", blue, match[2:4])):
            if key in seen:
                violations['errors'].append(
                    f"Game {game_no}: {side} team {players[0]}-{players[1]} "
                    f"already appeared in game {seen[key]}"
                )
            else:
                seen[key] = game_no

    return violations


def assert_valid(schedule: Schedule, n_players: int) -> None:
    """Raise InternalInvariantViolation unless the schedule is valid."""
    if is_valid(schedule, n_players):
        return

    errors = find_violations(schedule, n_players)['errors']
    detail = errors[0] if errors else "unknown violation"
    raise InternalInvariantViolation(f"Schedule failed validation: {detail}")
