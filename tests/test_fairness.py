"""
Tests for team keys and fairness scoring.
"""

import math

from foosball_scheduler.teams import (
    canonical_pair, team_scope, team_fingerprints, GLOBAL_SCOPE, SIDE_SCOPE,
)
from foosball_scheduler.fairness import team_strength, match_tension, schedule_score


def test_canonical_pair_is_order_independent():
    assert canonical_pair(3, 7) == (3, 7)
    assert canonical_pair(7, 3) == (3, 7)
    assert canonical_pair(5, 5) == (5, 5)


def test_team_scope():
    assert team_scope(4) == SIDE_SCOPE
    assert team_scope(5) == GLOBAL_SCOPE
    assert team_scope(37) == GLOBAL_SCOPE


def test_team_fingerprints():
    assert team_fingerprints((4, 1, 3, 2), GLOBAL_SCOPE) == ((1, 4), (2, 3))
    assert team_fingerprints((4, 1, 3, 2), SIDE_SCOPE) == (("red", (1, 4)), ("blue", (2, 3)))


def test_team_strength_is_geometric_mean():
    assert team_strength(1000, 1000) == 1000.0
    assert team_strength(400, 900) == 600.0
    # Lopsided pairs are weaker than the arithmetic mean suggests
    assert team_strength(1900, 100) < team_strength(1000, 1000)


def test_match_tension():
    ratings = [1600.0, 900.0, 1000.0, 1000.0]
    # Red: sqrt(1600 * 900) = 1200, Blue: 1000
    assert math.isclose(match_tension((1, 2, 3, 4), ratings), 200.0)
    assert math.isclose(match_tension((3, 4, 1, 2), ratings), 200.0)


def test_equal_ratings_score_zero(balanced_four):
    ratings = [1000.0] * 4
    assert schedule_score(balanced_four, ratings) == 0.0


def test_balanced_split_scores_zero(balanced_four):
    ratings = [2000.0, 1000.0, 2000.0, 1000.0]
    assert schedule_score(balanced_four, ratings) == 0.0


def test_schedule_score_is_deterministic(cyclic_five):
    ratings = [1500.0, 1320.5, 1710.0, 1105.25, 1640.0]

    first = schedule_score(cyclic_five, ratings)
    second = schedule_score(list(cyclic_five), list(ratings))

    assert first == second
    assert first == sum(match_tension(m, ratings) for m in cyclic_five)
    assert first > 0
