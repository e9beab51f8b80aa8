"""
Tests for schedule validation.
"""

import pytest

from foosball_scheduler.validation import is_valid, find_violations, assert_valid
from foosball_scheduler.teams import GLOBAL_SCOPE
from foosball_scheduler.exceptions import InternalInvariantViolation


def test_valid_schedules(cyclic_five, balanced_four):
    assert is_valid(cyclic_five, 5)
    assert is_valid(balanced_four, 4)
    assert find_violations(cyclic_five, 5) == {'errors': [], 'warnings': []}
    assert_valid(balanced_four, 4)


def test_wrong_size(cyclic_five):
    assert not is_valid(cyclic_five[:4], 5)
    assert not is_valid(cyclic_five, 6)

    errors = find_violations(cyclic_five[:4], 5)['errors']
    assert "Expected 5 games, found 4" in errors


def test_empty_schedule():
    assert not is_valid([], 4)
    assert find_violations([], 4)['errors'] == ["No games scheduled"]


def test_duplicate_player_in_game(balanced_four):
    schedule = list(balanced_four)
    schedule[0] = (1, 1, 3, 4)

    assert not is_valid(schedule, 4)
    errors = find_violations(schedule, 4)['errors']
    assert errors == ["Game 1 has duplicate players: [1, 1, 3, 4]"]


def test_column_not_a_permutation(balanced_four):
    schedule = list(balanced_four)
    # Distinct players per game, but 4 plays RA twice and 1 never
    schedule[0] = (4, 2, 3, 1)

    assert not is_valid(schedule, 4)
    errors = find_violations(schedule, 4)['errors']
    assert "Position RA is not a valid permutation" in errors
    assert "Position BD is not a valid permutation" in errors


def test_repeated_team_on_same_side():
    schedule = [
        (1, 2, 3, 4),
        (2, 1, 4, 3),
        (3, 4, 1, 2),
        (4, 3, 2, 1),
    ]

    assert not is_valid(schedule, 4)
    errors = find_violations(schedule, 4)['errors']
    assert "Game 2: Red team 2-1 already appeared in game 1" in errors


def test_pair_repeated_across_sides(balanced_four):
    # 1+2 play red in game 1 and blue in game 2: fine with four players,
    # rejected whenever pairs must be unique schedule-wide
    assert is_valid(balanced_four, 4)
    assert not is_valid(balanced_four, 4, scope=GLOBAL_SCOPE)


def test_validation_does_not_mutate(cyclic_five):
    snapshot = [tuple(m) for m in cyclic_five]

    is_valid(cyclic_five, 5)
    find_violations(cyclic_five, 5)

    assert cyclic_five == snapshot


def test_assert_valid_raises(balanced_four):
    schedule = list(balanced_four)
    schedule[2] = (4, 4, 2, 3)

    with pytest.raises(InternalInvariantViolation, match="duplicate players"):
        assert_valid(schedule, 4)
