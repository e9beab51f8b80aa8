"""
Tests for input validation and the end-to-end scheduling call.
"""

import pytest

from foosball_scheduler.engine import validate_competitors, build_competitors, schedule
from foosball_scheduler.config import SchedulerConfig
from foosball_scheduler.models import Role, find_competitor
from foosball_scheduler.validation import is_valid
from foosball_scheduler.exceptions import InvalidInputError


def small_config(trials=200, workers=2):
    return SchedulerConfig(search={"trials": trials, "workers": workers})


def test_build_competitors_numbers_in_order():
    competitors = build_competitors([("Dubhe", 1500), ("Alcor", 1300), ("Mizar", 1250), ("Merak", 1100)])

    assert [c.id for c in competitors] == [1, 2, 3, 4]
    assert competitors[1].name == "Alcor"
    assert competitors[1].rating == 1300.0
    assert find_competitor(competitors, "Merak").id == 4
    assert find_competitor(competitors, "Polaris") is None


@pytest.mark.parametrize("pairs", [
    [],
    [("A", 1000)],
    [("A", 1000), ("B", 1000), ("C", 1000)],
])
def test_too_few_players(pairs):
    with pytest.raises(InvalidInputError, match="At least 4 players"):
        validate_competitors(pairs)


def test_bad_ratings():
    with pytest.raises(InvalidInputError, match="must be positive"):
        validate_competitors([("A", 1000), ("B", 0), ("C", 1000), ("D", 1000)])

    with pytest.raises(InvalidInputError, match="must be positive"):
        validate_competitors([("A", 1000), ("B", float("nan")), ("C", 1000), ("D", 1000)])

    with pytest.raises(InvalidInputError, match="Invalid rating"):
        validate_competitors([("A", 1000), ("B", "strong"), ("C", 1000), ("D", 1000)])


def test_duplicate_players():
    with pytest.raises(InvalidInputError, match="Duplicate player: B"):
        validate_competitors([("A", 1000), ("B", 1100), ("B", 1200), ("D", 1000)])


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        build_competitors([("A", 1000)])


def test_all_equal_ratings_score_zero():
    tournament = schedule(
        [("A", 1000), ("B", 1000), ("C", 1000), ("D", 1000)],
        small_config(trials=20),
    )

    assert tournament.score == 0.0
    assert len(tournament.schedule) == 4
    assert is_valid(tournament.schedule, 4)


def test_balanced_split_found():
    tournament = schedule(
        [("A", 2000), ("B", 1000), ("C", 2000), ("D", 1000)],
        small_config(trials=1_000),
    )

    assert tournament.score == 0.0
    df = tournament.to_dataframe()
    assert list(df.columns) == ['Game', 'RA', 'RD', 'BA', 'BD', 'Tension']
    assert (df['Tension'] == 0.0).all()


def test_every_player_plays_every_role():
    pairs = [(f"P{i}", 1000 + 37 * i) for i in range(1, 10)]
    tournament = schedule(pairs, small_config())

    for competitor in tournament.competitors:
        games = tournament.get_player_schedule(competitor.id)
        assert sorted(role.value for _, role in games) == sorted(r.value for r in Role)
        assert len({game_no for game_no, _ in games}) == 4

    stats = tournament.get_summary_stats()
    assert stats['total_games'] == 9
    assert stats['total_players'] == 9
    assert stats['trials'] == 200
    assert stats['score_distribution']['min'] == tournament.score
    assert stats['score_distribution']['count'] == 200


def test_schedule_is_reproducible():
    pairs = [(f"P{i}", 900 + 55 * i) for i in range(1, 8)]

    first = schedule(pairs, small_config())
    second = schedule(pairs, small_config())

    assert first.schedule == second.schedule
    assert first.score == second.score


def test_seed_changes_search():
    pairs = [(f"P{i}", 900 + 55 * i) for i in range(1, 8)]

    base = schedule(pairs, SchedulerConfig(search={"trials": 50, "workers": 1}))
    other = schedule(pairs, SchedulerConfig(search={"trials": 50, "workers": 1, "seed": 99}))

    assert base.result.scores != other.result.scores
