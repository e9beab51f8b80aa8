"""
Rating-based fairness scoring.

Team strength is the geometric mean of the two ratings, so an uneven pair
rates below two average players with the same total. A game's tension is
the gap between the two team strengths and the fairness score of a schedule
is the sum of its tensions (lower is better).
"""

import math
from typing import Sequence

from .models import Match, Schedule


def team_strength(rating_x: float, rating_y: float) -> float:
    return math.sqrt(rating_x * rating_y)


def match_tension(match: Match, ratings: Sequence[float]) -> float:
    """Absolute strength gap between red and blue. Ratings are indexed by id - 1."""
    red = team_strength(ratings[match[0] - 1], ratings[match[1] - 1])
    blue = team_strength(ratings[match[2] - 1], ratings[match[3] - 1])
    return abs(red - blue)


def schedule_score(schedule: Schedule, ratings: Sequence[float]) -> float:
    total = 0.0
    for match in schedule:
        total += match_tension(match, ratings)
    return total
