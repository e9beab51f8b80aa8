"""
Data models for the foosball scheduler.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Tuple, Optional, Any
import numpy as np
import pandas as pd


# A match lists one competitor id per role, in Role order.
Match = Tuple[int, int, int, int]
Schedule = List[Match]

N_ROLES = 4


class Role(Enum):
    """Table positions, in match column order."""
    RED_ATTACKER = "RA"
    RED_DEFENDER = "RD"
    BLUE_ATTACKER = "BA"
    BLUE_DEFENDER = "BD"

    @property
    def index(self) -> int:
        """Column of this role inside a match."""
        return list(Role).index(self)


# Column indices of the two roles making up each team.
RED_ROLES = (0, 1)
BLUE_ROLES = (2, 3)


@dataclass(frozen=True)
class Competitor:
    """A player entered in the tournament."""
    id: int
    name: str
    rating: float


@dataclass
class OptimizationResult:
    """Outcome of a parallel search."""
    schedule: Schedule
    score: float
    scores: List[float] = field(default_factory=list)
    workers: int = 1
    trials: int = 0

    def summary(self) -> Dict[str, float]:
        """Summary statistics of every sampled score."""
        if not self.scores:
            return {}

        values = np.asarray(self.scores, dtype=float)
        return {
            'count': int(values.size),
            'min': float(values.min()),
            'max': float(values.max()),
            'median': float(np.median(values)),
            'mean': float(values.mean()),
        }


@dataclass
class Tournament:
    """An optimised schedule together with the players it refers to."""
    competitors: List[Competitor]
    result: OptimizationResult

    @property
    def ratings(self) -> List[float]:
        """Ratings indexed by competitor id - 1."""
        return [c.rating for c in self.competitors]

    @property
    def schedule(self) -> Schedule:
        return self.result.schedule

    @property
    def score(self) -> float:
        return self.result.score

    def name_of(self, competitor_id: int) -> str:
        """Resolve a competitor id to its name."""
        return self.competitors[competitor_id - 1].name

    def get_player_schedule(self, competitor_id: int) -> List[Tuple[int, Role]]:
        """Get (game number, role) for every game a player takes part in."""
        games = []
        for game_no, match in enumerate(self.schedule, start=1):
            for role in Role:
                if match[role.index] == competitor_id:
                    games.append((game_no, role))
        return games

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the schedule to a pandas DataFrame, one row per game."""
        from .fairness import match_tension

        if not self.schedule:
            return pd.DataFrame()

        ratings = self.ratings
        data = []
        for game_no, match in enumerate(self.schedule, start=1):
            row: Dict[str, Any] = {'Game': game_no}
            for role in Role:
                row[role.value] = self.name_of(match[role.index])
            row['Tension'] = match_tension(match, ratings)
            data.append(row)

        return pd.DataFrame(data)

    def get_summary_stats(self) -> Dict[str, Any]:
        """Get summary statistics for the tournament."""
        stats: Dict[str, Any] = {
            'total_games': len(self.schedule),
            'total_players': len(self.competitors),
            'fairness_score': self.score,
            'workers': self.result.workers,
            'trials': self.result.trials,
        }
        distribution = self.result.summary()
        if distribution:
            stats['score_distribution'] = distribution
        return stats


def find_competitor(competitors: List[Competitor], name: str) -> Optional[Competitor]:
    """Look a competitor up by name."""
    for competitor in competitors:
        if competitor.name == name:
            return competitor
    return None
