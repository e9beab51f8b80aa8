"""
Foosball Scheduler - fair four-position tournament schedules by parallel random search.
"""

__version__ = "0.1.0"

from .config import SchedulerConfig
from .models import Role, Competitor, Match, Schedule, OptimizationResult, Tournament
from .exceptions import (
    SchedulerError,
    InvalidInputError,
    GenerationExhausted,
    InternalInvariantViolation,
)
from .teams import canonical_pair
from .fairness import team_strength, match_tension, schedule_score
from .validation import is_valid, find_violations, assert_valid
from .generator import generate, generate_fallback
from .optimizer import optimize
from .engine import schedule
from .export import write_table_csv, write_excel

__all__ = [
    "SchedulerConfig",
    "Role",
    "Competitor",
    "Match",
    "Schedule",
    "OptimizationResult",
    "Tournament",
    "SchedulerError",
    "InvalidInputError",
    "GenerationExhausted",
    "InternalInvariantViolation",
    "canonical_pair",
    "team_strength",
    "match_tension",
    "schedule_score",
    "is_valid",
    "find_violations",
    "assert_valid",
    "generate",
    "generate_fallback",
    "optimize",
    "schedule",
    "write_table_csv",
    "write_excel",
]
