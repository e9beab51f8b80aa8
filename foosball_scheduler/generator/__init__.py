"""
Candidate schedule generation.
"""

from .pools import RolePools
from .repair import ScheduleGenerator, GenerationState, GenerationStats, generate
from .fallback import generate_fallback

__all__ = [
    "RolePools",
    "ScheduleGenerator",
    "GenerationState",
    "GenerationStats",
    "generate",
    "generate_fallback",
]
