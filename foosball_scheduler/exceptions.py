"""
Error types raised by the foosball scheduler.
"""


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class InvalidInputError(SchedulerError, ValueError):
    """Competitors, ratings or search budgets that cannot be scheduled."""


class GenerationExhausted(SchedulerError):
    """The repair generator used up every restart without a valid schedule."""

    def __init__(self, n_players: int, restarts: int):
        self.n_players = n_players
        self.restarts = restarts
        super().__init__(
            f"No valid schedule for {n_players} players after {restarts} restarts"
        )


class InternalInvariantViolation(SchedulerError, AssertionError):
    """A schedule declared final failed validation. Indicates a bug, never retried."""
