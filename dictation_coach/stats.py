"""Aggregate statistics across scored attempts."""

from dataclasses import dataclass

from .scoring import round_half_up


@dataclass
class SessionStats:
    """Running totals for a practice session.

    The average is updated incrementally and rounded on every update, so it
    can drift from the exact mean of all scores. Displays built on earlier
    numbers rely on that behavior.
    """

    total_sessions: int = 0
    average_score: int = 0
    total_time: int = 0  # coarse counter, one tick per attempt

    def record(self, score: int) -> None:
        """Fold one completed attempt into the totals."""
        previous = self.total_sessions
        self.average_score = round_half_up(
            (self.average_score * previous + score) / (previous + 1)
        )
        self.total_sessions = previous + 1
        self.total_time += 1
