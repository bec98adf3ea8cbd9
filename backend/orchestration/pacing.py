"""
Reading-time pacing between participant turns.
"""

from dataclasses import dataclass

from core.settings import Settings


@dataclass(frozen=True)
class PacingPolicy:
    """
    Delays (in seconds) applied by the orchestrator.

    Attributes:
        per_char: Reading time per character of a delivered reply
        min_delay: Lower bound for the reading time
        max_delay: Upper bound for the reading time
        failure_delay: Fixed pause after a failed turn
        continue_delay: Pause before an auto-continue sweep starts
    """

    per_char: float = 0.01
    min_delay: float = 1.0
    max_delay: float = 3.0
    failure_delay: float = 1.5
    continue_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "PacingPolicy":
        return cls(
            per_char=settings.reading_delay_per_char,
            min_delay=settings.min_reading_delay,
            max_delay=settings.max_reading_delay,
            failure_delay=settings.failure_delay,
            continue_delay=settings.continue_delay,
        )

    @classmethod
    def immediate(cls) -> "PacingPolicy":
        """No pauses at all (tests, batch runs)."""
        return cls(per_char=0.0, min_delay=0.0, max_delay=0.0, failure_delay=0.0, continue_delay=0.0)

    def reading_delay(self, text: str) -> float:
        """clamp(len(text) * per_char, min_delay, max_delay)"""
        return min(max(len(text) * self.per_char, self.min_delay), self.max_delay)
