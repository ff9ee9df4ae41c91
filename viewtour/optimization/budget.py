"""
Wall-clock time budget passed explicitly into the builder.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import time


@dataclass
class TimeBudget:
    """
    A deadline measured from construction time.

    Attributes:
        seconds: Budget in seconds, None for unlimited
        clock: Monotonic clock function (injectable for tests)

    Example:
        >>> budget = TimeBudget(30.0)
        >>> budget.expired()
        False
    """
    seconds: Optional[float] = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    started_at: float = field(init=False)

    def __post_init__(self):
        if self.seconds is not None and self.seconds < 0:
            raise ValueError(f"time budget must be >= 0, got {self.seconds}")
        self.started_at = self.clock()

    @classmethod
    def unlimited(cls) -> "TimeBudget":
        return cls(None)

    def elapsed(self) -> float:
        return self.clock() - self.started_at

    def remaining(self) -> Optional[float]:
        if self.seconds is None:
            return None
        return max(0.0, self.seconds - self.elapsed())

    def expired(self) -> bool:
        if self.seconds is None:
            return False
        return self.elapsed() >= self.seconds
