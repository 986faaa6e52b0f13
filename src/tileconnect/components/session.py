"""Session resource describing score, countdown and lifecycle."""
from dataclasses import dataclass
from enum import Enum, auto

from tileconnect.constants import START_TIME_SECONDS


class SessionPhase(Enum):
    """Lifecycle of one timed game."""
    NOT_STARTED = auto()
    RUNNING = auto()
    OVER = auto()


@dataclass(slots=True)
class Session:
    """Singleton component storing the score, remaining seconds and phase."""
    score: int = 0
    time_remaining: int = START_TIME_SECONDS
    phase: SessionPhase = SessionPhase.NOT_STARTED
