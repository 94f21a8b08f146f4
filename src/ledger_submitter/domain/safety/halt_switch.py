from datetime import datetime
from typing import Optional

from loguru import logger

from ..errors import FatalError


class HaltSwitch:
    """
    Latches after a fatal condition; submission stays halted until reset.

    The first reason wins: later trips while latched only bump ``trips`` so the
    operator sees the root cause rather than its echoes.
    """

    def __init__(self):
        self.triggered = False
        self.reason = ""
        self.triggered_at: Optional[datetime] = None
        self.trips = 0

    def check(self) -> None:
        """Raise FatalError while latched."""
        if self.triggered:
            raise FatalError(f"submission halted since {self.triggered_at:%Y-%m-%dT%H:%M:%S}: {self.reason}")

    def trigger(self, reason: str):
        self.trips += 1
        if self.triggered:
            return
        self.triggered = True
        self.reason = reason
        self.triggered_at = datetime.utcnow()
        logger.error(f"HALT | triggered | {reason}")

    def reset(self):
        """Manual reset required after trigger."""
        if self.triggered:
            logger.warning(f"HALT | reset | was: {self.reason} | trips={self.trips}")
        self.triggered = False
        self.reason = ""
        self.triggered_at = None
        self.trips = 0
