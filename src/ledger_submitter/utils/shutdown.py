from __future__ import annotations

import asyncio
import signal
from typing import List, Optional

from loguru import logger

_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownSignal:
    """
    Stop request for the polling loop.

    SIGINT/SIGTERM are routed through the running event loop so a batch in
    flight always finishes and its store is saved before the loop exits.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._installed: List[signal.Signals] = []

    @property
    def stopping(self) -> bool:
        return self._event.is_set()

    def request_stop(self, reason: str = "requested") -> None:
        if not self._event.is_set():
            logger.info(f"SHUTDOWN | stop {reason}")
        self._event.set()

    async def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; True if a stop arrived meanwhile."""
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def install(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        loop = loop or asyncio.get_running_loop()
        for sig in _SIGNALS:
            try:
                loop.add_signal_handler(sig, self.request_stop, f"on {sig.name}")
            except (NotImplementedError, RuntimeError):
                # Windows loops, or not the main thread
                logger.debug(f"SHUTDOWN | no loop handler for {sig.name}")
                continue
            self._installed.append(sig)

    def uninstall(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        loop = loop or asyncio.get_running_loop()
        while self._installed:
            loop.remove_signal_handler(self._installed.pop())
