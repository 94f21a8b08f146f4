import asyncio
import signal
import sys

import pytest

from ledger_submitter.utils.shutdown import ShutdownSignal


@pytest.mark.anyio
async def test_wait_times_out_without_stop():
    stop = ShutdownSignal()
    assert await stop.wait(0.01) is False
    assert not stop.stopping


@pytest.mark.anyio
async def test_wait_returns_early_on_stop():
    stop = ShutdownSignal()
    asyncio.get_running_loop().call_later(0.01, stop.request_stop)
    assert await stop.wait(5) is True
    assert stop.stopping


@pytest.mark.skipif(sys.platform == "win32", reason="no loop signal handlers on Windows")
@pytest.mark.anyio
async def test_sigterm_requests_stop_through_the_loop():
    stop = ShutdownSignal()
    stop.install()
    try:
        signal.raise_signal(signal.SIGTERM)
        assert await stop.wait(1) is True
    finally:
        stop.uninstall()
