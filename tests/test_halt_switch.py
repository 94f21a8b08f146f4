import pytest

from ledger_submitter.domain.errors import FatalError
from ledger_submitter.domain.safety.halt_switch import HaltSwitch


def test_check_passes_until_triggered():
    halt = HaltSwitch()
    halt.check()
    assert not halt.triggered
    assert halt.triggered_at is None


def test_first_reason_wins_while_latched():
    halt = HaltSwitch()
    halt.trigger("lookup failed for AAAA")
    halt.trigger("lookup failed for BBBB")

    assert halt.reason == "lookup failed for AAAA"
    assert halt.trips == 2
    with pytest.raises(FatalError) as excinfo:
        halt.check()
    assert "lookup failed for AAAA" in str(excinfo.value)


def test_reset_clears_latch():
    halt = HaltSwitch()
    halt.trigger("boom")
    halt.reset()

    halt.check()
    assert halt.reason == ""
    assert halt.trips == 0
    assert halt.triggered_at is None
