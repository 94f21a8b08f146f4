from hypothesis import given, strategies as st

from ledger_submitter.application.services.transaction_state_machine import TransactionStateMachine
from ledger_submitter.domain.errors import InvalidTransition
from ledger_submitter.domain.models.transaction import (
    PendingTransaction,
    TransactionRecord,
    TransactionState,
)


def make_record(status: TransactionState) -> TransactionRecord:
    tx = PendingTransaction(id="tx-1", tx_blob="BLOB", tx_hash="F" * 64, sequence=7)
    return TransactionRecord(transaction=tx, state=status)


@given(
    current=st.sampled_from(list(TransactionState)),
    target=st.sampled_from(list(TransactionState)),
)
def test_transaction_fsm_transitions(current, target):
    fsm = TransactionStateMachine()
    record = make_record(current)
    fsm.add_record(record)

    can = fsm.can_transition(record.id, target)
    if can:
        updated = fsm.transition(record.id, target)
        assert updated.state == target
    else:
        try:
            fsm.transition(record.id, target)
        except InvalidTransition:
            assert record.state == current
        else:
            assert False, f"Transition {current}->{target} should be invalid"


@given(path=st.lists(st.sampled_from(list(TransactionState)), max_size=6))
def test_transitions_are_monotonic(path):
    fsm = TransactionStateMachine()
    record = make_record(TransactionState.PENDING)
    fsm.add_record(record)
    seen = [record.state]

    for target in path:
        if fsm.can_transition(record.id, target):
            fsm.transition(record.id, target)
            seen.append(record.state)

    # never returns to PENDING, and nothing follows a terminal state
    assert TransactionState.PENDING not in seen[1:]
    terminal = {TransactionState.CONFIRMED, TransactionState.ERRORED}
    for i, state in enumerate(seen):
        if state in terminal:
            assert i == len(seen) - 1


def test_only_pending_enters_submitted():
    fsm = TransactionStateMachine()
    for state in TransactionState:
        record = make_record(state)
        fsm.add_record(record)
        assert fsm.can_transition(record.id, TransactionState.SUBMITTED) is (state == TransactionState.PENDING)


def test_unknown_transaction_cannot_transition():
    fsm = TransactionStateMachine()
    assert not fsm.can_transition("missing", TransactionState.SUBMITTED)
