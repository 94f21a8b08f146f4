from datetime import datetime
from typing import Dict, List

from ...domain.errors import InvalidTransition
from ...domain.models.transaction import TransactionId, TransactionRecord, TransactionState


class TransactionStateMachine:
    """Tracks transaction lifecycle with explicit, monotonic transition rules."""

    def __init__(self):
        self.records: Dict[TransactionId, TransactionRecord] = {}
        self._transitions = {
            TransactionState.PENDING: {
                TransactionState.SUBMITTED,
                TransactionState.CONFIRMED,
                TransactionState.ERRORED,
            },
            TransactionState.SUBMITTED: {TransactionState.CONFIRMED, TransactionState.ERRORED},
        }

    def add_record(self, record: TransactionRecord):
        """Add record to tracking."""
        self.records[record.id] = record

    def get(self, transaction_id: TransactionId) -> TransactionRecord:
        record = self.records.get(transaction_id)
        if record is None:
            raise KeyError(f"unknown transaction {transaction_id}")
        return record

    def in_state(self, *states: TransactionState) -> List[TransactionRecord]:
        return [r for r in self.records.values() if r.state in states]

    def can_transition(self, transaction_id: TransactionId, to_state: TransactionState) -> bool:
        record = self.records.get(transaction_id)
        if not record:
            return False
        valid_next = self._transitions.get(record.state, set())
        return to_state in valid_next

    def transition(self, transaction_id: TransactionId, to_state: TransactionState) -> TransactionRecord:
        """Execute state transition."""
        if not self.can_transition(transaction_id, to_state):
            record = self.records.get(transaction_id)
            current = record.state if record else "UNKNOWN"
            raise InvalidTransition(f"{current} -> {to_state}")

        record = self.records[transaction_id]
        now = datetime.utcnow()
        record.state = to_state
        record.last_update_at = now
        if to_state == TransactionState.SUBMITTED:
            record.submitted_at = now
        elif to_state == TransactionState.CONFIRMED:
            record.confirmed_at = now
        elif to_state == TransactionState.ERRORED:
            record.errored_at = now
        return record
