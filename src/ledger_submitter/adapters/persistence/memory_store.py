import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from loguru import logger

from ...application.services.transaction_state_machine import TransactionStateMachine
from ...domain.models.transaction import (
    PendingTransaction,
    TransactionId,
    TransactionRecord,
    TransactionState,
)
from ...ports.persistence import TransactionStorePort


class InMemoryTransactionStore(TransactionStorePort):
    """Insertion-ordered transaction store backed by the state machine."""

    def __init__(self, transactions: Optional[Iterable[PendingTransaction]] = None):
        self.fsm = TransactionStateMachine()
        for transaction in transactions or ():
            self.add(transaction)

    def add(self, transaction: PendingTransaction) -> TransactionRecord:
        if transaction.id in self.fsm.records:
            raise ValueError(f"duplicate transaction id {transaction.id}")
        record = TransactionRecord(transaction=transaction, state=transaction.state)
        self.fsm.add_record(record)
        return record

    def get_record(self, transaction_id: TransactionId) -> TransactionRecord:
        return self.fsm.get(transaction_id)

    async def get_signed_unconfirmed_transactions(self) -> Sequence[PendingTransaction]:
        records = self.fsm.in_state(TransactionState.PENDING, TransactionState.SUBMITTED)
        return [r.snapshot() for r in records]

    async def mark_transaction_submitted(self, transaction_id: TransactionId) -> None:
        record = self.fsm.get(transaction_id)
        if record.state == TransactionState.SUBMITTED:
            # Resubmitted each poll until confirmed.
            return
        self.fsm.transition(transaction_id, TransactionState.SUBMITTED)
        logger.debug(f"STORE | submitted | id={transaction_id}")

    async def mark_transaction_confirmed(self, transaction: PendingTransaction) -> None:
        self.fsm.transition(transaction.id, TransactionState.CONFIRMED)
        logger.debug(f"STORE | confirmed | id={transaction.id}")

    async def mark_transaction_error(self, transaction: PendingTransaction, message: str) -> None:
        record = self.fsm.transition(transaction.id, TransactionState.ERRORED)
        record.error_message = message
        logger.debug(f"STORE | errored | id={transaction.id} | {message}")

    # ------------------------------------------------------------------
    # JSON round-trip for the CLI
    # ------------------------------------------------------------------

    @classmethod
    def from_json(cls, text: str) -> "InMemoryTransactionStore":
        data = json.loads(text) if text.strip() else {"transactions": []}
        store = cls()
        for entry in data.get("transactions", []):
            record = store.add(
                PendingTransaction(
                    id=str(entry["id"]),
                    tx_blob=entry["tx_blob"],
                    tx_hash=entry["tx_hash"],
                    sequence=entry.get("sequence"),
                    state=TransactionState(entry.get("state", TransactionState.PENDING.value)),
                )
            )
            record.error_message = entry.get("error_message")
        return store

    def to_json(self) -> str:
        entries: List[Dict[str, Any]] = []
        for record in self.fsm.records.values():
            tx = record.transaction
            entries.append(
                {
                    "id": tx.id,
                    "tx_blob": tx.tx_blob,
                    "tx_hash": tx.tx_hash,
                    "sequence": tx.sequence,
                    "state": record.state.value,
                    "error_message": record.error_message,
                }
            )
        return json.dumps({"transactions": entries}, indent=2)
