from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionState(Enum):
    PENDING = "PENDING"
    SUBMITTED = "SUBMITTED"
    CONFIRMED = "CONFIRMED"
    ERRORED = "ERRORED"


TransactionId = str  # Type alias for clarity


@dataclass(frozen=True)
class PendingTransaction:
    """A signed transaction awaiting submission or confirmation."""

    id: TransactionId
    tx_blob: str
    tx_hash: str
    sequence: Optional[int] = None  # informational; the blob is authoritative
    state: TransactionState = TransactionState.PENDING


@dataclass
class TransactionRecord:
    """Persisted view of a transaction, mutated only by the store."""

    transaction: PendingTransaction
    state: TransactionState = TransactionState.PENDING
    error_message: Optional[str] = None
    submitted_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    errored_at: Optional[datetime] = None
    last_update_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def id(self) -> TransactionId:
        return self.transaction.id

    @property
    def is_terminal(self) -> bool:
        return self.state in (TransactionState.CONFIRMED, TransactionState.ERRORED)

    def snapshot(self) -> PendingTransaction:
        """Transaction as handed to the submitter, tagged with its current state."""
        return PendingTransaction(
            id=self.transaction.id,
            tx_blob=self.transaction.tx_blob,
            tx_hash=self.transaction.tx_hash,
            sequence=self.transaction.sequence,
            state=self.state,
        )
