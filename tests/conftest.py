from typing import Any, Dict, List, Tuple

import pytest

from ledger_submitter.adapters.persistence.memory_store import InMemoryTransactionStore
from ledger_submitter.domain.config_types import SigningIdentity
from ledger_submitter.domain.models.transaction import PendingTransaction
from ledger_submitter.ports.network import NetworkPort


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeNetwork(NetworkPort):
    """Scripted node: submit responses keyed by blob, tx responses keyed by hash."""

    def __init__(self):
        self.submit_responses: Dict[str, Any] = {}
        self.tx_responses: Dict[str, Any] = {}
        self.submitted: List[str] = []
        self.looked_up: List[str] = []

    async def submit_transaction_blob(self, tx_blob: str) -> Dict[str, Any]:
        self.submitted.append(tx_blob)
        return self.submit_responses[tx_blob]

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        self.looked_up.append(tx_hash)
        return self.tx_responses[tx_hash]


class RecordingStore(InMemoryTransactionStore):
    """In-memory store that also records every write, in order."""

    def __init__(self, transactions=None):
        super().__init__(transactions)
        self.calls: List[Tuple[str, str]] = []

    async def mark_transaction_submitted(self, transaction_id):
        self.calls.append(("submitted", transaction_id))
        await super().mark_transaction_submitted(transaction_id)

    async def mark_transaction_confirmed(self, transaction):
        self.calls.append(("confirmed", transaction.id))
        await super().mark_transaction_confirmed(transaction)

    async def mark_transaction_error(self, transaction, message):
        self.calls.append(("error", transaction.id))
        await super().mark_transaction_error(transaction, message)

    def errors_for(self, transaction_id: str) -> int:
        return sum(1 for op, tx_id in self.calls if op == "error" and tx_id == transaction_id)


@pytest.fixture
def network() -> FakeNetwork:
    return FakeNetwork()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def identity() -> SigningIdentity:
    return SigningIdentity(address="gM4Fpv2QuHY4knJsQyYGKEHFGw3eMBwc1U", secret="s3q5ZGX2ToGgkHMyZQtf5t1pTmmKp")


@pytest.fixture
def make_tx():
    def _make(n: int, state=None) -> PendingTransaction:
        kwargs = {"state": state} if state is not None else {}
        return PendingTransaction(
            id=f"tx-{n}",
            tx_blob=f"BLOB{n:04d}",
            tx_hash=f"{n:064X}",
            sequence=n,
            **kwargs,
        )

    return _make
