from abc import ABC, abstractmethod
from typing import Sequence

from ..domain.models.transaction import PendingTransaction, TransactionId


class TransactionStorePort(ABC):
    """Persistence contract for signed transactions."""

    @abstractmethod
    async def get_signed_unconfirmed_transactions(self) -> Sequence[PendingTransaction]:
        """Signed transactions not yet confirmed or errored, in submission order."""

    @abstractmethod
    async def mark_transaction_submitted(self, transaction_id: TransactionId) -> None:
        ...

    @abstractmethod
    async def mark_transaction_confirmed(self, transaction: PendingTransaction) -> None:
        ...

    @abstractmethod
    async def mark_transaction_error(self, transaction: PendingTransaction, message: str) -> None:
        ...
