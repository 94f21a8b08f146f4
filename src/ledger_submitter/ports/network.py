from abc import ABC, abstractmethod
from typing import Any, Dict


class NetworkPort(ABC):
    """Ledger node abstraction.

    Both calls return the decoded JSON-RPC body, e.g. ``{"result": {...}}``.
    Timeouts and transport retries belong to the implementation.
    """

    @abstractmethod
    async def submit_transaction_blob(self, tx_blob: str) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        ...
