from .network import StellardRpcNetwork
from .persistence import InMemoryTransactionStore

__all__ = ["StellardRpcNetwork", "InMemoryTransactionStore"]
