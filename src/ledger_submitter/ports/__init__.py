from .network import NetworkPort
from .persistence import TransactionStorePort

__all__ = [
    "NetworkPort",
    "TransactionStorePort",
]
