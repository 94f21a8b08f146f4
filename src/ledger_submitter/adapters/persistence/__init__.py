from .memory_store import InMemoryTransactionStore

__all__ = ["InMemoryTransactionStore"]
