from .lifecycle import LifecycleResult, TransactionLifecycleService
from .store import TransactionStore

__all__ = [
    "LifecycleResult",
    "TransactionLifecycleService",
    "TransactionStore",
]
