"""Submit signed ledger transactions and reconcile their final outcome."""

from .application.services import (
    ErrorRouter,
    LedgerReconciler,
    SubmissionOrchestrator,
    classify,
)
from .domain import FatalError, ResignTransactionError, SigningIdentity, SubmissionError
from .domain.models import (
    BatchReport,
    ItemResult,
    OutcomeKind,
    PendingTransaction,
    RouteAction,
    SubmissionOutcome,
    TransactionState,
)

__version__ = "0.1.0"

__all__ = [
    "ErrorRouter",
    "LedgerReconciler",
    "SubmissionOrchestrator",
    "classify",
    "FatalError",
    "ResignTransactionError",
    "SigningIdentity",
    "SubmissionError",
    "BatchReport",
    "ItemResult",
    "OutcomeKind",
    "PendingTransaction",
    "RouteAction",
    "SubmissionOutcome",
    "TransactionState",
]
