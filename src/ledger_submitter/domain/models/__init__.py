from .transaction import PendingTransaction, TransactionRecord, TransactionState, TransactionId
from .outcome import (
    LedgerLookup,
    OutcomeKind,
    RESIGN_KINDS,
    RouteAction,
    RoutingDecision,
    SubmissionOutcome,
)
from .report import BatchReport, ItemResult
from . import result_codes

__all__ = [
    "PendingTransaction",
    "TransactionRecord",
    "TransactionState",
    "TransactionId",
    "LedgerLookup",
    "OutcomeKind",
    "RESIGN_KINDS",
    "RouteAction",
    "RoutingDecision",
    "SubmissionOutcome",
    "BatchReport",
    "ItemResult",
    "result_codes",
]
