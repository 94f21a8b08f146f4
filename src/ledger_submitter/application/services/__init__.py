from .error_router import ErrorRouter
from .ledger_reconciler import LedgerReconciler
from .response_classifier import classify, classify_code
from .submission_orchestrator import SubmissionOrchestrator
from .transaction_state_machine import TransactionStateMachine

__all__ = [
    "ErrorRouter",
    "LedgerReconciler",
    "classify",
    "classify_code",
    "SubmissionOrchestrator",
    "TransactionStateMachine",
]
