from typing import Optional

from .models.outcome import SubmissionOutcome
from .models.transaction import PendingTransaction


class SubmitterError(Exception):
    """Base class for submitter failures."""

    def __init__(self, message: str = "", outcome: Optional[SubmissionOutcome] = None):
        super().__init__(message or (outcome.describe() if outcome else ""))
        self.outcome = outcome


class FatalError(SubmitterError):
    """Processing must stop and an operator must be alerted."""


class SubmissionError(SubmitterError):
    """A submission outcome the submitter could not resolve on its own."""


class ResignTransactionError(SubmissionError):
    """The transaction must be rebuilt with a fresh sequence number and resubmitted."""

    def __init__(self, transaction: PendingTransaction, outcome: Optional[SubmissionOutcome] = None):
        super().__init__(f"transaction {transaction.id} requires resign", outcome)
        self.transaction = transaction


class NetworkProtocolError(SubmitterError):
    """The network returned a body that is not a JSON-RPC response object."""


class InvalidTransition(Exception):
    """Raised when an invalid transaction state transition is attempted."""


class ConfigError(ValueError):
    """Raised when submitter configuration is missing or invalid."""
