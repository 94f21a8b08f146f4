from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .transaction import PendingTransaction


class OutcomeKind(Enum):
    """
    Closed classification of what happened to a submission.

    Every network response maps to exactly one member; UNKNOWN_SUBMIT_ERROR
    is the explicit catch-all.
    """
    SUCCESS = "success"

    # The node already holds this exact transaction; it will land shortly.
    APPLYING_TRANSACTION = "applying_transaction"
    # Sequence already used: either this tx landed, or another one did.
    PAST_SEQUENCE_ERROR = "past_sequence_error"
    # Sequence ahead of the account; an earlier tx has not landed yet.
    PRE_SEQUENCE_ERROR = "pre_sequence_error"
    UNFUNDED_ERROR = "unfunded_error"
    DESTINATION_TAG_NEEDED = "destination_tag_needed"
    DESTINATION_UNFUNDED_ERROR = "destination_unfunded_error"
    UNKNOWN_SUBMIT_ERROR = "unknown_submit_error"

    LOCAL_TRANSACTION_ERROR = "local_transaction_error"
    MALFORMED_TRANSACTION_ERROR = "malformed_transaction_error"
    FAIL_TRANSACTION_ERROR = "fail_transaction_error"
    RETRY_TRANSACTION_ERROR = "retry_transaction_error"

    # Failed but consumed a fee and a sequence number.
    CLAIM_FEE_SUBMISSION_ERROR = "claim_fee_submission_error"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    FATAL_ERROR = "fatal_error"
    RESIGN_TRANSACTION = "resign_transaction"


RESIGN_KINDS = frozenset({
    OutcomeKind.LOCAL_TRANSACTION_ERROR,
    OutcomeKind.MALFORMED_TRANSACTION_ERROR,
    OutcomeKind.FAIL_TRANSACTION_ERROR,
    OutcomeKind.RETRY_TRANSACTION_ERROR,
})


@dataclass(frozen=True)
class SubmissionOutcome:
    """Tagged result of one submission attempt or ledger lookup."""
    kind: OutcomeKind
    message: Optional[str] = None
    code: Optional[int] = None
    engine_result: Optional[str] = None

    # Set on RESIGN_TRANSACTION only
    transaction: Optional[PendingTransaction] = None
    cause: Optional[OutcomeKind] = None

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def requires_resign(self) -> bool:
        return self.kind in RESIGN_KINDS or self.kind is OutcomeKind.RESIGN_TRANSACTION

    def describe(self) -> str:
        parts = [self.kind.value]
        if self.engine_result:
            parts.append(self.engine_result)
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.message:
            parts.append(self.message)
        return " | ".join(parts)


@dataclass(frozen=True)
class LedgerLookup:
    """Ledger inclusion status for a transaction hash."""
    outcome: SubmissionOutcome
    in_ledger: bool = False

    @property
    def confirmed(self) -> bool:
        return self.outcome.is_success and self.in_ledger


class RouteAction(Enum):
    SUBMITTED = "submitted"
    IGNORED = "ignored"
    CONFIRMED = "confirmed"
    RECORDED_ERROR = "recorded_error"
    RESIGN = "resign"
    PROPAGATED = "propagated"


@dataclass(frozen=True)
class RoutingDecision:
    action: RouteAction
    outcome: SubmissionOutcome

    @property
    def halts_batch(self) -> bool:
        return self.action in (RouteAction.RESIGN, RouteAction.PROPAGATED)
