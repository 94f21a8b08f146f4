from typing import Awaitable, Callable, Dict

from loguru import logger

from ...domain.models.outcome import (
    OutcomeKind,
    RouteAction,
    RoutingDecision,
    SubmissionOutcome,
)
from ...domain.models.transaction import PendingTransaction
from ...ports.persistence import TransactionStorePort
from .ledger_reconciler import LedgerReconciler

Handler = Callable[[SubmissionOutcome, PendingTransaction], Awaitable[RoutingDecision]]


class ErrorRouter:
    """
    Decides the side effect of a classified submission error.

    Resolvable conditions are absorbed into the store; resign-requiring ones
    are recorded and escalated as a RESIGN_TRANSACTION outcome; everything
    else is propagated to the caller untouched. FatalError raised by the
    reconciler is never caught here.
    """

    def __init__(self, store: TransactionStorePort, reconciler: LedgerReconciler):
        self.store = store
        self.reconciler = reconciler
        self._routes: Dict[OutcomeKind, Handler] = {
            OutcomeKind.APPLYING_TRANSACTION: self._ignore,
            OutcomeKind.PAST_SEQUENCE_ERROR: self._reconcile,
            OutcomeKind.CLAIM_FEE_SUBMISSION_ERROR: self._record_error,
            OutcomeKind.LOCAL_TRANSACTION_ERROR: self._record_and_resign,
            OutcomeKind.MALFORMED_TRANSACTION_ERROR: self._record_and_resign,
            OutcomeKind.FAIL_TRANSACTION_ERROR: self._record_and_resign,
            OutcomeKind.RETRY_TRANSACTION_ERROR: self._record_and_resign,
            OutcomeKind.PRE_SEQUENCE_ERROR: self._propagate,
            OutcomeKind.UNFUNDED_ERROR: self._propagate,
            OutcomeKind.DESTINATION_TAG_NEEDED: self._propagate,
            OutcomeKind.DESTINATION_UNFUNDED_ERROR: self._propagate,
            OutcomeKind.UNKNOWN_SUBMIT_ERROR: self._propagate,
            OutcomeKind.TRANSACTION_NOT_FOUND: self._propagate,
            OutcomeKind.FATAL_ERROR: self._propagate,
            OutcomeKind.RESIGN_TRANSACTION: self._propagate,
        }

    def routes(self) -> Dict[OutcomeKind, Handler]:
        return dict(self._routes)

    async def route(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        if outcome.is_success:
            raise ValueError("success outcomes are handled by the orchestrator, not routed")
        handler = self._routes.get(outcome.kind)
        if handler is None:
            raise ValueError(f"no route for outcome kind {outcome.kind}")
        return await handler(outcome, transaction)

    async def _ignore(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        # Node already queued this exact tx; it will be picked up next poll.
        logger.info(f"TX_APPLYING | id={transaction.id} | hash={transaction.tx_hash}")
        return RoutingDecision(action=RouteAction.IGNORED, outcome=outcome)

    async def _reconcile(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        """tefPAST_SEQ: find out whether this tx or a different one used the sequence."""
        lookup = await self.reconciler.is_in_ledger(transaction.tx_hash)

        if lookup.confirmed:
            await self.store.mark_transaction_confirmed(transaction)
            logger.info(f"PAST_SEQ_CONFIRMED | id={transaction.id} | hash={transaction.tx_hash}")
            return RoutingDecision(action=RouteAction.CONFIRMED, outcome=lookup.outcome)

        if lookup.outcome.kind is OutcomeKind.CLAIM_FEE_SUBMISSION_ERROR:
            # Sequence consumed; mark submitted+errored so it is never picked up again.
            await self.store.mark_transaction_submitted(transaction.id)
            await self.store.mark_transaction_error(transaction, lookup.outcome.message or "")
            logger.warning(
                f"PAST_SEQ_CLAIMED_FEE | id={transaction.id} | result={lookup.outcome.message}"
            )
            return RoutingDecision(action=RouteAction.RECORDED_ERROR, outcome=lookup.outcome)

        # Not found, or found but not yet in a closed ledger: another tx holds the slot.
        logger.warning(
            f"PAST_SEQ_UNRESOLVED | id={transaction.id} | hash={transaction.tx_hash} | "
            f"lookup={lookup.outcome.kind.value}"
        )
        return RoutingDecision(
            action=RouteAction.PROPAGATED,
            outcome=SubmissionOutcome(
                kind=OutcomeKind.PAST_SEQUENCE_ERROR,
                code=outcome.code,
                engine_result=outcome.engine_result,
                message=lookup.outcome.message,
            ),
        )

    async def _record_error(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        await self.store.mark_transaction_error(transaction, outcome.message or "")
        logger.warning(f"TX_CLAIMED_FEE | id={transaction.id} | {outcome.message}")
        return RoutingDecision(action=RouteAction.RECORDED_ERROR, outcome=outcome)

    async def _record_and_resign(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        await self.store.mark_transaction_error(transaction, outcome.message or "")
        logger.warning(
            f"TX_RESIGN_REQUIRED | id={transaction.id} | cause={outcome.kind.value} | {outcome.message}"
        )
        return RoutingDecision(
            action=RouteAction.RESIGN,
            outcome=SubmissionOutcome(
                kind=OutcomeKind.RESIGN_TRANSACTION,
                message=outcome.message,
                code=outcome.code,
                engine_result=outcome.engine_result,
                transaction=transaction,
                cause=outcome.kind,
            ),
        )

    async def _propagate(self, outcome: SubmissionOutcome, transaction: PendingTransaction) -> RoutingDecision:
        logger.warning(f"TX_PROPAGATE | id={transaction.id} | {outcome.describe()}")
        return RoutingDecision(action=RouteAction.PROPAGATED, outcome=outcome)
