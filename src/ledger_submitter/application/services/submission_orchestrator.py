"""
submission_orchestrator.py - Submit signed, unconfirmed transactions and settle their state

Each pending transaction is submitted and fully resolved (including any
ledger lookup) before the next one starts. Transactions for one account
carry increasing sequence numbers, so a conflict on one item must be settled
before later items are attempted.

Usage:
    orchestrator = SubmissionOrchestrator(identity, store, network)
    report = await orchestrator.submit_pending()

    if report.halted_on and report.halted_on.action == RouteAction.RESIGN:
        rebuild(report.halted_on.outcome.transaction)
"""

from typing import Optional

from loguru import logger

from ...domain.config_types import SigningIdentity
from ...domain.errors import FatalError
from ...domain.models.outcome import OutcomeKind, RouteAction, RoutingDecision, SubmissionOutcome
from ...domain.models.report import BatchReport, ItemResult
from ...domain.models.transaction import PendingTransaction
from ...domain.safety.halt_switch import HaltSwitch
from ...ports.network import NetworkPort
from ...ports.persistence import TransactionStorePort
from .error_router import ErrorRouter
from .ledger_reconciler import LedgerReconciler
from .response_classifier import classify


class SubmissionOrchestrator:
    """Submits pending transactions in order and routes every outcome."""

    def __init__(
        self,
        identity: SigningIdentity,
        store: TransactionStorePort,
        network: NetworkPort,
        *,
        legacy_fail_band: bool = False,
        halt_switch: Optional[HaltSwitch] = None,
    ):
        self.identity = identity
        self.store = store
        self.network = network
        self.legacy_fail_band = legacy_fail_band
        self.halt_switch = halt_switch or HaltSwitch()
        self.reconciler = LedgerReconciler(network)
        self.router = ErrorRouter(store, self.reconciler)

        logger.info(
            f"SUBMITTER | init | account={identity.short_address} | legacy_fail_band={legacy_fail_band}"
        )

    async def submit_pending(self) -> BatchReport:
        """
        Process the current batch of signed, unconfirmed transactions.

        Stops at the first item that needs a resign or whose outcome must be
        handled by the caller; that item is reported as ``halted_on``.

        Raises:
            FatalError: the network reported an unrecoverable condition, or the
                halt switch was already triggered. The halt switch stays
                triggered until an operator resets it.
        """
        self.halt_switch.check()

        transactions = list(await self.store.get_signed_unconfirmed_transactions())
        report = BatchReport(pending_count=len(transactions))
        logger.info(f"BATCH_START | account={self.identity.short_address} | pending={len(transactions)}")

        for transaction in transactions:
            item = await self.submit_transaction(transaction)
            report.results.append(item)
            if item.decision.halts_batch:
                report.halted_on = item
                logger.warning(
                    f"BATCH_HALTED | id={transaction.id} | action={item.action.value} | "
                    f"{item.outcome.describe()}"
                )
                break

        summary = ", ".join(f"{action.value}={n}" for action, n in report.counts().items())
        logger.info(f"BATCH_DONE | processed={len(report.results)}/{len(transactions)} | {summary or 'empty'}")
        return report

    async def submit_transaction(self, transaction: PendingTransaction) -> ItemResult:
        """Submit one transaction and settle its outcome."""
        try:
            response = await self.network.submit_transaction_blob(transaction.tx_blob)
            outcome = classify(response, legacy_fail_band=self.legacy_fail_band)
            logger.debug(f"TX_SUBMIT | id={transaction.id} | hash={transaction.tx_hash} | {outcome.describe()}")

            if outcome.kind is OutcomeKind.SUCCESS:
                await self.store.mark_transaction_submitted(transaction.id)
                logger.info(f"TX_SUBMITTED | id={transaction.id} | hash={transaction.tx_hash}")
                decision = RoutingDecision(action=RouteAction.SUBMITTED, outcome=outcome)
            else:
                decision = await self.router.route(outcome, transaction)
        except FatalError as exc:
            self.halt_switch.trigger(str(exc))
            logger.error(f"TX_FATAL | id={transaction.id} | {exc}")
            raise

        return ItemResult(transaction=transaction, decision=decision)

    def describe_halt(self, outcome: SubmissionOutcome) -> str:
        if outcome.kind is OutcomeKind.RESIGN_TRANSACTION and outcome.transaction is not None:
            return f"transaction {outcome.transaction.id} must be re-signed ({outcome.message})"
        return outcome.describe()
