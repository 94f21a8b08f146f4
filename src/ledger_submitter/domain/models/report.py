from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .outcome import RouteAction, RoutingDecision, SubmissionOutcome
from .transaction import PendingTransaction


@dataclass(frozen=True)
class ItemResult:
    """What happened to one transaction during a batch."""

    transaction: PendingTransaction
    decision: RoutingDecision

    @property
    def action(self) -> RouteAction:
        return self.decision.action

    @property
    def outcome(self) -> SubmissionOutcome:
        return self.decision.outcome


@dataclass
class BatchReport:
    results: List[ItemResult] = field(default_factory=list)
    halted_on: Optional[ItemResult] = None
    pending_count: int = 0

    @property
    def completed(self) -> bool:
        return self.halted_on is None

    def counts(self) -> Dict[RouteAction, int]:
        tally: Dict[RouteAction, int] = {}
        for item in self.results:
            tally[item.action] = tally.get(item.action, 0) + 1
        return tally

    def raise_for_halt(self) -> None:
        """Raise the halting outcome as an exception, if the batch halted."""
        from ..errors import ResignTransactionError, SubmissionError

        if self.halted_on is None:
            return
        outcome = self.halted_on.outcome
        if self.halted_on.action == RouteAction.RESIGN:
            raise ResignTransactionError(outcome.transaction or self.halted_on.transaction, outcome)
        raise SubmissionError(outcome=outcome)
