from typing import Any, Mapping

from loguru import logger

from ...domain.errors import FatalError
from ...domain.models import result_codes as rc
from ...domain.models.outcome import LedgerLookup, OutcomeKind, SubmissionOutcome
from ...ports.network import NetworkPort


class LedgerReconciler:
    """Resolves whether a transaction hash made it into a closed ledger."""

    def __init__(self, network: NetworkPort):
        self.network = network

    async def is_in_ledger(self, tx_hash: str) -> LedgerLookup:
        """
        Look the transaction up by hash.

        Returns:
            LedgerLookup with SUCCESS and the inLedger flag, TRANSACTION_NOT_FOUND,
            or CLAIM_FEE_SUBMISSION_ERROR carrying the applied result code.

        Raises:
            FatalError: the lookup failed for any reason other than txNotFound.
        """
        response = await self.network.get_transaction(tx_hash)
        result = response.get("result") if isinstance(response, Mapping) else None
        if not isinstance(result, Mapping):
            raise _fatal(tx_hash, "response has no result")

        error = result.get("error")
        if error:
            if error == rc.TX_NOT_FOUND:
                logger.debug(f"TX_LOOKUP | not_found | hash={tx_hash}")
                return LedgerLookup(
                    outcome=SubmissionOutcome(
                        kind=OutcomeKind.TRANSACTION_NOT_FOUND,
                        message=result.get("error_message") or error,
                    )
                )
            raise _fatal(tx_hash, result.get("error_message") or error)

        in_ledger = bool(result.get("inLedger"))
        meta = result.get("meta")
        if not isinstance(meta, Mapping):
            if in_ledger:
                raise _fatal(tx_hash, "response has no meta")
            # Seen by the node but not yet applied in a closed ledger.
            logger.debug(f"TX_LOOKUP | in_flight | hash={tx_hash}")
            return LedgerLookup(
                outcome=SubmissionOutcome(kind=OutcomeKind.SUCCESS, message="not yet applied"),
                in_ledger=False,
            )

        applied = meta.get("TransactionResult")
        if applied != rc.TES_SUCCESS:
            logger.debug(f"TX_LOOKUP | claimed_fee | hash={tx_hash} | result={applied}")
            return LedgerLookup(
                outcome=SubmissionOutcome(
                    kind=OutcomeKind.CLAIM_FEE_SUBMISSION_ERROR,
                    message=str(applied),
                    engine_result=applied if isinstance(applied, str) else None,
                )
            )

        logger.debug(f"TX_LOOKUP | success | hash={tx_hash} | in_ledger={in_ledger}")
        return LedgerLookup(
            outcome=SubmissionOutcome(kind=OutcomeKind.SUCCESS, engine_result=rc.TES_SUCCESS),
            in_ledger=in_ledger,
        )


def _fatal(tx_hash: str, detail: Any) -> FatalError:
    message = f"Error getting transaction hash {tx_hash} from network. Error message: {detail}"
    logger.error(f"TX_LOOKUP | fatal | hash={tx_hash} | {detail}")
    return FatalError(message, SubmissionOutcome(kind=OutcomeKind.FATAL_ERROR, message=message))
