"""
response_classifier.py - Map a raw submit response to a SubmissionOutcome

Named engine results are matched first; everything else is classified by
the numeric engine_result_code band. The mapping is total: malformed or
unrecognised responses become UNKNOWN_SUBMIT_ERROR, never an exception.

Fail band note:
    Historically the fail band (-199..-100) was guarded by the malformed
    bounds, so it could never match and those codes fell through to
    UNKNOWN_SUBMIT_ERROR. By default the band is checked on its own range
    and yields FAIL_TRANSACTION_ERROR (resign). Pass legacy_fail_band=True
    to keep the old behavior.
"""

from typing import Any, Mapping, Optional, Tuple

from ...domain.models import result_codes as rc
from ...domain.models.outcome import OutcomeKind, SubmissionOutcome

_NAMED_RESULTS = {
    rc.TEF_ALREADY: OutcomeKind.APPLYING_TRANSACTION,
    rc.TEF_PAST_SEQ: OutcomeKind.PAST_SEQUENCE_ERROR,
    rc.TER_PRE_SEQ: OutcomeKind.PRE_SEQUENCE_ERROR,
    rc.TEC_UNFUNDED_PAYMENT: OutcomeKind.UNFUNDED_ERROR,
    rc.TEF_DST_TAG_NEEDED: OutcomeKind.DESTINATION_TAG_NEEDED,
    rc.TES_SUCCESS: OutcomeKind.SUCCESS,
}

# Checked in order; first match wins.
_BANDS: Tuple[Tuple[rc.CodeBand, OutcomeKind], ...] = (
    (rc.LOCAL_BAND, OutcomeKind.LOCAL_TRANSACTION_ERROR),
    (rc.MALFORMED_BAND, OutcomeKind.MALFORMED_TRANSACTION_ERROR),
    (rc.FAIL_BAND, OutcomeKind.FAIL_TRANSACTION_ERROR),
    (rc.CLAIM_FEE_BAND, OutcomeKind.CLAIM_FEE_SUBMISSION_ERROR),
    (rc.RETRY_BAND, OutcomeKind.RETRY_TRANSACTION_ERROR),
)


def classify(response: Any, *, legacy_fail_band: bool = False) -> SubmissionOutcome:
    """Classify a submit response. Pure; safe to call repeatedly."""
    result = _result_of(response)
    if result is None:
        return SubmissionOutcome(kind=OutcomeKind.UNKNOWN_SUBMIT_ERROR, message="response has no result")

    engine_result = result.get("engine_result")
    engine_result = engine_result if isinstance(engine_result, str) else None
    code = _code_of(result.get("engine_result_code"))

    kind = _NAMED_RESULTS.get(engine_result)
    if kind is not None:
        return SubmissionOutcome(kind=kind, code=code, engine_result=engine_result)

    if code is None:
        return SubmissionOutcome(
            kind=OutcomeKind.UNKNOWN_SUBMIT_ERROR,
            engine_result=engine_result,
            message=_message(result, engine_result),
        )

    return SubmissionOutcome(
        kind=classify_code(code, legacy_fail_band=legacy_fail_band),
        code=code,
        engine_result=engine_result,
        message=_message(result, engine_result),
    )


def classify_code(code: int, *, legacy_fail_band: bool = False) -> OutcomeKind:
    """Band lookup for a numeric engine result code."""
    for band, kind in _BANDS:
        if kind is OutcomeKind.FAIL_TRANSACTION_ERROR and legacy_fail_band:
            continue
        if rc.in_band(code, band):
            return kind
    return OutcomeKind.UNKNOWN_SUBMIT_ERROR


def _result_of(response: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(response, Mapping):
        return None
    result = response.get("result")
    return result if isinstance(result, Mapping) else None


def _code_of(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid result code
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _message(result: Mapping[str, Any], engine_result: Optional[str]) -> str:
    detail = result.get("engine_result_message")
    parts = [str(p) for p in (engine_result, detail) if p]
    return " ".join(parts) or "no engine result"
