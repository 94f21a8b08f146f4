"""Engine result codes and numeric bands reported by the network node."""

from typing import Tuple

TES_SUCCESS = "tesSUCCESS"
TEF_ALREADY = "tefALREADY"
TEF_PAST_SEQ = "tefPAST_SEQ"
TER_PRE_SEQ = "terPRE_SEQ"
TEC_UNFUNDED_PAYMENT = "tecUNFUNDED_PAYMENT"
TEF_DST_TAG_NEEDED = "tefDST_TAG_NEEDED"

# Value of result.error when a tx lookup misses.
TX_NOT_FOUND = "txNotFound"

CodeBand = Tuple[int, int]  # inclusive (low, high)

# tel: local policy rejection (fee inadequate, exceeds local limit)
LOCAL_BAND: CodeBand = (-399, -300)
# tem: malformed, can never succeed in a ledger
MALFORMED_BAND: CodeBand = (-299, -200)
# tef: failure, e.g. sequence number previously used
FAIL_BAND: CodeBand = (-199, -100)
# ter: retry (sequence too high, no funds for fee, source account missing)
RETRY_BAND: CodeBand = (-99, -1)
# tec: applied and claimed a fee without succeeding
CLAIM_FEE_BAND: CodeBand = (100, 159)


def in_band(code: int, band: CodeBand) -> bool:
    low, high = band
    return low <= code <= high
