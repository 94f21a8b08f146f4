from typing import Any, Dict, Optional

import httpx
from loguru import logger

from ...domain.errors import NetworkProtocolError
from ...ports.network import NetworkPort


class StellardRpcNetwork(NetworkPort):
    """
    JSON-RPC adapter for a stellard/rippled-style node.

    - submit via ``{"method": "submit", "params": [{"tx_blob": ...}]}``
    - lookup via ``{"method": "tx", "params": [{"transaction": ...}]}``

    The decoded body is returned as-is; classification happens upstream.
    Transport failures and non-2xx statuses raise httpx errors.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout_seconds: float = 10.0,
        session: Optional[httpx.AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self._client = session or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    async def __aenter__(self) -> "StellardRpcNetwork":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def submit_transaction_blob(self, tx_blob: str) -> Dict[str, Any]:
        return await self._call("submit", {"tx_blob": tx_blob})

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return await self._call("tx", {"transaction": tx_hash})

    async def _call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        payload = {"method": method, "params": [params]}
        try:
            resp = await self._client.post(self.rpc_url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(f"RPC | {method} | transport_error | {exc}")
            raise

        try:
            body = resp.json()
        except ValueError as exc:
            raise NetworkProtocolError(f"{method}: response is not JSON") from exc
        if not isinstance(body, dict):
            raise NetworkProtocolError(f"{method}: response is not a JSON object")

        logger.debug(f"RPC | {method} | status={resp.status_code}")
        return body
