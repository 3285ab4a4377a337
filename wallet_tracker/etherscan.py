"""Etherscan token-transfer history client.

Fetches the full ``tokentx`` history for an address and hands back the raw
transfer records untouched; normalization happens in ``normalize.py``.

Example:
    ```python
    async with EtherscanClient(api_key="...") as client:
        records = await client.fetch_token_transactions("0xab66...")
    ```
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import EtherscanError, NoTransactionsFound
from .rules import (
    DEFAULT_HTTP_TIMEOUT,
    ERROR_BODY_LIMIT,
    ETHERSCAN_BASE_URL,
    NO_TRANSACTIONS_MESSAGE,
    TOKENTX_QUERY,
)

__all__ = ["EtherscanClient", "parse_token_transactions"]

logger = logging.getLogger(__name__)


def _is_sentinel(text: Any) -> bool:
    return isinstance(text, str) and text.strip().lower() == NO_TRANSACTIONS_MESSAGE.lower()


def parse_token_transactions(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Extract transfer records from a decoded Etherscan response.

    Raises:
        NoTransactionsFound: the address has no token transfers
        EtherscanError: any other error status or unexpected result shape
    """
    if not isinstance(payload, dict):
        raise EtherscanError(f"unexpected etherscan response: {type(payload).__name__}")

    result = payload.get("result")
    if result is None:
        txs: List[Any] = []
    elif isinstance(result, str):
        if _is_sentinel(result):
            raise NoTransactionsFound(result)
        raise EtherscanError(f"unexpected result text: {result}")
    elif isinstance(result, list):
        txs = result
    else:
        raise EtherscanError(f"parsing token transactions: unexpected result type {type(result).__name__}")

    if str(payload.get("status", "")) == "0":
        message = payload.get("message", "")
        if _is_sentinel(message):
            raise NoTransactionsFound(message)
        raise EtherscanError(f"etherscan api error: {message}")

    records = [tx for tx in txs if isinstance(tx, dict)]
    if len(records) != len(txs):
        logger.warning("Dropped %d non-object entries from etherscan result", len(txs) - len(records))
    return records


class EtherscanClient:
    """Async client for the Etherscan account API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = ETHERSCAN_BASE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Etherscan API key, sent as the ``apikey`` query parameter
            base_url: API endpoint, ``https://api.etherscan.io/api`` by default
            timeout: request timeout in seconds
            transport: optional httpx transport, used by tests
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("api key must not be empty")

        self._api_key = api_key
        self._base_url = base_url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.debug("Initialized EtherscanClient for %s with %ss timeout", base_url, timeout)

    async def __aenter__(self) -> "EtherscanClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_token_transactions(self, address: str) -> List[Dict[str, Any]]:
        params = {**TOKENTX_QUERY, "address": address, "apikey": self._api_key}

        try:
            response = await self._client.get(self._base_url, params=params)
        except httpx.HTTPError as e:
            raise EtherscanError(f"calling etherscan: {e}") from e

        if response.status_code != httpx.codes.OK:
            body = response.content[:ERROR_BODY_LIMIT].decode("utf-8", errors="replace").strip()
            raise EtherscanError(
                f"etherscan responded with status {response.status_code}: {body}",
                status_code=response.status_code,
                response_text=body,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise EtherscanError(f"decoding etherscan response: {e}") from e

        return parse_token_transactions(payload)
