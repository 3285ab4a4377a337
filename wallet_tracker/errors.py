from __future__ import annotations

from typing import Optional


class WalletTrackerError(Exception):
    """Base exception for wallet tracker errors."""


class InvalidWalletAddress(WalletTrackerError):
    def __init__(self, address: str):
        super().__init__(f"invalid ethereum address: {address!r}")
        self.address = address


class NoTransactionsFound(WalletTrackerError):
    """Upstream reported that the address has no token transfers."""


class EtherscanError(WalletTrackerError):
    """Etherscan could not be reached or answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_text: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class MalformedQuantity(WalletTrackerError, ValueError):
    """A transfer record's quantity is missing or not a base-10 integer."""

    def __init__(self, raw: str):
        super().__init__(f"unusable transfer quantity: {raw!r}")
        self.raw = raw
