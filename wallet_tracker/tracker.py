from __future__ import annotations

import logging

from .balances import BalanceSummary, summarize_raw_transfers
from .config import Settings
from .errors import InvalidWalletAddress, NoTransactionsFound
from .etherscan import EtherscanClient
from .models import WalletReportResponse, WalletResponse
from .rules import ADDRESS_LENGTH, ADDRESS_PREFIX

logger = logging.getLogger(__name__)


def validate_wallet_address(address: str) -> None:
    if len(address) != ADDRESS_LENGTH or not address.startswith(ADDRESS_PREFIX):
        raise InvalidWalletAddress(address)


class WalletTracker:
    """Fetches a wallet's transfer history and derives its token balances."""

    def __init__(self, client: EtherscanClient):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "WalletTracker":
        client = EtherscanClient(
            api_key=settings.etherscan_api_key,
            base_url=settings.etherscan_base_url,
            timeout=settings.http_timeout,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_wallet_summary(self, wallet_address: str) -> BalanceSummary:
        validate_wallet_address(wallet_address)

        try:
            records = await self.client.fetch_token_transactions(wallet_address)
        except NoTransactionsFound:
            records = []

        summary = summarize_raw_transfers(wallet_address, records)

        if summary.transfers == 0:
            logger.info("No token transfers for %s", wallet_address)
        elif summary.skipped == summary.transfers:
            logger.warning("All %d transfers for %s had unusable quantities", summary.skipped, wallet_address)
        else:
            logger.info(
                "Summarized %s: transfers=%d skipped=%d tokens=%d",
                wallet_address, summary.transfers, summary.skipped, len(summary.tokens),
            )
        return summary

    async def get_wallet_tokens(self, wallet_address: str) -> WalletResponse:
        summary = await self.get_wallet_summary(wallet_address)
        return WalletResponse(address=wallet_address, tokens=summary.tokens)

    async def get_wallet_report(self, wallet_address: str) -> WalletReportResponse:
        summary = await self.get_wallet_summary(wallet_address)
        return WalletReportResponse(
            address=wallet_address,
            tokens=summary.tokens,
            report=summary.to_report(),
        )
