"""
Balance aggregation and decimal rendering.

All arithmetic is on Python ints; decimals are applied to the final digit
string only, never to the numbers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .models import BalanceReport, CanonicalTransfer, ReportItem, ReportSummary, TokenBalance
from .normalize import normalize_transfers

logger = logging.getLogger(__name__)

# str() on a whole int is capped by the interpreter's int/str digit limit
_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS


def _decimal_digits(value: int) -> str:
    """Base-10 digits of a non-negative int of any size."""
    chunks = []
    while value >= _CHUNK:
        value, low = divmod(value, _CHUNK)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


class TokenAggregate:
    """Running balance for one contract; metadata is first-writer-wins."""

    __slots__ = ("address", "name", "symbol", "decimals", "balance")

    def __init__(self, transfer: CanonicalTransfer):
        self.address = transfer.contract_address
        self.name = transfer.display_name
        self.symbol = transfer.display_symbol
        self.decimals = transfer.decimals
        self.balance = 0

    def to_token_balance(self) -> TokenBalance:
        return TokenBalance(
            address=self.address,
            name=self.name,
            symbol=self.symbol,
            balance=format_token_balance(self.balance, self.decimals),
        )


class BalanceSummary:
    """Result of one aggregation call: the balances plus skip diagnostics."""

    def __init__(self, tokens: List[TokenBalance], transfers: int, skipped: int, warnings: List[ReportItem]):
        self.tokens = tokens
        self.transfers = transfers
        self.skipped = skipped
        self.warnings = warnings

    def to_report(self) -> BalanceReport:
        return BalanceReport(
            summary=ReportSummary(
                transfers=self.transfers,
                skipped=self.skipped,
                tokens=len(self.tokens),
            ),
            warnings=list(self.warnings),
        )


def summarize_token_balances(wallet_address: str, transfers: Iterable[CanonicalTransfer]) -> BalanceSummary:
    wallet = wallet_address.lower()
    aggregates: Dict[str, TokenAggregate] = {}
    warnings: List[ReportItem] = []
    seen = 0

    for i, transfer in enumerate(transfers):
        seen += 1
        qty = transfer.quantity
        if qty is None:
            logger.warning(
                "Skipping transaction with invalid quantity for contract %s", transfer.contract_address
            )
            warnings.append(ReportItem(
                row=i + 1,
                contract=transfer.contract_address,
                issue="malformed_quantity",
                value=transfer.raw_quantity,
                action="skipped",
            ))
            continue

        agg = aggregates.get(transfer.contract_address)
        if agg is None:
            agg = TokenAggregate(transfer)
            aggregates[transfer.contract_address] = agg

        to_wallet = transfer.to_address.lower() == wallet
        from_wallet = transfer.from_address.lower() == wallet
        # self-transfers and unrelated transfers leave the balance alone
        if to_wallet and not from_wallet:
            agg.balance += qty
        elif from_wallet and not to_wallet:
            agg.balance -= qty

    nonzero = [agg for agg in aggregates.values() if agg.balance != 0]
    nonzero.sort(key=lambda agg: (agg.name.lower(), agg.address.lower()))
    tokens = [agg.to_token_balance() for agg in nonzero]

    return BalanceSummary(tokens=tokens, transfers=seen, skipped=len(warnings), warnings=warnings)


def summarize_raw_transfers(wallet_address: str, records: Iterable[Dict[str, Any]]) -> BalanceSummary:
    return summarize_token_balances(wallet_address, normalize_transfers(records))


def format_token_balance(balance: Optional[int], decimals: int) -> str:
    """
    Render an integer balance as a decimal string with `decimals` fractional digits.

    Trailing fractional zeros are trimmed and the point is dropped when nothing
    is left, e.g. (1500000, 6) -> "1.5" and (10**18, 18) -> "1".
    """
    if balance is None:
        return "0"

    sign = "-" if balance < 0 else ""
    digits = _decimal_digits(abs(balance))

    if decimals <= 0:
        return sign + digits

    if len(digits) <= decimals:
        digits = "0" * (decimals - len(digits) + 1) + digits

    split = len(digits) - decimals
    int_part = digits[:split] or "0"
    frac_part = digits[split:].rstrip("0")
    if not frac_part:
        return sign + int_part
    return f"{sign}{int_part}.{frac_part}"
