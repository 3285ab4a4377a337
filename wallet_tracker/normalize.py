"""
Transfer record normalization.

Responsibilities:
- field-alias resolution (name, symbol, decimals, quantity)
- display name fallback so every token has some non-empty label
- exact base-10 parsing of quantities, with unusable values kept as None
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import MalformedQuantity
from .models import CanonicalTransfer
from .rules import (
    CONTRACT_KEY,
    DECIMALS_KEYS,
    FROM_KEY,
    NAME_KEYS,
    QUANTITY_KEYS,
    SYMBOL_KEYS,
    TO_KEY,
)

_INTEGER_RE = re.compile(r"\+?[0-9]+")


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (bool, dict, list)):
        return ""
    return value if isinstance(value, str) else str(value)


def first_non_empty(record: Dict[str, Any], keys: Sequence[str]) -> str:
    """Return the first value under `keys` that is not blank, else ""."""
    for key in keys:
        text = _as_text(record.get(key))
        if text.strip():
            return text
    return ""


def resolve_display_symbol(record: Dict[str, Any]) -> str:
    return first_non_empty(record, SYMBOL_KEYS)


def resolve_display_name(record: Dict[str, Any]) -> str:
    """
    Name chain, then symbol chain, then the contract address itself.
    """
    name = first_non_empty(record, NAME_KEYS)
    if name:
        return name
    symbol = resolve_display_symbol(record)
    if symbol:
        return symbol
    return _as_text(record.get(CONTRACT_KEY))


def resolve_decimals(record: Dict[str, Any]) -> int:
    """
    Decimal precision for rendering only.

    Absent or unparseable precision degrades to 0, so the raw quantity is shown
    as-is instead of failing the record.
    """
    raw = first_non_empty(record, DECIMALS_KEYS).strip()
    if not _INTEGER_RE.fullmatch(raw):
        return 0
    try:
        return int(raw, 10)
    except ValueError:
        return 0


def parse_quantity(raw: str) -> int:
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise MalformedQuantity(raw)
    try:
        return int(text, 10)
    except ValueError as exc:
        # past the interpreter's int/str digit limit
        raise MalformedQuantity(raw) from exc


def normalize_transfer(record: Dict[str, Any]) -> CanonicalTransfer:
    raw_quantity = first_non_empty(record, QUANTITY_KEYS)
    quantity: Optional[int]
    try:
        quantity = parse_quantity(raw_quantity)
    except MalformedQuantity:
        quantity = None

    return CanonicalTransfer(
        contract_address=_as_text(record.get(CONTRACT_KEY)),
        display_name=resolve_display_name(record),
        display_symbol=resolve_display_symbol(record),
        decimals=resolve_decimals(record),
        quantity=quantity,
        raw_quantity=raw_quantity,
        from_address=_as_text(record.get(FROM_KEY)),
        to_address=_as_text(record.get(TO_KEY)),
    )


def normalize_transfers(records: Iterable[Dict[str, Any]]) -> List[CanonicalTransfer]:
    return [normalize_transfer(record) for record in records]
