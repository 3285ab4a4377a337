from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CanonicalTransfer(BaseModel):
    model_config = ConfigDict(frozen=True)

    contract_address: str
    display_name: str
    display_symbol: str = ""
    decimals: int = Field(default=0, ge=0)
    # None when the record carried no usable quantity; never coerced to zero
    quantity: Optional[int] = Field(default=None, ge=0)
    raw_quantity: str = ""
    from_address: str = ""
    to_address: str = ""


class TokenBalance(BaseModel):
    address: str
    name: str
    symbol: str
    balance: str = Field(examples=["1.5"])


class WalletResponse(BaseModel):
    address: str
    tokens: List[TokenBalance] = Field(default_factory=list)


class ReportItem(BaseModel):
    row: Optional[int] = None
    contract: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class ReportSummary(BaseModel):
    transfers: int = 0
    skipped: int = 0
    tokens: int = 0
    deterministic: bool = True


class BalanceReport(BaseModel):
    summary: ReportSummary
    warnings: List[ReportItem] = Field(default_factory=list)


class WalletReportResponse(WalletResponse):
    report: BalanceReport


class HealthResponse(BaseModel):
    ok: bool = True
