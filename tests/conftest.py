import json

import httpx
import pytest

from wallet_tracker.etherscan import EtherscanClient
from wallet_tracker.tracker import WalletTracker

WALLET = "0xab66485175E65993F217B7470EA433574473A760"
OTHER = "0x1111111111111111111111111111111111111111"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"


def transfer(contract=USDC, name="USD Coin", symbol="USDC", decimals="6", value="1000000", frm=OTHER, to=WALLET, **extra):
    record = {
        "contractAddress": contract,
        "tokenName": name,
        "tokenSymbol": symbol,
        "tokenDecimal": decimals,
        "value": value,
        "from": frm,
        "to": to,
    }
    record.update(extra)
    return record


def etherscan_transport(payload, status_code=200, seen=None):
    """httpx transport answering every request with `payload`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, content=json.dumps(payload).encode())

    return httpx.MockTransport(handler)


@pytest.fixture
def make_tracker():
    def _make(payload, status_code=200, seen=None):
        client = EtherscanClient(api_key="test-key", transport=etherscan_transport(payload, status_code, seen))
        return WalletTracker(client)

    return _make
