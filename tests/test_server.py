import pytest

from wallet_tracker import server
from wallet_tracker.models import TokenBalance, WalletResponse

from conftest import USDC, WALLET, transfer


@pytest.fixture
def tool_tracker(make_tracker):
    def _install(payload, status_code=200):
        tracker = make_tracker(payload, status_code)
        server.set_tracker(tracker)
        return tracker

    yield _install
    server.set_tracker(None)


def test_format_empty_wallet():
    resp = WalletResponse(address=WALLET, tokens=[])
    assert server.format_wallet_response(resp) == f"Wallet Address: {WALLET}\nNo token balances found."


def test_format_tokens():
    resp = WalletResponse(address=WALLET, tokens=[
        TokenBalance(address=USDC, name="USD Coin", symbol="USDC", balance="1.5"),
        TokenBalance(address="0x01", name="", symbol="", balance="-3"),
    ])
    assert server.format_wallet_response(resp) == (
        f"Wallet Address: {WALLET}\n"
        "Tokens:\n"
        "- USD Coin (USDC): 1.5\n"
        "- 0x01: -3"
    )


@pytest.mark.asyncio
async def test_list_tools():
    tools = await server.list_tools()
    assert [t.name for t in tools] == ["wallet_tracker"]
    assert tools[0].inputSchema["required"] == ["wallet_address"]


@pytest.mark.asyncio
async def test_call_tool(tool_tracker):
    tool_tracker({"status": "1", "message": "OK", "result": [transfer(value="1500000")]})

    content = await server.call_tool("wallet_tracker", {"wallet_address": WALLET})
    assert content[0].text == f"Wallet Address: {WALLET}\nTokens:\n- USD Coin (USDC): 1.5"


@pytest.mark.asyncio
async def test_call_tool_invalid_address(tool_tracker):
    tool_tracker({"status": "1", "result": []})

    content = await server.call_tool("wallet_tracker", {"wallet_address": "0x12"})
    assert content[0].text.startswith("Error: Invalid Ethereum address format")


@pytest.mark.asyncio
async def test_call_tool_upstream_error(tool_tracker):
    tool_tracker("oops", status_code=500)

    content = await server.call_tool("wallet_tracker", {"wallet_address": WALLET})
    assert content[0].text.startswith("Error: etherscan responded with status 500")


@pytest.mark.asyncio
async def test_call_tool_bad_arguments(tool_tracker):
    tool_tracker({"status": "1", "result": []})

    assert (await server.call_tool("wallet_tracker", {}))[0].text == "Error: Missing wallet_address."
    assert (await server.call_tool("other", {}))[0].text == "Error: Unknown tool: other"
