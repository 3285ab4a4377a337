"""
MCP stdio server exposing the wallet tracker as a tool.

One tool, ``wallet_tracker``, taking ``wallet_address`` and answering with a
plain-text balance listing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import get_settings
from .errors import InvalidWalletAddress, WalletTrackerError
from .logging_config import setup_logging
from .models import WalletResponse
from .tracker import WalletTracker

logger = logging.getLogger(__name__)

TOOL_NAME = "wallet_tracker"

app = Server("wallet_tracker")

_tracker: Optional[WalletTracker] = None


def set_tracker(tracker: Optional[WalletTracker]) -> None:
    global _tracker
    _tracker = tracker


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_wallet_response(resp: WalletResponse) -> str:
    if not resp.tokens:
        return f"Wallet Address: {resp.address}\nNo token balances found."

    lines = [f"Wallet Address: {resp.address}", "Tokens:"]
    for token in resp.tokens:
        name = token.name or token.address
        if token.symbol:
            lines.append(f"- {name} ({token.symbol}): {token.balance}")
        else:
            lines.append(f"- {name}: {token.balance}")
    return "\n".join(lines)


def _text_response(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


def _error_response(message: str) -> List[TextContent]:
    return _text_response(f"Error: {message}")


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(
            name=TOOL_NAME,
            description="Track the balance of a cryptocurrency wallet",
            inputSchema={
                "type": "object",
                "properties": {
                    "wallet_address": {
                        "type": "string",
                        "description": "The cryptocurrency wallet address to track",
                    },
                },
                "required": ["wallet_address"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> List[TextContent]:
    if name != TOOL_NAME:
        return _error_response(f"Unknown tool: {name}")
    if not isinstance(arguments, dict):
        return _error_response("Invalid arguments. Expected an object.")

    wallet_address = arguments.get("wallet_address")
    if not isinstance(wallet_address, str) or not wallet_address:
        return _error_response("Missing wallet_address.")
    if _tracker is None:
        return _error_response("Wallet tracker is not initialized.")

    try:
        resp = await _tracker.get_wallet_tokens(wallet_address)
    except InvalidWalletAddress:
        return _error_response("Invalid Ethereum address format. Expected 42 characters starting with 0x")
    except WalletTrackerError as e:
        logger.error("Error fetching wallet data for address %s: %s", wallet_address, e)
        return _error_response(str(e))

    return _text_response(format_wallet_response(resp))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def serve() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting MCP server...")

    tracker = WalletTracker.from_settings(settings)
    set_tracker(tracker)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server is now running and waiting for requests...")
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        set_tracker(None)
        await tracker.aclose()


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
