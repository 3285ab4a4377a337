import httpx
import pytest

from wallet_tracker.errors import EtherscanError, NoTransactionsFound
from wallet_tracker.etherscan import EtherscanClient, parse_token_transactions

from conftest import WALLET, etherscan_transport, transfer


class TestParseTokenTransactions:

    def test_result_list(self):
        records = parse_token_transactions({"status": "1", "message": "OK", "result": [transfer()]})
        assert records == [transfer()]

    def test_missing_result_is_empty(self):
        assert parse_token_transactions({"status": "1", "message": "OK"}) == []

    def test_sentinel_result_text(self):
        with pytest.raises(NoTransactionsFound):
            parse_token_transactions({"status": "0", "message": "NOTOK", "result": "No transactions found"})

    def test_sentinel_message_with_empty_result(self):
        with pytest.raises(NoTransactionsFound):
            parse_token_transactions({"status": "0", "message": "No transactions found", "result": []})

    def test_other_result_text_is_error(self):
        with pytest.raises(EtherscanError, match="Invalid API Key"):
            parse_token_transactions({"status": "0", "message": "NOTOK", "result": "Invalid API Key"})

    def test_error_status(self):
        with pytest.raises(EtherscanError, match="etherscan api error: NOTOK"):
            parse_token_transactions({"status": "0", "message": "NOTOK", "result": []})

    def test_unexpected_result_type(self):
        with pytest.raises(EtherscanError):
            parse_token_transactions({"status": "1", "message": "OK", "result": {"a": 1}})

    def test_non_object_entries_dropped(self):
        assert parse_token_transactions({"status": "1", "result": [transfer(), "junk", 3]}) == [transfer()]


def test_empty_api_key_rejected():
    with pytest.raises(ValueError):
        EtherscanClient(api_key="   ")


@pytest.mark.asyncio
async def test_fetch_sends_tokentx_query():
    seen = []
    transport = etherscan_transport({"status": "1", "message": "OK", "result": [transfer()]}, seen=seen)

    async with EtherscanClient(api_key=" key ", transport=transport) as client:
        records = await client.fetch_token_transactions(WALLET)

    assert records == [transfer()]
    params = seen[0].url.params
    assert params["module"] == "account"
    assert params["action"] == "tokentx"
    assert params["address"] == WALLET
    assert params["sort"] == "asc"
    assert params["apikey"] == "key"


@pytest.mark.asyncio
async def test_fetch_non_200():
    transport = etherscan_transport("rate limited" * 100, status_code=429)

    async with EtherscanClient(api_key="key", transport=transport) as client:
        with pytest.raises(EtherscanError) as exc_info:
            await client.fetch_token_transactions(WALLET)

    assert exc_info.value.status_code == 429
    assert len(exc_info.value.response_text) <= 512


@pytest.mark.asyncio
async def test_fetch_bad_json():
    async with EtherscanClient(api_key="key", transport=etherscan_transport("<html>")) as client:
        with pytest.raises(EtherscanError, match="decoding"):
            await client.fetch_token_transactions(WALLET)


@pytest.mark.asyncio
async def test_fetch_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with EtherscanClient(api_key="key", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(EtherscanError, match="calling etherscan"):
            await client.fetch_token_transactions(WALLET)
