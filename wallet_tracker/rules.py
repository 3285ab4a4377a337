"""
Deterministic field and address rules.

Upstream API versions disagree on field casing, so every logical field is
resolved through an explicit ordered list of candidate keys.
"""

NAME_KEYS = ("tokenName", "TokenName")
SYMBOL_KEYS = ("tokenSymbol", "TokenSymbol")
DECIMALS_KEYS = ("tokenDecimal", "TokenDecimal")
QUANTITY_KEYS = ("value", "TokenQuantity")
CONTRACT_KEY = "contractAddress"
FROM_KEY = "from"
TO_KEY = "to"

ADDRESS_LENGTH = 42
ADDRESS_PREFIX = "0x"

NO_TRANSACTIONS_MESSAGE = "No transactions found"

ETHERSCAN_BASE_URL = "https://api.etherscan.io/api"
DEFAULT_HTTP_TIMEOUT = 10.0
TOKENTX_QUERY = {
    "module": "account",
    "action": "tokentx",
    "startblock": "0",
    "endblock": "999999999",
    "sort": "asc",
}
ERROR_BODY_LIMIT = 512  # bytes of an error body kept for diagnostics
