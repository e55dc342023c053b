"""Constants for the single supported route: any ERC-20 on Ethereum → native Bitcoin."""

from __future__ import annotations

import re

ETHEREUM_CHAIN_ID = "1"  # fromChain
BITCOIN_CHAIN_KEY = "btc"  # toChain
BTC_SYMBOL = "BTC"  # toToken
BTC_DECIMALS = 8

ETHEREUM_CHAIN_ID_INT = 1

MAX_TOKEN_DECIMALS = 36

# Custom tokens given by address without a symbol hint
CUSTOM_TOKEN_SYMBOL = "TOKEN"
CUSTOM_TOKEN_NAME = "Custom Token"

HEX_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

SWAP_SOURCE = {'name': 'LI.FI', 'url': 'https://li.fi'}
