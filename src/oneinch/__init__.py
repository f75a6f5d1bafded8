"""Async client and CLI for the 1inch aggregation API.

Provides:
- OneInchClient: typed wrapper over the v4.0 HTTP endpoints
- Token / QuoteOptions / SwapOptions: request and response structures
- Error taxonomy with an explicit ``kind`` discriminator
"""

from oneinch.amounts import calculate_price, to_human_amount, to_raw_amount
from oneinch.chains import ChainId, resolve_chain_id
from oneinch.client import OneInchClient
from oneinch.exceptions import (
    ConfigurationError,
    ConstructionError,
    ErrorKind,
    OneInchApiError,
    OneInchError,
    OneInchTimeoutError,
    ResolutionError,
    TransactionFailedError,
)
from oneinch.models import QuoteOptions, SwapOptions, Token
from oneinch.tokens import find_token, resolve_token, resolve_tokens

__version__ = "0.1.0"

__all__ = [
    # Client
    "OneInchClient",
    "ChainId",
    "resolve_chain_id",
    # Models
    "Token",
    "QuoteOptions",
    "SwapOptions",
    # Tokens / amounts
    "find_token",
    "resolve_token",
    "resolve_tokens",
    "to_raw_amount",
    "to_human_amount",
    "calculate_price",
    # Errors
    "ErrorKind",
    "OneInchError",
    "OneInchTimeoutError",
    "OneInchApiError",
    "ConstructionError",
    "ResolutionError",
    "ConfigurationError",
    "TransactionFailedError",
]
