"""Token symbol resolution against the ``/tokens`` listing.

The listing is fetched on every call; nothing is cached between CLI
invocations.
"""

import logging
from typing import Any

from oneinch.client import OneInchClient
from oneinch.exceptions import ResolutionError
from oneinch.models import Token

logger = logging.getLogger(__name__)


def _token_entries(tokens_response: Any) -> list[dict]:
    """Extract token entries from a ``/tokens`` response.

    The API returns ``{"tokens": {address: {...}}}``; a bare list or
    mapping of entries is accepted too.
    """
    tokens = tokens_response
    if isinstance(tokens, dict) and "tokens" in tokens:
        tokens = tokens["tokens"]
    if isinstance(tokens, dict):
        return list(tokens.values())
    return list(tokens or [])


def find_token(tokens_response: Any, symbol: str) -> Token:
    """Find the token whose symbol matches exactly (case-sensitive).

    Raises:
        ResolutionError: If no token, or more than one token, has the symbol
    """
    matches = [
        entry for entry in _token_entries(tokens_response)
        if entry.get("symbol") == symbol
    ]

    if not matches:
        raise ResolutionError(symbol)
    if len(matches) > 1:
        addresses = ", ".join(entry.get("address", "?") for entry in matches)
        raise ResolutionError(symbol, f"ambiguous token symbol {symbol}: {addresses}")

    return Token.from_dict(matches[0])


async def resolve_token(client: OneInchClient, symbol: str) -> Token:
    """Fetch the token listing and resolve one symbol."""
    tokens_response = await client.tokens()
    token = find_token(tokens_response, symbol)
    logger.debug(f"Resolved {symbol} -> {token.address} ({token.decimals} decimals)")
    return token


async def resolve_tokens(client: OneInchClient, *symbols: str) -> list[Token]:
    """Fetch the token listing once and resolve several symbols in order."""
    tokens_response = await client.tokens()
    resolved = [find_token(tokens_response, symbol) for symbol in symbols]
    for token in resolved:
        logger.debug(f"Resolved {token.symbol} -> {token.address} ({token.decimals} decimals)")
    return resolved
