"""Chain identifiers supported by the 1inch aggregation API.

The API scopes every endpoint by numeric chain ID:
    https://api.1inch.exchange/v4.0/<chain_id>/...
"""

from enum import IntEnum
from typing import Union

from oneinch.exceptions import ConfigurationError


class ChainId(IntEnum):
    """Numeric chain IDs for EVM networks served by the API."""

    MAINNET = 1
    OPTIMISM = 10
    BSC = 56
    GNOSIS = 100
    POLYGON = 137
    FANTOM = 250
    ARBITRUM = 42161
    AVALANCHE = 43114


# Common names people type for the same networks
CHAIN_ALIASES = {
    "ethereum": ChainId.MAINNET,
    "eth": ChainId.MAINNET,
    "bnb": ChainId.BSC,
    "matic": ChainId.POLYGON,
    "op": ChainId.OPTIMISM,
    "arb": ChainId.ARBITRUM,
    "xdai": ChainId.GNOSIS,
    "avax": ChainId.AVALANCHE,
    "avalanch": ChainId.AVALANCHE,
    "ftm": ChainId.FANTOM,
}


def resolve_chain_id(value: Union[ChainId, int, str]) -> int:
    """Resolve a chain name or number to its numeric chain ID.

    Args:
        value: ChainId member, integer ID, numeric string, or chain name
            (case-insensitive, e.g. "mainnet", "bsc", "polygon")

    Returns:
        Integer chain ID

    Raises:
        ConfigurationError: If the value does not name a known chain
    """
    if isinstance(value, ChainId):
        return int(value)

    if isinstance(value, int) and not isinstance(value, bool):
        if value <= 0:
            raise ConfigurationError(f"invalid chain id: {value}")
        return value

    if isinstance(value, str):
        name = value.strip()
        if name.isdigit():
            return resolve_chain_id(int(name))
        key = name.lower()
        if key.upper() in ChainId.__members__:
            return int(ChainId[key.upper()])
        if key in CHAIN_ALIASES:
            return int(CHAIN_ALIASES[key])

    raise ConfigurationError(f"unknown chain: {value!r}")


def chain_name(chain_id: int) -> str:
    """Get a display name for a chain ID (falls back to the number)."""
    try:
        return ChainId(chain_id).name.lower()
    except ValueError:
        return str(chain_id)
