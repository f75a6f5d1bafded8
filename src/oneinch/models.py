"""Request and response data structures."""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class Token:
    """A token entry from the ``/tokens`` listing."""

    address: str
    symbol: str
    decimals: int
    name: Optional[str] = None
    logo_uri: Optional[str] = None

    def __post_init__(self):
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        """Build a Token from an API token entry."""
        return cls(
            address=data["address"],
            symbol=data["symbol"],
            decimals=int(data["decimals"]),
            name=data.get("name"),
            logo_uri=data.get("logoURI"),
        )

    def to_dict(self) -> dict:
        data = {
            "address": self.address,
            "symbol": self.symbol,
            "decimals": self.decimals,
        }
        if self.name is not None:
            data["name"] = self.name
        if self.logo_uri is not None:
            data["logoURI"] = self.logo_uri
        return data


@dataclass
class _Options:
    """Base for optional request parameters.

    Every field defaults to None, which means "omit from the request".
    Field names are snake_case; ``API_NAMES`` maps them to query keys.
    """

    API_NAMES: ClassVar[dict[str, str]] = {}

    def to_params(self) -> dict[str, Any]:
        """Return only the fields that are set, keyed by API parameter name."""
        params = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                params[self.API_NAMES.get(f.name, f.name)] = value
        return params


@dataclass
class QuoteOptions(_Options):
    """Optional ``/quote`` parameters."""

    API_NAMES: ClassVar[dict[str, str]] = {
        "gas_price": "gasPrice",
        "complexity_level": "complexityLevel",
        "connector_tokens": "connectorTokens",
        "gas_limit": "gasLimit",
        "main_route_parts": "mainRouteParts",
    }

    fee: Optional[float] = None
    protocols: Optional[str] = None
    gas_price: Optional[str] = None
    complexity_level: Optional[str] = None
    connector_tokens: Optional[str] = None
    gas_limit: Optional[int] = None
    parts: Optional[int] = None
    main_route_parts: Optional[int] = None


@dataclass
class SwapOptions(QuoteOptions):
    """Optional ``/swap`` parameters (a superset of the quote options)."""

    API_NAMES: ClassVar[dict[str, str]] = {
        **QuoteOptions.API_NAMES,
        "dest_receiver": "destReceiver",
        "referrer_address": "referrerAddress",
        "burn_chi": "burnChi",
        "allow_partial_fill": "allowPartialFill",
        "disable_estimate": "disableEstimate",
    }

    dest_receiver: Optional[str] = None
    referrer_address: Optional[str] = None
    burn_chi: Optional[bool] = None
    allow_partial_fill: Optional[bool] = None
    disable_estimate: Optional[bool] = None
    permit: Optional[str] = None
