"""Async client for the 1inch aggregation API (v4.0).

Each method performs exactly one GET against
``<api_url>/<version>/<chain_id>/<endpoint>`` and returns the decoded
JSON body. Required parameters are checked before any network access;
optional parameters are sent only when set.

API docs: https://docs.1inch.io/docs/aggregation-protocol/api/swagger
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from oneinch.chains import ChainId, resolve_chain_id
from oneinch.exceptions import ConstructionError, OneInchApiError, OneInchTimeoutError
from oneinch.models import QuoteOptions, SwapOptions

logger = logging.getLogger(__name__)

ONEINCH_API_URL = "https://api.1inch.exchange"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SLIPPAGE = 0.5

OptionsArg = Union[QuoteOptions, Mapping[str, Any], None]


class OneInchClient:
    """Client bound to one chain of the aggregation API.

    Example:
        async with OneInchClient(ChainId.BSC) as client:
            quote = await client.quote(from_address, to_address, "1000000")
    """

    VERSION = "v4.0"

    def __init__(
        self,
        chain_id: Union[ChainId, int, str] = ChainId.MAINNET,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        api_url: str = ONEINCH_API_URL,
        api_key: Optional[str] = None,
        **client_kwargs: Any,
    ):
        """Initialize the client. No request is made here.

        Args:
            chain_id: Chain to query (ChainId, numeric ID or chain name)
            timeout: Per-request timeout in seconds
            api_url: API root, without version or chain
            api_key: Optional bearer token
            **client_kwargs: Extra arguments for ``httpx.AsyncClient``
                (e.g. ``transport``)
        """
        self._chain_id = resolve_chain_id(chain_id)
        self._timeout = timeout
        self._base_url = f"{api_url.rstrip('/')}/{self.VERSION}/{self._chain_id}"

        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        headers.update(client_kwargs.pop("headers", None) or {})

        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            **client_kwargs,
        )

    @classmethod
    def from_settings(cls, settings, **client_kwargs: Any) -> "OneInchClient":
        """Create a client from application settings."""
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        return cls(
            settings.chain_id,
            settings.timeout,
            api_url=settings.api_url,
            api_key=api_key,
            **client_kwargs,
        )

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "OneInchClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"OneInchClient(base_url={self._base_url!r}, timeout={self._timeout})"

    # ======================
    # Endpoints
    # ======================

    async def healthcheck(self) -> Any:
        return await self._request("/healthcheck")

    async def approve_spender(self) -> Any:
        """Get the router address that must be approved to spend tokens."""
        return await self._request("/approve/spender")

    async def approve_transaction(
        self,
        token_address: str,
        amount: Optional[str] = None,
    ) -> Any:
        """Build an approve transaction for the router.

        Args:
            token_address: Token contract to approve
            amount: Raw amount to approve; omitted means unlimited approval
                (the API's default)

        Returns:
            Unsigned transaction dict (to, data, value, gasPrice)
        """
        params = self._build_params(
            {"tokenAddress": token_address},
            {"amount": amount},
        )
        return await self._request("/approve/transaction", params)

    async def approve_allowance(self, token_address: str, wallet_address: str) -> Any:
        """Get the router's current allowance for a wallet's token."""
        params = self._build_params(
            {"tokenAddress": token_address, "walletAddress": wallet_address},
        )
        return await self._request("/approve/allowance", params)

    async def liquidity_sources(self) -> Any:
        return await self._request("/liquidity-sources")

    async def tokens(self) -> Any:
        return await self._request("/tokens")

    async def presets(self) -> Any:
        return await self._request("/presets")

    async def quote(
        self,
        from_token_address: str,
        to_token_address: str,
        amount: str,
        options: OptionsArg = None,
    ) -> Any:
        """Get the best quote for exchanging ``amount`` of one token into another.

        Args:
            from_token_address: Token to sell
            to_token_address: Token to buy
            amount: Raw amount of the token to sell
            options: QuoteOptions, or a mapping keyed by API parameter name

        Returns:
            Quote response (fromToken, toToken, fromTokenAmount, toTokenAmount, ...)
        """
        if isinstance(options, SwapOptions):
            raise TypeError("quote() takes QuoteOptions, not SwapOptions")
        params = self._build_params(
            {
                "fromTokenAddress": from_token_address,
                "toTokenAddress": to_token_address,
                "amount": amount,
            },
            self._options_to_params(options),
        )
        return await self._request("/quote", params)

    async def swap(
        self,
        from_token_address: str,
        to_token_address: str,
        amount: str,
        from_address: str,
        slippage: Optional[float] = DEFAULT_SLIPPAGE,
        options: OptionsArg = None,
    ) -> Any:
        """Get calldata for a swap through the aggregation router.

        Args:
            from_token_address: Token to sell
            to_token_address: Token to buy
            amount: Raw amount of the token to sell
            from_address: Address that sends the swap transaction
            slippage: Maximum slippage in percent
            options: SwapOptions, or a mapping keyed by API parameter name

        Returns:
            Swap response including the unsigned ``tx``
        """
        params = self._build_params(
            {
                "fromTokenAddress": from_token_address,
                "toTokenAddress": to_token_address,
                "amount": amount,
                "fromAddress": from_address,
                "slippage": slippage,
            },
            self._options_to_params(options),
        )
        return await self._request("/swap", params)

    # ======================
    # Internals
    # ======================

    @staticmethod
    def _options_to_params(options: OptionsArg) -> dict[str, Any]:
        if options is None:
            return {}
        if isinstance(options, QuoteOptions):
            return options.to_params()
        return dict(options)

    @staticmethod
    def _build_params(
        required: Mapping[str, Any],
        optional: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Merge required and optional parameters.

        Raises:
            ConstructionError: If any required value is None
        """
        params: dict[str, Any] = {}

        for key, value in required.items():
            if value is None:
                raise ConstructionError(key)
            params[key] = value

        for key, value in (optional or {}).items():
            if value is not None:
                params[key] = value

        return params

    async def _request(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET an endpoint and decode the JSON body, classifying failures."""
        logger.debug(f"GET {self._base_url}{endpoint} params={params}")

        try:
            response = await self._http.get(endpoint, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"1inch request timed out: {endpoint} ({e})")
            raise OneInchTimeoutError(str(e) or f"request timed out after {self._timeout}s", e) from e
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning(f"1inch API error: {e.response.status_code} - {message}")
            raise OneInchApiError(
                message,
                e,
                status_code=e.response.status_code,
                response=e.response,
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"1inch request failed: {endpoint} ({e})")
            raise OneInchApiError(str(e) or e.__class__.__name__, e) from e

        try:
            return response.json()
        except ValueError as e:
            raise OneInchApiError(
                f"invalid JSON response from {endpoint}",
                e,
                status_code=response.status_code,
                response=response,
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Pick the most useful message from an error response.

    The body's ``message`` field wins; the HTTP status line is the fallback.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    return f"{response.status_code} {response.reason_phrase}".strip()
