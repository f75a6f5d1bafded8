"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

# Keep tests independent of the developer's environment
for _key in list(os.environ):
    if _key.startswith("ONEINCH_"):
        del os.environ[_key]

from oneinch.client import OneInchClient
from oneinch.models import Token

ETH_ADDRESS = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"
DAI_ADDRESS = "0x6b175474e89094c44da98b954eedeac495271d0f"
USDC_ADDRESS = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WALLET_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

TOKENS_RESPONSE = {
    "tokens": {
        ETH_ADDRESS: {
            "symbol": "ETH",
            "name": "Ethereum",
            "decimals": 18,
            "address": ETH_ADDRESS,
            "logoURI": "https://tokens.1inch.exchange/0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee.png",
        },
        DAI_ADDRESS: {
            "symbol": "DAI",
            "name": "Dai Stablecoin",
            "decimals": 18,
            "address": DAI_ADDRESS,
        },
        USDC_ADDRESS: {
            "symbol": "USDC",
            "name": "USD Coin",
            "decimals": 6,
            "address": USDC_ADDRESS,
        },
    }
}


class MockApi:
    """Fake aggregation API served through ``httpx.MockTransport``.

    Responses are registered per endpoint (path after ``/<version>/<chain>``);
    every request that reaches the transport is recorded.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, object] = {}

    def add(self, endpoint: str, json=None, status_code: int = 200, content: bytes = None):
        if content is None:
            self._routes[endpoint] = lambda: httpx.Response(status_code, json=json)
        else:
            self._routes[endpoint] = lambda: httpx.Response(status_code, content=content)

    def fail(self, endpoint: str, exc_type: type, message: str = ""):
        self._routes[endpoint] = (exc_type, message)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.split("/")
        endpoint = "/" + "/".join(parts[3:])

        route = self._routes.get(endpoint)
        if route is None:
            return httpx.Response(404, json={"statusCode": 404, "message": f"no route {endpoint}"})
        if isinstance(route, tuple):
            exc_type, message = route
            raise exc_type(message, request=request)
        return route()

    @property
    def last_params(self) -> dict:
        return dict(self.requests[-1].url.params)

    @property
    def last_endpoint(self) -> str:
        return "/" + "/".join(self.requests[-1].url.path.split("/")[3:])


class FakeSigner:
    """Stands in for WalletSigner; records transactions instead of sending."""

    def __init__(self, address: str = WALLET_ADDRESS):
        self.address = address
        self.sent: list[dict] = []

    async def get_address(self) -> str:
        return self.address

    async def sign_and_send_transaction(self, tx: dict, wait_for_receipt: bool = True) -> dict:
        self.sent.append(tx)
        return {"transactionHash": "0x" + "ab" * 32, "status": 1, "blockNumber": 100}


@pytest.fixture
def mock_api() -> MockApi:
    api = MockApi()
    api.add("/tokens", json=TOKENS_RESPONSE)
    return api


@pytest_asyncio.fixture
async def client(mock_api: MockApi) -> AsyncGenerator[OneInchClient, None]:
    """Client for chain 1 wired to the mock API."""
    client = OneInchClient(1, timeout=5.0, transport=httpx.MockTransport(mock_api.handler))
    yield client
    await client.aclose()


@pytest.fixture
def eth() -> Token:
    return Token(address=ETH_ADDRESS, symbol="ETH", decimals=18)


@pytest.fixture
def usdc() -> Token:
    return Token(address=USDC_ADDRESS, symbol="USDC", decimals=6)
