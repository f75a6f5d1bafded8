"""Tests for the wallet signer (web3 is faked, eth_account signs for real)."""

import pytest
from eth_account import Account
from pydantic import SecretStr

from oneinch.config import Settings
from oneinch.exceptions import ConfigurationError, TransactionFailedError
from oneinch.signer import WalletSigner

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
ROUTER = "0x1111111254fb6c44bac0bed2854e76f90643097d"


class FakeEth:
    """Minimal stand-in for ``web3.eth``."""

    def __init__(self, receipt_status: int = 1):
        self.chain_id = 1
        self.gas_price = 20 * 10**9
        self.receipt_status = receipt_status
        self.estimated: list[dict] = []
        self.raw_sent: list[bytes] = []

    def get_transaction_count(self, address, block_identifier="latest"):
        return 7

    def estimate_gas(self, tx):
        self.estimated.append(dict(tx))
        return 54000

    def send_raw_transaction(self, raw_tx):
        self.raw_sent.append(raw_tx)
        return b"\x12" * 32

    def wait_for_transaction_receipt(self, tx_hash, timeout=120):
        return {"status": self.receipt_status, "blockNumber": 123, "transactionHash": tx_hash}


class FakeWeb3:
    def __init__(self, eth: FakeEth):
        self.eth = eth


@pytest.fixture
def fake_eth() -> FakeEth:
    return FakeEth()


@pytest.fixture
def signer(fake_eth) -> WalletSigner:
    signer = WalletSigner(TEST_PRIVATE_KEY, "http://localhost:8545")
    signer._web3 = FakeWeb3(fake_eth)
    return signer


class TestPrepareTransaction:
    """API transactions are normalized before signing."""

    def test_address_matches_private_key(self, signer):
        assert signer.address == Account.from_key(TEST_PRIVATE_KEY).address

    def test_numeric_strings_become_ints(self, signer):
        tx = signer.prepare_transaction({
            "to": ROUTER,
            "data": "0x095ea7b3",
            "value": "0",
            "gasPrice": "25000000000",
            "gas": 60000,
        })

        assert tx["value"] == 0
        assert tx["gasPrice"] == 25000000000
        assert tx["gas"] == 60000

    def test_hex_strings_become_ints(self, signer):
        tx = signer.prepare_transaction({"to": ROUTER, "value": "0x10", "gas": "0x5208"})
        assert tx["value"] == 16
        assert tx["gas"] == 21000

    def test_addresses_checksummed(self, signer):
        tx = signer.prepare_transaction({"to": ROUTER, "gas": 1})
        assert tx["to"] == "0x1111111254fb6c44bAC0beD2854e76F90643097d"

    def test_fills_missing_fields(self, signer, fake_eth):
        tx = signer.prepare_transaction({"to": ROUTER, "data": "0x", "value": "0"})

        assert tx["from"] == signer.address
        assert tx["nonce"] == 7
        assert tx["chainId"] == 1
        assert tx["gas"] == 54000
        assert tx["gasPrice"] == fake_eth.gas_price

    def test_keeps_eip1559_fees(self, signer):
        tx = signer.prepare_transaction({"to": ROUTER, "gas": 1, "maxFeePerGas": "100"})
        assert "gasPrice" not in tx
        assert tx["maxFeePerGas"] == 100

    def test_drops_none_values(self, signer):
        tx = signer.prepare_transaction({"to": ROUTER, "gas": 1, "gasPrice": None})
        assert tx["gasPrice"] == 20 * 10**9


class TestSignAndSend:
    """Signing and submission."""

    @pytest.mark.asyncio
    async def test_sends_signed_transaction(self, signer, fake_eth):
        result = await signer.sign_and_send_transaction(
            {"to": ROUTER, "data": "0x", "value": "0", "gasPrice": "1000000000"}
        )

        assert result["transactionHash"] == "0x" + "12" * 32
        assert result["status"] == 1
        assert result["blockNumber"] == 123
        assert len(fake_eth.raw_sent) == 1

    @pytest.mark.asyncio
    async def test_without_waiting(self, signer):
        result = await signer.sign_and_send_transaction(
            {"to": ROUTER, "value": "0", "gas": 21000, "gasPrice": "1"},
            wait_for_receipt=False,
        )
        assert set(result) == {"transactionHash"}

    @pytest.mark.asyncio
    async def test_reverted_transaction_raises(self, signer, fake_eth):
        fake_eth.receipt_status = 0

        with pytest.raises(TransactionFailedError):
            await signer.sign_and_send_transaction(
                {"to": ROUTER, "value": "0", "gas": 21000, "gasPrice": "1"}
            )


class TestFromSettings:
    """Signer construction from settings."""

    def test_requires_rpc_url(self):
        settings = Settings(private_key=SecretStr(TEST_PRIVATE_KEY))
        with pytest.raises(ConfigurationError):
            WalletSigner.from_settings(settings)

    def test_requires_private_key(self):
        settings = Settings(rpc_url="http://localhost:8545")
        with pytest.raises(ConfigurationError):
            WalletSigner.from_settings(settings)

    def test_builds_signer(self):
        settings = Settings(rpc_url="http://localhost:8545", private_key=TEST_PRIVATE_KEY)
        signer = WalletSigner.from_settings(settings)
        assert signer.rpc_url == "http://localhost:8545"
        assert signer.address == Account.from_key(TEST_PRIVATE_KEY).address
