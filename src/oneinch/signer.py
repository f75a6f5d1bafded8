"""Wallet signer for submitting API-built transactions to an EVM chain.

The aggregation API returns unsigned transactions with string-encoded
numbers; they are normalized here, signed locally with eth_account and
broadcast through a JSON-RPC endpoint with web3.
"""

import asyncio
import logging
from typing import Any, Optional

from oneinch.exceptions import ConfigurationError, TransactionFailedError

logger = logging.getLogger(__name__)

# Transaction fields web3 expects as integers
INT_FIELDS = ("value", "gas", "gasPrice", "nonce", "chainId", "maxFeePerGas", "maxPriorityFeePerGas")
ADDRESS_FIELDS = ("from", "to")


class WalletSigner:
    """Signs and sends transactions from a single private key."""

    def __init__(self, private_key: str, rpc_url: str):
        self.rpc_url = rpc_url
        self._private_key = private_key
        self._web3 = None
        self._account = None

    @classmethod
    def from_settings(cls, settings) -> "WalletSigner":
        """Create a signer from application settings.

        Raises:
            ConfigurationError: If the RPC URL or private key is not set
        """
        if not settings.rpc_url:
            raise ConfigurationError("ONEINCH_RPC_URL is not set")
        if not settings.private_key or not settings.private_key.get_secret_value():
            raise ConfigurationError("ONEINCH_PRIVATE_KEY is not set")
        return cls(settings.private_key.get_secret_value(), settings.rpc_url)

    @property
    def web3(self):
        """Lazy load web3 instance."""
        if self._web3 is None:
            from web3 import Web3
            self._web3 = Web3(Web3.HTTPProvider(self.rpc_url))
        return self._web3

    @property
    def account(self):
        """eth_account LocalAccount for the private key."""
        if self._account is None:
            from eth_account import Account
            self._account = Account.from_key(self._private_key)
        return self._account

    @property
    def address(self) -> str:
        return self.account.address

    async def get_address(self) -> str:
        return self.address

    def prepare_transaction(self, tx: dict) -> dict:
        """Normalize an API transaction and fill in missing fields.

        Numeric strings (decimal or hex) become ints, addresses are
        checksummed, and from/nonce/chainId/gas/gasPrice are filled from
        the node when absent.
        """
        from web3 import Web3

        params: dict[str, Any] = {}
        for key, value in tx.items():
            if value is None:
                continue
            if key in INT_FIELDS:
                params[key] = _to_int(value)
            elif key in ADDRESS_FIELDS:
                params[key] = Web3.to_checksum_address(value)
            else:
                params[key] = value

        if "from" not in params:
            params["from"] = self.address

        if "nonce" not in params:
            params["nonce"] = self.web3.eth.get_transaction_count(params["from"], "pending")

        if "chainId" not in params:
            params["chainId"] = self.web3.eth.chain_id

        if "gas" not in params:
            params["gas"] = self.web3.eth.estimate_gas(params)

        if "gasPrice" not in params and "maxFeePerGas" not in params:
            params["gasPrice"] = self.web3.eth.gas_price

        return params

    async def sign_and_send_transaction(
        self,
        tx: dict,
        wait_for_receipt: bool = True,
        timeout: Optional[float] = None,
    ) -> dict:
        """Sign, broadcast and (optionally) wait for a transaction.

        Args:
            tx: Unsigned transaction as returned by the API
            wait_for_receipt: Whether to block until the tx is mined
            timeout: Receipt wait timeout; None uses web3's default

        Returns:
            Dict with ``transactionHash`` and, once mined, ``status`` and
            ``blockNumber``

        Raises:
            TransactionFailedError: If the mined transaction reverted
        """
        from web3 import Web3

        params = self.prepare_transaction(tx)
        signed_tx = self.account.sign_transaction(params)

        # eth_account renamed rawTransaction to raw_transaction
        raw_tx = getattr(signed_tx, "raw_transaction", None) or signed_tx.rawTransaction
        tx_hash = Web3.to_hex(self.web3.eth.send_raw_transaction(raw_tx))
        logger.info(f"Transaction sent: {tx_hash}")

        if not wait_for_receipt:
            return {"transactionHash": tx_hash}

        wait_kwargs = {} if timeout is None else {"timeout": timeout}
        receipt = await asyncio.to_thread(
            self.web3.eth.wait_for_transaction_receipt, tx_hash, **wait_kwargs
        )

        if receipt["status"] == 0:
            raise TransactionFailedError(f"Transaction {tx_hash} failed (reverted)")

        logger.info(f"Transaction {tx_hash} confirmed in block {receipt['blockNumber']}")
        return {
            "transactionHash": tx_hash,
            "status": receipt["status"],
            "blockNumber": receipt["blockNumber"],
        }


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)
