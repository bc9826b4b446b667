"""JSON-RPC network access for voting-deployments library."""

import logging
from typing import Any, Dict, List, Protocol

import requests
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import Web3Exception

from .constants import NETWORK_CONFIG
from .exceptions import DeploymentFailedError, EstimationFailedError, NetworkUnavailableError
from .types import Receipt

logger = logging.getLogger(__name__)

# Seconds to wait for a deployment receipt before the run aborts
DEFAULT_RECEIPT_TIMEOUT = 600.0

# Seconds per HTTP request to the RPC endpoint
RPC_REQUEST_TIMEOUT = 30

_RPC_ERRORS = (Web3Exception, requests.RequestException, ValueError)


class NetworkService(Protocol):
    """Operations the deployment pipeline needs from a network endpoint."""

    def get_balance(self, address: str) -> int: ...

    def chain_id(self) -> int: ...

    def gas_price(self) -> int: ...

    def estimate_gas(self, transaction: Dict[str, Any]) -> int: ...

    def send_transaction(self, transaction: Dict[str, Any], signer: LocalAccount) -> Receipt: ...

    def call(self, address: str, abi: List[Dict[str, Any]], function_name: str, *args: Any) -> Any: ...


def network_name_for_chain(chain_id: int) -> str:
    """
    Look up the configured network name for a chain ID.

    Args:
        chain_id: EIP-155 chain ID

    Returns:
        Network name from NETWORK_CONFIG, or "unknown"
    """
    for name, config in NETWORK_CONFIG.items():
        if config["chain_id"] == chain_id:
            return name
    return "unknown"


class Web3Network:
    """NetworkService backed by a web3.py connection."""

    def __init__(self, w3: Web3, receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT):
        self.w3 = w3
        self.receipt_timeout = receipt_timeout

    @classmethod
    def from_url(cls, rpc_url: str, receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT) -> "Web3Network":
        """
        Connect to an HTTP JSON-RPC endpoint.

        Requests are not retried: a failing endpoint aborts the run.

        Args:
            rpc_url: RPC endpoint URL
            receipt_timeout: Seconds to wait for each transaction receipt

        Returns:
            Web3Network instance (no request is made yet)
        """
        provider = Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": RPC_REQUEST_TIMEOUT},
            exception_retry_configuration=None,
        )
        return cls(Web3(provider), receipt_timeout=receipt_timeout)

    def get_balance(self, address: str) -> int:
        try:
            return self.w3.eth.get_balance(address)
        except _RPC_ERRORS as e:
            raise NetworkUnavailableError(f"Failed to read balance of {address}: {e}") from e

    def chain_id(self) -> int:
        try:
            return self.w3.eth.chain_id
        except _RPC_ERRORS as e:
            raise NetworkUnavailableError(f"Failed to read chain ID: {e}") from e

    def gas_price(self) -> int:
        try:
            return self.w3.eth.gas_price
        except _RPC_ERRORS as e:
            raise NetworkUnavailableError(f"Failed to read gas price: {e}") from e

    def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        try:
            return self.w3.eth.estimate_gas(transaction)
        except _RPC_ERRORS as e:
            raise EstimationFailedError(f"Gas estimation failed: {e}") from e

    def send_transaction(self, transaction: Dict[str, Any], signer: LocalAccount) -> Receipt:
        """
        Sign, submit and wait for a transaction.

        Fills in nonce and chain ID when absent, then blocks until the receipt
        is available or receipt_timeout elapses.

        Args:
            transaction: Transaction dict including gas and gasPrice
            signer: Local account that signs the transaction

        Returns:
            Receipt of the mined transaction (status may be 0)

        Raises:
            DeploymentFailedError: If signing, submission or confirmation fails
        """
        tx = dict(transaction)
        try:
            if "nonce" not in tx:
                tx["nonce"] = self.w3.eth.get_transaction_count(signer.address, "pending")
            if "chainId" not in tx:
                tx["chainId"] = self.w3.eth.chain_id

            signed = signer.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            logger.debug("Submitted transaction %s", Web3.to_hex(tx_hash))

            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except _RPC_ERRORS + (TypeError,) as e:
            raise DeploymentFailedError(f"Transaction was not mined: {e}") from e

        return Receipt(
            transaction_hash=Web3.to_hex(receipt["transactionHash"]),
            status=receipt["status"],
            gas_used=receipt["gasUsed"],
            contract_address=receipt.get("contractAddress"),
            block_number=receipt.get("blockNumber"),
        )

    def call(self, address: str, abi: List[Dict[str, Any]], function_name: str, *args: Any) -> Any:
        """Call a read-only contract function; web3 errors propagate unchanged."""
        contract = self.w3.eth.contract(address=address, abi=abi)
        return contract.get_function_by_name(function_name)(*args).call()
