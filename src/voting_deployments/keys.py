"""Operator key provisioning for voting-deployments library.

Nothing in the deployment pipeline calls this module; deriving keys from a
recovery phrase stays a manual operator step.
"""

import logging
import os
from typing import Optional

import requests
from eth_account import Account
from eth_utils import ValidationError

from .constants import DEFAULT_ACCOUNT_PATH, DEFAULT_BALANCE_RPC_URL, NETWORK_CONFIG
from .exceptions import InvalidRecoveryPhraseError
from .types import Identity

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()


def derive_identity(recovery_phrase: str, account_path: str = DEFAULT_ACCOUNT_PATH) -> Identity:
    """
    Derive address and private key from a BIP-39 recovery phrase.

    Args:
        recovery_phrase: Space-separated mnemonic words
        account_path: BIP-44 derivation path (defaults to the first account)

    Returns:
        Identity with checksummed address and 0x-prefixed private key

    Raises:
        InvalidRecoveryPhraseError: If the phrase or path is not valid
    """
    phrase = " ".join(recovery_phrase.split())
    if not phrase:
        raise InvalidRecoveryPhraseError("Recovery phrase is empty")

    try:
        account = Account.from_mnemonic(phrase, account_path=account_path)
    except (ValidationError, ValueError) as e:
        raise InvalidRecoveryPhraseError(f"Invalid recovery phrase: {e}") from e

    return Identity(address=account.address, private_key="0x" + bytes(account.key).hex())


def get_balance_wei(address: str, rpc_url: str) -> int:
    """
    Get an account balance via a raw eth_getBalance RPC call.

    Args:
        address: Account address
        rpc_url: RPC endpoint URL

    Returns:
        Balance in wei at the latest block

    Raises:
        KeyError: If RPC response is missing required fields
        ValueError: If RPC returns an error
        RuntimeError: If network error occurs
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": "eth_getBalance",
                "params": [address, "latest"],
                "id": 1,
            },
            timeout=30,
        )

        # Check for HTTP errors
        if response.status_code != 200:
            raise RuntimeError(f"RPC request failed with status {response.status_code}")

        result = response.json()

        # Check for RPC errors
        if isinstance(result, dict) and "error" in result:
            raise ValueError(f"RPC error: {result['error']}")

        if not isinstance(result, dict) or not isinstance(result.get("result"), str):
            raise ValueError(f"Malformed eth_getBalance response: {result!r}")

        return int(result["result"], 16)

    except requests.RequestException as e:
        raise RuntimeError(f"Network error during RPC call: {e}") from e


def check_balance(address: str, rpc_url: Optional[str] = None) -> Optional[int]:
    """
    Best-effort balance lookup for an operator-derived identity.

    Args:
        address: Account address
        rpc_url: RPC endpoint URL (defaults to $SEP_RPC_URL, then a public
                 Sepolia endpoint)

    Returns:
        Balance in wei, or None if the lookup failed
    """
    if rpc_url is None:
        rpc_url = os.environ.get(NETWORK_CONFIG["sepolia"]["default_rpc_env"]) or DEFAULT_BALANCE_RPC_URL

    try:
        return get_balance_wei(address, rpc_url)
    except (KeyError, ValueError, RuntimeError) as e:
        logger.warning("Balance check for %s failed: %s", address, e)
        return None
