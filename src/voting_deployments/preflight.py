"""Network preflight checks for voting-deployments library."""

import logging
import warnings

from eth_utils import from_wei

from .constants import MIN_BALANCE_WEI, NETWORK_CONFIG
from .exceptions import LowBalanceWarning
from .network import NetworkService, network_name_for_chain
from .types import PreflightReport

logger = logging.getLogger(__name__)


def run_preflight(
    network: NetworkService, deployer: str, min_balance_wei: int = MIN_BALANCE_WEI
) -> PreflightReport:
    """
    Read deployer balance, network identity and current gas price.

    A balance below min_balance_wei issues LowBalanceWarning but does not stop
    the run.

    Args:
        network: Network to query
        deployer: Deployer address
        min_balance_wei: Balance threshold for the warning

    Returns:
        PreflightReport

    Raises:
        NetworkUnavailableError: If any query fails
    """
    balance_wei = network.get_balance(deployer)
    chain_id = network.chain_id()
    network_name = network_name_for_chain(chain_id)
    gas_price_wei = network.gas_price()

    logger.debug(
        "Preflight: %s on %s (chain %d), balance %s wei, gas price %s wei",
        deployer,
        network_name,
        chain_id,
        balance_wei,
        gas_price_wei,
    )

    low_balance = balance_wei < min_balance_wei
    if low_balance:
        message = (
            f"Low balance: {from_wei(balance_wei, 'ether')} ETH "
            f"(minimum {from_wei(min_balance_wei, 'ether')} ETH)"
        )
        faucets = NETWORK_CONFIG.get(network_name, {}).get("faucets", [])
        if faucets:
            message += ". Get test ETH from: " + ", ".join(faucets)
        warnings.warn(message, LowBalanceWarning, stacklevel=2)

    return PreflightReport(
        deployer=deployer,
        balance_wei=balance_wei,
        network_name=network_name,
        chain_id=chain_id,
        gas_price_wei=gas_price_wei,
        low_balance=low_balance,
    )
