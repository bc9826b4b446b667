"""Gas-bounded contract deployment for voting-deployments library."""

import logging
from typing import Callable

from eth_account.signers.local import LocalAccount

from .artifacts import DeployableContract
from .constants import GAS_BUFFER
from .exceptions import DeploymentFailedError
from .network import NetworkService
from .types import DeployResult, DeployTarget, GasQuote

logger = logging.getLogger(__name__)


class GasBoundedDeployer:
    """Deploys one contract at a time with gas limit = estimate + fixed buffer."""

    def __init__(
        self,
        network: NetworkService,
        signer: LocalAccount,
        resolve_contract: Callable[[str], DeployableContract],
        gas_buffer: int = GAS_BUFFER,
    ):
        """
        Initialize the deployer.

        Args:
            network: Network to deploy to
            signer: Account that signs and pays for deployments
            resolve_contract: Maps a target name to its deployable contract
            gas_buffer: Units added to each gas estimate
        """
        self._network = network
        self._signer = signer
        self._resolve_contract = resolve_contract
        self._gas_buffer = gas_buffer

    def deploy(self, target: DeployTarget, price_quote: GasQuote) -> DeployResult:
        """
        Estimate, submit and confirm the deployment of one target.

        Blocks until the network reports the transaction mined.

        Args:
            target: Contract to deploy
            price_quote: Gas price to submit with

        Returns:
            DeployResult built from the receipt

        Raises:
            EstimationFailedError: If the transaction cannot be built or estimated
            DeploymentFailedError: If the transaction is not mined successfully
        """
        contract = self._resolve_contract(target.name)
        tx = contract.deploy_transaction(target.constructor_args, self._signer.address)

        estimated_units = self._network.estimate_gas(tx)
        gas_limit = estimated_units + self._gas_buffer
        quote = price_quote.with_estimate(estimated_units)
        logger.debug(
            "%s: estimated %d gas, submitting with limit %d", target.name, estimated_units, gas_limit
        )

        tx["gas"] = gas_limit
        tx["gasPrice"] = price_quote.price_wei
        receipt = self._network.send_transaction(tx, self._signer)

        if receipt.status != 1:
            raise DeploymentFailedError(
                f"Deployment of {target.name} reverted in {receipt.transaction_hash} "
                f"(gas used {receipt.gas_used} of {gas_limit})"
            )
        if not receipt.contract_address:
            raise DeploymentFailedError(
                f"Receipt for {target.name} ({receipt.transaction_hash}) has no contract address"
            )

        return DeployResult(
            contract_name=target.name,
            address=receipt.contract_address,
            gas_used=receipt.gas_used,
            transaction_hash=receipt.transaction_hash,
            gas_limit=gas_limit,
            quote=quote,
            block_number=receipt.block_number,
            constructor_args=target.constructor_args,
        )
