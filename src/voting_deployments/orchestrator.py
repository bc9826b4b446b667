"""Main API for voting-deployments library."""

import logging
from typing import Callable, List, Optional, Sequence

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .artifacts import DeployableContract, load_artifact
from .config import DeployConfig
from .constants import GAS_BUFFER, MIN_BALANCE_WEI
from .deployer import GasBoundedDeployer
from .events import DeploymentEvent, Observer, RunState
from .manifest import build_manifest, save_manifest
from .network import NetworkService, Web3Network
from .preflight import run_preflight
from .types import DeploymentManifest, DeployResult, DeployTarget, VerificationOutcome
from .verifier import verify

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Deploys a fixed, ordered list of contracts and assembles the manifest."""

    def __init__(
        self,
        network: NetworkService,
        signer: LocalAccount,
        targets: Sequence[DeployTarget],
        resolve_contract: Callable[[str], DeployableContract],
        observer: Optional[Observer] = None,
        gas_buffer: int = GAS_BUFFER,
        min_balance_wei: int = MIN_BALANCE_WEI,
    ):
        """
        Initialize the orchestrator.

        Args:
            network: Network to deploy to
            signer: Account that signs every deployment
            targets: Contracts to deploy, in the order they must be deployed
            resolve_contract: Maps a target name to its deployable contract
            observer: Called with a DeploymentEvent on every state transition
            gas_buffer: Units added to each gas estimate
            min_balance_wei: Preflight low-balance threshold

        Raises:
            ValueError: If targets is empty or contains duplicate names
        """
        names = [t.name for t in targets]
        if not names:
            raise ValueError("At least one deploy target is required")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate deploy target names: {names}")

        self._network = network
        self._signer = signer
        self._targets = tuple(targets)
        self._resolve_contract = resolve_contract
        self._observer = observer
        self._min_balance_wei = min_balance_wei
        self._deployer = GasBoundedDeployer(network, signer, resolve_contract, gas_buffer)

        self.state = RunState.INIT
        self.results: List[DeployResult] = []
        self.verifications: List[VerificationOutcome] = []
        self.manifest: Optional[DeploymentManifest] = None

    def _emit(self, state: RunState, **kwargs) -> None:
        self.state = state
        if self._observer is not None:
            self._observer(DeploymentEvent(state=state, **kwargs))

    def run(self) -> DeploymentManifest:
        """
        Run preflight, deploy and verify each target in order, then build the manifest.

        Deployments are strictly sequential: each transaction is confirmed
        before the next is built. Verification failures are recorded and the
        run continues; any other error aborts it. Contracts deployed
        before an abort are not rolled back and stay available in `results`.

        Returns:
            DeploymentManifest

        Raises:
            NetworkUnavailableError: If preflight cannot reach the network
            EstimationFailedError: If gas estimation fails for a target
            DeploymentFailedError: If a deployment transaction is not mined
            RuntimeError: If the orchestrator has already run
        """
        if self.state is not RunState.INIT:
            raise RuntimeError(f"Orchestrator already ran (state: {self.state.value})")

        try:
            self._emit(RunState.PREFLIGHT)
            preflight = run_preflight(self._network, self._signer.address, self._min_balance_wei)
            self._emit(RunState.PREFLIGHT, preflight=preflight)

            for index, target in enumerate(self._targets):
                self._emit(RunState.DEPLOYING, target=target.name, index=index)
                result = self._deployer.deploy(target, preflight.quote)
                self.results.append(result)
                self._emit(RunState.DEPLOYING, target=target.name, index=index, result=result)

                contract = self._resolve_contract(target.name)
                outcome = verify(contract, self._network, target, result)
                self.verifications.append(outcome)
                self._emit(RunState.VERIFYING, target=target.name, index=index, outcome=outcome)

            self._emit(RunState.FINALIZING)
            self.manifest = build_manifest(preflight, self.results, self.verifications)
        except Exception as e:
            self._abort(e)
            raise

        self._emit(RunState.DONE)
        return self.manifest

    def _abort(self, error: Exception) -> None:
        # Deployed contracts are not in any manifest; keep them in the log
        for result in self.results:
            logger.warning(
                "Deployed before abort: %s at %s (tx %s, gas used %d)",
                result.contract_name,
                result.address,
                result.transaction_hash,
                result.gas_used,
            )
        try:
            self._emit(RunState.ABORTED, error=error)
        except Exception:
            logger.exception("Observer failed while reporting the abort")


def deploy_all(config: DeployConfig, observer: Optional[Observer] = None) -> DeploymentManifest:
    """
    Deploy the configured contracts and save the manifest.

    All artifacts are loaded before anything is sent to the network.

    Args:
        config: Deployment configuration
        observer: Event observer (e.g., logging_observer)

    Returns:
        DeploymentManifest, also written to config.output_path

    Raises:
        DeploymentError: If the run aborts or an artifact is missing
    """
    contracts = {
        target.name: load_artifact(target.name, config.artifacts_dir)
        for target in config.targets
    }

    orchestrator = DeploymentOrchestrator(
        network=Web3Network.from_url(config.rpc_url, receipt_timeout=config.receipt_timeout),
        signer=Account.from_key(config.private_key),
        targets=config.targets,
        resolve_contract=contracts.__getitem__,
        observer=observer,
        gas_buffer=config.gas_buffer,
        min_balance_wei=config.min_balance_wei,
    )
    manifest = orchestrator.run()

    path = save_manifest(manifest, config.output_path)
    logger.info("Deployment manifest saved to %s", path)
    return manifest
