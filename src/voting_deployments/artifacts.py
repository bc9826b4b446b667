"""Compile artifact parsing and deployable contracts for voting-deployments library."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from web3 import Web3
from web3.exceptions import Web3Exception

from .constants import STATUS_FUNCTION
from .exceptions import ArtifactNotFoundError, DefectiveArtifactError, EstimationFailedError
from .network import NetworkService
from .paths import get_default_artifacts_dir

logger = logging.getLogger(__name__)


class DeployableContract(Protocol):
    """
    Opaque deployable unit.

    The pipeline only builds a deployment transaction and reads back a status
    tuple; nothing else about the contract is known.
    """

    name: str

    def deploy_transaction(self, constructor_args: Sequence[Any], sender: str) -> Dict[str, Any]: ...

    def read_status(self, network: NetworkService, address: str) -> Sequence[Any]: ...


@dataclass(frozen=True)
class HardhatContract:
    """Contract compiled by Hardhat: ABI plus creation bytecode."""

    name: str
    abi: List[Dict[str, Any]] = field(repr=False)
    bytecode: str = field(repr=False)
    source_name: Optional[str] = None  # e.g., "contracts/SimpleVoting.sol"
    status_function: str = STATUS_FUNCTION

    def deploy_transaction(self, constructor_args: Sequence[Any], sender: str) -> Dict[str, Any]:
        """
        Build the unsigned deployment transaction.

        Args:
            constructor_args: Values for the constructor, in ABI order
            sender: Deployer address

        Returns:
            Transaction dict with from, data and value (no gas fields)

        Raises:
            EstimationFailedError: If the arguments do not match the constructor ABI
        """
        factory = Web3().eth.contract(abi=self.abi, bytecode=self.bytecode)
        try:
            data = factory.constructor(*constructor_args).data_in_transaction
        except (Web3Exception, TypeError, ValueError) as e:
            raise EstimationFailedError(
                f"Cannot encode constructor arguments for {self.name}: {e}"
            ) from e

        return {"from": sender, "data": data, "value": 0}

    def read_status(self, network: NetworkService, address: str) -> Sequence[Any]:
        return network.call(address, self.abi, self.status_function)


def find_artifact(name: str, artifacts_dir: Path) -> Path:
    """
    Locate the Hardhat artifact file for a contract.

    Hardhat writes artifacts to artifacts/contracts/<Source>.sol/<Name>.json;
    the matching <Name>.dbg.json debug files are not artifacts.

    Args:
        name: Contract name
        artifacts_dir: Hardhat artifacts root

    Returns:
        Path to the artifact JSON file

    Raises:
        ArtifactNotFoundError: If no artifact exists for the contract
    """
    matches = sorted(artifacts_dir.glob(f"**/{name}.json"))
    if not matches:
        raise ArtifactNotFoundError(
            f"No artifact for contract '{name}' under {artifacts_dir}. "
            "Run `npx hardhat compile` first."
        )
    if len(matches) > 1:
        logger.debug("Several artifacts for %s, using %s", name, matches[0])
    return matches[0]


def parse_hardhat_artifact(file_path: Path) -> HardhatContract:
    """
    Parse a Hardhat compile artifact.

    Args:
        file_path: Path to <Name>.json artifact

    Returns:
        HardhatContract with ABI and creation bytecode

    Raises:
        DefectiveArtifactError: If the ABI is missing or bytecode is empty
                                (interfaces and abstract contracts)
    """
    with open(file_path) as f:
        data = json.load(f)

    name = data.get("contractName", file_path.stem)

    abi = data.get("abi")
    if abi is None:
        raise DefectiveArtifactError(f"Missing ABI in artifact file: {file_path}")

    bytecode = data.get("bytecode") or ""
    if bytecode in ("", "0x"):
        raise DefectiveArtifactError(
            f"Contract '{name}' has no creation bytecode (interface or abstract?): {file_path}"
        )

    return HardhatContract(
        name=name,
        abi=abi,
        bytecode=bytecode,
        source_name=data.get("sourceName"),
    )


def load_artifact(name: str, artifacts_dir: Optional[Union[Path, str]] = None) -> HardhatContract:
    """
    Find and parse the artifact for a contract.

    Args:
        name: Contract name
        artifacts_dir: Hardhat artifacts root (defaults to ./artifacts)

    Returns:
        HardhatContract
    """
    if artifacts_dir is None:
        artifacts_dir = get_default_artifacts_dir()
    return parse_hardhat_artifact(find_artifact(name, Path(artifacts_dir)))
