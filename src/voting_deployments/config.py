"""Deployment configuration for voting-deployments library."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from eth_account import Account

from .constants import (
    DEFAULT_PARAMETERS,
    ENCRYPTED_VOTING,
    GAS_BUFFER,
    IGNITION_MODULE,
    MIN_BALANCE_WEI,
    NETWORK_CONFIG,
    SIMPLE_VOTING,
)
from .exceptions import ConfigurationError
from .network import DEFAULT_RECEIPT_TIMEOUT
from .paths import get_default_artifacts_dir, get_manifest_path
from .types import DeployTarget

PRIVATE_KEY_ENV = "PRIVATE_KEY"


@dataclass(frozen=True)
class DeployConfig:
    """Everything needed for one deployment run."""

    network: str  # Key of NETWORK_CONFIG, e.g., "sepolia"
    rpc_url: str
    private_key: str = field(repr=False)
    targets: Tuple[DeployTarget, ...]
    artifacts_dir: Path
    output_path: Path  # Where the manifest JSON is written

    gas_buffer: int = GAS_BUFFER
    min_balance_wei: int = MIN_BALANCE_WEI
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT


def load_parameters(parameters_path: Optional[Union[Path, str]] = None) -> Dict[str, Any]:
    """
    Load constructor parameters, overlaying an ignition-style parameter file on the defaults.

    The file has the shape {"VotingContracts": {"description": ..., ...}}.

    Args:
        parameters_path: Path to parameters JSON file (optional)

    Returns:
        Dictionary with description, encryptedDescription, votingDurationMinutes

    Raises:
        ConfigurationError: If the file is unreadable or a value has the wrong type
    """
    parameters = dict(DEFAULT_PARAMETERS)

    if parameters_path is not None:
        try:
            with open(parameters_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read parameters file {parameters_path}: {e}") from e

        parameters.update(data.get(IGNITION_MODULE, {}))

    for key in ("description", "encryptedDescription"):
        if not isinstance(parameters[key], str):
            raise ConfigurationError(f"Parameter '{key}' must be a string")

    duration = parameters["votingDurationMinutes"]
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
        raise ConfigurationError("Parameter 'votingDurationMinutes' must be a non-negative integer")

    return parameters


def build_targets(parameters: Mapping[str, Any]) -> Tuple[DeployTarget, ...]:
    """
    Build the deploy targets, in deployment order.

    Args:
        parameters: Output of load_parameters()

    Returns:
        (SimpleVoting, EncryptedSimpleVotingSimplified) targets
    """
    duration = parameters["votingDurationMinutes"]
    return (
        DeployTarget(SIMPLE_VOTING, (parameters["description"], duration)),
        DeployTarget(ENCRYPTED_VOTING, (parameters["encryptedDescription"], duration)),
    )


def load_config(
    network: str = "sepolia",
    rpc_url: Optional[str] = None,
    private_key: Optional[str] = None,
    parameters_path: Optional[Union[Path, str]] = None,
    artifacts_dir: Optional[Union[Path, str]] = None,
    output_dir: Optional[Union[Path, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> DeployConfig:
    """
    Resolve a DeployConfig from arguments and environment variables.

    Explicit arguments win over the environment. The RPC URL falls back to the
    network's *_RPC_URL variable (e.g., $SEP_RPC_URL); the key falls back to
    $PRIVATE_KEY.

    Args:
        network: Network name ("sepolia" or "localhost")
        rpc_url: RPC endpoint URL
        private_key: Deployer private key (0x-prefixed hex)
        parameters_path: Ignition-style parameters JSON file
        artifacts_dir: Hardhat artifacts root (defaults to ./artifacts)
        output_dir: Manifest directory (defaults to ./deployments)
        environ: Environment mapping (defaults to os.environ)
        **overrides: gas_buffer, min_balance_wei or receipt_timeout

    Returns:
        DeployConfig

    Raises:
        ConfigurationError: If the network is unknown, or the RPC URL or key is
                            missing or invalid
    """
    if environ is None:
        environ = os.environ

    if network not in NETWORK_CONFIG:
        raise ConfigurationError(
            f"Unknown network '{network}' (known: {', '.join(NETWORK_CONFIG)})"
        )
    network_config = NETWORK_CONFIG[network]

    if rpc_url is None:
        rpc_url = environ.get(network_config["default_rpc_env"]) or network_config.get(
            "default_rpc_url"
        )
    if not rpc_url:
        raise ConfigurationError(
            f"RPC URL required: set ${network_config['default_rpc_env']} environment variable, "
            "or pass rpc_url parameter"
        )

    if private_key is None:
        private_key = environ.get(PRIVATE_KEY_ENV)
    if not private_key:
        raise ConfigurationError(
            f"Deployer key required: set ${PRIVATE_KEY_ENV} environment variable, "
            "or pass private_key parameter"
        )
    try:
        Account.from_key(private_key)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid private key: {e}") from e

    unknown = set(overrides) - {"gas_buffer", "min_balance_wei", "receipt_timeout"}
    if unknown:
        raise TypeError(f"Unexpected configuration options: {sorted(unknown)}")

    return DeployConfig(
        network=network,
        rpc_url=rpc_url,
        private_key=private_key,
        targets=build_targets(load_parameters(parameters_path)),
        artifacts_dir=Path(artifacts_dir) if artifacts_dir else get_default_artifacts_dir(),
        output_path=get_manifest_path(network, output_dir),
        **overrides,
    )
