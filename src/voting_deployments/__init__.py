"""
voting-deployments: gas-bounded deployment of the voting contracts with a JSON manifest
"""

from importlib.metadata import PackageNotFoundError, version

from .config import DeployConfig, load_config
from .events import DeploymentEvent, RunState, logging_observer
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    DefectiveArtifactError,
    DeploymentError,
    DeploymentFailedError,
    EstimationFailedError,
    InvalidRecoveryPhraseError,
    LowBalanceWarning,
    ManifestNotFoundError,
    NetworkUnavailableError,
    VerificationFailedError,
)
from .keys import derive_identity
from .manifest import build_manifest, load_manifest, save_manifest
from .orchestrator import DeploymentOrchestrator, deploy_all
from .types import (
    DeploymentManifest,
    DeployResult,
    DeployTarget,
    GasQuote,
    VerificationOutcome,
)

try:
    __version__ = version("voting-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "deploy_all",
    "DeployConfig",
    "load_config",
    "derive_identity",
    "build_manifest",
    "save_manifest",
    "load_manifest",
    "DeploymentEvent",
    "RunState",
    "logging_observer",
    "DeployTarget",
    "GasQuote",
    "DeployResult",
    "VerificationOutcome",
    "DeploymentManifest",
    "DeploymentError",
    "NetworkUnavailableError",
    "EstimationFailedError",
    "DeploymentFailedError",
    "VerificationFailedError",
    "InvalidRecoveryPhraseError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "ManifestNotFoundError",
    "LowBalanceWarning",
]
