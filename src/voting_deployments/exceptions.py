"""Custom exception classes for voting-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class NetworkUnavailableError(DeploymentError, ConnectionError):
    """Raised when the RPC endpoint is unreachable or answers malformed data."""

    pass


class EstimationFailedError(DeploymentError, RuntimeError):
    """Raised when gas estimation for a deployment transaction fails."""

    pass


class DeploymentFailedError(DeploymentError, RuntimeError):
    """Raised when a submitted deployment transaction is not mined successfully."""

    pass


class VerificationFailedError(DeploymentError, RuntimeError):
    """Raised when a deployed contract's status query does not match expectations."""

    pass


class InvalidRecoveryPhraseError(DeploymentError, ValueError):
    """Raised when a recovery phrase cannot be turned into a key-derivation seed."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when deployment configuration is missing or invalid."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a contract's compile artifact is not found."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when a compile artifact has no ABI or no deployable bytecode."""

    pass


class ManifestNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a deployment manifest file is not found."""

    pass


class LowBalanceWarning(UserWarning):
    """Issued when the deployer balance is below the configured minimum."""

    pass
