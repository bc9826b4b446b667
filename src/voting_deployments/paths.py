"""Path management utilities for voting-deployments library."""

from pathlib import Path
from typing import Optional, Union


def get_default_output_dir() -> Path:
    """
    Get default manifest directory (current working directory).

    Returns:
        Path to ./deployments
    """
    return Path.cwd() / "deployments"


def get_default_artifacts_dir() -> Path:
    """
    Get default Hardhat artifacts directory.

    Returns:
        Path to ./artifacts
    """
    return Path.cwd() / "artifacts"


def get_manifest_path(
    network: str, output_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get manifest file path for a network.

    Args:
        network: Network name (e.g., "sepolia")
        output_root: Custom output directory (defaults to ./deployments)

    Returns:
        Path to {output_root}/{network}.json
    """
    if output_root is None:
        output_root = get_default_output_dir()
    else:
        output_root = Path(output_root).absolute()

    return output_root / f"{network}.json"
