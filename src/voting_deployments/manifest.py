"""Deployment manifest assembly and persistence for voting-deployments library."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from eth_utils import from_wei

from .constants import NETWORK_CONFIG
from .exceptions import ManifestNotFoundError
from .types import (
    DeploymentManifest,
    DeployResult,
    GasQuote,
    PreflightReport,
    VerificationOutcome,
)


def explorer_url(network: str, address: str) -> Optional[str]:
    """
    Build the block explorer URL for an address.

    Returns:
        URL string, or None if the network has no known explorer
    """
    base_url = NETWORK_CONFIG.get(network, {}).get("block_explorer_url")
    if base_url is None:
        return None
    return f"{base_url}/address/{address}"


def build_manifest(
    preflight: PreflightReport,
    deployments: Sequence[DeployResult],
    verifications: Sequence[VerificationOutcome],
    timestamp: Optional[str] = None,
) -> DeploymentManifest:
    """
    Aggregate deployment results into a manifest.

    Costs use the gas price captured at preflight, so the totals stay
    consistent with each other even if the on-chain price moved meanwhile.

    Args:
        preflight: Preflight report of the run
        deployments: Deploy results, in deployment order
        verifications: Verification outcomes, in deployment order
        timestamp: ISO-8601 timestamp (defaults to now, UTC)

    Returns:
        DeploymentManifest
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")

    total_gas_used = sum(d.gas_used for d in deployments)

    return DeploymentManifest(
        network=preflight.network_name,
        chain_id=preflight.chain_id,
        deployer=preflight.deployer,
        timestamp=timestamp,
        deployments=tuple(deployments),
        verifications=tuple(verifications),
        total_gas_used=total_gas_used,
        gas_price_wei=preflight.gas_price_wei,
        total_cost_wei=total_gas_used * preflight.gas_price_wei,
    )


def manifest_to_dict(manifest: DeploymentManifest) -> Dict[str, Any]:
    """Convert a manifest to its JSON document shape."""
    deployments = []
    for d in manifest.deployments:
        entry: Dict[str, Any] = {
            "contractName": d.contract_name,
            "address": d.address,
            "gasUsed": d.gas_used,
            "transactionHash": d.transaction_hash,
            "constructorArgs": list(d.constructor_args),
        }

        # Add optional fields
        if d.gas_limit is not None:
            entry["gasLimit"] = d.gas_limit
        if d.quote is not None:
            entry["gasPriceWei"] = d.quote.price_wei
            if d.quote.estimated_units is not None:
                entry["estimatedGas"] = d.quote.estimated_units
        if d.block_number is not None:
            entry["blockNumber"] = d.block_number

        url = explorer_url(manifest.network, d.address)
        if url is not None:
            entry["explorerUrl"] = url

        deployments.append(entry)

    return {
        "network": manifest.network,
        "chainId": manifest.chain_id,
        "deployer": manifest.deployer,
        "timestamp": manifest.timestamp,
        "contracts": manifest.contracts,
        "deployments": deployments,
        "verifications": [
            {"contractName": v.contract_name, "passed": v.passed, "detail": v.detail}
            for v in manifest.verifications
        ],
        "totalGasUsed": manifest.total_gas_used,
        "gasPriceWei": manifest.gas_price_wei,
        "totalCostWei": manifest.total_cost_wei,
        "totalCostNative": str(manifest.total_cost_native),
    }


def manifest_from_dict(data: Dict[str, Any]) -> DeploymentManifest:
    """Rebuild a manifest from its JSON document shape."""
    deployments = []
    for entry in data["deployments"]:
        quote = None
        if "gasPriceWei" in entry:
            quote = GasQuote(
                price_wei=entry["gasPriceWei"],
                estimated_units=entry.get("estimatedGas"),
            )
        deployments.append(
            DeployResult(
                contract_name=entry["contractName"],
                address=entry["address"],
                gas_used=entry["gasUsed"],
                transaction_hash=entry["transactionHash"],
                gas_limit=entry.get("gasLimit"),
                quote=quote,
                block_number=entry.get("blockNumber"),
                constructor_args=tuple(entry.get("constructorArgs", ())),
            )
        )

    return DeploymentManifest(
        network=data["network"],
        chain_id=data["chainId"],
        deployer=data["deployer"],
        timestamp=data["timestamp"],
        deployments=tuple(deployments),
        verifications=tuple(
            VerificationOutcome(
                contract_name=v["contractName"], passed=v["passed"], detail=v.get("detail")
            )
            for v in data.get("verifications", [])
        ),
        total_gas_used=data["totalGasUsed"],
        gas_price_wei=data["gasPriceWei"],
        total_cost_wei=data["totalCostWei"],
    )


def save_manifest(manifest: DeploymentManifest, path: Union[Path, str]) -> Path:
    """
    Write a manifest as indented JSON.

    Creates parent directories if they don't exist.

    Returns:
        Path the manifest was written to
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(manifest_to_dict(manifest), f, indent=2)
    return path


def load_manifest(path: Union[Path, str]) -> DeploymentManifest:
    """
    Read a manifest written by save_manifest.

    Raises:
        ManifestNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise ManifestNotFoundError(f"Deployment manifest not found at {path}")

    with open(path) as f:
        return manifest_from_dict(json.load(f))


def format_summary(manifest: DeploymentManifest) -> str:
    """Render the operator-facing deployment summary."""
    lines = [
        "Deployment Summary",
        "=" * 45,
        f"Network:  {manifest.network} (chain {manifest.chain_id})",
        f"Deployer: {manifest.deployer}",
        f"Time:     {manifest.timestamp}",
    ]

    for d in manifest.deployments:
        cost_wei = d.gas_used * manifest.gas_price_wei
        lines += [
            "",
            f"{d.contract_name}:",
            f"   Address:  {d.address}",
            f"   Gas used: {d.gas_used}",
            f"   Cost:     {from_wei(cost_wei, 'ether')} ETH",
        ]
        url = explorer_url(manifest.network, d.address)
        if url is not None:
            lines.append(f"   Explorer: {url}")

    lines += [
        "",
        "Total Deployment Cost:",
        f"   Total gas: {manifest.total_gas_used}",
        f"   Gas price: {from_wei(manifest.gas_price_wei, 'gwei')} gwei",
        f"   Total ETH: {manifest.total_cost_native}",
    ]

    if manifest.verifications:
        lines += ["", "Verification:"]
        for v in manifest.verifications:
            mark = "ok" if v.passed else "FAILED"
            detail = f" ({v.detail})" if v.detail else ""
            lines.append(f"   {v.contract_name}: {mark}{detail}")

    return "\n".join(lines)
