"""Unit tests for manifest assembly and persistence."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from voting_deployments.exceptions import ManifestNotFoundError
from voting_deployments.manifest import (
    build_manifest,
    explorer_url,
    format_summary,
    load_manifest,
    manifest_to_dict,
    save_manifest,
)
from voting_deployments.types import (
    DeployResult,
    GasQuote,
    PreflightReport,
    VerificationOutcome,
)

GWEI = 10**9
DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SIMPLE_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
ENCRYPTED_ADDRESS = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"


@pytest.fixture
def preflight() -> PreflightReport:
    return PreflightReport(
        deployer=DEPLOYER,
        balance_wei=10**18,
        network_name="sepolia",
        chain_id=11155111,
        gas_price_wei=20 * GWEI,
    )


@pytest.fixture
def results():
    return [
        DeployResult(
            contract_name="SimpleVoting",
            address=SIMPLE_ADDRESS,
            gas_used=1_200_000,
            transaction_hash="0x" + "a" * 64,
            gas_limit=1_250_000,
            quote=GasQuote(price_wei=20 * GWEI, estimated_units=1_200_000),
            block_number=5_000_001,
            constructor_args=("Test?", 60),
        ),
        DeployResult(
            contract_name="EncryptedSimpleVotingSimplified",
            address=ENCRYPTED_ADDRESS,
            gas_used=900_000,
            transaction_hash="0x" + "b" * 64,
            gas_limit=960_000,
            # Price drifted after preflight; the manifest still uses the preflight price
            quote=GasQuote(price_wei=35 * GWEI, estimated_units=910_000),
            block_number=5_000_002,
            constructor_args=("Test? (Encrypted)", 60),
        ),
    ]


@pytest.fixture
def verifications():
    return [
        VerificationOutcome("SimpleVoting", True, "description='Test?' active=True"),
        VerificationOutcome("EncryptedSimpleVotingSimplified", False, "execution reverted"),
    ]


class TestBuildManifest:
    """Test the build_manifest function."""

    def test_totals(self, preflight, results, verifications):
        """Test that total gas is the sum and cost uses the preflight price."""
        manifest = build_manifest(preflight, results, verifications)

        assert manifest.total_gas_used == 2_100_000
        assert manifest.total_gas_used == sum(r.gas_used for r in results)
        assert manifest.gas_price_wei == 20 * GWEI
        assert manifest.total_cost_wei == 2_100_000 * 20 * GWEI
        assert manifest.total_cost_native == Decimal("0.042")

    def test_preserves_order(self, preflight, results, verifications):
        """Test that deployments keep their order."""
        manifest = build_manifest(preflight, results, verifications)

        assert [d.contract_name for d in manifest.deployments] == [
            "SimpleVoting",
            "EncryptedSimpleVotingSimplified",
        ]
        assert list(manifest.contracts) == ["SimpleVoting", "EncryptedSimpleVotingSimplified"]

    def test_context_from_preflight(self, preflight, results, verifications):
        """Test that network, chain and deployer come from preflight."""
        manifest = build_manifest(preflight, results, verifications, timestamp="2026-01-01T00:00:00+00:00")

        assert manifest.network == "sepolia"
        assert manifest.chain_id == 11155111
        assert manifest.deployer == DEPLOYER
        assert manifest.timestamp == "2026-01-01T00:00:00+00:00"

    def test_default_timestamp_is_utc(self, preflight, results, verifications):
        """Test that the default timestamp is ISO-8601 UTC."""
        manifest = build_manifest(preflight, results, verifications)

        assert manifest.timestamp.endswith("+00:00")

    def test_sequences_are_immutable(self, preflight, results, verifications):
        """Test that the manifest does not share the caller's lists."""
        manifest = build_manifest(preflight, results, verifications)
        results.append(results[0])

        assert isinstance(manifest.deployments, tuple)
        assert len(manifest.deployments) == 2

    def test_empty_run(self, preflight):
        """Test that an empty run has zero totals."""
        manifest = build_manifest(preflight, [], [])

        assert manifest.total_gas_used == 0
        assert manifest.total_cost_wei == 0


class TestManifestDocument:
    """Test the JSON document shape."""

    def test_document_fields(self, preflight, results, verifications):
        """Test the top-level fields used by the frontend."""
        doc = manifest_to_dict(build_manifest(preflight, results, verifications))

        assert doc["network"] == "sepolia"
        assert doc["chainId"] == 11155111
        assert doc["contracts"] == {
            "SimpleVoting": SIMPLE_ADDRESS,
            "EncryptedSimpleVotingSimplified": ENCRYPTED_ADDRESS,
        }
        assert doc["totalGasUsed"] == 2_100_000
        assert doc["totalCostNative"] == "0.042"

    def test_deployment_entries(self, preflight, results, verifications):
        """Test per-deployment entries including explorer links."""
        doc = manifest_to_dict(build_manifest(preflight, results, verifications))
        entry = doc["deployments"][0]

        assert entry["gasUsed"] == 1_200_000
        assert entry["gasLimit"] == 1_250_000
        assert entry["estimatedGas"] == 1_200_000
        assert entry["explorerUrl"] == f"https://sepolia.etherscan.io/address/{SIMPLE_ADDRESS}"

    def test_constructor_arguments_recorded(self, preflight, results, verifications):
        """Test that each entry records its description and duration."""
        doc = manifest_to_dict(build_manifest(preflight, results, verifications))

        assert doc["deployments"][0]["constructorArgs"] == ["Test?", 60]
        assert doc["deployments"][1]["constructorArgs"] == ["Test? (Encrypted)", 60]

    def test_verification_entries(self, preflight, results, verifications):
        """Test that failed verifications are recorded."""
        doc = manifest_to_dict(build_manifest(preflight, results, verifications))

        assert doc["verifications"][1] == {
            "contractName": "EncryptedSimpleVotingSimplified",
            "passed": False,
            "detail": "execution reverted",
        }

    def test_no_explorer_for_local_network(self):
        """Test that local networks get no explorer URL."""
        assert explorer_url("localhost", SIMPLE_ADDRESS) is None
        assert explorer_url("unknown", SIMPLE_ADDRESS) is None


class TestSaveAndLoad:
    """Test manifest persistence."""

    def test_save_writes_json(self, tmp_path: Path, preflight, results, verifications):
        """Test that save_manifest writes indented JSON, creating directories."""
        path = tmp_path / "deployments" / "sepolia.json"
        manifest = build_manifest(preflight, results, verifications)

        written = save_manifest(manifest, path)

        assert written == path
        with open(path) as f:
            assert json.load(f) == manifest_to_dict(manifest)

    def test_load_restores_manifest(self, tmp_path: Path, preflight, results, verifications):
        """Test that a saved manifest loads back equal."""
        path = tmp_path / "sepolia.json"
        manifest = build_manifest(preflight, results, verifications)
        save_manifest(manifest, path)

        assert load_manifest(path) == manifest

    def test_load_restores_constructor_arguments(
        self, tmp_path: Path, preflight, results, verifications
    ):
        """Test that constructor arguments survive a save and load as tuples."""
        path = tmp_path / "sepolia.json"
        save_manifest(build_manifest(preflight, results, verifications), path)

        loaded = load_manifest(path)

        assert loaded.deployments[0].constructor_args == ("Test?", 60)
        assert loaded.deployments[1].constructor_args == ("Test? (Encrypted)", 60)

    def test_load_missing_raises(self, tmp_path: Path):
        """Test that a missing manifest raises ManifestNotFoundError."""
        with pytest.raises(ManifestNotFoundError):
            load_manifest(tmp_path / "missing.json")


class TestFormatSummary:
    """Test the operator summary."""

    def test_summary_contents(self, preflight, results, verifications):
        """Test that the summary lists contracts, totals and verification."""
        summary = format_summary(build_manifest(preflight, results, verifications))

        assert SIMPLE_ADDRESS in summary
        assert "Gas used: 1200000" in summary
        assert "Total gas: 2100000" in summary
        assert "Total ETH: 0.042" in summary
        assert "Gas price: 20 gwei" in summary
        assert "EncryptedSimpleVotingSimplified: FAILED (execution reverted)" in summary
        assert "https://sepolia.etherscan.io/address/" in summary
