"""Shared pytest fixtures for voting-deployments tests."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest
from eth_account import Account

from voting_deployments.exceptions import (
    DeploymentFailedError,
    EstimationFailedError,
    NetworkUnavailableError,
)
from voting_deployments.types import Receipt

# Hardhat's first default account
HARDHAT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

GWEI = 10**9


class FakeContract:
    """Deployable contract whose deploy transaction carries its name as data."""

    def __init__(self, name: str):
        self.name = name

    def deploy_transaction(self, constructor_args: Sequence[Any], sender: str) -> Dict[str, Any]:
        return {"from": sender, "data": self.name, "value": 0, "args": tuple(constructor_args)}

    def read_status(self, network, address: str) -> Sequence[Any]:
        return network.call(address, [], "getVotingInfo")


class FakeNetwork:
    """In-memory network: one contract per deploy transaction, keyed by contract name."""

    def __init__(
        self,
        balance_wei: int = 10**18,
        chain_id: int = 11155111,
        gas_price_wei: int = 20 * GWEI,
        estimates: Optional[Dict[str, int]] = None,
        gas_used: Optional[Dict[str, int]] = None,
    ):
        self.balance_wei = balance_wei
        self._chain_id = chain_id
        self.gas_price_wei = gas_price_wei
        self.estimates = estimates or {}
        self.gas_used = gas_used or {}

        self.unavailable = False
        self.fail_estimate: set = set()
        self.fail_send: set = set()
        self.revert: set = set()
        self.status_errors: Dict[str, Exception] = {}

        self.calls: List[tuple] = []
        self.sent: List[Dict[str, Any]] = []
        self.deployed: Dict[str, str] = {}  # address -> name
        self._args: Dict[str, tuple] = {}

    def _check(self) -> None:
        if self.unavailable:
            raise NetworkUnavailableError("connection refused")

    def get_balance(self, address: str) -> int:
        self._check()
        self.calls.append(("get_balance", address))
        return self.balance_wei

    def chain_id(self) -> int:
        self._check()
        self.calls.append(("chain_id",))
        return self._chain_id

    def gas_price(self) -> int:
        self._check()
        self.calls.append(("gas_price",))
        return self.gas_price_wei

    def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        name = transaction["data"]
        self.calls.append(("estimate_gas", name))
        if name in self.fail_estimate:
            raise EstimationFailedError(f"execution reverted: {name}")
        return self.estimates.get(name, 1_000_000)

    def send_transaction(self, transaction: Dict[str, Any], signer) -> Receipt:
        name = transaction["data"]
        self.calls.append(("send_transaction", name))
        self.sent.append(dict(transaction))
        if name in self.fail_send:
            raise DeploymentFailedError(f"transaction underpriced: {name}")

        index = len(self.sent)
        tx_hash = "0x" + f"{index:064x}"
        if name in self.revert:
            return Receipt(transaction_hash=tx_hash, status=0, gas_used=transaction["gas"])

        address = "0x" + f"{index:040x}"
        self.deployed[address] = name
        self._args[address] = transaction["args"]
        return Receipt(
            transaction_hash=tx_hash,
            status=1,
            gas_used=self.gas_used.get(name, 900_000),
            contract_address=address,
            block_number=100 + index,
        )

    def call(self, address: str, abi, function_name: str, *args: Any) -> Any:
        name = self.deployed[address]
        self.calls.append(("call", name))
        if name in self.status_errors:
            raise self.status_errors[name]
        description, duration = self._args[address]
        return (description, 1_700_000_000 + duration * 60, True, 0)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the path to the sample Hardhat artifacts directory."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def parameters_file(fixtures_dir: Path) -> Path:
    """Return path to the sample ignition parameters file."""
    return fixtures_dir / "parameters.json"


@pytest.fixture
def signer():
    """Local account for Hardhat's first default key."""
    return Account.from_key(HARDHAT_PRIVATE_KEY)


@pytest.fixture
def fake_network() -> FakeNetwork:
    """Healthy network at 20 gwei; the voting contracts use 1.2M and 0.9M gas."""
    return FakeNetwork(
        gas_used={"SimpleVoting": 1_200_000, "EncryptedSimpleVotingSimplified": 900_000},
    )


@pytest.fixture
def fake_contracts() -> Dict[str, FakeContract]:
    """Fake deployables for both voting contracts."""
    return {
        name: FakeContract(name) for name in ("SimpleVoting", "EncryptedSimpleVotingSimplified")
    }
