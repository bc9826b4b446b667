"""Data types and dataclasses for voting-deployments library."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Optional, Tuple

from eth_utils import from_wei


@dataclass(frozen=True)
class DeployTarget:
    """A contract to deploy and the arguments passed to its constructor."""

    name: str  # Contract name as compiled, e.g., "SimpleVoting"
    constructor_args: Tuple[Any, ...] = ()

    def __post_init__(self):
        # Lists from JSON parameter files become tuples so the target stays hashable
        object.__setattr__(self, "constructor_args", tuple(self.constructor_args))


@dataclass(frozen=True)
class GasQuote:
    """Gas price (and, once estimated, gas units) for one deployment."""

    price_wei: int
    estimated_units: Optional[int] = None

    @property
    def price_gwei(self) -> Decimal:
        return Decimal(from_wei(self.price_wei, "gwei"))

    def with_estimate(self, estimated_units: int) -> "GasQuote":
        return replace(self, estimated_units=estimated_units)


@dataclass(frozen=True)
class Receipt:
    """Confirmation record for a mined transaction."""

    transaction_hash: str
    status: int  # 1 on success, 0 on revert
    gas_used: int
    contract_address: Optional[str] = None
    block_number: Optional[int] = None


@dataclass(frozen=True)
class DeployResult:
    """A confirmed contract deployment."""

    # Required fields
    contract_name: str
    address: str  # Checksummed address
    gas_used: int
    transaction_hash: str

    # Submission details
    gas_limit: Optional[int] = None
    quote: Optional[GasQuote] = None
    block_number: Optional[int] = None
    constructor_args: Tuple[Any, ...] = ()  # As passed to the constructor

    @property
    def cost_wei(self) -> Optional[int]:
        if self.quote is None:
            return None
        return self.gas_used * self.quote.price_wei


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of the post-deploy status query for one contract."""

    contract_name: str
    passed: bool
    detail: Optional[str] = None


@dataclass(frozen=True)
class PreflightReport:
    """Network and account state observed before any deployment."""

    deployer: str
    balance_wei: int
    network_name: str
    chain_id: int
    gas_price_wei: int
    low_balance: bool = False

    @property
    def quote(self) -> GasQuote:
        return GasQuote(price_wei=self.gas_price_wei)


@dataclass(frozen=True)
class DeploymentManifest:
    """Structured summary of one completed deployment run."""

    network: str
    chain_id: int
    deployer: str
    timestamp: str  # ISO-8601, UTC
    deployments: Tuple[DeployResult, ...]
    verifications: Tuple[VerificationOutcome, ...]
    total_gas_used: int
    gas_price_wei: int  # Price observed at preflight
    total_cost_wei: int

    @property
    def total_cost_native(self) -> Decimal:
        return Decimal(from_wei(self.total_cost_wei, "ether"))

    @property
    def contracts(self) -> dict:
        return {d.contract_name: d.address for d in self.deployments}


@dataclass(frozen=True)
class Identity:
    """Signing identity derived from a recovery phrase."""

    address: str
    private_key: str = field(repr=False)
