"""Post-deploy verification for voting-deployments library."""

import logging

from .artifacts import DeployableContract
from .constants import STATUS_ACTIVE_INDEX
from .exceptions import VerificationFailedError
from .network import NetworkService
from .types import DeployResult, DeployTarget, VerificationOutcome

logger = logging.getLogger(__name__)


def verify(
    contract: DeployableContract,
    network: NetworkService,
    target: DeployTarget,
    result: DeployResult,
) -> VerificationOutcome:
    """
    Query a freshly deployed contract's status and compare it to its target.

    Verification is advisory: every error is reported in the outcome, never raised.

    Args:
        contract: Deployable contract that was deployed
        network: Network the contract lives on
        target: Target the contract was deployed from
        result: Deployment result holding the address

    Returns:
        VerificationOutcome (passed=False with the error message on failure)
    """
    try:
        status = contract.read_status(network, result.address)
        if not status:
            raise VerificationFailedError("status query returned an empty tuple")

        expected = target.constructor_args[0] if target.constructor_args else None
        if isinstance(expected, str) and status[0] != expected:
            raise VerificationFailedError(
                f"description mismatch: expected {expected!r}, got {status[0]!r}"
            )

        detail = f"description={status[0]!r}"
        if len(status) > STATUS_ACTIVE_INDEX:
            detail += f" active={status[STATUS_ACTIVE_INDEX]!r}"
    except Exception as e:
        logger.warning("Verification of %s at %s failed: %s", target.name, result.address, e)
        return VerificationOutcome(contract_name=target.name, passed=False, detail=str(e))

    return VerificationOutcome(contract_name=target.name, passed=True, detail=detail)
