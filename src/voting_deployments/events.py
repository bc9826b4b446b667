"""Run states and transition events for voting-deployments library."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from eth_utils import from_wei

from .types import DeployResult, PreflightReport, VerificationOutcome

logger = logging.getLogger(__name__)


class RunState(Enum):
    """
    Orchestrator states.

    INIT -> PREFLIGHT -> (DEPLOYING -> VERIFYING)* -> FINALIZING -> DONE,
    with ABORTED reachable from any non-terminal state.
    """

    INIT = "init"
    PREFLIGHT = "preflight"
    DEPLOYING = "deploying"
    VERIFYING = "verifying"
    FINALIZING = "finalizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class DeploymentEvent:
    """Emitted by the orchestrator each time it finishes or enters a state."""

    state: RunState
    target: Optional[str] = None
    index: Optional[int] = None
    preflight: Optional[PreflightReport] = None
    result: Optional[DeployResult] = None
    outcome: Optional[VerificationOutcome] = None
    error: Optional[BaseException] = None


Observer = Callable[[DeploymentEvent], None]


def logging_observer(event: DeploymentEvent) -> None:
    """Render orchestrator events as log records."""
    if event.state is RunState.PREFLIGHT and event.preflight is not None:
        report = event.preflight
        logger.info("Deploying with account %s", report.deployer)
        logger.info("Account balance: %s ETH", from_wei(report.balance_wei, "ether"))
        logger.info("Network: %s, chain ID: %d", report.network_name, report.chain_id)
        logger.info("Current gas price: %s gwei", report.quote.price_gwei)
    elif event.state is RunState.DEPLOYING and event.result is None:
        logger.info("Deploying %s...", event.target)
    elif event.state is RunState.DEPLOYING:
        result = event.result
        logger.info("%s deployed to %s", result.contract_name, result.address)
        logger.info(
            "Gas used for %s: %d (limit %s)", result.contract_name, result.gas_used, result.gas_limit
        )
        if result.cost_wei is not None:
            logger.info("Cost: %s ETH", from_wei(result.cost_wei, "ether"))
    elif event.state is RunState.VERIFYING and event.outcome is not None:
        outcome = event.outcome
        if outcome.passed:
            logger.info("%s verified: %s", outcome.contract_name, outcome.detail)
        else:
            logger.warning(
                "%s verification failed, deployment stands: %s",
                outcome.contract_name,
                outcome.detail,
            )
    elif event.state is RunState.DONE:
        logger.info("All contracts deployed")
    elif event.state is RunState.ABORTED:
        logger.error("Deployment aborted: %s", event.error)
