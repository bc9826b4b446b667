"""Command-line interface for voting-deployments library."""

import argparse
import getpass
import logging
import os
import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from eth_utils import from_wei

from .config import load_config
from .constants import DEFAULT_ACCOUNT_PATH, GAS_BUFFER, NETWORK_CONFIG
from .events import logging_observer
from .exceptions import ConfigurationError, DeploymentError, InvalidRecoveryPhraseError
from .keys import check_balance, derive_identity
from .manifest import format_summary
from .network import DEFAULT_RECEIPT_TIMEOUT
from .orchestrator import deploy_all

logger = logging.getLogger(__name__)

MNEMONIC_ENV = "MNEMONIC"


def cmd_deploy(args: argparse.Namespace) -> int:
    try:
        config = load_config(
            network=args.network,
            rpc_url=args.rpc_url,
            parameters_path=args.parameters,
            artifacts_dir=args.artifacts,
            output_dir=args.output,
            gas_buffer=args.gas_buffer,
            receipt_timeout=args.receipt_timeout,
        )
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    try:
        manifest = deploy_all(config, observer=logging_observer)
    except DeploymentError as e:
        logger.error("Deployment failed: %s", e)
        return 1

    print(format_summary(manifest))
    print(f"\nManifest written to {config.output_path}")
    return 0


def cmd_derive_key(args: argparse.Namespace) -> int:
    phrase = os.environ.get(args.phrase_env)
    if not phrase:
        phrase = getpass.getpass("Recovery phrase: ")

    try:
        identity = derive_identity(phrase, account_path=args.path)
    except InvalidRecoveryPhraseError as e:
        logger.error("%s", e)
        return 1

    print(f"Address: {identity.address}")
    if args.show_private_key:
        print(f"Private key: {identity.private_key}")

    if args.no_balance:
        return 0

    balance = check_balance(identity.address, args.rpc_url)
    if balance is None:
        print("Balance: unavailable")
    else:
        print(f"Sepolia balance: {from_wei(balance, 'ether')} ETH")
        if balance == 0:
            print("No ETH balance. Get test ETH from:")
            for faucet in NETWORK_CONFIG["sepolia"]["faucets"]:
                print(f"   - {faucet}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voting-deploy", description="Deploy the voting contracts and write a manifest."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--env-file", help="load environment variables from this .env file")
    sub = parser.add_subparsers(dest="command", required=True)

    deploy = sub.add_parser("deploy", help="deploy contracts in order and write the manifest")
    deploy.add_argument("--network", default="sepolia", choices=sorted(NETWORK_CONFIG))
    deploy.add_argument("--rpc-url", help="RPC endpoint (default: the network's *_RPC_URL variable)")
    deploy.add_argument("--parameters", help="ignition-style parameters JSON file")
    deploy.add_argument("--artifacts", help="Hardhat artifacts directory (default: ./artifacts)")
    deploy.add_argument("--output", help="manifest directory (default: ./deployments)")
    deploy.add_argument(
        "--gas-buffer", type=int, default=GAS_BUFFER, help="gas units added to estimates"
    )
    deploy.add_argument(
        "--receipt-timeout",
        type=float,
        default=DEFAULT_RECEIPT_TIMEOUT,
        help="seconds to wait for each receipt",
    )
    deploy.set_defaults(func=cmd_deploy)

    derive = sub.add_parser("derive-key", help="derive a deployer key from a recovery phrase")
    derive.add_argument(
        "--phrase-env",
        default=MNEMONIC_ENV,
        help=f"environment variable holding the phrase (default: {MNEMONIC_ENV}; prompts if unset)",
    )
    derive.add_argument("--path", default=DEFAULT_ACCOUNT_PATH, help="BIP-44 derivation path")
    derive.add_argument("--rpc-url", help="RPC endpoint for the balance check")
    derive.add_argument("--no-balance", action="store_true", help="skip the balance check")
    derive.add_argument(
        "--show-private-key", action="store_true", help="print the derived private key"
    )
    derive.set_defaults(func=cmd_derive_key)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)

    env_file = args.env_file or find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
