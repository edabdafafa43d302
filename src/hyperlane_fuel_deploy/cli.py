"""
Deploy the Hyperlane mailbox and test recipient to a local Fuel node.

Contracts already on chain are reused, not redeployed. Pass `send-message`
to also dispatch a test message through the test recipient.

Usage:
    hyperlane-fuel-deploy
    hyperlane-fuel-deploy send-message --node-url http://127.0.0.1:4000/graphql
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DeployConfig
from .constants import SEND_MESSAGE_COMMAND
from .deployer import run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hyperlane-fuel-deploy",
        description="Deploy the Hyperlane mailbox to a local Fuel node",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help=f"'{SEND_MESSAGE_COMMAND}' to dispatch a test message after deploying",
    )
    parser.add_argument(
        "--node-url",
        default=None,
        help="Fuel node GraphQL endpoint (default: $FUEL_NODE_URL or local node)",
    )
    parser.add_argument(
        "--contracts-dir",
        type=Path,
        default=None,
        help="Directory holding the forc contract projects (default: ../contracts)",
    )
    parser.add_argument(
        "--build-profile",
        default=None,
        help="forc build profile the artifacts were built with (default: debug)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = DeployConfig.from_env(
            node_url=args.node_url,
            contracts_dir=args.contracts_dir,
            build_profile=args.build_profile,
            send_message=args.command == SEND_MESSAGE_COMMAND,
        )
        run(config)
        return 0

    except Exception as e:
        logger.error("Error: %s", e)
        logger.debug("Traceback:", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
