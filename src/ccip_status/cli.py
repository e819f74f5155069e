#!/usr/bin/env python3
"""Command-line entry point for the CCIP message status client.

Usage:
    ccip-status <sourceChain> <destinationChain> <messageId>

Example (Sepolia -> Fuji):
    ccip-status ethereumSepolia avalancheFuji 0xbd2f751ffab340b98575a8f46efc234e8d884db7b654c0144d7aabd72ff38595
"""

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from .config import StatusConfig
from .exceptions import MessageStatusError, UsageError
from .status_checker import MessageStatusChecker


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Get logger for this module
logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises on bad input instead of exiting with code 2."""

    def error(self, message: str) -> None:
        raise UsageError(f"Usage error: {message}\n{self.format_usage().strip()}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ccip-status",
        description="Report the status of a CCIP message on a source/destination lane",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  <CHAIN>_RPC_URL   - RPC endpoint per chain (e.g. ETHEREUM_SEPOLIA_RPC_URL)
  FROM_BLOCK        - First block scanned for logs (default: 0)
  LOG_BLOCK_RANGE   - Blocks per eth_getLogs request (default: whole range)
  REQUEST_TIMEOUT   - HTTP request timeout in seconds (default: 30)
  LOG_LEVEL         - Logging level (default: INFO)
        """
    )
    parser.add_argument("source_chain", help="Source chain name (e.g. ethereumSepolia)")
    parser.add_argument("destination_chain", help="Destination chain name (e.g. avalancheFuji)")
    parser.add_argument("message_id", help="CCIP message id (0x-prefixed, 32 bytes)")
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """Run one status lookup.

    Args:
        argv: Command-line arguments without the program name

    Returns:
        Process exit code: 0 for any reported status, 1 for any error
    """
    load_dotenv()
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))

    try:
        args: argparse.Namespace = build_parser().parse_args(argv)

        config: StatusConfig = StatusConfig.from_env()
        config.log_config()

        checker = MessageStatusChecker(config)
        status = checker.check(args.source_chain, args.destination_chain, args.message_id)

    except MessageStatusError as e:
        logger.error(f"Error: {e}")
        return 1

    except KeyboardInterrupt:
        logger.info("Received interrupt signal, aborting")
        return 1

    except Exception as e:
        logger.error(f"Fatal Error: {e}", exc_info=True)
        return 1

    print(status)
    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run())
