#!/usr/bin/env python3
"""Command line interface for the Gravity orchestrator query layer.

Runs a single stubborn query against the configured endpoints and prints
the result. The query blocks until the endpoint answers; Ctrl-C stops it.
"""

import argparse
import asyncio
import logging
import os
import signal
import sys

from .config import OrchestratorConfig
from .get_with_retry import (
    get_block_number_with_retry,
    get_chain_id_with_retry,
    get_last_event_nonce_with_retry,
)
from .models import CosmosAccount
from .retry import RetryCancelled
from .utils.cosmos_utility import CosmosUtility
from .utils.eth_utility import EthUtility

# Get logger for this module
logger = logging.getLogger(__name__)


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


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its query subcommands."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="gorc-query",
        description="Stubbornly query the Ethereum node and the Gravity module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  ETH_RPC_URL      - Ethereum JSON-RPC endpoint (default: http://localhost:8545)
  COSMOS_GRPC_URL  - Cosmos gRPC gateway endpoint (default: http://localhost:1317)
  COSMOS_PREFIX    - Bech32 account prefix (default: cosmos)
  LOG_LEVEL        - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    query = commands.add_parser("query", help="Query a chain until it answers")
    chains = query.add_subparsers(dest="chain", required=True)

    eth = chains.add_parser("eth", help="Query the Ethereum node")
    eth_queries = eth.add_subparsers(dest="query", required=True)
    eth_queries.add_parser("block-number", help="Print the latest block number")
    eth_queries.add_parser("chain-id", help="Print the chain ID")

    cosmos = chains.add_parser("cosmos", help="Query the Gravity module")
    cosmos_queries = cosmos.add_subparsers(dest="query", required=True)
    nonce = cosmos_queries.add_parser(
        "event-nonce",
        help="Print the last event nonce submitted by an orchestrator"
    )
    nonce.add_argument("address", help="Orchestrator account address")

    return parser


async def run_query(
    args: argparse.Namespace,
    config: OrchestratorConfig,
    stop_event: asyncio.Event,
) -> int:
    """Run the query selected on the command line and return its value."""
    if args.chain == "eth":
        eth_client = EthUtility(config.eth.rpc_url)
        if args.query == "block-number":
            return await get_block_number_with_retry(eth_client, stop_event)
        return await get_chain_id_with_retry(eth_client, stop_event)

    account = CosmosAccount(address=args.address, prefix=config.cosmos.prefix)
    cosmos_client = CosmosUtility(config.cosmos.grpc_url)
    return await get_last_event_nonce_with_retry(cosmos_client, account, stop_event)


async def main(argv: list[str] | None = None) -> None:
    """Main entry point for the query CLI.

    Raises:
        SystemExit: On configuration errors or when interrupted
    """
    args: argparse.Namespace = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config: OrchestratorConfig = OrchestratorConfig.from_env()
        config.log_config()
    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        sys.exit(1)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    signals = (signal.SIGINT, signal.SIGTERM)
    try:
        for sig in signals:
            loop.add_signal_handler(sig, stop_event.set)
    except NotImplementedError:
        logger.debug("Signal handlers not supported on this platform")
        signals = ()

    try:
        value = await run_query(args, config, stop_event)
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        sys.exit(1)
    except RetryCancelled:
        logger.info("Received interrupt signal, shutting down...")
        sys.exit(130)
    finally:
        for sig in signals:
            loop.remove_signal_handler(sig)

    print(value)


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
