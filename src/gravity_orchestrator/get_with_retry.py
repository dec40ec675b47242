#!/usr/bin/env python3
"""Basic query functions that stubbornly get data.

Each function blocks the calling task until the underlying query
succeeds. None of them ever returns an error: a failing endpoint is
logged and retried every RETRY_TIME seconds, forever, unless the caller
passes a stop event.
"""

import asyncio

from .clients import CosmosQueryClient, EthClient
from .models import BlockHeight, ChainIdentifier, CosmosAccount, EventNonce
from .retry import retry_forever


async def get_block_number_with_retry(
    eth_client: EthClient,
    stop_event: asyncio.Event | None = None,
) -> BlockHeight:
    """Gets the current block number, no matter how long it takes."""
    return await retry_forever(
        eth_client.get_block_number,
        "Failed to get latest block! Is your Eth node working?",
        stop_event,
    )


async def get_chain_id_with_retry(
    eth_client: EthClient,
    stop_event: asyncio.Event | None = None,
) -> ChainIdentifier:
    """Gets the chain ID, no matter how long it takes."""
    return await retry_forever(
        eth_client.get_chain_id,
        "Failed to get chain ID! Is your Eth node working?",
        stop_event,
    )


async def get_last_event_nonce_with_retry(
    cosmos_client: CosmosQueryClient,
    our_cosmos_address: CosmosAccount,
    stop_event: asyncio.Event | None = None,
) -> EventNonce:
    """Gets the last event nonce, no matter how long it takes.

    Unlike the Ethereum queries, the failure log carries the underlying
    error so gRPC problems can be told apart.
    """
    return await retry_forever(
        lambda: cosmos_client.get_last_event_nonce(our_cosmos_address),
        lambda e: f"Failed to get last event nonce, is the Cosmos GRPC working? {e!r}",
        stop_event,
    )
