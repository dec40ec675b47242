"""Query capabilities consumed by the stubborn queries.

The orchestrator owns the live client handles and passes them in; the
retry layer only ever issues read queries through these interfaces.
"""

from typing import Protocol

from .models import BlockHeight, ChainIdentifier, CosmosAccount, EventNonce


class EthClient(Protocol):
    """Read access to an Ethereum JSON-RPC node."""

    async def get_block_number(self) -> BlockHeight:
        """Return the latest block number."""

    async def get_chain_id(self) -> ChainIdentifier:
        """Return the chain ID reported by the node."""


class CosmosQueryClient(Protocol):
    """Read access to the Gravity module query service."""

    async def get_last_event_nonce(self, account: CosmosAccount) -> EventNonce:
        """Return the last event nonce submitted by the given orchestrator."""
