import logging

from web3 import AsyncWeb3
from web3.providers import AsyncHTTPProvider

from ..models import BlockHeight, ChainIdentifier

logger = logging.getLogger(__name__)


class EthUtility:
    """
    Read-only access to an Ethereum JSON-RPC node.

    One instance can be shared by any number of concurrent queries; it
    only issues read calls and keeps no per-call state.
    """

    def __init__(self, rpc_url: str) -> None:
        """
        Initialize the EthUtility.

        Args:
            rpc_url: HTTP(S) RPC URL of the Ethereum node (required)
        """
        if not rpc_url:
            raise ValueError("RPC URL is required")

        self.rpc_url = rpc_url
        self.w3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))

    async def get_block_number(self) -> BlockHeight:
        """Fetch the latest block number from the node."""
        block_number = await self.w3.eth.block_number
        logger.debug(f"Latest block from {self.rpc_url}: {block_number}")
        return int(block_number)

    async def get_chain_id(self) -> ChainIdentifier:
        """Fetch the chain ID from the node."""
        chain_id = await self.w3.eth.chain_id
        logger.debug(f"Chain ID from {self.rpc_url}: {chain_id}")
        return int(chain_id)
