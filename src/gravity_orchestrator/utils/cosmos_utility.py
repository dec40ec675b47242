import json
import logging
import typing

import httpx

from ..models import CosmosAccount, EventNonce

logger = logging.getLogger(__name__)


class CosmosUtility:
    """Queries the Gravity module through the node's gRPC gateway."""

    LAST_EVENT_PATH = "/gravity/v1/last_submitted_ethereum_event/{address}"

    def __init__(self, url: str, timeout: float = 30.0):
        if not url:
            raise ValueError("Cosmos gRPC gateway URL is required")

        self.url = url.rstrip('/')
        self.timeout = timeout

    async def _gateway_get(self, path: str) -> typing.Any:
        async with httpx.AsyncClient() as client:
            logger.debug(f"Querying {self.url + path}")
            response = await client.get(self.url + path, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

    async def get_last_event_nonce(self, account: CosmosAccount) -> EventNonce:
        """
        Fetch the last Ethereum event nonce submitted by an orchestrator.

        Args:
            account: Orchestrator account on the Cosmos chain

        Returns:
            The last submitted event nonce (0 if none yet)

        Raises:
            httpx.HTTPError: If the gateway is unreachable or errors
            ValueError: If the response does not carry a valid nonce
        """
        path = self.LAST_EVENT_PATH.format(address=account.address)
        response = await self._gateway_get(path)

        try:
            nonce = int(response["event_nonce"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(
                f"Unexpected last event response: {json.dumps(response)}"
            ) from e

        if nonce < 0:
            raise ValueError(f"Negative event nonce in response: {nonce}")

        return nonce
