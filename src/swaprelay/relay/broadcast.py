"""Raw broadcast relay through a Solana RPC client."""

import logging
from typing import Any, Optional

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts

from swaprelay.config import redact_url
from swaprelay.errors import RelayRejected
from swaprelay.relay.base import RelayClient, RelayProtocol

logger = logging.getLogger(__name__)

# No preflight, no transparent retries
BROADCAST_OPTS = TxOpts(skip_preflight=True, max_retries=0)


class BroadcastRelay(RelayClient):
    """Sends raw signed bytes via send_raw_transaction.

    Either pass a ready client (anything with an async
    send_raw_transaction(txn, opts=...)) or an endpoint, in which case a
    solana-py AsyncClient is opened per submission.
    """

    protocol = RelayProtocol.BROADCAST

    def __init__(self, endpoint: Optional[str] = None, client: Optional[Any] = None):
        if endpoint is None and client is None:
            raise ValueError("BroadcastRelay needs an endpoint or a client")
        self.endpoint = endpoint
        self.client = client

    async def send_transaction(self, raw_transaction: bytes) -> str:
        if self.client is not None:
            return await self._send(self.client, raw_transaction)

        logger.info(f"Broadcasting transaction via: {redact_url(self.endpoint)}")
        async with AsyncClient(self.endpoint) as client:
            return await self._send(client, raw_transaction)

    @staticmethod
    async def _send(client: Any, raw_transaction: bytes) -> str:
        try:
            response = await client.send_raw_transaction(raw_transaction, opts=BROADCAST_OPTS)
        except (RPCException, SolanaRpcException, httpx.HTTPError) as e:
            logger.error(f"Broadcast failed: {e}")
            raise RelayRejected(f"broadcast failed: {e}") from e
        return str(response.value)
