"""Direct (legacy) transaction endpoint.

POSTs the swap parameters verbatim and accepts the transaction from any
of several synonymous fields.
"""

import logging
from typing import Any, Optional

import httpx

from swaprelay.config import redact_url
from swaprelay.providers.base import ProviderKind, SwapProvider, SwapRequest
from swaprelay.utils.payloads import first_present

logger = logging.getLogger(__name__)

# Checked in this order; first non-empty wins
TRANSACTION_FIELDS = ("transaction", "swapTransaction", "tx")


class DirectProvider(SwapProvider):
    """Endpoint returning a transaction straight from the swap parameters."""

    kind = ProviderKind.DIRECT

    async def fetch_quote(self, client: httpx.AsyncClient, request: SwapRequest) -> Optional[dict]:
        return None

    async def fetch_swap(
        self,
        client: httpx.AsyncClient,
        request: SwapRequest,
        quote: Optional[dict],
    ) -> Any:
        logger.info(f"Posting swap parameters to: {redact_url(self.endpoint)}")
        return await self._request(
            client,
            "POST",
            self.endpoint,
            "Failed to fetch swap transaction",
            json=request.to_params(),
        )

    def extract_transaction(self, payload: Any) -> str:
        transaction = first_present(payload, TRANSACTION_FIELDS)
        if not transaction:
            raise self._invalid_shape("Invalid response format from swap endpoint", payload)
        return transaction
