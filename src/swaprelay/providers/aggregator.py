"""Custom meta-aggregator route provider.

Single GET request; the response carries both the quote and the
transaction:

    GET {endpoint}?tokenIn&tokenOut&amount&sender&slippage
    -> {"data": {"swapData": "<base64>", "quote": {...}}}
"""

import logging
from typing import Any, Optional

import httpx

from swaprelay.config import redact_url
from swaprelay.providers.base import ProviderKind, SwapProvider, SwapRequest

logger = logging.getLogger(__name__)


class AggregatorProvider(SwapProvider):
    """Meta-aggregator exposing a `route/solana/swap` GET endpoint."""

    kind = ProviderKind.AGGREGATOR

    def build_params(self, request: SwapRequest) -> dict:
        """Query parameters for the route request."""
        return {
            "tokenIn": request.input_mint,
            "tokenOut": request.output_mint,
            "amount": str(request.amount),
            "sender": request.payer,
            "slippage": str(request.slippage_bps),
        }

    async def fetch_quote(self, client: httpx.AsyncClient, request: SwapRequest) -> Optional[dict]:
        # Quote arrives together with swapData
        return None

    async def fetch_swap(
        self,
        client: httpx.AsyncClient,
        request: SwapRequest,
        quote: Optional[dict],
    ) -> Any:
        logger.info(f"Fetching swap from: {redact_url(self.endpoint)}")
        return await self._request(
            client,
            "GET",
            self.endpoint,
            "Failed to fetch swap transaction",
            params=self.build_params(request),
        )

    def extract_transaction(self, payload: Any) -> str:
        data = payload.get("data") if isinstance(payload, dict) else None
        swap_data = data.get("swapData") if isinstance(data, dict) else None

        if not swap_data:
            raise self._invalid_shape(
                "Invalid response format from swap endpoint. Expected data.swapData",
                data if isinstance(data, dict) else payload,
            )

        quote = data.get("quote") or {}
        if isinstance(quote, dict) and quote:
            logger.info(
                f"Swap quote info: amountOut={quote.get('amountOut')}, "
                f"priceImpact={quote.get('priceImpact')}"
            )

        return swap_data
