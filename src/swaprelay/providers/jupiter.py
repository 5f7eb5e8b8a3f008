"""Jupiter-style two-step quote provider.

Uses the Jupiter v6 quote/swap API shape:
    1. GET {endpoint}?inputMint&outputMint&amount&slippageBps -> quote
    2. POST {swap_url} {quoteResponse, userPublicKey, ...} -> {swapTransaction}

API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Any, Optional

import httpx

from swaprelay.config import redact_url
from swaprelay.providers.base import DEFAULT_TIMEOUT, ProviderKind, SwapProvider, SwapRequest

logger = logging.getLogger(__name__)

# Jupiter API endpoints
JUPITER_QUOTE_URL = "https://quote-api.jup.ag/v6/quote"
JUPITER_SWAP_URL = "https://quote-api.jup.ag/v6/swap"


class JupiterProvider(SwapProvider):
    """Quote API provider (Jupiter v6 or compatible)."""

    kind = ProviderKind.QUOTE_API

    def __init__(
        self,
        endpoint: str = JUPITER_QUOTE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        swap_url: str = JUPITER_SWAP_URL,
    ):
        """Initialize Jupiter provider.

        Args:
            endpoint: Quote endpoint
            swap_url: Fixed swap-construction endpoint used for step 2
        """
        super().__init__(endpoint, timeout=timeout, api_key=api_key, transport=transport)
        self.swap_url = swap_url

    async def fetch_quote(self, client: httpx.AsyncClient, request: SwapRequest) -> Optional[dict]:
        logger.info(f"Requesting quote from: {redact_url(self.endpoint)}")
        return await self._request(
            client,
            "GET",
            self.endpoint,
            "Failed to get quote",
            params={
                "inputMint": request.input_mint,
                "outputMint": request.output_mint,
                "amount": str(request.amount),
                "slippageBps": str(request.slippage_bps),
            },
        )

    def build_swap_body(self, request: SwapRequest, quote: Any) -> dict:
        """Step-2 body; the quote is forwarded as-is."""
        return {
            "quoteResponse": quote,
            "userPublicKey": request.payer,
            "wrapAndUnwrapSol": True,
            "dynamicComputeUnitLimit": True,
            "prioritizationFeeLamports": "auto",
        }

    async def fetch_swap(
        self,
        client: httpx.AsyncClient,
        request: SwapRequest,
        quote: Optional[dict],
    ) -> Any:
        return await self._request(
            client,
            "POST",
            self.swap_url,
            "Failed to get swap transaction",
            json=self.build_swap_body(request, quote),
        )

    def extract_transaction(self, payload: Any) -> str:
        swap_transaction = payload.get("swapTransaction") if isinstance(payload, dict) else None
        if not swap_transaction:
            raise self._invalid_shape("Invalid response format from Jupiter swap API", payload)
        return swap_transaction
