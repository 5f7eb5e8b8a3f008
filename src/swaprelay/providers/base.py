"""Abstract provider interface for swap-transaction sources."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from swaprelay.errors import FetchError, InvalidResponseShape, describe_shape

logger = logging.getLogger(__name__)

DEFAULT_SLIPPAGE_BPS = 50
MAX_SLIPPAGE_BPS = 10_000
DEFAULT_TIMEOUT = 30.0


class ProviderKind(str, Enum):
    """Supported provider protocols."""

    AGGREGATOR = "aggregator"  # GET, {data: {swapData}}
    QUOTE_API = "quote_api"    # GET quote, then POST swap
    DIRECT = "direct"          # POST params, {transaction|swapTransaction|tx}


@dataclass(frozen=True)
class SwapRequest:
    """Parameters of one swap attempt.

    Attributes:
        input_mint: Mint address of the token being sold
        output_mint: Mint address of the token being bought
        amount: Input amount in smallest units (lamports for SOL)
        payer: Base58 public key of the wallet paying for the swap
        slippage_bps: Slippage tolerance in basis points (50 = 0.5%)
    """

    input_mint: str
    output_mint: str
    amount: int
    payer: str
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS

    def __post_init__(self):
        if not self.input_mint or not self.output_mint:
            raise ValueError("Input and output mints are required")
        if not self.payer:
            raise ValueError("Payer public key is required")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError(f"Amount must be an integer in smallest units, got {self.amount!r}")
        if self.amount <= 0:
            raise ValueError(f"Amount must be positive, got {self.amount}")
        if isinstance(self.slippage_bps, bool) or not isinstance(self.slippage_bps, int):
            raise ValueError(f"Slippage must be an integer in bps, got {self.slippage_bps!r}")
        if not 0 <= self.slippage_bps <= MAX_SLIPPAGE_BPS:
            raise ValueError(
                f"Slippage must be between 0 and {MAX_SLIPPAGE_BPS} bps, got {self.slippage_bps}"
            )

    def to_params(self) -> dict:
        """Swap parameters as sent verbatim to direct endpoints."""
        return {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "amount": self.amount,
            "slippageBps": self.slippage_bps,
        }


class SwapProvider(ABC):
    """Abstract base class for swap-transaction providers.

    A provider turns a SwapRequest into an encoded (base64), unsigned
    transaction. Providers with a separate quote step implement
    fetch_quote(); single-step providers return None from it.
    """

    kind: ProviderKind

    def __init__(
        self,
        endpoint: str,
        timeout: float = DEFAULT_TIMEOUT,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize provider.

        Args:
            endpoint: Provider endpoint URL
            timeout: Per-request HTTP timeout in seconds
            api_key: Optional bearer token
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.api_key = api_key
        self.transport = transport

    @property
    def name(self) -> str:
        return self.kind.value

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._get_headers(),
            transport=self.transport,
        )

    @abstractmethod
    async def fetch_quote(self, client: httpx.AsyncClient, request: SwapRequest) -> Optional[dict]:
        """Fetch a quote, or return None when the provider has no quote step."""
        pass

    @abstractmethod
    async def fetch_swap(
        self,
        client: httpx.AsyncClient,
        request: SwapRequest,
        quote: Optional[dict],
    ) -> Any:
        """Fetch the swap payload carrying the encoded transaction."""
        pass

    @abstractmethod
    def extract_transaction(self, payload: Any) -> str:
        """Pull the encoded transaction out of the swap payload.

        Raises:
            InvalidResponseShape: If no expected field is present
        """
        pass

    async def get_swap_transaction(self, request: SwapRequest) -> str:
        """Run the provider's steps and return the encoded transaction."""
        async with self._client() as client:
            quote = await self.fetch_quote(client, request)
            payload = await self.fetch_swap(client, request, quote)
        return self.extract_transaction(payload)

    @staticmethod
    def _check_response(response: httpx.Response, context: str) -> None:
        """Raise FetchError for any non-2xx response."""
        if response.is_success:
            return
        body = response.text
        logger.warning(f"{context}: {response.status_code} - {body}")
        raise FetchError(
            f"{context}: {response.status_code} {response.reason_phrase} - {body}",
            status_code=response.status_code,
            body=body,
        )

    @staticmethod
    def _parse_json(response: httpx.Response, context: str) -> Any:
        try:
            return response.json()
        except ValueError:
            raise InvalidResponseShape(f"{context}: response is not JSON", shape="non-JSON body")

    @staticmethod
    def _invalid_shape(message: str, payload: Any) -> InvalidResponseShape:
        return InvalidResponseShape(message, shape=describe_shape(payload))

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        context: str,
        **kwargs,
    ) -> Any:
        """Send one request and return its decoded JSON body."""
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise FetchError(f"{context}: {type(e).__name__}: {e}") from e

        self._check_response(response, context)
        return self._parse_json(response, context)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint!r})"
