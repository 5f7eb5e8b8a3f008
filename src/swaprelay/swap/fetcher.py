"""Swap transaction acquisition from a single provider."""

import logging
from typing import Optional, Union

import httpx

from swaprelay.config import get_settings, redact_url
from swaprelay.errors import FetchTimeout
from swaprelay.providers.base import ProviderKind, SwapProvider, SwapRequest
from swaprelay.providers.factory import create_provider
from swaprelay.utils.timing import Deadline, Stopwatch, format_seconds, run_within

logger = logging.getLogger(__name__)


class TransactionFetcher:
    """Fetches an encoded, unsigned swap transaction.

    Exactly one provider serves each call. With `kind` set the provider is
    fixed; otherwise it is inferred from the endpoint URL.
    """

    def __init__(
        self,
        kind: Optional[Union[ProviderKind, str]] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        swap_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        kind = kind or settings.provider_kind
        self.kind = ProviderKind(kind) if kind else None
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.api_key = api_key if api_key is not None else (settings.provider_api_key or None)
        self.swap_url = swap_url or settings.jupiter_swap_url
        self.transport = transport

    def provider_for(self, endpoint: str) -> SwapProvider:
        return create_provider(
            endpoint,
            kind=self.kind,
            timeout=self.timeout,
            api_key=self.api_key,
            transport=self.transport,
            swap_url=self.swap_url,
        )

    async def fetch(
        self,
        endpoint: str,
        request: SwapRequest,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """Fetch the encoded transaction for a swap.

        Args:
            endpoint: Provider endpoint
            request: Swap parameters
            deadline: Optional bound on the whole fetch

        Returns:
            Base64 transaction exactly as returned by the provider

        Raises:
            FetchError: Provider returned a non-2xx status or failed
            InvalidResponseShape: No expected field in the provider response
            FetchTimeout: Deadline expired
        """
        provider = self.provider_for(endpoint)
        elapsed = Stopwatch()
        logger.info(f"Fetching swap transaction from {redact_url(endpoint)} ({provider.name})")

        try:
            transaction = await run_within(
                provider.get_swap_transaction(request),
                deadline,
                FetchTimeout,
                f"{provider.name} swap fetch",
            )
        except Exception as e:
            logger.error(f"Error fetching swap transaction: {type(e).__name__}: {e}")
            raise

        logger.debug(f"Fetched swap transaction in {format_seconds(elapsed.elapsed())} seconds")
        return transaction
