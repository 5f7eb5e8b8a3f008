"""Factory for swap providers.

Providers are normally chosen explicitly via ProviderKind. When no kind
is configured, infer_provider_kind() maps the endpoint URL to a kind by
substring markers, checked in priority order (first match wins).
"""

import logging
from typing import Optional, Union

import httpx

from swaprelay.providers.aggregator import AggregatorProvider
from swaprelay.providers.base import DEFAULT_TIMEOUT, ProviderKind, SwapProvider
from swaprelay.providers.direct import DirectProvider
from swaprelay.providers.jupiter import JUPITER_SWAP_URL, JupiterProvider

logger = logging.getLogger(__name__)

# (kind, markers) in priority order; DIRECT is the fallback
ENDPOINT_MARKERS: list[tuple[ProviderKind, tuple[str, ...]]] = [
    (ProviderKind.AGGREGATOR, ("route/solana/swap", "localhost:4000")),
    (ProviderKind.QUOTE_API, ("quote-api.jup.ag", "/quote")),
]

PROVIDER_CLASSES: dict[ProviderKind, type[SwapProvider]] = {
    ProviderKind.AGGREGATOR: AggregatorProvider,
    ProviderKind.QUOTE_API: JupiterProvider,
    ProviderKind.DIRECT: DirectProvider,
}


def infer_provider_kind(endpoint: str) -> ProviderKind:
    """Map an endpoint URL to a provider kind."""
    for kind, markers in ENDPOINT_MARKERS:
        if any(marker in endpoint for marker in markers):
            return kind
    return ProviderKind.DIRECT


def create_provider(
    endpoint: str,
    kind: Optional[Union[ProviderKind, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    swap_url: str = JUPITER_SWAP_URL,
) -> SwapProvider:
    """Create the provider for an endpoint.

    Args:
        endpoint: Provider endpoint URL
        kind: Explicit provider kind; inferred from the endpoint when None
        swap_url: Swap-construction URL (quote API only)
    """
    if kind is None:
        kind = infer_provider_kind(endpoint)
        logger.debug(f"Inferred provider {kind.value} from endpoint")
    else:
        kind = ProviderKind(kind)

    if kind is ProviderKind.QUOTE_API:
        return JupiterProvider(
            endpoint,
            timeout=timeout,
            api_key=api_key,
            transport=transport,
            swap_url=swap_url,
        )

    provider_cls = PROVIDER_CLASSES[kind]
    return provider_cls(endpoint, timeout=timeout, api_key=api_key, transport=transport)
