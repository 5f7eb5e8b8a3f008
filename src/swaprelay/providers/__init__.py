"""Swap-transaction providers.

Providers:
- Aggregator: meta-aggregator GET endpoint returning data.swapData
- Jupiter: two-step quote API (GET quote, POST swap)
- Direct: legacy POST endpoint returning transaction/swapTransaction/tx
"""

from swaprelay.providers.aggregator import AggregatorProvider
from swaprelay.providers.base import ProviderKind, SwapProvider, SwapRequest
from swaprelay.providers.direct import DirectProvider
from swaprelay.providers.factory import create_provider, infer_provider_kind
from swaprelay.providers.jupiter import JupiterProvider

__all__ = [
    # Base classes
    "ProviderKind",
    "SwapProvider",
    "SwapRequest",
    # Providers
    "AggregatorProvider",
    "DirectProvider",
    "JupiterProvider",
    # Factory
    "create_provider",
    "infer_provider_kind",
]
