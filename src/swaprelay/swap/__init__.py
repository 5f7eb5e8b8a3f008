"""Swap pipeline.

Provides:
- TransactionFetcher: obtains the encoded transaction from a provider
- execute_swap: fetch followed by relay submission
"""

from swaprelay.swap.executor import SwapResult, execute_swap
from swaprelay.swap.fetcher import TransactionFetcher

__all__ = [
    "SwapResult",
    "TransactionFetcher",
    "execute_swap",
]
