"""In-flight guard for swap attempts.

Swaps are not deduplicated unless the caller opts in. When enabled, a
second attempt with the same fingerprint (endpoint, assets, amount,
slippage, payer) is rejected while the first is still running.
"""

import hashlib
import logging
from contextlib import asynccontextmanager

from swaprelay.errors import DuplicateSwapError
from swaprelay.providers.base import SwapRequest

logger = logging.getLogger(__name__)

# Fingerprints of swaps currently in flight
_in_flight: set[str] = set()


def swap_fingerprint(endpoint: str, request: SwapRequest) -> str:
    """Stable fingerprint identifying one swap attempt."""
    raw = "|".join(
        [
            endpoint,
            request.input_mint,
            request.output_mint,
            str(request.amount),
            str(request.slippage_bps),
            request.payer,
        ]
    )
    return hashlib.sha256(raw.encode()).hexdigest()


def is_in_flight(fingerprint: str) -> bool:
    return fingerprint in _in_flight


@asynccontextmanager
async def swap_guard(fingerprint: str, enabled: bool = True):
    """Mark a swap as in flight for the duration of the block.

    Args:
        fingerprint: Result of swap_fingerprint()
        enabled: When False the guard is a no-op

    Raises:
        DuplicateSwapError: If the same fingerprint is already in flight
    """
    if not enabled:
        yield
        return

    # No await between check and insert, so this is atomic on one event loop
    if fingerprint in _in_flight:
        logger.warning(f"Rejected duplicate swap {fingerprint[:12]}")
        raise DuplicateSwapError(fingerprint)
    _in_flight.add(fingerprint)
    logger.debug(f"Swap {fingerprint[:12]} in flight")

    try:
        yield
    finally:
        _in_flight.discard(fingerprint)
        logger.debug(f"Swap {fingerprint[:12]} released")


def clear_in_flight() -> None:
    """Forget all in-flight swaps (useful for testing)."""
    _in_flight.clear()
