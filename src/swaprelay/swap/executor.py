"""End-to-end swap execution: fetch, then sign and submit."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from swaprelay.config import get_settings
from swaprelay.providers.base import SwapRequest
from swaprelay.relay.submitter import RelaySubmitter
from swaprelay.signing.base import TransactionSigner
from swaprelay.swap.fetcher import TransactionFetcher
from swaprelay.utils.locks import swap_fingerprint, swap_guard
from swaprelay.utils.timing import Deadline, SubmissionTiming

logger = logging.getLogger(__name__)


@dataclass
class SwapResult:
    """Outcome of a successful swap submission."""

    signature: str
    swap_endpoint: str
    timing: Optional[SubmissionTiming] = None
    explorer_url: str = field(init=False)

    def __post_init__(self):
        self.explorer_url = f"https://solscan.io/tx/{self.signature}"

    def to_dict(self) -> dict:
        return {
            "signature": self.signature,
            "explorer_url": self.explorer_url,
            "timing": self.timing.as_dict() if self.timing else None,
        }


async def execute_swap(
    request: SwapRequest,
    signer: TransactionSigner,
    swap_endpoint: Optional[str] = None,
    relay_endpoint: Optional[str] = None,
    fetcher: Optional[TransactionFetcher] = None,
    submitter: Optional[RelaySubmitter] = None,
    deadline: Optional[Deadline] = None,
    reject_duplicates: Optional[bool] = None,
) -> SwapResult:
    """Fetch a swap transaction and submit it through the relay.

    The fetch completes fully before submission starts. A single deadline,
    if given, bounds both steps.

    Raises:
        DuplicateSwapError: reject_duplicates is on and the same swap is in flight
        FetchError / SubmissionError subclasses: propagated unchanged
    """
    settings = get_settings()
    swap_endpoint = swap_endpoint or settings.swap_endpoint
    if reject_duplicates is None:
        reject_duplicates = settings.reject_duplicate_swaps
    if deadline is None:
        deadline = Deadline.after(settings.request_deadline)

    fetcher = fetcher or TransactionFetcher()
    submitter = submitter or RelaySubmitter()

    fingerprint = swap_fingerprint(swap_endpoint, request)
    async with swap_guard(fingerprint, enabled=reject_duplicates):
        logger.info(
            f"Executing swap: {request.amount} {request.input_mint} -> {request.output_mint} "
            f"(slippage {request.slippage_bps} bps)"
        )
        encoded = await fetcher.fetch(swap_endpoint, request, deadline=deadline)
        signature = await submitter.submit(encoded, signer, relay_endpoint, deadline=deadline)

    logger.info(f"Swap executed successfully! Signature: {signature}")
    return SwapResult(
        signature=signature,
        swap_endpoint=swap_endpoint,
        timing=submitter.last_timing,
    )
