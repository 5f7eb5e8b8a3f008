"""swaprelay: fetch pre-built swap transactions and submit them via a low-latency relay.

Pipeline:
    TransactionFetcher.fetch() -> base64 transaction -> RelaySubmitter.submit() -> signature
"""

from swaprelay.errors import (
    DuplicateSwapError,
    FetchError,
    FetchTimeout,
    InvalidResponseShape,
    MalformedTransaction,
    RelayRejected,
    SubmissionError,
    SubmissionTimeout,
    SwapRelayError,
    SwapTimeoutError,
    UnrecognizedResponse,
)
from swaprelay.providers import ProviderKind, SwapRequest
from swaprelay.relay import RelayProtocol, RelaySubmitter
from swaprelay.signing import CallableSigner, KeypairSigner, TransactionSigner
from swaprelay.swap import SwapResult, TransactionFetcher, execute_swap
from swaprelay.utils import Deadline

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "TransactionFetcher",
    "RelaySubmitter",
    "execute_swap",
    "SwapResult",
    "SwapRequest",
    "ProviderKind",
    "RelayProtocol",
    "Deadline",
    # Signing
    "TransactionSigner",
    "KeypairSigner",
    "CallableSigner",
    # Errors
    "SwapRelayError",
    "SwapTimeoutError",
    "DuplicateSwapError",
    "FetchError",
    "FetchTimeout",
    "InvalidResponseShape",
    "SubmissionError",
    "SubmissionTimeout",
    "MalformedTransaction",
    "RelayRejected",
    "UnrecognizedResponse",
]
