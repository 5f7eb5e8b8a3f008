"""Error taxonomy for swap transaction fetching and relay submission.

FetchError and its subclasses are raised by TransactionFetcher.
SubmissionError and its subclasses are raised by RelaySubmitter.
Nothing in the pipeline retries or suppresses these; they reach the caller
unchanged.
"""

from typing import Any, Optional


class SwapRelayError(Exception):
    """Base class for all pipeline errors."""

    pass


class SwapTimeoutError(SwapRelayError):
    """Raised when a caller-supplied deadline expires."""

    pass


class DuplicateSwapError(SwapRelayError):
    """Raised when an identical swap is already in flight."""

    def __init__(self, fingerprint: str):
        self.fingerprint = fingerprint
        super().__init__(f"Swap {fingerprint[:12]} is already in flight")


# ======================
# Fetch errors
# ======================


class FetchError(SwapRelayError):
    """A provider step failed (non-2xx status or transport failure)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class InvalidResponseShape(FetchError):
    """Provider returned a payload missing every expected field."""

    def __init__(self, message: str, shape: Any = None):
        self.shape = shape
        if shape is not None:
            message = f"{message} (got {shape})"
        super().__init__(message)


class FetchTimeout(FetchError, SwapTimeoutError):
    """Deadline expired while fetching the swap transaction."""

    pass


# ======================
# Submission errors
# ======================


class SubmissionError(SwapRelayError):
    """Base class for relay submission failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedTransaction(SubmissionError):
    """Encoded transaction could not be decoded."""

    pass


class RelayRejected(SubmissionError):
    """Relay returned an explicit error, a non-200 status, or a transport failure."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Any = None,
        body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.body = body
        super().__init__(message)


class UnrecognizedResponse(SubmissionError):
    """Relay returned 200 with a body matching no known shape."""

    def __init__(self, message: str, payload: Any = None):
        self.payload = payload
        super().__init__(message)


class SubmissionTimeout(SubmissionError, SwapTimeoutError):
    """Deadline expired while submitting the transaction."""

    pass


def describe_shape(payload: Any) -> str:
    """Describe a JSON payload's shape for error messages."""
    if isinstance(payload, dict):
        if not payload:
            return "empty object"
        return "keys=" + ",".join(sorted(str(k) for k in payload))
    return type(payload).__name__
