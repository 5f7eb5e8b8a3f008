"""Relay interface and response normalization.

Relays accept signed transaction bytes and return a confirmation
identifier (the transaction signature). JSON-RPC relays answer with one of
several shapes; normalize_jsonrpc_response() maps them onto a closed
RelayOutcome so callers see exactly one signature or one typed error.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from swaprelay.errors import RelayRejected, UnrecognizedResponse, describe_shape
from swaprelay.utils.payloads import first_present

logger = logging.getLogger(__name__)

# Signature-bearing fields accepted when a 200 body has neither result nor error.
# Checked in this order; first non-empty wins.
FALLBACK_SIGNATURE_FIELDS = ("signature", "txid", "txSignature")


class RelayProtocol(str, Enum):
    """Relay submission protocol."""

    JSON_RPC = "json_rpc"    # POST sendTransaction envelope to relay
    BROADCAST = "broadcast"  # send_raw_transaction through an RPC client


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class RelayOutcome:
    """Normalized relay response."""

    kind: OutcomeKind
    signature: Optional[str] = None
    message: Optional[str] = None
    code: Any = None
    payload: Any = None

    @classmethod
    def success(cls, signature: Any) -> "RelayOutcome":
        return cls(kind=OutcomeKind.SUCCESS, signature=str(signature))

    @classmethod
    def error(cls, message: str, code: Any = None, payload: Any = None) -> "RelayOutcome":
        return cls(kind=OutcomeKind.ERROR, message=message, code=code, payload=payload)

    @classmethod
    def unrecognized(cls, payload: Any) -> "RelayOutcome":
        return cls(kind=OutcomeKind.UNRECOGNIZED, payload=payload)

    def unwrap(self) -> str:
        """Return the signature or raise the matching submission error."""
        if self.kind is OutcomeKind.SUCCESS:
            return self.signature
        if self.kind is OutcomeKind.ERROR:
            raise RelayRejected(self.message, code=self.code)
        raise UnrecognizedResponse(
            f"Unexpected response format from relay endpoint ({describe_shape(self.payload)})",
            payload=self.payload,
        )


def error_details(error: Any) -> tuple[Optional[str], Any]:
    """Extract (message, code) from a JSON-RPC error member."""
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message")
        if message:
            return str(message), code
        if code is not None and code != "":
            return str(code), code
        return None, code
    if error:
        return str(error), None
    return None, None


def normalize_jsonrpc_response(payload: Any) -> RelayOutcome:
    """Map a 200-status relay body to a RelayOutcome.

    Order: result, then error, then FALLBACK_SIGNATURE_FIELDS.
    """
    if not isinstance(payload, dict):
        return RelayOutcome.unrecognized(payload)

    result = payload.get("result")
    if result:
        return RelayOutcome.success(result)

    # Any non-null error member counts, including an empty object
    if payload.get("error") is not None:
        error = payload["error"]
        message, code = error_details(error)
        if message is None:
            message = json.dumps(error)
        return RelayOutcome.error(message, code=code, payload=payload)

    signature = first_present(payload, FALLBACK_SIGNATURE_FIELDS)
    if signature:
        logger.debug("Relay response used a fallback signature field")
        return RelayOutcome.success(signature)

    return RelayOutcome.unrecognized(payload)


def rejection_message(status_code: int, body: str) -> tuple[str, Any]:
    """Best-effort (message, code) for a non-200 relay response."""
    generic = f"relay request failed: incorrect status code: {status_code}"
    try:
        data = json.loads(body)
    except ValueError:
        if body:
            return f"{generic}, {body}", None
        return generic, None

    if isinstance(data, dict):
        error = data.get("error")
        if error is not None:
            message, code = error_details(error)
            return message or generic, code
        if data.get("message"):
            return str(data["message"]), None

    return generic, None


class RelayClient(ABC):
    """Abstract base class for relay transports."""

    protocol: RelayProtocol

    @property
    def name(self) -> str:
        return self.protocol.value

    @abstractmethod
    async def send_transaction(self, raw_transaction: bytes) -> str:
        """Submit signed transaction bytes.

        Returns:
            Confirmation identifier (transaction signature)

        Raises:
            RelayRejected: Relay refused the transaction or transport failed
            UnrecognizedResponse: Relay answered with an unknown shape
        """
        pass
