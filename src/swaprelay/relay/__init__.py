"""Relay submission.

Protocols:
- JSON_RPC: sendTransaction envelope POSTed to a low-latency relay
- BROADCAST: raw bytes via a Solana RPC client's send_raw_transaction
"""

from swaprelay.relay.base import (
    FALLBACK_SIGNATURE_FIELDS,
    OutcomeKind,
    RelayClient,
    RelayOutcome,
    RelayProtocol,
    normalize_jsonrpc_response,
    rejection_message,
)
from swaprelay.relay.broadcast import BroadcastRelay
from swaprelay.relay.jsonrpc import JsonRpcRelay, build_send_transaction_payload
from swaprelay.relay.submitter import RelaySubmitter

__all__ = [
    "FALLBACK_SIGNATURE_FIELDS",
    "OutcomeKind",
    "RelayClient",
    "RelayOutcome",
    "RelayProtocol",
    "normalize_jsonrpc_response",
    "rejection_message",
    "BroadcastRelay",
    "JsonRpcRelay",
    "build_send_transaction_payload",
    "RelaySubmitter",
]
