"""JSON-RPC relay (0slot-style low-latency sendTransaction endpoint)."""

import base64
import json
import logging
from typing import Optional

import httpx

from swaprelay.config import redact_url
from swaprelay.errors import RelayRejected, UnrecognizedResponse
from swaprelay.relay.base import (
    RelayClient,
    RelayProtocol,
    normalize_jsonrpc_response,
    rejection_message,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def build_send_transaction_payload(signed_transaction_b64: str) -> dict:
    """JSON-RPC 2.0 sendTransaction envelope.

    Preflight is skipped and the relay must not retry (maxRetries 0);
    retry policy belongs to the caller.
    """
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "sendTransaction",
        "params": [
            signed_transaction_b64,
            {
                "encoding": "base64",
                "skipPreflight": True,
                "preflightCommitment": "processed",
                "maxRetries": 0,
                "minContextSlot": None,
            },
        ],
    }


class JsonRpcRelay(RelayClient):
    """POSTs a sendTransaction envelope to a relay endpoint."""

    protocol = RelayProtocol.JSON_RPC

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def send_transaction(self, raw_transaction: bytes) -> str:
        payload = build_send_transaction_payload(base64.b64encode(raw_transaction).decode())
        logger.info(f"Sending transaction to relay endpoint: {redact_url(self.endpoint)}")
        logger.debug(f"Payload size: {len(json.dumps(payload))} bytes")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            raise RelayRejected(f"relay request failed: {type(e).__name__}: {e}") from e

        if response.status_code != 200:
            body = response.text
            message, code = rejection_message(response.status_code, body)
            logger.error(f"Relay request failed with status {response.status_code}: {message}")
            raise RelayRejected(message, status_code=response.status_code, code=code, body=body)

        try:
            data = response.json()
        except ValueError:
            raise UnrecognizedResponse(
                f"Relay returned a non-JSON body: {response.text[:200]}",
                payload=response.text,
            )

        return normalize_jsonrpc_response(data).unwrap()
