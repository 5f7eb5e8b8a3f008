"""Relay submission: decode, sign, re-encode, send.

RelaySubmitter.submit() performs exactly one signing pass and one relay
call, with no retries. Timing (prepare / request / total) is recorded for
observability in `last_timing`; it never affects the outcome. Any failure
is logged with the elapsed total and re-raised unchanged.
"""

import logging
from typing import Any, Optional, Union

import httpx

from swaprelay.config import get_settings, redact_url
from swaprelay.errors import SubmissionTimeout
from swaprelay.relay.base import RelayClient, RelayProtocol
from swaprelay.relay.broadcast import BroadcastRelay
from swaprelay.relay.jsonrpc import JsonRpcRelay
from swaprelay.signing.base import TransactionSigner
from swaprelay.transactions import decode_transaction, serialize_transaction
from swaprelay.utils.timing import Deadline, Stopwatch, SubmissionTiming, format_seconds, run_within

logger = logging.getLogger(__name__)


class RelaySubmitter:
    """Signs provider transactions and submits them to a relay.

    The protocol is fixed at construction from configuration; the relay
    endpoint string is never inspected to choose it.
    """

    def __init__(
        self,
        protocol: Optional[Union[RelayProtocol, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        broadcast_client: Optional[Any] = None,
    ):
        """Initialize submitter.

        Args:
            protocol: JSON_RPC or BROADCAST (RELAY_PROTOCOL setting if None)
            timeout: HTTP timeout for the JSON-RPC relay
            transport: Optional httpx transport for the JSON-RPC relay
            broadcast_client: Ready RPC client for the BROADCAST protocol
        """
        settings = get_settings()
        self.protocol = RelayProtocol(protocol or settings.relay_protocol)
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport
        self.broadcast_client = broadcast_client
        self.last_timing: Optional[SubmissionTiming] = None

    def _default_endpoint(self) -> str:
        settings = get_settings()
        if self.protocol is RelayProtocol.BROADCAST:
            return settings.sol_rpc_url
        return settings.relay_url

    def build_relay(self, relay_endpoint: Optional[str] = None) -> RelayClient:
        """Create the relay client for this submitter's protocol."""
        if self.protocol is RelayProtocol.BROADCAST:
            # An injected client takes precedence over the endpoint
            return BroadcastRelay(
                endpoint=relay_endpoint or self._default_endpoint(),
                client=self.broadcast_client,
            )

        return JsonRpcRelay(
            relay_endpoint or self._default_endpoint(),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def submit(
        self,
        encoded_transaction: str,
        signer: TransactionSigner,
        relay_endpoint: Optional[str] = None,
        deadline: Optional[Deadline] = None,
    ) -> str:
        """Sign and submit an encoded transaction.

        Args:
            encoded_transaction: Base64 transaction from TransactionFetcher
            signer: Signing capability; awaited to completion, never cancelled
            relay_endpoint: Relay URL (settings default if None)
            deadline: Optional bound on the whole submission

        Returns:
            Confirmation identifier (transaction signature)

        Raises:
            MalformedTransaction: Transaction could not be decoded
            RelayRejected: Relay refused the transaction
            UnrecognizedResponse: Relay answered with an unknown shape
            SubmissionTimeout: Deadline expired
            SigningError: Signer failed (propagated unchanged)
        """
        timing = SubmissionTiming()
        self.last_timing = timing
        total = Stopwatch()

        try:
            relay = self.build_relay(relay_endpoint)
            logger.info(f"Starting {relay.name} transaction submission...")

            # No wallet prompt once the budget is spent
            if deadline is not None and deadline.expired:
                raise SubmissionTimeout(f"Deadline of {deadline.seconds}s expired before signing")

            prepare = Stopwatch()
            transaction = decode_transaction(encoded_transaction)
            signed = await signer.sign(transaction)

            # Signing is not cancellable; a late signature is simply not sent
            if deadline is not None and deadline.expired:
                raise SubmissionTimeout(f"Deadline of {deadline.seconds}s expired during signing")

            raw_transaction = serialize_transaction(signed)
            timing.prepare = prepare.elapsed()
            logger.info(f"Transaction preparation took: {format_seconds(timing.prepare)} seconds")

            request = Stopwatch()
            try:
                signature = await run_within(
                    relay.send_transaction(raw_transaction),
                    deadline,
                    SubmissionTimeout,
                    "relay submission",
                )
            finally:
                timing.request = request.elapsed()

            timing.total = total.elapsed()
            logger.info(f"Response received in {format_seconds(timing.request)} seconds")
            logger.info(
                f"It took {format_seconds(timing.total)} seconds to send transaction "
                f"{signature} ({relay.name})"
            )
            return signature

        except Exception as e:
            timing.total = total.elapsed()
            target = redact_url(relay_endpoint) if relay_endpoint else "default relay"
            logger.error(
                f"Relay submission to {target} failed after {format_seconds(timing.total)} seconds: "
                f"{type(e).__name__}: {e}"
            )
            raise
