"""Pytest configuration and fixtures."""

import asyncio
import base64
import os
from typing import Callable, Optional

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

# Set test environment
os.environ["DEBUG"] = "true"
os.environ["RELAY_PROTOCOL"] = "json_rpc"
os.environ["RELAY_API_KEY"] = ""
os.environ.pop("PROVIDER_KIND", None)
os.environ.pop("WALLET_PRIVATE_KEY", None)
os.environ.pop("REQUEST_DEADLINE", None)

from swaprelay.config import get_settings
from swaprelay.providers.base import SwapRequest
from swaprelay.utils.locks import clear_in_flight

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def build_unsigned_transaction(
    fee_payer: Pubkey,
    sender: Optional[Pubkey] = None,
) -> VersionedTransaction:
    """Unsigned v0 transfer with placeholder signatures, like a provider returns."""
    sender = sender or fee_payer
    instruction = transfer(
        TransferParams(from_pubkey=sender, to_pubkey=Pubkey.new_unique(), lamports=1_000)
    )
    message = MessageV0.try_compile(fee_payer, [instruction], [], Hash.default())
    placeholders = [Signature.default()] * message.header.num_required_signatures
    return VersionedTransaction.populate(message, placeholders)


def encode(transaction: VersionedTransaction) -> str:
    return base64.b64encode(bytes(transaction)).decode()


class MockRoutes:
    """httpx handler answering by method and URL prefix, recording every request."""

    def __init__(self):
        self.routes: list[tuple[str, str, Callable[[httpx.Request], httpx.Response]]] = []
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url_prefix: str, status_code: int = 200, **response_kwargs) -> None:
        self.routes.append(
            (method, url_prefix, lambda request: httpx.Response(status_code, **response_kwargs))
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, prefix, respond in self.routes:
            if request.method == method and str(request.url).startswith(prefix):
                return respond(request)
        return httpx.Response(404, text="no route")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class FakeBroadcastResponse:
    def __init__(self, value):
        self.value = value


class FakeBroadcastClient:
    """Stands in for solana-py AsyncClient.send_raw_transaction."""

    def __init__(self, value: str = "stub-broadcast-id", error: Optional[Exception] = None, delay: float = 0):
        self.value = value
        self.error = error
        self.delay = delay
        self.calls: list[tuple[bytes, object]] = []

    async def send_raw_transaction(self, txn, opts=None):
        self.calls.append((txn, opts))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return FakeBroadcastResponse(self.value)


@pytest.fixture(autouse=True)
def reset_state():
    """Fresh settings and in-flight registry for every test."""
    get_settings.cache_clear()
    clear_in_flight()
    yield
    get_settings.cache_clear()
    clear_in_flight()


@pytest.fixture
def payer() -> Keypair:
    return Keypair()


@pytest.fixture
def unsigned_transaction(payer: Keypair) -> VersionedTransaction:
    return build_unsigned_transaction(payer.pubkey())


@pytest.fixture
def encoded_transaction(unsigned_transaction: VersionedTransaction) -> str:
    return encode(unsigned_transaction)


@pytest.fixture
def swap_request(payer: Keypair) -> SwapRequest:
    return SwapRequest(
        input_mint=SOL_MINT,
        output_mint=USDC_MINT,
        amount=1_000_000,
        payer=str(payer.pubkey()),
    )


@pytest.fixture
def routes() -> MockRoutes:
    return MockRoutes()
