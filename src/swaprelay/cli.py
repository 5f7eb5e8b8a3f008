"""Command-line interface.

Usage:
    python -m swaprelay swap --input-mint So111... --output-mint EPjF... --amount 1000000
    python -m swaprelay fetch --input-mint ... --output-mint ... --amount ... --payer <pubkey>
    python -m swaprelay config

Environment variables (see swaprelay.config.Settings):
    SWAP_ENDPOINT, RELAY_ENDPOINT, RELAY_API_KEY, RELAY_PROTOCOL,
    WALLET_PRIVATE_KEY, REQUEST_DEADLINE
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from swaprelay.config import get_settings
from swaprelay.errors import SwapRelayError
from swaprelay.providers.base import ProviderKind, SwapRequest
from swaprelay.relay.base import RelayProtocol
from swaprelay.relay.submitter import RelaySubmitter
from swaprelay.signing.base import SigningError
from swaprelay.signing.factory import get_signer
from swaprelay.swap.executor import execute_swap
from swaprelay.swap.fetcher import TransactionFetcher
from swaprelay.utils.timing import Deadline

logger = logging.getLogger(__name__)

# Wrapped SOL / USDC on mainnet
SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="swaprelay",
        description="Fetch a swap transaction and submit it through a low-latency relay",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    def add_swap_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--input-mint", default=SOL_MINT, help="Input token mint (default: SOL)")
        sub.add_argument("--output-mint", default=USDC_MINT, help="Output token mint (default: USDC)")
        sub.add_argument("--amount", type=int, required=True, help="Amount in smallest units")
        sub.add_argument(
            "--slippage-bps",
            type=int,
            default=settings.default_slippage_bps,
            help="Slippage tolerance in bps",
        )
        sub.add_argument("--endpoint", default=None, help="Swap endpoint (default: SWAP_ENDPOINT)")
        sub.add_argument(
            "--provider",
            choices=[kind.value for kind in ProviderKind],
            default=None,
            help="Force a provider instead of inferring it from the endpoint",
        )
        sub.add_argument("--deadline", type=float, default=None, help="Deadline in seconds")

    swap = commands.add_parser("swap", help="Fetch, sign and submit a swap")
    add_swap_args(swap)
    swap.add_argument("--relay", default=None, help="Relay endpoint (default: RELAY_ENDPOINT)")
    swap.add_argument(
        "--protocol",
        choices=[protocol.value for protocol in RelayProtocol],
        default=None,
        help="Relay protocol (default: RELAY_PROTOCOL)",
    )

    fetch = commands.add_parser("fetch", help="Fetch and print the encoded swap transaction")
    add_swap_args(fetch)
    fetch.add_argument("--payer", default=None, help="Payer public key (default: wallet key)")

    commands.add_parser("config", help="Show effective configuration (secrets redacted)")
    return parser


async def run_swap(args: argparse.Namespace) -> dict:
    settings = get_settings()
    signer = get_signer()
    request = SwapRequest(
        input_mint=args.input_mint,
        output_mint=args.output_mint,
        amount=args.amount,
        payer=signer.public_key,
        slippage_bps=args.slippage_bps,
    )
    result = await execute_swap(
        request,
        signer,
        swap_endpoint=args.endpoint,
        relay_endpoint=args.relay,
        fetcher=TransactionFetcher(kind=args.provider),
        submitter=RelaySubmitter(protocol=args.protocol),
        deadline=Deadline.after(args.deadline or settings.request_deadline),
    )
    return result.to_dict()


async def run_fetch(args: argparse.Namespace) -> dict:
    settings = get_settings()
    payer = args.payer or get_signer().public_key
    request = SwapRequest(
        input_mint=args.input_mint,
        output_mint=args.output_mint,
        amount=args.amount,
        payer=payer,
        slippage_bps=args.slippage_bps,
    )
    endpoint = args.endpoint or settings.swap_endpoint
    encoded = await TransactionFetcher(kind=args.provider).fetch(
        endpoint,
        request,
        deadline=Deadline.after(args.deadline or settings.request_deadline),
    )
    return {"endpoint": endpoint, "transaction": encoded}


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug or get_settings().debug)

    try:
        if args.command == "config":
            output = get_settings().get_safe_dict()
        elif args.command == "fetch":
            output = asyncio.run(run_fetch(args))
        else:
            output = asyncio.run(run_swap(args))
    except (SwapRelayError, SigningError, ValueError) as e:
        logger.error(f"{args.command} failed: {type(e).__name__}: {e}")
        print(json.dumps({"error": str(e), "type": type(e).__name__}), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0
