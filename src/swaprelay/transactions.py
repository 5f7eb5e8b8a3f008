"""Decode / encode of Solana versioned transactions.

The base64 string exchanged between fetcher and submitter is opaque to
the pipeline; only these helpers interpret it.
"""

import base64
import binascii

from solders.errors import BincodeError
from solders.transaction import VersionedTransaction

from swaprelay.errors import MalformedTransaction


def decode_transaction(encoded: str) -> VersionedTransaction:
    """Decode a base64 transaction.

    Raises:
        MalformedTransaction: If the string is not valid base64 or not a
            serialized versioned transaction
    """
    if isinstance(encoded, str):
        # Providers may wrap long base64 payloads across lines
        encoded = "".join(encoded.split())
    try:
        raw = base64.b64decode(encoded, validate=True)
        return VersionedTransaction.from_bytes(raw)
    except (binascii.Error, BincodeError, ValueError, TypeError) as e:
        raise MalformedTransaction(f"Could not decode transaction: {e}") from e


def serialize_transaction(transaction: VersionedTransaction) -> bytes:
    """Wire bytes of a transaction."""
    return bytes(transaction)


def encode_transaction(transaction: VersionedTransaction) -> str:
    """Base64 wire encoding of a transaction."""
    return base64.b64encode(serialize_transaction(transaction)).decode()
