"""Local and callback signing backends.

KeypairSigner holds a solders Keypair in memory. Suitable for:
- Development/testing
- Hot wallet with small amounts

CallableSigner wraps a wallet-provided sign function (sync or async),
e.g. a wallet adapter's signTransaction.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.transaction import VersionedTransaction

from swaprelay.signing.base import SignerType, SigningError, TransactionSigner

logger = logging.getLogger(__name__)

SignFunction = Callable[
    [VersionedTransaction],
    Union[VersionedTransaction, Awaitable[VersionedTransaction]],
]


class KeypairSigner(TransactionSigner):
    """Signs with an in-memory keypair.

    The signature is written into the slot matching the keypair's position
    among the message's required signers, so transactions with other
    (already present) signatures keep them.
    """

    def __init__(self, keypair: Keypair):
        super().__init__(SignerType.LOCAL)
        self.keypair = keypair

    @classmethod
    def from_base58(cls, secret: str) -> "KeypairSigner":
        """Create a signer from a base58-encoded 64-byte keypair."""
        try:
            return cls(Keypair.from_base58_string(secret.strip()))
        except ValueError as e:
            raise SigningError(f"Invalid base58 keypair: {e}") from e

    @property
    def public_key(self) -> str:
        return str(self.keypair.pubkey())

    async def sign(self, transaction: VersionedTransaction) -> VersionedTransaction:
        message = transaction.message
        required = message.header.num_required_signatures
        signer_keys = list(message.account_keys[:required])
        pubkey = self.keypair.pubkey()

        if pubkey not in signer_keys:
            raise SigningError(f"{pubkey} is not a required signer of this transaction")

        signature = self.keypair.sign_message(to_bytes_versioned(message))
        signatures = list(transaction.signatures)
        signatures[signer_keys.index(pubkey)] = signature

        logger.debug(f"Signed transaction as {pubkey}")
        return VersionedTransaction.populate(message, signatures)


class CallableSigner(TransactionSigner):
    """Adapts a plain sign function to the TransactionSigner interface."""

    def __init__(self, sign_function: SignFunction):
        super().__init__(SignerType.EXTERNAL)
        self._sign_function = sign_function

    async def sign(self, transaction: VersionedTransaction) -> VersionedTransaction:
        result: Any = self._sign_function(transaction)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, VersionedTransaction):
            raise SigningError(
                f"Sign function returned {type(result).__name__}, expected VersionedTransaction"
            )
        return result
