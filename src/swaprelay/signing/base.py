"""Base interfaces for transaction signing.

Signing flow:
1. Submitter decodes the provider's transaction
2. Signer returns a signed copy (may wait on a wallet or hardware device)
3. Submitter re-encodes and relays the signed transaction

Signers never expose private keys; they only return signed transactions.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

from solders.transaction import VersionedTransaction

logger = logging.getLogger(__name__)


class SignerType(str, Enum):
    """Type of signing backend."""
    LOCAL = "local"           # Keypair in memory (hot wallet)
    EXTERNAL = "external"     # Wallet adapter / hardware callback


class TransactionSigner(ABC):
    """Abstract base class for transaction signers."""

    def __init__(self, signer_type: SignerType):
        self.signer_type = signer_type

    @abstractmethod
    async def sign(self, transaction: VersionedTransaction) -> VersionedTransaction:
        """Sign a decoded transaction.

        Args:
            transaction: Unsigned (or partially signed) transaction

        Returns:
            The transaction with this signer's signature applied

        Raises:
            SigningError: If the transaction cannot be signed
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.signer_type.value})"


class SigningError(Exception):
    """Exception raised when signing fails."""
    pass


class KeyNotFoundError(SigningError):
    """Exception raised when no signing key is available."""
    pass
