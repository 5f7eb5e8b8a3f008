"""Transaction signing services.

Provides:
- KeypairSigner: in-memory Solana keypair (hot wallet)
- CallableSigner: wraps a wallet-provided sign function
"""

from swaprelay.signing.base import (
    KeyNotFoundError,
    SignerType,
    SigningError,
    TransactionSigner,
)
from swaprelay.signing.factory import get_signer
from swaprelay.signing.local import CallableSigner, KeypairSigner

__all__ = [
    "CallableSigner",
    "KeyNotFoundError",
    "KeypairSigner",
    "SignerType",
    "SigningError",
    "TransactionSigner",
    "get_signer",
]
