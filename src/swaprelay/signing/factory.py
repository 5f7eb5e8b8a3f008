"""Signer factory.

Creates the local keypair signer from configuration.
"""

import logging
from typing import Optional

from swaprelay.config import get_settings
from swaprelay.signing.base import KeyNotFoundError
from swaprelay.signing.local import KeypairSigner

logger = logging.getLogger(__name__)


def get_signer(private_key: Optional[str] = None) -> KeypairSigner:
    """Get a keypair signer.

    Args:
        private_key: Base58 keypair; WALLET_PRIVATE_KEY is used when omitted

    Raises:
        KeyNotFoundError: If no key is configured
    """
    secret = private_key or get_settings().wallet_private_key
    if not secret:
        raise KeyNotFoundError("No wallet private key configured (WALLET_PRIVATE_KEY)")

    signer = KeypairSigner.from_base58(secret)
    logger.info(f"Initialized local signer for {signer.public_key}")
    return signer
