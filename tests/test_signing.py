"""Tests for transaction signers."""

import pytest
from solders.keypair import Keypair
from solders.message import to_bytes_versioned
from solders.signature import Signature

from conftest import build_unsigned_transaction
from swaprelay.signing import CallableSigner, KeypairSigner, get_signer
from swaprelay.signing.base import KeyNotFoundError, SignerType, SigningError


class TestKeypairSigner:
    """Tests for the in-memory keypair signer."""

    @pytest.mark.asyncio
    async def test_signs_fee_payer_slot(self, payer, unsigned_transaction):
        """Test fee payer signature verifies and message is unchanged."""
        signer = KeypairSigner(payer)

        signed = await signer.sign(unsigned_transaction)

        message_bytes = to_bytes_versioned(signed.message)
        assert signed.signatures[0].verify(payer.pubkey(), message_bytes)
        assert bytes(signed.message) == bytes(unsigned_transaction.message)

    @pytest.mark.asyncio
    async def test_partial_signing_keeps_other_slots(self, payer):
        """Test signing a second slot keeps the first."""
        sender = Keypair()
        transaction = build_unsigned_transaction(payer.pubkey(), sender=sender.pubkey())

        signed = await KeypairSigner(sender).sign(transaction)

        assert len(signed.signatures) == 2
        assert signed.signatures[0] == Signature.default()
        assert signed.signatures[1].verify(sender.pubkey(), to_bytes_versioned(signed.message))

    @pytest.mark.asyncio
    async def test_rejects_unrelated_key(self, unsigned_transaction):
        """Test key outside the required signers is rejected."""
        with pytest.raises(SigningError):
            await KeypairSigner(Keypair()).sign(unsigned_transaction)

    def test_from_base58(self, payer):
        """Test signer from a base58 keypair."""
        signer = KeypairSigner.from_base58(str(payer))

        assert signer.public_key == str(payer.pubkey())
        assert signer.signer_type is SignerType.LOCAL


class TestCallableSigner:
    """Tests for wrapping wallet sign functions."""

    @pytest.mark.asyncio
    async def test_sync_function(self, unsigned_transaction):
        """Test plain function signer."""
        signer = CallableSigner(lambda tx: tx)

        assert await signer.sign(unsigned_transaction) is unsigned_transaction
        assert signer.signer_type is SignerType.EXTERNAL

    @pytest.mark.asyncio
    async def test_async_function(self, payer, unsigned_transaction):
        """Test coroutine function signer."""
        keypair_signer = KeypairSigner(payer)

        async def wallet_sign(tx):
            return await keypair_signer.sign(tx)

        signed = await CallableSigner(wallet_sign).sign(unsigned_transaction)

        assert signed.signatures[0].verify(payer.pubkey(), to_bytes_versioned(signed.message))

    @pytest.mark.asyncio
    async def test_wrong_return_type(self, unsigned_transaction):
        """Test non-transaction result is rejected."""
        signer = CallableSigner(lambda tx: b"raw bytes")

        with pytest.raises(SigningError):
            await signer.sign(unsigned_transaction)


class TestSignerFactory:
    """Tests for get_signer()."""

    def test_no_key_configured(self):
        """Test missing key raises KeyNotFoundError."""
        with pytest.raises(KeyNotFoundError):
            get_signer()

    def test_key_from_settings(self, monkeypatch, payer):
        """Test key is read from WALLET_PRIVATE_KEY."""
        monkeypatch.setenv("WALLET_PRIVATE_KEY", str(payer))

        assert get_signer().public_key == str(payer.pubkey())

    def test_explicit_key(self, payer):
        """Test explicit key argument."""
        assert get_signer(str(payer)).public_key == str(payer.pubkey())
