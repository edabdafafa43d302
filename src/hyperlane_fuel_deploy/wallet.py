"""Signing account for hyperlane-fuel-deploy."""

import hashlib

from ecdsa import SECP256k1, SigningKey

from .contract_id import parse_hex, to_hex


class Wallet:
    """
    An unlocked account backed by a single secp256k1 private key.

    Signing itself happens in the forc toolchain; the wallet holds the key
    to hand over and derives the account address for balance lookups.
    """

    def __init__(self, private_key: bytes):
        if len(private_key) != 32:
            raise ValueError(f"Private key must be 32 bytes, got {len(private_key)}")
        self._private_key = private_key
        self._signing_key = SigningKey.from_string(private_key, curve=SECP256k1)

    @classmethod
    def from_private_key(cls, private_key: str) -> "Wallet":
        return cls(parse_hex(private_key, 32))

    @property
    def private_key_hex(self) -> str:
        return to_hex(self._private_key)

    @property
    def public_key(self) -> bytes:
        """Uncompressed public key (x ++ y), without the 0x04 prefix."""
        return self._signing_key.get_verifying_key().to_string()

    @property
    def address(self) -> str:
        # Fuel addresses are the sha256 of the uncompressed public key
        return to_hex(hashlib.sha256(self.public_key).digest())

    def __repr__(self) -> str:
        return f"Wallet(address={self.address})"
