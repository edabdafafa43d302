"""
Deterministic contract ID derivation.

A Fuel contract ID is

    sha256(b"FUEL" ++ salt ++ code_root(bytecode) ++ storage_root(slots))

so the same (bytecode, salt, storage) triple always maps to the same ID.
This is what makes redeploying idempotent: the deployer can look the ID up
on chain before submitting anything.
"""

import hashlib
from typing import Dict, Iterable, List, Optional, Tuple

from .exceptions import InvalidHexError
from .types import StorageSlot

CONTRACT_ID_SEED = b"FUEL"

# Bytecode is merkleized in 16 KiB leaves
CODE_LEAF_SIZE = 16 * 1024
WORD_SIZE = 8

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"

EMPTY_BINARY_ROOT = hashlib.sha256(b"").digest()
EMPTY_SPARSE_ROOT = bytes(32)


def _sha256(*parts: bytes) -> bytes:
    h = hashlib.sha256()
    for part in parts:
        h.update(part)
    return h.digest()


def parse_hex(value: str, length: Optional[int] = None) -> bytes:
    """
    Parse a hex string into bytes.

    Args:
        value: Hex string, with or without 0x prefix
        length: Expected length in bytes (not checked if None)

    Returns:
        Decoded bytes

    Raises:
        InvalidHexError: If the string is not valid hex or has the wrong length
    """
    digits = value[2:] if value.lower().startswith("0x") else value
    try:
        data = bytes.fromhex(digits)
    except ValueError as e:
        raise InvalidHexError(f"Invalid hex value: {value!r}") from e

    if length is not None and len(data) != length:
        raise InvalidHexError(
            f"Expected {length} bytes, got {len(data)} in {value!r}"
        )
    return data


def to_hex(data: bytes) -> str:
    """Format bytes as a 0x-prefixed lowercase hex string."""
    return "0x" + data.hex()


def _binary_merkle_root(leaves: List[bytes]) -> bytes:
    if not leaves:
        return EMPTY_BINARY_ROOT
    if len(leaves) == 1:
        return _sha256(LEAF_PREFIX, leaves[0])

    # Split at the largest power of two strictly below the leaf count
    split = 1 << ((len(leaves) - 1).bit_length() - 1)
    return _sha256(
        NODE_PREFIX,
        _binary_merkle_root(leaves[:split]),
        _binary_merkle_root(leaves[split:]),
    )


def code_root(bytecode: bytes) -> bytes:
    """
    Compute the binary Merkle root of contract bytecode.

    The bytecode is split into 16 KiB leaves. The last leaf is zero-padded
    up to a whole number of 8-byte words.
    """
    leaves = []
    for offset in range(0, len(bytecode), CODE_LEAF_SIZE):
        leaf = bytecode[offset : offset + CODE_LEAF_SIZE]
        remainder = len(leaf) % WORD_SIZE
        if remainder:
            leaf += bytes(WORD_SIZE - remainder)
        leaves.append(leaf)
    return _binary_merkle_root(leaves)


def _bit(key: bytes, index: int) -> int:
    return (key[index // 8] >> (7 - index % 8)) & 1


def _sparse_merkle_root(leaves: List[Tuple[bytes, bytes]], depth: int) -> bytes:
    if not leaves:
        return EMPTY_SPARSE_ROOT
    # A subtree holding a single leaf collapses to that leaf
    if len(leaves) == 1:
        return leaves[0][1]

    left = [leaf for leaf in leaves if _bit(leaf[0], depth) == 0]
    right = [leaf for leaf in leaves if _bit(leaf[0], depth) == 1]
    return _sha256(
        NODE_PREFIX,
        _sparse_merkle_root(left, depth + 1),
        _sparse_merkle_root(right, depth + 1),
    )


def storage_root(slots: Iterable[StorageSlot]) -> bytes:
    """
    Compute the sparse Merkle root of a contract's initial storage.

    Args:
        slots: Initial storage slots (later duplicates of a key win)

    Returns:
        32-byte root; all zeroes for empty storage
    """
    by_key: Dict[bytes, bytes] = {}
    for slot in slots:
        if len(slot.key) != 32:
            raise InvalidHexError(f"Storage key must be 32 bytes, got {len(slot.key)}")
        by_key[slot.key] = slot.value

    leaves = [
        (key, _sha256(LEAF_PREFIX, key, _sha256(value)))
        for key, value in sorted(by_key.items())
    ]
    return _sparse_merkle_root(leaves, 0)


def compute_contract_id(bytecode: bytes, salt: bytes, state_root: bytes) -> bytes:
    """
    Derive the contract ID a deployment will be assigned.

    Args:
        bytecode: Contract bytecode
        salt: 32-byte deployment salt
        state_root: Storage root of the initial storage slots

    Returns:
        32-byte contract ID
    """
    if len(salt) != 32:
        raise InvalidHexError(f"Salt must be 32 bytes, got {len(salt)}")
    if len(state_root) != 32:
        raise InvalidHexError(f"Storage root must be 32 bytes, got {len(state_root)}")
    return _sha256(CONTRACT_ID_SEED, salt, code_root(bytecode), state_root)


def contract_id_hex(
    bytecode: bytes, salt: bytes, slots: Iterable[StorageSlot] = ()
) -> str:
    """Contract ID as a 0x-prefixed hex string, computed from raw storage slots."""
    return to_hex(compute_contract_id(bytecode, salt, storage_root(slots)))
