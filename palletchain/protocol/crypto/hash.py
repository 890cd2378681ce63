import hashlib
from typing import Any, List

def sha256(data: bytes) -> bytes:
    """Returns SHA256 hash of bytes."""
    return hashlib.sha256(data).digest()

def sha256_hex(data: bytes) -> str:
    """Returns SHA256 hash of bytes as hex string."""
    return sha256(data).hex()

def leaf_hash(*parts: Any) -> bytes:
    """Hashes one storage entry, e.g. leaf_hash("balances", "alice", 100)."""
    return sha256(":".join(str(p) for p in parts).encode("utf-8"))

def merkle_root(leaves: List[bytes]) -> bytes:
    """
    Merkle root over an ordered list of leaves.
    An odd node at any level is paired with itself; no leaves gives 32 zero bytes.
    """
    if not leaves:
        return b'\x00' * 32

    level = list(leaves)
    while len(level) > 1:
        level = [
            sha256(level[i] + (level[i + 1] if i + 1 < len(level) else level[i]))
            for i in range(0, len(level), 2)
        ]
    return level[0]
