"""
Leaf and internal-node hashing.

Leaves are the plain digest of a chunk: no domain-separation prefix and no
length prefix. Internal nodes are the digest of ``left || right``. Both use
the same DigestFunction, so swapping the primitive swaps it everywhere.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Iterable, List

from ..protocol.errors import ConfigurationError

DIGEST_SIZE = 32


# ===========================================================================
# Digest functions
# ===========================================================================


@dataclass(frozen=True)
class DigestFunction:
    """
    A named, fixed-length hash primitive.

    Attributes:
        name: Registry name (e.g. "sha256")
        factory: Zero-argument constructor returning a hashlib-style object
        digest_size: Output length in bytes
    """
    name: str
    factory: Callable[[], Any]
    digest_size: int = DIGEST_SIZE

    def __call__(self, *parts: bytes) -> bytes:
        hasher = self.factory()
        for part in parts:
            hasher.update(part)
        return hasher.digest()


SHA256 = DigestFunction("sha256", hashlib.sha256)
SHA3_256 = DigestFunction("sha3_256", hashlib.sha3_256)
BLAKE2B_256 = DigestFunction("blake2b_256", partial(hashlib.blake2b, digest_size=DIGEST_SIZE))
BLAKE2S = DigestFunction("blake2s", hashlib.blake2s)

_REGISTRY: Dict[str, DigestFunction] = {
    d.name: d for d in (SHA256, SHA3_256, BLAKE2B_256, BLAKE2S)
}


def get_digest(name: str) -> DigestFunction:
    """Look up a registered digest function by name (case-insensitive)."""
    key = (name or "").strip().lower().replace("-", "_")
    try:
        return _REGISTRY[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown digest function {name!r}; expected one of {sorted(_REGISTRY)}"
        ) from None


def available_digests() -> List[str]:
    return sorted(_REGISTRY)


# ===========================================================================
# Hashing
# ===========================================================================


def hash_leaf(segment: bytes, digest: DigestFunction = SHA256) -> bytes:
    return digest(segment)


def hash_leaves(chunks: Iterable[bytes], digest: DigestFunction = SHA256) -> List[bytes]:
    """Hash each chunk into a leaf, preserving order."""
    return [digest(chunk) for chunk in chunks]


def hash_pair(left: bytes, right: bytes, digest: DigestFunction = SHA256) -> bytes:
    """Parent digest of two children, left then right. Never reordered."""
    return digest(left, right)
