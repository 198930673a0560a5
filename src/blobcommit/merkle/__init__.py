"""
Merkle commitment primitives.

Chunker -> leaf hasher -> tree builder. The public entry points live in
``blobcommit.merkle.commitment``.
"""

from .chunker import CHUNK_SIZE, chunk, iter_chunks
from .hashing import (
    SHA256,
    DigestFunction,
    available_digests,
    get_digest,
    hash_leaf,
    hash_leaves,
    hash_pair,
)
from .tree import MerkleProof, MerkleTree, build_proof, build_root, verify_proof

__all__ = [
    "CHUNK_SIZE",
    "chunk",
    "iter_chunks",
    "SHA256",
    "DigestFunction",
    "available_digests",
    "get_digest",
    "hash_leaf",
    "hash_leaves",
    "hash_pair",
    "MerkleProof",
    "MerkleTree",
    "build_proof",
    "build_root",
    "verify_proof",
]
