"""
Blob commitments.

Entry points used by the storage layer to commit to a blob and to prove that
a single 32-byte chunk belongs to it. Every call chunks the blob, hashes the
leaves and builds a fresh tree; nothing is cached between calls.

Usage:

    from blobcommit import compute_root, compute_proof, verify

    root = compute_root(blob)
    proof = compute_proof(blob, 3)
    assert verify(root, proof)
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from ..protocol.enums import OddNodePolicy
from ..protocol.errors import ConfigurationError
from ..utils.hexcodec import from_hex, to_hex
from ..utils.logging import configure_logging, get_logger
from .chunker import Blob, iter_chunks
from .hashing import SHA256, DigestFunction, get_digest, hash_leaves
from .tree import MerkleProof, MerkleTree, verify_proof

logger = get_logger(__name__)


class Committer:
    """
    Computes roots and inclusion proofs for blobs with a fixed digest
    function and odd-node policy. Stateless between calls.
    """

    def __init__(
        self,
        digest: Union[DigestFunction, str] = SHA256,
        odd_node_policy: Union[OddNodePolicy, str] = OddNodePolicy.PROMOTE,
    ) -> None:
        self.digest = get_digest(digest) if isinstance(digest, str) else digest
        try:
            self.odd_node_policy = OddNodePolicy(
                odd_node_policy.strip().lower() if isinstance(odd_node_policy, str) else odd_node_policy
            )
        except ValueError:
            raise ConfigurationError(f"Unknown odd-node policy {odd_node_policy!r}") from None

    @classmethod
    def from_settings(cls, settings=None) -> "Committer":
        if settings is None:
            from ..core.settings import get_settings

            settings = get_settings()
        configure_logging(settings.log_level)
        return cls(settings.digest_function(), settings.odd_node_policy)

    def leaves(self, blob: Blob) -> List[bytes]:
        return hash_leaves((segment for _idx, segment in iter_chunks(blob)), self.digest)

    def tree(self, blob: Blob) -> MerkleTree:
        return MerkleTree(
            self.leaves(blob),
            digest=self.digest,
            odd_node_policy=self.odd_node_policy,
        )

    def root(self, blob: Blob) -> bytes:
        return self.tree(blob).root

    def proof(self, blob: Blob, index: int) -> MerkleProof:
        return self.tree(blob).get_proof(index)

    def compute_root(self, blob: Blob) -> str:
        return to_hex(self.root(blob))

    def compute_proof(self, blob: Blob, index: int) -> Dict[str, Any]:
        """
        Inclusion proof for chunk ``index`` as a hex-encoded dict:
        ``leafDigest``, ``leafIndex``, ``proof``, ``positions`` and ``root``.
        """
        return self.proof(blob, index).to_dict()

    def verify(self, root: Union[str, bytes], proof: Union[Dict[str, Any], MerkleProof]) -> bool:
        """
        Check a proof against a claimed root.

        Malformed proofs (bad hex, unknown positions, missing keys) verify
        as False rather than raising.
        """
        try:
            if not isinstance(proof, MerkleProof):
                proof = MerkleProof.from_dict(proof)
            expected = from_hex(root)
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug("Malformed proof rejected: %s", exc)
            return False
        return verify_proof(proof, expected, digest=self.digest)


def default_committer() -> Committer:
    return Committer.from_settings()


def compute_root(blob: Blob) -> str:
    """Hex-encoded Merkle root of ``blob``."""
    return default_committer().compute_root(blob)


def compute_proof(blob: Blob, index: int) -> Dict[str, Any]:
    return default_committer().compute_proof(blob, index)


def verify(root: Union[str, bytes], proof: Union[Dict[str, Any], MerkleProof]) -> bool:
    return default_committer().verify(root, proof)


__all__ = [
    "Committer",
    "compute_proof",
    "compute_root",
    "default_committer",
    "verify",
]
