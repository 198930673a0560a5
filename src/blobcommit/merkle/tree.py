"""
Merkle Tree

Binary hash tree over an ordered sequence of leaf digests.

Key features:
- Pluggable fixed-length digest (SHA-256 by default)
- Ordered pair hashing: parent = H(left || right)
- Explicit odd-node policy (promote or duplicate)
- Inclusion proofs carrying sibling positions
- Verification of proofs
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..protocol.enums import OddNodePolicy, SiblingPosition
from ..protocol.errors import IndexOutOfRangeError, InvalidLengthError
from ..utils.hexcodec import from_hex, to_hex
from .chunker import CHUNK_SIZE
from .hashing import SHA256, DigestFunction, hash_pair

logger = logging.getLogger(__name__)


# ===========================================================================
# Merkle Proof
# ===========================================================================


@dataclass
class MerkleProof:
    """
    Inclusion proof for a leaf in a Merkle tree.

    Attributes:
        leaf_digest: Digest of the leaf being proved
        leaf_index: Index of the leaf
        leaf_count: Number of leaves in the tree
        siblings: Sibling digests from the leaf level upward
        positions: Side of the running digest each sibling goes on
        root: Root the proof was extracted against
    """
    leaf_digest: bytes
    leaf_index: int
    leaf_count: int = 0
    siblings: List[bytes] = field(default_factory=list)
    positions: List[SiblingPosition] = field(default_factory=list)
    root: bytes = b""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leafDigest": to_hex(self.leaf_digest),
            "leafIndex": self.leaf_index,
            "leafCount": self.leaf_count,
            "proof": [to_hex(s) for s in self.siblings],
            "positions": [p.value for p in self.positions],
            "root": to_hex(self.root),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MerkleProof":
        return cls(
            leaf_digest=from_hex(data["leafDigest"]),
            leaf_index=int(data["leafIndex"]),
            leaf_count=int(data["leafCount"]),
            siblings=[from_hex(s) for s in data["proof"]],
            positions=[SiblingPosition(p) for p in data.get("positions", [])],
            root=from_hex(data["root"]) if data.get("root") else b"",
        )


# ===========================================================================
# Merkle Tree
# ===========================================================================


class MerkleTree:
    """
    Merkle tree built once from a list of leaf digests.

    All levels are kept (level 0 = leaves, last level = [root]) so that
    proofs can be read off without rehashing. The tree is never mutated
    after construction.
    """

    def __init__(
        self,
        leaves: Sequence[bytes],
        *,
        digest: DigestFunction = SHA256,
        odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
    ) -> None:
        if len(leaves) == 0:
            raise InvalidLengthError(0, CHUNK_SIZE, "Cannot build tree with no leaves")

        self._digest = digest
        self._policy = OddNodePolicy(odd_node_policy)
        self._levels: List[List[bytes]] = [[bytes(leaf) for leaf in leaves]]

        while len(self._levels[-1]) > 1:
            self._levels.append(self._next_level(self._levels[-1]))

        logger.debug(
            "Built Merkle tree: %d leaves, depth %d, policy=%s, digest=%s",
            self.leaf_count,
            self.depth,
            self._policy.value,
            self._digest.name,
        )

    def _next_level(self, level: List[bytes]) -> List[bytes]:
        next_level: List[bytes] = []
        for i in range(0, len(level), 2):
            left = level[i]
            if i + 1 < len(level):
                next_level.append(hash_pair(left, level[i + 1], self._digest))
            elif self._policy is OddNodePolicy.DUPLICATE:
                next_level.append(hash_pair(left, left, self._digest))
            else:
                next_level.append(left)
        return next_level

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def leaves(self) -> List[bytes]:
        return list(self._levels[0])

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of hashing levels between the leaves and the root."""
        return len(self._levels) - 1

    @property
    def digest(self) -> DigestFunction:
        return self._digest

    @property
    def odd_node_policy(self) -> OddNodePolicy:
        return self._policy

    def get_proof(self, index: int) -> MerkleProof:
        """
        Get inclusion proof for a leaf.

        Raises:
            IndexOutOfRangeError: If index is outside [0, leaf_count)
        """
        if index < 0 or index >= self.leaf_count:
            raise IndexOutOfRangeError(index, self.leaf_count)

        siblings: List[bytes] = []
        positions: List[SiblingPosition] = []
        current_index = index

        for level in self._levels[:-1]:
            if current_index % 2 == 1:
                siblings.append(level[current_index - 1])
                positions.append(SiblingPosition.LEFT)
            elif current_index + 1 < len(level):
                siblings.append(level[current_index + 1])
                positions.append(SiblingPosition.RIGHT)
            elif self._policy is OddNodePolicy.DUPLICATE:
                siblings.append(level[current_index])
                positions.append(SiblingPosition.RIGHT)
            # promoted nodes contribute nothing at this level
            current_index //= 2

        logger.debug("Proof for leaf %d has %d siblings", index, len(siblings))

        return MerkleProof(
            leaf_digest=self._levels[0][index],
            leaf_index=index,
            leaf_count=self.leaf_count,
            siblings=siblings,
            positions=positions,
            root=self.root,
        )


# ===========================================================================
# Functional forms
# ===========================================================================


def build_root(
    leaves: Sequence[bytes],
    *,
    digest: DigestFunction = SHA256,
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
) -> bytes:
    return MerkleTree(leaves, digest=digest, odd_node_policy=odd_node_policy).root


def build_proof(
    leaves: Sequence[bytes],
    index: int,
    *,
    digest: DigestFunction = SHA256,
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE,
) -> MerkleProof:
    return MerkleTree(leaves, digest=digest, odd_node_policy=odd_node_policy).get_proof(index)


def _path_matches_index(proof: MerkleProof) -> bool:
    """
    Check the recorded sibling sides against ``leaf_index``.

    Replays the walk a tree of ``leaf_count`` leaves would take. An unpaired
    node either records nothing (promoted) or records itself on the right
    (duplicated); a promoted node stays last in every level above, so a
    RIGHT entry at an unpaired level can only be a duplicate.
    """
    index, width = proof.leaf_index, proof.leaf_count
    positions = proof.positions
    step = 0

    while width > 1:
        if index % 2 == 1:
            expected: Optional[SiblingPosition] = SiblingPosition.LEFT
        elif index + 1 < width:
            expected = SiblingPosition.RIGHT
        else:
            expected = None

        if expected is None:
            if step < len(positions) and positions[step] == SiblingPosition.RIGHT:
                step += 1
        elif step >= len(positions) or positions[step] != expected:
            return False
        else:
            step += 1

        index //= 2
        width = (width + 1) // 2

    return step == len(positions)


def verify_proof(
    proof: MerkleProof,
    root: Optional[bytes] = None,
    *,
    digest: DigestFunction = SHA256,
) -> bool:
    """
    Verify a Merkle inclusion proof.

    The sibling sides must match the path of ``leaf_index`` in a tree of
    ``leaf_count`` leaves. Each sibling is then folded into the running
    digest on its recorded side and the result compared with ``root``
    (``proof.root`` when omitted).
    """
    expected = proof.root if root is None else root
    if not expected or len(proof.siblings) != len(proof.positions):
        return False
    if not 0 <= proof.leaf_index < proof.leaf_count:
        return False
    if not _path_matches_index(proof):
        logger.debug("Proof positions do not match leaf index %d", proof.leaf_index)
        return False

    current = proof.leaf_digest
    for sibling, position in zip(proof.siblings, proof.positions):
        if position == SiblingPosition.LEFT:
            current = hash_pair(sibling, current, digest)
        else:
            current = hash_pair(current, sibling, digest)

    return current == expected
