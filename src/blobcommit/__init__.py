from .merkle.commitment import Committer, compute_proof, compute_root, verify
from .merkle.tree import MerkleProof, MerkleTree
from .protocol import (
    BlobCommitError,
    ConfigurationError,
    ErrorCode,
    IndexOutOfRangeError,
    InvalidLengthError,
    OddNodePolicy,
    SiblingPosition,
)

__all__ = [
    "Committer",
    "compute_proof",
    "compute_root",
    "verify",
    "MerkleProof",
    "MerkleTree",
    "BlobCommitError",
    "ConfigurationError",
    "ErrorCode",
    "IndexOutOfRangeError",
    "InvalidLengthError",
    "OddNodePolicy",
    "SiblingPosition",
]
