"""
Tests for the blob commitment entry points.
"""

import hashlib
import logging

import pytest

from blobcommit import (
    Committer,
    ConfigurationError,
    IndexOutOfRangeError,
    InvalidLengthError,
    OddNodePolicy,
    compute_proof,
    compute_root,
    verify,
)
from blobcommit.merkle.hashing import BLAKE2S


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def make_blob(chunks: int) -> bytes:
    """Chunk i is 32 copies of byte i."""
    return b"".join(bytes([i]) * 32 for i in range(chunks))


class TestComputeRoot:
    """Tests for compute_root()."""

    def test_deterministic(self):
        blob = make_blob(7)
        assert compute_root(blob) == compute_root(blob)

    def test_single_chunk_identity(self):
        blob = bytes(range(32))
        assert compute_root(blob) == "0x" + hashlib.sha256(blob).hexdigest()

    def test_hex_encoding(self):
        root = compute_root(make_blob(3))

        assert root.startswith("0x")
        assert len(root) == 2 + 64
        assert root == root.lower()

    @pytest.mark.parametrize("length", [0, 1, 31, 33, 65])
    def test_length_validation(self, length):
        with pytest.raises(InvalidLengthError):
            compute_root(b"\x07" * length)

    def test_order_sensitivity(self):
        blob = make_blob(4)
        swapped = blob[32:64] + blob[0:32] + blob[64:]

        assert compute_root(blob) != compute_root(swapped)

    def test_identical_chunks_swap_is_degenerate(self):
        blob = b"\x05" * 32 * 3
        swapped = blob[32:64] + blob[0:32] + blob[64:]

        assert compute_root(blob) == compute_root(swapped)

    def test_string_blob(self):
        text = "a" * 64
        assert compute_root(text) == compute_root(text.encode("utf-8"))


class TestComputeProof:
    """Tests for compute_proof()."""

    def test_two_zero_chunks(self):
        """64 zero bytes: both leaves are SHA256 of 32 zero bytes."""
        blob = b"\x00" * 64
        leaf = sha256(b"\x00" * 32)
        root = sha256(leaf + leaf)

        proof = compute_proof(blob, 0)

        assert compute_root(blob) == "0x" + root.hex()
        assert proof["leafDigest"] == "0x" + leaf.hex()
        assert proof["proof"] == ["0x" + leaf.hex()]
        assert proof["positions"] == ["right"]
        assert proof["leafIndex"] == 0
        assert proof["root"] == "0x" + root.hex()

    @pytest.mark.parametrize("chunks", [1, 2, 3, 5, 8, 11])
    def test_round_trip(self, chunks):
        blob = make_blob(chunks)
        root = compute_root(blob)

        for i in range(chunks):
            assert verify(root, compute_proof(blob, i))

    def test_index_bound(self):
        blob = make_blob(3)

        with pytest.raises(IndexOutOfRangeError):
            compute_proof(blob, 3)
        with pytest.raises(IndexOutOfRangeError):
            compute_proof(blob, -1)

    @pytest.mark.parametrize("length", [0, 10, 48])
    def test_length_validation(self, length):
        with pytest.raises(InvalidLengthError):
            compute_proof(b"\x01" * length, 0)

    def test_length_checked_before_index(self):
        with pytest.raises(InvalidLengthError):
            compute_proof(b"\x01" * 40, 99)


class TestVerify:
    """Tests for verify()."""

    def test_proof_against_other_blob_fails(self):
        proof = compute_proof(make_blob(4), 1)
        other_root = compute_root(make_blob(5))

        assert not verify(other_root, proof)

    def test_relabelled_index_fails(self):
        blob = make_blob(4)
        proof = compute_proof(blob, 0)
        proof["leafIndex"] = 3

        assert not verify(compute_root(blob), proof)

    def test_missing_leaf_count_fails(self):
        blob = make_blob(4)
        proof = compute_proof(blob, 1)
        del proof["leafCount"]

        assert not verify(compute_root(blob), proof)

    def test_bare_hex_root(self):
        blob = make_blob(4)
        root = compute_root(blob)

        assert verify(root[2:], compute_proof(blob, 2))

    def test_malformed_proof_is_false(self):
        root = compute_root(make_blob(2))

        assert not verify(root, {"leafDigest": "0xzz", "proof": []})
        assert not verify(root, {"proof": []})
        assert not verify(root, {"leafDigest": "0x00", "proof": ["0x00"], "positions": ["up"]})

    def test_missing_positions_only_verifies_single_leaf(self):
        blob = make_blob(1)
        proof = compute_proof(blob, 0)
        del proof["positions"]

        assert verify(compute_root(blob), proof)


class TestCommitter:
    """Tests for Committer configuration."""

    def test_default_matches_module_functions(self):
        blob = make_blob(5)
        assert Committer().compute_root(blob) == compute_root(blob)

    def test_duplicate_policy(self):
        blob = make_blob(3)
        leaves = [sha256(blob[i:i + 32]) for i in range(0, 96, 32)]
        expected = sha256(sha256(leaves[0] + leaves[1]) + sha256(leaves[2] + leaves[2]))

        committer = Committer(odd_node_policy=OddNodePolicy.DUPLICATE)

        assert committer.compute_root(blob) == "0x" + expected.hex()
        assert committer.verify(committer.compute_root(blob), committer.compute_proof(blob, 2))

    def test_digest_by_name(self):
        blob = bytes(range(32))
        committer = Committer(digest="blake2s")

        assert committer.digest is BLAKE2S
        assert committer.compute_root(blob) == "0x" + hashlib.blake2s(blob).hexdigest()

    def test_tree_is_fresh_per_call(self):
        committer = Committer()
        blob = make_blob(4)

        assert committer.tree(blob) is not committer.tree(blob)

    def test_from_settings_env(self, monkeypatch):
        monkeypatch.setenv("BLOBCOMMIT_DIGEST", "sha3_256")
        monkeypatch.setenv("BLOBCOMMIT_ODD_NODE_POLICY", "DUPLICATE")

        committer = Committer.from_settings()

        assert committer.digest.name == "sha3_256"
        assert committer.odd_node_policy is OddNodePolicy.DUPLICATE

    def test_module_functions_follow_settings(self, monkeypatch):
        blob = bytes(range(32))
        monkeypatch.setenv("BLOBCOMMIT_DIGEST", "sha3_256")

        assert compute_root(blob) == "0x" + hashlib.sha3_256(blob).hexdigest()

    def test_rejected_blob_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="blobcommit"):
            with pytest.raises(InvalidLengthError):
                Committer().compute_root(b"\x00" * 5)

        assert "Rejected blob of 5 bytes" in caplog.text

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            Committer(odd_node_policy="drop")

    def test_unknown_digest(self):
        with pytest.raises(ConfigurationError):
            Committer(digest="md5")

    def test_application_log_level_is_kept(self):
        root_logger = logging.getLogger("blobcommit")
        previous = root_logger.level
        try:
            root_logger.setLevel(logging.DEBUG)
            compute_root(make_blob(2))
            assert root_logger.level == logging.DEBUG
        finally:
            root_logger.setLevel(previous)

    def test_settings_level_applied_when_unset(self, monkeypatch):
        monkeypatch.setenv("BLOBCOMMIT_LOG_LEVEL", "ERROR")
        root_logger = logging.getLogger("blobcommit")
        previous = root_logger.level
        try:
            root_logger.setLevel(logging.NOTSET)
            compute_root(make_blob(2))
            assert root_logger.level == logging.ERROR
        finally:
            root_logger.setLevel(previous)

    def test_bad_environment_is_configuration_error(self, monkeypatch):
        monkeypatch.setenv("BLOBCOMMIT_DIGEST", "md5")

        with pytest.raises(ConfigurationError):
            compute_root(make_blob(1))
