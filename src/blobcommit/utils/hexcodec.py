"""
Digest <-> text encoding.

Every digest leaving the library is lowercase hex with a ``0x`` prefix.
"""

from __future__ import annotations

from typing import Union

HEX_PREFIX = "0x"


def to_hex(digest: bytes) -> str:
    return HEX_PREFIX + bytes(digest).hex()


def from_hex(value: Union[str, bytes]) -> bytes:
    """
    Decode a digest produced by ``to_hex``.

    Bare hex (no prefix) is accepted too. Raises ValueError on malformed
    input, including odd-length strings.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError(f"Expected hex string, got {type(value).__name__}")
    text = value.strip()
    if text[:2].lower() == HEX_PREFIX:
        text = text[2:]
    return bytes.fromhex(text)
