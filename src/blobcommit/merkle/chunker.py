"""Splits a blob into fixed 32-byte chunks."""

from __future__ import annotations

import logging
from typing import Iterator, List, Tuple, Union

from ..protocol.errors import InvalidLengthError

CHUNK_SIZE = 32

Blob = Union[bytes, bytearray, memoryview, str]

logger = logging.getLogger(__name__)


def as_bytes(blob: Blob) -> bytes:
    """Normalise a blob to bytes. Strings are committed as their UTF-8 encoding."""
    if isinstance(blob, str):
        return blob.encode("utf-8")
    if isinstance(blob, (bytes, bytearray, memoryview)):
        return bytes(blob)
    raise TypeError(f"Blob must be bytes-like or str, got {type(blob).__name__}")


def validate_length(length: int) -> int:
    """Return the chunk count for a blob of ``length`` bytes."""
    if length == 0:
        raise InvalidLengthError(
            length, CHUNK_SIZE, "Blob is empty; at least one chunk is required"
        )
    if length % CHUNK_SIZE != 0:
        raise InvalidLengthError(length, CHUNK_SIZE)
    return length // CHUNK_SIZE


def iter_chunks(blob: Blob) -> Iterator[Tuple[int, bytes]]:
    """
    Yield (index, segment) for each chunk of ``blob``.

    The length is validated before the first chunk is yielded.
    """
    data = as_bytes(blob)
    try:
        count = validate_length(len(data))
    except InvalidLengthError:
        logger.warning("Rejected blob of %d bytes", len(data))
        raise
    for idx in range(count):
        start = idx * CHUNK_SIZE
        yield idx, data[start:start + CHUNK_SIZE]


def chunk(blob: Blob) -> List[bytes]:
    return [segment for _idx, segment in iter_chunks(blob)]
