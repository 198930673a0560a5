from typing import Optional

from .enums import ErrorCode


class BlobCommitError(Exception):
    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.code = code or ErrorCode.INTERNAL_ERROR


class InvalidLengthError(BlobCommitError, ValueError):
    """Raised when a blob cannot be split into whole chunks."""

    def __init__(self, length: int, chunk_size: int, message: Optional[str] = None):
        super().__init__(
            message
            or f"Blob length {length} is not a multiple of the {chunk_size}-byte chunk size",
            ErrorCode.INVALID_LENGTH,
        )
        self.length = length
        self.chunk_size = chunk_size


class IndexOutOfRangeError(BlobCommitError, IndexError):
    """Raised when a proof is requested for a leaf that does not exist."""

    def __init__(self, index: int, leaf_count: int):
        super().__init__(
            f"Leaf index {index} outside [0, {leaf_count})",
            ErrorCode.INDEX_OUT_OF_RANGE,
        )
        self.index = index
        self.leaf_count = leaf_count


class ConfigurationError(BlobCommitError, ValueError):
    """Raised for an unknown digest function or odd-node policy."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR)
