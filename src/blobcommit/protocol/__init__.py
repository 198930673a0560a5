from .enums import ErrorCode, OddNodePolicy, SiblingPosition
from .errors import (
    BlobCommitError,
    ConfigurationError,
    IndexOutOfRangeError,
    InvalidLengthError,
)

__all__ = [
    "ErrorCode",
    "OddNodePolicy",
    "SiblingPosition",
    "BlobCommitError",
    "ConfigurationError",
    "IndexOutOfRangeError",
    "InvalidLengthError",
]
