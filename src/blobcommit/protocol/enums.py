from enum import Enum


class ErrorCode(str, Enum):
    INVALID_LENGTH = "invalid_length"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"


class OddNodePolicy(str, Enum):
    """What happens to the last node of a level with an odd node count."""

    PROMOTE = "promote"  # carried up unchanged
    DUPLICATE = "duplicate"  # hashed with itself


class SiblingPosition(str, Enum):
    LEFT = "left"
    RIGHT = "right"
