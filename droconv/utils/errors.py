"""
Errors raised while decoding DRO input or encoding IMF output.
"""

from enum import Enum


class FormatErrorReason(Enum):
    """Why a conversion was rejected."""

    BAD_SIGNATURE = "bad_signature"
    UNSUPPORTED_VERSION = "unsupported_version"
    UNSUPPORTED_ARRANGEMENT = "unsupported_arrangement"
    COMPRESSED = "compressed"
    CODEMAP_TOO_LONG = "codemap_too_long"
    CODEMAP_INDEX_OUT_OF_RANGE = "codemap_index_out_of_range"
    DELAY_OVERFLOW = "delay_overflow"
    TRUNCATED = "truncated"


class FormatError(ValueError):
    """
    Raised when the input is structurally malformed or unsupported.

    Attributes:
        reason: Machine-readable cause of the failure
    """

    def __init__(self, reason: FormatErrorReason, message: str):
        super().__init__(message)
        self.reason = reason
