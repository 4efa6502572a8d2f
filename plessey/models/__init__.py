"""
Result models shared by the scanner, matcher and decoder.
"""

from plessey.models.results import (
    BarSpaceRatio,
    DecodeFailure,
    DecodeResult,
    MatchResult,
)

__all__ = [
    "BarSpaceRatio",
    "DecodeFailure",
    "DecodeResult",
    "MatchResult",
]
