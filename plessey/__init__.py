"""
Plessey barcode decoding from binarized scan lines.
"""

from plessey.barcode import PlesseyDecoder, decode_row
from plessey.models import BarSpaceRatio, DecodeFailure, DecodeResult, MatchResult

__all__ = [
    "PlesseyDecoder",
    "decode_row",
    "BarSpaceRatio",
    "DecodeFailure",
    "DecodeResult",
    "MatchResult",
]
