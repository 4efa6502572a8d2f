"""
Plessey barcode scanning, matching and decoding.
"""

from plessey.barcode.decoder import PlesseyDecoder, decode_row
from plessey.barcode.encoder import encode_row, encode_runs, render_runs
from plessey.barcode.matcher import PatternMatcher, pattern_error
from plessey.barcode.scanner import RunLengthScanner, match_range, next_set, to_row

__all__ = [
    "PlesseyDecoder",
    "decode_row",
    "encode_row",
    "encode_runs",
    "render_runs",
    "PatternMatcher",
    "pattern_error",
    "RunLengthScanner",
    "match_range",
    "next_set",
    "to_row",
]
