"""
Match and decode result models.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class BarSpaceRatio(NamedTuple):
    """Correction multipliers applied to even- and odd-indexed runs."""

    bar: float = 1.0
    space: float = 1.0


NO_CORRECTION = BarSpaceRatio()


class DecodeFailure(str, Enum):
    """Reason a decode attempt produced no result."""

    SENTINEL_NOT_FOUND = "sentinel_not_found"
    QUIET_ZONE_VIOLATION = "quiet_zone_violation"
    SYMBOL_AMBIGUOUS = "symbol_ambiguous"
    PAYLOAD_TOO_SHORT = "payload_too_short"


@dataclass
class MatchResult:
    """Outcome of comparing a run group with a catalogue shape."""

    error: float = math.inf
    code: int = -1
    start: int = 0
    end: int = 0
    bar_space_ratio: BarSpaceRatio = NO_CORRECTION

    @property
    def width(self) -> int:
        """Width of the matched pixel span."""
        return self.end - self.start


@dataclass
class DecodeResult:
    """A decoded payload and the provenance of every match."""

    code: str
    start: int
    end: int
    start_info: MatchResult
    decoded_codes: list[MatchResult] = field(default_factory=list)
    format: str = "plessey"

    @property
    def symbols(self) -> list[MatchResult]:
        """Payload symbol matches, without the sentinels."""
        return self.decoded_codes[1:-1]
