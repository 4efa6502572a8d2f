"""
Plessey decoder for binarized scan lines.
"""

from collections.abc import Sequence

import numpy as np
import structlog

from plessey.barcode.matcher import PatternMatcher
from plessey.barcode.patterns import (
    CODE_PATTERNS,
    FORMAT,
    START_PATTERN,
    STOP_PATTERN,
    SYMBOL_RUNS,
    Shape,
    code_to_character,
)
from plessey.barcode.scanner import (
    RowLike,
    RunLengthScanner,
    match_range,
    next_set,
    to_row,
)
from plessey.config import DecoderSettings, get_settings
from plessey.models import DecodeFailure, DecodeResult, MatchResult

logger = structlog.get_logger(__name__)


class PlesseyDecoder:
    """
    Decodes one Plessey symbol per row.

    A row is scanned for the start pattern (with its leading quiet zone), the
    stop pattern is searched from the far end (with its trailing quiet zone),
    and the symbols between them are matched one by one against the
    catalogue. Failures return None; the reason is logged at debug level.
    """

    FORMAT = FORMAT

    def __init__(
        self,
        settings: DecoderSettings | None = None,
        normalize_bar_space_width: bool | None = None,
        min_code_length: int | None = None,
    ):
        """
        Initialize decoder.

        Args:
            settings: Decoder settings (default: cached environment settings)
            normalize_bar_space_width: Override the settings' normalization flag
            min_code_length: Override the settings' minimum payload length
        """
        settings = settings or get_settings()
        overrides = {}
        if normalize_bar_space_width is not None:
            overrides["normalize_bar_space_width"] = normalize_bar_space_width
        if min_code_length is not None:
            overrides["min_code_length"] = min_code_length
        if overrides:
            settings = settings.model_copy(update=overrides)

        self.settings = settings
        self.single_code_error = settings.effective_single_code_error
        self.avg_code_error = settings.effective_avg_code_error
        self.min_code_length = settings.min_code_length
        self.matcher = PatternMatcher(
            normalize_bar_space_width=settings.normalize_bar_space_width,
            max_single_error=self.single_code_error,
            max_correction_factor=settings.max_correction_factor,
        )

    @property
    def normalize_bar_space_width(self) -> bool:
        return self.matcher.normalize_bar_space_width

    def decode(self, row: RowLike) -> DecodeResult | None:
        """
        Decode a Plessey symbol from a binarized row.

        Args:
            row: Pixels of one scan line, truthy for bars

        Returns:
            Decoded payload with match provenance, or None
        """
        row = to_row(row)

        start_info = self.find_start(row)
        if start_info is None:
            return None

        end_info = self.find_end(row)
        if end_info is None:
            return None

        decoded = self.decode_payload(row, start_info, end_info)
        if decoded is None:
            return None

        code, symbols = decoded
        if len(code) < self.min_code_length:
            logger.debug(
                "Payload too short",
                reason=DecodeFailure.PAYLOAD_TOO_SHORT.value,
                code=code,
                length=len(code),
                min_length=self.min_code_length,
            )
            return None

        return DecodeResult(
            code=code,
            start=start_info.start,
            end=end_info.end,
            start_info=start_info,
            decoded_codes=[start_info, *symbols, end_info],
            format=self.FORMAT,
        )

    def find_pattern(
        self,
        row: np.ndarray,
        pattern: Shape,
        offset: int | None = None,
        is_white: bool = False,
        try_harder: bool = False,
    ) -> MatchResult | None:
        """
        Find a sentinel pattern as the spaces of a run group.

        Args:
            row: Binarized row
            pattern: Sentinel shape compared with every second run
            offset: Pixel to start from (default: first dark pixel)
            is_white: True if the first run is a space
            try_harder: Slide the window one bar+space pair per failed group

        Returns:
            First group under the accepted error, or None
        """
        if not offset:
            offset = next_set(row)

        scanner = RunLengthScanner(row)
        for group, start, end in scanner.groups(
            offset, is_white, 2 * len(pattern), slide=try_harder
        ):
            error, ratio = self.matcher.match(group[1::2], pattern)
            if error < self.avg_code_error:
                return MatchResult(
                    error=error,
                    start=start,
                    end=end,
                    bar_space_ratio=ratio,
                )
        return None

    def find_start(self, row: np.ndarray) -> MatchResult | None:
        """Find the start pattern preceded by a quiet zone of its own width."""
        offset = next_set(row)

        while True:
            start_info = self.find_pattern(row, START_PATTERN, offset, False, True)
            if start_info is None:
                logger.debug(
                    "Start pattern not found",
                    reason=DecodeFailure.SENTINEL_NOT_FOUND.value,
                    offset=offset,
                )
                return None

            leading_whitespace_start = start_info.start - start_info.width
            if leading_whitespace_start >= 0 and match_range(
                row, leading_whitespace_start, start_info.start, False
            ):
                return start_info

            logger.debug(
                "Start pattern without quiet zone",
                reason=DecodeFailure.QUIET_ZONE_VIOLATION.value,
                start=start_info.start,
                end=start_info.end,
            )
            offset = start_info.end

    def verify_trailing_whitespace(
        self,
        row: np.ndarray,
        end_info: MatchResult,
    ) -> MatchResult | None:
        """Require a quiet zone of half the stop pattern's width after it."""
        trailing_whitespace_end = end_info.end + end_info.width / 2
        if trailing_whitespace_end < len(row) and match_range(
            row, end_info.end, trailing_whitespace_end, False
        ):
            return end_info

        logger.debug(
            "Stop pattern without quiet zone",
            reason=DecodeFailure.QUIET_ZONE_VIOLATION.value,
            start=end_info.start,
            end=end_info.end,
        )
        return None

    def find_end(self, row: np.ndarray) -> MatchResult | None:
        """
        Find the stop pattern at the end of the row.

        The stop pattern is matched on a reversed view starting at the last
        dark pixel, then mapped back to forward coordinates.
        """
        end_info = self.find_pattern(row[::-1], STOP_PATTERN)
        if end_info is None:
            logger.debug(
                "Stop pattern not found",
                reason=DecodeFailure.SENTINEL_NOT_FOUND.value,
            )
            return None

        length = len(row)
        end_info.start, end_info.end = length - end_info.end, length - end_info.start
        return self.verify_trailing_whitespace(row, end_info)

    def decode_symbol(
        self,
        row: np.ndarray,
        start: int,
        code_range: int | None = None,
    ) -> MatchResult | None:
        """
        Decode the symbol whose first bar begins at start.

        Args:
            row: Binarized row
            start: First pixel of the symbol
            code_range: Number of catalogue shapes to try (default: all)

        Returns:
            Best-matching shape, or None if nothing is close enough
        """
        if start >= len(row):
            return None
        if code_range is None:
            code_range = len(CODE_PATTERNS)

        scanner = RunLengthScanner(row)
        group = next(scanner.groups(start, not row[start], SYMBOL_RUNS), None)
        if group is None:
            return None

        counter, _, end = group
        bars = counter[0::2]
        best_match = MatchResult(start=start, end=end)
        for code in range(code_range):
            error, ratio = self.matcher.match(bars, CODE_PATTERNS[code])
            if error < best_match.error:
                best_match.code = code
                best_match.error = error
                best_match.bar_space_ratio = ratio

        if best_match.error > self.avg_code_error:
            logger.debug(
                "Symbol not recognized",
                reason=DecodeFailure.SYMBOL_AMBIGUOUS.value,
                start=start,
                end=end,
                error=best_match.error,
                code=best_match.code,
            )
            return None
        return best_match

    def decode_payload(
        self,
        row: np.ndarray,
        start_info: MatchResult,
        end_info: MatchResult,
    ) -> tuple[str, list[MatchResult]] | None:
        """
        Decode every symbol between the start and stop patterns.

        Returns:
            Tuple of (payload, symbol matches), or None if any symbol fails
        """
        characters: list[str] = []
        symbols: list[MatchResult] = []
        next_start = start_info.end

        while next_start < end_info.start:
            symbol = self.decode_symbol(row, next_start)
            if symbol is None:
                return None
            characters.append(code_to_character(symbol.code))
            symbols.append(symbol)
            next_start = symbol.end

        return "".join(characters), symbols


def decode_row(
    row: Sequence[bool] | np.ndarray,
    normalize_bar_space_width: bool = False,
) -> DecodeResult | None:
    """
    Convenience function to decode a Plessey symbol from one row.

    Args:
        row: Binarized scan line
        normalize_bar_space_width: Correct bar/space width skew before matching

    Returns:
        Decode result or None
    """
    decoder = PlesseyDecoder(normalize_bar_space_width=normalize_bar_space_width)
    return decoder.decode(row)
