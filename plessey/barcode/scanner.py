"""
Row scanning primitives: dark pixel search, range checks and run lengths.
"""

import math
from collections.abc import Iterator, Sequence

import numpy as np

RowLike = Sequence[bool] | Sequence[int] | np.ndarray


def to_row(row: RowLike) -> np.ndarray:
    """Convert a scan line to a boolean array (True = bar)."""
    array = np.asarray(row, dtype=bool)
    if array.ndim != 1:
        raise ValueError(f"Row must be one-dimensional, got shape {array.shape}")
    return array


def next_set(row: np.ndarray, offset: int = 0) -> int:
    """Index of the first dark pixel at or after offset, len(row) if none."""
    dark = np.flatnonzero(row[offset:])
    if dark.size == 0:
        return len(row)
    return offset + int(dark[0])


def match_range(row: np.ndarray, start: float, end: float, value: bool) -> bool:
    """Check that every pixel in [start, end) equals value."""
    start = max(int(start), 0)
    end = math.ceil(end)
    return bool(np.all(row[start:end] == value))


class RunLengthScanner:
    """
    Measures consecutive bar/space runs along a row.

    Only runs closed by a transition count as measured; a run still open
    when the row ends is dropped.
    """

    def __init__(self, row: np.ndarray):
        self.row = row

    def runs(self, offset: int, is_white: bool) -> tuple[np.ndarray, np.ndarray]:
        """
        Measure runs from offset, starting with the given polarity.

        Args:
            offset: First pixel to scan
            is_white: True if the first run should be a space

        Returns:
            Tuple of (run lengths, absolute end position of each run)
        """
        segment = self.row[offset:]
        if segment.size == 0:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty

        transitions = np.flatnonzero(segment[1:] != segment[:-1]) + 1
        ends = transitions + offset
        starts = np.concatenate(([offset], ends))[:-1]
        lengths = ends - starts

        # Pixel at offset has the other polarity: the requested run is empty
        if bool(segment[0]) == is_white:
            lengths = np.concatenate(([0], lengths))
            ends = np.concatenate(([offset], ends))

        return lengths, ends

    def groups(
        self,
        offset: int,
        is_white: bool,
        size: int,
        slide: bool = False,
    ) -> Iterator[tuple[np.ndarray, int, int]]:
        """
        Yield complete groups of `size` runs as (lengths, start, end).

        Without slide only the first group is produced. With slide the
        window then advances one bar+space pair at a time.
        """
        lengths, ends = self.runs(offset, is_white)
        for first in range(0, len(lengths) - size + 1, 2):
            group = lengths[first : first + size]
            end = int(ends[first + size - 1])
            yield group, end - int(group.sum()), end
            if not slide:
                return
