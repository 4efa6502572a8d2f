"""
Synthetic Plessey row rendering.

Rows are built from the catalogue widths: every symbol bit is a bar followed
by a space of the complementary width, framed by the start pattern and the
stop pattern plus quiet zones.
"""

import numpy as np

from plessey.barcode.patterns import (
    CODE_PATTERNS,
    N,
    START_PATTERN,
    STOP_PATTERN,
    W,
    character_to_code,
)

DEFAULT_MODULE = 10
DEFAULT_QUIET_ZONE_MODULES = 20


def _complement(width: float) -> float:
    return N if width == W else W


def encode_runs(payload: str, module: int = DEFAULT_MODULE) -> list[int]:
    """
    Bar/space run lengths for a payload, starting and ending with a bar.

    Args:
        payload: Hex characters (0-9, A-F)
        module: Pixels per narrow unit

    Returns:
        Run lengths in pixels, bars at even indices
    """
    if module <= 0:
        raise ValueError(f"Module width must be positive: {module}")
    if not payload:
        raise ValueError("Payload must not be empty")

    widths: list[float] = []

    # Start pattern widths are carried by the spaces
    for space in START_PATTERN:
        widths.extend((_complement(space), space))

    for character in payload:
        for bar in CODE_PATTERNS[character_to_code(character)]:
            widths.extend((bar, _complement(bar)))

    # The last symbol's trailing space is the stop pattern's innermost space
    stop_spaces = list(reversed(STOP_PATTERN))
    stop_bars = [W, W, N, W, W]
    widths[-1] = stop_spaces[0]
    for bar, space in zip(stop_bars[:-1], stop_spaces[1:]):
        widths.extend((bar, space))
    widths.append(stop_bars[-1])

    return [int(round(width * module)) for width in widths]


def render_runs(
    runs: list[int],
    leading_quiet: int,
    trailing_quiet: int,
) -> np.ndarray:
    """Expand bar-first run lengths into a boolean row with quiet zones."""
    polarity = np.arange(len(runs)) % 2 == 0
    body = np.repeat(polarity, runs)
    return np.concatenate(
        (
            np.zeros(leading_quiet, dtype=bool),
            body,
            np.zeros(trailing_quiet, dtype=bool),
        )
    )


def encode_row(
    payload: str,
    module: int = DEFAULT_MODULE,
    leading_quiet: int | None = None,
    trailing_quiet: int | None = None,
) -> np.ndarray:
    """
    Render a payload as a binarized scan line.

    Args:
        payload: Hex characters (0-9, A-F)
        module: Pixels per narrow unit
        leading_quiet: Light pixels before the start pattern (default: 20 modules)
        trailing_quiet: Light pixels after the stop pattern (default: 20 modules)

    Returns:
        Boolean row, True for bars
    """
    if leading_quiet is None:
        leading_quiet = DEFAULT_QUIET_ZONE_MODULES * module
    if trailing_quiet is None:
        trailing_quiet = DEFAULT_QUIET_ZONE_MODULES * module
    return render_runs(encode_runs(payload, module), leading_quiet, trailing_quiet)
