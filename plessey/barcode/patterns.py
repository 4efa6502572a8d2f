"""
Plessey pattern catalogue and matching thresholds.

Widths are relative units. Each symbol is four bars, narrow for a 0 bit and
wide for a 1 bit, least significant bit first.
"""

N = 1.0  # narrow
W = 2.7  # wide
T = 5.0  # terminator, stop pattern only

Shape = tuple[float, ...]

START_PATTERN: Shape = (W, W, N, W)
STOP_PATTERN: Shape = (T, N, W, N, N)

CODE_PATTERNS: tuple[Shape, ...] = (
    (N, N, N, N),  # 0
    (W, N, N, N),  # 1
    (N, W, N, N),  # 2
    (W, W, N, N),  # 3
    (N, N, W, N),  # 4
    (W, N, W, N),  # 5
    (N, W, W, N),  # 6
    (W, W, W, N),  # 7
    (N, N, N, W),  # 8
    (W, N, N, W),  # 9
    (N, W, N, W),  # A
    (W, W, N, W),  # B
    (N, N, W, W),  # C
    (W, N, W, W),  # D
    (N, W, W, W),  # E
    (W, W, W, W),  # F
)

SYMBOL_CHARACTERS = "0123456789ABCDEF"

# Runs measured per symbol: four bars and the four spaces between them
SYMBOL_RUNS = 2 * len(CODE_PATTERNS[0])

SINGLE_CODE_ERROR = 0.78
AVG_CODE_ERROR = 0.38

# Normalization removes the bar/space skew, so the residual error is tighter
NORMALIZED_SINGLE_CODE_ERROR = 0.38
NORMALIZED_AVG_CODE_ERROR = 0.09

MAX_CORRECTION_FACTOR = 5.0

# Arbitrary floor that rejects short spurious matches
MIN_CODE_LENGTH = 6

FORMAT = "plessey"


def code_to_character(code: int) -> str:
    """Map a catalogue index to its payload character."""
    if not 0 <= code < len(SYMBOL_CHARACTERS):
        raise ValueError(f"Invalid symbol code: {code}")
    return SYMBOL_CHARACTERS[code]


def character_to_code(character: str) -> int:
    """Map a payload character (case-insensitive) to its catalogue index."""
    index = SYMBOL_CHARACTERS.find(character.upper()) if len(character) == 1 else -1
    if index < 0:
        raise ValueError(f"Invalid Plessey character: {character!r}")
    return index
