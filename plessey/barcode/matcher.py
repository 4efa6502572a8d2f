"""
Run group scoring against catalogue shapes.
"""

import math
from collections.abc import Sequence

import numpy as np

from plessey.barcode.patterns import MAX_CORRECTION_FACTOR, SINGLE_CODE_ERROR
from plessey.models import BarSpaceRatio
from plessey.models.results import NO_CORRECTION


def pattern_error(
    counter: Sequence[float] | np.ndarray,
    shape: Sequence[float],
    max_single_error: float = SINGLE_CODE_ERROR,
) -> float:
    """
    Normalized error between measured runs and a shape.

    The counter is scaled to the shape's total width. Each element's
    relative deviation is summed and divided by the shape's total width,
    so 0 is a perfect match.

    Args:
        counter: Measured run lengths
        shape: Relative widths, same length as counter
        max_single_error: Per-element ceiling, in units of the scaled width

    Returns:
        Normalized error, or infinity if the counter cannot match
    """
    counter = np.asarray(counter, dtype=float)
    widths = np.asarray(shape, dtype=float)

    total = counter.sum()
    modulo = widths.sum()
    if total < modulo:
        return math.inf

    unit = total / modulo
    scaled = widths * unit
    single_errors = np.abs(counter - scaled) / scaled
    if np.any(single_errors > max_single_error * unit):
        return math.inf

    return float(single_errors.sum() / modulo)


class PatternMatcher:
    """
    Scores run groups, optionally correcting bar/space width skew first.

    The correction is estimated from each group on its own and returned with
    the error, so one matcher can serve any number of rows.
    """

    def __init__(
        self,
        normalize_bar_space_width: bool = False,
        max_single_error: float = SINGLE_CODE_ERROR,
        max_correction_factor: float = MAX_CORRECTION_FACTOR,
    ):
        self.normalize_bar_space_width = normalize_bar_space_width
        self.max_single_error = max_single_error
        self.max_correction_factor = max_correction_factor

    def correction(
        self,
        counter: np.ndarray,
        shape: Sequence[float],
    ) -> BarSpaceRatio:
        """Per-parity factors that bring the counter's widths to the shape's."""
        counter_sum = [float(counter[0::2].sum()), float(counter[1::2].sum())]
        widths = np.asarray(shape, dtype=float)
        code_sum = [float(widths[0::2].sum()), float(widths[1::2].sum())]

        upper = self.max_correction_factor
        lower = 1 / upper
        factors = []
        for expected, measured in zip(code_sum, counter_sum):
            if measured == 0:
                factors.append(upper if expected > 0 else 1.0)
                continue
            factors.append(max(min(expected / measured, upper), lower))
        return BarSpaceRatio(*factors)

    def match(
        self,
        counter: Sequence[float] | np.ndarray,
        shape: Sequence[float],
    ) -> tuple[float, BarSpaceRatio]:
        """
        Score a run group against a shape.

        Returns:
            Tuple of (normalized error, correction applied to the counter)
        """
        counter = np.asarray(counter, dtype=float)
        ratio = NO_CORRECTION

        if self.normalize_bar_space_width:
            ratio = self.correction(counter, shape)
            counter = counter.copy()
            counter[0::2] *= ratio.bar
            counter[1::2] *= ratio.space

        return pattern_error(counter, shape, self.max_single_error), ratio
