"""
Tests for run group scoring and width normalization.
"""

import math

import numpy as np
import pytest

from plessey.barcode.matcher import PatternMatcher, pattern_error
from plessey.barcode.patterns import (
    CODE_PATTERNS,
    NORMALIZED_AVG_CODE_ERROR,
    NORMALIZED_SINGLE_CODE_ERROR,
    START_PATTERN,
)
from plessey.models import BarSpaceRatio


class TestPatternError:
    """Tests for the base normalized error."""

    def test_exact_match(self):
        """Test that a scaled copy of the shape has no error."""
        assert pattern_error([27, 27, 10, 27], START_PATTERN) == pytest.approx(0, abs=1e-9)

    def test_too_narrow(self):
        """Test that a group narrower than the shape's total cannot match."""
        assert pattern_error([1, 1, 1, 1], START_PATTERN) == math.inf

    def test_single_error_ceiling(self):
        """Test the per-element ceiling, scaled by the unit width."""
        counter = [5, 1, 1, 1]
        shape = (1, 1, 1, 1)
        assert pattern_error(counter, shape, max_single_error=0.5) == math.inf
        assert pattern_error(counter, shape, max_single_error=0.78) == pytest.approx(0.75)

    def test_closer_shape_scores_lower(self):
        """Test that the intended symbol beats its neighbours."""
        counter = [27, 27, 10, 10]
        errors = [pattern_error(counter, shape) for shape in CODE_PATTERNS]
        assert errors.index(min(errors)) == 3


class TestPatternMatcher:
    """Tests for the matcher with and without width correction."""

    def test_no_correction_by_default(self):
        """Test that the ratio stays neutral without normalization."""
        error, ratio = PatternMatcher().match([27, 27, 10, 27], START_PATTERN)
        assert error == pytest.approx(0, abs=1e-9)
        assert ratio == BarSpaceRatio(1.0, 1.0)

    def test_correction_recovers_skewed_group(self):
        """Test that parity-wise skew is corrected back to the shape."""
        # Code 1 with even runs doubled and odd runs halved, one unit per pixel
        counter = [5.4, 0.5, 2.0, 0.5]
        shape = CODE_PATTERNS[1]

        plain = PatternMatcher(max_single_error=NORMALIZED_SINGLE_CODE_ERROR)
        plain_error, _ = plain.match(counter, shape)
        assert plain_error > NORMALIZED_AVG_CODE_ERROR

        matcher = PatternMatcher(
            normalize_bar_space_width=True,
            max_single_error=NORMALIZED_SINGLE_CODE_ERROR,
        )
        error, ratio = matcher.match(counter, shape)
        assert error == pytest.approx(0, abs=1e-9)
        assert ratio.bar == pytest.approx(0.5)
        assert ratio.space == pytest.approx(2.0)

    def test_correction_clamped_low(self):
        """Test that the correction factor is bounded from below."""
        matcher = PatternMatcher(normalize_bar_space_width=True)
        error, ratio = matcher.match([27, 27, 10, 27], START_PATTERN)
        assert ratio == BarSpaceRatio(0.2, 0.2)
        assert error == pytest.approx(0, abs=1e-9)

    def test_correction_clamped_high(self):
        """Test that the correction factor is bounded from above."""
        matcher = PatternMatcher(normalize_bar_space_width=True)
        error, ratio = matcher.match([0.27, 0.27, 0.1, 0.27], START_PATTERN)
        assert ratio == BarSpaceRatio(5.0, 5.0)
        assert error == math.inf

    def test_custom_correction_bound(self):
        """Test a configured maximum correction factor."""
        matcher = PatternMatcher(normalize_bar_space_width=True, max_correction_factor=2)
        _, ratio = matcher.match([27, 27, 10, 27], START_PATTERN)
        assert ratio == BarSpaceRatio(0.5, 0.5)

    def test_counter_not_modified(self):
        """Test that the caller's counter keeps its measured values."""
        counter = np.array([5.4, 0.5, 2.0, 0.5])
        PatternMatcher(normalize_bar_space_width=True).match(counter, CODE_PATTERNS[1])
        assert counter.tolist() == [5.4, 0.5, 2.0, 0.5]
