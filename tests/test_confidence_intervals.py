"""
Tests for one-sample interval estimation.
"""
import pytest

from statistical_analysis.confidence_intervals import (
    EMPTY_RESULT,
    calculate_confidence_interval,
    calculate_statistical_result,
    sample_mean,
    sample_variance,
    standard_deviation,
)


SAMPLE = [2, 4, 4, 4, 5, 5, 7, 9]


def test_short_samples_have_zero_interval():
    assert calculate_confidence_interval([]) == (0.0, 0.0)
    assert calculate_confidence_interval([5.0]) == (0.0, 0.0)


def test_interval_uses_t_table():
    """Variance 32/7 over 8 values with 7 df gives a 2.36 multiplier."""
    lower, upper = calculate_confidence_interval(SAMPLE)
    margin = 2.36 * (32 / 7 / 8) ** 0.5
    assert lower == pytest.approx(5 - margin)
    assert upper == pytest.approx(5 + margin)


def test_large_sample_uses_normal_constant():
    values = list(range(31))
    lower, upper = calculate_confidence_interval(values)
    standard_error = (sample_variance(values) / 31) ** 0.5
    assert upper - lower == pytest.approx(2 * 1.96 * standard_error)


def test_empty_result():
    result = calculate_statistical_result([])
    assert result == EMPTY_RESULT
    assert result.sample_size == 0
    assert result.p_value is None


def test_single_value_result():
    """One observation has a mean but no spread."""
    result = calculate_statistical_result([5.0])
    assert result.value == 5.0
    assert result.standard_error == 0.0
    assert result.confidence_interval == (0.0, 0.0)
    assert result.sample_size == 1


def test_result_matches_interval():
    result = calculate_statistical_result(SAMPLE)
    assert result.value == pytest.approx(5.0)
    assert result.standard_error == pytest.approx((32 / 7 / 8) ** 0.5)
    assert result.confidence_interval == calculate_confidence_interval(SAMPLE)
    low, high = result.confidence_interval
    assert low <= result.value <= high


def test_descriptive_helpers():
    assert sample_mean([]) == 0.0
    assert sample_variance([3.0]) == 0.0
    assert standard_deviation([10, 12, 14]) == pytest.approx(2.0)
