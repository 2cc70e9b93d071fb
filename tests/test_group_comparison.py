"""
Tests for Welch's t-test and the multi-group variation test.
"""
import math

import pytest

from statistical_analysis.group_comparison import one_way_variation, welch_t_test


def test_small_groups():
    comparison = welch_t_test([1.0], [1.0, 2.0])
    assert comparison.t_statistic == 0.0
    assert comparison.p_value == 1.0
    assert not comparison.significant


def test_identical_means():
    comparison = welch_t_test([1, 2, 3], [0, 2, 4])
    assert comparison.t_statistic == pytest.approx(0.0)
    assert not comparison.significant


def test_separated_groups():
    """Equal variances of 2.5 put the means ten standard errors apart."""
    comparison = welch_t_test([1, 2, 3, 4, 5], [11, 12, 13, 14, 15])
    assert comparison.t_statistic == pytest.approx(-10.0)
    assert comparison.p_value == 0.01
    assert comparison.significant


def test_separated_groups_exact():
    comparison = welch_t_test([1, 2, 3, 4, 5], [11, 12, 13, 14, 15], method='exact')
    assert comparison.t_statistic == pytest.approx(-10.0)
    assert comparison.p_value < 0.001
    assert comparison.significant


def test_constant_groups():
    assert welch_t_test([5, 5], [5, 5]).t_statistic == 0.0
    comparison = welch_t_test([5, 5, 5], [7, 7, 7])
    assert math.isinf(comparison.t_statistic)
    assert comparison.t_statistic < 0
    assert comparison.significant


def test_variation_without_difference():
    analysis = one_way_variation([[1, 2, 3], [1, 2, 3]])
    assert analysis.f_statistic == pytest.approx(0.0)
    assert analysis.p_value == 0.20
    assert not analysis.significant


def test_variation_between_separated_groups():
    analysis = one_way_variation([[1, 2, 3], [11, 12, 13], [21, 22, 23]])
    assert analysis.f_statistic == pytest.approx(300.0)
    assert analysis.p_value == 0.01
    assert analysis.significant


def test_variation_exact():
    analysis = one_way_variation([[1, 2, 3], [11, 12, 13], [21, 22, 23]], method='exact')
    assert analysis.p_value < 0.001


def test_variation_needs_two_groups():
    analysis = one_way_variation([[1, 2, 3]])
    assert analysis.f_statistic == 0.0
    assert analysis.p_value == 1.0


def test_empty_groups_are_ignored():
    analysis = one_way_variation([[], [1, 2], [3, 4]])
    assert analysis.f_statistic == pytest.approx(8.0)


def test_p_value_at_alpha_is_not_significant():
    """A mean gap of 2.25 over a unit standard error maps to p=0.05."""
    comparison = welch_t_test([0.0, 2.0], [-1.25, -1.25])
    assert comparison.t_statistic == pytest.approx(2.25)
    assert comparison.p_value == 0.05
    assert not comparison.significant
