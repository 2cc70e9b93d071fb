"""
Tests for end-to-end metric summaries.
"""
from datetime import datetime, timedelta

import pytest

from biomarker_framework import BiomarkerFramework
from statistical_analysis.data_quality import Reliability
from statistical_analysis.trend_analysis import Significance


START = datetime(2024, 1, 8, 8)


def test_empty_metric():
    summary = BiomarkerFramework().analyze_metric('speech_rate', [])
    assert summary.result.sample_size == 0
    assert summary.reliability == Reliability.LOW
    assert summary.percentile == 50
    assert summary.trend.significance == Significance.INSUFFICIENT_DATA
    assert summary.recommendations == ('No valid data found',)


def test_outliers_are_excluded_before_estimation():
    summary = BiomarkerFramework().analyze_metric(
        'speech_rate', [140, 150, 145, 155, 148, 152, 600]
    )
    assert summary.outliers == (600.0,)
    assert summary.result.sample_size == 6
    assert summary.result.value == pytest.approx(890 / 6)
    assert summary.data_quality.quality_score == pytest.approx(6 / 7 * 6 / 7)
    assert summary.reliability == Reliability.LOW
    assert summary.time_of_day is None
    assert summary.period_summaries == ()


def test_timestamped_metric():
    timestamps = [START + timedelta(hours=i) for i in range(6)]
    summary = BiomarkerFramework().analyze_metric(
        'speech_rate', [120 + 2 * i for i in range(6)], timestamps
    )
    assert summary.trend.slope == pytest.approx(2.0)
    assert summary.trend.significance == Significance.SIGNIFICANT
    assert len(summary.period_summaries) == 1
    assert summary.period_summaries[0].count == 6
    assert len(summary.time_of_day.pattern) == 6


def test_short_series_skips_trend():
    timestamps = [START + timedelta(hours=i) for i in range(4)]
    summary = BiomarkerFramework().analyze_metric('speech_rate', [120, 122, 124, 126], timestamps)
    assert summary.trend.significance == Significance.INSUFFICIENT_DATA


def test_mismatched_timestamps():
    with pytest.raises(ValueError):
        BiomarkerFramework().analyze_metric('speech_rate', [1.0, 2.0], [START])


def test_config_mapping_and_norm():
    framework = BiomarkerFramework({'random_seed': 7})
    first = framework.analyze_metric('speech_rate', [150, 149, 151], norm='speech_rate')
    second = framework.analyze_metric('speech_rate', [150, 149, 151], norm='speech_rate')
    assert first.percentile == second.percentile
    assert 35 <= first.percentile <= 65


def test_analyze_metrics():
    summaries = BiomarkerFramework().analyze_metrics(
        {'speech_rate': [150, 152, 148], 'pause_duration': [1.1, 1.3, 1.2]},
        norms={'pause_duration': 'pause_duration'}
    )
    assert set(summaries) == {'speech_rate', 'pause_duration'}
    assert summaries['speech_rate'].percentile == 50


def test_compare_windows():
    timestamps = [START + timedelta(days=i) for i in range(8)]
    comparison = BiomarkerFramework().compare_windows(
        [100, 101, 102, 103, 120, 121, 122, 123],
        timestamps,
        START + timedelta(days=4)
    )
    assert comparison.t_statistic < 0
    assert comparison.significant


def test_overall_reliability_is_weakest_tier():
    framework = BiomarkerFramework()
    high = framework.analyze_metric('a', [100 + (i % 5) for i in range(60)])
    medium = framework.analyze_metric('b', [100 + (i % 5) for i in range(25)])
    assert high.reliability == Reliability.HIGH
    assert medium.reliability == Reliability.MEDIUM
    assert framework.overall_reliability({'a': high, 'b': medium}) == Reliability.MEDIUM
    assert framework.overall_reliability({}) == Reliability.LOW
