"""Calendar groupings of timestamped metric values.

Weekly and hour-of-day summaries reuse the one-sample and multi-group
helpers, so every bucket carries the same interval estimate as a whole
sample would.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from statistical_analysis.confidence_intervals import (
    StatisticalResult,
    calculate_confidence_interval,
    calculate_statistical_result,
)
from statistical_analysis.distribution_approximation import PValueMethod
from statistical_analysis.group_comparison import VariationAnalysis, one_way_variation
from statistical_analysis.trend_analysis import TrendAnalysis, linear_regression


logger = logging.getLogger(__name__)

# Weekly periods ending on Saturday, i.e. weeks that start on Sunday
WEEKLY_FREQUENCY = 'W-SAT'


@dataclass(frozen=True)
class PeriodSummary:
    period: str
    result: StatisticalResult
    count: int


@dataclass(frozen=True)
class HourlyPattern:
    hour: int
    mean: float
    confidence_interval: Tuple[float, float]


@dataclass(frozen=True)
class TimeOfDayEffects:
    pattern: Tuple[HourlyPattern, ...]
    variation: VariationAnalysis


def _to_series(timestamps: Sequence, values: Sequence[float]) -> pd.Series:
    if len(timestamps) != len(values):
        raise ValueError(
            f"Got {len(timestamps)} timestamps for {len(values)} values"
        )
    index = pd.DatetimeIndex(pd.to_datetime(list(timestamps)))
    return pd.Series(np.asarray(values, dtype=float), index=index)


def hours_elapsed(timestamps: Sequence) -> np.ndarray:
    """Hours since the first timestamp, in input order"""
    index = pd.DatetimeIndex(pd.to_datetime(list(timestamps)))
    if len(index) == 0:
        return np.array([], dtype=float)
    return np.asarray((index - index[0]).total_seconds(), dtype=float) / 3600.0


def trend_over_time(
    timestamps: Sequence,
    values: Sequence[float],
    alpha: float = 0.05,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> TrendAnalysis:
    series = _to_series(timestamps, values)
    return linear_regression(hours_elapsed(series.index), series.values, alpha=alpha, method=method)


def summarize_by_period(
    timestamps: Sequence,
    values: Sequence[float],
    freq: str = WEEKLY_FREQUENCY,
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> List[PeriodSummary]:
    """Per-period statistical results, ordered by period start"""
    series = _to_series(timestamps, values)
    if series.empty:
        return []

    periods = series.index.to_period(freq)
    summaries = []
    for period, group in series.groupby(periods, sort=True):
        summaries.append(PeriodSummary(
            period=period.start_time.date().isoformat(),
            result=calculate_statistical_result(group.values, confidence_level, method),
            count=int(group.size)
        ))

    logger.debug("Summarized %d values into %d periods of %s", series.size, len(summaries), freq)
    return summaries


def analyze_time_of_day(
    timestamps: Sequence,
    values: Sequence[float],
    alpha: float = 0.05,
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> TimeOfDayEffects:
    """Hour-of-day means and whether they differ beyond chance"""
    series = _to_series(timestamps, values)
    hourly_groups = [
        (int(hour), group.values)
        for hour, group in series.groupby(series.index.hour, sort=True)
    ]

    pattern = tuple(
        HourlyPattern(
            hour=hour,
            mean=float(group.mean()),
            confidence_interval=calculate_confidence_interval(group, confidence_level, method)
        )
        for hour, group in hourly_groups
    )
    variation = one_way_variation([group for _, group in hourly_groups], alpha=alpha, method=method)

    return TimeOfDayEffects(pattern=pattern, variation=variation)
