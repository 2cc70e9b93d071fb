import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from statistical_analysis.confidence_intervals import EMPTY_RESULT, StatisticalResult
from statistical_analysis.data_quality import (
    DataQualityMetrics,
    Reliability,
    data_collection_recommendations,
)
from statistical_analysis.group_comparison import TwoSampleComparison
from statistical_analysis.outlier_filter import inlier_mask
from statistical_analysis.population_norms import DEFAULT_PERCENTILE
from statistical_analysis.temporal_patterns import (
    PeriodSummary,
    TimeOfDayEffects,
    analyze_time_of_day,
    summarize_by_period,
    trend_over_time,
)
from statistical_analysis.trend_analysis import Significance, TrendAnalysis
from statistical_toolkit import AnalysisConfig, StatisticalToolkit


logger = logging.getLogger(__name__)


INSUFFICIENT_TREND = TrendAnalysis(
    slope=0.0,
    r_squared=0.0,
    p_value=1.0,
    significance=Significance.INSUFFICIENT_DATA,
    confidence_interval=(0.0, 0.0)
)


@dataclass(frozen=True)
class MetricSummary:
    metric: str
    result: StatisticalResult
    data_quality: DataQualityMetrics
    trend: TrendAnalysis
    percentile: int
    outliers: Tuple[float, ...] = ()
    period_summaries: Tuple[PeriodSummary, ...] = ()
    time_of_day: Optional[TimeOfDayEffects] = None
    recommendations: Tuple[str, ...] = ()

    @property
    def reliability(self) -> Reliability:
        return self.data_quality.reliability


class BiomarkerFramework:
    """Turns raw behavioral metric observations into statistical summaries"""

    def __init__(self, config: Union[AnalysisConfig, Mapping[str, Any], None] = None):
        if config is None or isinstance(config, AnalysisConfig):
            self.config = config or AnalysisConfig()
        else:
            self.config = AnalysisConfig.from_dict(config)
        self.toolkit = StatisticalToolkit(self.config)

    def analyze_metric(
        self,
        metric: str,
        values: Sequence[float],
        timestamps: Optional[Sequence[Any]] = None,
        norm: Optional[str] = None
    ) -> MetricSummary:
        """Summarize one metric's observations.

        Outliers are excluded by the IQR rule before estimation. With
        timestamps the summary also carries a trend over elapsed hours,
        weekly summaries and hour-of-day effects; ``norm`` names a
        normative population for the percentile rank.
        """
        if timestamps is not None and len(timestamps) != len(values):
            raise ValueError(
                f"Metric {metric} has {len(timestamps)} timestamps for {len(values)} values"
            )

        data = np.asarray(values, dtype=float)
        if data.size == 0:
            logger.info("No observations for metric %s", metric)
            return self._empty_summary(metric)

        inside = inlier_mask(data)
        cleaned = data[inside]
        outliers = data[~inside]

        result = self.toolkit.statistical_result(cleaned)
        data_quality = self.toolkit.assess_data_quality(data, cleaned, outliers)
        percentile = (
            self.toolkit.percentile_against_norm(result.value, norm)
            if norm is not None else DEFAULT_PERCENTILE
        )

        trend = INSUFFICIENT_TREND
        period_summaries: Tuple[PeriodSummary, ...] = ()
        time_of_day = None
        if timestamps is not None:
            cleaned_times = [ts for ts, keep in zip(timestamps, inside) if keep]
            if len(cleaned_times) >= self.config.min_trend_points:
                trend = trend_over_time(
                    cleaned_times, cleaned,
                    alpha=self.config.significance_level,
                    method=self.config.p_value_method
                )
            period_summaries = tuple(summarize_by_period(
                cleaned_times, cleaned,
                confidence_level=self.config.confidence_level,
                method=self.config.p_value_method
            ))
            time_of_day = analyze_time_of_day(
                cleaned_times, cleaned,
                alpha=self.config.significance_level,
                confidence_level=self.config.confidence_level,
                method=self.config.p_value_method
            )

        recommendations = data_collection_recommendations(
            data_quality.valid_segments, data_quality.quality_score
        )

        logger.info(
            "Metric %s: %d values, %d outliers, reliability %s",
            metric, data.size, outliers.size, data_quality.reliability.value
        )

        return MetricSummary(
            metric=metric,
            result=result,
            data_quality=data_quality,
            trend=trend,
            percentile=percentile,
            outliers=tuple(float(v) for v in outliers),
            period_summaries=period_summaries,
            time_of_day=time_of_day,
            recommendations=tuple(recommendations)
        )

    def analyze_metrics(
        self,
        metrics: Mapping[str, Sequence[float]],
        timestamps: Optional[Sequence[Any]] = None,
        norms: Optional[Mapping[str, str]] = None
    ) -> Dict[str, MetricSummary]:
        """Summarize several metrics observed at the same timestamps"""
        norms = norms or {}
        return {
            metric: self.analyze_metric(metric, values, timestamps, norms.get(metric))
            for metric, values in metrics.items()
        }

    def compare_windows(
        self,
        values: Sequence[float],
        timestamps: Sequence[Any],
        split_at: datetime
    ) -> TwoSampleComparison:
        """Welch test of observations before ``split_at`` against those after"""
        if len(timestamps) != len(values):
            raise ValueError(f"Got {len(timestamps)} timestamps for {len(values)} values")

        before = [v for ts, v in zip(timestamps, values) if ts < split_at]
        after = [v for ts, v in zip(timestamps, values) if ts >= split_at]
        return self.toolkit.welch_t_test(before, after)

    def overall_reliability(self, summaries: Mapping[str, MetricSummary]) -> Reliability:
        """Weakest reliability tier across summaries"""
        tiers: List[Reliability] = [Reliability.HIGH, Reliability.MEDIUM, Reliability.LOW]
        if not summaries:
            return Reliability.LOW
        return max((s.reliability for s in summaries.values()), key=tiers.index)

    def _empty_summary(self, metric: str) -> MetricSummary:
        return MetricSummary(
            metric=metric,
            result=EMPTY_RESULT,
            data_quality=self.toolkit.assess_data_quality([], [], []),
            trend=INSUFFICIENT_TREND,
            percentile=DEFAULT_PERCENTILE,
            recommendations=tuple(data_collection_recommendations(0, 0.0))
        )
