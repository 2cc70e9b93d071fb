from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Sequence, Tuple

from statistical_analysis.confidence_intervals import (
    StatisticalResult,
    calculate_confidence_interval,
    calculate_statistical_result,
)
from statistical_analysis.data_quality import DataQualityMetrics, assess_data_quality
from statistical_analysis.distribution_approximation import PValueMethod, resolve_method
from statistical_analysis.group_comparison import (
    TwoSampleComparison,
    VariationAnalysis,
    one_way_variation,
    welch_t_test,
)
from statistical_analysis.outlier_filter import OutlierPartition, remove_outliers
from statistical_analysis.population_norms import (
    BaselineDeviation,
    calculate_percentile,
    deviation_from_baseline,
    percentile_against_norm,
)
from statistical_analysis.trend_analysis import TrendAnalysis, linear_regression


@dataclass
class AnalysisConfig:
    significance_level: float = 0.05
    confidence_level: float = 0.95
    p_value_method: PValueMethod = PValueMethod.APPROXIMATE
    min_trend_points: int = 5
    random_seed: Optional[int] = None
    population_size: int = 1000

    def __post_init__(self):
        self.p_value_method = resolve_method(self.p_value_method)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> 'AnalysisConfig':
        """Build a config from a plain mapping, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise ValueError(f"Unknown analysis config keys: {', '.join(unknown)}")
        return cls(**dict(config))


class StatisticalToolkit:
    """Inference toolkit for small, noisy behavioral metric samples"""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def confidence_interval(
        self,
        values: Sequence[float],
        confidence_level: Optional[float] = None
    ) -> Tuple[float, float]:
        """Two-sided interval for the sample mean"""
        if confidence_level is None:
            confidence_level = self.config.confidence_level
        return calculate_confidence_interval(
            values,
            confidence_level,
            self.config.p_value_method
        )

    def statistical_result(self, values: Sequence[float]) -> StatisticalResult:
        """Mean with standard error and confidence interval"""
        return calculate_statistical_result(
            values, self.config.confidence_level, self.config.p_value_method
        )

    def linear_regression(self, x: Sequence[float], y: Sequence[float]) -> TrendAnalysis:
        """Trend slope with significance test"""
        return linear_regression(
            x, y,
            alpha=self.config.significance_level,
            confidence_level=self.config.confidence_level,
            method=self.config.p_value_method
        )

    def remove_outliers(self, values: Sequence[float]) -> OutlierPartition:
        return remove_outliers(values)

    def assess_data_quality(
        self,
        raw_values: Sequence[float],
        valid_values: Sequence[float],
        outliers: Sequence[float]
    ) -> DataQualityMetrics:
        return assess_data_quality(raw_values, valid_values, outliers)

    def percentile(self, value: float, population: Sequence[float]) -> int:
        return calculate_percentile(value, population)

    def percentile_against_norm(self, value: float, metric: str) -> int:
        """Percentile rank against a generated normative population"""
        return percentile_against_norm(
            value, metric, self.config.population_size, self.config.random_seed
        )

    def welch_t_test(
        self,
        group1: Sequence[float],
        group2: Sequence[float]
    ) -> TwoSampleComparison:
        return welch_t_test(
            group1, group2,
            alpha=self.config.significance_level,
            method=self.config.p_value_method
        )

    def compare_groups(self, groups: Sequence[Sequence[float]]) -> VariationAnalysis:
        """One-way ANOVA across any number of groups"""
        return one_way_variation(
            groups,
            alpha=self.config.significance_level,
            method=self.config.p_value_method
        )

    def baseline_deviation(
        self,
        value: float,
        baseline_values: Sequence[float]
    ) -> BaselineDeviation:
        return deviation_from_baseline(value, baseline_values)
