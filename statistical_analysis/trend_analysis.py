import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np
from sklearn.metrics import r2_score

from statistical_analysis.distribution_approximation import (
    PValueMethod,
    critical_value,
    two_tailed_p_value,
)


logger = logging.getLogger(__name__)

MIN_REGRESSION_POINTS = 3


class Significance(Enum):
    SIGNIFICANT = "significant"
    NOT_SIGNIFICANT = "not_significant"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class TrendAnalysis:
    slope: float
    r_squared: float
    p_value: float
    significance: Significance
    confidence_interval: Tuple[float, float]


def _flat_trend(significance: Significance) -> TrendAnalysis:
    return TrendAnalysis(
        slope=0.0,
        r_squared=0.0,
        p_value=1.0,
        significance=significance,
        confidence_interval=(0.0, 0.0)
    )


def slope_standard_error(
    x: np.ndarray,
    y: np.ndarray,
    slope: float,
    intercept: float
) -> float:
    """Standard error of an OLS slope with n - 2 residual degrees of freedom"""
    n = x.size
    residuals = y - (slope * x + intercept)
    mse = np.sum(residuals ** 2) / (n - 2)
    sum_squared_deviations = np.sum((x - x.mean()) ** 2)

    return float(np.sqrt(mse / sum_squared_deviations))


def linear_regression(
    x: Sequence[float],
    y: Sequence[float],
    alpha: float = 0.05,
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> TrendAnalysis:
    """Ordinary least squares trend of ``y`` on ``x`` with a slope t-test.

    Mismatched lengths or fewer than three points give an
    ``INSUFFICIENT_DATA`` result with zero slope and p=1. Non-finite input
    and a constant ``x`` give a flat ``NOT_SIGNIFICANT`` result with p=1. A
    constant ``y`` is an exact flat fit: slope 0, R² 1.0 and t=0.
    """
    if len(x) != len(y) or len(x) < MIN_REGRESSION_POINTS:
        return _flat_trend(Significance.INSUFFICIENT_DATA)

    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    n = x_arr.size

    if not (np.isfinite(x_arr).all() and np.isfinite(y_arr).all()):
        logger.warning("Regression input holds NaN or infinite values, no trend fitted")
        return _flat_trend(Significance.NOT_SIGNIFICANT)

    if np.ptp(x_arr) == 0:
        logger.warning("All %d x values are identical, slope is undefined", n)
        return _flat_trend(Significance.NOT_SIGNIFICANT)

    if np.ptp(y_arr) == 0:
        # Checked before the sums, whose rounding would leave a ULP-sized slope
        logger.warning("Constant y over %d points, reporting a flat exact fit", n)
        return TrendAnalysis(
            slope=0.0,
            r_squared=1.0,
            p_value=two_tailed_p_value(0.0, n - 2, method),
            significance=Significance.NOT_SIGNIFICANT,
            confidence_interval=(0.0, 0.0)
        )

    sum_x = x_arr.sum()
    sum_y = y_arr.sum()
    sum_xy = np.sum(x_arr * y_arr)
    sum_xx = np.sum(x_arr * x_arr)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator <= 0:
        logger.warning("x values over %d points are too close to fit a slope", n)
        return _flat_trend(Significance.NOT_SIGNIFICANT)

    slope = float((n * sum_xy - sum_x * sum_y) / denominator)
    intercept = float((sum_y - slope * sum_x) / n)

    predicted = slope * x_arr + intercept
    r_squared = float(r2_score(y_arr, predicted))

    slope_se = slope_standard_error(x_arr, y_arr, slope, intercept)
    if slope_se > 0:
        t_statistic = abs(slope / slope_se)
    else:
        # Exact fit
        t_statistic = np.inf if slope != 0 else 0.0
    p_value = two_tailed_p_value(t_statistic, n - 2, method)

    significance = Significance.SIGNIFICANT if p_value < alpha else Significance.NOT_SIGNIFICANT

    margin_of_error = critical_value(n - 2, confidence_level, method) * slope_se

    return TrendAnalysis(
        slope=slope,
        r_squared=r_squared,
        p_value=p_value,
        significance=significance,
        confidence_interval=(slope - margin_of_error, slope + margin_of_error)
    )
