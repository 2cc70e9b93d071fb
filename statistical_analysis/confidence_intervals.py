import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from statistical_analysis.distribution_approximation import PValueMethod, critical_value


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatisticalResult:
    value: float
    confidence_interval: Tuple[float, float]
    standard_error: float
    sample_size: int
    p_value: Optional[float] = None


EMPTY_RESULT = StatisticalResult(
    value=0.0,
    confidence_interval=(0.0, 0.0),
    standard_error=0.0,
    sample_size=0
)


def sample_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sample"""
    data = np.asarray(values, dtype=float)
    if data.size == 0:
        return 0.0
    return float(data.mean())


def sample_variance(values: Sequence[float]) -> float:
    """Bessel-corrected variance, 0 when fewer than two values"""
    data = np.asarray(values, dtype=float)
    if data.size < 2:
        return 0.0
    return float(data.var(ddof=1))


def standard_deviation(values: Sequence[float]) -> float:
    return float(np.sqrt(sample_variance(values)))


def calculate_confidence_interval(
    values: Sequence[float],
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> Tuple[float, float]:
    """Two-sided t interval for the mean; ``(0, 0)`` below two values"""
    n = len(values)
    if n < 2:
        return (0.0, 0.0)

    mean = sample_mean(values)
    standard_error = float(np.sqrt(sample_variance(values) / n))
    margin_of_error = critical_value(n - 1, confidence_level, method) * standard_error

    return (mean - margin_of_error, mean + margin_of_error)


def calculate_statistical_result(
    values: Sequence[float],
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> StatisticalResult:
    """Mean, standard error and confidence interval of one sample.

    Shares ``sample_mean``/``sample_variance`` with
    :func:`calculate_confidence_interval` so the two never disagree. A single
    value yields its own mean with zero standard error and a ``(0, 0)``
    interval.
    """
    n = len(values)
    if n == 0:
        logger.debug("Empty sample, returning zero result")
        return EMPTY_RESULT

    mean = sample_mean(values)
    standard_error = float(np.sqrt(sample_variance(values) / n)) if n > 1 else 0.0
    confidence_interval = calculate_confidence_interval(values, confidence_level, method)

    return StatisticalResult(
        value=mean,
        confidence_interval=confidence_interval,
        standard_error=standard_error,
        sample_size=n
    )
