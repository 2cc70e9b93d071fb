import logging
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

import numpy as np
import scipy.stats as stats


logger = logging.getLogger(__name__)


class PValueMethod(Enum):
    APPROXIMATE = "approximate"
    EXACT = "exact"


# Two-tailed 95% critical values of Student's t, keyed by degrees of freedom
T_CRITICAL_VALUES: Mapping[int, float] = MappingProxyType({
    1: 12.71, 2: 4.30, 3: 3.18, 4: 2.78, 5: 2.57,
    6: 2.45, 7: 2.36, 8: 2.31, 9: 2.26, 10: 2.23,
    15: 2.13, 20: 2.09, 25: 2.06, 30: 2.04
})

NORMAL_CRITICAL_VALUES: Mapping[float, float] = MappingProxyType({
    0.95: 1.96,
    0.99: 2.58
})

# (threshold, p-value) pairs, checked in order against |t|
T_P_VALUE_STEPS = ((3.0, 0.01), (2.5, 0.02), (2.0, 0.05), (1.5, 0.15), (1.0, 0.30))
T_P_VALUE_FLOOR = 0.50

F_P_VALUE_STEPS = ((2.5, 0.01), (2.0, 0.05))
F_P_VALUE_FLOOR = 0.20

LARGE_SAMPLE_DF = 30
FALLBACK_CRITICAL_VALUE = 2.0


def resolve_method(method: Union[PValueMethod, str]) -> PValueMethod:
    """Accept either the enum or its string value"""
    if isinstance(method, PValueMethod):
        return method
    try:
        return PValueMethod(method)
    except ValueError:
        raise ValueError(f"Unknown p-value method: {method}") from None


def critical_value(
    df: float,
    confidence_level: float = 0.95,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> float:
    """Two-sided critical value of the t distribution.

    The approximate method uses the normal constants once ``df >= 30`` and
    otherwise the nearest tabulated degrees of freedom, whose entries are
    all 95% values regardless of ``confidence_level``.
    """
    if resolve_method(method) == PValueMethod.EXACT and df >= 1:
        return float(stats.t.ppf((1 + confidence_level) / 2, df))

    if df >= LARGE_SAMPLE_DF:
        return NORMAL_CRITICAL_VALUES.get(confidence_level, 1.96)

    # Ties keep the smaller tabulated df
    closest_df = min(T_CRITICAL_VALUES, key=lambda tabulated: abs(tabulated - df))
    return T_CRITICAL_VALUES.get(closest_df, FALLBACK_CRITICAL_VALUE)


def two_tailed_p_value(
    t_statistic: float,
    df: float,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> float:
    """Two-tailed p-value for a t statistic"""
    method = resolve_method(method)
    if df < 1:
        return 1.0

    abs_t = abs(t_statistic)
    if np.isnan(abs_t):
        logger.debug("t statistic is undefined, reporting p=%s", T_P_VALUE_FLOOR)
        return T_P_VALUE_FLOOR if method == PValueMethod.APPROXIMATE else 1.0

    if method == PValueMethod.EXACT:
        return float(min(1.0, 2 * stats.t.sf(abs_t, df)))

    for threshold, p_value in T_P_VALUE_STEPS:
        if abs_t > threshold:
            return p_value
    return T_P_VALUE_FLOOR


def f_test_p_value(
    f_statistic: float,
    df_between: float,
    df_within: float,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> float:
    """Upper-tail p-value for a one-way ANOVA F statistic"""
    if df_between < 1 or df_within < 1 or np.isnan(f_statistic):
        return 1.0

    if resolve_method(method) == PValueMethod.EXACT:
        return float(stats.f.sf(f_statistic, df_between, df_within))

    for threshold, p_value in F_P_VALUE_STEPS:
        if f_statistic > threshold:
            return p_value
    return F_P_VALUE_FLOOR
