import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from statsmodels.stats.weightstats import ttest_ind

from statistical_analysis.confidence_intervals import sample_mean, sample_variance
from statistical_analysis.distribution_approximation import (
    PValueMethod,
    f_test_p_value,
    resolve_method,
    two_tailed_p_value,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TwoSampleComparison:
    t_statistic: float
    p_value: float
    significant: bool


@dataclass(frozen=True)
class VariationAnalysis:
    f_statistic: float
    p_value: float
    significant: bool


def welch_t_test(
    group1: Sequence[float],
    group2: Sequence[float],
    alpha: float = 0.05,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> TwoSampleComparison:
    """Welch's unequal-variance t-test with Welch-Satterthwaite df"""
    n1, n2 = len(group1), len(group2)
    if n1 < 2 or n2 < 2:
        return TwoSampleComparison(t_statistic=0.0, p_value=1.0, significant=False)

    mean_difference = sample_mean(group1) - sample_mean(group2)
    se1 = sample_variance(group1) / n1
    se2 = sample_variance(group2) / n2
    pooled_se = se1 + se2

    if pooled_se == 0:
        # Both groups are constant
        logger.debug("Both groups have zero variance, using df=%d", n1 + n2 - 2)
        t_statistic = float(np.sign(mean_difference) * np.inf) if mean_difference != 0 else 0.0
        df = n1 + n2 - 2
    elif resolve_method(method) == PValueMethod.EXACT:
        t_statistic, _, df = ttest_ind(
            np.asarray(group1, dtype=float),
            np.asarray(group2, dtype=float),
            usevar='unequal'
        )
        t_statistic, df = float(t_statistic), float(df)
    else:
        t_statistic = float(mean_difference / np.sqrt(pooled_se))
        df = pooled_se ** 2 / (se1 ** 2 / (n1 - 1) + se2 ** 2 / (n2 - 1))

    p_value = two_tailed_p_value(abs(t_statistic), df, method)

    return TwoSampleComparison(
        t_statistic=t_statistic,
        p_value=p_value,
        significant=p_value < alpha
    )


def one_way_variation(
    groups: Sequence[Sequence[float]],
    alpha: float = 0.05,
    method: Union[PValueMethod, str] = PValueMethod.APPROXIMATE
) -> VariationAnalysis:
    """One-way ANOVA F test for differences between group means.

    Empty groups are ignored. Fewer than two groups, or no within-group
    degrees of freedom, give F=0 and p=1.
    """
    arrays = [np.asarray(group, dtype=float) for group in groups if len(group) > 0]
    df_between = len(arrays) - 1
    df_within = sum(arr.size - 1 for arr in arrays)
    if df_between < 1 or df_within < 1:
        return VariationAnalysis(f_statistic=0.0, p_value=1.0, significant=False)

    overall_mean = np.concatenate(arrays).mean()
    ss_between = sum(arr.size * (arr.mean() - overall_mean) ** 2 for arr in arrays)
    ss_within = sum(np.sum((arr - arr.mean()) ** 2) for arr in arrays)

    if ss_within == 0:
        f_statistic = np.inf if ss_between > 0 else 0.0
    else:
        f_statistic = float((ss_between / df_between) / (ss_within / df_within))

    p_value = f_test_p_value(f_statistic, df_between, df_within, method)

    return VariationAnalysis(
        f_statistic=f_statistic,
        p_value=p_value,
        significant=p_value < alpha
    )
