import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

import numpy as np
import scipy.stats as stats

from statistical_analysis.confidence_intervals import sample_mean, standard_deviation


DEFAULT_PERCENTILE = 50
ABNORMAL_Z_SCORE = 2.0


@dataclass(frozen=True)
class NormativeDistribution:
    mean: float
    std_dev: float
    unit: str


@dataclass(frozen=True)
class BaselineDeviation:
    z_score: float
    is_abnormal: bool


# Adult conversational speech norms
NORMATIVE_DISTRIBUTIONS: Mapping[str, NormativeDistribution] = MappingProxyType({
    'speech_rate': NormativeDistribution(mean=150.0, std_dev=30.0, unit='wpm'),
    'pause_duration': NormativeDistribution(mean=1.2, std_dev=0.5, unit='seconds'),
    'vocabulary_complexity': NormativeDistribution(mean=6.0, std_dev=1.5, unit='score'),
})


def calculate_percentile(value: float, population: Sequence[float]) -> int:
    """Percentile rank of ``value`` with ties counted at half weight.

    An empty population ranks everything at the median. Halves round up.
    """
    if len(population) == 0:
        return DEFAULT_PERCENTILE

    percentile = stats.percentileofscore(np.asarray(population, dtype=float), value, kind='mean')
    return int(math.floor(percentile + 0.5))


def _normative_distribution(metric: str) -> NormativeDistribution:
    if metric not in NORMATIVE_DISTRIBUTIONS:
        raise ValueError(f"Unknown normative metric: {metric}")
    return NORMATIVE_DISTRIBUTIONS[metric]


def generate_normative_population(
    metric: str,
    size: int = 1000,
    random_seed: Optional[int] = None
) -> np.ndarray:
    """Draw a reference population from the metric's normal norm"""
    norm = _normative_distribution(metric)
    rng = np.random.default_rng(random_seed)
    return rng.normal(norm.mean, norm.std_dev, size)


def percentile_against_norm(
    value: float,
    metric: str,
    size: int = 1000,
    random_seed: Optional[int] = None
) -> int:
    population = generate_normative_population(metric, size, random_seed)
    return calculate_percentile(value, population)


def deviation_from_baseline(value: float, baseline_values: Sequence[float]) -> BaselineDeviation:
    """Z-score of ``value`` against a personal baseline sample"""
    spread = standard_deviation(baseline_values)
    if len(baseline_values) < 2 or spread == 0:
        return BaselineDeviation(z_score=0.0, is_abnormal=False)

    z_score = (value - sample_mean(baseline_values)) / spread
    return BaselineDeviation(z_score=z_score, is_abnormal=abs(z_score) > ABNORMAL_Z_SCORE)
