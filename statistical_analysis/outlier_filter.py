import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np


logger = logging.getLogger(__name__)

IQR_MULTIPLIER = 1.5
MIN_VALUES_FOR_FILTERING = 4


@dataclass(frozen=True)
class OutlierPartition:
    cleaned: Tuple[float, ...]
    outliers: Tuple[float, ...]


def iqr_bounds(values: Sequence[float]) -> Tuple[float, float]:
    """Tukey fences from nearest-rank quartiles (no interpolation)"""
    sorted_values = np.sort(np.asarray(values, dtype=float))
    n = sorted_values.size
    q1 = sorted_values[int(np.floor(n * 0.25))]
    q3 = sorted_values[int(np.floor(n * 0.75))]
    iqr = q3 - q1

    return (float(q1 - IQR_MULTIPLIER * iqr), float(q3 + IQR_MULTIPLIER * iqr))


def inlier_mask(values: Sequence[float]) -> np.ndarray:
    """Boolean mask of values kept by the IQR rule, all True below four values"""
    data = np.asarray(values, dtype=float)
    if data.size < MIN_VALUES_FOR_FILTERING:
        return np.ones(data.size, dtype=bool)

    lower_bound, upper_bound = iqr_bounds(data)
    return (data >= lower_bound) & (data <= upper_bound)


def remove_outliers(values: Sequence[float]) -> OutlierPartition:
    """Split values into those inside the IQR fences and the rest.

    Both sides keep the input order. Fewer than four values are returned
    untouched.
    """
    if len(values) < MIN_VALUES_FOR_FILTERING:
        return OutlierPartition(cleaned=tuple(values), outliers=())

    data = np.asarray(values, dtype=float)
    inside = inlier_mask(data)

    partition = OutlierPartition(
        cleaned=tuple(float(v) for v in data[inside]),
        outliers=tuple(float(v) for v in data[~inside])
    )
    if partition.outliers:
        logger.debug("Excluded %d of %d values as outliers", len(partition.outliers), data.size)
    return partition
