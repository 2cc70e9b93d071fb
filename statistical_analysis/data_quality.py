from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence


class Reliability(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# (minimum valid segments, minimum quality score), checked high before medium
HIGH_RELIABILITY_THRESHOLD = (50, 0.8)
MEDIUM_RELIABILITY_THRESHOLD = (20, 0.6)

MEDIUM_RELIABILITY_TARGET = 50
HIGH_RELIABILITY_TARGET = 100
TREND_ANALYSIS_MINIMUM = 30
ACCEPTABLE_QUALITY_SCORE = 0.7
SEGMENTS_PER_DAY_ESTIMATE = 20
MINIMUM_COLLECTION_DAYS = 7


@dataclass(frozen=True)
class DataQualityMetrics:
    total_segments: int
    valid_segments: int
    outliers: int
    quality_score: float
    reliability: Reliability


def classify_reliability(valid_segments: int, quality_score: float) -> Reliability:
    for reliability, (min_valid, min_score) in (
        (Reliability.HIGH, HIGH_RELIABILITY_THRESHOLD),
        (Reliability.MEDIUM, MEDIUM_RELIABILITY_THRESHOLD),
    ):
        if valid_segments >= min_valid and quality_score >= min_score:
            return reliability
    return Reliability.LOW


def assess_data_quality(
    raw_values: Sequence[float],
    valid_values: Sequence[float],
    outliers: Sequence[float]
) -> DataQualityMetrics:
    """Completeness-weighted quality score and reliability tier"""
    total_segments = len(raw_values)
    valid_segments = len(valid_values)
    outlier_count = len(outliers)

    completeness = valid_segments / total_segments if total_segments > 0 else 0.0
    outlier_rate = outlier_count / total_segments if total_segments > 0 else 0.0
    quality_score = completeness * (1 - outlier_rate)

    return DataQualityMetrics(
        total_segments=total_segments,
        valid_segments=valid_segments,
        outliers=outlier_count,
        quality_score=quality_score,
        reliability=classify_reliability(valid_segments, quality_score)
    )


def data_collection_recommendations(
    valid_segments: int,
    quality_score: float
) -> List[str]:
    """Plain-language advice on how much more data a metric needs"""
    if valid_segments == 0:
        return ["No valid data found"]

    recommendations = []

    if valid_segments < MEDIUM_RELIABILITY_TARGET:
        recommendations.append(
            f"Collect more data: Need {MEDIUM_RELIABILITY_TARGET - valid_segments} "
            f"additional valid segments for medium reliability"
        )

    if valid_segments < HIGH_RELIABILITY_TARGET:
        recommendations.append(
            f"For high reliability: Need {HIGH_RELIABILITY_TARGET - valid_segments} "
            f"additional valid segments"
        )

    if quality_score < ACCEPTABLE_QUALITY_SCORE:
        recommendations.append("Improve data quality: High rate of invalid segments detected")

    if valid_segments < TREND_ANALYSIS_MINIMUM:
        recommendations.append(
            f"Insufficient data for trend analysis: Need minimum {TREND_ANALYSIS_MINIMUM} segments"
        )

    estimated_days = max(1, valid_segments // SEGMENTS_PER_DAY_ESTIMATE)
    if estimated_days < MINIMUM_COLLECTION_DAYS:
        recommendations.append("Collect data over longer period: Need minimum 1 week for reliable patterns")

    return recommendations
