"""Income pattern analysis - descriptive statistics, anomalies and fraud signals"""

import logging
import math
from typing import List, Optional, Sequence

from lending_gateway.domain.exceptions import InsufficientDataError
from lending_gateway.domain.models import (
    AnomalyRecord,
    FraudIndicator,
    StabilityFactors,
    StabilityResult,
    StatisticsSnapshot,
)

logger = logging.getLogger(__name__)

MIN_DATA_POINTS = 3

ANOMALY_Z_THRESHOLD = 2.5
HIGH_SEVERITY_Z_THRESHOLD = 3.5


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_stats(data: Sequence[float]) -> StatisticsSnapshot:
    """
    Mean, median, population standard deviation, coefficient of variation and
    least-squares trend slope (value against index 0..n-1).

    Zero mean gives a coefficient of variation of 0; fewer than two points
    give a slope of 0.
    """
    n = len(data)
    if n == 0:
        raise InsufficientDataError("Cannot compute statistics of an empty series")

    mean = _mean(data)

    ordered = sorted(data)
    mid = n // 2
    median = (ordered[mid - 1] + ordered[mid]) / 2 if n % 2 == 0 else ordered[mid]

    variance = sum((x - mean) ** 2 for x in data) / n
    std_dev = math.sqrt(variance)

    coefficient_of_variation = std_dev / mean if mean != 0 else 0.0

    # Closed forms for Σi and Σi² over i = 0..n-1
    sum_i = n * (n - 1) / 2
    sum_i2 = n * (n - 1) * (2 * n - 1) / 6
    sum_ix = sum(i * x for i, x in enumerate(data))
    denominator = n * sum_i2 - sum_i * sum_i
    trend_slope = (n * sum_ix - sum_i * sum(data)) / denominator if denominator else 0.0

    return StatisticsSnapshot(
        mean=mean,
        median=median,
        std_dev=std_dev,
        coefficient_of_variation=coefficient_of_variation,
        trend_slope=trend_slope,
    )


def detect_anomalies(data: Sequence[float], stats: StatisticsSnapshot) -> List[AnomalyRecord]:
    """Flag values more than 2.5 standard deviations from the mean"""
    spread = stats.std_dev or 1
    anomalies = []

    for index, value in enumerate(data):
        z_score = (value - stats.mean) / spread
        if abs(z_score) > ANOMALY_Z_THRESHOLD:
            anomalies.append(
                AnomalyRecord(
                    index=index,
                    value=value,
                    z_score=z_score,
                    type="SPIKE" if z_score > 0 else "DROP",
                    severity="HIGH" if abs(z_score) > HIGH_SEVERITY_Z_THRESHOLD else "MEDIUM",
                )
            )

    return anomalies


def half_over_half_change(data: Sequence[float]) -> float:
    """
    Percent change from the first-half average to the second-half average.

    The first half is the first n // 2 values. A zero first-half average yields
    0 when the second half is also zero, otherwise +/- infinity.
    """
    midpoint = len(data) // 2
    first_avg = _mean(data[:midpoint])
    second_avg = _mean(data[midpoint:])

    if first_avg == 0:
        if second_avg == 0:
            return 0.0
        return math.copysign(math.inf, second_avg)

    return (second_avg - first_avg) / first_avg * 100


def calculate_trend_score(data: Sequence[float]) -> int:
    """Bucket half-over-half income change into a 0-100 score"""
    if len(data) < 2:
        return 50

    change_percent = half_over_half_change(data)

    if change_percent > 20:
        return 100
    if change_percent > 10:
        return 85
    if change_percent > 0:
        return 70
    if change_percent > -10:
        return 50
    if change_percent > -20:
        return 30
    return 10


def detect_fraud_indicators(
    data: Sequence[float],
    deposit_pattern: Optional[Sequence[float]] = None,
) -> List[FraudIndicator]:
    """
    Independent fabrication checks; any combination may fire.

    - SUDDEN_INCREASE (HIGH): last-3 average more than double the earlier average
    - ROUND_NUMBERS (MEDIUM): at least 70% of values are multiples of 1000
    - IRREGULAR_DEPOSITS (MEDIUM): at least 30% of deposit counts lie more than
      2 standard deviations from their mean
    """
    indicators = []

    recent, history = data[-3:], data[:-3]
    if history and _mean(recent) > _mean(history) * 2:
        indicators.append(
            FraudIndicator(
                type="SUDDEN_INCREASE",
                severity="HIGH",
                description="Recent income more than doubled compared to history",
            )
        )

    round_count = sum(1 for value in data if value % 1000 == 0)
    if round_count * 10 >= len(data) * 7:
        indicators.append(
            FraudIndicator(
                type="ROUND_NUMBERS",
                severity="MEDIUM",
                description="Suspicious pattern of round numbers in income",
            )
        )

    if deposit_pattern:
        deposit_stats = compute_stats(deposit_pattern)
        if deposit_stats.std_dev > 0:
            irregular = sum(
                1
                for count in deposit_pattern
                if abs((count - deposit_stats.mean) / deposit_stats.std_dev) > 2
            )
        else:
            irregular = 0

        if irregular * 10 >= len(deposit_pattern) * 3:
            indicators.append(
                FraudIndicator(
                    type="IRREGULAR_DEPOSITS",
                    severity="MEDIUM",
                    description="Inconsistent deposit patterns detected",
                )
            )

    return indicators


def _verification_confidence(anomalies: List[AnomalyRecord], indicators: List[FraudIndicator]) -> str:
    confidence = "HIGH"
    if indicators or len(anomalies) > 2:
        confidence = "MEDIUM"
    if any(indicator.severity == "HIGH" for indicator in indicators):
        confidence = "LOW"
    return confidence


def _recommendation(stability_score: int) -> str:
    if stability_score >= 70:
        return "APPROVE"
    if stability_score >= 50:
        return "REVIEW"
    return "CAUTION"


def _trend_direction(slope: float) -> str:
    if slope > 0:
        return "INCREASING"
    if slope < -0.05:
        return "DECREASING"
    return "STABLE"


def _insights(stats: StatisticsSnapshot) -> List[str]:
    insights = []
    if stats.trend_slope > 0.1:
        insights.append("Positive income growth trend detected")
    elif stats.trend_slope < -0.1:
        insights.append("Declining income trend detected")

    if stats.coefficient_of_variation < 0.15:
        insights.append("Very stable income pattern")
    elif stats.coefficient_of_variation > 0.35:
        insights.append("Highly variable income pattern")
    return insights


def analyze_income(
    income_series: Sequence[float],
    deposit_pattern: Optional[Sequence[float]] = None,
    employment_months: Optional[float] = None,
) -> StabilityResult:
    """
    Main entry point: score income stability and surface anomaly/fraud signals.

    Stability score weights (each component on a 0-100 scale, except the
    employment bonus which caps at 20):
    - 40%: Consistency (100 - coefficient of variation * 100)
    - 20%: Half-over-half trend bucket
    - 30%: Anomaly penalty (100 - 15 per anomaly)
    - 10%: Employment tenure bonus (20 points at 6+ months)

    Raises:
        InsufficientDataError: fewer than 3 monthly income values
    """
    if income_series is None or len(income_series) < MIN_DATA_POINTS:
        raise InsufficientDataError(f"At least {MIN_DATA_POINTS} months of income data required")

    stats = compute_stats(income_series)
    anomalies = detect_anomalies(income_series, stats)

    factors = StabilityFactors(
        consistency=max(0.0, 100 - stats.coefficient_of_variation * 100),
        trend=calculate_trend_score(income_series),
        anomaly_penalty=max(0, 100 - len(anomalies) * 15),
        employment_bonus=min(20.0, (employment_months or 0) / 6 * 20),
    )

    weighted = (
        factors.consistency * 0.4
        + factors.trend * 0.2
        + factors.anomaly_penalty * 0.3
        + factors.employment_bonus * 0.1
    )
    # Negative means can push consistency past 100
    stability_score = min(100, max(0, int(math.floor(weighted + 0.5))))

    indicators = detect_fraud_indicators(income_series, deposit_pattern)

    logger.debug(
        "Income pattern analyzed",
        extra={
            "data_points": len(income_series),
            "stability_score": stability_score,
            "anomaly_count": len(anomalies),
            "fraud_indicator_count": len(indicators),
        },
    )

    return StabilityResult(
        stability_score=stability_score,
        statistics=stats,
        stability_factors=factors,
        anomalies=anomalies,
        fraud_indicators=indicators,
        recommendation=_recommendation(stability_score),
        verification_confidence=_verification_confidence(anomalies, indicators),
        trend_direction=_trend_direction(stats.trend_slope),
        insights=_insights(stats),
    )
