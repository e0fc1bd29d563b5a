"""Prometheus metrics for monitoring decision outcomes, income analysis and fraud signals"""

from typing import Iterable
from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "lending_decision_total",
    "Total loan decisions made",
    ["source", "decision"],  # source: scenario | model
)

scenario_selection_counter = Counter(
    "lending_scenario_selection_total",
    "Canned scenarios served by key",
    ["scenario"],
)

approval_probability_histogram = Histogram(
    "lending_approval_probability",
    "Approval probability produced by the decision scorer",
    buckets=[0.1, 0.3, 0.5, 0.75, 0.9, 1.0],
)

# Income analysis metrics
income_analysis_counter = Counter(
    "lending_income_analysis_total",
    "Income pattern analyses by recommendation",
    ["recommendation"],  # APPROVE | REVIEW | CAUTION
)

fraud_indicator_counter = Counter(
    "lending_fraud_indicator_total",
    "Fraud indicators raised by type",
    ["type"],
)

# Boundary rejections
validation_failure_counter = Counter(
    "lending_validation_failures_total",
    "Requests rejected by domain validation",
    ["error_code"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_decision(source: str, decision: str, probability: float | None = None) -> None:
    """Record decision metrics for monitoring approval rates"""
    decision_counter.labels(source=source, decision=decision).inc()
    if probability is not None:
        approval_probability_histogram.observe(probability)


def record_scenario(scenario_key: str) -> None:
    scenario_selection_counter.labels(scenario=scenario_key).inc()


def record_income_analysis(recommendation: str, fraud_types: Iterable[str]) -> None:
    """Record income analysis outcome and every fraud indicator it raised"""
    income_analysis_counter.labels(recommendation=recommendation).inc()
    for fraud_type in fraud_types:
        fraud_indicator_counter.labels(type=fraud_type).inc()
