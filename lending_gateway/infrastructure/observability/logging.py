"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from lending_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_decision(
    request_id: str,
    application_id: Optional[str],
    decision: str,
    approved_amount: float,
    duration_ms: float,
    source: str,
    probability: Optional[float] = None,
) -> None:
    """Log structured decision outcome for analysis"""
    logging.info(
        "Decision completed",
        extra={
            "request_id": request_id,
            "application_id": application_id,
            "step": "decision_complete",
            "source": source,  # "scenario" | "model"
            "decision": decision,
            "approved_amount": approved_amount,
            "approval_probability": probability,
            "duration_ms": duration_ms,
        },
    )


def log_income_analysis(
    request_id: str,
    data_points: int,
    stability_score: int,
    recommendation: str,
    fraud_indicators: int,
    duration_ms: float,
) -> None:
    """Log structured income pattern analysis outcome"""
    logging.info(
        "Income pattern analysis completed",
        extra={
            "request_id": request_id,
            "step": "income_analysis_complete",
            "data_points": data_points,
            "stability_score": stability_score,
            "recommendation": recommendation,
            "fraud_indicator_count": fraud_indicators,
            "duration_ms": duration_ms,
        },
    )
