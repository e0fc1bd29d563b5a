"""Mapping of domain errors onto HTTP rejections"""

import logging
from typing import NoReturn
from fastapi import HTTPException

from lending_gateway.domain.exceptions import DomainException
from lending_gateway.infrastructure.observability.metrics import validation_failure_counter


def reject(error: DomainException, request_id: str, status_code: int = 400) -> NoReturn:
    """Log and convert a domain error into a client-facing rejection"""
    validation_failure_counter.labels(error_code=error.error_code).inc()
    logging.warning(
        f"Request rejected: {error}",
        extra={"request_id": request_id, "error_code": error.error_code},
    )
    raise HTTPException(
        status_code=status_code,
        detail={"message": str(error), "error_code": error.error_code},
    )
