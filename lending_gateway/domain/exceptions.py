"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    error_code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """Required numeric input is missing or out of range"""

    error_code = "VALIDATION_ERROR"


class InsufficientDataError(DomainException):
    """Not enough income history to analyze"""

    error_code = "INSUFFICIENT_DATA"
