"""Debt-to-income affordability checks"""

import math
from typing import Mapping, Optional

from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import DebtToIncomeResult

DEBT_CATEGORIES = ("mortgage", "auto_loan", "credit_cards", "student_loans", "other_debts")

# Housing payment ceiling as a share of gross monthly income (28% rule)
HOUSING_PAYMENT_SHARE = 0.28
QUALIFIED_MORTGAGE_DTI = 43


def classify_dti(dti_percent: float) -> str:
    if dti_percent <= 36:
        return "excellent"
    if dti_percent <= 43:
        return "good"
    if dti_percent <= 50:
        return "fair"
    return "poor"


def dti_risk_level(dti_percent: float) -> str:
    if dti_percent < 30:
        return "LOW"
    if dti_percent < 40:
        return "MEDIUM"
    if dti_percent < 50:
        return "HIGH"
    return "VERY_HIGH"


def calculate_dti(monthly_income: float, monthly_debts: Optional[Mapping[str, float]] = None) -> DebtToIncomeResult:
    """
    Debt-to-income ratio with affordability classification.

    monthly_debts maps debt names to monthly payments; the known categories are
    always reported in the breakdown (0 when absent), unknown names still count
    toward the total.

    Raises:
        ValidationError: monthly_income is missing or non-positive
    """
    if monthly_income is None or monthly_income <= 0:
        raise ValidationError("Monthly income must be positive")

    debts = {name: float(amount or 0) for name, amount in (monthly_debts or {}).items()}
    total_debt = sum(debts.values())

    dti_percent = round(total_debt / monthly_income * 100, 2)
    mortgage = debts.get("mortgage", 0.0)
    max_payment = math.floor(monthly_income * HOUSING_PAYMENT_SHARE - mortgage)

    breakdown = {name: debts.get(name, 0.0) for name in DEBT_CATEGORIES}
    for name, amount in debts.items():
        breakdown.setdefault(name, amount)

    return DebtToIncomeResult(
        dti_ratio=dti_percent,
        total_monthly_debt=total_debt,
        monthly_income=monthly_income,
        disposable_income=monthly_income - total_debt,
        classification=classify_dti(dti_percent),
        risk_level=dti_risk_level(dti_percent),
        recommendation="ACCEPTABLE" if dti_percent < QUALIFIED_MORTGAGE_DTI else "EXCEEDS_THRESHOLD",
        max_loan_payment=max(0, max_payment),
        breakdown=breakdown,
    )
