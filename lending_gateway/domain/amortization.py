"""Fixed-rate amortization: installment payment and repayment schedule"""

import math
from datetime import date
from typing import List

from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import AmortizationResult, ScheduledPayment
from lending_gateway.utils.date_utils import add_months


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative amounts (round() is banker's)"""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Standard annuity payment for a fixed-rate loan.

    r = annual_rate_percent / 100 / 12
    payment = principal * r(1+r)^n / ((1+r)^n - 1), or principal / n when r == 0

    (1+r)^n - 1 is taken as expm1(n * log1p(r)) so rates too small to move
    1 + r still produce a non-zero denominator.

    Raises:
        ValidationError: term_months <= 0, or rate and term so large the
            compounding factor overflows
    """
    if term_months is None or term_months <= 0:
        raise ValidationError("Loan term must be a positive number of months")

    monthly_rate = annual_rate_percent / 100 / 12
    if monthly_rate == 0:
        return principal / term_months

    try:
        growth_minus_one = math.expm1(term_months * math.log1p(monthly_rate))
    except OverflowError:
        raise ValidationError("Interest rate and term are too large to amortize") from None

    if growth_minus_one == 0:
        return principal / term_months

    return principal * monthly_rate * (1 + 1 / growth_minus_one)


def amortize(principal: float, annual_rate_percent: float, term_months: int) -> AmortizationResult:
    """
    Monthly payment, total repaid and total interest for a loan.

    Raises:
        ValidationError: principal <= 0, negative rate, or term_months <= 0
    """
    if principal is None or principal <= 0:
        raise ValidationError("Principal must be positive")
    if annual_rate_percent is None or annual_rate_percent < 0:
        raise ValidationError("Interest rate cannot be negative")

    payment = monthly_payment(principal, annual_rate_percent, term_months)
    total_payment = payment * term_months

    return AmortizationResult(
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
    )


def generate_payment_schedule(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
    start_date: date | None = None,
) -> List[ScheduledPayment]:
    """
    Generate a month-by-month repayment schedule in integer cents.

    Requirements:
    - One payment per month, first due one month after start_date (default today)
    - Interest accrues on the remaining balance, rounded to the cent
    - Last payment absorbs rounding drift so principal portions sum exactly
      to the principal

    Example:
        $1,000.00 at 0% over 3 months → [33333, 33333, 33334] cents
    """
    result = amortize(principal, annual_rate_percent, term_months)

    if start_date is None:
        start_date = date.today()

    monthly_rate = annual_rate_percent / 100 / 12
    balance = int(round_half_up(principal * 100))
    payment_cents = int(round_half_up(result.monthly_payment * 100))

    schedule = []
    for number in range(1, term_months + 1):
        interest = int(round_half_up(balance * monthly_rate))

        if number == term_months:
            principal_part = balance
        else:
            principal_part = max(0, min(payment_cents - interest, balance))

        balance -= principal_part
        schedule.append(
            ScheduledPayment(
                number=number,
                due_date=add_months(start_date, number),
                payment_cents=principal_part + interest,
                principal_cents=principal_part,
                interest_cents=interest,
                remaining_balance_cents=balance,
            )
        )

    return schedule


def canned_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Payment rounded to cents, or 0 for a zero principal/term"""
    if principal <= 0 or term_months <= 0:
        return 0.0
    return round(monthly_payment(principal, annual_rate_percent, term_months), 2)

