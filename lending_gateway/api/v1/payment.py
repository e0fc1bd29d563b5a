"""POST /v1/calculate-payment, /v1/payment-schedule - amortization endpoints"""

from fastapi import APIRouter, Request

from lending_gateway.api.v1.schemas import (
    CalculatePaymentRequest,
    CalculatePaymentResponse,
    PaymentSchedule,
    PaymentScheduleRequest,
    PaymentScheduleResponse,
    PaymentSummary,
    ResponseMetadata,
    ScheduledPaymentSchema,
)
from lending_gateway.api.dependencies import get_request_id
from lending_gateway.api.errors import reject
from lending_gateway.domain.amortization import amortize, generate_payment_schedule
from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import AmortizationResult

router = APIRouter()


def _summary(request_body: CalculatePaymentRequest, result: AmortizationResult) -> PaymentSummary:
    return PaymentSummary(
        principal=request_body.principal,
        rate=request_body.rate,
        months=request_body.months,
        monthly_payment=round(result.monthly_payment, 2),
        total_payment=round(result.total_payment, 2),
        total_interest=round(result.total_interest, 2),
    )


@router.post("/calculate-payment", response_model=CalculatePaymentResponse)
def calculate_payment(request_body: CalculatePaymentRequest, request: Request):
    """
    Fixed-rate monthly payment for a loan.

    Returns:
        Monthly payment, total repaid and total interest, rounded to cents
    """
    request_id = get_request_id(request)

    try:
        result = amortize(request_body.principal, request_body.rate, request_body.months)
    except ValidationError as e:
        reject(e, request_id)

    return CalculatePaymentResponse(
        data=_summary(request_body, result),
        metadata=ResponseMetadata.for_request(request_id),
    )


@router.post("/payment-schedule", response_model=PaymentScheduleResponse)
def payment_schedule(request_body: PaymentScheduleRequest, request: Request):
    """
    Month-by-month repayment schedule.

    Returns:
        Summary plus one row per payment, amounts in cents
    """
    request_id = get_request_id(request)

    try:
        result = amortize(request_body.principal, request_body.rate, request_body.months)
        rows = generate_payment_schedule(
            request_body.principal,
            request_body.rate,
            request_body.months,
            start_date=request_body.start_date,
        )
    except ValidationError as e:
        reject(e, request_id)

    return PaymentScheduleResponse(
        data=PaymentSchedule(
            summary=_summary(request_body, result),
            payments=[
                ScheduledPaymentSchema(
                    number=row.number,
                    due_date=row.due_date,
                    payment_cents=row.payment_cents,
                    principal_cents=row.principal_cents,
                    interest_cents=row.interest_cents,
                    remaining_balance_cents=row.remaining_balance_cents,
                )
                for row in rows
            ],
        ),
        metadata=ResponseMetadata.for_request(request_id),
    )
