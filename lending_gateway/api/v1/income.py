"""POST /v1/verify-income, /v1/analyze-income-pattern, /v1/calculate-dti - income endpoints"""

import time
import logging
from datetime import date, datetime, timezone
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from lending_gateway.api.v1.schemas import (
    AnalyzeIncomeRequest,
    AnalyzeIncomeResponse,
    AnomalySchema,
    CalculateDTIRequest,
    CalculateDTIResponse,
    DebtToIncome,
    FinancialSummary,
    FraudIndicatorSchema,
    IncomeAnalysis,
    IncomeSource,
    IncomeStatistics,
    IncomeVerification,
    ResponseMetadata,
    StabilityFactorsSchema,
    VerifyIncomeRequest,
    VerifyIncomeResponse,
)
from lending_gateway.api.dependencies import get_income_selector, get_request_id
from lending_gateway.api.errors import reject
from lending_gateway.domain.affordability import calculate_dti
from lending_gateway.domain.exceptions import InsufficientDataError, ValidationError
from lending_gateway.domain.models import IncomeProfile
from lending_gateway.domain.scenarios import ScenarioSelector
from lending_gateway.domain.statistics import analyze_income
from lending_gateway.infrastructure.observability.logging import log_income_analysis
from lending_gateway.infrastructure.observability.metrics import record_income_analysis, record_scenario
from lending_gateway.utils.date_utils import years_before

router = APIRouter()

MODEL_VERSION = "StatisticalAnalysis_v1"


@router.post(
    "/verify-income",
    response_model=VerifyIncomeResponse,
    responses={200: {"description": "Verified profile, or success=false when income cannot be verified"}},
)
def verify_income(
    request_body: VerifyIncomeRequest,
    request: Request,
    selector: ScenarioSelector[IncomeProfile] = Depends(get_income_selector),
):
    """Return the canned income profile for an application id or SSN"""
    request_id = get_request_id(request)

    profile = selector.select(request_body.application_id or request_body.ssn)
    record_scenario(f"INCOME_{profile.key}")

    if not profile.is_verified:
        logging.warning("Income verification failed", extra={"request_id": request_id})
        return JSONResponse(
            content={
                "success": False,
                "message": "Income verification failed",
                "errors": list(profile.errors),
                "error_code": "INCOME_VERIFICATION_FAILED",
            }
        )

    return VerifyIncomeResponse(
        data=IncomeVerification(
            annual_income=profile.annual_income,
            monthly_income=profile.monthly_income,
            verification_status=profile.verification_status,
            verification_method=profile.verification_method,
            verification_date=datetime.now(timezone.utc).isoformat(),
            income_source=IncomeSource(
                employer=profile.employer,
                job_title=profile.job_title,
                employment_type=profile.employment_type,
                start_date=years_before(date.today(), profile.employment_years),
            ),
            financial_summary=FinancialSummary(
                monthly_income=profile.monthly_income,
                monthly_debt_payments=profile.monthly_debt_payments,
                disposable_income=profile.disposable_income,
                debt_to_income_ratio=profile.debt_to_income_ratio,
            ),
        ),
        metadata=ResponseMetadata.for_request(request_id),
    )


@router.post("/analyze-income-pattern", response_model=AnalyzeIncomeResponse)
def analyze_income_pattern(request_body: AnalyzeIncomeRequest, request: Request):
    """
    Statistical income stability analysis.

    Returns:
        Stability score, anomalies, fraud indicators and a recommendation
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = analyze_income(
            request_body.monthly_incomes,
            request_body.deposit_patterns,
            request_body.employment_months,
        )
    except InsufficientDataError as e:
        reject(e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_income_analysis(result.recommendation, (f.type for f in result.fraud_indicators))
    log_income_analysis(
        request_id,
        len(request_body.monthly_incomes),
        result.stability_score,
        result.recommendation,
        len(result.fraud_indicators),
        duration_ms,
    )

    stats = result.statistics
    factors = result.stability_factors

    return AnalyzeIncomeResponse(
        data=IncomeAnalysis(
            stability_score=result.stability_score,
            verification_confidence=result.verification_confidence,
            statistics=IncomeStatistics(
                mean_income=round(stats.mean, 2),
                median_income=round(stats.median, 2),
                std_deviation=round(stats.std_dev, 2),
                coefficient_of_variation=round(stats.coefficient_of_variation, 3),
                trend=result.trend_direction,
                trend_strength=abs(stats.trend_slope),
            ),
            anomalies=[
                AnomalySchema(
                    month=a.index + 1,
                    income=a.value,
                    z_score=round(a.z_score, 2),
                    type=a.type,
                    severity=a.severity,
                )
                for a in result.anomalies
            ],
            fraud_indicators=[
                FraudIndicatorSchema(type=f.type, severity=f.severity, description=f.description)
                for f in result.fraud_indicators
            ],
            stability_factors=StabilityFactorsSchema(
                consistency=factors.consistency,
                trend=factors.trend,
                anomaly_penalty=factors.anomaly_penalty,
                employment_bonus=factors.employment_bonus,
            ),
            insights=result.insights,
            recommendation=result.recommendation,
            analysis_date=datetime.now(timezone.utc).isoformat(),
        ),
        metadata=ResponseMetadata.for_request(
            request_id,
            model_version=MODEL_VERSION,
            data_points=len(request_body.monthly_incomes),
        ),
    )


@router.post("/calculate-dti", response_model=CalculateDTIResponse)
def calculate_debt_to_income(request_body: CalculateDTIRequest, request: Request):
    """Debt-to-income ratio with affordability classification"""
    request_id = get_request_id(request)

    try:
        result = calculate_dti(request_body.monthly_income, request_body.monthly_debts)
    except ValidationError as e:
        reject(e, request_id)

    return CalculateDTIResponse(
        data=DebtToIncome(
            dti_ratio=result.dti_ratio,
            total_monthly_debt=result.total_monthly_debt,
            total_monthly_income=result.monthly_income,
            disposable_income=result.disposable_income,
            classification=result.classification,
            risk_level=result.risk_level,
            recommendation=result.recommendation,
            max_loan_payment=result.max_loan_payment,
            breakdown=result.breakdown,
        ),
        metadata=ResponseMetadata.for_request(request_id),
    )
