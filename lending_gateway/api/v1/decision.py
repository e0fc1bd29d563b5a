"""POST /v1/evaluate-application, /v1/credit-score, /v1/ml-evaluate - loan decision endpoints"""

import time
import logging
from dataclasses import asdict
from datetime import date, datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request

from lending_gateway.api.v1.schemas import (
    ApplicationDecision,
    CreditEvaluation,
    CreditScoreRequest,
    CreditScoreResponse,
    EvaluateApplicationRequest,
    EvaluateApplicationResponse,
    MLDecision,
    MLEvaluateRequest,
    MLEvaluateResponse,
    ModelInsights,
    ResponseMetadata,
)
from lending_gateway.api.dependencies import (
    get_decision_scorer,
    get_decision_selector,
    get_request_id,
)
from lending_gateway.api.errors import reject
from lending_gateway.config import settings
from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import OutcomeRecord, RawFeatures
from lending_gateway.domain.scenarios import ScenarioSelector, credit_factors
from lending_gateway.domain.scoring import DecisionScorer
from lending_gateway.infrastructure.observability.logging import log_decision
from lending_gateway.infrastructure.observability.metrics import record_decision, record_scenario
from lending_gateway.utils.date_utils import add_days

router = APIRouter()

MODEL_NAME = "LogisticRegression_v1"
MODEL_VERSION = "1.0.0"


def _credit_evaluation(record: OutcomeRecord) -> CreditEvaluation:
    return CreditEvaluation(
        credit_score=record.credit_score,
        credit_grade=record.credit_grade,
        risk_level=record.risk_level,
        bureau=settings.credit_bureau_name,
        score_date=date.today(),
        factors=list(credit_factors(record.credit_score)),
    )


@router.post("/evaluate-application", response_model=EvaluateApplicationResponse)
def evaluate_application(
    request_body: EvaluateApplicationRequest,
    request: Request,
    selector: ScenarioSelector[OutcomeRecord] = Depends(get_decision_selector),
):
    """
    Return the canned decision scenario for an application.

    The same application id always yields the same scenario; no id yields the
    default good-credit approval. The outage scenario responds 500.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    scenario = selector.select(request_body.application_id)
    record_scenario(scenario.key)

    if scenario.is_error:
        logging.error(
            f"Scenario outage: {scenario.error_message}",
            extra={"request_id": request_id, "application_id": request_body.application_id},
        )
        raise HTTPException(
            status_code=500,
            detail={"message": scenario.error_message, "error_code": scenario.error_code},
        )

    duration_ms = (time.time() - start_time) * 1000
    record_decision("scenario", scenario.decision)
    log_decision(
        request_id,
        request_body.application_id,
        scenario.decision,
        scenario.approved_amount,
        duration_ms,
        source="scenario",
    )

    return EvaluateApplicationResponse(
        data=ApplicationDecision(
            decision=scenario.decision,
            approved_amount=scenario.approved_amount,
            interest_rate=scenario.interest_rate,
            term=scenario.term_months,
            monthly_payment=scenario.monthly_payment,
            reason_codes=list(scenario.reason_codes),
            conditions=list(scenario.conditions),
            denial_reasons=list(scenario.denial_reasons),
            pending_items=list(scenario.pending_items) if scenario.pending_items else None,
            credit_evaluation=_credit_evaluation(scenario),
            processed_date=datetime.now(timezone.utc).isoformat(),
            expiration_date=add_days(date.today(), settings.offer_validity_days),
        ),
        metadata=ResponseMetadata.for_request(request_id),
    )


@router.post("/credit-score", response_model=CreditScoreResponse)
def get_credit_score(
    request_body: CreditScoreRequest,
    request: Request,
    selector: ScenarioSelector[OutcomeRecord] = Depends(get_decision_selector),
):
    """Return the bureau view of the canned scenario for an application id or SSN"""
    request_id = get_request_id(request)

    scenario = selector.select(request_body.application_id or request_body.ssn)
    record_scenario(scenario.key)

    if scenario.is_error:
        logging.error("Credit bureau outage scenario", extra={"request_id": request_id})
        raise HTTPException(
            status_code=500,
            detail={"message": "Unable to retrieve credit score", "error_code": "CREDIT_BUREAU_ERROR"},
        )

    return CreditScoreResponse(
        data=_credit_evaluation(scenario),
        metadata=ResponseMetadata.for_request(request_id),
    )


@router.post("/ml-evaluate", response_model=MLEvaluateResponse)
def ml_evaluate(
    request_body: MLEvaluateRequest,
    request: Request,
    scorer: DecisionScorer = Depends(get_decision_scorer),
):
    """
    Score an application with the logistic decision model.

    Flow:
    1. Validate and normalize applicant features
    2. Compute approval probability
    3. Bucket into a decision and price by risk
    4. Return decision with model insights
    """
    start_time = time.time()
    request_id = get_request_id(request)

    features = RawFeatures(
        credit_score=request_body.credit_score,
        annual_income=request_body.annual_income,
        loan_amount=request_body.loan_amount,
        loan_term_months=request_body.loan_term,
        employment_years=request_body.employment_years,
        dti_ratio=request_body.dti_ratio,
        prior_defaults=request_body.previous_defaults,
        application_id=request_body.application_id,
        loan_purpose=request_body.loan_purpose,
    )

    try:
        result = scorer.score(features)
    except ValidationError as e:
        reject(e, request_id)

    duration_ms = (time.time() - start_time) * 1000
    record_decision("model", result.decision, result.probability)
    log_decision(
        request_id,
        request_body.application_id,
        result.decision,
        result.approved_amount,
        duration_ms,
        source="model",
        probability=result.probability,
    )

    return MLEvaluateResponse(
        data=MLDecision(
            decision=result.decision,
            approval_probability=round(result.probability * 100, 2),
            approved_amount=result.approved_amount,
            interest_rate=result.interest_rate,
            term=result.term_months,
            monthly_payment=result.monthly_payment,
            risk_level=result.risk_level,
            risk_score=round(result.risk_score, 2),
            credit_evaluation=CreditEvaluation(
                credit_score=int(request_body.credit_score),
                credit_grade=result.credit_grade,
                bureau="ML-Enhanced Evaluation",
                score_date=date.today(),
            ),
            ml_insights=ModelInsights(
                model=MODEL_NAME,
                features=result.features.as_dict(),
                weights=asdict(scorer.coefficients),
                logit_score=round(result.logit, 4),
                risk_factors=result.risk_factors,
                positive_factors=result.positive_factors,
                confidence_score=round(result.confidence_score, 2),
            ),
            conditions=result.conditions,
            denial_reasons=result.denial_reasons,
            processed_date=datetime.now(timezone.utc).isoformat(),
            expiration_date=add_days(date.today(), settings.offer_validity_days),
        ),
        metadata=ResponseMetadata.for_request(request_id, model_version=MODEL_VERSION),
    )
