"""Decision scoring engine - logistic approval probability and risk-based pricing"""

import logging
import math
from typing import List, Tuple

from lending_gateway.domain.amortization import canned_payment, round_half_up
from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import FeatureVector, RawFeatures, ScoreResult
from lending_gateway.domain.policy import (
    DEFAULT_BOUNDS,
    DEFAULT_COEFFICIENTS,
    DEFAULT_PRICING,
    DEFAULT_THRESHOLDS,
    DecisionThresholds,
    NormalizationBounds,
    PricingPolicy,
    RegressionCoefficients,
)

logger = logging.getLogger(__name__)

# Keeps probability strictly inside (0, 1) once exp() saturates
PROBABILITY_EPSILON = 1e-12

CONDITIONAL_APPROVAL_CONDITIONS = [
    "Income verification required",
    "Employment verification required",
]


def _clip(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def validate_features(features: RawFeatures) -> None:
    """
    Reject applications missing a required positive input.

    Raises:
        ValidationError: credit score, annual income or loan amount is missing
            or non-positive, or a supplied loan term is non-positive
    """
    required = {
        "credit_score": features.credit_score,
        "annual_income": features.annual_income,
        "loan_amount": features.loan_amount,
    }
    invalid = [name for name, value in required.items() if value is None or value <= 0]
    if invalid:
        raise ValidationError(f"Missing or non-positive required fields: {', '.join(invalid)}")

    if features.loan_term_months is not None and features.loan_term_months <= 0:
        raise ValidationError("Loan term must be a positive number of months")


def normalize_features(
    features: RawFeatures,
    bounds: NormalizationBounds = DEFAULT_BOUNDS,
    default_term_months: int = DEFAULT_PRICING.default_term_months,
) -> FeatureVector:
    """
    Map raw applicant attributes onto model inputs.

    Bounded features are clipped to [0, 1]; loan-to-income and term risk are
    left as raw ratios so very large loans keep pulling the logit down.
    """
    dti_ratio = features.dti_ratio if features.dti_ratio is not None else bounds.default_dti_ratio
    employment_years = (
        features.employment_years if features.employment_years is not None else bounds.default_employment_years
    )
    term_months = features.loan_term_months or default_term_months

    return FeatureVector(
        credit_score_norm=_clip((features.credit_score - bounds.credit_score_floor) / bounds.credit_score_range),
        loan_to_income_ratio=features.loan_amount / features.annual_income,
        dti_ratio_norm=_clip(dti_ratio / bounds.dti_cap),
        employment_stability=_clip(employment_years / bounds.employment_years_cap),
        has_defaults=1 if features.prior_defaults else 0,
        loan_amount_norm=_clip(features.loan_amount / bounds.loan_amount_cap),
        term_risk=term_months / bounds.term_months_scale,
    )


def compute_logit(vector: FeatureVector, coefficients: RegressionCoefficients = DEFAULT_COEFFICIENTS) -> float:
    return (
        coefficients.intercept
        + coefficients.credit_score * vector.credit_score_norm
        + coefficients.loan_to_income * vector.loan_to_income_ratio
        + coefficients.dti_ratio * vector.dti_ratio_norm
        + coefficients.employment * vector.employment_stability
        + coefficients.defaults * vector.has_defaults
        + coefficients.loan_amount * vector.loan_amount_norm
        + coefficients.term_risk * vector.term_risk
    )


def sigmoid(logit: float) -> float:
    """1 / (1 + e^-x), evaluated without overflow and held strictly inside (0, 1)"""
    if logit >= 0:
        probability = 1 / (1 + math.exp(-logit))
    else:
        exp_logit = math.exp(logit)
        probability = exp_logit / (1 + exp_logit)
    return _clip(probability, PROBABILITY_EPSILON, 1 - PROBABILITY_EPSILON)


def determine_decision(
    probability: float,
    loan_amount: float,
    thresholds: DecisionThresholds = DEFAULT_THRESHOLDS,
) -> Tuple[str, float, str]:
    """
    Map approval probability to a decision bucket.

    Buckets (default thresholds):
    - p >= 0.75: APPROVED, requested amount unchanged, LOW risk
    - p >= 0.50: APPROVED_WITH_CONDITIONS, 80% of amount rounded to whole
      dollars, MEDIUM risk
    - p >= 0.30: PENDING_REVIEW, nothing approved yet, MEDIUM_HIGH risk
    - otherwise: DENIED, HIGH risk

    Returns: (decision, approved_amount, risk_level)
    """
    if probability >= thresholds.approve:
        return "APPROVED", loan_amount, "LOW"
    elif probability >= thresholds.conditional:
        return "APPROVED_WITH_CONDITIONS", int(round_half_up(loan_amount * thresholds.conditional_ratio)), "MEDIUM"
    elif probability >= thresholds.review:
        return "PENDING_REVIEW", 0, "MEDIUM_HIGH"
    else:
        return "DENIED", 0, "HIGH"


def price_loan(probability: float, pricing: PricingPolicy = DEFAULT_PRICING) -> float:
    """Annual interest rate in percent: base rate plus a premium scaled by risk"""
    return round(pricing.base_rate + (1 - probability) * pricing.max_risk_premium, 2)


def credit_grade(credit_score: float) -> str:
    if credit_score >= 750:
        return "A"
    if credit_score >= 700:
        return "B"
    if credit_score >= 650:
        return "C"
    if credit_score >= 600:
        return "D"
    return "E"


def explain_factors(vector: FeatureVector) -> Tuple[List[str], List[str]]:
    """Narrative risk and positive factors; informational only, never scored"""
    risk_factors = []
    if vector.credit_score_norm < 0.5:
        risk_factors.append("Below average credit score")
    if vector.loan_to_income_ratio > 0.4:
        risk_factors.append("High loan-to-income ratio")
    if vector.dti_ratio_norm > 0.6:
        risk_factors.append("Elevated debt-to-income ratio")
    if vector.employment_stability < 0.2:
        risk_factors.append("Limited employment history")
    if vector.has_defaults:
        risk_factors.append("Previous loan defaults")

    positive_factors = []
    if vector.credit_score_norm >= 0.7:
        positive_factors.append("Strong credit history")
    if vector.loan_to_income_ratio <= 0.2:
        positive_factors.append("Conservative loan amount")
    if vector.dti_ratio_norm <= 0.3:
        positive_factors.append("Low debt burden")
    if vector.employment_stability >= 0.5:
        positive_factors.append("Stable employment")

    return risk_factors, positive_factors


class DecisionScorer:
    """Logistic decision scorer bound to immutable policy tables"""

    def __init__(
        self,
        coefficients: RegressionCoefficients = DEFAULT_COEFFICIENTS,
        thresholds: DecisionThresholds = DEFAULT_THRESHOLDS,
        pricing: PricingPolicy = DEFAULT_PRICING,
        bounds: NormalizationBounds = DEFAULT_BOUNDS,
    ):
        self.coefficients = coefficients
        self.thresholds = thresholds
        self.pricing = pricing
        self.bounds = bounds

    def score(self, features: RawFeatures) -> ScoreResult:
        """
        Main entry point: normalize, score, bucket and price an application.

        Raises:
            ValidationError: required inputs missing or non-positive
        """
        validate_features(features)

        vector = normalize_features(features, self.bounds, self.pricing.default_term_months)
        logit = compute_logit(vector, self.coefficients)
        probability = sigmoid(logit)

        decision, approved_amount, risk_level = determine_decision(
            probability, features.loan_amount, self.thresholds
        )
        interest_rate = price_loan(probability, self.pricing)
        term_months = features.loan_term_months or self.pricing.default_term_months

        monthly = canned_payment(approved_amount, interest_rate, term_months) if approved_amount > 0 else 0.0

        risk_factors, positive_factors = explain_factors(vector)

        logger.debug(
            "Application scored",
            extra={
                "application_id": features.application_id,
                "logit": round(logit, 4),
                "probability": round(probability, 4),
                "decision": decision,
            },
        )

        return ScoreResult(
            probability=probability,
            logit=logit,
            decision=decision,
            risk_level=risk_level,
            approved_amount=approved_amount,
            interest_rate=interest_rate,
            term_months=term_months,
            monthly_payment=monthly,
            credit_grade=credit_grade(features.credit_score),
            features=vector,
            risk_factors=risk_factors,
            positive_factors=positive_factors,
            denial_reasons=list(risk_factors) if decision == "DENIED" else [],
            conditions=list(CONDITIONAL_APPROVAL_CONDITIONS) if decision == "APPROVED_WITH_CONDITIONS" else [],
        )


def score_application(features: RawFeatures) -> ScoreResult:
    """Score with the default policy tables"""
    return DecisionScorer().score(features)
