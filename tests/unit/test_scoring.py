"""Unit tests for decision scoring logic"""

import math
import pytest
from dataclasses import replace
from lending_gateway.domain.amortization import canned_payment
from lending_gateway.domain.exceptions import ValidationError
from lending_gateway.domain.models import RawFeatures
from lending_gateway.domain.policy import DecisionThresholds, PricingPolicy, RegressionCoefficients
from lending_gateway.domain.scoring import (
    DecisionScorer,
    compute_logit,
    credit_grade,
    determine_decision,
    normalize_features,
    price_loan,
    score_application,
    sigmoid,
)

DECISION_RANK = {"DENIED": 0, "PENDING_REVIEW": 1, "APPROVED_WITH_CONDITIONS": 2, "APPROVED": 3}


def test_normalize_features_defaults():
    """Test optional inputs fall back to documented defaults"""
    vector = normalize_features(RawFeatures(credit_score=575, annual_income=50_000, loan_amount=25_000))

    assert vector.credit_score_norm == pytest.approx(0.5)
    assert vector.loan_to_income_ratio == pytest.approx(0.5)
    assert vector.dti_ratio_norm == pytest.approx(0.5)  # 0.3 / 0.6
    assert vector.employment_stability == pytest.approx(0.2)  # 2 / 10
    assert vector.has_defaults == 0
    assert vector.loan_amount_norm == pytest.approx(0.25)
    assert vector.term_risk == pytest.approx(60 / 84)


def test_normalize_features_clipping():
    """Test bounded features clip to [0, 1] while ratios stay raw"""
    vector = normalize_features(
        RawFeatures(
            credit_score=900,
            annual_income=10_000,
            loan_amount=250_000,
            loan_term_months=120,
            employment_years=30,
            dti_ratio=0.9,
            prior_defaults=True,
        )
    )
    assert vector.credit_score_norm == 1
    assert vector.loan_to_income_ratio == pytest.approx(25.0)
    assert vector.dti_ratio_norm == 1
    assert vector.employment_stability == 1
    assert vector.has_defaults == 1
    assert vector.loan_amount_norm == 1
    assert vector.term_risk == pytest.approx(120 / 84)

    low = normalize_features(RawFeatures(credit_score=250, annual_income=1, loan_amount=1, dti_ratio=0))
    assert low.credit_score_norm == 0
    assert low.dti_ratio_norm == 0


def test_compute_logit_matches_weighted_sum(excellent_applicant):
    """Test logit is intercept plus weighted features"""
    vector = normalize_features(excellent_applicant)
    expected = (
        0.5
        + 5.2 * (500 / 550)
        - 1.8 * 0.2
        - 2.5 * (0.2 / 0.6)
        + 1.5 * 0.5
        - 0.5 * 0.2
        - 0.8 * (60 / 84)
    )
    assert compute_logit(vector) == pytest.approx(expected)


def test_sigmoid_properties():
    """Test sigmoid is centered, symmetric and strictly inside (0, 1)"""
    assert sigmoid(0) == 0.5
    assert sigmoid(2) == pytest.approx(1 - sigmoid(-2))
    assert sigmoid(1) == pytest.approx(1 / (1 + math.exp(-1)))
    for logit in [-1e6, -800, -50, 50, 800, 1e6]:
        assert 0 < sigmoid(logit) < 1


def test_determine_decision_boundaries():
    """Test bucket edges are inclusive on the lower bound"""
    assert determine_decision(0.75, 10_000) == ("APPROVED", 10_000, "LOW")
    assert determine_decision(0.7499, 10_000) == ("APPROVED_WITH_CONDITIONS", 8_000, "MEDIUM")
    assert determine_decision(0.50, 10_000)[0] == "APPROVED_WITH_CONDITIONS"
    assert determine_decision(0.4999, 10_000) == ("PENDING_REVIEW", 0, "MEDIUM_HIGH")
    assert determine_decision(0.30, 10_000)[0] == "PENDING_REVIEW"
    assert determine_decision(0.2999, 10_000) == ("DENIED", 0, "HIGH")


def test_determine_decision_is_monotonic():
    """Test decisions only move upward as probability increases"""
    ranks = [DECISION_RANK[determine_decision(p / 1000, 10_000)[0]] for p in range(1, 1000)]
    assert ranks == sorted(ranks)
    assert set(ranks) == {0, 1, 2, 3}


def test_conditional_amount_is_rounded():
    """Test conditional approvals grant 80% rounded to whole units"""
    assert determine_decision(0.6, 12_345)[1] == 9_876


def test_full_approval_keeps_requested_amount():
    """Test full approvals pass fractional amounts through unchanged"""
    assert determine_decision(0.9, 10_000.50)[1] == 10_000.50


def test_score_fractional_loan_amount(excellent_applicant):
    """Test an approved application reports the exact requested amount"""
    result = score_application(replace(excellent_applicant, loan_amount=20_000.50))

    assert result.decision == "APPROVED"
    assert result.approved_amount == 20_000.50
    assert result.monthly_payment == canned_payment(20_000.50, result.interest_rate, 60)


def test_price_loan():
    """Test base rate plus risk premium, rounded to 2 decimals"""
    assert price_loan(1.0) == 5.5
    assert price_loan(0.0) == 20.5
    assert price_loan(0.5) == 13.0
    assert price_loan(0.5, PricingPolicy(base_rate=3.0, max_risk_premium=0)) == 3.0


def test_credit_grade_bands():
    """Test grade cut-offs at 750/700/650/600"""
    assert [credit_grade(s) for s in (780, 750, 720, 680, 620, 580)] == ["A", "A", "B", "C", "D", "E"]


def test_score_excellent_applicant(excellent_applicant):
    """Test strong applicant is approved in full at near-base pricing"""
    result = score_application(excellent_applicant)

    assert result.decision == "APPROVED"
    assert result.probability > 0.98
    assert result.approved_amount == 20_000
    assert result.risk_level == "LOW"
    assert 5.5 < result.interest_rate < 6.0
    assert result.monthly_payment == canned_payment(20_000, result.interest_rate, 60)
    assert result.credit_grade == "A"
    assert result.risk_factors == []
    assert result.positive_factors == ["Strong credit history", "Conservative loan amount", "Stable employment"]
    assert result.conditions == []
    assert result.denial_reasons == []


def test_score_fair_applicant_conditional(fair_applicant):
    """Test fair applicant gets 80% with verification conditions"""
    result = score_application(fair_applicant)

    assert result.decision == "APPROVED_WITH_CONDITIONS"
    assert 0.5 <= result.probability < 0.75
    assert result.approved_amount == 32_000
    assert result.conditions == ["Income verification required", "Employment verification required"]
    assert result.monthly_payment > 0
    assert result.risk_factors == ["High loan-to-income ratio"]


def test_score_pending_review():
    """Test borderline applicant is routed to manual review"""
    result = score_application(RawFeatures(credit_score=600, annual_income=50_000, loan_amount=50_000))

    assert result.decision == "PENDING_REVIEW"
    assert 0.3 <= result.probability < 0.5
    assert result.approved_amount == 0
    assert result.monthly_payment == 0
    assert result.risk_level == "MEDIUM_HIGH"


def test_score_defaulted_applicant_denied(defaulted_applicant):
    """Test prior default drives denial with reasons"""
    result = score_application(defaulted_applicant)

    assert result.decision == "DENIED"
    assert result.probability < 0.3
    assert result.approved_amount == 0
    assert result.monthly_payment == 0
    assert result.credit_grade == "E"
    assert result.denial_reasons == ["High loan-to-income ratio", "Previous loan defaults"]
    assert result.denial_reasons == result.risk_factors


def test_score_derived_metrics(fair_applicant):
    """Test risk and confidence scores derive from probability"""
    result = score_application(fair_applicant)

    assert result.risk_score == pytest.approx((1 - result.probability) * 100)
    assert result.confidence_score == pytest.approx(abs(result.probability - 0.5) * 200)
    assert result.term_months == 60


@pytest.mark.parametrize(
    "overrides",
    [
        {"credit_score": None},
        {"credit_score": 0},
        {"annual_income": None},
        {"annual_income": -1},
        {"loan_amount": 0},
        {"loan_term_months": 0},
    ],
)
def test_score_rejects_invalid_required_inputs(excellent_applicant, overrides):
    """Test missing or non-positive required inputs raise ValidationError"""
    with pytest.raises(ValidationError):
        score_application(replace(excellent_applicant, **overrides))


def test_probability_strictly_inside_unit_interval():
    """Test extreme but finite inputs never saturate to 0 or 1"""
    extremes = [
        RawFeatures(credit_score=850, annual_income=1e12, loan_amount=1),
        RawFeatures(credit_score=300, annual_income=1, loan_amount=1e12, prior_defaults=True),
        RawFeatures(credit_score=700, annual_income=50_000, loan_amount=10_000, loan_term_months=10**9),
    ]
    for features in extremes:
        result = score_application(features)
        assert 0 < result.probability < 1


def test_scorer_uses_injected_policy(defaulted_applicant):
    """Test alternate coefficient and pricing tables change the outcome"""
    lenient = DecisionScorer(
        coefficients=RegressionCoefficients(intercept=20.0),
        pricing=PricingPolicy(base_rate=4.0, max_risk_premium=10.0, default_term_months=36),
    )
    result = lenient.score(defaulted_applicant)

    assert result.decision == "APPROVED"
    assert result.term_months == 36
    assert 4.0 <= result.interest_rate < 4.1


def test_thresholds_must_be_ordered():
    """Test inconsistent threshold tables are rejected"""
    with pytest.raises(ValueError):
        DecisionThresholds(approve=0.4, conditional=0.5, review=0.3)
