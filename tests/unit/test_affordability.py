"""Unit tests for debt-to-income affordability"""

import pytest
from lending_gateway.domain.affordability import calculate_dti, classify_dti, dti_risk_level
from lending_gateway.domain.exceptions import ValidationError


def test_calculate_dti_acceptable():
    """Test moderate debts classify as excellent and acceptable"""
    result = calculate_dti(5_000, {"mortgage": 1_200, "credit_cards": 300})

    assert result.dti_ratio == 30.0
    assert result.total_monthly_debt == 1_500
    assert result.disposable_income == 3_500
    assert result.classification == "excellent"
    assert result.risk_level == "MEDIUM"
    assert result.recommendation == "ACCEPTABLE"
    assert result.max_loan_payment == 200  # 28% of 5000 less the mortgage
    assert result.breakdown == {
        "mortgage": 1_200,
        "auto_loan": 0,
        "credit_cards": 300,
        "student_loans": 0,
        "other_debts": 0,
    }


def test_calculate_dti_exceeds_threshold():
    """Test heavy debts classify as poor and keep unknown categories"""
    result = calculate_dti(
        4_000,
        {"auto_loan": 900, "student_loans": 600, "other_debts": 500, "personal_loan": 200},
    )

    assert result.dti_ratio == 55.0
    assert result.classification == "poor"
    assert result.risk_level == "VERY_HIGH"
    assert result.recommendation == "EXCEEDS_THRESHOLD"
    assert result.max_loan_payment == 1_120
    assert result.breakdown["personal_loan"] == 200


def test_calculate_dti_no_debts():
    """Test missing debts mean a zero ratio"""
    result = calculate_dti(3_000)
    assert result.dti_ratio == 0
    assert result.risk_level == "LOW"
    assert result.disposable_income == 3_000


def test_max_payment_never_negative():
    """Test large mortgage floors the affordable payment at zero"""
    assert calculate_dti(3_000, {"mortgage": 2_000}).max_loan_payment == 0


@pytest.mark.parametrize("income", [0, -100, None])
def test_calculate_dti_requires_income(income):
    """Test non-positive income is rejected"""
    with pytest.raises(ValidationError):
        calculate_dti(income, {"mortgage": 1_000})


def test_dti_band_edges():
    """Test classification and risk level cut-offs"""
    assert classify_dti(36) == "excellent"
    assert classify_dti(43) == "good"
    assert classify_dti(43.01) == "fair"
    assert classify_dti(50.01) == "poor"
    assert dti_risk_level(29.99) == "LOW"
    assert dti_risk_level(30) == "MEDIUM"
    assert dti_risk_level(49.99) == "HIGH"
    assert dti_risk_level(50) == "VERY_HIGH"
