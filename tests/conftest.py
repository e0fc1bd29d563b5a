"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from lending_gateway.api.main import create_app
from lending_gateway.domain.models import RawFeatures


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def excellent_applicant() -> RawFeatures:
    """Strong credit, modest loan relative to income, steady job"""
    return RawFeatures(
        credit_score=800,
        annual_income=100_000,
        loan_amount=20_000,
        loan_term_months=60,
        employment_years=5,
        dti_ratio=0.2,
        prior_defaults=False,
        application_id="APP-EXCELLENT",
    )


@pytest.fixture
def defaulted_applicant() -> RawFeatures:
    """Sub-prime credit, large loan relative to income, prior default"""
    return RawFeatures(
        credit_score=580,
        annual_income=40_000,
        loan_amount=30_000,
        prior_defaults=True,
        application_id="APP-DEFAULTED",
    )


@pytest.fixture
def fair_applicant() -> RawFeatures:
    """Fair credit with a loan at two thirds of income"""
    return RawFeatures(
        credit_score=650,
        annual_income=60_000,
        loan_amount=40_000,
        loan_term_months=60,
        employment_years=2,
        dti_ratio=0.3,
    )


@pytest.fixture
def steady_income() -> list[float]:
    """Twelve months of salary with small month-to-month variation"""
    return [5120.50, 5080.25, 5150.75, 5110.00, 5095.40, 5130.60,
            5140.20, 5105.90, 5125.35, 5115.15, 5135.80, 5100.45]
