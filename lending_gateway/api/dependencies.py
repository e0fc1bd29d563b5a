"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from lending_gateway.config import settings
from lending_gateway.domain.models import IncomeProfile, OutcomeRecord
from lending_gateway.domain.policy import PricingPolicy
from lending_gateway.domain.scenarios import (
    ScenarioSelector,
    default_decision_selector,
    default_income_selector,
)
from lending_gateway.domain.scoring import DecisionScorer


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_pricing_policy() -> PricingPolicy:
    """Build pricing policy from configured rates"""
    return PricingPolicy(
        base_rate=settings.base_interest_rate,
        max_risk_premium=settings.max_risk_premium,
        default_term_months=settings.default_loan_term_months,
    )


def get_decision_scorer() -> DecisionScorer:
    """Provide decision scorer bound to configured pricing"""
    return DecisionScorer(pricing=get_pricing_policy())


def get_decision_selector() -> ScenarioSelector[OutcomeRecord]:
    """Provide canned decision scenario selector"""
    return default_decision_selector()


def get_income_selector() -> ScenarioSelector[IncomeProfile]:
    """Provide canned income profile selector"""
    return default_income_selector()
