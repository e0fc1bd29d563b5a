"""Deterministic mock scenario selection keyed by applicant identifier"""

import logging
from typing import Generic, Optional, Sequence, Tuple, TypeVar

from lending_gateway.domain.amortization import canned_payment
from lending_gateway.domain.hashing import bucket_for
from lending_gateway.domain.models import IncomeProfile, OutcomeRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


def select_scenario(identifier: Optional[str], table: Sequence[RecordT], default_index: int = 0) -> RecordT:
    """
    Pick a canned record for an identifier.

    - Missing/empty identifier → table[default_index]
    - Otherwise → table[abs(string_hash(identifier)) % len(table)]

    Different identifiers may land in the same bucket; the same identifier
    always lands in the same bucket for a given table.
    """
    if not table:
        raise ValueError("scenario table is empty")

    if not identifier:
        return table[default_index]

    return table[bucket_for(identifier, len(table))]


class ScenarioSelector(Generic[RecordT]):
    """Scenario table bound at construction; swap tables for test doubles"""

    def __init__(self, table: Sequence[RecordT], default_index: int = 0):
        if not table:
            raise ValueError("scenario table is empty")
        if not 0 <= default_index < len(table):
            raise ValueError(f"default_index {default_index} out of range for {len(table)} records")
        self.table: Tuple[RecordT, ...] = tuple(table)
        self.default_index = default_index

    @property
    def default(self) -> RecordT:
        return self.table[self.default_index]

    def select(self, identifier: Optional[str]) -> RecordT:
        record = select_scenario(identifier, self.table, self.default_index)
        logger.debug("Scenario selected", extra={"scenario": getattr(record, "key", None)})
        return record


def credit_factors(credit_score: int) -> Tuple[str, ...]:
    """Bureau-style narrative for a credit score"""
    if credit_score >= 750:
        return ("Excellent payment history", "Low credit utilization", "Long credit history")
    if credit_score >= 680:
        return ("Good payment history", "Moderate credit utilization")
    return ("Fair payment history", "Some recent inquiries")


def _declined(key: str, credit_score: int, grade: str, risk_level: str, reason_codes, denial_reasons) -> OutcomeRecord:
    return OutcomeRecord(
        key=key,
        credit_score=credit_score,
        credit_grade=grade,
        risk_level=risk_level,
        decision="DENIED",
        approved_amount=0,
        interest_rate=0.0,
        term_months=0,
        monthly_payment=0.0,
        reason_codes=tuple(reason_codes),
        denial_reasons=tuple(denial_reasons),
    )


# Order is part of the selection contract: bucket i → DECISION_SCENARIOS[i]
DECISION_SCENARIOS: Tuple[OutcomeRecord, ...] = (
    OutcomeRecord(
        key="APPROVED_EXCELLENT_CREDIT",
        credit_score=780,
        credit_grade="A",
        risk_level="LOW",
        decision="APPROVED",
        approved_amount=50_000,
        interest_rate=5.99,
        term_months=60,
        monthly_payment=canned_payment(50_000, 5.99, 60),
        reason_codes=("EXCELLENT_CREDIT", "LOW_RISK"),
    ),
    OutcomeRecord(
        key="APPROVED_GOOD_CREDIT",
        credit_score=720,
        credit_grade="B",
        risk_level="MEDIUM",
        decision="APPROVED",
        approved_amount=35_000,
        interest_rate=8.99,
        term_months=60,
        monthly_payment=canned_payment(35_000, 8.99, 60),
        reason_codes=("GOOD_CREDIT", "ACCEPTABLE_RISK"),
    ),
    OutcomeRecord(
        key="APPROVED_WITH_CONDITIONS",
        credit_score=680,
        credit_grade="C",
        risk_level="MEDIUM",
        decision="APPROVED_WITH_CONDITIONS",
        approved_amount=25_000,
        interest_rate=12.99,
        term_months=48,
        monthly_payment=canned_payment(25_000, 12.99, 48),
        reason_codes=("FAIR_CREDIT", "CONDITIONAL_APPROVAL"),
        conditions=("Proof of income required", "Verification of employment"),
    ),
    _declined(
        "DENIED_LOW_CREDIT", 580, "E", "HIGH",
        ["LOW_CREDIT_SCORE", "HIGH_RISK"],
        ["Credit score below minimum threshold", "Poor payment history"],
    ),
    _declined(
        "DENIED_HIGH_DTI", 650, "D", "MEDIUM_HIGH",
        ["HIGH_DTI_RATIO", "INSUFFICIENT_INCOME"],
        ["Debt-to-income ratio exceeds 45%", "Insufficient disposable income"],
    ),
    _declined(
        "DENIED_INSUFFICIENT_INCOME", 650, "D", "MEDIUM_HIGH",
        ["INSUFFICIENT_INCOME", "UNVERIFIABLE_INCOME"],
        ["Income cannot be verified", "Income below minimum threshold"],
    ),
    OutcomeRecord(
        key="PENDING_DOCUMENT_REVIEW",
        credit_score=680,
        credit_grade="C",
        risk_level="MEDIUM",
        decision="PENDING_REVIEW",
        approved_amount=0,
        interest_rate=0.0,
        term_months=0,
        monthly_payment=0.0,
        reason_codes=("MANUAL_REVIEW_REQUIRED",),
        pending_items=("Income verification", "Employment verification", "Bank statements"),
    ),
    OutcomeRecord(
        key="ERROR_SCENARIO",
        credit_score=0,
        credit_grade="",
        risk_level="",
        decision="ERROR",
        approved_amount=0,
        interest_rate=0.0,
        term_months=0,
        monthly_payment=0.0,
        error_code="DECISION_ENGINE_ERROR",
        error_message="Decision engine temporarily unavailable",
    ),
)

DEFAULT_DECISION_INDEX = 1  # APPROVED_GOOD_CREDIT


INCOME_PROFILES: Tuple[IncomeProfile, ...] = (
    IncomeProfile(
        key="HIGH",
        annual_income=85_000,
        monthly_income=7_083,
        employment_status="EMPLOYED",
        employment_type="FULL_TIME",
        employer="TechCorp Inc.",
        job_title="Senior Software Engineer",
        employment_years=5,
        verification_status="VERIFIED",
        verification_method="DIRECT_DEPOSIT",
        debt_to_income_ratio=28.5,
        monthly_debt_payments=2_019,
        disposable_income=5_064,
    ),
    IncomeProfile(
        key="MEDIUM",
        annual_income=65_000,
        monthly_income=5_417,
        employment_status="EMPLOYED",
        employment_type="FULL_TIME",
        employer="Marketing Solutions LLC",
        job_title="Marketing Manager",
        employment_years=3,
        verification_status="VERIFIED",
        verification_method="PAY_STUB",
        debt_to_income_ratio=35.2,
        monthly_debt_payments=1_907,
        disposable_income=3_510,
    ),
    IncomeProfile(
        key="LOW",
        annual_income=45_000,
        monthly_income=3_750,
        employment_status="EMPLOYED",
        employment_type="PART_TIME",
        employer="Retail Store",
        job_title="Sales Associate",
        employment_years=1,
        verification_status="PENDING",
        verification_method="BANK_STATEMENT",
        debt_to_income_ratio=48.5,
        monthly_debt_payments=1_819,
        disposable_income=1_931,
    ),
    IncomeProfile(
        key="UNVERIFIABLE",
        annual_income=0,
        monthly_income=0,
        employment_status="UNEMPLOYED",
        employment_type=None,
        employer=None,
        job_title=None,
        employment_years=0,
        verification_status="FAILED",
        verification_method=None,
        debt_to_income_ratio=0.0,
        monthly_debt_payments=0,
        disposable_income=0,
        errors=("Unable to verify income", "No employment records found"),
    ),
)

DEFAULT_INCOME_INDEX = 1  # MEDIUM


def default_decision_selector() -> ScenarioSelector[OutcomeRecord]:
    return ScenarioSelector(DECISION_SCENARIOS, DEFAULT_DECISION_INDEX)


def default_income_selector() -> ScenarioSelector[IncomeProfile]:
    return ScenarioSelector(INCOME_PROFILES, DEFAULT_INCOME_INDEX)
