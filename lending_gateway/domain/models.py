"""Domain models - pure Python dataclasses representing lending entities"""

from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class OutcomeRecord:
    """Canned loan decision returned by the scenario selector"""

    key: str
    credit_score: int
    credit_grade: str
    risk_level: str
    decision: str
    approved_amount: int
    interest_rate: float
    term_months: int
    monthly_payment: float
    reason_codes: Tuple[str, ...] = ()
    conditions: Tuple[str, ...] = ()
    denial_reasons: Tuple[str, ...] = ()
    pending_items: Optional[Tuple[str, ...]] = None
    # Set only on the simulated provider outage record
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error_code is not None


@dataclass(frozen=True)
class IncomeProfile:
    """Canned income verification outcome"""

    key: str
    annual_income: int
    monthly_income: int
    employment_status: str
    employment_type: Optional[str]
    employer: Optional[str]
    job_title: Optional[str]
    employment_years: int
    verification_status: str
    verification_method: Optional[str]
    debt_to_income_ratio: float  # percent
    monthly_debt_payments: int
    disposable_income: int
    errors: Tuple[str, ...] = ()

    @property
    def is_verified(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class RawFeatures:
    """
    Applicant attributes fed to the decision scorer.

    credit_score, annual_income and loan_amount are required and must be
    positive. Optional fields fall back to documented defaults during
    normalization: loan_term_months=60, employment_years=2, dti_ratio=0.3.
    dti_ratio is a fraction (0.35 == 35%).
    """

    credit_score: Optional[float]
    annual_income: Optional[float]
    loan_amount: Optional[float]
    loan_term_months: Optional[int] = None
    employment_years: Optional[float] = None
    dti_ratio: Optional[float] = None
    prior_defaults: bool = False
    application_id: Optional[str] = None
    loan_purpose: Optional[str] = None


@dataclass(frozen=True)
class FeatureVector:
    """Normalized applicant features"""

    credit_score_norm: float
    loan_to_income_ratio: float
    dti_ratio_norm: float
    employment_stability: float
    has_defaults: int
    loan_amount_norm: float
    term_risk: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class ScoreResult:
    """Output of the decision scorer"""

    probability: float
    logit: float
    decision: str
    risk_level: str
    approved_amount: float
    interest_rate: float
    term_months: int
    monthly_payment: float
    credit_grade: str
    features: FeatureVector
    risk_factors: List[str] = field(default_factory=list)
    positive_factors: List[str] = field(default_factory=list)
    denial_reasons: List[str] = field(default_factory=list)
    conditions: List[str] = field(default_factory=list)

    @property
    def risk_score(self) -> float:
        """Probability of not approving, as a percentage"""
        return (1 - self.probability) * 100

    @property
    def confidence_score(self) -> float:
        """Distance from the 50% coin-flip, scaled to 0-100"""
        return abs(self.probability - 0.5) * 2 * 100


@dataclass
class StatisticsSnapshot:
    """Descriptive statistics over a numeric series"""

    mean: float
    median: float
    std_dev: float
    coefficient_of_variation: float
    trend_slope: float


@dataclass
class AnomalyRecord:
    """Single z-score outlier in an income series"""

    index: int
    value: float
    z_score: float
    type: str  # "SPIKE" or "DROP"
    severity: str  # "MEDIUM" or "HIGH"


@dataclass
class FraudIndicator:
    """Pattern suggesting fabricated or manipulated income"""

    type: str
    severity: str
    description: str


@dataclass
class StabilityFactors:
    """Component scores combined into the stability score"""

    consistency: float
    trend: float
    anomaly_penalty: float
    employment_bonus: float


@dataclass
class StabilityResult:
    """Output of income pattern analysis"""

    stability_score: int
    statistics: StatisticsSnapshot
    stability_factors: StabilityFactors
    anomalies: List[AnomalyRecord]
    fraud_indicators: List[FraudIndicator]
    recommendation: str
    verification_confidence: str
    trend_direction: str
    insights: List[str]


@dataclass
class AmortizationResult:
    """Fixed-rate installment loan summary"""

    monthly_payment: float
    total_payment: float
    total_interest: float


@dataclass
class ScheduledPayment:
    """Single payment in an amortization schedule"""

    number: int
    due_date: date
    payment_cents: int
    principal_cents: int
    interest_cents: int
    remaining_balance_cents: int


@dataclass
class DebtToIncomeResult:
    """Debt-to-income affordability summary"""

    dti_ratio: float  # percent
    total_monthly_debt: float
    monthly_income: float
    disposable_income: float
    classification: str
    risk_level: str
    recommendation: str
    max_loan_payment: int
    breakdown: Dict[str, float]
