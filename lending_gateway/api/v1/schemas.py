"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime, timezone
from typing import Dict, List, Optional


class ResponseMetadata(BaseModel):
    """Envelope metadata attached to every successful response"""

    model_config = ConfigDict(protected_namespaces=())

    request_id: str
    timestamp: str
    model_version: Optional[str] = None
    data_points: Optional[int] = None

    @classmethod
    def for_request(cls, request_id: str, **extra) -> "ResponseMetadata":
        return cls(request_id=request_id, timestamp=datetime.now(timezone.utc).isoformat(), **extra)


# --- Decisions -------------------------------------------------------------


class EvaluateApplicationRequest(BaseModel):
    """Request body for POST /v1/evaluate-application"""

    application_id: Optional[str] = Field(None, description="Application identifier; selects a canned scenario")


class CreditScoreRequest(BaseModel):
    """Request body for POST /v1/credit-score"""

    application_id: Optional[str] = None
    ssn: Optional[str] = Field(None, description="Used when no application id is given")


class CreditEvaluation(BaseModel):
    credit_score: int
    credit_grade: str
    risk_level: Optional[str] = None
    bureau: str
    score_date: date
    factors: List[str] = []


class CreditScoreResponse(BaseModel):
    """Response for POST /v1/credit-score"""

    success: bool = True
    data: CreditEvaluation
    metadata: ResponseMetadata


class ApplicationDecision(BaseModel):
    decision: str
    approved_amount: int
    interest_rate: float
    term: int
    monthly_payment: float
    reason_codes: List[str]
    conditions: List[str]
    denial_reasons: List[str]
    pending_items: Optional[List[str]] = None
    credit_evaluation: CreditEvaluation
    processed_date: str
    expiration_date: date


class EvaluateApplicationResponse(BaseModel):
    """Response for POST /v1/evaluate-application"""

    success: bool = True
    data: ApplicationDecision
    metadata: ResponseMetadata


class MLEvaluateRequest(BaseModel):
    """Request body for POST /v1/ml-evaluate; required fields are checked by the scorer"""

    application_id: Optional[str] = None
    credit_score: Optional[float] = None
    annual_income: Optional[float] = None
    loan_amount: Optional[float] = None
    loan_term: Optional[int] = Field(None, description="Months; defaults to 60")
    employment_years: Optional[float] = None
    dti_ratio: Optional[float] = Field(None, description="Fraction, e.g. 0.35 for 35%")
    previous_defaults: bool = False
    loan_purpose: Optional[str] = None


class ModelInsights(BaseModel):
    model: str
    features: Dict[str, float]
    weights: Dict[str, float]
    logit_score: float
    risk_factors: List[str]
    positive_factors: List[str]
    confidence_score: float


class MLDecision(BaseModel):
    decision: str
    approval_probability: float = Field(..., description="Percent, 2 decimals")
    approved_amount: float
    interest_rate: float
    term: int
    monthly_payment: float
    risk_level: str
    risk_score: float
    credit_evaluation: CreditEvaluation
    ml_insights: ModelInsights
    conditions: List[str]
    denial_reasons: List[str]
    processed_date: str
    expiration_date: date


class MLEvaluateResponse(BaseModel):
    """Response for POST /v1/ml-evaluate"""

    success: bool = True
    data: MLDecision
    metadata: ResponseMetadata


# --- Payments --------------------------------------------------------------


# Upper bounds only; non-positive values are rejected by the amortization
# calculator with a VALIDATION_ERROR
MAX_PRINCIPAL = 100_000_000
MAX_ANNUAL_RATE_PERCENT = 100
MAX_TERM_MONTHS = 480


class CalculatePaymentRequest(BaseModel):
    """Request body for POST /v1/calculate-payment"""

    principal: float = Field(..., le=MAX_PRINCIPAL)
    rate: float = Field(..., le=MAX_ANNUAL_RATE_PERCENT, description="Annual interest rate in percent")
    months: int = Field(..., le=MAX_TERM_MONTHS)


class PaymentSummary(BaseModel):
    principal: float
    rate: float
    months: int
    monthly_payment: float
    total_payment: float
    total_interest: float


class CalculatePaymentResponse(BaseModel):
    """Response for POST /v1/calculate-payment"""

    success: bool = True
    data: PaymentSummary
    metadata: ResponseMetadata


class PaymentScheduleRequest(CalculatePaymentRequest):
    """Request body for POST /v1/payment-schedule"""

    start_date: Optional[date] = None


class ScheduledPaymentSchema(BaseModel):
    """Single row of an amortization schedule"""

    number: int
    due_date: date
    payment_cents: int
    principal_cents: int
    interest_cents: int
    remaining_balance_cents: int


class PaymentSchedule(BaseModel):
    summary: PaymentSummary
    payments: List[ScheduledPaymentSchema]


class PaymentScheduleResponse(BaseModel):
    """Response for POST /v1/payment-schedule"""

    success: bool = True
    data: PaymentSchedule
    metadata: ResponseMetadata


# --- Income ----------------------------------------------------------------


class VerifyIncomeRequest(BaseModel):
    """Request body for POST /v1/verify-income"""

    application_id: Optional[str] = None
    ssn: Optional[str] = None


class IncomeSource(BaseModel):
    type: str = "EMPLOYMENT"
    employer: Optional[str]
    job_title: Optional[str]
    employment_type: Optional[str]
    start_date: date


class FinancialSummary(BaseModel):
    monthly_income: int
    monthly_debt_payments: int
    disposable_income: int
    debt_to_income_ratio: float


class IncomeVerification(BaseModel):
    annual_income: int
    monthly_income: int
    verification_status: str
    verification_method: Optional[str]
    verification_date: str
    income_source: IncomeSource
    financial_summary: FinancialSummary


class VerifyIncomeResponse(BaseModel):
    """Response for POST /v1/verify-income"""

    success: bool = True
    data: IncomeVerification
    metadata: ResponseMetadata


class AnalyzeIncomeRequest(BaseModel):
    """Request body for POST /v1/analyze-income-pattern"""

    monthly_incomes: List[float] = Field(..., description="Chronological monthly income, at least 3 values")
    deposit_patterns: Optional[List[float]] = Field(None, description="Deposit counts per month")
    employment_months: Optional[float] = None


class IncomeStatistics(BaseModel):
    mean_income: float
    median_income: float
    std_deviation: float
    coefficient_of_variation: float
    trend: str
    trend_strength: float


class AnomalySchema(BaseModel):
    month: int = Field(..., description="1-based position in the series")
    income: float
    z_score: float
    type: str
    severity: str


class FraudIndicatorSchema(BaseModel):
    type: str
    severity: str
    description: str


class StabilityFactorsSchema(BaseModel):
    consistency: float
    trend: float
    anomaly_penalty: float
    employment_bonus: float


class IncomeAnalysis(BaseModel):
    stability_score: int
    verification_confidence: str
    statistics: IncomeStatistics
    anomalies: List[AnomalySchema]
    fraud_indicators: List[FraudIndicatorSchema]
    stability_factors: StabilityFactorsSchema
    insights: List[str]
    recommendation: str
    analysis_date: str


class AnalyzeIncomeResponse(BaseModel):
    """Response for POST /v1/analyze-income-pattern"""

    success: bool = True
    data: IncomeAnalysis
    metadata: ResponseMetadata


class CalculateDTIRequest(BaseModel):
    """Request body for POST /v1/calculate-dti"""

    monthly_income: float
    monthly_debts: Dict[str, float] = Field(default_factory=dict)


class DebtToIncome(BaseModel):
    dti_ratio: float
    total_monthly_debt: float
    total_monthly_income: float
    disposable_income: float
    classification: str
    risk_level: str
    recommendation: str
    max_loan_payment: int
    breakdown: Dict[str, float]


class CalculateDTIResponse(BaseModel):
    """Response for POST /v1/calculate-dti"""

    success: bool = True
    data: DebtToIncome
    metadata: ResponseMetadata
