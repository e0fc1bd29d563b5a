"""Immutable policy tables consumed by the decision scorer"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RegressionCoefficients:
    """
    Hand-authored logistic regression weights.

    These are fixed policy constants, not fitted values. Each weight multiplies
    the matching FeatureVector field; intercept is added as-is.
    """

    intercept: float = 0.5
    credit_score: float = 5.2
    loan_to_income: float = -1.8
    dti_ratio: float = -2.5
    employment: float = 1.5
    defaults: float = -6.0
    loan_amount: float = -0.5
    term_risk: float = -0.8


@dataclass(frozen=True)
class DecisionThresholds:
    """
    Approval probability cut-offs, highest first.

    p >= approve:     APPROVED, full amount
    p >= conditional: APPROVED_WITH_CONDITIONS, conditional_ratio of amount
    p >= review:      PENDING_REVIEW
    otherwise:        DENIED
    """

    approve: float = 0.75
    conditional: float = 0.50
    review: float = 0.30
    conditional_ratio: float = 0.8

    def __post_init__(self) -> None:
        if not (0 < self.review <= self.conditional <= self.approve < 1):
            raise ValueError("thresholds must satisfy 0 < review <= conditional <= approve < 1")


@dataclass(frozen=True)
class PricingPolicy:
    """Risk-based pricing: base_rate + (1 - p) * max_risk_premium"""

    base_rate: float = 5.5
    max_risk_premium: float = 15.0
    default_term_months: int = 60


@dataclass(frozen=True)
class NormalizationBounds:
    """Scales used to map raw applicant attributes onto [0, 1]"""

    credit_score_floor: float = 300
    credit_score_range: float = 550
    dti_cap: float = 0.6
    employment_years_cap: float = 10
    loan_amount_cap: float = 100_000
    term_months_scale: float = 84
    default_dti_ratio: float = 0.3
    default_employment_years: float = 2


DEFAULT_COEFFICIENTS = RegressionCoefficients()
DEFAULT_THRESHOLDS = DecisionThresholds()
DEFAULT_PRICING = PricingPolicy()
DEFAULT_BOUNDS = NormalizationBounds()
