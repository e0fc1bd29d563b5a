"""Unit tests for amortization and repayment schedules"""

import pytest
from datetime import date
from lending_gateway.domain.amortization import (
    amortize,
    canned_payment,
    generate_payment_schedule,
    monthly_payment,
    round_half_up,
)
from lending_gateway.domain.exceptions import ValidationError


def test_zero_rate_is_straight_line():
    """Test 0% interest splits principal evenly"""
    result = amortize(10_000, 0, 12)

    assert result.monthly_payment == pytest.approx(833.3333, rel=1e-6)
    assert result.total_payment == pytest.approx(10_000)
    assert result.total_interest == pytest.approx(0, abs=1e-9)


def test_standard_annuity_payment():
    """Test 6% over 12 months matches the annuity formula"""
    result = amortize(10_000, 6, 12)

    assert result.monthly_payment == pytest.approx(860.66, abs=0.01)
    assert result.total_payment == pytest.approx(result.monthly_payment * 12)
    assert result.total_interest > 0
    assert result.total_interest == pytest.approx(327.97, abs=0.05)


def test_higher_rate_costs_more():
    """Test payment increases with rate"""
    assert monthly_payment(25_000, 12.99, 48) > monthly_payment(25_000, 5.99, 48)


@pytest.mark.parametrize("term", [0, -12])
def test_non_positive_term_rejected(term):
    """Test term must be positive"""
    with pytest.raises(ValidationError):
        monthly_payment(10_000, 6, term)
    with pytest.raises(ValidationError):
        amortize(10_000, 6, term)


def test_invalid_principal_and_rate_rejected():
    """Test principal must be positive and rate non-negative"""
    with pytest.raises(ValidationError):
        amortize(0, 6, 12)
    with pytest.raises(ValidationError):
        amortize(10_000, -1, 12)


def test_vanishing_rate_matches_straight_line():
    """Test a rate too small to move 1 + r still amortizes"""
    result = amortize(10_000, 1e-15, 12)

    assert result.monthly_payment == pytest.approx(833.3333, rel=1e-6)
    assert result.total_interest == pytest.approx(0, abs=1e-6)


def test_overflowing_compounding_rejected():
    """Test rate and term large enough to overflow raise a validation error"""
    with pytest.raises(ValidationError):
        amortize(10_000, 1_000_000, 1_000)
    with pytest.raises(ValidationError):
        generate_payment_schedule(10_000, 1_000_000, 1_000)


def test_steep_but_finite_compounding_stays_finite():
    """Test payment approaches principal * r when growth is huge"""
    result = amortize(10_000, 1_000, 100)  # (1 + 0.8333)^100 is ~1e26

    assert result.monthly_payment == pytest.approx(10_000 * 1_000 / 100 / 12)


def test_canned_payment_zero_principal():
    """Test declined scenarios carry a zero payment"""
    assert canned_payment(0, 0, 0) == 0.0
    assert canned_payment(10_000, 6, 12) == 860.66


def test_round_half_up():
    """Test halves round up rather than to even"""
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(0.125, 2) == 0.13


def test_schedule_zero_rate_last_payment_absorbs_remainder():
    """Test $1,000 over 3 months splits into 33333/33333/33334 cents"""
    schedule = generate_payment_schedule(1_000, 0, 3, start_date=date(2024, 1, 15))

    assert [p.payment_cents for p in schedule] == [33333, 33333, 33334]
    assert all(p.interest_cents == 0 for p in schedule)
    assert schedule[-1].remaining_balance_cents == 0


def test_schedule_due_dates_clamp_to_month_end():
    """Test monthly due dates clamp on shorter months"""
    schedule = generate_payment_schedule(1_000, 0, 3, start_date=date(2024, 1, 31))

    assert [p.due_date for p in schedule] == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]


def test_schedule_with_interest_repays_principal_exactly():
    """Test principal portions sum to principal and interest declines"""
    schedule = generate_payment_schedule(10_000, 6, 12, start_date=date(2024, 1, 1))

    assert len(schedule) == 12
    assert [p.number for p in schedule] == list(range(1, 13))
    assert sum(p.principal_cents for p in schedule) == 1_000_000
    assert schedule[-1].remaining_balance_cents == 0
    assert all(p.payment_cents == 86066 for p in schedule[:-1])
    assert abs(schedule[-1].payment_cents - 86066) <= 12
    assert schedule[0].interest_cents == 5000  # 0.5% of $10,000
    assert all(a.interest_cents >= b.interest_cents for a, b in zip(schedule, schedule[1:]))
    assert sum(p.interest_cents for p in schedule) == pytest.approx(32797, abs=12)


def test_schedule_rejects_invalid_term():
    """Test schedule generation validates like amortize"""
    with pytest.raises(ValidationError):
        generate_payment_schedule(1_000, 5, 0)
