"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to the last day of shorter months"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_days(from_date: date, days: int) -> date:
    return from_date + timedelta(days=days)


def years_before(from_date: date, years: float) -> date:
    """Approximate start date `years` ago (365-day years, no leap adjustment)"""
    return from_date - timedelta(days=round(years * 365))
