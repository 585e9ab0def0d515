from __future__ import annotations

import pandas as pd
from typing import List, Tuple

from .config import MONTHS_PER_YEAR
from .errors import InvalidPaymentTerm, MaturedBond

VALID_FREQUENCIES = (1, 2, 4, 12)

# IMPORTANT: next_payment_date, remaining_periods, fractional_period and
# cashflows.generate_cashflows must agree on whether the valuation date is a
# payment date. All of them go through _next_schedule_index, which treats a
# payment falling on the valuation date as still to be received (the bond
# trades before the payment is executed at end of day).


def months_per_period(periods_per_year: int) -> int:
    if periods_per_year not in VALID_FREQUENCIES:
        raise InvalidPaymentTerm(f"Unsupported payment frequency: {periods_per_year!r}")
    return MONTHS_PER_YEAR // periods_per_year


def days_between(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Calendar days from start to end (negative if end precedes start)."""
    return (pd.Timestamp(end).normalize() - pd.Timestamp(start).normalize()).days


def scheduled_date(issue_date: pd.Timestamp, k: int, periods_per_year: int) -> pd.Timestamp:
    """
    k-th payment date of a schedule anchored at issue_date (k=0 is the issue date).

    Always offset from the issue date rather than from the previous payment,
    so month-end clamping (Jan 31 -> Feb 28) never drifts the later dates.
    """
    months = months_per_period(periods_per_year)
    return pd.Timestamp(issue_date).normalize() + pd.DateOffset(months=k * months)


def _next_schedule_index(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> int:
    as_of = pd.Timestamp(as_of).normalize()
    k = 1
    while scheduled_date(issue_date, k, periods_per_year) < as_of:
        k += 1
    return k


def next_payment_date(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> pd.Timestamp:
    """First payment date on or after as_of (returns as_of itself on a payment date)."""
    k = _next_schedule_index(issue_date, as_of, periods_per_year)
    return scheduled_date(issue_date, k, periods_per_year)


def previous_payment_date(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> pd.Timestamp:
    """Schedule date one period before next_payment_date (the issue date in the first period)."""
    return payment_window(issue_date, as_of, periods_per_year)[0]


def is_payment_date(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> bool:
    return next_payment_date(issue_date, as_of, periods_per_year) == pd.Timestamp(as_of).normalize()


def payment_schedule(
    issue_date: pd.Timestamp,
    as_of: pd.Timestamp,
    maturity: pd.Timestamp,
    periods_per_year: int,
) -> List[pd.Timestamp]:
    """All payment dates from next_payment_date(as_of) through maturity inclusive."""
    maturity = pd.Timestamp(maturity).normalize()

    k = _next_schedule_index(issue_date, as_of, periods_per_year)
    dates: List[pd.Timestamp] = []
    d = scheduled_date(issue_date, k, periods_per_year)
    while d <= maturity:
        dates.append(d)
        k += 1
        d = scheduled_date(issue_date, k, periods_per_year)
    return dates


def remaining_periods(
    as_of: pd.Timestamp,
    issue_date: pd.Timestamp,
    maturity: pd.Timestamp,
    periods_per_year: int,
) -> int:
    """
    Number of payments still to be received, counting a payment due on as_of.

    Raises MaturedBond when maturity is before as_of. A bond maturing on as_of
    still has its final payment outstanding and returns 1.
    """
    as_of = pd.Timestamp(as_of).normalize()
    maturity = pd.Timestamp(maturity).normalize()

    if maturity < as_of:
        raise MaturedBond(f"Bond matured on {maturity.date()}, before {as_of.date()}.")

    return len(payment_schedule(issue_date, as_of, maturity, periods_per_year))


def payment_window(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """(previous, next) payment dates bracketing as_of under the inclusive rule."""
    k = _next_schedule_index(issue_date, as_of, periods_per_year)
    return scheduled_date(issue_date, k - 1, periods_per_year), scheduled_date(issue_date, k, periods_per_year)


def fractional_period(issue_date: pd.Timestamp, as_of: pd.Timestamp, periods_per_year: int) -> float:
    """
    Fraction of the current coupon period elapsed at as_of, in [0, 1].

    On a payment date the period ending that day has fully elapsed, so the
    result is 1.0 while remaining_periods still counts that day's payment.
    Dates before issue are clamped to 0.0.
    """
    as_of = pd.Timestamp(as_of).normalize()
    prev, nxt = payment_window(issue_date, as_of, periods_per_year)

    elapsed = days_between(prev, as_of)
    period_days = days_between(prev, nxt)
    if period_days <= 0:
        raise ValueError("Invalid coupon period length from schedule.")

    return min(max(elapsed / period_days, 0.0), 1.0)
