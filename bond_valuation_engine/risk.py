from __future__ import annotations

import logging
from typing import Union

import numpy as np
import pandas as pd

from .bonds import Bond, PaymentTerm, periods_per_year
from .cashflows import generate_cashflows
from .config import BASIS_POINTS, DAYS_PER_YEAR
from .errors import ZeroPresentValue

logger = logging.getLogger(__name__)


def macaulay_duration(bond: Bond, ytm_bps: float, valuation_date: pd.Timestamp) -> float:
    """
    Present-value-weighted average time to the bond's cash flows, in years.

        D = sum(t_i * PV_i) / sum(PV_i)

    Times are kept in calendar days and discounted at the per-period yield
    over fractional periods of 365.25 / frequency days; the result is
    converted to years at the end.
    """
    flows = generate_cashflows(bond, valuation_date)
    ppy = bond.periods_per_year

    days = np.array([cf.days_from_valuation for cf in flows], dtype=float)
    amounts = np.array([cf.amount for cf in flows], dtype=float)

    yield_per_period = (ytm_bps / BASIS_POINTS) / ppy
    days_per_period = DAYS_PER_YEAR / ppy

    pv = amounts / np.power(1.0 + yield_per_period, days / days_per_period)
    total_pv = float(np.sum(pv))
    if total_pv == 0.0:
        raise ZeroPresentValue(f"{bond.isin}: cash flows have zero present value.")

    weighted_days = float(np.sum(days * pv))
    duration = (weighted_days / total_pv) / DAYS_PER_YEAR

    logger.debug("%s: macaulay=%.6f years at %.4f bps", bond.isin, duration, ytm_bps)
    return duration


def modified_duration(
    macaulay: float,
    ytm_bps: float,
    payment_term: Union[PaymentTerm, str, int],
) -> float:
    """Macaulay duration discounted by one period: D / (1 + y / frequency)."""
    ppy = periods_per_year(payment_term)
    ytm_per_period = (ytm_bps / BASIS_POINTS) / ppy
    return macaulay / (1.0 + ytm_per_period)
