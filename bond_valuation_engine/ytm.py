from __future__ import annotations

import logging

import pandas as pd

from .bonds import Bond
from .errors import BondTooCloseToMaturity, FractionalPeriodAdjustmentTooLarge, YTMNotMeaningful
from .utils import fractional_period, remaining_periods

logger = logging.getLogger(__name__)


def approximate_ytm(bond: Bond, valuation_date: pd.Timestamp) -> float:
    """
    Closed-form YTM approximation, annualised, in basis points.

        C = (coupon_rate / 100) * F / ppy
        YTM per period = [C + (F - P) / N] / [(F + P) / 2]
        YTM (bps) = YTM per period * ppy * 100

    F = face value, P = market value (clean price), both in cents, and
    N = remaining periods less the fraction of the current period already
    elapsed. C is a percent-scaled coupon, so a par bond yields exactly its
    coupon rate. Not the exact root of the pricing equation.
    """
    val = pd.Timestamp(valuation_date).normalize()
    ppy = bond.periods_per_year
    face = float(bond.face_value)
    price = float(bond.market_value)

    n = remaining_periods(val, bond.issue_date, bond.maturity_date, ppy)
    if face + price == 0:
        raise YTMNotMeaningful(f"{bond.isin}: face and market value are both zero.")
    frac = fractional_period(bond.issue_date, val, ppy)
    adjusted_n = n - frac

    if adjusted_n < 0:
        raise BondTooCloseToMaturity(f"{bond.isin}: bond too close to maturity for YTM calculation.")

    # Matures today: aggregating a YTM here would skew portfolio figures
    if adjusted_n == 0:
        raise YTMNotMeaningful(
            f"{bond.isin}: bond matures today, YTM is not meaningful "
            f"(receives {face + bond.coupon_per_period:.0f} cents, pays {price:.0f} cents)."
        )

    if abs(adjusted_n - n) > 1.0:
        raise FractionalPeriodAdjustmentTooLarge(
            f"{bond.isin}: fractional period adjustment too large (remaining={n}, fractional={frac})."
        )

    coupon = (bond.coupon_rate / 100.0) * face / ppy
    ytm_per_period = (coupon + (face - price) / adjusted_n) / ((face + price) / 2.0)
    ytm_bps = ytm_per_period * ppy * 100.0

    logger.debug("%s: n=%d frac=%.6f ytm=%.4f bps", bond.isin, n, frac, ytm_bps)
    return ytm_bps
