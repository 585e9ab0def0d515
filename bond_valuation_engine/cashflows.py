from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List

import pandas as pd

from .bonds import Bond
from .errors import MaturedBond, NoCashFlowsGenerated, PrincipalAlignmentError
from .utils import days_between, payment_schedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashFlow:
    payment_date: pd.Timestamp
    days_from_valuation: int
    amount: float  # cents

    def __post_init__(self) -> None:
        if self.days_from_valuation < 0:
            raise ValueError(f"Cash flow on {self.payment_date} precedes the valuation date.")


def generate_cashflows(bond: Bond, valuation_date: pd.Timestamp) -> List[CashFlow]:
    """
    Future cash flows of `bond` seen from `valuation_date`, ascending by date.

    A coupon falling on the valuation date is included. The principal is
    folded into the final coupon, which must land exactly on maturity.
    Zero-coupon bonds return the principal alone.
    """
    val = pd.Timestamp(valuation_date).normalize()
    maturity = bond.maturity_date

    if maturity < val:
        raise MaturedBond(f"{bond.isin}: matured on {maturity.date()}, before {val.date()}.")

    if bond.coupon_rate == 0:
        return [CashFlow(maturity, days_between(val, maturity), float(bond.face_value))]

    coupon = bond.coupon_per_period
    flows = [
        CashFlow(d, days_between(val, d), coupon)
        for d in payment_schedule(bond.issue_date, val, maturity, bond.periods_per_year)
    ]

    if not flows:
        raise NoCashFlowsGenerated(f"{bond.isin}: no cash flows generated for a coupon paying bond.")

    last = flows[-1]
    if last.payment_date != maturity:
        raise PrincipalAlignmentError(
            f"{bond.isin}: last payment {last.payment_date.date()} does not fall on maturity {maturity.date()}; "
            f"the {bond.payment_term.name.lower()} schedule does not divide issue-to-maturity."
        )
    flows[-1] = replace(last, amount=last.amount + bond.face_value)

    logger.debug("%s: %d cash flows from %s", bond.isin, len(flows), val.date())
    return flows


def cashflow_table(bond: Bond, valuation_date: pd.Timestamp) -> pd.DataFrame:
    flows = generate_cashflows(bond, valuation_date)
    n = len(flows)
    return pd.DataFrame(
        {
            "payment_date": [cf.payment_date for cf in flows],
            "days_from_valuation": [cf.days_from_valuation for cf in flows],
            "amount": [cf.amount for cf in flows],
            "is_principal": [i == n - 1 for i in range(n)],
        }
    )
