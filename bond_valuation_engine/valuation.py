from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from .bonds import Bond, BondAnalytics
from .risk import macaulay_duration, modified_duration
from .ytm import approximate_ytm

logger = logging.getLogger(__name__)


class BondValuer:
    """
    Values bonds as of one fixed date: YTM, then Macaulay and Modified duration.

    The date is pinned at construction (today if omitted) so every bond in a
    run is measured against the same day.
    """

    def __init__(self, valuation_date: Optional[pd.Timestamp] = None):
        if valuation_date is None:
            valuation_date = pd.Timestamp.today()
        self.valuation_date = pd.Timestamp(valuation_date).normalize()

    def analyze(self, bond: Bond) -> BondAnalytics:
        val_date = self.valuation_date

        ytm = approximate_ytm(bond, val_date)
        mac = macaulay_duration(bond, ytm, val_date)
        mod = modified_duration(mac, ytm, bond.payment_term)

        logger.debug("%s: ytm=%.4f bps macaulay=%.6f modified=%.6f", bond.isin, ytm, mac, mod)
        return BondAnalytics(
            bond=bond,
            valuation_date=val_date,
            ytm_bps=ytm,
            macaulay_duration=mac,
            modified_duration=mod,
        )


def analyze_bond(bond: Bond, valuation_date: Optional[pd.Timestamp] = None) -> BondAnalytics:
    return BondValuer(valuation_date).analyze(bond)
