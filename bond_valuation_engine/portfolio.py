from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .bonds import Bond
from .config import DEFAULT_ACCOUNT_ID
from .valuation import BondValuer

logger = logging.getLogger(__name__)

HOLDING_COLUMNS = [
    "isin",
    "ytm_bps",
    "macaulay_duration",
    "modified_duration",
    "quantity",
    "market_value",
    "total_market_value",
    "weight",
]


def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """sum(v * w) / sum(w); 0.0 for an empty or zero-weight book."""
    v = np.asarray(values, dtype=float)
    w = np.asarray(weights, dtype=float)
    total = float(np.sum(w))
    if total == 0.0:
        return 0.0
    return float(np.sum(v * w)) / total


def bond_weight(total_bond_value: int, total_portfolio_value: int) -> float:
    if total_portfolio_value == 0 or total_bond_value == 0:
        return 0.0
    return total_bond_value / total_portfolio_value


def analyze_holdings(bonds: Sequence[Bond], valuation_date: Optional[pd.Timestamp] = None) -> pd.DataFrame:
    """
    One row per holding with its analytics and weight by market value.

    Any bond that cannot be valued fails the whole run.
    """
    valuer = BondValuer(valuation_date)

    rows = []
    for bond in bonds:
        a = valuer.analyze(bond)
        rows.append(
            (
                bond.isin,
                a.ytm_bps,
                a.macaulay_duration,
                a.modified_duration,
                bond.quantity,
                bond.market_value,
                bond.total_market_value,
            )
        )

    out = pd.DataFrame(rows, columns=HOLDING_COLUMNS[:-1])
    total = int(out["total_market_value"].sum()) if not out.empty else 0
    out["weight"] = [bond_weight(int(v), total) for v in out["total_market_value"]]
    return out


@dataclass(frozen=True)
class PortfolioAnalysis:
    account_id: str
    holdings: pd.DataFrame
    weighted_macaulay_duration: float
    weighted_modified_duration: float
    total_portfolio_value: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def summary(self) -> dict:
        return {
            "id": str(self.id),
            "account_id": self.account_id,
            "weighted_macaulay_duration": self.weighted_macaulay_duration,
            "weighted_modified_duration": self.weighted_modified_duration,
            "total_portfolio_value": self.total_portfolio_value,
        }


def analyze_portfolio(
    bonds: Sequence[Bond],
    valuation_date: Optional[pd.Timestamp] = None,
    account_id: str = DEFAULT_ACCOUNT_ID,
) -> PortfolioAnalysis:
    logger.info("Analyzing portfolio %s with %d bonds", account_id, len(bonds))

    holdings = analyze_holdings(bonds, valuation_date)
    values = holdings["total_market_value"].to_numpy(dtype=float)

    return PortfolioAnalysis(
        account_id=account_id,
        holdings=holdings,
        weighted_macaulay_duration=weighted_average(holdings["macaulay_duration"].to_numpy(dtype=float), values),
        weighted_modified_duration=weighted_average(holdings["modified_duration"].to_numpy(dtype=float), values),
        total_portfolio_value=int(holdings["total_market_value"].sum()),
    )
