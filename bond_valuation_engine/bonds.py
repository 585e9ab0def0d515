from __future__ import annotations

import pandas as pd
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .config import BASIS_POINTS
from .errors import InvalidPaymentTerm


class PaymentTerm(Enum):
    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    @property
    def periods_per_year(self) -> int:
        return self.value

    @classmethod
    def parse(cls, term: Union["PaymentTerm", str, int]) -> "PaymentTerm":
        """Accepts the enum, a case-insensitive label ("Semiannual") or a frequency (2)."""
        if isinstance(term, cls):
            return term
        if isinstance(term, str):
            try:
                return cls[term.strip().upper()]
            except KeyError:
                raise InvalidPaymentTerm(f"Invalid payment term: {term!r}") from None
        if isinstance(term, int) and not isinstance(term, bool):
            try:
                return cls(term)
            except ValueError:
                raise InvalidPaymentTerm(f"Invalid payment term: {term!r}") from None
        raise InvalidPaymentTerm(f"Invalid payment term: {term!r}")


def periods_per_year(term: Union[PaymentTerm, str, int]) -> int:
    return PaymentTerm.parse(term).periods_per_year


@dataclass(frozen=True)
class Bond:
    """
    Fixed-rate coupon bond terms.

    coupon_rate is in basis points (600 = 6%), face_value and market_value in
    cents. market_value is the CLEAN price; accrued interest is not modelled.
    """
    isin: str
    issue_date: pd.Timestamp
    maturity_date: pd.Timestamp
    coupon_rate: int
    face_value: int
    market_value: int
    payment_term: PaymentTerm = PaymentTerm.SEMIANNUAL
    quantity: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "issue_date", pd.Timestamp(self.issue_date).normalize())
        object.__setattr__(self, "maturity_date", pd.Timestamp(self.maturity_date).normalize())
        object.__setattr__(self, "payment_term", PaymentTerm.parse(self.payment_term))

        if self.issue_date >= self.maturity_date:
            raise ValueError(f"{self.isin}: issue date must be before maturity date.")
        for name in ("coupon_rate", "face_value", "market_value", "quantity"):
            if getattr(self, name) < 0:
                raise ValueError(f"{self.isin}: {name} must be non-negative.")

    @property
    def periods_per_year(self) -> int:
        return self.payment_term.periods_per_year

    @property
    def coupon_per_period(self) -> float:
        """Coupon paid each period, in cents."""
        return self.face_value * self.coupon_rate / (BASIS_POINTS * self.periods_per_year)

    @property
    def total_market_value(self) -> int:
        """Market value of the whole holding, in cents."""
        return self.market_value * self.quantity


@dataclass(frozen=True)
class BondAnalytics:
    bond: Bond
    valuation_date: pd.Timestamp
    ytm_bps: float
    macaulay_duration: float
    modified_duration: float

    def as_dict(self) -> dict:
        return {
            "isin": self.bond.isin,
            "ytm_bps": self.ytm_bps,
            "macaulay_duration": self.macaulay_duration,
            "modified_duration": self.modified_duration,
        }
