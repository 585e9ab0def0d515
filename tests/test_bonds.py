import dataclasses

import pandas as pd
import pytest

from bond_valuation_engine.bonds import Bond, PaymentTerm, periods_per_year
from bond_valuation_engine.errors import (
    BondValuationError,
    ErrorKind,
    InvalidPaymentTerm,
    MaturedBond,
    YTMNotMeaningful,
)
from bond_valuation_engine.results import Err, Ok, try_call
from bond_valuation_engine.valuation import BondValuer, analyze_bond
from bond_valuation_engine.ytm import approximate_ytm


@pytest.fixture(scope="module")
def val_date():
    return pd.Timestamp("2025-01-01")


@pytest.fixture(scope="module")
def bond():
    return Bond(
        isin="US0378331005",
        issue_date="2020-01-01",
        maturity_date="2030-01-01",
        coupon_rate=600,
        face_value=100000,
        market_value=98000,
        payment_term="Semiannual",
        quantity=10,
    )


@pytest.mark.parametrize(
    "label, expected",
    [
        ("annual", PaymentTerm.ANNUAL),
        ("Semiannual", PaymentTerm.SEMIANNUAL),
        ("QUARTERLY", PaymentTerm.QUARTERLY),
        (" monthly ", PaymentTerm.MONTHLY),
        (12, PaymentTerm.MONTHLY),
        (PaymentTerm.ANNUAL, PaymentTerm.ANNUAL),
    ],
)
def test_payment_term_parse(label, expected):
    assert PaymentTerm.parse(label) is expected


@pytest.mark.parametrize("label", ["biweekly", "", 3, True, None, 2.0])
def test_payment_term_parse_rejects(label):
    with pytest.raises(InvalidPaymentTerm):
        PaymentTerm.parse(label)


def test_periods_per_year():
    assert [periods_per_year(t) for t in ("annual", "semiannual", "quarterly", "monthly")] == [1, 2, 4, 12]


def test_bond_normalises_inputs(bond):
    assert bond.issue_date == pd.Timestamp("2020-01-01")
    assert isinstance(bond.maturity_date, pd.Timestamp)
    assert bond.payment_term is PaymentTerm.SEMIANNUAL
    assert bond.periods_per_year == 2
    assert bond.coupon_per_period == 3000.0
    assert bond.total_market_value == 980000


def test_bond_is_immutable(bond):
    with pytest.raises(dataclasses.FrozenInstanceError):
        bond.market_value = 1


def test_bond_rejects_inverted_dates():
    with pytest.raises(ValueError):
        Bond("TEST-ISIN", "2030-01-01", "2020-01-01", 600, 100000, 100000)
    with pytest.raises(ValueError):
        Bond("TEST-ISIN", "2030-01-01", "2030-01-01", 600, 100000, 100000)


@pytest.mark.parametrize("field", ["coupon_rate", "face_value", "market_value", "quantity"])
def test_bond_rejects_negative_amounts(field):
    kwargs = dict(coupon_rate=600, face_value=100000, market_value=100000, quantity=1)
    kwargs[field] = -1
    with pytest.raises(ValueError):
        Bond("TEST-ISIN", "2020-01-01", "2030-01-01", **kwargs)


def test_bond_rejects_unknown_payment_term():
    with pytest.raises(InvalidPaymentTerm):
        Bond("TEST-ISIN", "2024-01-01", "2034-01-01", 600, 100000, 100000, payment_term="biweekly")


def test_analyze_bond(bond, val_date):
    result = analyze_bond(bond, val_date)
    assert result.bond is bond
    assert result.valuation_date == val_date
    assert result.ytm_bps == pytest.approx(approximate_ytm(bond, val_date))
    assert result.ytm_bps > 600.0, "Discount bond should yield above its coupon"
    assert 0 < result.modified_duration < result.macaulay_duration < 5.0
    assert set(result.as_dict()) == {"isin", "ytm_bps", "macaulay_duration", "modified_duration"}


def test_valuer_pins_valuation_date(bond):
    valuer = BondValuer("2025-01-01 15:30")
    assert valuer.valuation_date == pd.Timestamp("2025-01-01")
    assert valuer.analyze(bond).valuation_date == pd.Timestamp("2025-01-01")


def test_valuer_defaults_to_today():
    assert BondValuer().valuation_date == pd.Timestamp.today().normalize()


def test_errors_carry_kind():
    assert MaturedBond.kind is ErrorKind.MATURED_BOND
    assert issubclass(YTMNotMeaningful, BondValuationError)
    assert issubclass(BondValuationError, ValueError)


def test_try_call_ok(bond, val_date):
    result = try_call(analyze_bond, bond, val_date)
    assert isinstance(result, Ok)
    assert result.is_ok
    assert result.value.ytm_bps > 0


def test_try_call_err_on_maturity_day(bond):
    result = try_call(approximate_ytm, bond, bond.maturity_date)
    assert isinstance(result, Err)
    assert not result.is_ok
    assert result.kind is ErrorKind.YTM_NOT_MEANINGFUL
    assert "matures today" in result.message


def test_try_call_err_on_matured(bond):
    result = try_call(analyze_bond, bond, pd.Timestamp("2031-01-01"))
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.MATURED_BOND


def test_try_call_lets_other_errors_through():
    def broken():
        raise KeyError("not a valuation error")

    with pytest.raises(KeyError):
        try_call(broken)
