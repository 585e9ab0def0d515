import numpy as np
import pandas as pd
import pytest

from bond_valuation_engine.bonds import Bond, PaymentTerm
from bond_valuation_engine.errors import MaturedBond
from bond_valuation_engine.portfolio import (
    HOLDING_COLUMNS,
    analyze_holdings,
    analyze_portfolio,
    bond_weight,
    weighted_average,
)
from bond_valuation_engine.valuation import analyze_bond


@pytest.fixture(scope="module")
def val_date():
    return pd.Timestamp("2025-03-15")


@pytest.fixture(scope="module")
def bonds():
    """
    Deterministic mini-book: short/long, annual to monthly, one zero-quantity line.
    """
    return [
        Bond("US0378331005", "2020-01-01", "2027-01-01", 400, 100000, 99000, PaymentTerm.SEMIANNUAL, 10),
        Bond("AU0000XVGZA3", "2021-06-15", "2036-06-15", 550, 100000, 101500, PaymentTerm.ANNUAL, 5),
        Bond("GB0002634946", "2024-02-01", "2029-02-01", 300, 50000, 48000, PaymentTerm.QUARTERLY, 20),
        Bond("DE0000000000", "2023-01-31", "2033-01-31", 0, 100000, 70000, PaymentTerm.MONTHLY, 0),
    ]


def test_weighted_average():
    assert weighted_average([2.0, 4.0], [1.0, 3.0]) == pytest.approx(3.5)
    assert weighted_average([2.0, 4.0], [0.0, 0.0]) == 0.0
    assert weighted_average([], []) == 0.0


def test_bond_weight():
    assert bond_weight(250, 1000) == 0.25
    assert bond_weight(0, 1000) == 0.0
    assert bond_weight(250, 0) == 0.0


def test_holdings_frame(bonds, val_date):
    holdings = analyze_holdings(bonds, val_date)
    assert list(holdings.columns) == HOLDING_COLUMNS
    assert len(holdings) == len(bonds)
    assert holdings["weight"].sum() == pytest.approx(1.0)
    assert holdings.loc[holdings["quantity"] == 0, "weight"].eq(0.0).all(), "Zero-quantity line carries no weight"
    assert np.isfinite(holdings[["ytm_bps", "macaulay_duration", "modified_duration"]].to_numpy()).all()


def test_holdings_match_single_bond_analysis(bonds, val_date):
    holdings = analyze_holdings(bonds, val_date)
    for bond, (_, row) in zip(bonds, holdings.iterrows()):
        single = analyze_bond(bond, val_date)
        assert row["isin"] == bond.isin
        assert row["ytm_bps"] == pytest.approx(single.ytm_bps)
        assert row["macaulay_duration"] == pytest.approx(single.macaulay_duration)


def test_portfolio_summary(bonds, val_date):
    pa = analyze_portfolio(bonds, val_date, account_id="acct-1")
    h = pa.holdings

    assert pa.account_id == "acct-1"
    assert pa.total_portfolio_value == 99000 * 10 + 101500 * 5 + 48000 * 20
    assert h["macaulay_duration"].min() <= pa.weighted_macaulay_duration <= h["macaulay_duration"].max()
    assert pa.weighted_modified_duration < pa.weighted_macaulay_duration

    expected = float((h["macaulay_duration"] * h["total_market_value"]).sum() / h["total_market_value"].sum())
    assert pa.weighted_macaulay_duration == pytest.approx(expected)

    summary = pa.summary()
    assert summary["id"] == str(pa.id)
    assert summary["total_portfolio_value"] == pa.total_portfolio_value


def test_portfolio_ids_unique(bonds, val_date):
    assert analyze_portfolio(bonds[:1], val_date).id != analyze_portfolio(bonds[:1], val_date).id


def test_empty_portfolio(val_date):
    pa = analyze_portfolio([], val_date)
    assert pa.total_portfolio_value == 0
    assert pa.weighted_macaulay_duration == 0.0
    assert pa.weighted_modified_duration == 0.0
    assert pa.holdings.empty


def test_failing_bond_fails_portfolio(bonds):
    with pytest.raises(MaturedBond):
        analyze_portfolio(bonds, pd.Timestamp("2028-01-01"))
