from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MATURED_BOND = "MATURED_BOND"
    BOND_TOO_CLOSE_TO_MATURITY = "BOND_TOO_CLOSE_TO_MATURITY"
    YTM_NOT_MEANINGFUL = "YTM_NOT_MEANINGFUL"
    FRACTIONAL_PERIOD_ADJUSTMENT_TOO_LARGE = "FRACTIONAL_PERIOD_ADJUSTMENT_TOO_LARGE"
    NO_CASH_FLOWS_GENERATED = "NO_CASH_FLOWS_GENERATED"
    PRINCIPAL_ALIGNMENT = "PRINCIPAL_ALIGNMENT"
    INVALID_PAYMENT_TERM = "INVALID_PAYMENT_TERM"
    INVALID_ISIN_FORMAT = "INVALID_ISIN_FORMAT"
    INVALID_ISIN_CHECKSUM = "INVALID_ISIN_CHECKSUM"
    ZERO_PRESENT_VALUE = "ZERO_PRESENT_VALUE"
    INVALID_BOND_INPUT = "INVALID_BOND_INPUT"


class BondValuationError(ValueError):
    """
    Base class for deterministic valuation failures.

    Every subclass carries a `kind` tag so callers can branch on the failure
    without matching on exception types (see results.Err).
    """
    kind: ErrorKind


class MaturedBond(BondValuationError):
    kind = ErrorKind.MATURED_BOND


class BondTooCloseToMaturity(BondValuationError):
    kind = ErrorKind.BOND_TOO_CLOSE_TO_MATURITY


class YTMNotMeaningful(BondValuationError):
    kind = ErrorKind.YTM_NOT_MEANINGFUL


class FractionalPeriodAdjustmentTooLarge(BondValuationError):
    kind = ErrorKind.FRACTIONAL_PERIOD_ADJUSTMENT_TOO_LARGE


class NoCashFlowsGenerated(BondValuationError):
    kind = ErrorKind.NO_CASH_FLOWS_GENERATED


class PrincipalAlignmentError(BondValuationError):
    kind = ErrorKind.PRINCIPAL_ALIGNMENT


class InvalidPaymentTerm(BondValuationError):
    kind = ErrorKind.INVALID_PAYMENT_TERM


class InvalidISINFormat(BondValuationError):
    kind = ErrorKind.INVALID_ISIN_FORMAT


class InvalidISINChecksum(BondValuationError):
    kind = ErrorKind.INVALID_ISIN_CHECKSUM


class ZeroPresentValue(BondValuationError):
    kind = ErrorKind.ZERO_PRESENT_VALUE


class InvalidBondInput(BondValuationError):
    kind = ErrorKind.INVALID_BOND_INPUT
