from __future__ import annotations

import re
from datetime import datetime
from typing import Mapping, Optional

import pandas as pd

from .bonds import Bond, PaymentTerm
from .errors import InvalidBondInput
from .isin import validate_isin

DATE_FMT = "%Y-%m-%d"
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_WHOLE_NUMBER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


def parse_date(value: Optional[str], field_name: str) -> pd.Timestamp:
    """Strict YYYY-MM-DD."""
    if value is None or value == "":
        raise InvalidBondInput(f"Invalid {field_name}: date cannot be null or empty")
    if not _DATE_RE.match(value):
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Date must be in YYYY-MM-DD format")
    try:
        return pd.Timestamp(datetime.strptime(value, DATE_FMT))
    except ValueError:
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Date must be in YYYY-MM-DD format") from None


def parse_whole_number(value: Optional[str], field_name: str, allow_zero: bool = True) -> int:
    """
    Parse an integer amount (cents, bps or units) given as a string.

    Decimals and thousands separators are rejected rather than rounded.
    """
    if value is None or value == "":
        raise InvalidBondInput(f"Invalid {field_name}: value cannot be null or empty")
    if "." in value:
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Value must be a whole number without decimals")
    if "," in value:
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Value must not contain commas")
    # int() alone would also take "1_000" and " 100000 "
    if not _WHOLE_NUMBER_RE.fullmatch(value):
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Value must be a valid integer")
    parsed = int(value)

    if parsed < 0:
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Value must be non-negative")
    if parsed == 0 and not allow_zero:
        raise InvalidBondInput(f"Invalid {field_name}: {value}. Value must be a positive integer")
    return parsed


def parse_bond_record(record: Mapping[str, Optional[str]]) -> Bond:
    """
    Build a Bond from a request record of strings, e.g.

        {"isin": "US0378331005", "issueDate": "2024-01-01", "maturityDate": "2034-01-01",
         "couponRate": "600", "faceValue": "100000", "marketValue": "98000",
         "paymentTerm": "Semiannual", "quantity": "10"}
    """
    isin = validate_isin(record.get("isin"))
    issue_date = parse_date(record.get("issueDate"), "issueDate")
    maturity_date = parse_date(record.get("maturityDate"), "maturityDate")
    face_value = parse_whole_number(record.get("faceValue"), "faceValue")
    market_value = parse_whole_number(record.get("marketValue"), "marketValue")
    coupon_rate = parse_whole_number(record.get("couponRate"), "couponRate")
    quantity = parse_whole_number(record.get("quantity"), "quantity", allow_zero=False)
    payment_term = PaymentTerm.parse(record.get("paymentTerm") or "")

    if issue_date >= maturity_date:
        raise InvalidBondInput(f"Invalid maturityDate: {maturity_date.date()} must be after issueDate {issue_date.date()}")

    return Bond(
        isin=isin,
        issue_date=issue_date,
        maturity_date=maturity_date,
        coupon_rate=coupon_rate,
        face_value=face_value,
        market_value=market_value,
        payment_term=payment_term,
        quantity=quantity,
    )
