"""
ISIN (International Securities Identification Number) validation.

An ISIN is 12 characters:
- 2-letter country code (ISO 3166-1 alpha-2)
- 9-character alphanumeric NSIN (National Securities Identifying Number)
- 1 check digit, Luhn (mod 10) over the letter-expanded digit string
"""
from __future__ import annotations

import re
import string
from typing import Optional

from .errors import InvalidISINChecksum, InvalidISINFormat

ISIN_LENGTH = 12

_ISIN_RE = re.compile(r"^[A-Z]{2}[A-Z0-9]{9}[0-9]$")
_LETTERS = set(string.ascii_uppercase)
_ALNUM = set(string.ascii_uppercase + string.digits)


def is_valid_country_code(country_code: Optional[str]) -> bool:
    if country_code is None or len(country_code) != 2:
        return False
    return all(c in _LETTERS for c in country_code.upper())


def is_valid_nsin(nsin: Optional[str]) -> bool:
    if nsin is None or len(nsin) != 9:
        return False
    return all(c in _ALNUM for c in nsin.upper())


def convert_to_digits(isin: str) -> str:
    """
    Expand letters to two-digit numbers (A=10 ... Z=35); digits pass through.

    Any other character is dropped.
    """
    out = []
    for c in isin.upper():
        if c in string.digits:
            out.append(c)
        elif c in _LETTERS:
            out.append(str(ord(c) - ord("A") + 10))
    return "".join(out)


def luhn_remainder(digits: str) -> int:
    """
    Luhn sum mod 10 of a digit string; 0 means the string checks.

    Scanning from the right, position 1 (the check digit) is not doubled,
    positions 2, 4, 6, ... are; a doubled digit above 9 has 9 subtracted.
    """
    total = 0
    for pos, ch in enumerate(reversed(digits), start=1):
        d = int(ch)
        if pos % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % 10


def validate_checksum(isin: str) -> bool:
    return luhn_remainder(convert_to_digits(isin)) == 0


def has_valid_format(isin: Optional[str]) -> bool:
    if not isinstance(isin, str) or len(isin) != ISIN_LENGTH:
        return False
    return _ISIN_RE.match(isin.upper()) is not None


def is_valid_isin(isin: Optional[str]) -> bool:
    """Format and checksum check, case-insensitive. Never raises."""
    return has_valid_format(isin) and validate_checksum(isin.upper())


def validate_isin(isin: Optional[str]) -> str:
    """Like is_valid_isin but raises; returns the upper-cased ISIN."""
    if not has_valid_format(isin):
        raise InvalidISINFormat(f"Invalid ISIN format: {isin!r}")
    upper = isin.upper()
    if not validate_checksum(upper):
        raise InvalidISINChecksum(f"Invalid ISIN checksum: {isin!r}")
    return upper


def calculate_check_digit(isin_without_check_digit: str) -> int:
    if not isinstance(isin_without_check_digit, str) or len(isin_without_check_digit) != ISIN_LENGTH - 1:
        raise InvalidISINFormat("ISIN without check digit must be 11 characters")

    remainder = luhn_remainder(convert_to_digits(isin_without_check_digit.upper() + "0"))
    return (10 - remainder) % 10


def generate_isin(isin_without_check_digit: str) -> str:
    """Append the check digit to an 11-character ISIN stem."""
    check_digit = calculate_check_digit(isin_without_check_digit)
    return isin_without_check_digit.upper() + str(check_digit)
