# config.py
# Purpose: Central constants for the valuation engine plus an opt-in logging setup

from __future__ import annotations

import logging
import os
from typing import Optional, Union

# Day count: actual calendar days over a 365.25-day year (only convention supported)
DAYS_PER_YEAR = 365.25
MONTHS_PER_YEAR = 12

# Rates are carried in basis points, money in integer cents
BASIS_POINTS = 10_000.0

# Portfolio defaults
DEFAULT_ACCOUNT_ID = "default-account"

# Logging
LOG_LEVEL_ENV = "BOND_ENGINE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Configure root logging for applications embedding the engine.

    The library modules only create loggers; call this from an entry point.
    Falls back to $BOND_ENGINE_LOG_LEVEL, then WARNING.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
