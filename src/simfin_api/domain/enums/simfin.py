# src/simfin_api/domain/enums/simfin.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin statement and period type enumerations.

Purpose:
    Give callers typed names for the statement and fixed period codes the
    SimFin statements endpoints accept.

Layer:
    domain

Notes:
    - Members are ``str`` subclasses, so ``StatementType.PL == "pl"`` and
      they can be passed anywhere a plain code is accepted.
    - Trailing-twelve-months periods (``TTM``, ``TTM-1``, ``TTM-2.5``...) are
      open-ended and therefore validated by pattern, not enumerated here.
"""

from __future__ import annotations

from enum import Enum


class StatementType(str, Enum):
    """Financial statement kinds."""

    PL = "pl"  # profit and loss
    BS = "bs"  # balance sheet
    CF = "cf"  # cash flow


class PeriodType(str, Enum):
    """Fixed fiscal reporting periods."""

    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    H1 = "H1"
    H2 = "H2"
    NINE_MONTHS = "9M"
    FULL_YEAR = "FY"
