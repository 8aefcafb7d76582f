# src/simfin_api/domain/catalog.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Static SimFin reference tables.

Purpose:
    Hold the statement types, period types and indicator catalog the SimFin
    API understands. These are served to callers without any network call.

Layer:
    domain

Notes:
    - Every table is immutable (tuples and ``MappingProxyType``) and built
      once at import time; concurrent readers need no synchronization.
    - Indicator codes follow ``{category}-{index}``; see
      :data:`INDICATOR_CATEGORIES` for the category names.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from simfin_api.domain.enums.simfin import PeriodType, StatementType

STATEMENT_TYPES: Final[tuple[str, ...]] = tuple(t.value for t in StatementType)
PERIOD_TYPES: Final[tuple[str, ...]] = tuple(p.value for p in PeriodType)

INDICATOR_CATEGORIES: Final[Mapping[int, str]] = MappingProxyType(
    {
        0: "General company information",
        1: "Income statement",
        2: "Balance sheet",
        3: "Cash flow statement",
        4: "Derived ratios and metrics",
    }
)

INDICATORS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0-3": "Number of employees",
        "0-5": "Founding year",
        "0-6": "Headquarter location",
        "0-73": "Sector classification",
        "0-71": "Ticker",
        "0-31": "Last closing price",
        "4-11": "Market capitalisation",
        "0-64": "Common shares outstanding",
        "0-65": "Preferred shares outstanding",
        "0-66": "Average shares outstanding, basic",
        "0-67": "Average shares outstanding, diluted",
        "1-1": "Revenues",
        "1-2": "Cost of goods sold",
        "1-4": "Gross profit",
        "1-11": "Operating expenses",
        "1-12": "Selling, general and administrative",
        "1-15": "Research and development expenses",
        "1-19": "Operating income (EBIT)",
        "4-10": "EBITDA",
        "1-21": "Net interest expense",
        "1-28": "Pretax income (adjusted)",
        "1-43": "Pretax income",
        "1-44": "Income taxes",
        "1-49": "Income from continuing operations",
        "1-58": "Net income (common shareholders)",
        "2-1": "Cash and cash-equivalents",
        "2-5": "Net receivables",
        "2-21": "Total current assets",
        "2-22": "Net property, plant and equipment",
        "2-41": "Total assets",
        "2-43": "Accounts payable",
        "2-47": "Current debt",
        "2-57": "Total current liabilities",
        "2-58": "Non current debt",
        "4-6": "Total debt",
        "2-73": "Total liabilities",
        "2-74": "Preferred equity",
        "2-76": "Common stock",
        "2-82": "Equity before minorities",
        "2-83": "Minority interest",
        "3-2": "Depreciation and amortisation",
        "3-7": "Change in working capital",
        "3-13": "Operating cash flow",
        "3-14": "Net change in PP & E and intangibles",
        "3-31": "Investing cash flow",
        "3-32": "Dividends paids",
        "3-43": "Financing cash flow",
        "3-46": "Net change in cash",
        "4-25": "Free cash flow",
        "4-0": "Gross margin",
        "4-1": "Operating margin",
        "4-2": "Net profit margin",
        "4-7": "Return on equity",
        "4-9": "Return on assets",
        "4-28": "Free cash flow to net income",
        "4-3": "Current ratio",
        "4-4": "Liabilities to equity ratio",
        "4-5": "Debt to assets ratio",
        "4-12": "Earnings per share, basic",
        "4-13": "Earnings per share, diluted",
        "4-17": "Sales per share",
        "4-18": "Book value per share",
        "4-26": "Free cash flow per share",
        "4-29": "Dividends per share",
        "4-14": "Price to earnings ratio",
        "4-15": "Price to sales ratio",
        "4-16": "Price to book value",
        "4-27": "Price to free cash flow",
        "4-20": "Enterprise value",
        "4-21": "EV/EBITDA",
        "4-22": "EV/Sales",
        "4-31": "EV/FCF",
        "4-23": "Book to market value",
        "4-24": "Operating income / EV",
        "4-30": "Pietroski F-Score",
    }
)


def indicator_category(code: str) -> str:
    """Return the category name of an indicator code.

    Args:
        code: Indicator code such as ``"1-1"``.

    Returns:
        The category name, e.g. ``"Income statement"``.

    Raises:
        KeyError: If the code is not part of :data:`INDICATORS`.
    """
    if code not in INDICATORS:
        raise KeyError(code)
    return INDICATOR_CATEGORIES[int(code.split("-", 1)[0])]


def indicators_in_category(category: int) -> dict[str, str]:
    """Return the indicators of one category, in catalog order."""
    prefix = f"{category}-"
    return {code: desc for code, desc in INDICATORS.items() if code.startswith(prefix)}
