# src/simfin_api/domain/validation.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin parameter validation.

Purpose:
    Check caller-supplied SimFin parameters against declarative per-field
    constraints before any request is built. Two composite schemas cover the
    statement and TTM-ratio endpoints; the remaining endpoints validate a
    single field.

Layer:
    domain

Design:
    * Field rules are pydantic ``Annotated`` types collected in
      :data:`PARAMETER_TYPES`; composite schemas are frozen pydantic models
      built from the same types, so both stay consistent.
    * Validation is synchronous, side-effect free and never mutates input.
    * Every failure is raised as :class:`SimFinValidationError` listing each
      offending field, never as a raw pydantic error.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Final

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from simfin_api.domain.catalog import PERIOD_TYPES, STATEMENT_TYPES
from simfin_api.domain.exceptions.simfin import SimFinValidationError

MIN_FISCAL_YEAR: Final[int] = 1900
MAX_FISCAL_YEAR: Final[int] = 2018

TICKER_PATTERN: Final[str] = r"^[A-Za-z0-9]+$"
INDICATOR_PATTERN: Final[str] = r"^[0-4]-[0-9]{1,2}$"
TTM_PERIOD_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"TTM(-[0-9]{1,2}(\.(0|25|5|50|75))?)?"
)


def _enum_to_value(value: Any) -> Any:
    """Unwrap enum members so ``StatementType.PL`` validates as ``"pl"``."""
    if isinstance(value, Enum):
        return value.value
    return value


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; a flag is never a valid id or year.
    if isinstance(value, bool):
        raise ValueError("must be a number, not a boolean")
    return value


def _check_statement_type(value: str) -> str:
    if value not in STATEMENT_TYPES:
        raise ValueError(f"must be one of {', '.join(STATEMENT_TYPES)}")
    return value


def _check_period_type(value: str) -> str:
    if value in PERIOD_TYPES or TTM_PERIOD_PATTERN.fullmatch(value):
        return value
    raise ValueError(
        f"must be one of {', '.join(PERIOD_TYPES)} or match TTM[-offset[.fraction]]"
    )


def _check_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Ticker = Annotated[str, StringConstraints(min_length=2, max_length=10, pattern=TICKER_PATTERN)]
CompanyId = Annotated[int, BeforeValidator(_reject_bool)]
CompanyName = Annotated[str, AfterValidator(_check_not_blank)]
IndicatorCode = Annotated[str, StringConstraints(pattern=INDICATOR_PATTERN)]
Indicators = list[IndicatorCode]
StatementTypeCode = Annotated[
    str, BeforeValidator(_enum_to_value), AfterValidator(_check_statement_type)
]
PeriodTypeCode = Annotated[str, BeforeValidator(_enum_to_value), AfterValidator(_check_period_type)]
FiscalYear = Annotated[
    int,
    BeforeValidator(_reject_bool),
    Field(ge=MIN_FISCAL_YEAR, le=MAX_FISCAL_YEAR),
]

#: Per-field rules keyed by the parameter name used on the client methods.
PARAMETER_TYPES: Final[Mapping[str, Any]] = MappingProxyType(
    {
        "ticker": Ticker,
        "company_id": CompanyId,
        "name": CompanyName,
        "indicators": Indicators,
        "statement_type": StatementTypeCode,
        "period_type": PeriodTypeCode,
        "fiscal_year": FiscalYear,
    }
)

_ADAPTERS: Final[Mapping[str, TypeAdapter[Any]]] = MappingProxyType(
    {name: TypeAdapter(tp) for name, tp in PARAMETER_TYPES.items()}
)


class StatementRequest(BaseModel):
    """Validated arguments of a statement-data request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    company_id: CompanyId
    statement_type: StatementTypeCode
    period_type: PeriodTypeCode
    fiscal_year: FiscalYear


class TTMRatiosRequest(BaseModel):
    """Validated arguments of a TTM financial-ratios request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    company_id: CompanyId
    indicators: Indicators | None = None


def _violations(exc: ValidationError, *, field: str | None = None) -> list[dict[str, Any]]:
    """Flatten a pydantic error into ``{field, message, type}`` entries."""
    out: list[dict[str, Any]] = []
    for err in exc.errors(include_url=False):
        loc = [str(part) for part in err.get("loc", ())]
        if field is not None:
            loc = [field, *loc]
        out.append(
            {
                "field": ".".join(loc) or "<root>",
                "message": err.get("msg", "invalid value"),
                "type": err.get("type", "value_error"),
            }
        )
    return out


def _validation_error(violations: list[dict[str, Any]]) -> SimFinValidationError:
    names = sorted({v["field"].split(".", 1)[0] for v in violations})
    return SimFinValidationError(
        f"Invalid SimFin parameter(s): {', '.join(names)}.",
        details={"violations": violations},
    )


def validate_parameter(name: str, value: Any) -> Any:
    """Validate a single parameter against its declared rule.

    Args:
        name: Parameter name, one of :data:`PARAMETER_TYPES`.
        value: Caller-supplied value.

    Returns:
        The validated (possibly normalized) value.

    Raises:
        KeyError: If ``name`` has no declared rule.
        SimFinValidationError: If the value violates the rule.
    """
    adapter = _ADAPTERS[name]
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise _validation_error(_violations(exc, field=name)) from exc


def validate_ticker(ticker: Any) -> str:
    """Validate a ticker: ASCII alphanumeric, 2 to 10 characters."""
    return validate_parameter("ticker", ticker)


def validate_company_id(company_id: Any) -> int:
    """Validate a SimFin company id and return it as an ``int``."""
    return validate_parameter("company_id", company_id)


def validate_company_name(name: Any) -> str:
    """Validate a free-text company name used for name search."""
    return validate_parameter("name", name)


def validate_statement_request(
    company_id: Any,
    statement_type: Any,
    period_type: Any,
    fiscal_year: Any,
) -> StatementRequest:
    """Validate the arguments of a statement-data request.

    All four fields are required; every violation is reported at once.

    Returns:
        The validated request with plain-string statement and period codes.

    Raises:
        SimFinValidationError: If any field is missing or invalid.
    """
    try:
        return StatementRequest(
            company_id=company_id,
            statement_type=statement_type,
            period_type=period_type,
            fiscal_year=fiscal_year,
        )
    except ValidationError as exc:
        raise _validation_error(_violations(exc)) from exc


def validate_ttm_ratios_request(company_id: Any, indicators: Any = None) -> TTMRatiosRequest:
    """Validate the arguments of a TTM financial-ratios request.

    ``indicators`` is optional; when given it must be a sequence of codes
    matching ``{0-4}-{0-99}``.

    Raises:
        SimFinValidationError: If the company id or any indicator is invalid.
    """
    try:
        return TTMRatiosRequest(company_id=company_id, indicators=indicators)
    except ValidationError as exc:
        raise _validation_error(_violations(exc)) from exc
