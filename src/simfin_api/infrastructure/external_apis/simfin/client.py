# src/simfin_api/infrastructure/external_apis/simfin/client.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin Client: validate, build, fetch.

Each public coroutine follows the same three steps:

* Validate caller arguments against the declared parameter rules; a
  violation raises :class:`SimFinValidationError` and no request is sent.
* Build a :class:`RequestDescriptor` (route + query parameters).
* Hand it to :meth:`SimFinClient.make_request`, which injects the access
  token, issues the GET through ``httpx`` and returns the parsed JSON body.

Transport behaviour:
    * Caller-facing transport failures are httpx's own exceptions
      (``httpx.HTTPStatusError`` for non-2xx, ``httpx.RequestError`` for
      network errors) and ``json.JSONDecodeError`` for malformed bodies.
      Nothing is retried, wrapped or cached.
    * Correlation ids set through ``set_request_context`` are forwarded as
      ``X-Request-ID`` / ``x-trace-id`` headers.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping, Sequence
from types import TracebackType
from typing import Any, Final, TypeVar

import httpx

from simfin_api.domain.catalog import INDICATORS, PERIOD_TYPES, STATEMENT_TYPES
from simfin_api.domain.exceptions.simfin import SimFinConfigurationError, SimFinValidationError
from simfin_api.domain.validation import (
    validate_company_id,
    validate_company_name,
    validate_statement_request,
    validate_ticker,
    validate_ttm_ratios_request,
)
from simfin_api.infrastructure.external_apis.simfin import routes
from simfin_api.infrastructure.external_apis.simfin.routes import RequestDescriptor
from simfin_api.infrastructure.external_apis.simfin.settings import SimFinSettings
from simfin_api.infrastructure.external_apis.simfin.types import (
    AvailableStatements,
    CompanyData,
    CompanyEntity,
    CompanyIdMatch,
    RatioValue,
)
from simfin_api.infrastructure.logging.logger import (
    get_json_logger,
    get_request_id,
    get_trace_id,
)
from simfin_api.infrastructure.observability.metrics_simfin import (
    get_simfin_errors_total,
    get_simfin_http_status_total,
    get_simfin_request_latency_seconds,
    get_simfin_validation_rejections_total,
)

logger = get_json_logger(__name__)

API_KEY_PARAM: Final[str] = "api-key"

_T = TypeVar("_T")


def _redact(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``params`` safe to log."""
    return {k: ("***" if k == API_KEY_PARAM else v) for k, v in params.items()}


class SimFinClient:
    """Async client for the SimFin v1 REST API."""

    def __init__(
        self,
        access_token: str | None = None,
        *,
        settings: SimFinSettings | None = None,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: SimFin API key. Falls back to ``settings.api_key``
                (``SIMFIN_API_KEY``) when omitted.
            settings: Client settings; loaded from the environment if omitted.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            timeout_s: Optional timeout override for the owned client.

        Raises:
            SimFinConfigurationError: If no access token is available.
        """
        self._settings = settings or SimFinSettings()

        token = access_token
        if token is None and self._settings.api_key is not None:
            token = self._settings.api_key.get_secret_value()
        if not token:
            raise SimFinConfigurationError(
                "SimFin access token required. Pass access_token or set SIMFIN_API_KEY.",
                details={"env": "SIMFIN_API_KEY"},
            )
        self._token: str = token

        # Writable so tests can point the client at another host.
        self.base_url: str = self._settings.base_url

        self._timeout = float(timeout_s if timeout_s is not None else self._settings.timeout_s)
        headers = {"Accept": "application/json", "User-Agent": self._settings.user_agent}

        # An injected client keeps its own headers and timeout.
        self._owns_http = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout, headers=headers)

        self._latency = get_simfin_request_latency_seconds()
        self._status_total = get_simfin_http_status_total()
        self._errors = get_simfin_errors_total()
        self._rejections = get_simfin_validation_rejections_total()

    @property
    def access_token(self) -> str:
        """The access token injected into every request."""
        return self._token

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_http and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> SimFinClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Request execution
    # ------------------------------------------------------------------ #

    async def make_request(
        self,
        route: str,
        method: str = routes.GET,
        params: Mapping[str, Any] | None = None,
        *,
        endpoint: str = "raw",
    ) -> Any:
        """Send one request and return the parsed JSON body.

        The query string is the access token under ``api-key`` with ``params``
        merged on top, so a caller parameter named ``api-key`` replaces the
        token. The URL is ``base_url + route`` with no normalization.

        Args:
            route: Path appended to :attr:`base_url`.
            method: HTTP method; every SimFin operation uses ``GET``.
            params: Extra query parameters.
            endpoint: Logical endpoint name used as a metrics label.

        Returns:
            The parsed JSON value (object or array).

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.RequestError: On network or timeout failures.
            json.JSONDecodeError: If the body is not valid JSON.
        """
        query: dict[str, Any] = {API_KEY_PARAM: self._token}
        if params:
            query.update(params)

        url = f"{self.base_url}{route}"

        headers: dict[str, str] = {}
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if trace_id:
            headers["x-trace-id"] = trace_id

        logger.debug(
            "simfin.request",
            extra={
                "extra": {
                    "method": method,
                    "route": route,
                    "endpoint": endpoint,
                    "params": _redact(query),
                }
            },
        )

        start = time.perf_counter()
        error_reason: str | None = None
        try:
            response = await self._client.request(method, url, params=query, headers=headers)
            self._status_total.labels(endpoint=endpoint, status=str(response.status_code)).inc()
            response.raise_for_status()
            return response.json()
        except Exception as exc:
            error_reason = type(exc).__name__
            logger.warning(
                "simfin.request_failed",
                extra={"extra": {"endpoint": endpoint, "route": route, "reason": error_reason}},
            )
            raise
        finally:
            elapsed = time.perf_counter() - start
            outcome = "error" if error_reason else "success"
            self._latency.labels(endpoint=endpoint, outcome=outcome).observe(elapsed)
            if error_reason:
                self._errors.labels(endpoint=endpoint, reason=error_reason).inc()

    async def _send(self, request: RequestDescriptor, *, endpoint: str) -> Any:
        return await self.make_request(
            request.route, request.method, request.params, endpoint=endpoint
        )

    def _validated(self, operation: str, validator: Callable[..., _T], *args: Any) -> _T:
        """Run ``validator`` and record a rejection before re-raising."""
        try:
            return validator(*args)
        except SimFinValidationError as exc:
            self._rejections.labels(operation=operation).inc()
            logger.info(
                "simfin.validation_rejected",
                extra={"extra": {"operation": operation, "violations": exc.violations}},
            )
            raise

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def get_company_id_by_ticker(self, ticker: str) -> list[CompanyIdMatch]:
        """Return the SimFin id matches for a ticker (e.g. ``"AAPL"``).

        Raises:
            SimFinValidationError: If the ticker is not 2-10 alphanumerics.
        """
        ticker = self._validated("get_company_id_by_ticker", validate_ticker, ticker)
        return await self._send(routes.company_id_by_ticker(ticker), endpoint="find_id_ticker")

    async def get_company_id_by_name(self, name: str) -> list[CompanyIdMatch]:
        """Return the SimFin id matches for a company name search (e.g. ``"Apple"``)."""
        name = self._validated("get_company_id_by_name", validate_company_name, name)
        return await self._send(routes.company_id_by_name(name), endpoint="find_id_name")

    async def get_all_companies(self) -> list[CompanyEntity]:
        """Return every entity SimFin covers."""
        return await self._send(routes.all_companies(), endpoint="all_entities")

    async def get_company_data_by_id(self, company_id: int) -> CompanyData:
        """Return general company data for a SimFin id."""
        company_id = self._validated("get_company_data_by_id", validate_company_id, company_id)
        return await self._send(routes.company_data(company_id), endpoint="company")

    async def get_available_company_statements(self, company_id: int) -> AvailableStatements:
        """Return the available ``pl``/``bs``/``cf`` statement periods for a company."""
        company_id = self._validated(
            "get_available_company_statements", validate_company_id, company_id
        )
        return await self._send(
            routes.available_statements(company_id), endpoint="statements_list"
        )

    async def get_statement_data(
        self,
        company_id: int,
        statement_type: str,
        period_type: str,
        fiscal_year: int,
        standardised: bool = False,
    ) -> dict[str, Any]:
        """Return one statement of a company.

        Args:
            company_id: SimFin company id.
            statement_type: ``pl``, ``bs`` or ``cf``.
            period_type: ``Q1``-``Q4``, ``H1``, ``H2``, ``9M``, ``FY``, ``TTM``
                or ``TTM-{offset}``.
            fiscal_year: Fiscal year between 1900 and 2018.
            standardised: Fetch the standardised instead of the original
                statement.

        Raises:
            SimFinValidationError: If any of the four fields is invalid.
        """
        request = self._validated(
            "get_statement_data",
            validate_statement_request,
            company_id,
            statement_type,
            period_type,
            fiscal_year,
        )
        return await self._send(
            routes.statement_data(
                request.company_id,
                request.statement_type,
                request.period_type,
                request.fiscal_year,
                standardised=standardised,
            ),
            endpoint="statements_standardised" if standardised else "statements_original",
        )

    async def get_ttm_financial_ratios(
        self, company_id: int, indicators: Sequence[str] | None = None
    ) -> list[RatioValue]:
        """Return TTM financial ratios, optionally restricted to indicator codes.

        Raises:
            SimFinValidationError: If the id or any indicator code is invalid.
        """
        request = self._validated(
            "get_ttm_financial_ratios", validate_ttm_ratios_request, company_id, indicators
        )
        return await self._send(
            routes.ttm_financial_ratios(request.company_id, request.indicators),
            endpoint="ratios",
        )

    # ------------------------------------------------------------------ #
    # Static reference data (no network)
    # ------------------------------------------------------------------ #

    @staticmethod
    def get_financial_indicators() -> Mapping[str, str]:
        """Return the read-only indicator code to description mapping."""
        return INDICATORS

    @staticmethod
    def get_statement_types() -> tuple[str, ...]:
        """Return the statement type codes."""
        return STATEMENT_TYPES

    @staticmethod
    def get_period_types() -> tuple[str, ...]:
        """Return the fixed period type codes (TTM variants are pattern based)."""
        return PERIOD_TYPES
