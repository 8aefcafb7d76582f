from __future__ import annotations

import json
import logging

import httpx
import pytest
import respx

from simfin_api.domain.catalog import INDICATORS, PERIOD_TYPES, STATEMENT_TYPES
from simfin_api.domain.enums.simfin import StatementType
from simfin_api.domain.exceptions.simfin import SimFinConfigurationError
from simfin_api.infrastructure.external_apis.simfin.client import API_KEY_PARAM, SimFinClient
from simfin_api.infrastructure.external_apis.simfin.settings import SimFinSettings
from simfin_api.infrastructure.logging.logger import set_request_context

# Must match the ``settings`` fixture in tests/conftest.py.
TEST_TOKEN = "test-token"
SIMFIN_HOST = "simfin.com"


def api_path(route: str) -> str:
    return f"/api/v1/{route}"


def _query(route: respx.Route) -> dict[str, str]:
    return dict(route.calls.last.request.url.params)


# ---------------------------------------------------------------------------
# Construction and lifecycle
# ---------------------------------------------------------------------------


def test_client_requires_an_access_token() -> None:
    with pytest.raises(SimFinConfigurationError) as excinfo:
        SimFinClient(settings=SimFinSettings())
    assert excinfo.value.code == "SIMFIN_CONFIGURATION_ERROR"


def test_client_reads_token_from_settings_and_prefers_explicit_one() -> None:
    settings = SimFinSettings(api_key="from-settings")

    assert SimFinClient(settings=settings).access_token == "from-settings"
    assert SimFinClient("explicit", settings=settings).access_token == "explicit"


def test_client_token_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMFIN_API_KEY", "env-token")
    assert SimFinClient().access_token == "env-token"


def test_client_default_base_url(simfin: SimFinClient) -> None:
    assert simfin.base_url == "https://simfin.com/api/v1/"


@pytest.mark.anyio
async def test_aclose_leaves_injected_http_client_open(settings: SimFinSettings) -> None:
    async with httpx.AsyncClient() as http:
        client = SimFinClient(settings=settings, http=http)
        await client.aclose()

        assert not http.is_closed


@pytest.mark.anyio
async def test_async_context_manager_closes_owned_http_client(settings: SimFinSettings) -> None:
    async with SimFinClient(settings=settings) as client:
        owned = client._client
    assert owned.is_closed


# ---------------------------------------------------------------------------
# make_request
# ---------------------------------------------------------------------------


@pytest.mark.anyio
async def test_make_request_echo_merges_token_and_params(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    simfin.base_url = "http://echo.test"

    def _echo(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"url": str(request.url), "args": dict(request.url.params)}
        )

    simfin_http.get(host="echo.test", path="/get").mock(side_effect=_echo)

    result = await simfin.make_request("/get", "GET", {"hello": "world"})

    assert result["args"] == {"hello": "world", API_KEY_PARAM: TEST_TOKEN}
    assert result["url"].startswith("http://echo.test/get?")


@pytest.mark.anyio
async def test_make_request_without_params_sends_only_the_token(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, json=[])
    )

    await simfin.make_request("info/all-entities")

    assert _query(route) == {API_KEY_PARAM: TEST_TOKEN}


@pytest.mark.anyio
async def test_make_request_caller_param_overrides_the_token(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, json=[])
    )

    await simfin.make_request("info/all-entities", "GET", {API_KEY_PARAM: "other"})

    assert _query(route) == {API_KEY_PARAM: "other"}


@pytest.mark.anyio
async def test_make_request_forwards_correlation_headers(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, json=[])
    )
    set_request_context(request_id="req-123", trace_id="trace-abc")

    await simfin.get_all_companies()

    request = route.calls.last.request
    assert request.headers["X-Request-ID"] == "req-123"
    assert request.headers["x-trace-id"] == "trace-abc"


@pytest.mark.anyio
async def test_non_2xx_surfaces_the_http_status_error_unchanged(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    simfin_http.get(host=SIMFIN_HOST, path=api_path("companies/id/1")).mock(
        return_value=httpx.Response(404, json={"error": "not found"})
    )

    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        await simfin.get_company_data_by_id(1)

    assert excinfo.value.response.status_code == 404


@pytest.mark.anyio
async def test_transport_failure_surfaces_unchanged(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        side_effect=httpx.ConnectError("connection refused")
    )

    with pytest.raises(httpx.ConnectError):
        await simfin.get_all_companies()


@pytest.mark.anyio
async def test_malformed_json_surfaces_unchanged(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, content=b"<html>not json</html>")
    )

    with pytest.raises(json.JSONDecodeError):
        await simfin.get_all_companies()


@pytest.mark.anyio
async def test_request_log_redacts_the_token(
    simfin: SimFinClient, simfin_http: respx.MockRouter, caplog: pytest.LogCaptureFixture
) -> None:
    simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, json=[])
    )
    caplog.set_level(logging.DEBUG, logger="simfin_api")

    await simfin.get_all_companies()

    ours = [r for r in caplog.records if r.name.startswith("simfin_api")]
    [record] = [r for r in ours if r.getMessage() == "simfin.request"]
    assert record.extra["params"] == {API_KEY_PARAM: "***"}
    assert all(TEST_TOKEN not in json.dumps(getattr(r, "extra", {})) for r in ours)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


@pytest.mark.anyio
async def test_get_company_id_by_ticker(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    expected = [{"name": "APPLE INC", "simId": 111052, "ticker": "AAPL"}]
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("info/find-id/ticker/AAPL")).mock(
        return_value=httpx.Response(200, json=expected)
    )

    result = await simfin.get_company_id_by_ticker("AAPL")

    assert route.called
    assert result == expected
    assert _query(route) == {API_KEY_PARAM: TEST_TOKEN}


@pytest.mark.anyio
async def test_get_company_id_by_name(simfin: SimFinClient, simfin_http: respx.MockRouter) -> None:
    expected = [{"name": "APPLE INC", "simId": 111052, "ticker": "AAPL"}]
    route = simfin_http.get(
        host=SIMFIN_HOST, path=api_path("info/find-id/name-search/Apple")
    ).mock(return_value=httpx.Response(200, json=expected))

    assert await simfin.get_company_id_by_name("Apple") == expected
    assert route.call_count == 1


@pytest.mark.anyio
async def test_get_all_companies(simfin: SimFinClient, simfin_http: respx.MockRouter) -> None:
    expected = [{"simId": 111052, "ticker": "AAPL", "name": "APPLE INC"}]
    simfin_http.get(host=SIMFIN_HOST, path=api_path("info/all-entities")).mock(
        return_value=httpx.Response(200, json=expected)
    )

    assert await simfin.get_all_companies() == expected


@pytest.mark.anyio
async def test_get_company_data_by_id(simfin: SimFinClient, simfin_http: respx.MockRouter) -> None:
    expected = {"simId": 111052, "ticker": "AAPL", "name": "APPLE INC"}
    simfin_http.get(host=SIMFIN_HOST, path=api_path("companies/id/111052")).mock(
        return_value=httpx.Response(200, json=expected)
    )

    assert await simfin.get_company_data_by_id(111052) == expected


@pytest.mark.anyio
async def test_get_available_company_statements(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    expected = {
        "pl": [{"fyear": 2017, "period": "FY", "calculated": False}],
        "bs": [],
        "cf": [],
    }
    simfin_http.get(host=SIMFIN_HOST, path=api_path("companies/id/111052/statements/list")).mock(
        return_value=httpx.Response(200, json=expected)
    )

    result = await simfin.get_available_company_statements(111052)

    assert result == expected
    assert set(result) == {"pl", "bs", "cf"}


@pytest.mark.anyio
async def test_get_statement_data_standardised(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(
        host=SIMFIN_HOST, path=api_path("companies/id/111052/statements/standardised")
    ).mock(return_value=httpx.Response(200, json={"values": []}))

    result = await simfin.get_statement_data(111052, "pl", "FY", 2017, True)

    assert result == {"values": []}
    assert _query(route) == {
        API_KEY_PARAM: TEST_TOKEN,
        "stype": "pl",
        "ptype": "FY",
        "fyear": "2017",
    }


@pytest.mark.anyio
async def test_get_statement_data_defaults_to_original(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(
        host=SIMFIN_HOST, path=api_path("companies/id/111052/statements/original")
    ).mock(return_value=httpx.Response(200, json={"values": []}))

    await simfin.get_statement_data(111052, StatementType.CF, "TTM-1.5", 2016)

    assert _query(route) == {
        API_KEY_PARAM: TEST_TOKEN,
        "stype": "cf",
        "ptype": "TTM-1.5",
        "fyear": "2016",
    }


@pytest.mark.anyio
async def test_get_ttm_financial_ratios_with_indicators(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    expected = [{"indicatorId": "1-1", "value": "229234000000"}]
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("companies/id/111052/ratios")).mock(
        return_value=httpx.Response(200, json=expected)
    )

    result = await simfin.get_ttm_financial_ratios(111052, ["1-1", "2-1"])

    assert result == expected
    assert _query(route) == {API_KEY_PARAM: TEST_TOKEN, "indicators": "1-1,2-1"}


@pytest.mark.anyio
async def test_get_ttm_financial_ratios_without_indicators(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    route = simfin_http.get(host=SIMFIN_HOST, path=api_path("companies/id/111052/ratios")).mock(
        return_value=httpx.Response(200, json=[])
    )

    await simfin.get_ttm_financial_ratios(111052)

    assert _query(route) == {API_KEY_PARAM: TEST_TOKEN}


def test_static_reference_data_needs_no_network(
    simfin: SimFinClient, simfin_http: respx.MockRouter
) -> None:
    assert simfin.get_financial_indicators() is INDICATORS
    assert simfin.get_statement_types() == STATEMENT_TYPES
    assert simfin.get_period_types() == PERIOD_TYPES
    assert SimFinClient.get_statement_types() == ("pl", "bs", "cf")
    assert simfin_http.calls.call_count == 0
