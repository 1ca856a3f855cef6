"""
Integration tests against the fake backend.

The FastAPI app from tests/mock_server.py is mounted in-process through
httpx.ASGITransport, so no server needs to be running.

To run against a live fake instead:
    1. Start mock server: python -m tests.mock_server
    2. Export PROMBOARD_PROMETHEUS_URL=http://localhost:8001
"""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from mock_server import DEFAULT_INSTANCES, GRAFANA_API_KEY, STATE, app
from promboard.config.settings import ProxyMode, Settings
from promboard.core.errors import QueryError
from promboard.dashboards.templates.nodes import NODES_BOARD_TITLE
from promboard.metrics.models import TimeWindow
from promboard.providers.prometheus import PrometheusClient

BASE_URL = "http://testserver"

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def reset_state():
    STATE["instances"] = list(DEFAULT_INSTANCES)
    STATE["requests"] = []
    yield


@pytest.fixture
def transport():
    return httpx.ASGITransport(app=app)


def _settings(**overrides):
    values = {
        "prometheus_url": BASE_URL,
        "proxy_mode": ProxyMode.GRAFANA,
        "grafana_api_key": GRAFANA_API_KEY,
        "grafana_datasource_id": 1,
    }
    values.update(overrides)
    return Settings(**values)


def _paths():
    return [r["path"] for r in STATE["requests"]]


@pytest.mark.asyncio
async def test_from_settings_probes_config(transport):
    await PrometheusClient.from_settings(_settings(), transport=transport)
    assert _paths() == ["/api/v1/status/config"]


@pytest.mark.asyncio
async def test_from_settings_without_probe(transport):
    await PrometheusClient.from_settings(_settings(validate_on_connect=False), transport=transport)
    assert _paths() == []


@pytest.mark.asyncio
async def test_discover_instances(transport):
    client = await PrometheusClient.from_settings(_settings(), transport=transport)

    assert await client.discover_instances() == DEFAULT_INSTANCES

    series_call = STATE["requests"][-1]
    assert series_call["path"] == "/api/v1/series"
    assert ("match[]", 'node_boot_time_seconds{cluster="", job="node-exporter"}') in series_call["params"]


@pytest.mark.asyncio
async def test_static_board_for_live_instances(transport):
    client = await PrometheusClient.from_settings(_settings(), transport=transport)

    board = await client.get_static_board()

    assert board.title == NODES_BOARD_TITLE
    assert len(board.panels) == 12 * len(DEFAULT_INSTANCES)
    assert board.panels[-1].title.endswith(DEFAULT_INSTANCES[-1])


@pytest.mark.asyncio
async def test_static_board_with_no_instances(transport):
    STATE["instances"] = []
    client = await PrometheusClient.from_settings(_settings(), transport=transport)

    board = await client.get_static_board()

    assert board.panels == []


@pytest.mark.asyncio
async def test_grafana_proxy_passthrough(transport):
    client = await PrometheusClient.from_settings(_settings(), transport=transport)

    body = await client.query({"query": "up", "time": "1714564800"})

    payload = json.loads(body)
    assert payload["data"]["resultType"] == "vector"
    assert len(payload["data"]["result"]) == len(DEFAULT_INSTANCES)

    proxied = STATE["requests"][-1]
    assert proxied["path"] == "/api/datasources/proxy/1/api/v1/query"
    assert proxied["authorization"] == f"Bearer {GRAFANA_API_KEY}"


@pytest.mark.asyncio
async def test_grafana_proxy_rejects_bad_key(transport):
    client = await PrometheusClient.from_settings(_settings(grafana_api_key="wrong"), transport=transport)

    with pytest.raises(QueryError) as exc_info:
        await client.query({"query": "up"})

    assert exc_info.value.details["status"] == 401


@pytest.mark.asyncio
async def test_grafana_proxy_unknown_datasource(transport):
    client = await PrometheusClient.from_settings(_settings(), transport=transport)

    with pytest.raises(QueryError) as exc_info:
        await client.query({"query": "up", "dsid": "42"})

    assert exc_info.value.details["status"] == 404


@pytest.mark.asyncio
async def test_prometheus_proxy_range_passthrough(transport):
    settings = _settings(proxy_mode=ProxyMode.PROMETHEUS, grafana_api_key=None)
    client = await PrometheusClient.from_settings(settings, transport=transport)

    body = await client.query_range({"query": "up", "start": "0", "end": "60", "step": "20s"})

    series = json.loads(body)["data"]["result"]
    assert [len(s["values"]) for s in series] == [4, 4, 4]
    assert STATE["requests"][-1]["path"] == "/api/v1/query_range"
    assert STATE["requests"][-1]["authorization"] is None


@pytest.mark.asyncio
async def test_direct_range_query_uses_adaptive_step(transport):
    client = await PrometheusClient.from_settings(_settings(), transport=transport)
    end = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
    window = TimeWindow.trailing(timedelta(hours=1), end=end)

    result = await client.query_range_using_client("up", window)

    assert len(result) == len(DEFAULT_INSTANCES)
    assert len(result.series[0].samples) == 181
    assert result.series[0].samples[0].timestamp == window.start
    assert ("step", "20s") in STATE["requests"][-1]["params"]
