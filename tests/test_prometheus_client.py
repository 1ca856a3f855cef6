"""Tests for the Prometheus client.

Covers the reachability probe, instance discovery, board synthesis and the
direct range query.
"""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import respx
from httpx import Response
from promboard.core.errors import (
    ConnectivityError,
    DiscoveryError,
    ParseError,
    QueryError,
    RenderError,
)
from promboard.metrics.models import TimeWindow
from promboard.providers.base import Provider
from promboard.providers.prometheus import (
    DEFAULT_USER_AGENT,
    HEARTBEAT_SELECTOR,
    PrometheusClient,
)
from structlog.testing import capture_logs

PROM_URL = "http://prometheus.example.com:9090"
NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class HangingTransport(httpx.AsyncBaseTransport):
    """Never answers; only a caller deadline ends the request."""

    async def handle_async_request(self, request):
        await asyncio.sleep(10)
        return Response(200, json=series_response())


@pytest.fixture
def client():
    return PrometheusClient(PROM_URL, timeout=5.0)


def series_response(*instances):
    return {
        "status": "success",
        "data": [
            {"__name__": "node_boot_time_seconds", "job": "node-exporter", "instance": inst}
            for inst in instances
        ],
    }


@pytest.fixture
def matrix_response():
    base = 1714564800
    return {
        "status": "success",
        "data": {
            "resultType": "matrix",
            "result": [
                {
                    "metric": {"instance": "10.0.0.1:9100"},
                    "values": [[base, "0.5"], [base + 20, "0.75"]],
                }
            ],
        },
    }


class TestInit:
    def test_strips_trailing_slash(self):
        client = PrometheusClient(PROM_URL + "/")
        assert client.url == PROM_URL

    def test_default_proxy_targets_backend(self):
        client = PrometheusClient(PROM_URL)
        assert client.proxy.endpoint_path("query") == "/api/v1/query"

    def test_satisfies_provider_interface(self):
        client = PrometheusClient(PROM_URL)
        assert isinstance(client, Provider)
        assert isinstance(client.proxy, Provider)


class TestConnect:
    @pytest.mark.asyncio
    async def test_connect_probes_config(self):
        with respx.mock:
            route = respx.get(f"{PROM_URL}/api/v1/status/config").mock(
                return_value=Response(200, json={"status": "success", "data": {"yaml": ""}})
            )

            client = await PrometheusClient.connect(PROM_URL)

            assert isinstance(client, PrometheusClient)
            assert route.call_count == 1
            assert route.calls.last.request.headers["User-Agent"] == DEFAULT_USER_AGENT

    @pytest.mark.asyncio
    async def test_connect_without_validation_makes_no_request(self):
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(f"{PROM_URL}/api/v1/status/config")
            await PrometheusClient.connect(PROM_URL, validate=False)
            assert route.call_count == 0

    @pytest.mark.asyncio
    async def test_connect_fails_on_http_error(self):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/status/config").mock(return_value=Response(503))

            with pytest.raises(ConnectivityError) as exc_info:
                await PrometheusClient.connect(PROM_URL)

            assert exc_info.value.details["status"] == 503
            assert exc_info.value.details["url"] == PROM_URL

    @pytest.mark.asyncio
    async def test_connect_fails_when_unreachable(self):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/status/config").mock(
                side_effect=httpx.ConnectError("connection refused")
            )

            with pytest.raises(ConnectivityError):
                await PrometheusClient.connect(PROM_URL)

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/status/config").mock(
                side_effect=[
                    Response(200, json={"status": "success", "data": {}}),
                    Response(500),
                ]
            )

            healthy = await client.health_check()
            unhealthy = await client.health_check()

        assert healthy.is_healthy
        assert unhealthy.status == "unreachable"
        assert "500" in unhealthy.details


class TestDiscoverInstances:
    @pytest.mark.asyncio
    async def test_queries_heartbeat_series(self, client):
        with respx.mock:
            route = respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response("10.0.0.1:9100"))
            )

            await client.discover_instances(now=NOW)

            params = route.calls.last.request.url.params
            assert params["match[]"] == HEARTBEAT_SELECTOR
            assert float(params["end"]) == NOW.timestamp()
            assert float(params["start"]) == (NOW - timedelta(minutes=5)).timestamp()

    @pytest.mark.asyncio
    async def test_returns_instances_in_backend_order(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response("b:9100", "a:9100", "c:9100"))
            )

            assert await client.discover_instances(now=NOW) == ["b:9100", "a:9100", "c:9100"]

    @pytest.mark.asyncio
    async def test_blank_labels_filtered_duplicates_kept(self, client):
        payload = series_response("a:9100", "", "   ", "a:9100")
        payload["data"].append({"__name__": "node_boot_time_seconds"})

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(return_value=Response(200, json=payload))

            assert await client.discover_instances(now=NOW) == ["a:9100", "a:9100"]

    @pytest.mark.asyncio
    async def test_zero_instances_is_not_an_error(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response())
            )

            assert await client.discover_instances(now=NOW) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            Response(500, text="internal error"),
            Response(200, text="<html>not json</html>"),
            Response(200, json={"status": "error", "error": "bad match[]"}),
            Response(200, json={"status": "success", "data": {"not": "a list"}}),
            Response(200, json={"status": "success", "data": ["a:9100"]}),
            Response(200, json=["unexpected"]),
        ],
    )
    async def test_failures_raise_discovery_error(self, client, response):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(return_value=response)

            with pytest.raises(DiscoveryError) as exc_info:
                await client.discover_instances(now=NOW)

            assert exc_info.value.details["selector"] == HEARTBEAT_SELECTOR
            assert exc_info.value.details["end"] == NOW.isoformat()

    @pytest.mark.asyncio
    async def test_timeout_raises_discovery_error(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(side_effect=httpx.ReadTimeout("slow"))

            with pytest.raises(DiscoveryError) as exc_info:
                await client.discover_instances(now=NOW)

            assert exc_info.value.details["timed_out"] is True
            assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)

    @pytest.mark.asyncio
    async def test_deadline_cancels_discovery(self):
        client = PrometheusClient(PROM_URL, transport=HangingTransport())

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(client.discover_instances(now=NOW), timeout=0.05)


class TestGetStaticBoard:
    @pytest.mark.asyncio
    async def test_board_for_discovered_instances(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response("10.0.0.1:9100", "10.0.0.2:9100"))
            )

            board = await client.get_static_board()

        assert board.title == "Kubernetes / Nodes"
        assert board.slug == "kubernetes-nodes"
        assert len(board.panels) == 24
        assert board.panels[0].title == "System load - 10.0.0.1:9100"
        assert board.panels[12].title == "System load - 10.0.0.2:9100"

    @pytest.mark.asyncio
    async def test_board_without_instances(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response())
            )

            board = await client.get_static_board()

        assert board.panels == []
        assert board.uri == "db/kubernetes-nodes"

    @pytest.mark.asyncio
    async def test_board_for_instance_with_lone_surrogate(self, client):
        body = b'{"status": "success", "data": [{"instance": "a\\ud800:1"}]}'

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(return_value=Response(200, content=body))

            board = await client.get_static_board()

        assert len(board.panels) == 12
        assert board.panels[0].title == "System load - a\ud800:1"

    @pytest.mark.asyncio
    async def test_discovery_failure_stops_rendering(self, client, monkeypatch):
        rendered = []
        monkeypatch.setattr(
            "promboard.providers.prometheus.render_nodes_board",
            lambda instances: rendered.append(instances) or b"{}",
        )

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(return_value=Response(502))

            with pytest.raises(DiscoveryError):
                await client.get_static_board()

        assert rendered == []

    @pytest.mark.asyncio
    async def test_render_error_propagates(self, client, monkeypatch):
        def broken(instances):
            raise RenderError("Unable to render dashboard template", details={"template": "nodes_board"})

        monkeypatch.setattr("promboard.providers.prometheus.render_nodes_board", broken)

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/series").mock(
                return_value=Response(200, json=series_response("a:9100"))
            )

            with pytest.raises(RenderError):
                await client.get_static_board()

    def test_import_board_parse_error(self, client):
        with pytest.raises(ParseError):
            client.import_board(b'{"panels": []}')


class TestQueryRangeUsingClient:
    @pytest.mark.asyncio
    async def test_typed_result(self, client, matrix_response):
        window = TimeWindow(NOW - timedelta(hours=1), NOW)

        with respx.mock:
            route = respx.get(f"{PROM_URL}/api/v1/query_range").mock(
                return_value=Response(200, json=matrix_response)
            )

            result = await client.query_range_using_client("avg(node_load1)", window)

            params = route.calls.last.request.url.params
            assert params["query"] == "avg(node_load1)"
            assert params["step"] == "20s"
            assert float(params["start"]) == window.start.timestamp()
            assert float(params["end"]) == window.end.timestamp()

        assert result.result_type == "matrix"
        assert [s.value for s in result.series[0].samples] == [0.5, 0.75]

    @pytest.mark.asyncio
    async def test_explicit_step(self, client, matrix_response):
        window = TimeWindow(NOW - timedelta(days=2), NOW)

        with respx.mock:
            route = respx.get(f"{PROM_URL}/api/v1/query_range").mock(
                return_value=Response(200, json=matrix_response)
            )

            await client.query_range_using_client("up", window, step=timedelta(minutes=5))

            assert route.calls.last.request.url.params["step"] == "5m"

    @pytest.mark.asyncio
    async def test_non_positive_step_rejected(self, client):
        window = TimeWindow(NOW - timedelta(hours=1), NOW)

        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(f"{PROM_URL}/api/v1/query_range")

            with capture_logs() as logs, pytest.raises(QueryError):
                await client.query_range_using_client("up", window, step=timedelta(0))

            assert route.call_count == 0

        assert [log["event"] for log in logs] == ["prometheus_step_invalid"]
        assert logs[0]["query"] == "up"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            Response(400, json={"status": "error", "errorType": "bad_data", "error": "parse error"}),
            Response(200, json={"status": "error", "error": "query timed out"}),
            Response(200, text="garbage"),
            Response(200, json={"status": "success", "data": {"resultType": "matrix", "result": 3}}),
        ],
    )
    async def test_errors_carry_query_context(self, client, response):
        window = TimeWindow(NOW - timedelta(minutes=30), NOW)

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/query_range").mock(return_value=response)

            with pytest.raises(QueryError) as exc_info:
                await client.query_range_using_client("rate(x[5m])", window)

        details = exc_info.value.details
        assert details["query"] == "rate(x[5m])"
        assert details["start"] == window.start.isoformat()
        assert details["end"] == window.end.isoformat()
        assert details["step"] == str(timedelta(seconds=10))
        assert "rate(x[5m])" in str(exc_info.value)


class TestQueryInstant:
    @pytest.mark.asyncio
    async def test_vector_result(self, client):
        payload = {
            "status": "success",
            "data": {"resultType": "vector", "result": [{"metric": {"job": "node"}, "value": [1, "3"]}]},
        }

        with respx.mock:
            route = respx.get(f"{PROM_URL}/api/v1/query").mock(return_value=Response(200, json=payload))

            result = await client.query_instant("count(up)", at=NOW)

            assert float(route.calls.last.request.url.params["time"]) == NOW.timestamp()

        assert result.series[0].metric == {"job": "node"}
        assert result.series[0].samples[0].value == 3.0

    @pytest.mark.asyncio
    async def test_network_error(self, client):
        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/query").mock(side_effect=httpx.ConnectError("refused"))

            with pytest.raises(QueryError) as exc_info:
                await client.query_instant("up")

        assert exc_info.value.details["query"] == "up"


class TestProxyDelegation:
    @pytest.mark.asyncio
    async def test_query_passes_body_through(self, client):
        body = json.dumps({"status": "success", "data": {"resultType": "vector", "result": []}}).encode()

        with respx.mock:
            respx.get(f"{PROM_URL}/api/v1/query").mock(return_value=Response(200, content=body))

            assert await client.query({"query": "up"}) == body

    def test_compute_step(self, client):
        assert client.compute_step(NOW, NOW + timedelta(hours=3)) == timedelta(minutes=1)
