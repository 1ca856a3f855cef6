"""
Prometheus client for the hosting platform.

Brokers instant and range queries, discovers node-exporter instances and
synthesizes the node overview board when no user-authored board exists.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Type

import httpx
import structlog

from promboard.config.settings import Settings, get_settings
from promboard.core.errors import (
    ConnectivityError,
    DiscoveryError,
    ProviderError,
    QueryError,
)
from promboard.dashboards.importer import import_board
from promboard.dashboards.models import Board, BoardIdentity
from promboard.dashboards.renderer import render_nodes_board
from promboard.metrics.models import QueryResult, TimeWindow
from promboard.metrics.step import compute_step, format_step
from promboard.providers.base import DEFAULT_TIMEOUT, ProviderHealth
from promboard.providers.proxy import ProxyQueryClient, QueryParams

logger = structlog.get_logger()

DEFAULT_USER_AGENT = "promboard-prometheus/0.1.0"

# Heartbeat series every node-exporter target reports
HEARTBEAT_SELECTOR = 'node_boot_time_seconds{cluster="", job="node-exporter"}'
INSTANCE_LABEL = "instance"
DISCOVERY_LOOKBACK = timedelta(minutes=5)


class _MalformedResponse(ValueError):
    pass


class PrometheusClient:
    """Prometheus metrics client."""

    name = "prometheus"

    def __init__(
        self,
        url: str,
        *,
        proxy: ProxyQueryClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._proxy = proxy or ProxyQueryClient(
            self._base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    async def connect(
        cls,
        url: str,
        *,
        validate: bool = True,
        **kwargs: Any,
    ) -> PrometheusClient:
        """
        Build a client, optionally probing the backend first.

        Raises:
            ConnectivityError: If ``validate`` is set and the probe fails
        """
        client = cls(url, **kwargs)
        if validate:
            await client.check_config()
        return client

    @classmethod
    async def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PrometheusClient:
        settings = settings or get_settings()
        proxy = ProxyQueryClient(
            settings.effective_proxy_url,
            mode=settings.proxy_mode,
            api_key=settings.grafana_api_key,
            datasource_id=settings.grafana_datasource_id,
            timeout=settings.http_timeout,
            transport=transport,
        )
        return await cls.connect(
            settings.prometheus_url,
            validate=settings.validate_on_connect,
            proxy=proxy,
            timeout=settings.http_timeout,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._base_url

    @property
    def proxy(self) -> ProxyQueryClient:
        return self._proxy

    async def aclose(self) -> None:
        """Close client (for symmetry with other providers)."""
        return None

    async def check_config(self) -> dict[str, Any]:
        """Fetch ``/api/v1/status/config``; raises ConnectivityError on failure."""
        return await self._request(
            "/api/v1/status/config",
            error=ConnectivityError,
            message="Unable to reach Prometheus",
            details={"url": self._base_url},
        )

    async def health_check(self) -> ProviderHealth:
        """Check if Prometheus is reachable."""
        try:
            await self.check_config()
            return ProviderHealth(status="healthy")
        except ConnectivityError as exc:
            return ProviderHealth(status="unreachable", details=str(exc))

    async def query(self, params: QueryParams) -> bytes:
        """Instant query through the proxy; returns the raw body."""
        return await self._proxy.query(params)

    async def query_range(self, params: QueryParams) -> bytes:
        """Range query through the proxy; returns the raw body."""
        return await self._proxy.query_range(params)

    def compute_step(self, start: datetime, end: datetime) -> timedelta:
        return compute_step(start, end)

    async def discover_instances(self, *, now: datetime | None = None) -> list[str]:
        """
        List instances reporting the node heartbeat over the last five minutes.

        Blank instance labels are dropped. Order follows the backend and
        repeated labels are kept.

        Raises:
            DiscoveryError: If the series query fails
        """
        window = TimeWindow.trailing(DISCOVERY_LOOKBACK, end=now)
        details = {"selector": HEARTBEAT_SELECTOR, **window.as_details()}
        params = {
            "match[]": HEARTBEAT_SELECTOR,
            "start": window.start.timestamp(),
            "end": window.end.timestamp(),
        }

        payload = await self._request(
            "/api/v1/series",
            params=params,
            error=DiscoveryError,
            message="Unable to get the label set series",
            details=details,
        )

        label_sets = payload.get("data")
        if not isinstance(label_sets, list) or not all(isinstance(ls, dict) for ls in label_sets):
            logger.error("instance_discovery_malformed", **details)
            raise DiscoveryError(
                "Series response is not a list of label sets",
                details=details,
            )

        instances = []
        for labels in label_sets:
            value = labels.get(INSTANCE_LABEL)
            if isinstance(value, str) and value.strip():
                instances.append(value)

        logger.debug("instances_discovered", count=len(instances), instances=instances)
        return instances

    async def get_static_board(self) -> Board:
        """
        Synthesize the node overview board for the live instances.

        Raises:
            DiscoveryError: If instances cannot be listed
            RenderError: If the template fails to render
            ParseError: If the rendered board does not import
        """
        instances = await self.discover_instances()
        data = render_nodes_board(instances)
        return self.import_board(data)

    def import_board(self, data: bytes | str, identity: BoardIdentity | None = None) -> Board:
        """Parse raw dashboard JSON into a Board."""
        return import_board(data, identity)

    async def query_range_using_client(
        self,
        query: str,
        window: TimeWindow,
        step: timedelta | None = None,
    ) -> QueryResult:
        """
        Run a range query directly against the backend.

        Args:
            query: PromQL expression
            window: Query window
            step: Resolution (defaults to the adaptive step for ``window``)

        Returns:
            Typed query result

        Raises:
            QueryError: On transport failure, non-2xx, or a malformed response
        """
        step = window.step() if step is None else step
        details = {"query": query, **window.as_details(), "step": str(step)}
        if step <= timedelta(0):
            logger.error("prometheus_step_invalid", **details)
            raise QueryError("Range query step must be positive", details=details)

        payload = await self._request(
            "/api/v1/query_range",
            params={
                "query": query,
                "start": window.start.timestamp(),
                "end": window.end.timestamp(),
                "step": format_step(step),
            },
            error=QueryError,
            message="Error fetching data for query",
            details=details,
        )
        return self._to_result(payload, details)

    async def query_instant(self, query: str, at: datetime | None = None) -> QueryResult:
        """
        Run an instant query directly against the backend.

        Raises:
            QueryError: On transport failure, non-2xx, or a malformed response
        """
        params: dict[str, Any] = {"query": query}
        details: dict[str, Any] = {"query": query}
        if at is not None:
            params["time"] = at.timestamp()
            details["time"] = at.isoformat()

        payload = await self._request(
            "/api/v1/query",
            params=params,
            error=QueryError,
            message="Error fetching data for query",
            details=details,
        )
        return self._to_result(payload, details)

    def _to_result(self, payload: dict[str, Any], details: dict[str, Any]) -> QueryResult:
        try:
            return QueryResult.from_api(payload)
        except ValueError as exc:
            logger.error("prometheus_result_malformed", error=str(exc), **details)
            raise QueryError(
                "Malformed query result",
                details={**details, "error": str(exc)},
            ) from exc

    async def _request(
        self,
        path: str,
        *,
        error: Type[ProviderError],
        message: str,
        details: dict[str, Any],
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GET against Prometheus, raising ``error`` on any failure."""
        url = f"{self._base_url}{path}"
        headers = {"User-Agent": self._user_agent}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params, headers=headers)
                resp.raise_for_status()
                data = resp.json()
                if not isinstance(data, dict):
                    raise _MalformedResponse("response body is not a JSON object")

                # Check Prometheus API status
                status = data.get("status")
                if status != "success":
                    raise _MalformedResponse(f"Prometheus API error: {data.get('error', 'Unknown error')}")

                return data
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error("prometheus_request_failed", url=url, status=status_code, **details)
            raise error(message, details={**details, "status": status_code}) from exc
        except httpx.TimeoutException as exc:
            logger.error("prometheus_request_timeout", url=url, **details)
            raise error(message, details={**details, "timed_out": True}) from exc
        except httpx.HTTPError as exc:
            logger.error("prometheus_request_failed", url=url, error=str(exc), **details)
            raise error(message, details={**details, "error": str(exc)}) from exc
        except ValueError as exc:
            # JSON decode failures and API-level errors
            logger.error("prometheus_response_invalid", url=url, error=str(exc), **details)
            raise error(message, details={**details, "error": str(exc)}) from exc
