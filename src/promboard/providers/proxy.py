"""
Pass-through query client.

Forwards instant and range queries to an intermediary that knows how to
reach the metrics backend, either a Prometheus-compatible API or Grafana's
datasource proxy, and hands the response body back untouched.
"""

from __future__ import annotations

from typing import Any, Mapping, Union

import httpx
import structlog

from promboard.config.settings import ProxyMode
from promboard.core.errors import QueryError
from promboard.providers.base import DEFAULT_TIMEOUT, ProviderHealth

logger = structlog.get_logger()

DEFAULT_USER_AGENT = "promboard-proxy/0.1.0"

QueryParams = Union[Mapping[str, Any], str, httpx.QueryParams]

# Routing key for the Grafana datasource proxy; never forwarded
DATASOURCE_PARAM = "dsid"

RANGE_PARAMS = ("start", "end", "step")


class ProxyQueryClient:
    """Query pass-through via Prometheus or the Grafana datasource proxy."""

    name = "proxy"

    def __init__(
        self,
        url: str,
        *,
        mode: ProxyMode = ProxyMode.PROMETHEUS,
        api_key: str | None = None,
        datasource_id: int | str = 1,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = url.rstrip("/")
        self._mode = ProxyMode(mode)
        self._api_key = api_key
        self._datasource_id = str(datasource_id)
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport

    @property
    def mode(self) -> ProxyMode:
        return self._mode

    async def aclose(self) -> None:
        return None

    async def health_check(self) -> ProviderHealth:
        try:
            await self.query({"query": "vector(1)"})
            return ProviderHealth(status="healthy")
        except QueryError as exc:
            return ProviderHealth(status="unreachable", details=str(exc))

    async def query(self, params: QueryParams) -> bytes:
        """
        Forward an instant query.

        Args:
            params: URL-encoded parameter set; ``query`` is required

        Returns:
            Raw response body
        """
        qp = _normalize(params)
        _require(qp, ("query",))
        return await self._forward("query", qp)

    async def query_range(self, params: QueryParams) -> bytes:
        """
        Forward a range query.

        Args:
            params: URL-encoded parameter set; ``query``, ``start``, ``end``
                and ``step`` are required

        Returns:
            Raw response body
        """
        qp = _normalize(params)
        _require(qp, ("query",) + RANGE_PARAMS)
        return await self._forward("query_range", qp)

    def endpoint_path(self, endpoint: str, datasource_id: str | None = None) -> str:
        if self._mode is ProxyMode.GRAFANA:
            dsid = datasource_id or self._datasource_id
            return f"/api/datasources/proxy/{dsid}/api/v1/{endpoint}"
        return f"/api/v1/{endpoint}"

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self._user_agent}
        if self._mode is ProxyMode.GRAFANA and self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _forward(self, endpoint: str, params: httpx.QueryParams) -> bytes:
        path = self.endpoint_path(endpoint, params.get(DATASOURCE_PARAM))
        forwarded = params.remove(DATASOURCE_PARAM)
        url = f"{self._base_url}{path}"
        context = _context(forwarded)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url, params=forwarded, headers=self._headers())
                resp.raise_for_status()
                return resp.content
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("proxy_query_failed", url=url, status=status, **context)
            raise QueryError(
                f"Proxy returned HTTP {status}",
                details={**context, "status": status},
            ) from exc
        except httpx.TimeoutException as exc:
            logger.error("proxy_query_timeout", url=url, **context)
            raise QueryError(
                "Proxy query timed out",
                details={**context, "timed_out": True},
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("proxy_query_failed", url=url, error=str(exc), **context)
            raise QueryError(
                "Unable to reach query proxy",
                details={**context, "error": str(exc)},
            ) from exc


def _normalize(params: QueryParams | None) -> httpx.QueryParams:
    if params is None:
        logger.error("proxy_query_rejected", missing="query")
        raise QueryError("Query parameters are required", details={"missing": "query"})
    return httpx.QueryParams(params)


def _require(params: httpx.QueryParams, names: tuple[str, ...]) -> None:
    missing = [name for name in names if not params.get(name, "").strip()]
    if missing:
        context = _context(params)
        logger.error("proxy_query_rejected", missing=",".join(missing), **context)
        raise QueryError(
            "Missing query parameters",
            details={"missing": ",".join(missing), **context},
        )


def _context(params: httpx.QueryParams) -> dict[str, str]:
    return {key: params[key] for key in ("query",) + RANGE_PARAMS if key in params}
