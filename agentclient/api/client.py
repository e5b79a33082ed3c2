"""
HTTP transport for the agent API.

Responsibility: Issue GET (query) and PUT (write) requests against an agent's
HTTP API with httpx, decode the JSON body and collect response metadata.
Callers get TransportError for every way the exchange can fail.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

import httpx

from agentclient.core.config import NOMAD_ADDR, NOMAD_HTTP_TIMEOUT, NOMAD_REGION, NOMAD_TOKEN, TOKEN_HEADER
from agentclient.core.errors import TransportError

if TYPE_CHECKING:
    from agentclient.api.agent import Agent

logger = logging.getLogger(__name__)

Params = Sequence[tuple[str, str]]


@dataclass
class QueryOptions:
    """Per-request options for read requests."""

    region: str = ""
    allow_stale: bool = False
    params: Params = field(default_factory=list)


@dataclass
class WriteOptions:
    """Per-request options for write requests."""

    region: str = ""
    params: Params = field(default_factory=list)


@dataclass
class QueryMeta:
    """Metadata returned with a read response."""

    last_index: int = 0
    last_contact_ms: int = 0
    known_leader: bool = False
    request_time: float = 0.0


@dataclass
class WriteMeta:
    """Metadata returned with a write response."""

    last_index: int = 0
    request_time: float = 0.0


def _header_int(headers: httpx.Headers, name: str) -> int:
    try:
        return int(headers.get(name, "0"))
    except ValueError:
        return 0


class Client:
    """
    Thin wrapper over httpx.Client bound to one agent address.

    Pass http_client to reuse an existing httpx.Client; requests then go to its
    base_url, so address must not be given as well. Otherwise one is created
    and closed by close().
    """

    def __init__(
        self,
        address: str | None = None,
        region: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        if http_client is not None:
            if address is not None:
                raise ValueError("pass either address or http_client, not both")
            address = str(http_client.base_url)
        self.address = (address or NOMAD_ADDR).rstrip("/")
        self.region = NOMAD_REGION if region is None else region
        self.token = NOMAD_TOKEN if token is None else token
        self.timeout = timeout if timeout is not None else NOMAD_HTTP_TIMEOUT
        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.Client(base_url=self.address, timeout=self.timeout)
        self._http = http_client

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying httpx.Client if this client created it."""
        if self._owns_http:
            self._http.close()

    def agent(self) -> "Agent":
        """Return a new Agent handle for the agent-specific endpoints."""
        from agentclient.api.agent import Agent

        return Agent(self)

    def query(self, path: str, options: QueryOptions | None = None) -> tuple[Any, QueryMeta]:
        """GET path and return (decoded JSON body, QueryMeta)."""
        options = options or QueryOptions()
        params = self._params(options.region, options.params)
        if options.allow_stale:
            params.append(("stale", ""))
        start = time.monotonic()
        response = self._do("GET", path, params)
        meta = QueryMeta(
            last_index=_header_int(response.headers, "X-Nomad-Index"),
            last_contact_ms=_header_int(response.headers, "X-Nomad-LastContact"),
            known_leader=response.headers.get("X-Nomad-KnownLeader", "") == "true",
            request_time=time.monotonic() - start,
        )
        return self._decode(response), meta

    def write(
        self, path: str, body: Any = None, options: WriteOptions | None = None
    ) -> tuple[Any, WriteMeta]:
        """PUT path with an optional JSON body and return (decoded JSON body, WriteMeta)."""
        options = options or WriteOptions()
        params = self._params(options.region, options.params)
        start = time.monotonic()
        response = self._do("PUT", path, params, body)
        meta = WriteMeta(
            last_index=_header_int(response.headers, "X-Nomad-Index"),
            request_time=time.monotonic() - start,
        )
        return self._decode(response), meta

    def _params(self, region: str, extra: Params) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        region = region or self.region
        if region:
            params.append(("region", region))
        params.extend(extra)
        return params

    def _do(self, method: str, path: str, params: list[tuple[str, str]], body: Any = None) -> httpx.Response:
        headers = {TOKEN_HEADER: self.token} if self.token else {}
        kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if body is not None:
            kwargs["json"] = body
        logger.info("[client:%s] IN  path=%s params=%d", method.lower(), path, len(params))
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("[client:%s] request failed path=%s: %s", method.lower(), path, e)
            raise TransportError(str(e)) from e
        if not response.is_success:
            raise TransportError(
                f"Unexpected response code: {response.status_code} ({response.text.strip()})",
                status_code=response.status_code,
            )
        logger.info("[client:%s] OUT path=%s status=%d", method.lower(), path, response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"failed to decode response body: {e}", status_code=response.status_code) from e
