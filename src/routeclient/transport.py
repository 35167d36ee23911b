"""Transport layer between finalized requests and an HTTP backend.

:class:`HttpTransport` turns a :class:`~routeclient.builder.Request` into a
backend call and classifies the outcome. Anything that is not a usable
response (connection failure, non-2xx status, a non-JSON payload where JSON
was requested) surfaces as :class:`~routeclient.errors.TransportError`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .builder import Request, ResponseFormat
from .config import ClientConfig
from .errors import TransportError

logger = logging.getLogger(__name__)

ACCEPT = {
    ResponseFormat.JSON: "application/json",
    ResponseFormat.TEXT: "text/plain;charset=utf-8",
}


@dataclass(frozen=True)
class Response:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class Transport(Protocol):
    async def execute(self, request: Request) -> Response:
        """Perform one exchange, raising TransportError on failure."""
        ...


class AsyncBackend(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        headers: Sequence[tuple[str, str]] | None,
        body: bytes | None,
        timeout: float | None,
    ) -> tuple[int, dict[str, str], bytes]: ...


class HttpTransport:
    """Transport over any :class:`AsyncBackend`.

    Example:
        >>> import httpx
        >>> from routeclient.backends import HttpxBackend
        >>> transport = HttpTransport(
        ...     HttpxBackend(httpx.AsyncClient()),
        ...     ClientConfig(base_url="http://localhost:8000"),
        ... )
    """

    def __init__(self, backend: AsyncBackend, config: ClientConfig | None = None) -> None:
        self._backend = backend
        self._config = config or ClientConfig()

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def execute(self, request: Request) -> Response:
        url = f"{self._config.base_url.rstrip('/')}{request.url}"
        headers = build_headers(request, self._config.headers)
        body = request.body.payload if request.body is not None else None
        logger.debug("%s %s", request.method, url)
        status, response_headers, data = await self._backend.request(
            request.method,
            url,
            headers,
            body,
            self._config.timeout,
        )
        logger.debug("%s %s -> %d", request.method, url, status)
        return classify_response(request, Response(status=status, headers=response_headers, body=data))


def build_headers(request: Request, defaults: Mapping[str, str]) -> list[tuple[str, str]]:
    """Merge default headers, the Accept header and the request's own headers.

    Headers declared by the route win over defaults of the same name.
    """
    declared = {name.lower() for name, _ in request.headers}
    headers = [(name, value) for name, value in defaults.items() if name.lower() not in declared]
    if "accept" not in declared and not any(name.lower() == "accept" for name, _ in headers):
        headers.append(("Accept", ACCEPT[request.response_format]))
    headers.extend(request.headers)
    return headers


def classify_response(request: Request, response: Response) -> Response:
    if not 200 <= response.status < 300:
        raise TransportError(
            f"{request.method} {request.url} returned status {response.status}",
            kind="status",
            status=response.status,
            body=response.body,
        )
    if request.response_format is ResponseFormat.JSON:
        content_type = response.header("content-type")
        if content_type is not None and "json" not in content_type.lower():
            raise TransportError(
                f"expected a JSON response, got content type {content_type!r}",
                kind="content_type",
                status=response.status,
                body=response.body,
            )
    return response
