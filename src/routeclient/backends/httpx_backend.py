from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

import httpx

from ..errors import TransportError


class HttpxResponseProtocol(Protocol):
    status_code: int
    headers: Mapping[str, str]
    content: bytes


class HttpxAsyncClientProtocol(Protocol):
    async def request(self, method: str, url: str, **kwargs: object) -> HttpxResponseProtocol: ...


class HttpxBackend:
    def __init__(self, client: HttpxAsyncClientProtocol) -> None:
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        headers: Sequence[tuple[str, str]] | None,
        body: bytes | None,
        timeout: float | None,
    ) -> tuple[int, dict[str, str], bytes]:
        kwargs: dict[str, object] = {
            "headers": list(headers) if headers is not None else None,
            "content": body,
        }
        if timeout is not None:
            # None would disable the timeout configured on the client
            kwargs["timeout"] = timeout
        try:
            response = await self._client.request(method=method, url=url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}", kind="connection") from exc
        return response.status_code, {str(k): str(v) for k, v in response.headers.items()}, response.content
