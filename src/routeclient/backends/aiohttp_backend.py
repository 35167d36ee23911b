from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Protocol

import aiohttp

from ..errors import TransportError


class AiohttpResponseProtocol(Protocol):
    status: int
    headers: Mapping[str, str]

    async def read(self) -> bytes: ...

    async def __aenter__(self) -> "AiohttpResponseProtocol": ...

    async def __aexit__(self, *_: object) -> None: ...


class AiohttpSessionProtocol(Protocol):
    def request(self, *, method: str, url: str, **kwargs: object) -> AiohttpResponseProtocol: ...


class AiohttpBackend:
    def __init__(self, session: AiohttpSessionProtocol) -> None:
        self._session = session

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
            "data": body,
        }
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)
        try:
            async with self._session.request(method=method, url=url, **kwargs) as response:
                data = await response.read()
                return response.status, {str(k): str(v) for k, v in response.headers.items()}, data
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{method} {url} failed: {exc!r}", kind="connection") from exc
