"""Immutable request accumulator.

A :class:`RequestBuilder` collects path segments, query pairs, headers and an
optional body while the compiler descends a route schema. Every operation
returns a new builder; nothing is ever modified in place, so one builder can
be shared by any number of in-flight calls.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

Pair = tuple[str, str]


class ResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class Body:
    payload: bytes
    media_type: str | None


@dataclass(frozen=True)
class Request:
    """Transport-ready request descriptor.

    Attributes:
        method: HTTP method exactly as declared by the schema leaf
        url: ``/``-rooted path plus query string, values not escaped
        headers: Accumulated headers, newest first
        body: Request payload, if the route declared one
        response_format: How the transport should treat the response
    """

    method: str
    url: str
    headers: tuple[Pair, ...]
    body: Body | None
    response_format: ResponseFormat

    def header(self, name: str) -> str | None:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


@dataclass(frozen=True)
class RequestBuilder:
    path: tuple[str, ...] = ()
    query: tuple[Pair, ...] = ()
    headers: tuple[Pair, ...] = ()
    body: Body | None = None

    @classmethod
    def empty(cls) -> "RequestBuilder":
        return cls()

    def append_segment(self, segment: str) -> RequestBuilder:
        return replace(self, path=self.path + (segment,))

    def append_query_param(self, name: str, value: str) -> RequestBuilder:
        return replace(self, query=self.query + ((name, value),))

    def append_header(self, name: str, value: str) -> RequestBuilder:
        return replace(self, headers=((name, value),) + self.headers)

    def append_content(self, payload: bytes, media_type: str | None) -> RequestBuilder:
        # Only the latest body survives, and only its Content-Type header.
        headers = tuple(item for item in self.headers if item[0].lower() != "content-type")
        if media_type is not None:
            headers = (("Content-Type", media_type),) + headers
        return replace(self, headers=headers, body=Body(payload=payload, media_type=media_type))

    def url(self) -> str:
        url = "/" + "/".join(self.path)
        if self.query:
            url += "?" + "&".join(f"{name}={value}" for name, value in self.query)
        return url

    def finalize(self, method: str, response_format: ResponseFormat = ResponseFormat.JSON) -> Request:
        return Request(
            method=method,
            url=self.url(),
            headers=self.headers,
            body=self.body,
            response_format=response_format,
        )
