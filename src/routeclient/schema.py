"""Route schema algebra.

A route schema is a tree of the node kinds defined here. Path-building nodes
(:class:`Literal`, :class:`Capture`, ...) carry a ``next`` node;
:class:`Alternative` chains name sibling branches; :class:`Method` ends a
route. Example::

    api = alternatives(
        list=path("widgets", QueryParam("limit", Get(list[Widget]), type=int)),
        get=path("widgets", Capture("id", Get(Widget), type=int)),
        create=path("widgets", ReqBody(JSON, Post(Widget), type=NewWidget)),
    )

The schema is pure data; :func:`validate_schema` checks it against its
structural contract before it is compiled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .builder import ResponseFormat
from .content import JSON, CodecRegistry, ContentType
from .errors import SchemaError


@dataclass(frozen=True)
class Resource:
    methods: RouteNode


@dataclass(frozen=True)
class Alternative:
    name: str
    branch: RouteNode
    rest: RouteNode


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Literal:
    segment: str
    next: RouteNode


@dataclass(frozen=True)
class Capture:
    name: str
    next: RouteNode
    type: Any = str


@dataclass(frozen=True)
class CaptureAll:
    name: str
    next: RouteNode
    type: Any = str


@dataclass(frozen=True)
class QueryParam:
    name: str
    next: RouteNode
    type: Any = str


@dataclass(frozen=True)
class QueryParams:
    name: str
    next: RouteNode
    type: Any = str


@dataclass(frozen=True)
class Header:
    name: str
    next: RouteNode
    type: Any = str


@dataclass(frozen=True)
class ReqBody:
    content_type: ContentType
    next: RouteNode
    type: Any = Any


@dataclass(frozen=True)
class Method:
    method: str
    response: Any = Any
    content_type: ContentType = JSON


RouteNode = Union[
    Resource,
    Alternative,
    Empty,
    Literal,
    Capture,
    CaptureAll,
    QueryParam,
    QueryParams,
    Header,
    ReqBody,
    Method,
]

_NODE_TYPES = (
    Resource,
    Alternative,
    Empty,
    Literal,
    Capture,
    CaptureAll,
    QueryParam,
    QueryParams,
    Header,
    ReqBody,
    Method,
)


def Get(response: Any = Any, content_type: ContentType = JSON) -> Method:
    return Method("GET", response, content_type)


def Post(response: Any = Any, content_type: ContentType = JSON) -> Method:
    return Method("POST", response, content_type)


def Put(response: Any = Any, content_type: ContentType = JSON) -> Method:
    return Method("PUT", response, content_type)


def Patch(response: Any = Any, content_type: ContentType = JSON) -> Method:
    return Method("PATCH", response, content_type)


def Delete(response: Any = Any, content_type: ContentType = JSON) -> Method:
    return Method("DELETE", response, content_type)


def path(route: str, next: RouteNode) -> RouteNode:
    """Prefix ``next`` with one :class:`Literal` per non-empty segment.

    Example:
        >>> path("api/v1", Empty())
        Literal(segment='api', next=Literal(segment='v1', next=Empty()))
    """
    node = next
    for segment in reversed([part for part in route.split("/") if part]):
        node = Literal(segment, node)
    return node


def alternatives(*pairs: tuple[str, RouteNode], **named: RouteNode) -> RouteNode:
    """Build an :class:`Alternative` chain in declaration order.

    Positional ``(name, node)`` pairs come first, then keyword branches. The
    chain ends with :class:`Empty`. Duplicate names are not rejected here;
    :func:`validate_schema` reports them.
    """
    branches: list[tuple[str, RouteNode]] = list(pairs) + list(named.items())
    node: RouteNode = Empty()
    for name, branch in reversed(branches):
        node = Alternative(name, branch, node)
    return node


def alternative_names(node: RouteNode) -> list[str]:
    """Names declared along one Alternative chain, in order."""
    names: list[str] = []
    while True:
        if isinstance(node, Resource):
            node = node.methods
        elif isinstance(node, Alternative):
            names.append(node.name)
            node = node.rest
        else:
            return names


def validate_schema(node: RouteNode, codecs: CodecRegistry) -> int:
    """Check a schema against its structural contract.

    Args:
        node: Root of the route schema
        codecs: Registry every value type and content type must resolve in

    Returns:
        The number of method leaves in the schema

    Raises:
        SchemaError: On the first violation found, with its location
    """
    return _validate(node, codecs, ())


def _validate(node: object, codecs: CodecRegistry, location: tuple[str, ...]) -> int:
    where = ".".join(location)
    if not isinstance(node, _NODE_TYPES):
        raise SchemaError(f"not a route node: {node!r}", where)

    if isinstance(node, Resource):
        return _validate(node.methods, codecs, location)
    if isinstance(node, Empty):
        return 0
    if isinstance(node, Alternative):
        names = alternative_names(node)
        seen: set[str] = set()
        for name in names:
            if name in seen:
                raise SchemaError(f"duplicate alternative name {name!r}", where)
            seen.add(name)
        return _validate_chain(node, codecs, location)
    if isinstance(node, Literal):
        if not node.segment or "/" in node.segment:
            raise SchemaError(f"invalid path segment {node.segment!r}", where)
        return _validate(node.next, codecs, location + (node.segment,))
    if isinstance(node, (Capture, CaptureAll, QueryParam, QueryParams, Header)):
        _require_value_codec(node.type, codecs, where)
        return _validate(node.next, codecs, location + (_describe(node),))
    if isinstance(node, ReqBody):
        if not codecs.has_body_codec(node.content_type):
            raise SchemaError(f"no body codec for content type {node.content_type.name!r}", where)
        return _validate(node.next, codecs, location + (_describe(node),))

    if not isinstance(node.method, str) or not node.method:
        raise SchemaError(f"invalid HTTP method {node.method!r}", where)
    if node.content_type.response_format is ResponseFormat.JSON and not codecs.can_decode(node.content_type):
        raise SchemaError(f"no response codec for content type {node.content_type.name!r}", where)
    return 1


def _validate_chain(node: RouteNode, codecs: CodecRegistry, location: tuple[str, ...]) -> int:
    leaves = 0
    while not isinstance(node, Empty):
        if isinstance(node, Resource):
            node = node.methods
            continue
        if not isinstance(node, Alternative):
            raise SchemaError(
                f"alternative chain must end in another alternative or Empty, got {type(node).__name__}",
                ".".join(location),
            )
        leaves += _validate(node.branch, codecs, location + (node.name,))
        node = node.rest
    return leaves


def _require_value_codec(tp: Any, codecs: CodecRegistry, where: str) -> None:
    if not codecs.values.supports(tp):
        raise SchemaError(f"no value codec for type {tp!r}", where)


def _describe(node: RouteNode) -> str:
    if isinstance(node, ReqBody):
        return f"<body {node.content_type.name}>"
    kind = type(node).__name__.lower()
    return f"<{kind} {getattr(node, 'name', '')}>"

