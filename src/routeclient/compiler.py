"""Schema compiler.

Compilation happens in two steps. :func:`stage_node` walks the schema once,
resolving every codec and decoder, and returns a function from a
:class:`~routeclient.builder.RequestBuilder` to a client value.
:func:`compile_node` applies that function to a builder.

Client values mirror the schema:

- :class:`ClientMap` where the schema has an :class:`~routeclient.schema.Alternative` chain
- :class:`ParameterizedClient` for every node that consumes an argument
- :class:`~routeclient.methods.Invocation` at each method leaf
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Union

from .builder import RequestBuilder
from .content import CodecRegistry
from .errors import SchemaError
from .methods import Invocation, method_stage
from .schema import (
    Alternative,
    Capture,
    CaptureAll,
    Empty,
    Header,
    Literal,
    Method,
    QueryParam,
    QueryParams,
    ReqBody,
    Resource,
    RouteNode,
)
from .transport import Transport

Client = Union["ClientMap", "ParameterizedClient", Invocation]
Stage = Callable[[RequestBuilder], Client]


class ClientMap:
    """Read-only collection of named sub-clients.

    Iterating yields branch names. Branches are reachable by key or by
    attribute. There are no public methods, so any branch name is usable::

        api["widgets"]["get"](5)
        api.widgets.get(5)
    """

    def __init__(self, entries: Mapping[str, Client]) -> None:
        self._entries = dict(entries)

    def __getitem__(self, name: str) -> Client:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __getattr__(self, name: str) -> Client:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._entries[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"ClientMap({list(self._entries)!r})"


class ParameterizedClient:
    """A client that needs one more argument before it is complete.

    Attributes:
        kind: Schema node kind that consumes the argument
        name: Parameter name from the schema
        type: Declared Python type of the argument
    """

    def __init__(self, kind: str, name: str, tp: Any, apply: Callable[[Any], Client]) -> None:
        self.kind = kind
        self.name = name
        self.type = tp
        self._apply = apply

    def __call__(self, value: Any) -> Client:
        return self._apply(value)

    def __repr__(self) -> str:
        return f"<ParameterizedClient {self.kind} {self.name!r}>"


def compile_node(
    node: RouteNode,
    builder: RequestBuilder,
    transport: Transport,
    codecs: CodecRegistry,
) -> Client:
    return stage_node(node, transport, codecs)(builder)


def stage_node(node: RouteNode, transport: Transport, codecs: CodecRegistry) -> Stage:
    if isinstance(node, Resource):
        return stage_node(node.methods, transport, codecs)

    if isinstance(node, (Alternative, Empty)):
        return _stage_alternatives(node, transport, codecs)

    if isinstance(node, Literal):
        segment = node.segment
        next_stage = stage_node(node.next, transport, codecs)
        return lambda builder: next_stage(builder.append_segment(segment))

    if isinstance(node, Capture):
        to_piece = codecs.values.path_piece(node.type)
        next_stage = stage_node(node.next, transport, codecs)
        return _parameterized(
            node,
            next_stage,
            lambda builder, value: builder.append_segment(to_piece(value)),
        )

    if isinstance(node, CaptureAll):
        param = node.name
        to_piece = codecs.values.path_piece(node.type)
        next_stage = stage_node(node.next, transport, codecs)

        def append_all(builder: RequestBuilder, values: Iterable[Any]) -> RequestBuilder:
            _require_sequence(param, values)
            for value in values:
                builder = builder.append_segment(to_piece(value))
            return builder

        return _parameterized(node, next_stage, append_all)

    if isinstance(node, QueryParam):
        name = node.name
        to_piece = codecs.values.path_piece(node.type)
        next_stage = stage_node(node.next, transport, codecs)

        def append_optional(builder: RequestBuilder, value: Any) -> RequestBuilder:
            if value is None:
                return builder
            return builder.append_query_param(name, to_piece(value))

        return _parameterized(node, next_stage, append_optional)

    if isinstance(node, QueryParams):
        name = node.name
        to_piece = codecs.values.path_piece(node.type)
        next_stage = stage_node(node.next, transport, codecs)

        def append_params(builder: RequestBuilder, values: Iterable[Any]) -> RequestBuilder:
            _require_sequence(name, values)
            for value in values:
                builder = builder.append_query_param(name, to_piece(value))
            return builder

        return _parameterized(node, next_stage, append_params)

    if isinstance(node, Header):
        name = node.name
        to_header = codecs.values.header(node.type)
        next_stage = stage_node(node.next, transport, codecs)
        return _parameterized(
            node,
            next_stage,
            lambda builder, value: builder.append_header(name, to_header(value)),
        )

    if isinstance(node, ReqBody):
        encode = codecs.encoder(node.content_type, node.type)
        media_type = node.content_type.media_type
        next_stage = stage_node(node.next, transport, codecs)
        return _parameterized(
            node,
            next_stage,
            lambda builder, value: builder.append_content(encode(value), media_type),
        )

    if isinstance(node, Method):
        return method_stage(node.method, node.response, node.content_type, transport, codecs)

    raise SchemaError(f"not a route node: {node!r}")


def _parameterized(
    node: Capture | CaptureAll | QueryParam | QueryParams | Header | ReqBody,
    next_stage: Stage,
    step: Callable[[RequestBuilder, Any], RequestBuilder],
) -> Stage:
    kind = type(node).__name__
    name = node.content_type.name if isinstance(node, ReqBody) else node.name

    def stage(builder: RequestBuilder) -> Client:
        return ParameterizedClient(kind, name, node.type, lambda value: next_stage(step(builder, value)))

    return stage


def _stage_alternatives(node: RouteNode, transport: Transport, codecs: CodecRegistry) -> Stage:
    branches: list[tuple[str, Stage]] = []
    while not isinstance(node, Empty):
        if isinstance(node, Resource):
            node = node.methods
            continue
        if not isinstance(node, Alternative):
            raise SchemaError(f"alternative chain must end in another alternative or Empty, got {node!r}")
        branches.append((node.name, stage_node(node.branch, transport, codecs)))
        node = node.rest

    def stage(builder: RequestBuilder) -> Client:
        return ClientMap({name: branch(builder) for name, branch in branches})

    return stage


def _require_sequence(name: str, values: Any) -> None:
    # A bare string is iterable but is one value, not a sequence of them.
    if isinstance(values, (str, bytes)):
        raise TypeError(f"{name!r} takes a sequence of values, got {type(values).__name__}")
