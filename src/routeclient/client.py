"""Entry points: turn a route schema into a client tree."""

from __future__ import annotations

import logging

import httpx

from .backends import HttpxBackend
from .builder import RequestBuilder
from .compiler import Client, stage_node
from .config import ClientConfig
from .content import CodecRegistry
from .schema import RouteNode, validate_schema
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)


def build_client(
    schema: RouteNode,
    transport: Transport,
    *,
    codecs: CodecRegistry | None = None,
) -> Client:
    """Validate ``schema`` and compile it against an empty request.

    The returned tree holds no per-call state and can be shared by any
    number of concurrent callers.

    Args:
        schema: Root node of the route schema
        transport: Performs the HTTP exchanges of every leaf
        codecs: Value and body codecs; defaults to :meth:`CodecRegistry.default`

    Raises:
        SchemaError: If the schema violates its structural contract
    """
    registry = codecs or CodecRegistry.default()
    leaves = validate_schema(schema, registry)
    root = stage_node(schema, transport, registry)(RequestBuilder.empty())
    logger.debug("Registered route schema with %d method(s)", leaves)
    return root


def create(
    schema: RouteNode,
    config: ClientConfig | str,
    *,
    client: httpx.AsyncClient,
    codecs: CodecRegistry | None = None,
) -> Client:
    """Build a client tree that talks HTTP through httpx.

    The caller owns ``client`` and closes it; the tree never does::

        async with httpx.AsyncClient() as http:
            api = create(schema, "http://localhost:8000", client=http)

    Args:
        schema: Root node of the route schema
        config: A :class:`ClientConfig` or just a base URL
        client: The ``httpx.AsyncClient`` every request is sent through
        codecs: Value and body codecs
    """
    if isinstance(config, str):
        config = ClientConfig(base_url=config)
    transport = HttpTransport(HttpxBackend(client), config)
    return build_client(schema, transport, codecs=codecs)
