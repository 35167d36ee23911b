"""Leaf invocations: finalize, send, decode, classify."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .builder import RequestBuilder, ResponseFormat
from .content import CodecRegistry, ContentType, Decoder
from .errors import DecodeError, TransportError
from .result import Failure, Result, Success
from .transport import Transport

logger = logging.getLogger(__name__)


class Invocation:
    """A fully applied route, ready to be sent.

    Calling the invocation performs one fresh request; nothing is cached.
    The returned coroutine resolves to :class:`~routeclient.result.Success`
    or :class:`~routeclient.result.Failure` and never raises a client error.

    Attributes:
        method: HTTP method of the leaf
        builder: Request state accumulated on the way to the leaf
        content_type: Declared response content type
    """

    def __init__(
        self,
        method: str,
        builder: RequestBuilder,
        content_type: ContentType,
        transport: Transport,
        decoder: Decoder | None,
    ) -> None:
        self.method = method
        self.builder = builder
        self.content_type = content_type
        self._transport = transport
        self._decoder = decoder

    def __repr__(self) -> str:
        return f"<Invocation {self.method} {self.builder.url()}>"

    async def __call__(self) -> Result[Any, TransportError | DecodeError]:
        request = self.builder.finalize(self.method, self.content_type.response_format)
        try:
            response = await self._transport.execute(request)
        except TransportError as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc.render())
            return Failure(exc)
        except Exception as exc:
            error = TransportError(f"{request.method} {request.url} failed: {exc!r}", kind="connection")
            error.__cause__ = exc
            logger.debug("%s %s failed: %s", request.method, request.url, error.render())
            return Failure(error)

        if self._decoder is None:
            return Success(response.text)
        try:
            return Success(self._decoder(response.body))
        except DecodeError as exc:
            logger.debug("%s %s: %s", request.method, request.url, exc.render())
            return Failure(exc)
        except Exception as exc:
            error = DecodeError(f"{request.method} {request.url} failed to decode: {exc!r}")
            error.__cause__ = exc
            logger.debug("%s %s: %s", request.method, request.url, error.render())
            return Failure(error)


def method_stage(
    method: str,
    response: Any,
    content_type: ContentType,
    transport: Transport,
    codecs: CodecRegistry,
) -> Callable[[RequestBuilder], Invocation]:
    """Resolve a leaf's decoder once and return a builder -> invocation step.

    JSON-format leaves decode into ``response``; raw-text leaves return the
    response body as a string and can only fail in transport.
    """
    decoder = None
    if content_type.response_format is ResponseFormat.JSON:
        decoder = codecs.decoder(content_type, response)

    def finish(builder: RequestBuilder) -> Invocation:
        return Invocation(method, builder, content_type, transport, decoder)

    return finish


def resolve_method_client(
    method: str,
    response: Any,
    content_type: ContentType,
    builder: RequestBuilder,
    transport: Transport,
    codecs: CodecRegistry,
) -> Invocation:
    return method_stage(method, response, content_type, transport, codecs)(builder)
