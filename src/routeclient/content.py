"""Content types and the body codecs keyed by them.

A :class:`ContentType` names a payload format. The :class:`CodecRegistry`
maps each content type to a body codec, and hands out encoders and decoders
specialised for one Python type. The compiler asks for those once per schema
node, so per-call work is just the encode or decode itself.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from .builder import ResponseFormat
from .codecs import ValueCodecs
from .errors import DecodeError

Encoder = Callable[[Any], bytes]
Decoder = Callable[[bytes], Any]


@dataclass(frozen=True)
class ContentType:
    """A payload format.

    Attributes:
        name: Registry key for the body codec
        media_type: Value of the Content-Type header for request bodies
        response_format: Whether responses are decoded or returned as text
    """

    name: str
    media_type: str | None
    response_format: ResponseFormat


JSON = ContentType("json", "application/json", ResponseFormat.JSON)
PLAIN_TEXT = ContentType("plain_text", "text/plain;charset=utf-8", ResponseFormat.TEXT)


class BodyCodec(Protocol):
    def encoder(self, tp: Any) -> Encoder: ...


@runtime_checkable
class ResponseCodec(BodyCodec, Protocol):
    def decoder(self, shape: Any) -> Decoder: ...


class JsonCodec:
    """JSON body codec backed by pydantic ``TypeAdapter``."""

    def encoder(self, tp: Any) -> Encoder:
        adapter: TypeAdapter[Any] = TypeAdapter(tp)

        def encode(value: Any) -> bytes:
            return adapter.dump_json(value)

        return encode

    def decoder(self, shape: Any) -> Decoder:
        adapter: TypeAdapter[Any] = TypeAdapter(shape)

        def decode(payload: bytes) -> Any:
            try:
                return adapter.validate_json(payload)
            except ValidationError as exc:
                raise DecodeError(
                    f"response does not match {_type_name(shape)}",
                    details=[_format_error(error) for error in exc.errors()],
                ) from exc

        return decode


class PlainTextCodec:
    def encoder(self, tp: Any) -> Encoder:
        def encode(value: Any) -> bytes:
            return str(value).encode("utf-8")

        return encode


def _format_error(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    return f"{location}: {error.get('msg', 'invalid value')}"


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _default_bodies() -> dict[str, BodyCodec]:
    return {JSON.name: JsonCodec(), PLAIN_TEXT.name: PlainTextCodec()}


@dataclass
class CodecRegistry:
    """Every codec a schema needs, resolved at registration time.

    Attributes:
        values: Path, query and header value codecs
        bodies: Body codecs keyed by :attr:`ContentType.name`
    """

    values: ValueCodecs = field(default_factory=ValueCodecs)
    bodies: dict[str, BodyCodec] = field(default_factory=_default_bodies)

    @classmethod
    def default(cls) -> "CodecRegistry":
        return cls()

    def register_body(self, content_type: ContentType, codec: BodyCodec) -> None:
        self.bodies[content_type.name] = codec

    def has_body_codec(self, content_type: ContentType) -> bool:
        return content_type.name in self.bodies

    def can_decode(self, content_type: ContentType) -> bool:
        codec = self.bodies.get(content_type.name)
        return isinstance(codec, ResponseCodec)

    def encoder(self, content_type: ContentType, tp: Any) -> Encoder:
        return self.bodies[content_type.name].encoder(tp)

    def decoder(self, content_type: ContentType, shape: Any) -> Decoder:
        codec = self.bodies[content_type.name]
        if not isinstance(codec, ResponseCodec):
            raise TypeError(f"codec for {content_type.name!r} cannot decode responses")
        return codec.decoder(shape)
