from .backends import HttpxBackend
from .builder import Request, RequestBuilder, ResponseFormat
from .client import build_client, create
from .codecs import ValueCodecs
from .compiler import ClientMap, ParameterizedClient, compile_node
from .config import ClientConfig
from .content import JSON, PLAIN_TEXT, CodecRegistry, ContentType, JsonCodec, PlainTextCodec
from .errors import (
    ClientError,
    ConfigError,
    DecodeError,
    RouteClientError,
    SchemaError,
    TransportError,
    render_error,
)
from .methods import Invocation, resolve_method_client
from .result import Failure, Result, Success
from .schema import (
    Alternative,
    Capture,
    CaptureAll,
    Delete,
    Empty,
    Get,
    Header,
    Literal,
    Method,
    Patch,
    Post,
    Put,
    QueryParam,
    QueryParams,
    ReqBody,
    Resource,
    alternatives,
    path,
    validate_schema,
)
from .transport import HttpTransport, Response, Transport

__all__ = [
    "RouteClientError",
    "SchemaError",
    "ConfigError",
    "ClientError",
    "TransportError",
    "DecodeError",
    "render_error",
    "Success",
    "Failure",
    "Result",
    "Request",
    "RequestBuilder",
    "ResponseFormat",
    "ContentType",
    "JSON",
    "PLAIN_TEXT",
    "CodecRegistry",
    "JsonCodec",
    "PlainTextCodec",
    "ValueCodecs",
    "Resource",
    "Alternative",
    "Empty",
    "Literal",
    "Capture",
    "CaptureAll",
    "QueryParam",
    "QueryParams",
    "Header",
    "ReqBody",
    "Method",
    "Get",
    "Post",
    "Put",
    "Patch",
    "Delete",
    "alternatives",
    "path",
    "validate_schema",
    "ClientMap",
    "ParameterizedClient",
    "Invocation",
    "compile_node",
    "resolve_method_client",
    "ClientConfig",
    "Transport",
    "Response",
    "HttpTransport",
    "HttpxBackend",
    "build_client",
    "create",
]
