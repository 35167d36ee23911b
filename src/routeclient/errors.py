"""Exception hierarchy for routeclient.

Two families live here:

- Eager errors raised while a schema is registered or a client is
  configured (:class:`SchemaError`, :class:`ConfigError`).
- Client errors describing a failed invocation (:class:`TransportError`,
  :class:`DecodeError`). These are returned inside a
  :class:`~routeclient.result.Failure`, never raised out of an invocation.
"""

from __future__ import annotations

from collections.abc import Sequence


class RouteClientError(Exception):
    pass


class SchemaError(RouteClientError):
    """Raised when a route schema violates its structural contract.

    Attributes:
        location: Dotted path to the offending node (empty for the root)
    """

    def __init__(self, message: str, location: str = "") -> None:
        self.location = location
        where = location or "<root>"
        super().__init__(f"{where}: {message}")


class ConfigError(RouteClientError):
    pass


class ClientError(RouteClientError):
    def render(self) -> str:
        raise NotImplementedError


class TransportError(ClientError):
    """The exchange with the server failed.

    Attributes:
        kind: One of ``"connection"``, ``"status"`` or ``"content_type"``
        message: Description supplied by the transport
        status: Response status, when a response was received
        body: Response body, when a response was received
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str = "connection",
        status: int | None = None,
        body: bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status
        self.body = body

    def render(self) -> str:
        if self.status is not None:
            return f"transport error ({self.kind}, status {self.status}): {self.message}"
        return f"transport error ({self.kind}): {self.message}"


class DecodeError(ClientError):
    """The response payload did not match the declared response shape.

    Attributes:
        message: Summary from the codec
        details: One ``"<location>: <reason>"`` entry per failing field
    """

    def __init__(self, message: str, details: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.details = tuple(details)

    def render(self) -> str:
        if not self.details:
            return f"decode error: {self.message}"
        return f"decode error: {self.message} [{'; '.join(self.details)}]"


def render_error(error: ClientError) -> str:
    """Render any client error as a human-readable string."""
    if isinstance(error, TransportError):
        return error.render()
    if isinstance(error, DecodeError):
        return error.render()
    raise TypeError(f"not a client error: {error!r}")
