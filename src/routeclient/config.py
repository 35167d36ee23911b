from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields

from .errors import ConfigError


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by every request a client makes.

    Attributes:
        base_url: Prefix for every request URL (scheme, host, optional path)
        timeout: Per-request timeout in seconds, passed to the backend
        headers: Headers sent with every request unless the route sets them
    """

    base_url: str = ""
    timeout: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "ClientConfig":
        """Build a config from a plain mapping, e.g. loaded from JSON.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        base_url = data.get("base_url", "")
        if not isinstance(base_url, str):
            raise ConfigError("'base_url' must be a string")

        timeout = data.get("timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ConfigError("'timeout' must be a number")
            if timeout <= 0:
                raise ConfigError("'timeout' must be positive")
            timeout = float(timeout)

        headers = data.get("headers", {})
        if not isinstance(headers, Mapping) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in headers.items()
        ):
            raise ConfigError("'headers' must map strings to strings")

        return cls(base_url=base_url, timeout=timeout, headers=dict(headers))
