"""Value codecs for path segments, query values and headers.

Each captured type maps to a function that renders a value as a string.
Lookups happen once, when a schema is registered, and walk the type's MRO so
a subclass (an ``IntEnum`` member, a ``datetime``) finds its base's codec.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

ToText = Callable[[object], str]


def _bool_piece(value: object) -> str:
    return "true" if value else "false"


def _enum_piece(value: object) -> str:
    return str(value.value) if isinstance(value, enum.Enum) else str(value)


def _iso_piece(value: object) -> str:
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _bytes_piece(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


def _default_codecs() -> dict[type, tuple[ToText, ToText]]:
    return {
        str: (str, str),
        int: (str, str),
        float: (repr, repr),
        bool: (_bool_piece, _bool_piece),
        decimal.Decimal: (str, str),
        uuid.UUID: (str, str),
        datetime.date: (_iso_piece, _iso_piece),
        datetime.time: (_iso_piece, _iso_piece),
        enum.Enum: (_enum_piece, _enum_piece),
        bytes: (_bytes_piece, _bytes_piece),
    }


@dataclass
class ValueCodecs:
    """Registry of ``to_path_piece`` / ``to_header`` functions keyed by type.

    Example:
        >>> codecs = ValueCodecs()
        >>> codecs.path_piece(bool)(True)
        'true'
    """

    _codecs: dict[type, tuple[ToText, ToText]] = field(default_factory=_default_codecs)

    def register(self, tp: type, to_path_piece: ToText, to_header: ToText | None = None) -> None:
        self._codecs[tp] = (to_path_piece, to_header or to_path_piece)

    def path_piece(self, tp: type) -> ToText:
        return self._lookup(tp)[0]

    def header(self, tp: type) -> ToText:
        return self._lookup(tp)[1]

    def supports(self, tp: type) -> bool:
        return self._find(tp) is not None

    def _lookup(self, tp: type) -> tuple[ToText, ToText]:
        found = self._find(tp)
        if found is None:
            raise KeyError(tp)
        return found

    def _find(self, tp: type) -> tuple[ToText, ToText] | None:
        bases = getattr(tp, "__mro__", (tp,))
        if isinstance(tp, type) and issubclass(tp, enum.Enum):
            # mixed-in data types (str, int) must not shadow the enum codec
            bases = tuple(base for base in bases if issubclass(base, enum.Enum))
        for base in bases:
            if base in self._codecs:
                return self._codecs[base]
        return None
