from __future__ import annotations

import datetime
import decimal
import enum
import uuid

import pytest

from routeclient import JSON, PLAIN_TEXT, CodecRegistry, DecodeError, ValueCodecs

from ..fakes import NewWidget, Widget


class Color(str, enum.Enum):
    RED = "red"


class Level(enum.IntEnum):
    HIGH = 3


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class TestValueCodecs:
    @pytest.mark.parametrize(
        ("tp", "value", "expected"),
        [
            pytest.param(str, "abc", "abc", id="str"),
            pytest.param(int, 42, "42", id="int"),
            pytest.param(float, 1.5, "1.5", id="float"),
            pytest.param(bool, True, "true", id="bool-true"),
            pytest.param(bool, False, "false", id="bool-false"),
            pytest.param(decimal.Decimal, decimal.Decimal("2.50"), "2.50", id="decimal"),
            pytest.param(
                uuid.UUID,
                uuid.UUID("12345678-1234-5678-1234-567812345678"),
                "12345678-1234-5678-1234-567812345678",
                id="uuid",
            ),
            pytest.param(datetime.date, datetime.date(2024, 1, 2), "2024-01-02", id="date"),
            pytest.param(
                datetime.datetime,
                datetime.datetime(2024, 1, 2, 3, 4, 5),
                "2024-01-02T03:04:05",
                id="datetime",
            ),
            pytest.param(Color, Color.RED, "red", id="str-enum"),
            pytest.param(Level, Level.HIGH, "3", id="int-enum"),
            pytest.param(bytes, b"raw", "raw", id="bytes"),
        ],
    )
    def test_builtin_path_pieces(self, tp: type, value: object, expected: str) -> None:
        assert ValueCodecs().path_piece(tp)(value) == expected

    def test_header_defaults_to_path_piece(self) -> None:
        assert ValueCodecs().header(bool)(True) == "true"

    def test_register_custom_type(self) -> None:
        codecs = ValueCodecs()
        codecs.register(Point, lambda p: f"{p.x},{p.y}", lambda p: f"x={p.x}; y={p.y}")
        assert codecs.path_piece(Point)(Point(1, 2)) == "1,2"
        assert codecs.header(Point)(Point(1, 2)) == "x=1; y=2"

    def test_unknown_type(self) -> None:
        codecs = ValueCodecs()
        assert not codecs.supports(Point)
        with pytest.raises(KeyError):
            codecs.path_piece(Point)

    def test_registries_are_independent(self) -> None:
        first = ValueCodecs()
        first.register(Point, str)
        assert not ValueCodecs().supports(Point)


class TestBodyCodecs:
    def test_json_encodes_models(self, codecs: CodecRegistry) -> None:
        encode = codecs.encoder(JSON, NewWidget)
        assert encode(NewWidget(name="bolt")) == b'{"name":"bolt"}'

    def test_json_encodes_plain_values(self, codecs: CodecRegistry) -> None:
        assert codecs.encoder(JSON, dict[str, int])({"a": 1}) == b'{"a":1}'

    def test_json_decodes_into_shape(self, codecs: CodecRegistry) -> None:
        decode = codecs.decoder(JSON, Widget)
        assert decode(b'{"id": 5, "name": "foo"}') == Widget(id=5, name="foo")

    def test_json_decode_failure_lists_fields(self, codecs: CodecRegistry) -> None:
        decode = codecs.decoder(JSON, Widget)
        with pytest.raises(DecodeError) as excinfo:
            decode(b'{"id": "five"}')
        error = excinfo.value
        assert error.message == "response does not match Widget"
        assert any(detail.startswith("id: ") for detail in error.details)
        assert any(detail.startswith("name: ") for detail in error.details)

    def test_json_decode_malformed_payload(self, codecs: CodecRegistry) -> None:
        decode = codecs.decoder(JSON, Widget)
        with pytest.raises(DecodeError) as excinfo:
            decode(b"{not json")
        assert excinfo.value.details
        assert excinfo.value.details[0].startswith("<root>: ")

    def test_plain_text_encodes_str(self, codecs: CodecRegistry) -> None:
        assert codecs.encoder(PLAIN_TEXT, str)("héllo") == "héllo".encode()

    def test_plain_text_cannot_decode(self, codecs: CodecRegistry) -> None:
        assert codecs.has_body_codec(PLAIN_TEXT)
        assert not codecs.can_decode(PLAIN_TEXT)
        assert codecs.can_decode(JSON)
        with pytest.raises(TypeError):
            codecs.decoder(PLAIN_TEXT, str)
