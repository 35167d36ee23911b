from __future__ import annotations

import pytest

from routeclient import CodecRegistry

from .fakes import FakeTransport, json_response


@pytest.fixture()
def codecs() -> CodecRegistry:
    return CodecRegistry.default()


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport(json_response(b'{"id": 5, "name": "foo"}'))
