from __future__ import annotations

import pytest

from routeclient import ClientConfig, ConfigError


class TestClientConfig:
    def test_defaults(self) -> None:
        config = ClientConfig()
        assert config.base_url == ""
        assert config.timeout is None
        assert dict(config.headers) == {}

    def test_from_mapping(self) -> None:
        config = ClientConfig.from_mapping(
            {"base_url": "http://api.test", "timeout": 5, "headers": {"User-Agent": "routeclient"}}
        )
        assert config == ClientConfig(
            base_url="http://api.test",
            timeout=5.0,
            headers={"User-Agent": "routeclient"},
        )

    @pytest.mark.parametrize(
        ("data", "message"),
        [
            pytest.param({"base": "x"}, "Unknown config keys: base", id="unknown-key"),
            pytest.param({"base_url": 1}, "'base_url' must be a string", id="base-url-type"),
            pytest.param({"timeout": "5"}, "'timeout' must be a number", id="timeout-type"),
            pytest.param({"timeout": True}, "'timeout' must be a number", id="timeout-bool"),
            pytest.param({"timeout": 0}, "'timeout' must be positive", id="timeout-zero"),
            pytest.param({"headers": {"a": 1}}, "'headers' must map strings to strings", id="headers"),
        ],
    )
    def test_rejects_invalid(self, data: dict[str, object], message: str) -> None:
        with pytest.raises(ConfigError, match=message):
            ClientConfig.from_mapping(data)
