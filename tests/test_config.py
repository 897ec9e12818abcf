"""Tests for emitterclient.config module."""

import pytest
from emitterclient.config import ClientConfig, DEFAULT_PORT, DEFAULT_TLS_PORT


class TestClientConfigDefaults:
    """Test ClientConfig default values."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.host == 'api.emitter.io'
        assert config.port is None
        assert config.use_tls is False
        assert config.keepalive == 60
        assert config.default_key is None
        assert config.client_id is None
        assert config.qos == 0
        assert config.max_channel_length == 256
        assert config.max_channel_levels == 16
        assert config.log_level == 'INFO'

    def test_defaults_validate(self):
        ClientConfig().validate()

    def test_kwargs_override(self):
        config = ClientConfig(default_key='abc', qos=1, host='localhost')
        assert config.default_key == 'abc'
        assert config.qos == 1
        assert config.host == 'localhost'

    def test_unknown_kwargs_ignored(self):
        config = ClientConfig(not_a_setting=1)
        assert not hasattr(config, 'not_a_setting')

    def test_slots(self):
        config = ClientConfig()
        with pytest.raises(AttributeError):
            config.extra = 1


class TestEffectivePort:
    """Test port resolution."""

    def test_plain(self):
        assert ClientConfig().effective_port() == DEFAULT_PORT

    def test_tls(self):
        assert ClientConfig(use_tls=True).effective_port() == DEFAULT_TLS_PORT

    def test_explicit(self):
        assert ClientConfig(port=1883, use_tls=True).effective_port() == 1883


class TestClientConfigValidate:
    """Test validation failures."""

    @pytest.mark.parametrize('kwargs', [
        {'host': ''},
        {'port': 0},
        {'port': 70000},
        {'keepalive': -1},
        {'default_key': ''},
        {'qos': 2},
        {'max_channel_length': 0},
        {'max_channel_levels': 0},
        {'log_level': 'TRACE'},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            ClientConfig(**kwargs).validate()
