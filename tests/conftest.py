"""
pytest configuration and fixtures for emitterclient tests.
"""

import pytest

from emitterclient.client import EmitterClient
from emitterclient.config import ClientConfig
from emitterclient.transport import LoopbackTransport
from emitterclient.trie import ReverseTrie


class Recorder:
    """Callable handler that records every (topic, payload) it receives."""

    def __init__(self, name='handler'):
        self.name = name
        self.calls = []

    def __call__(self, topic, payload):
        self.calls.append((topic, payload))

    def __repr__(self):
        return 'Recorder(%s)' % self.name


class FailingHandler:
    """Handler that always raises."""

    def __init__(self, exc=None):
        self.exc = exc or RuntimeError('handler boom')
        self.calls = 0

    def __call__(self, topic, payload):
        self.calls += 1
        raise self.exc


# Fixtures

@pytest.fixture
def trie():
    """Provide a fresh ReverseTrie instance."""
    return ReverseTrie()


@pytest.fixture
def client_config():
    """Provide a ClientConfig with test defaults."""
    return ClientConfig(
        default_key='key1',
        client_id='test-client',
        log_level='ERROR'  # Quiet during tests
    )


@pytest.fixture
def loopback():
    """Provide a LoopbackTransport instance."""
    return LoopbackTransport()


@pytest.fixture
def client(loopback, client_config):
    """Provide a connected EmitterClient on a loopback transport."""
    client = EmitterClient(loopback, client_config)
    client.connect()
    return client


@pytest.fixture
def recorder():
    """Provide a Recorder handler."""
    return Recorder()
