"""
emitterclient Configuration

Connection, credential and validation settings for EmitterClient.
Uses __slots__ for a fixed, typo-proof attribute set.
"""

DEFAULT_HOST = 'api.emitter.io'
DEFAULT_PORT = 8080
DEFAULT_TLS_PORT = 443


class ClientConfig:
    """Configuration parameters for an emitterclient connection."""

    __slots__ = (
        'host', 'port', 'use_tls', 'keepalive',
        'default_key', 'client_id', 'qos',
        'max_channel_length', 'max_channel_levels',
        'log_level'
    )

    def __init__(self, **kwargs):
        """Initialize client configuration with defaults, override with kwargs."""
        # Network settings
        self.host = DEFAULT_HOST
        self.port = None  # resolved by effective_port()
        self.use_tls = False
        self.keepalive = 60

        # Credentials and identity
        self.default_key = None
        self.client_id = None

        # Subscription QoS (at most once)
        self.qos = 0

        # Channel limits
        self.max_channel_length = 256
        self.max_channel_levels = 16

        # Logging
        self.log_level = 'INFO'

        # Override defaults with provided kwargs
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def effective_port(self):
        """Return the configured port, or the service default for the TLS mode."""
        if self.port is not None:
            return self.port
        return DEFAULT_TLS_PORT if self.use_tls else DEFAULT_PORT

    def validate(self):
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if not self.host:
            raise ValueError('host must not be empty')

        if self.port is not None and not (1 <= self.port <= 65535):
            raise ValueError('port must be in range 1-65535, got %d' % self.port)

        if self.keepalive < 0:
            raise ValueError('keepalive must be >= 0, got %d' % self.keepalive)

        if self.default_key is not None and not self.default_key:
            raise ValueError('default_key must be None or a non-empty string')

        if self.qos not in (0, 1):
            raise ValueError('qos must be 0 or 1, got %s' % self.qos)

        if not (1 <= self.max_channel_length <= 65535):
            raise ValueError('max_channel_length must be in range 1-65535, got %d' % self.max_channel_length)

        if self.max_channel_levels < 1:
            raise ValueError('max_channel_levels must be >= 1, got %d' % self.max_channel_levels)

        valid_levels = ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        if self.log_level not in valid_levels:
            raise ValueError('log_level must be one of %s, got %s' % (valid_levels, self.log_level))
