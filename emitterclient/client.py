"""
EmitterClient - pub/sub client for key-secured hierarchical channels.

Formats channels into wire topics, forwards subscribe/unsubscribe/publish
to a Transport, and dispatches inbound messages to handlers registered in
a ReverseTrie.
"""

from .channel import format_channel, topic_key, validate_channel
from .config import ClientConfig
from .errors import EmitterConnectionError, HandlerError, MissingCredentialError
from .logging import Logger
from .trie import ReverseTrie
from .utils import generate_client_id

NO_DEFAULT_KEY = ("The default key was not provided. Either provide a default key "
                  "in the config or specify a key for the operation.")


class EmitterClient:
    """
    Pub/sub client over an abstract Transport.

    Handlers are registered per channel pattern ('+' matches one level)
    and called as handler(topic, payload) on the transport's delivery
    thread. A handler that raises is logged and reported to on_error;
    the remaining handlers for that message still run.

    Example:
        client = EmitterClient(PahoTransport(), ClientConfig(default_key='k'))
        client.connect()

        @client.on('sensors/+/temp')
        def handle_temp(topic, payload):
            print(topic, payload)

        client.publish('sensors/kitchen/temp', b'21.5')
    """

    def __init__(self, transport, config=None, on_error=None):
        """
        Initialize the client and wire it to the transport.

        Args:
            transport: Transport instance
            config: ClientConfig instance. If None, uses defaults.
            on_error: Optional callable(HandlerError) for handler faults
        """
        self.config = config or ClientConfig()
        self.config.validate()

        self._log = Logger('emitterclient', self.config.log_level)

        self.transport = transport
        self.on_error = on_error
        self.client_id = None
        self._trie = ReverseTrie()

        self.transport.set_message_callback(self._on_message)

    # Connection

    def connect(self):
        """
        Connect the transport.

        Returns:
            ConnectResult

        Raises:
            EmitterConnectionError: if the connection is refused
        """
        self.client_id = self.config.client_id or generate_client_id()
        result = self.transport.connect(self.client_id)
        if not result.accepted:
            self._log.warning("Connection refused for %s (code %d)", self.client_id, result.return_code)
            raise EmitterConnectionError("Connection refused", result.return_code)
        self._log.info("Connected as %s", self.client_id)
        return result

    def disconnect(self):
        """Disconnect the transport. Registered handlers are kept."""
        self.transport.disconnect()
        self._log.info("Disconnected: %s", self.client_id)

    # Channel operations

    def _resolve_key(self, key):
        if key is None:
            key = self.config.default_key
            if key is None:
                raise MissingCredentialError(NO_DEFAULT_KEY)
        return key

    def _topic(self, key, channel, options):
        validate_channel(channel, self.config.max_channel_length, self.config.max_channel_levels)
        return format_channel(self._resolve_key(key), channel, options)

    def register(self, channel, handler, key=None, options=()):
        """
        Register a handler for a channel and subscribe to it.

        Registering the same channel again replaces its handler.

        Args:
            channel: str, channel path, may contain '+' levels
            handler: callable(topic, payload)
            key: str, channel key (default: config.default_key)
            options: sequence of (name, value) pairs, e.g. [last(10)]

        Returns:
            int: request id of the subscribe

        Raises:
            InvalidArgumentError: if channel or handler is invalid
            MissingCredentialError: if no key is available
            EmitterConnectionError: if the transport rejects the subscribe;
                the handler table is left unchanged
        """
        topic = self._topic(key, channel, options)
        pattern = topic_key(topic)
        previous = self._trie.register(pattern, handler)
        self._log.debug("Subscribing to %s", topic)
        try:
            return self.transport.subscribe([topic], [self.config.qos])
        except Exception:
            # Subscription failed, put the handler table back as it was
            if previous is None:
                self._trie.unregister(pattern)
            else:
                self._trie.register(pattern, previous)
            raise

    def on(self, channel, key=None, options=()):
        """Decorator form of register()."""
        def decorator(func):
            self.register(channel, func, key=key, options=options)
            return func
        return decorator

    def unregister(self, channel, key=None):
        """
        Remove a channel's handler and unsubscribe from it.

        Args:
            channel: str, the channel passed to register()
            key: str, channel key (default: config.default_key)

        Returns:
            int: request id of the unsubscribe
        """
        topic = self._topic(key, channel, ())
        if not self._trie.unregister(topic_key(topic)):
            self._log.debug("No handler registered for %s", topic)
        self._log.debug("Unsubscribing from %s", topic)
        return self.transport.unsubscribe([topic])

    def publish(self, channel, payload, key=None, options=(), retain=False):
        """
        Publish a message to a channel.

        Args:
            channel: str, concrete channel path
            payload: bytes or str (encoded as UTF-8)
            key: str, channel key (default: config.default_key)
            options: sequence of (name, value) pairs, e.g. [ttl(60)]
            retain: bool, ask the service to retain the message

        Returns:
            int: request id of the publish
        """
        if isinstance(payload, str):
            payload = payload.encode('utf-8')
        topic = self._topic(key, channel, options)
        return self.transport.publish(topic, payload, qos=self.config.qos, retain=retain)

    def handler_count(self):
        """Number of channels with a registered handler."""
        return self._trie.count()

    # Dispatch

    def _on_message(self, topic, payload):
        """Invoke every handler whose channel pattern matches topic."""
        # Materialize so handlers may register/unregister while we iterate
        handlers = list(self._trie.match(topic_key(topic)))
        if not handlers:
            self._log.debug("No handler for %s", topic)
            return

        for handler in handlers:
            try:
                handler(topic, payload)
            except Exception as e:
                self._log.error("Error in handler for %s: %s", topic, e)
                self._report(HandlerError(handler, topic, e))

    def _report(self, error):
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception as e:
            self._log.error("Error in on_error hook: %s", e)
