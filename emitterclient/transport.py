"""
Transport contract for emitterclient.

EmitterClient talks to the messaging service only through a Transport:
connect/disconnect, subscribe/unsubscribe/publish returning request ids,
and one inbound-message callback registered with set_message_callback().

LoopbackTransport is an in-memory implementation that routes published
messages straight back to matching subscriptions. It is what the test
suite runs against and is handy for local development.
"""

import threading

from .channel import strip_query
from .errors import EmitterConnectionError
from .utils import PacketIdCounter

# CONNACK return codes
CONNECTION_ACCEPTED = 0
REFUSED_PROTOCOL_VERSION = 1
REFUSED_IDENTIFIER_REJECTED = 2
REFUSED_SERVER_UNAVAILABLE = 3
REFUSED_BAD_CREDENTIALS = 4
REFUSED_NOT_AUTHORIZED = 5


class ConnectResult:
    """Outcome of Transport.connect()."""
    __slots__ = ('return_code', 'session_present')

    def __init__(self, return_code=CONNECTION_ACCEPTED, session_present=False):
        self.return_code = return_code
        self.session_present = session_present

    @property
    def accepted(self):
        return self.return_code == CONNECTION_ACCEPTED

    def __repr__(self):
        return 'ConnectResult(return_code=%d, session_present=%s)' % (
            self.return_code, self.session_present)


class Transport:
    """Base transport. Subclasses implement the session operations."""

    def __init__(self):
        self._on_message = None

    def set_message_callback(self, callback):
        """Register callback(topic, payload) for inbound messages (None clears)."""
        self._on_message = callback

    def _deliver(self, topic, payload):
        """Hand an inbound message to the registered callback, if any."""
        callback = self._on_message
        if callback is not None:
            callback(topic, payload)

    def connect(self, client_id):
        """Open the session. Returns a ConnectResult."""
        raise NotImplementedError

    def disconnect(self):
        """Close the session."""
        raise NotImplementedError

    def subscribe(self, topics, qos):
        """Subscribe to topics with matching QoS levels. Returns a request id."""
        raise NotImplementedError

    def unsubscribe(self, topics):
        """Unsubscribe from topics. Returns a request id."""
        raise NotImplementedError

    def publish(self, topic, payload, qos=0, retain=False):
        """Publish payload to topic. Returns a request id."""
        raise NotImplementedError


def filter_matches_topic(topic_filter, topic_name):
    """Check if a subscription filter matches a topic name.

    Args:
        topic_filter: str, may contain +/# wildcards
        topic_name: str, concrete topic name

    Returns:
        bool: True if filter matches topic
    """
    f_levels = topic_filter.split('/')
    t_levels = topic_name.split('/')

    fi = 0
    ti = 0
    while fi < len(f_levels) and ti < len(t_levels):
        if f_levels[fi] == '#':
            return True
        if f_levels[fi] == '+' or f_levels[fi] == t_levels[ti]:
            fi += 1
            ti += 1
        else:
            return False
    # '#' at end matches zero remaining levels
    if fi < len(f_levels) and f_levels[fi] == '#' and ti == len(t_levels):
        return True
    return fi == len(f_levels) and ti == len(t_levels)


class LoopbackTransport(Transport):
    """
    In-memory transport that acts as its own broker.

    Every publish is recorded in `published` and delivered back through the
    message callback once if any subscribed filter matches it. Option
    suffixes are stripped from both filters and topics before matching.

    Example:
        transport = LoopbackTransport()
        client = EmitterClient(transport, ClientConfig(default_key='k'))
        client.connect()
        client.register('chat', print)
        client.publish('chat', b'hi')   # prints: k/chat/ b'hi'
    """

    def __init__(self, refuse_code=CONNECTION_ACCEPTED):
        """
        Args:
            refuse_code: CONNACK return code to answer connect() with;
                anything but CONNECTION_ACCEPTED simulates a refusal
        """
        super().__init__()
        self.refuse_code = refuse_code
        self.client_id = None
        self.connected = False
        self.subscriptions = {}  # topic filter -> qos
        self.published = []      # (topic, payload, qos, retain)
        self._packet_ids = PacketIdCounter()
        self._lock = threading.Lock()

    def _require_connected(self):
        if not self.connected:
            raise EmitterConnectionError("Transport is not connected")

    def connect(self, client_id):
        if self.refuse_code != CONNECTION_ACCEPTED:
            return ConnectResult(self.refuse_code)
        self.client_id = client_id
        self.connected = True
        return ConnectResult(CONNECTION_ACCEPTED)

    def disconnect(self):
        self.connected = False
        with self._lock:
            self.subscriptions.clear()

    def subscribe(self, topics, qos):
        self._require_connected()
        with self._lock:
            for topic_filter, granted in zip(topics, qos):
                self.subscriptions[strip_query(topic_filter)] = granted
            return self._packet_ids.next()

    def unsubscribe(self, topics):
        self._require_connected()
        with self._lock:
            for topic_filter in topics:
                self.subscriptions.pop(strip_query(topic_filter), None)
            return self._packet_ids.next()

    def publish(self, topic, payload, qos=0, retain=False):
        self._require_connected()
        topic = strip_query(topic)
        with self._lock:
            self.published.append((topic, payload, qos, retain))
            request_id = self._packet_ids.next()
            matched = any(filter_matches_topic(f, topic) for f in self.subscriptions)

        # Deliver outside the lock so handlers may publish or subscribe
        if matched:
            self._deliver(topic, payload)
        return request_id
