"""
paho-mqtt transport for emitterclient.

Adapts paho.mqtt.client.Client to the Transport contract. paho runs its
network loop on a background thread, so inbound messages (and therefore
handlers) are dispatched on that thread.
"""

import threading

import paho.mqtt.client as mqtt

from .config import ClientConfig
from .errors import EmitterConnectionError
from .logging import Logger
from .transport import (
    Transport, ConnectResult, CONNECTION_ACCEPTED, REFUSED_PROTOCOL_VERSION,
    REFUSED_IDENTIFIER_REJECTED, REFUSED_SERVER_UNAVAILABLE,
    REFUSED_BAD_CREDENTIALS, REFUSED_NOT_AUTHORIZED,
)

# paho reports CONNACK failures as MQTT 5 reason codes, even on 3.1.1
_REASON_TO_RETURN_CODE = {
    0x84: REFUSED_PROTOCOL_VERSION,
    0x85: REFUSED_IDENTIFIER_REJECTED,
    0x86: REFUSED_BAD_CREDENTIALS,
    0x87: REFUSED_NOT_AUTHORIZED,
    0x88: REFUSED_SERVER_UNAVAILABLE,
}


class PahoTransport(Transport):
    """Transport backed by a paho-mqtt client."""

    def __init__(self, host='api.emitter.io', port=8080, use_tls=False,
                 keepalive=60, connect_timeout=10, log_level='INFO'):
        """
        Args:
            host: broker hostname
            port: broker port
            use_tls: wrap the connection in TLS with system CA certificates
            keepalive: MQTT keep-alive in seconds
            connect_timeout: seconds to wait for CONNACK
            log_level: 'DEBUG', 'INFO', 'WARNING', 'ERROR'
        """
        super().__init__()
        self.host = host
        self.port = port
        self.use_tls = use_tls
        self.keepalive = keepalive
        self.connect_timeout = connect_timeout
        self.client = None
        self._connack = None
        self._connack_event = threading.Event()
        self._log = Logger('emitterclient.paho', log_level)

    @classmethod
    def from_config(cls, config=None, connect_timeout=10):
        """Build a transport from a ClientConfig's network settings."""
        config = config or ClientConfig()
        return cls(host=config.host, port=config.effective_port(),
                   use_tls=config.use_tls, keepalive=config.keepalive,
                   connect_timeout=connect_timeout, log_level=config.log_level)

    # paho callbacks (run on the network thread)

    def _handle_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code.is_failure:
            return_code = _REASON_TO_RETURN_CODE.get(reason_code.value, REFUSED_SERVER_UNAVAILABLE)
        else:
            return_code = CONNECTION_ACCEPTED
        self._connack = ConnectResult(return_code, bool(flags.session_present))
        self._connack_event.set()

    def _handle_disconnect(self, client, userdata, flags, reason_code, properties=None):
        self._log.info("Disconnected from %s:%d (%s)", self.host, self.port, reason_code)

    def _handle_message(self, client, userdata, msg):
        self._deliver(msg.topic, msg.payload)

    # Transport contract

    def connect(self, client_id):
        client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id)
        client.on_connect = self._handle_connect
        client.on_disconnect = self._handle_disconnect
        client.on_message = self._handle_message
        if self.use_tls:
            client.tls_set()

        self._connack = None
        self._connack_event.clear()
        try:
            client.connect(self.host, self.port, self.keepalive)
        except OSError as e:
            raise EmitterConnectionError("Cannot reach %s:%d: %s" % (self.host, self.port, e)) from e

        client.loop_start()
        if not self._connack_event.wait(self.connect_timeout):
            client.disconnect()
            client.loop_stop()
            raise EmitterConnectionError("Timed out waiting for CONNACK from %s:%d" % (self.host, self.port))

        if self._connack.accepted:
            self.client = client
        else:
            client.disconnect()
            client.loop_stop()
        return self._connack

    def disconnect(self):
        client = self.client
        if client is None:
            return
        self.client = None
        client.disconnect()
        client.loop_stop()

    def _require_client(self):
        if self.client is None:
            raise EmitterConnectionError("Transport is not connected")
        return self.client

    def _check(self, operation, result):
        if result != mqtt.MQTT_ERR_SUCCESS:
            raise EmitterConnectionError(
                "%s failed: %s" % (operation, mqtt.error_string(result)), result)

    def subscribe(self, topics, qos):
        result, mid = self._require_client().subscribe(list(zip(topics, qos)))
        self._check('Subscribe', result)
        return mid

    def unsubscribe(self, topics):
        result, mid = self._require_client().unsubscribe(list(topics))
        self._check('Unsubscribe', result)
        return mid

    def publish(self, topic, payload, qos=0, retain=False):
        info = self._require_client().publish(topic, payload, qos=qos, retain=retain)
        self._check('Publish', info.rc)
        return info.mid
