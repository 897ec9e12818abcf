"""
emitterclient utility functions.

Client identifier generation and request identifier allocation.
"""

import threading
import time

_client_id_counter = 0


def generate_client_id():
    """Generate a unique client ID for a connection.

    Uses a module-level counter, spread by a multiplicative hash, XORed
    with a microsecond time seed to avoid collisions.

    Returns:
        str in format "emitter-XXXXXXXX"
    """
    global _client_id_counter
    _client_id_counter += 1

    seed = time.time_ns() // 1000
    return "emitter-%08x" % ((seed ^ (_client_id_counter * 0x9E3779B1)) & 0xFFFFFFFF)


class PacketIdCounter:
    """
    Thread-safe allocator of MQTT packet identifiers.

    Packet IDs are in range 1-65535 (0x0001-0xFFFF).
    Counter wraps from 65535 back to 1.
    """
    __slots__ = ('_value', '_lock')

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def next(self):
        """
        Returns:
            int: Next packet ID (1-65535)
        """
        with self._lock:
            self._value += 1
            if self._value > 65535:
                self._value = 1
            return self._value
