"""
emitterclient - pub/sub client for key-secured hierarchical channels

Routes inbound messages to handlers through a reverse topic trie with
'+' single-level wildcards.
"""

__version__ = '1.0.0'
__author__ = 'mateuszsury'

from .client import EmitterClient
from .config import ClientConfig
from .errors import (EmitterError, InvalidArgumentError, MissingCredentialError,
                     EmitterConnectionError, HandlerError)
from .trie import ReverseTrie
from .channel import format_channel, last, ttl
from .transport import Transport, ConnectResult, LoopbackTransport
from .paho_transport import PahoTransport

# Convenience alias
Emitter = EmitterClient
