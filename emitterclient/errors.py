"""
emitterclient Exception Hierarchy

Custom exceptions for invalid channels, missing keys, transport
failures and handler faults raised during message dispatch.
"""


class EmitterError(Exception):
    """Base exception for all emitterclient errors."""
    __slots__ = ('message',)

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InvalidArgumentError(EmitterError, ValueError):
    """Empty or malformed channel, pattern or option."""
    __slots__ = ()

    def __init__(self, message):
        super().__init__(message)


class MissingCredentialError(EmitterError):
    """No key was given and no default key is configured."""
    __slots__ = ()

    def __init__(self, message):
        super().__init__(message)


class EmitterConnectionError(EmitterError):
    """Transport refused the connection or is not connected."""
    __slots__ = ('return_code',)

    def __init__(self, message, return_code=None):
        super().__init__(message)
        self.return_code = return_code


class HandlerError(EmitterError):
    """A message handler raised during dispatch.

    Never raised out of the dispatch loop; it is built and passed to the
    client's on_error hook so the fault can be reported.
    """
    __slots__ = ('handler', 'topic', 'cause')

    def __init__(self, handler, topic, cause):
        super().__init__('Handler %r failed on %s: %s' % (handler, topic, cause))
        self.handler = handler
        self.topic = topic
        self.cause = cause
