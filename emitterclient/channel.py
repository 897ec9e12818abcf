"""
Channel formatting and validation for emitterclient.

A wire topic is the key followed by the channel path, always ending in
'/', optionally followed by a '?name=value&...' option suffix:

    key1/chat/room1/?last=5
"""

from .errors import InvalidArgumentError
from .trie import WILDCARD


def format_channel(key, channel, options=()):
    """Build the fully qualified wire topic for a channel.

    Args:
        key: str, channel key
        channel: str, channel path with or without a leading '/'
        options: sequence of (name, value) pairs, appended in order

    Returns:
        str, e.g. 'key1/chat/?last=1'

    Raises:
        InvalidArgumentError: if channel is empty
    """
    if not channel:
        raise InvalidArgumentError("Channel cannot be empty")

    if channel[0] == '/':
        formatted = key + channel
    else:
        formatted = key + '/' + channel

    if formatted[-1] != '/':
        formatted += '/'

    if options:
        formatted += '?' + '&'.join('%s=%s' % (name, value) for name, value in options)

    return formatted


def strip_query(topic):
    """Drop the '?...' option suffix from a topic, if any."""
    if isinstance(topic, bytes):
        topic = topic.decode('utf-8')
    pos = topic.find('?')
    if pos != -1:
        return topic[:pos]
    return topic


def topic_key(topic):
    """Normalise a wire topic into the form stored in and matched by the trie.

    Strips the option suffix and one trailing '/', so 'key1/chat/?last=1'
    and 'key1/chat' both become 'key1/chat'.
    """
    topic = strip_query(topic)
    if topic.endswith('/'):
        topic = topic[:-1]
    return topic


def validate_channel(channel, max_length=256, max_levels=16):
    """Validate a channel path or pattern.

    Args:
        channel: str
        max_length: maximum allowed length
        max_levels: maximum number of '/'-separated segments

    Returns:
        True if valid

    Raises:
        InvalidArgumentError if invalid
    """
    if not channel:
        raise InvalidArgumentError("Channel cannot be empty")
    if len(channel) > max_length:
        raise InvalidArgumentError("Channel exceeds maximum length")
    if '?' in channel:
        raise InvalidArgumentError("Channel cannot contain '?', pass options instead")

    levels = channel.strip('/').split('/')
    if len(levels) > max_levels:
        raise InvalidArgumentError("Channel has too many levels")

    # '+' must occupy an entire level
    for level in levels:
        if WILDCARD in level and level != WILDCARD:
            raise InvalidArgumentError("+ must occupy entire level")

    return True


def _positive(name, value):
    """Coerce an option value to a positive integer string."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError("%s must be an integer, got %r" % (name, value)) from None
    if number < 1:
        raise InvalidArgumentError("%s must be >= 1, got %d" % (name, number))
    return str(number)


def last(count):
    """Option asking the service to replay the last `count` stored messages."""
    return ('last', _positive('last', count))


def ttl(seconds):
    """Option asking the service to store a published message for `seconds`."""
    return ('ttl', _positive('ttl', seconds))
