"""
Reverse topic trie for emitterclient.

Maps topic patterns to message handlers and answers the reverse question:
given a concrete topic, which registered patterns match it. Each level of
the trie is one '/'-separated segment. A '+' segment in a pattern matches
exactly one segment of a topic. There is no multi-level wildcard.

Every node carries its own lock, so registrations on disjoint branches
never contend. Matching takes no locks at all and may or may not observe
mutations that race with it.
"""

import threading

from .errors import InvalidArgumentError

WILDCARD = '+'


class TrieNode:
    """Node in the reverse trie, one per distinct pattern prefix."""
    __slots__ = ('level', 'children', 'handler', '_lock')

    def __init__(self, level):
        self.level = level       # segment index, root is -1
        self.children = None     # str -> TrieNode (lazy, None until first child)
        self.handler = None      # callable or None
        self._lock = threading.Lock()

    def get_child(self, segment):
        """Return the child for segment, or None."""
        children = self.children
        if children is None:
            return None
        return children.get(segment)

    def get_or_add_child(self, segment):
        """Return the child for segment, creating it if absent.

        The check and the insert happen under this node's lock, so two
        threads adding the same segment end up sharing one child.
        """
        child = self.get_child(segment)
        if child is not None:
            return child

        with self._lock:
            if self.children is None:
                self.children = {}
            child = self.children.get(segment)
            if child is None:
                child = TrieNode(self.level + 1)
                self.children[segment] = child
            return child

    def set_handler(self, handler):
        """Store handler, replacing any previous one. Returns the old handler."""
        with self._lock:
            old = self.handler
            self.handler = handler
            return old

    def clear_handler(self):
        """Remove the handler. Returns True if one was present."""
        with self._lock:
            if self.handler is None:
                return False
            self.handler = None
            return True


def split_topic(topic):
    """Convert a topic or pattern to its list of segments."""
    if isinstance(topic, bytes):
        topic = topic.decode('utf-8')
    return topic.split('/')


class ReverseTrie:
    """
    Pattern -> handler table with reverse (topic -> patterns) lookup.

    Exactly one handler is kept per pattern; registering a pattern again
    replaces its handler. Unregistering leaves the emptied nodes in place.
    """

    def __init__(self):
        self.root = TrieNode(-1)

    def register(self, pattern, handler):
        """
        Register handler for a pattern, replacing any existing one.

        Args:
            pattern: str or bytes, may contain '+' segments. '' is a valid
                single-segment pattern.
            handler: callable(topic, payload)

        Returns:
            The handler previously registered for pattern, or None

        Raises:
            InvalidArgumentError: if handler is not callable
        """
        if not callable(handler):
            raise InvalidArgumentError('Handler must be callable, got %r' % (handler,))

        node = self.root
        for segment in split_topic(pattern):
            node = node.get_or_add_child(segment)
        return node.set_handler(handler)

    def unregister(self, pattern):
        """
        Remove the handler registered for exactly this pattern.

        Args:
            pattern: str or bytes

        Returns:
            bool: True if a handler was removed, False if none was registered
        """
        node = self.root
        for segment in split_topic(pattern):
            node = node.get_child(segment)
            if node is None:
                return False
        return node.clear_handler()

    def match(self, topic):
        """
        Yield every handler whose pattern matches a concrete topic.

        Iterative DFS over an explicit stack. At each level the '+' child is
        pushed before the exact child, so the exact branch is explored
        first. That order is deterministic but is not a priority contract.

        Args:
            topic: str or bytes, concrete topic

        Yields:
            handlers, each pattern at most once
        """
        query = split_topic(topic)
        depth = len(query)
        last = depth - 1

        stack = [self.root]
        while stack:
            node = stack.pop()

            handler = node.handler
            if handler is not None and node.level == last:
                yield handler

            level = node.level + 1
            if level >= depth:
                continue

            children = node.children
            if not children:
                continue

            child = children.get(WILDCARD)
            if child is not None:
                stack.append(child)

            segment = query[level]
            if segment != WILDCARD:
                child = children.get(segment)
                if child is not None:
                    stack.append(child)

    def count(self):
        """
        Count patterns that currently have a handler.

        Returns:
            int: Number of registered patterns
        """
        count = 0
        stack = [self.root]

        while stack:
            node = stack.pop()
            if node.handler is not None:
                count += 1

            if node.children:
                for child in list(node.children.values()):
                    stack.append(child)

        return count

    __len__ = count

    def patterns(self):
        """
        List the patterns that currently have a handler.

        Returns:
            list: pattern strings, in no particular order
        """
        result = []
        # Stack items: (node, segments from root)
        stack = [(self.root, ())]

        while stack:
            node, path = stack.pop()
            if node.handler is not None:
                result.append('/'.join(path))

            if node.children:
                for segment, child in list(node.children.items()):
                    stack.append((child, path + (segment,)))

        return result
