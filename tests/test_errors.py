"""Tests for emitterclient.errors exception hierarchy."""

import pytest
from emitterclient.errors import (
    EmitterError,
    InvalidArgumentError,
    MissingCredentialError,
    EmitterConnectionError,
    HandlerError
)


class TestEmitterError:
    """Test base EmitterError class."""

    def test_message_attribute(self):
        e = EmitterError("test message")
        assert e.message == "test message"
        assert "test message" in str(e)

    def test_is_exception(self):
        assert issubclass(EmitterError, Exception)

    def test_has_slots(self):
        assert 'message' in EmitterError.__slots__


class TestInvalidArgumentError:
    """Test InvalidArgumentError class."""

    def test_inherits(self):
        """Test InvalidArgumentError is both an EmitterError and a ValueError."""
        e = InvalidArgumentError("bad channel")
        assert isinstance(e, EmitterError)
        assert isinstance(e, ValueError)
        assert e.message == "bad channel"

    def test_caught_as_value_error(self):
        with pytest.raises(ValueError):
            raise InvalidArgumentError("x")


class TestMissingCredentialError:
    """Test MissingCredentialError class."""

    def test_inherits(self):
        e = MissingCredentialError("no key")
        assert isinstance(e, EmitterError)
        assert not isinstance(e, ValueError)


class TestEmitterConnectionError:
    """Test EmitterConnectionError class."""

    def test_return_code_default_none(self):
        assert EmitterConnectionError("lost").return_code is None

    def test_return_code_set(self):
        e = EmitterConnectionError("refused", return_code=5)
        assert e.return_code == 5
        assert e.message == "refused"


class TestHandlerError:
    """Test HandlerError class."""

    def test_attributes(self):
        def handler(topic, payload):
            pass
        cause = RuntimeError("boom")
        e = HandlerError(handler, 'k/chat/', cause)

        assert e.handler is handler
        assert e.topic == 'k/chat/'
        assert e.cause is cause
        assert 'k/chat/' in e.message
        assert 'boom' in e.message


class TestExceptionHierarchy:
    """Test the full exception hierarchy."""

    def test_catch_by_base_class(self):
        caught = []
        for cls in [InvalidArgumentError, MissingCredentialError, EmitterConnectionError]:
            try:
                raise cls("test %s" % cls.__name__)
            except EmitterError as e:
                caught.append(e.message)

        assert len(caught) == 3

    def test_siblings_not_related(self):
        assert not isinstance(MissingCredentialError("a"), InvalidArgumentError)
        assert not isinstance(EmitterConnectionError("b"), MissingCredentialError)
        assert not isinstance(InvalidArgumentError("c"), EmitterConnectionError)
