"""Shared pytest fixtures for stream_gobbler tests."""

import pytest
from unittest.mock import Mock, patch

from stream_gobbler.listener import StreamListener


class BrokenStream:
    """Byte stream that yields `data` one byte at a time, then raises `error`."""

    def __init__(self, data: bytes, error: Exception):
        self.data = data
        self.error = error
        self.pos = 0
        self.closed = False

    def read(self, size=-1):
        if self.pos >= len(self.data):
            raise self.error
        chunk = self.data[self.pos:self.pos + size]
        self.pos += len(chunk)
        return chunk

    def close(self):
        self.closed = True


class RecordingListener(StreamListener):
    """Appends (name, kind, value) to a shared event log."""

    def __init__(self, name, events):
        self.name = name
        self.events = events

    def on_char(self, char):
        self.events.append((self.name, "char", char))

    def on_line(self, line):
        self.events.append((self.name, "line", line))


@pytest.fixture
def broken_stream():
    """Factory for streams failing after some data."""
    return BrokenStream


@pytest.fixture
def events():
    return []


@pytest.fixture
def recorder(events):
    return RecordingListener("L1", events)


@pytest.fixture
def remote():
    """A patched paramiko client whose channel streams are in-memory buffers.

    Set `channel.makefile.return_value` / `channel.makefile_stderr.return_value`
    to the bytes streams a test needs.
    """
    with patch("stream_gobbler.connection.paramiko.SSHClient") as client_cls:
        client = client_cls.return_value
        transport = client.get_transport.return_value
        transport.is_active.return_value = True
        channel = transport.open_session.return_value
        channel.recv_exit_status.return_value = 0
        yield Mock(client_cls=client_cls, client=client, transport=transport, channel=channel)
