"""Stream gobbler: drains a stream, notifying listeners of every character and line."""

import codecs
import logging
from typing import BinaryIO, Iterable, Iterator

from .exceptions import GobblerAlreadyRunError
from .listener import StreamListener
from .splitter import LineSplitter

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
DEFAULT_ERRORS = "replace"


def decoded_chars(
    stream: BinaryIO,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> Iterator[str]:
    """
    Yield the characters of `stream` one at a time, decoding with `encoding`.

    Bytes are pulled one by one so that a character is available as soon as
    its last byte has arrived, even when the producer is still running.
    A stream that already returns text is passed through unchanged.
    The stream is not closed here.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors)
    while True:
        data = stream.read(1)
        if not data:
            break
        if isinstance(data, str):
            yield data
            continue
        yield from decoder.decode(data)
    # Bytes of a truncated trailing sequence
    yield from decoder.decode(b"", final=True)


class StreamGobbler:
    """
    Consumes an input stream, notifying listeners on every character and
    every line read.

    It is essential to consume the STDOUT and STDERR of a process, as some
    processes hang when their output buffers fill up.

    A gobbler drains its stream exactly once. The stream is closed when
    gobble() returns or raises.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *listeners: StreamListener,
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
    ) -> None:
        """Initialize the gobbler.

        Args:
            stream: Byte stream to drain (anything with read(n))
            *listeners: Listeners, notified in the given order
            encoding: Text encoding of the stream (default: utf-8)
            errors: Decode error policy (default: replace)
        """
        self.stream = stream
        self.encoding = encoding
        self.errors = errors
        self.listeners: list[StreamListener] = list(listeners)
        self._used = False
        self._lines = 0

    @classmethod
    def with_listeners(
        cls,
        stream: BinaryIO,
        listeners: Iterable[StreamListener],
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
    ) -> "StreamGobbler":
        return cls(stream, *listeners, encoding=encoding, errors=errors)

    def add_listener(self, listener: StreamListener) -> None:
        self.listeners.append(listener)

    def gobble(self) -> None:
        """Read the stream to the end.

        Raises:
            GobblerAlreadyRunError: If this gobbler has already been run
            Whatever the stream or a listener raises, unchanged. Lines still
            being assembled when the stream fails are not emitted.
        """
        if self._used:
            raise GobblerAlreadyRunError("StreamGobbler can only gobble once")
        self._used = True

        splitter = LineSplitter(self._on_line)
        chars = 0
        logger.debug(f"Gobbling stream {self.stream!r} ({self.encoding})")
        try:
            for ch in decoded_chars(self.stream, self.encoding, self.errors):
                splitter.feed(ch)
                self._on_char(ch)
                chars += 1
            # drain the last line
            splitter.finish()
        finally:
            self.stream.close()
        logger.debug(f"Stream exhausted after {chars} chars, {self._lines} lines")

    def _on_line(self, line: str) -> None:
        self._lines += 1
        for listener in self.listeners:
            listener.on_line(line)

    def _on_char(self, char: str) -> None:
        for listener in self.listeners:
            listener.on_char(char)


def gobble(
    stream: BinaryIO,
    *listeners: StreamListener,
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> None:
    """Drain `stream` once with a fresh StreamGobbler."""
    StreamGobbler(stream, *listeners, encoding=encoding, errors=errors).gobble()
