import logging
import sys
from typing import Callable, Literal, Optional, TextIO

StreamName = Literal["stdout", "stderr"]


class StreamListener:
    """
    Receives the events of a gobbled stream.
    Subclasses override either callback; both default to doing nothing.
    """
    def on_char(self, char: str) -> None:
        pass

    def on_line(self, line: str) -> None:
        pass


class CallbackListener(StreamListener):
    """Adapts plain callables to the listener interface."""
    def __init__(
        self,
        on_char: Optional[Callable[[str], None]] = None,
        on_line: Optional[Callable[[str], None]] = None,
    ):
        self._char_cb = on_char
        self._line_cb = on_line

    def on_char(self, char: str) -> None:
        if self._char_cb:
            self._char_cb(char)

    def on_line(self, line: str) -> None:
        if self._line_cb:
            self._line_cb(line)


class LineCollector(StreamListener):
    """
    Keeps every line and character it is notified of, for later retrieval.
    """
    def __init__(self):
        self.lines: list[str] = []
        self.chars: list[str] = []

    def on_char(self, char: str) -> None:
        self.chars.append(char)

    def on_line(self, line: str) -> None:
        self.lines.append(line)

    def text(self) -> str:
        """The stream content exactly as it was read."""
        return "".join(self.chars)

    def collected(self) -> str:
        return "\n".join(self.lines)


class PrintingListener(StreamListener):
    def __init__(self, stream_name: StreamName, file: Optional[TextIO] = None):
        self.stream_name = stream_name
        self.file = file

    def on_line(self, line: str) -> None:
        # Keep it minimal: callers can supply their own listener
        print(f"[{self.stream_name}] {line}", file=self.file or sys.stdout)


class LoggingListener(StreamListener):
    def __init__(self, logger: logging.Logger, stream_name: StreamName, level: int = logging.INFO):
        self.logger = logger
        self.stream_name = stream_name
        self.level = level

    def on_line(self, line: str) -> None:
        self.logger.log(self.level, "[%s] %s", self.stream_name, line)
