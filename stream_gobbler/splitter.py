"""Line boundary detection over a character stream."""

from enum import Enum
from typing import Callable


class CharType(Enum):
    """Class of the previously seen character."""
    NIL = "nil"
    NORMAL = "normal"
    CR = "cr"
    LF = "lf"


class LineSplitter:
    """
    Splits characters into lines, one character at a time.
    Handles \\n, \\r and \\r\\n endings. A doubled terminator (\\n\\n, \\r\\r, \\n\\r)
    closes an extra, empty line; \\r\\n counts as a single terminator.
    Completed lines are passed to `on_line` without their terminators.
    """
    def __init__(self, on_line: Callable[[str], None]):
        self.on_line = on_line
        self.last_seen = CharType.NIL
        self._line: list[str] = []

    def feed(self, ch: str) -> None:
        if ch == "\r":
            if self.last_seen in (CharType.CR, CharType.LF):
                # \r\r or \n\r = an empty line
                self._emit()
            self.last_seen = CharType.CR
        elif ch == "\n":
            if self.last_seen is CharType.LF:
                # \n\n = an empty line
                self._emit()
            self.last_seen = CharType.LF
        else:
            if self.last_seen in (CharType.CR, CharType.LF):
                # start of a new line
                self._emit()
            self._line.append(ch)
            self.last_seen = CharType.NORMAL

    def finish(self) -> None:
        """Emit the last line, unless the stream was empty."""
        if self.last_seen is not CharType.NIL:
            self._emit()

    @property
    def pending(self) -> str:
        return "".join(self._line)

    def _emit(self) -> None:
        line = "".join(self._line)
        self._line.clear()
        self.on_line(line)
