"""Tests for the bundled listeners."""

import io
import logging

from stream_gobbler import (
    StreamGobbler,
    StreamListener,
    CallbackListener,
    LineCollector,
    PrintingListener,
    LoggingListener,
)


class TestListeners:

    def test_base_listener_is_noop(self):
        listener = StreamListener()
        listener.on_char("x")
        listener.on_line("line")

    def test_callback_listener(self):
        chars, lines = [], []
        listener = CallbackListener(on_char=chars.append, on_line=lines.append)
        StreamGobbler(io.BytesIO(b"hi\nyo"), listener).gobble()
        assert chars == ["h", "i", "\n", "y", "o"]
        assert lines == ["hi", "yo"]

    def test_callback_listener_line_only(self):
        lines = []
        StreamGobbler(io.BytesIO(b"a\n\nb"), CallbackListener(on_line=lines.append)).gobble()
        assert lines == ["a", "", "b"]

    def test_line_collector(self):
        collector = LineCollector()
        StreamGobbler(io.BytesIO(b"one\r\ntwo\n"), collector).gobble()
        assert collector.lines == ["one", "two"]
        assert collector.text() == "one\r\ntwo\n"
        assert collector.collected() == "one\ntwo"

    def test_printing_listener(self, capsys):
        listener = PrintingListener("stderr")
        StreamGobbler(io.BytesIO(b"Warning: config not found\n"), listener).gobble()
        assert capsys.readouterr().out == "[stderr] Warning: config not found\n"

    def test_printing_listener_custom_file(self):
        out = io.StringIO()
        StreamGobbler(io.BytesIO(b"a\nb"), PrintingListener("stdout", file=out)).gobble()
        assert out.getvalue() == "[stdout] a\n[stdout] b\n"

    def test_logging_listener(self, caplog):
        log = logging.getLogger("tests.child")
        with caplog.at_level(logging.INFO, logger="tests.child"):
            StreamGobbler(io.BytesIO(b"Task completed!\n"), LoggingListener(log, "stdout")).gobble()
        assert [r.getMessage() for r in caplog.records if r.name == "tests.child"] == [
            "[stdout] Task completed!"
        ]
