"""Stream gobbling: drain process output while notifying character and line listeners."""

from .gobbler import StreamGobbler, decoded_chars, gobble
from .splitter import CharType, LineSplitter
from .listener import (
    StreamListener,
    CallbackListener,
    LineCollector,
    PrintingListener,
    LoggingListener,
)
from .runner import gobble_all
from .process import ExecResult, gobble_process, run_command
from .connection import SSHConnection
from .exceptions import (
    StreamGobblerError,
    GobblerAlreadyRunError,
    SSHConnectionError,
    AuthenticationFailedError,
    HostUnreachableError,
    CommandExecutionFailedError,
)

__all__ = [
    "StreamGobbler",
    "decoded_chars",
    "gobble",
    "CharType",
    "LineSplitter",
    "StreamListener",
    "CallbackListener",
    "LineCollector",
    "PrintingListener",
    "LoggingListener",
    "gobble_all",
    "ExecResult",
    "gobble_process",
    "run_command",
    "SSHConnection",
    "StreamGobblerError",
    "GobblerAlreadyRunError",
    "SSHConnectionError",
    "AuthenticationFailedError",
    "HostUnreachableError",
    "CommandExecutionFailedError",
]
__version__ = "0.1.0"
