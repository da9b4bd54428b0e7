"""Gobbling the output of commands run over SSH."""

import logging
from contextlib import closing
from pathlib import Path
from typing import Optional, Sequence

import paramiko
from paramiko.ssh_exception import (
    AuthenticationException,
    NoValidConnectionsError,
    SSHException,
)

from .exceptions import (
    SSHConnectionError,
    AuthenticationFailedError,
    HostUnreachableError,
    CommandExecutionFailedError,
)
from .gobbler import DEFAULT_ENCODING, DEFAULT_ERRORS, StreamGobbler
from .listener import LineCollector, StreamListener, StreamName
from .process import ExecResult
from .runner import gobble_all

logger = logging.getLogger(__name__)

# First match wins: NoValidConnectionsError is an OSError, and
# AuthenticationException an SSHException.
_CONNECT_ERRORS = (
    (AuthenticationException, AuthenticationFailedError),
    (NoValidConnectionsError, HostUnreachableError),
    (SSHException, SSHConnectionError),
    (OSError, HostUnreachableError),
)


class ChannelReader:
    """
    Byte stream over one side of a paramiko channel.
    Transport failures surface as CommandExecutionFailedError; everything
    above the read (decoding, listeners) is left alone.
    """
    def __init__(self, channel_file, stream_name: StreamName, command: str):
        self.channel_file = channel_file
        self.stream_name = stream_name
        self.command = command

    def read(self, size: int = -1) -> bytes:
        try:
            return self.channel_file.read(size)
        except (SSHException, OSError, EOFError) as e:
            logger.error(f"Reading {self.stream_name} of {self.command!r} failed: {e}")
            raise CommandExecutionFailedError(
                f"Reading {self.stream_name} of {self.command!r} failed: {e}"
            ) from e

    def close(self) -> None:
        self.channel_file.close()


class SSHConnection:
    """A paramiko client used to run commands whose output is gobbled.

    Usage:
        with SSHConnection("10.0.0.5", "debian", "~/.ssh/id_rsa") as ssh:
            result = ssh.execute("make", stdout_listeners=[PrintingListener("stdout")])
    """

    def __init__(self, host: str, user: str, key_path: str, port: int = 22, timeout: float = 30):
        self.host = host
        self.user = user
        self.key_path = Path(key_path).expanduser()
        self.port = port
        self.timeout = timeout
        self._client: Optional[paramiko.SSHClient] = None

    def open(self) -> None:
        """Connect with the private key only (no agent, no key discovery).

        Raises:
            AuthenticationFailedError, HostUnreachableError, SSHConnectionError
        """
        self.close()
        client = paramiko.SSHClient()
        client.load_system_host_keys()
        logger.info(f"Opening SSH session to {self}")
        try:
            client.connect(
                hostname=self.host,
                port=self.port,
                username=self.user,
                key_filename=str(self.key_path),
                timeout=self.timeout,
                look_for_keys=False,
                allow_agent=False,
            )
        except Exception as e:
            client.close()
            for source, target in _CONNECT_ERRORS:
                if isinstance(e, source):
                    logger.error(f"SSH session to {self} failed: {e}")
                    raise target(f"{self}: {e}") from e
            raise
        self._client = client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def execute(
        self,
        command: str,
        stdout_listeners: Sequence[StreamListener] = (),
        stderr_listeners: Sequence[StreamListener] = (),
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
    ) -> ExecResult:
        """
        Run a command remotely, gobbling stdout and stderr as they arrive.
        Listener exceptions propagate unchanged; a failing channel raises
        CommandExecutionFailedError. The channel is closed on every path.
        """
        transport = self._client.get_transport() if self._client else None
        if transport is None or not transport.is_active():
            raise SSHConnectionError(f"{self} is not open")

        try:
            chan = transport.open_session()
        except SSHException as e:
            raise CommandExecutionFailedError(f"Cannot open a channel for {command!r}: {e}") from e

        with closing(chan):
            logger.info(f"Executing remote command: {command}")
            try:
                chan.exec_command(command)
            except SSHException as e:
                raise CommandExecutionFailedError(f"Cannot start {command!r}: {e}") from e
            out, err = LineCollector(), LineCollector()
            gobble_all([
                StreamGobbler.with_listeners(
                    ChannelReader(chan.makefile("rb"), "stdout", command),
                    [out, *stdout_listeners], encoding, errors,
                ),
                StreamGobbler.with_listeners(
                    ChannelReader(chan.makefile_stderr("rb"), "stderr", command),
                    [err, *stderr_listeners], encoding, errors,
                ),
            ], on_error=lambda exc: chan.close())
            exit_code = chan.recv_exit_status()

        logger.info(f"Remote command exited with code {exit_code}")
        return ExecResult(stdout=out.text(), stderr=err.text(), exit_code=exit_code)

    def __enter__(self) -> "SSHConnection":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"
