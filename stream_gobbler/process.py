"""Gobbling the output of local subprocesses."""

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Union

from .gobbler import DEFAULT_ENCODING, DEFAULT_ERRORS, StreamGobbler
from .listener import LineCollector, StreamListener
from .runner import gobble_all

logger = logging.getLogger(__name__)


@dataclass
class ExecResult:
    stdout: str
    stderr: str
    exit_code: int


def _kill(process: subprocess.Popen) -> None:
    """Kill the process, and its whole group when it leads one.
    Background children of a shell keep the pipes open otherwise."""
    if hasattr(os, "killpg"):
        try:
            if os.getpgid(process.pid) == process.pid:
                os.killpg(process.pid, signal.SIGKILL)
                return
        except ProcessLookupError:
            return
    process.kill()


def gobble_process(
    process: subprocess.Popen,
    stdout_listeners: Sequence[StreamListener] = (),
    stderr_listeners: Sequence[StreamListener] = (),
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
) -> int:
    """
    Drain stdout and stderr of a started process so it never blocks on a
    full pipe, then wait for it.
    Pipes that were not opened (None) are skipped.
    Returns the process exit code.
    """
    gobblers = []
    if process.stdout is not None:
        gobblers.append(StreamGobbler.with_listeners(process.stdout, stdout_listeners, encoding, errors))
    if process.stderr is not None:
        gobblers.append(StreamGobbler.with_listeners(process.stderr, stderr_listeners, encoding, errors))

    try:
        gobble_all(gobblers, on_error=lambda exc: _kill(process))
    except Exception:
        _kill(process)
        process.wait()
        raise
    return process.wait()


def run_command(
    args: Union[str, Sequence[str]],
    stdout_listeners: Sequence[StreamListener] = (),
    stderr_listeners: Sequence[StreamListener] = (),
    encoding: str = DEFAULT_ENCODING,
    errors: str = DEFAULT_ERRORS,
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ExecResult:
    """
    Run a local command, streaming its output to the given listeners.
    Args:
        args: Command to run; a string is run through the shell.
        stdout_listeners: Listeners for the command's standard output.
        stderr_listeners: Listeners for the command's standard error.
        encoding: Text encoding of both streams.
        errors: Decode error policy.
        cwd: Working directory for the command.
        env: Environment for the command.
    Returns:
        ExecResult(stdout, stderr, exit_code), stdout and stderr exactly as read
    """
    logger.info(f"Running command: {args}")
    out = LineCollector()
    err = LineCollector()
    process = subprocess.Popen(
        args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        stdin=subprocess.DEVNULL,
        shell=isinstance(args, str),
        start_new_session=True,
        cwd=cwd,
        env=env,
    )
    exit_code = gobble_process(
        process,
        [out, *stdout_listeners],
        [err, *stderr_listeners],
        encoding,
        errors,
    )
    logger.info(f"Command exited with code {exit_code}")
    return ExecResult(stdout=out.text(), stderr=err.text(), exit_code=exit_code)
