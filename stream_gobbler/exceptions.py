"""Custom exceptions for stream_gobbler package."""


class StreamGobblerError(Exception):
    """Base exception for stream_gobbler errors."""
    pass


class GobblerAlreadyRunError(StreamGobblerError):
    """Raised when gobble() is called a second time on the same gobbler."""
    pass


class SSHConnectionError(StreamGobblerError):
    """Base exception for SSH connection errors."""
    pass


class AuthenticationFailedError(SSHConnectionError):
    """Raised when SSH authentication fails."""
    pass


class HostUnreachableError(SSHConnectionError):
    """Raised when SSH host is unreachable or connection cannot be established."""
    pass


class CommandExecutionFailedError(SSHConnectionError):
    """Raised when a remote command's output streams cannot be drained."""
    pass
