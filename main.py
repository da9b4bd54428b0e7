"""Example usage of stream_gobbler package."""

import sys

from stream_gobbler import CallbackListener, PrintingListener, run_command


def main():
    """Demonstrate gobbling a local command's output."""
    print("Stream Gobbler Example")

    chars = []
    result = run_command(
        [sys.executable, "-c", "import sys; print('hello'); print('progress 50%', end='\\r'); print('done'); print('oops', file=sys.stderr)"],
        stdout_listeners=[PrintingListener("stdout"), CallbackListener(on_char=chars.append)],
        stderr_listeners=[PrintingListener("stderr")],
    )
    print(f"Exit code: {result.exit_code}")
    print(f"Characters seen on stdout: {len(chars)}")


if __name__ == "__main__":
    main()
