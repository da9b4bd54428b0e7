#!/usr/bin/env python3
"""Manual check of remote gobbling against a live VM."""

import logging
import sys

from stream_gobbler import LoggingListener, SSHConnection

logger = logging.getLogger("vm.streaming")


def main():
    """Stream a slow remote command line by line."""
    logging.basicConfig(level=logging.INFO)
    host = "192.168.215.3"
    user = "debian"
    key_path = "/root/.ssh/debian_vm_key"

    try:
        with SSHConnection(host=host, user=user, key_path=key_path) as conn:
            print("\n=== Testing long-running command ===")
            result = conn.execute(
                'for i in $(seq 1 5); do echo "Line $i"; echo "warn $i" >&2; sleep 1; done',
                stdout_listeners=[LoggingListener(logger, "stdout")],
                stderr_listeners=[LoggingListener(logger, "stderr")],
            )
            print(f"Long command completed with exit code: {result.exit_code}")

            print("\n=== Testing carriage-return progress output ===")
            result = conn.execute("printf '10%%\\r50%%\\r100%%\\r\\n'")
            print(f"Stdout: {result.stdout!r}")

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
