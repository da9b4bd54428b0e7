"""Runs several gobblers side by side, one thread each."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Optional, Sequence

from .gobbler import StreamGobbler

logger = logging.getLogger(__name__)


def _report_failure(on_error: Callable[[BaseException], None], future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        on_error(exc)


def gobble_all(
    gobblers: Sequence[StreamGobbler],
    on_error: Optional[Callable[[BaseException], None]] = None,
) -> None:
    """
    Drain every gobbler concurrently and wait for all of them.

    Sessions share nothing, so no synchronization is needed between them.
    `on_error` is called from the failing worker as soon as a session fails;
    use it to close the producer so the remaining sessions reach end of stream.
    Once every session has finished, the first failure (in the given order)
    is raised.
    """
    if not gobblers:
        return
    with ThreadPoolExecutor(max_workers=len(gobblers), thread_name_prefix="gobbler") as executor:
        futures = [executor.submit(g.gobble) for g in gobblers]
        if on_error is not None:
            for future in futures:
                future.add_done_callback(partial(_report_failure, on_error))
    for future in futures:
        exc = future.exception()
        if exc is not None:
            logger.error(f"Gobbling failed: {exc}")
            raise exc
