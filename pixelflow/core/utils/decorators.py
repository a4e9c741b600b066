"""
Timing utilities.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator


@contextmanager
def timer() -> Iterator[Dict[str, float]]:
    """
    Measure elapsed wall time of a block.

    The yielded dict is filled in when the block exits, so read it after the
    with statement:

        >>> with timer() as t:
        ...     do_work()
        >>> t["ms"]
    """
    result: Dict[str, float] = {"ms": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = (time.perf_counter() - start) * 1000.0
