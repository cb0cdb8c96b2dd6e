"""Lightweight timing and memory instrumentation."""
import logging
import time
from contextlib import contextmanager

import psutil

logger = logging.getLogger(__name__)


@contextmanager
def timing_context(label: str, log=None):
    """Log the wall-clock time spent inside the block at DEBUG level.
    
    Yields a dict that receives an ``elapsed`` entry (seconds) on exit.
    ``log`` may be a ``logging.Logger`` or a ``ContextLogger``.
    """
    log = log or logger
    stats = {}
    start = time.perf_counter()
    try:
        yield stats
    finally:
        stats['elapsed'] = time.perf_counter() - start
        log.debug(f"{label}: {stats['elapsed'] * 1000:.3f}ms")


@contextmanager
def memory_profiler(label: str, log=None):
    """Log the resident set size change of the current process across the block.
    
    Yields a dict that receives ``rss_before``, ``rss_after`` and ``rss_delta``
    entries (bytes) on exit.
    """
    log = log or logger
    process = psutil.Process()
    stats = {'rss_before': process.memory_info().rss}
    try:
        yield stats
    finally:
        stats['rss_after'] = process.memory_info().rss
        stats['rss_delta'] = stats['rss_after'] - stats['rss_before']
        log.debug(f"{label}: RSS delta {stats['rss_delta'] / 1024:.1f}KB")
