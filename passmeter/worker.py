"""
passmeter.worker
Run generate() off the interactive thread, one generation at a time.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from .generator import generate

logger = logging.getLogger(__name__)


class GeneratorBusyError(RuntimeError):
    """Raised when a generation is requested while another is in flight."""


class GenerationWorker:
    """
    Single-flight background generator.

    submit() returns a Future; the optional callback receives the password
    on the worker thread, so UI code must hand it back to its own thread.
    """

    def __init__(self):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="passmeter-gen")
        self._lock = threading.Lock()
        self._current: Optional[Future] = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._current is not None and not self._current.done()

    def submit(self, length: int, callback: Optional[Callable[[str], None]] = None) -> "Future[str]":
        with self._lock:
            if self._current is not None and not self._current.done():
                raise GeneratorBusyError("a password is already being generated")
            logger.debug("starting generation, length=%d", length)
            fut = self._executor.submit(self._run, length, callback)
            self._current = fut
        return fut

    def _run(self, length: int, callback: Optional[Callable[[str], None]]) -> str:
        pw = generate(length)
        if callback is not None:
            callback(pw)
        return pw

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
