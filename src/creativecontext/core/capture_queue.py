# -*- coding: utf-8 -*-
"""Background queue running context captures one at a time."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable

from creativecontext.models.context_data import ContextData
from creativecontext.pipeline.context_pipeline import ContextPipeline

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ContextData], None]


class CaptureQueue:
    """Single worker in front of a pipeline.

    ``submit`` returns immediately with a Future, so a caller can bound a
    run with ``future.result(timeout=...)``. A run abandoned that way keeps
    going on the worker; ``shutdown`` waits for it before releasing the
    OCR engine.
    """

    def __init__(self, pipeline: ContextPipeline) -> None:
        self.pipeline = pipeline
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="creative-context")
        self._futures: list[Future] = []
        self._lock = threading.Lock()
        self._closed = False

        self.capture_completed: CompletionCallback | None = None

    def submit(self) -> "Future[ContextData]":
        """Queue one capture-and-analyze run."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Capture queue is shut down")
            future = self._executor.submit(self._run)
            self._futures = [f for f in self._futures if not f.done()]
            self._futures.append(future)
        return future

    def _run(self) -> ContextData:
        context = self.pipeline.capture_and_analyze_context()
        if self.capture_completed is not None:
            try:
                self.capture_completed(context)
            except Exception:
                logger.error("capture_completed callback failed", exc_info=True)
        return context

    def pending(self) -> int:
        with self._lock:
            return sum(1 for f in self._futures if not f.done())

    def wait_for_all(self, timeout: float | None = None) -> None:
        with self._lock:
            futures = list(self._futures)
        if futures:
            wait(futures, timeout=timeout)

    def shutdown(self, cancel_pending: bool = False) -> None:
        """Stop accepting runs, let the running one finish, release the engine."""
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=True, cancel_futures=cancel_pending)
        self.pipeline.cleanup()
