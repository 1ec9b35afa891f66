# -*- coding: utf-8 -*-
"""Long-lived OCR engine owner."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

from creativecontext.pipeline.ocr_engines import BaseOcrEngine, OcrEngineFactory

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], BaseOcrEngine]


class TextExtractor:
    """Own a single lazily initialized OCR engine.

    The engine is built on the first ``ensure_ready`` call and kept until
    ``shutdown``. All engine access goes through one lock: initialization
    is exclusive and recognition is serialized, since the backends are
    not safe for concurrent use.
    """

    def __init__(
        self,
        engine_factory: EngineFactory | None = None,
        language: str = "eng",
        engine_name: str = "tesseract",
        tesseract_cmd: str | None = None,
    ) -> None:
        self.language = language
        self.engine_name = engine_name
        self._engine_factory = engine_factory or (
            lambda: OcrEngineFactory.create_engine(engine_name, tesseract_cmd=tesseract_cmd)
        )
        self._engine: BaseOcrEngine | None = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        with self._lock:
            return self._engine is not None

    def ensure_ready(self) -> None:
        """Initialize the engine on first call; later calls are no-ops."""
        with self._lock:
            self._ensure_ready_locked()

    def _ensure_ready_locked(self) -> BaseOcrEngine:
        if self._engine is not None:
            return self._engine
        logger.info("Initializing OCR engine '%s' (%s)...", self.engine_name, self.language)
        engine = self._engine_factory()
        engine.initialize(self.language)
        self._engine = engine
        logger.info("OCR engine ready")
        return engine

    def extract(self, capture: str | Path) -> str:
        """Run recognition on *capture* and return the raw text.

        Errors are not handled here; the caller owns the fallback.
        """
        with self._lock:
            result = self._ensure_ready_locked().recognize(capture)
        return str(result.get("text") or "")

    def shutdown(self) -> None:
        """Release the engine. Safe to call when never initialized."""
        with self._lock:
            engine, self._engine = self._engine, None
            if engine is None:
                return
            try:
                engine.terminate()
            finally:
                logger.info("OCR engine terminated")
