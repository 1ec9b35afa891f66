# -*- coding: utf-8 -*-
"""Modular OCR engines - Abstract base and concrete implementations."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class OcrEngineError(RuntimeError):
    """Raised when an OCR engine cannot be initialized or fails to recognize."""


class BaseOcrEngine(ABC):
    """Abstract base class for OCR engines.

    Engines are created uninitialized. ``initialize`` loads the language
    model, ``recognize`` runs on one image, ``terminate`` releases it.
    """

    def __init__(self) -> None:
        self.language: str | None = None
        self.is_initialized = False

    @abstractmethod
    def _load(self, language: str) -> None:
        """Load the backend for *language*. Raise OcrEngineError on failure."""

    @abstractmethod
    def _recognize_text(self, image_path: Path) -> str:
        """Return the raw recognized text of *image_path*."""

    def _release(self) -> None:
        """Release backend resources. Override when the backend holds any."""

    def initialize(self, language: str) -> None:
        self._load(language)
        self.language = language
        self.is_initialized = True
        logger.info("%s initialized with language: %s", self.get_name(), language)

    def recognize(self, image_path: str | Path) -> dict[str, Any]:
        """Recognize text in an image file.

        Returns a dict with key ``text``.
        """
        if not self.is_initialized:
            raise OcrEngineError(f"{self.get_name()} is not initialized")
        path = Path(image_path)
        if not path.exists():
            raise OcrEngineError(f"Image not found: {path}")
        logger.debug("Extracting text from %s using %s...", path.name, self.get_name())
        try:
            text = self._recognize_text(path)
        except OcrEngineError:
            raise
        except Exception as e:
            raise OcrEngineError(f"{self.get_name()} extraction failed: {e}") from e
        logger.debug("%s recognized %d characters in %s", self.get_name(), len(text), path.name)
        return {"text": text}

    def terminate(self) -> None:
        if not self.is_initialized:
            return
        self._release()
        self.is_initialized = False
        logger.info("%s terminated", self.get_name())

    def get_name(self) -> str:
        """Get engine name."""
        return self.__class__.__name__


class TesseractOcrEngine(BaseOcrEngine):
    """Tesseract OCR engine implementation (pytesseract Python wrapper)."""

    def __init__(self, tesseract_cmd: str | None = None) -> None:
        super().__init__()
        self.tesseract_cmd = tesseract_cmd
        self._pytesseract: Any = None
        self._image_lib: Any = None

    def _load(self, language: str) -> None:
        try:
            import pytesseract
            from PIL import Image
        except ImportError as e:
            raise OcrEngineError(f"Tesseract OCR not available: {e}. Install with: pip install pytesseract") from e

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

        try:
            version = pytesseract.get_tesseract_version()
        except Exception as e:
            raise OcrEngineError(f"Tesseract binary not available: {e}") from e

        try:
            installed = set(pytesseract.get_languages(config=""))
        except Exception:
            logger.debug("Could not list installed Tesseract languages", exc_info=True)
            installed = set()
        missing = [lang for lang in language.split("+") if installed and lang not in installed]
        if missing:
            raise OcrEngineError(f"Tesseract language data missing: {', '.join(missing)}")

        logger.debug("Tesseract version: %s", version)
        self._pytesseract = pytesseract
        self._image_lib = Image

    def _recognize_text(self, image_path: Path) -> str:
        with self._image_lib.open(image_path) as image:
            return str(self._pytesseract.image_to_string(image, lang=self.language))

    def _release(self) -> None:
        self._pytesseract = None
        self._image_lib = None


class EasyOcrEngine(BaseOcrEngine):
    """EasyOCR engine implementation."""

    # Tesseract style tags to EasyOCR codes
    LANGUAGE_MAP = {"eng": "en", "deu": "de", "fra": "fr", "spa": "es", "ita": "it"}

    def __init__(self) -> None:
        super().__init__()
        self._reader: Any = None

    def _load(self, language: str) -> None:
        codes = [self.LANGUAGE_MAP.get(tag, tag) for tag in language.split("+")]
        try:
            import easyocr
            self._reader = easyocr.Reader(codes, gpu=False)
        except Exception as e:
            raise OcrEngineError(f"EasyOCR not available: {e}") from e

    def _recognize_text(self, image_path: Path) -> str:
        results = self._reader.readtext(str(image_path), detail=0)
        return "\n".join(str(text) for text in results)

    def _release(self) -> None:
        self._reader = None


class OcrEngineFactory:
    """Factory for creating OCR engine instances."""

    _available_cache: list[str] | None = None
    _probe_lock = threading.Lock()

    @staticmethod
    def get_available_engines() -> list[str]:
        """Get list of importable OCR engines. Result is cached per process."""
        with OcrEngineFactory._probe_lock:
            if OcrEngineFactory._available_cache is not None:
                return list(OcrEngineFactory._available_cache)

            available = []
            logger.info("Probing available OCR engines...")
            try:
                import pytesseract  # noqa: F401
                available.append("tesseract")
            except ImportError as e:
                logger.debug("pytesseract not available: %s", e)

            try:
                import easyocr  # noqa: F401
                available.append("easyocr")
            except (ImportError, OSError) as e:
                logger.debug("EasyOCR not available: %s: %s", type(e).__name__, e)

            OcrEngineFactory._available_cache = available
            return list(available)

    @staticmethod
    def create_engine(engine_name: str = "tesseract", tesseract_cmd: str | None = None) -> BaseOcrEngine:
        """Create an uninitialized OCR engine.

        Args:
            engine_name: "tesseract", "easyocr", or "auto"
            tesseract_cmd: optional explicit path to the tesseract binary

        Raises:
            OcrEngineError: for unknown names, or "auto" with nothing importable
        """
        if engine_name == "tesseract":
            return TesseractOcrEngine(tesseract_cmd=tesseract_cmd)

        if engine_name == "easyocr":
            return EasyOcrEngine()

        if engine_name == "auto":
            available = OcrEngineFactory.get_available_engines()
            if "tesseract" in available:
                return TesseractOcrEngine(tesseract_cmd=tesseract_cmd)
            if "easyocr" in available:
                return EasyOcrEngine()
            raise OcrEngineError("No OCR engine available. Install one: pip install pytesseract")

        raise OcrEngineError(f"Unknown OCR engine: {engine_name}")
