# -*- coding: utf-8 -*-
"""Context detection pipeline: permission -> capture -> OCR -> classify."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any

from creativecontext.core.permissions import CapturePermissionGate
from creativecontext.models.classification import ClassificationResult
from creativecontext.models.context_data import ContextData, truncate_text_content
from creativecontext.pipeline.classifier import SignalClassifier
from creativecontext.pipeline.screen_capturer import ScreenCapturer
from creativecontext.pipeline.text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    IDLE = "idle"
    PERMISSION_CHECK = "permission_check"
    CAPTURING = "capturing"
    EXTRACTING = "extracting"
    CLASSIFYING = "classifying"
    DONE = "done"
    FAILED = "failed"


def _noop() -> None:
    pass


class ContextPipeline:
    """Detect which creative application the user is working in.

    Every public method returns data instead of raising: failures map to
    the degraded ``ContextData`` results. Runs are serialized by a
    run-level lock so one OCR engine is never used by two runs at once.
    """

    def __init__(
        self,
        gate: CapturePermissionGate | None = None,
        capturer: ScreenCapturer | None = None,
        extractor: TextExtractor | None = None,
        classifier: SignalClassifier | None = None,
        prompt_on_first_use: bool = True,
        keep_screenshots: bool = True,
    ) -> None:
        self.gate = gate or CapturePermissionGate()
        self.capturer = capturer or ScreenCapturer()
        self.extractor = extractor or TextExtractor()
        self.classifier = classifier or SignalClassifier()
        self.prompt_on_first_use = prompt_on_first_use
        self.keep_screenshots = keep_screenshots
        self.last_stage = PipelineStage.IDLE
        self.failed_stage: PipelineStage | None = None
        self._run_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ContextPipeline":
        ocr = config.get("ocr", {})
        capture = config.get("capture", {})
        permissions = config.get("permissions", {})
        return cls(
            capturer=ScreenCapturer(
                output_dir=capture.get("output_dir", ".captures"),
                monitor=int(capture.get("monitor", 1)),
            ),
            extractor=TextExtractor(
                language=str(ocr.get("language", "eng")),
                engine_name=str(ocr.get("engine", "tesseract")),
                tesseract_cmd=ocr.get("tesseract_cmd") or None,
            ),
            prompt_on_first_use=bool(permissions.get("prompt_on_first_use", True)),
            keep_screenshots=bool(capture.get("keep_screenshots", True)),
        )

    def capture_and_analyze_context(self) -> ContextData:
        """Capture the screen and classify it. Never raises."""
        with self._run_lock:
            self.failed_stage = None
            try:
                return self._run()
            except Exception:
                return self._fail()

    def analyze_image(self, image_path: str | Path) -> ContextData:
        """Classify an existing image, skipping permission and capture. Never raises."""
        with self._run_lock:
            self.failed_stage = None
            try:
                text = self._extract(Path(image_path))
                return self._assemble(text, self._classify(text), str(image_path))
            except Exception:
                return self._fail()

    def check_permission(self) -> bool:
        return self.gate.has_capture_permission()

    def open_permission_settings(self) -> None:
        self.gate.open_system_settings()

    def cleanup(self) -> None:
        """Release the OCR engine. Safe to call when it was never initialized."""
        try:
            self.extractor.shutdown()
        except Exception:
            logger.error("Error releasing OCR engine", exc_info=True)

    def _run(self) -> ContextData:
        logger.info("Capturing screen context...")
        self._enter(PipelineStage.PERMISSION_CHECK)
        granted = self.gate.ensure_permission(prompt=self.prompt_on_first_use)
        if not granted and self.gate.requires_consent:
            logger.info("Screen recording permission required, skipping capture")
            self._enter(PipelineStage.DONE)
            return ContextData.permission_required()

        self._enter(PipelineStage.CAPTURING)
        screenshot_path = self.capturer.capture(_noop, _noop)
        logger.debug("Screenshot captured: %s", screenshot_path)

        try:
            text = self._extract(screenshot_path)
        finally:
            if not self.keep_screenshots:
                self.capturer.discard(screenshot_path)

        return self._assemble(text, self._classify(text), str(screenshot_path))

    def _extract(self, image_path: Path) -> str:
        self._enter(PipelineStage.EXTRACTING)
        self.extractor.ensure_ready()
        return self.extractor.extract(image_path)

    def _classify(self, text: str) -> ClassificationResult:
        self._enter(PipelineStage.CLASSIFYING)
        return self.classifier.classify(text)

    def _assemble(self, text: str, result: ClassificationResult, screenshot_path: str) -> ContextData:
        context = ContextData(
            software=result.software,
            confidence=result.confidence,
            panels=list(result.panels),
            ui_elements=list(result.ui_elements),
            text_content=truncate_text_content(text),
            screenshot_path=screenshot_path,
        )
        self._enter(PipelineStage.DONE)
        logger.info(
            "Context analysis complete: software=%s confidence=%.2f panels=%d ui_elements=%d",
            context.software,
            context.confidence,
            len(context.panels),
            len(context.ui_elements),
        )
        return context

    def _fail(self) -> ContextData:
        self.failed_stage = self.last_stage
        logger.exception("Error capturing context during %s", self.last_stage.value)
        self.last_stage = PipelineStage.FAILED
        return ContextData.unknown()

    def _enter(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline stage: %s", stage.value)
        self.last_stage = stage
