# -*- coding: utf-8 -*-
"""Tests for the context detection pipeline."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from conftest import FakeCapturer, FakeGate, FakeOcrEngine
from creativecontext.config import get_default_config
from creativecontext.core import permissions
from creativecontext.core.permissions import CapturePermissionGate
from creativecontext.pipeline.context_pipeline import ContextPipeline, PipelineStage
from creativecontext.pipeline.text_extractor import TextExtractor


def _pipeline(
    capture_path: Path,
    text: str = "",
    gate: FakeGate | None = None,
    capturer: FakeCapturer | None = None,
    engine: FakeOcrEngine | None = None,
    **kwargs,
) -> ContextPipeline:
    engine = engine or FakeOcrEngine(text=text)
    return ContextPipeline(
        gate=gate or FakeGate(granted=True),
        capturer=capturer or FakeCapturer(capture_path),
        extractor=TextExtractor(engine_factory=lambda: engine),
        **kwargs,
    )


def test_full_run_produces_context(sample_screenshot: Path, premiere_text: str) -> None:
    pipeline = _pipeline(sample_screenshot, text=premiere_text)
    context = pipeline.capture_and_analyze_context()
    assert context.software == "Adobe Premiere Pro"
    assert context.confidence == 1.0
    assert "program monitor" in context.panels
    assert "timeline" in context.ui_elements
    assert context.text_content == premiere_text
    assert context.screenshot_path == str(sample_screenshot)
    assert pipeline.last_stage is PipelineStage.DONE


def test_permission_denied_skips_capture(sample_screenshot: Path) -> None:
    capturer = FakeCapturer(sample_screenshot)
    pipeline = _pipeline(sample_screenshot, gate=FakeGate(granted=False), capturer=capturer)
    context = pipeline.capture_and_analyze_context()
    assert context.software == "Permission Required"
    assert context.confidence == 0
    assert context.panels == [] and context.ui_elements == []
    assert context.screenshot_path == ""
    assert "Screen Recording" in context.text_content
    assert capturer.calls == 0


def test_unwritable_temp_dir_still_reports_permission_required(monkeypatch, sample_screenshot: Path) -> None:
    def _no_tmp(*args, **kwargs):
        raise OSError("no tmp")

    monkeypatch.setattr(permissions.tempfile, "mkstemp", _no_tmp)
    capturer = FakeCapturer(sample_screenshot)
    gate = CapturePermissionGate(platform="darwin", grant_query=lambda: False)
    pipeline = _pipeline(sample_screenshot, gate=gate, capturer=capturer)
    context = pipeline.capture_and_analyze_context()
    assert context.software == "Permission Required"
    assert "Screen Recording" in context.text_content
    assert capturer.calls == 0
    assert pipeline.failed_stage is None


def test_denied_without_consent_model_still_captures(sample_screenshot: Path) -> None:
    capturer = FakeCapturer(sample_screenshot)
    gate = FakeGate(granted=False, requires_consent=False)
    context = _pipeline(sample_screenshot, text="photoshop", gate=gate, capturer=capturer).capture_and_analyze_context()
    assert capturer.calls == 1
    assert context.software == "Adobe Photoshop"


def test_prompt_setting_is_passed_to_gate(sample_screenshot: Path) -> None:
    gate = FakeGate(granted=True)
    _pipeline(sample_screenshot, gate=gate, prompt_on_first_use=False).capture_and_analyze_context()
    assert gate.ensure_calls == [False]


def test_capture_failure_gives_unknown(sample_screenshot: Path) -> None:
    pipeline = _pipeline(sample_screenshot, capturer=FakeCapturer(sample_screenshot, fail=True))
    context = pipeline.capture_and_analyze_context()
    assert context.to_dict() == {
        "software": "Unknown",
        "confidence": 0.0,
        "panels": [],
        "ui_elements": [],
        "text_content": "",
        "screenshot_path": "",
    }
    assert pipeline.last_stage is PipelineStage.FAILED
    assert pipeline.failed_stage is PipelineStage.CAPTURING


def test_extraction_failure_gives_fully_degraded_result(sample_screenshot: Path) -> None:
    pipeline = _pipeline(sample_screenshot, engine=FakeOcrEngine(fail_on_recognize=True))
    context = pipeline.capture_and_analyze_context()
    assert context.software == "Unknown"
    assert context.confidence == 0
    assert context.screenshot_path == ""
    assert context.text_content == ""
    assert pipeline.failed_stage is PipelineStage.EXTRACTING


def test_engine_init_failure_gives_unknown(sample_screenshot: Path) -> None:
    context = _pipeline(sample_screenshot, engine=FakeOcrEngine(fail_on_init=True)).capture_and_analyze_context()
    assert context.software == "Unknown"
    assert context.screenshot_path == ""


def test_text_content_truncated_with_original_case(sample_screenshot: Path) -> None:
    text = "Adobe PREMIERE Pro " + "Ab" * 400
    context = _pipeline(sample_screenshot, text=text).capture_and_analyze_context()
    assert len(context.text_content) == 500
    assert context.text_content == text[:500]
    assert context.text_content.startswith("Adobe PREMIERE Pro")


def test_empty_ocr_text(sample_screenshot: Path) -> None:
    context = _pipeline(sample_screenshot, text="").capture_and_analyze_context()
    assert context.software == "Unknown"
    assert context.panels == []
    assert context.screenshot_path == str(sample_screenshot)


def test_capture_discarded_when_not_kept(sample_screenshot: Path) -> None:
    capturer = FakeCapturer(sample_screenshot)
    pipeline = _pipeline(sample_screenshot, text="mixer", capturer=capturer, keep_screenshots=False)
    context = pipeline.capture_and_analyze_context()
    assert capturer.discarded == [sample_screenshot]
    assert context.screenshot_path == str(sample_screenshot)


def test_engine_reused_across_runs(sample_screenshot: Path) -> None:
    created: list[FakeOcrEngine] = []

    def _factory() -> FakeOcrEngine:
        engine = FakeOcrEngine(text="lightroom")
        created.append(engine)
        return engine

    pipeline = ContextPipeline(
        gate=FakeGate(),
        capturer=FakeCapturer(sample_screenshot),
        extractor=TextExtractor(engine_factory=_factory),
    )
    pipeline.capture_and_analyze_context()
    pipeline.capture_and_analyze_context()
    assert len(created) == 1
    assert len(created[0].recognized) == 2


def test_cleanup_releases_engine_and_is_safe_twice(sample_screenshot: Path) -> None:
    engine = FakeOcrEngine(text="x")
    pipeline = _pipeline(sample_screenshot, engine=engine)
    pipeline.cleanup()
    pipeline.capture_and_analyze_context()
    pipeline.cleanup()
    pipeline.cleanup()
    assert engine.terminated == 1


def test_runs_are_serialized(sample_screenshot: Path) -> None:
    state = {"active": 0, "peak": 0}
    lock = threading.Lock()

    class _SlowCapturer(FakeCapturer):
        def capture(self, on_before_hide, on_after_show) -> Path:
            with lock:
                state["active"] += 1
                state["peak"] = max(state["peak"], state["active"])
            time.sleep(0.02)
            with lock:
                state["active"] -= 1
            return self.path

    pipeline = _pipeline(sample_screenshot, capturer=_SlowCapturer(sample_screenshot))
    threads = [threading.Thread(target=pipeline.capture_and_analyze_context) for _ in range(3)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert state["peak"] == 1


def test_analyze_image_skips_permission_and_capture(sample_screenshot: Path) -> None:
    gate = FakeGate(granted=False)
    capturer = FakeCapturer(sample_screenshot)
    pipeline = _pipeline(sample_screenshot, text="DaVinci Resolve Fusion", gate=gate, capturer=capturer)
    context = pipeline.analyze_image(sample_screenshot)
    assert context.software == "DaVinci Resolve"
    assert context.screenshot_path == str(sample_screenshot)
    assert gate.ensure_calls == []
    assert capturer.calls == 0


def test_analyze_image_failure_gives_unknown(sample_screenshot: Path) -> None:
    pipeline = _pipeline(sample_screenshot, engine=FakeOcrEngine(fail_on_recognize=True))
    assert pipeline.analyze_image(sample_screenshot).screenshot_path == ""


def test_permission_pass_throughs(sample_screenshot: Path) -> None:
    gate = FakeGate(granted=False)
    pipeline = _pipeline(sample_screenshot, gate=gate)
    assert pipeline.check_permission() is False
    pipeline.open_permission_settings()
    assert gate.settings_opened == 1


def test_from_config_applies_settings(tmp_path: Path) -> None:
    config = get_default_config()
    config["ocr"]["language"] = "deu"
    config["ocr"]["engine"] = "easyocr"
    config["capture"]["output_dir"] = str(tmp_path / "shots")
    config["capture"]["monitor"] = 0
    config["capture"]["keep_screenshots"] = False
    config["permissions"]["prompt_on_first_use"] = False
    pipeline = ContextPipeline.from_config(config)
    assert pipeline.extractor.language == "deu"
    assert pipeline.extractor.engine_name == "easyocr"
    assert pipeline.capturer.output_dir == tmp_path / "shots"
    assert pipeline.capturer.monitor == 0
    assert pipeline.keep_screenshots is False
    assert pipeline.prompt_on_first_use is False
