# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import base64
import sys
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)


class FakeOcrEngine:
    """Stands in for a BaseOcrEngine backend."""

    def __init__(self, text: str = "", fail_on_recognize: bool = False, fail_on_init: bool = False) -> None:
        self.text = text
        self.fail_on_recognize = fail_on_recognize
        self.fail_on_init = fail_on_init
        self.initialized_with: list[str] = []
        self.recognized: list[Path] = []
        self.terminated = 0

    def initialize(self, language: str) -> None:
        if self.fail_on_init:
            raise RuntimeError("model load failed")
        self.initialized_with.append(language)

    def recognize(self, image_path) -> dict:
        if self.fail_on_recognize:
            raise RuntimeError("recognition failed")
        self.recognized.append(Path(image_path))
        return {"text": self.text}

    def terminate(self) -> None:
        self.terminated += 1


class FakeCapturer:
    def __init__(self, path: Path, fail: bool = False) -> None:
        self.path = path
        self.fail = fail
        self.calls = 0
        self.discarded: list[Path] = []

    def capture(self, on_before_hide, on_after_show) -> Path:
        self.calls += 1
        on_before_hide()
        on_after_show()
        if self.fail:
            raise RuntimeError("capturer unavailable")
        return self.path

    def discard(self, path) -> None:
        self.discarded.append(Path(path))


class FakeGate:
    def __init__(self, granted: bool = True, requires_consent: bool = True) -> None:
        self.granted = granted
        self.requires_consent = requires_consent
        self.ensure_calls: list[bool] = []
        self.settings_opened = 0

    def ensure_permission(self, prompt: bool = True) -> bool:
        self.ensure_calls.append(prompt)
        return self.granted

    def has_capture_permission(self) -> bool:
        return self.granted

    def open_system_settings(self) -> None:
        self.settings_opened += 1


@pytest.fixture
def sample_screenshot(tmp_path: Path) -> Path:
    path = tmp_path / "sample_screenshot.png"
    path.write_bytes(PNG_1X1_BYTES)
    return path


@pytest.fixture
def default_config() -> dict:
    from creativecontext.config import get_default_config

    return get_default_config()


@pytest.fixture
def fake_engine() -> FakeOcrEngine:
    return FakeOcrEngine(text="Premiere Timeline")


@pytest.fixture
def premiere_text() -> str:
    return (
        "File Edit Clip Sequence Markers Graphics\n"
        "Adobe Premiere Pro 2024 - Project Panel\n"
        "Timeline: Sequence 01   Lumetri Color   Essential Graphics\n"
        "Program Monitor   Source Monitor   Effect Controls\n"
    )
