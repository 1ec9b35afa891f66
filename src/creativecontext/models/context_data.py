# -*- coding: utf-8 -*-
"""Context detection result data model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from creativecontext.constants import (
    PERMISSION_REQUIRED_TEXT,
    SOFTWARE_PERMISSION_REQUIRED,
    SOFTWARE_UNKNOWN,
    TEXT_CONTENT_LIMIT,
)


@dataclass
class ContextData:
    """Structured result of one context detection run."""

    software: str = SOFTWARE_UNKNOWN
    confidence: float = 0.0
    panels: list[str] = field(default_factory=list)
    ui_elements: list[str] = field(default_factory=list)
    text_content: str = ""
    screenshot_path: str = ""

    @classmethod
    def unknown(cls) -> "ContextData":
        """Fully degraded result used for any capture or extraction failure."""
        return cls()

    @classmethod
    def permission_required(cls) -> "ContextData":
        return cls(software=SOFTWARE_PERMISSION_REQUIRED, text_content=PERMISSION_REQUIRED_TEXT)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def truncate_text_content(text: str, limit: int = TEXT_CONTENT_LIMIT) -> str:
    """Return the diagnostic prefix of the raw extracted text."""
    return text[:limit]
