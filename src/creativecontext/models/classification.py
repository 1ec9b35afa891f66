# -*- coding: utf-8 -*-
"""Classification result data model."""

from __future__ import annotations

from dataclasses import dataclass, field

from creativecontext.constants import SOFTWARE_UNKNOWN


@dataclass(frozen=True)
class ClassificationResult:
    """Output of the signal classifier for one piece of text."""

    software: str = SOFTWARE_UNKNOWN
    confidence: float = 0.0
    panels: tuple[str, ...] = field(default_factory=tuple)
    ui_elements: tuple[str, ...] = field(default_factory=tuple)
