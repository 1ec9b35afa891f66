# -*- coding: utf-8 -*-
"""Signal classifier for OCR text.

Identifies the creative application on screen and the visible panels and
controls by plain substring matching against the lowercased text. A
keyword counts when it appears anywhere, including inside a longer token.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from creativecontext.constants import SOFTWARE_UNKNOWN
from creativecontext.models.classification import ClassificationResult
from creativecontext.models.software_signature import SoftwareSignature
from creativecontext.pipeline.catalogue import (
    ELEMENT_CATALOGUE,
    PANEL_CATALOGUE,
    SOFTWARE_SIGNATURES,
)


class SignalClassifier:
    """Classify extracted screen text against static catalogues.

    Instances hold only immutable reference data, so one classifier can be
    shared freely between threads.
    """

    def __init__(
        self,
        signatures: Sequence[SoftwareSignature] = SOFTWARE_SIGNATURES,
        panels: Sequence[str] = PANEL_CATALOGUE,
        elements: Sequence[str] = ELEMENT_CATALOGUE,
    ) -> None:
        self.signatures = tuple(signatures)
        self.panels = tuple(panels)
        self.elements = tuple(elements)

    def classify(self, text: str) -> ClassificationResult:
        lower_text = text.lower()
        software, confidence = detect_software(lower_text, self.signatures)
        return ClassificationResult(
            software=software,
            confidence=confidence,
            panels=find_catalogue_entries(lower_text, self.panels),
            ui_elements=find_catalogue_entries(lower_text, self.elements),
        )

    def score_signatures(self, text: str) -> list[tuple[str, float]]:
        """Return (name, score) for every signature, in catalogue order."""
        lower_text = text.lower()
        return [(sig.name, score_signature(lower_text, sig)) for sig in self.signatures]


def score_signature(lower_text: str, signature: SoftwareSignature) -> float:
    """Fraction of the signature's keywords contained in *lower_text*."""
    matches = sum(1 for keyword in signature.keywords if keyword in lower_text)
    return matches / len(signature.keywords)


def detect_software(lower_text: str, signatures: Iterable[SoftwareSignature]) -> tuple[str, float]:
    """Return the best scoring signature name and its score.

    Only a strictly higher score replaces the current best, so ties keep
    the signature declared first.
    """
    best_name, best_score = SOFTWARE_UNKNOWN, 0.0
    for signature in signatures:
        score = score_signature(lower_text, signature)
        if score > best_score:
            best_name, best_score = signature.name, score
    return best_name, best_score


def find_catalogue_entries(lower_text: str, catalogue: Iterable[str]) -> tuple[str, ...]:
    """Catalogue entries found in *lower_text*, in declaration order, without duplicates."""
    found: list[str] = []
    for entry in catalogue:
        if entry in lower_text and entry not in found:
            found.append(entry)
    return tuple(found)
