# -*- coding: utf-8 -*-
"""Software signature reference data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SoftwareSignature:
    """Keyword set diagnostic of one creative application.

    Keywords are lowercase and matched as plain substrings of the
    lowercased OCR text.
    """

    name: str
    keywords: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.keywords:
            raise ValueError(f"Signature '{self.name}' needs at least one keyword")
        object.__setattr__(self, "keywords", tuple(k.lower() for k in self.keywords))
