# -*- coding: utf-8 -*-
"""Reference catalogues for creative software detection.

Declaration order matters: signature order decides score ties and the
panel/element order is the order results are reported in.
"""

from __future__ import annotations

from creativecontext.models.software_signature import SoftwareSignature


SOFTWARE_SIGNATURES: tuple[SoftwareSignature, ...] = (
    SoftwareSignature(
        "Adobe Premiere Pro",
        ("premiere", "timeline", "lumetri", "essential graphics", "sequence"),
    ),
    SoftwareSignature(
        "DaVinci Resolve",
        ("davinci", "resolve", "color", "fusion", "fairlight", "deliver"),
    ),
    SoftwareSignature(
        "Adobe Photoshop",
        ("photoshop", "layers", "brush", "filter", "adjustment"),
    ),
    SoftwareSignature(
        "Adobe After Effects",
        ("after effects", "composition", "timeline", "effects", "precomp"),
    ),
    SoftwareSignature(
        "Adobe Illustrator",
        ("illustrator", "artboard", "pen tool", "pathfinder", "stroke"),
    ),
    SoftwareSignature(
        "Final Cut Pro",
        ("final cut", "event", "project", "blade", "magnetic timeline"),
    ),
    SoftwareSignature(
        "Adobe Lightroom",
        ("lightroom", "develop", "library", "histogram", "tone curve"),
    ),
    SoftwareSignature(
        "Logic Pro",
        ("logic pro", "track area", "mixer", "library", "score editor"),
    ),
)


def _unique(entries: list[str]) -> tuple[str, ...]:
    # dict preserves insertion order, first declaration wins
    return tuple(dict.fromkeys(entry.lower() for entry in entries))


PANEL_CATALOGUE: tuple[str, ...] = _unique([
    "project panel", "timeline panel", "program monitor", "source monitor",
    "effect controls", "lumetri color", "essential graphics", "essential sound",
    "media pool", "inspector", "color wheels", "scopes", "mixer",
    "layers panel", "properties panel", "history panel", "tools panel",
    "color panel", "swatches panel", "brush panel", "character panel",
])

ELEMENT_CATALOGUE: tuple[str, ...] = _unique([
    # Common
    "timeline", "inspector", "browser", "viewer", "canvas", "toolbar", "panel", "window",
    # Premiere Pro
    "program monitor", "source monitor", "project panel", "effect controls", "lumetri color",
    "essential graphics", "essential sound", "sequence", "media browser",
    # DaVinci Resolve
    "media pool", "timeline viewer", "inspector panel", "color wheels", "nodes", "gallery",
    "scopes", "mixer", "fairlight", "fusion page", "edit page", "color page",
    # Photoshop
    "layers panel", "properties panel", "history panel", "brush panel", "color panel",
    "channels", "paths", "adjustment layers", "filter gallery",
    # After Effects
    "composition panel", "project panel", "timeline panel", "effect controls panel",
    "character panel", "paragraph panel", "align panel", "tracker panel",
    # General editing terms
    "play", "pause", "stop", "record", "zoom", "scale", "rotate", "position",
    "opacity", "blend mode", "mask", "keyframe", "transition", "effect",
])
