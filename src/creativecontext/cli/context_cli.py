# -*- coding: utf-8 -*-
"""CLI commands for context detection."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer

from creativecontext.config import ConfigError, load_config
from creativecontext.constants import APP_NAME
from creativecontext.core.permissions import CapturePermissionGate
from creativecontext.models.context_data import ContextData
from creativecontext.pipeline.classifier import SignalClassifier
from creativecontext.pipeline.context_pipeline import ContextPipeline
from creativecontext.pipeline.ocr_engines import OcrEngineFactory
from creativecontext.utils.file_utils import write_json_file
from creativecontext.utils.logger import setup_session_logging

app = typer.Typer(help="Detect the creative application on screen from OCR text")
logger = logging.getLogger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    settings: Optional[Path] = typer.Option(None, help="Path to settings.json"),
    verbose: bool = typer.Option(False, help="Verbose output"),
) -> None:
    """Load settings and configure logging for every command."""
    try:
        config = load_config(settings)
    except (ConfigError, ValueError) as e:
        typer.echo(f"Invalid settings: {e}", err=True)
        raise typer.Exit(2)

    level = "DEBUG" if verbose else str(config["logging"]["level"])
    setup_session_logging(config["logging"]["log_dir"], APP_NAME, level=level)
    ctx.obj = config


def _echo_context(context: ContextData, output: Path | None) -> None:
    payload = context.to_dict()
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    if output is not None:
        write_json_file(output, payload)
        typer.echo(f"Results saved to: {output}")


@app.command()
def capture(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, help="Also write the result JSON here"),
) -> None:
    """Capture the screen once and print the detected context."""
    pipeline = ContextPipeline.from_config(ctx.obj)
    try:
        context = pipeline.capture_and_analyze_context()
    finally:
        pipeline.cleanup()
    _echo_context(context, output)


@app.command("analyze-image")
def analyze_image(
    ctx: typer.Context,
    image_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to screenshot"),
    output: Optional[Path] = typer.Option(None, help="Also write the result JSON here"),
) -> None:
    """Run OCR and classification on an existing screenshot."""
    pipeline = ContextPipeline.from_config(ctx.obj)
    try:
        context = pipeline.analyze_image(image_path)
    finally:
        pipeline.cleanup()
    _echo_context(context, output)


@app.command()
def classify(
    text: Optional[str] = typer.Argument(None, help="Text to classify"),
    file: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Read text from this file"),
) -> None:
    """Classify text without capturing the screen."""
    if file is not None:
        text = file.read_text(encoding="utf-8")
    if text is None:
        typer.echo("Provide TEXT or --file", err=True)
        raise typer.Exit(2)

    result = SignalClassifier().classify(text)
    payload: dict[str, Any] = {
        "software": result.software,
        "confidence": result.confidence,
        "panels": list(result.panels),
        "ui_elements": list(result.ui_elements),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("check-permission")
def check_permission() -> None:
    """Report whether screen capture is permitted (exit code 1 if not)."""
    granted = CapturePermissionGate().has_capture_permission()
    typer.echo("Screen capture permission: " + ("granted" if granted else "not granted"))
    if not granted:
        raise typer.Exit(1)


@app.command("open-settings")
def open_settings() -> None:
    """Open the system privacy settings for screen recording."""
    CapturePermissionGate().open_system_settings()


@app.command()
def instructions() -> None:
    """Show how to grant screen capture permission on this platform."""
    typer.echo(CapturePermissionGate().get_instructions())


@app.command()
def engines() -> None:
    """List installed OCR engines."""
    available = OcrEngineFactory.get_available_engines()
    if not available:
        typer.echo("No OCR engine available. Install one: pip install pytesseract")
        raise typer.Exit(1)
    for name in available:
        typer.echo(name)
