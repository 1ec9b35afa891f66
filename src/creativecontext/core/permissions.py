# -*- coding: utf-8 -*-
"""Screen capture permission handling.

Only macOS gates screen capture behind user consent. Everywhere else the
gate reports permission as granted and never touches platform APIs.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Callable

from creativecontext.constants import (
    CONSENT_GATED_PLATFORMS,
    MACOS_PERMISSION_INSTRUCTIONS,
    NO_CONSENT_INSTRUCTIONS,
    SCREEN_CAPTURE_SETTINGS_URL,
    SECURITY_SETTINGS_URL,
)
from creativecontext.pipeline.screen_capturer import grab_to_png
from creativecontext.utils.file_utils import remove_file_quietly

logger = logging.getLogger(__name__)

ProbeCallable = Callable[[Path], object]
UrlOpener = Callable[[str], None]


def _query_macos_grant() -> bool:
    from Quartz import CGPreflightScreenCaptureAccess

    return bool(CGPreflightScreenCaptureAccess())


def _open_url(url: str) -> None:
    subprocess.run(["open", url], check=True, capture_output=True, timeout=10)


def _probe_capture(path: Path) -> object:
    return grab_to_png(path, monitor=1)


class CapturePermissionGate:
    """Check and request permission to read screen contents."""

    def __init__(
        self,
        platform: str | None = None,
        grant_query: Callable[[], bool] = _query_macos_grant,
        probe: ProbeCallable = _probe_capture,
        opener: UrlOpener = _open_url,
    ) -> None:
        self.platform = platform or sys.platform
        self._grant_query = grant_query
        self._probe = probe
        self._opener = opener

    @property
    def requires_consent(self) -> bool:
        return self.platform in CONSENT_GATED_PLATFORMS

    def has_capture_permission(self) -> bool:
        """Return the current grant state. Query failures count as not granted."""
        if not self.requires_consent:
            return True
        try:
            granted = bool(self._grant_query())
        except Exception:
            logger.error("Error checking screen capture permission", exc_info=True)
            return False
        logger.debug("Screen capture permission status: %s", granted)
        return granted

    def prompt_for_permission(self) -> bool:
        """Trigger the OS consent prompt once and re-check.

        The prompt is raised by attempting a throwaway capture. The OS does
        not wait for the user, so False means "ask again later".
        """
        if self.has_capture_permission():
            return True

        logger.info("Requesting screen capture permission via probe capture")
        probe_path: Path | None = None
        try:
            fd, raw_path = tempfile.mkstemp(prefix="creative-context-probe-", suffix=".png")
            os.close(fd)
            probe_path = Path(raw_path)
            self._probe(probe_path)
        except Exception:
            logger.debug("Permission probe capture failed", exc_info=True)
        finally:
            if probe_path is not None and not remove_file_quietly(probe_path):
                logger.debug("Could not delete probe file %s", probe_path)

        return self.has_capture_permission()

    def ensure_permission(self, prompt: bool = True) -> bool:
        """Check, then prompt and re-check once when not yet granted."""
        granted = self.has_capture_permission()
        if not granted and prompt:
            granted = self.prompt_for_permission()
        if not granted:
            logger.warning("Screen recording permission needed for context detection")
            logger.info(self.get_instructions())
        return granted

    def open_system_settings(self) -> None:
        """Open the privacy settings page, falling back to the security pane."""
        if not self.requires_consent:
            logger.info("No screen capture settings to open on %s", self.platform)
            return
        try:
            logger.info("Opening screen recording settings...")
            self._opener(SCREEN_CAPTURE_SETTINGS_URL)
            return
        except Exception as e:
            logger.warning("Could not open screen recording settings: %s", e)
        try:
            self._opener(SECURITY_SETTINGS_URL)
        except Exception as e:
            logger.warning("Could not open security settings: %s", e)

    def get_instructions(self) -> str:
        if self.requires_consent:
            return MACOS_PERMISSION_INSTRUCTIONS
        return NO_CONSENT_INSTRUCTIONS
