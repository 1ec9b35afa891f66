# -*- coding: utf-8 -*-
"""Still screen capture via mss."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import mss
import mss.tools

from creativecontext.utils.file_utils import timestamped_path

logger = logging.getLogger(__name__)

WindowCallback = Callable[[], None]


class CaptureError(RuntimeError):
    """Raised when the screen cannot be captured or written."""


def _noop() -> None:
    pass


def grab_to_png(path: str | Path, monitor: int = 1) -> Path:
    """Grab one monitor and write it as PNG. ``monitor=0`` covers all monitors."""
    file_path = Path(path)
    with mss.mss() as sct:
        if monitor >= len(sct.monitors):
            raise CaptureError(f"Monitor {monitor} not found ({len(sct.monitors) - 1} available)")
        shot = sct.grab(sct.monitors[monitor])
        mss.tools.to_png(shot.rgb, shot.size, output=str(file_path))
    return file_path


class ScreenCapturer:
    """Capture the screen to timestamped PNG files."""

    def __init__(
        self,
        output_dir: str | Path = ".captures",
        monitor: int = 1,
        grabber: Callable[[Path, int], Path] = grab_to_png,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.monitor = int(monitor)
        self._grab = grabber

    def capture(
        self,
        on_before_hide: WindowCallback = _noop,
        on_after_show: WindowCallback = _noop,
    ) -> Path:
        """Capture the configured monitor and return the image path.

        The callbacks bracket the grab so a caller can hide its own window
        while the screen is read.
        """
        target = timestamped_path(self.output_dir, "context", ".png")
        on_before_hide()
        try:
            path = self._grab(target, self.monitor)
        except CaptureError:
            raise
        except Exception as e:
            raise CaptureError(f"Screen capture failed: {e}") from e
        finally:
            on_after_show()
        logger.debug("Screen captured: %s", path)
        return path

    @staticmethod
    def discard(path: str | Path) -> None:
        """Delete a capture file. A missing file is not an error."""
        Path(path).unlink(missing_ok=True)
