# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "creative-context"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"

SOFTWARE_UNKNOWN = "Unknown"
SOFTWARE_PERMISSION_REQUIRED = "Permission Required"

TEXT_CONTENT_LIMIT = 500

# Platforms whose screen capture is gated behind user consent
CONSENT_GATED_PLATFORMS = ("darwin",)

SCREEN_CAPTURE_SETTINGS_URL = "x-apple.systempreferences:com.apple.preference.security?Privacy_ScreenCapture"
SECURITY_SETTINGS_URL = "x-apple.systempreferences:com.apple.preference.security"

PERMISSION_REQUIRED_TEXT = (
    "Screen recording permission needed for context detection. "
    "Please enable in System Settings -> Privacy & Security -> Screen Recording."
)

MACOS_PERMISSION_INSTRUCTIONS = """To enable context detection:
1. Open System Settings
2. Go to Privacy & Security -> Screen Recording
3. Enable the application running creative-context
4. Restart the app"""

NO_CONSENT_INSTRUCTIONS = "Screen recording permissions are only required on macOS"

OCR_ENGINES = ("tesseract", "easyocr", "auto")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
