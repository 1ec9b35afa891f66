# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

from creativecontext.cli.context_cli import app
from creativecontext.constants import APP_NAME


def main() -> None:
    """Run the command line interface."""
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    main()
