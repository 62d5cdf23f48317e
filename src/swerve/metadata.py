"""Distribution metadata shared by the CLI and the server helpers."""

from __future__ import annotations

PROJECT_NAME = "swerve"
SCRIPTS_PACKAGE = "swerve.static"
