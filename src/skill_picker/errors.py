"""Exceptions raised by skill-picker's outer surfaces.

The prompt engine itself never raises during normal operation; these are for
callers that prefer an exception over checking the cancellation marker.
"""

from __future__ import annotations

from pathlib import Path


class SkillPickerError(RuntimeError):
    """Base error for skill-picker."""


class SelectionCancelledError(SkillPickerError):
    """Raised when the user cancels a selection."""

    def __init__(self) -> None:
        super().__init__("Selection cancelled")


class NotATTYError(SkillPickerError):
    """Raised when interactive selection is requested without a terminal."""

    def __init__(self) -> None:
        super().__init__(
            "Interactive selection requires a TTY. Use --select for non-interactive mode."
        )


class CatalogError(SkillPickerError):
    """Raised when a catalog file cannot be read or understood."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid catalog {path}: {reason}")
