"""Keyboard input parsing for skill-picker.

Raw key strings (as returned by ``readchar.readkey()``) are turned into a
closed set of structured ``KeyEvent`` values, so the prompt has exactly one
dispatcher and never looks at escape sequences itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

import readchar

from .types import Direction

SEARCH_CHAR_RE = re.compile(r"^[a-z0-9\-_./]$", re.IGNORECASE)

_UP_KEYS = (readchar.key.UP, "\x1b[A", "\x1bOA")
_DOWN_KEYS = (readchar.key.DOWN, "\x1b[B", "\x1bOB")
_LEFT_KEYS = (readchar.key.LEFT, "\x1b[D", "\x1bOD")
_RIGHT_KEYS = (readchar.key.RIGHT, "\x1b[C", "\x1bOC")
_PAGE_UP_KEYS = (readchar.key.PAGE_UP, "\x1b[5~")
_PAGE_DOWN_KEYS = (readchar.key.PAGE_DOWN, "\x1b[6~")


class KeyKind(str, Enum):
    """Every kind of key event the prompt understands."""

    CHAR = "char"
    BACKSPACE = "backspace"
    ARROW = "arrow"
    PAGE = "page"
    TAB = "tab"
    TOGGLE = "toggle"
    CLEAR_SEARCH = "clear_search"
    SUBMIT = "submit"
    CANCEL = "cancel"
    INTERRUPT = "interrupt"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class KeyEvent:
    """One logical key press.

    Attributes:
        kind: What the key means.
        char: The typed character for CHAR events.
        direction: Movement direction for ARROW and PAGE events.
    """

    kind: KeyKind
    char: str = ""
    direction: Direction | None = None

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char=char)

    @classmethod
    def arrow(cls, direction: Direction) -> "KeyEvent":
        return cls(KeyKind.ARROW, direction=direction)

    @classmethod
    def page(cls, direction: Direction) -> "KeyEvent":
        return cls(KeyKind.PAGE, direction=direction)


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_interrupt(key: str) -> bool:
    """Check if key is Ctrl+C."""
    return key in (readchar.key.CTRL_C, "\x03")


def is_clear_search(key: str) -> bool:
    """Check if key is Ctrl+R."""
    return key in (readchar.key.CTRL_R, "\x12")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_tab(key: str) -> bool:
    return key in (readchar.key.TAB, "\t")


def is_space(key: str) -> bool:
    """Check if key is space."""
    return key == " "


def is_search_char(key: str) -> bool:
    """Check if key may be typed into the search box."""
    return bool(SEARCH_CHAR_RE.match(key))


def parse_key(key: str) -> KeyEvent | None:
    """Map a raw key string to a KeyEvent, or None if it means nothing.

    Order matters: multi-byte escape sequences are matched before the bare
    Escape key they start with.
    """
    if not key:
        return None
    if key in _UP_KEYS:
        return KeyEvent.arrow(Direction.UP)
    if key in _DOWN_KEYS:
        return KeyEvent.arrow(Direction.DOWN)
    if key in _LEFT_KEYS:
        return KeyEvent.arrow(Direction.LEFT)
    if key in _RIGHT_KEYS:
        return KeyEvent.arrow(Direction.RIGHT)
    if key in _PAGE_UP_KEYS:
        return KeyEvent.page(Direction.UP)
    if key in _PAGE_DOWN_KEYS:
        return KeyEvent.page(Direction.DOWN)
    if is_interrupt(key):
        return KeyEvent(KeyKind.INTERRUPT)
    if is_clear_search(key):
        return KeyEvent(KeyKind.CLEAR_SEARCH)
    if is_escape(key):
        return KeyEvent(KeyKind.CANCEL)
    if is_enter(key):
        return KeyEvent(KeyKind.SUBMIT)
    if is_backspace(key):
        return KeyEvent(KeyKind.BACKSPACE)
    if is_tab(key):
        return KeyEvent(KeyKind.TAB)
    if is_space(key):
        return KeyEvent(KeyKind.TOGGLE)
    if is_search_char(key):
        return KeyEvent.character(key)
    return None
