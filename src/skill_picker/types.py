"""Type definitions for skill-picker.

Shared enums and dataclasses used across the prompt engine. Catalog-derived
records (Choice, Option) are frozen; per-tab list state and tab badges are the
only mutable pieces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

ALL_TAB_ID = "all"
ALL_TAB_LABEL = "All"


class Direction(str, Enum):
    """Vertical or horizontal movement direction."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.value


class PromptState(str, Enum):
    """Lifecycle of a prompt. SUBMITTED and CANCELLED are terminal."""

    ACTIVE = "active"
    SUBMITTED = "submit"
    CANCELLED = "cancel"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self is not PromptState.ACTIVE


@dataclass(frozen=True)
class Choice(Generic[T]):
    """A catalog entry as supplied by the caller.

    Attributes:
        value: Caller-owned value returned when selected.
        label: Display text.
        hint: Optional dim text shown after the label.
        description: Extra searchable text (never displayed).
    """

    value: T
    label: str
    hint: str | None = None
    description: str = ""


@dataclass(frozen=True)
class Option(Generic[T]):
    """A Choice prepared for searching: built once, never mutated."""

    value: T
    label: str
    group: str
    hint: str | None = None
    haystack: str = ""

    @classmethod
    def from_choice(cls, choice: Choice[T], group: str) -> "Option[T]":
        description = choice.description or getattr(choice.value, "description", "") or ""
        haystack = "|".join(
            [choice.label, group, choice.hint or "", str(description)]
        ).lower()
        return cls(
            value=choice.value,
            label=choice.label,
            group=group,
            hint=choice.hint,
            haystack=haystack,
        )

    def matches(self, term: str) -> bool:
        """Substring match against an already-lowercased term."""
        return term in self.haystack


@dataclass
class ListState:
    """Cursor + scroll offset snapshot of one ScrollableList."""

    cursor: int = 0
    scroll_offset: int = 0


@dataclass
class Tab:
    """A named partition of the catalog.

    Attributes:
        id: Stable identifier ("all" or the lowercased group name).
        label: Display text.
        group: Catalog group this tab shows, None for the All tab.
        badge: Match count while searching, None otherwise.
        disabled: True when a search leaves this tab without matches.
    """

    id: str
    label: str
    group: str | None = None
    badge: int | None = None
    disabled: bool = False

    @property
    def is_all(self) -> bool:
        return self.id == ALL_TAB_ID


@dataclass(frozen=True)
class ScrollIndicators:
    """Counts for the "N more above/below" lines."""

    above: int = 0
    below: int = 0


@dataclass
class CatalogNode:
    """One node of a catalog tree: a leaf with a value, or a category."""

    label: str
    value: Any = None
    hint: str | None = None
    description: str = ""
    children: list["CatalogNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.value is not None
