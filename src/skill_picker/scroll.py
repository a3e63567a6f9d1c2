"""Cursor and scroll-window arithmetic for a single list.

Every operation clamps instead of raising: an empty list, a single item, or a
cursor left beyond a freshly shrunk list all degrade to valid positions.
"""

from __future__ import annotations

from .types import Direction, ListState, ScrollIndicators


class ScrollableList:
    """Cursor/scroll state for one list with a fixed-height window.

    Invariants (for the item count last passed in):
        0 <= cursor < max(item_count, 1)
        0 <= scroll_offset <= max(0, item_count - max_visible_items)
        scroll_offset <= cursor < scroll_offset + max_visible_items
    """

    def __init__(self, max_visible_items: int):
        self.max_visible_items = max(1, int(max_visible_items))
        self.cursor = 0
        self.scroll_offset = 0

    def __repr__(self) -> str:
        return (
            f"ScrollableList(cursor={self.cursor}, scroll_offset={self.scroll_offset}, "
            f"max_visible_items={self.max_visible_items})"
        )

    def set_cursor_with_scroll(self, new_cursor: int) -> None:
        """Set the cursor and slide the window just enough to show it."""
        self.cursor = max(0, new_cursor)
        if self.cursor < self.scroll_offset:
            self.scroll_offset = self.cursor
        elif self.cursor >= self.scroll_offset + self.max_visible_items:
            self.scroll_offset = self.cursor - self.max_visible_items + 1

    def _step(self, direction: Direction, step: int, item_count: int) -> None:
        if item_count <= 0:
            return
        if direction is Direction.UP:
            new_cursor = max(0, self.cursor - step)
        else:
            new_cursor = min(item_count - 1, self.cursor + step)
        self.set_cursor_with_scroll(new_cursor)

    def navigate(self, direction: Direction, item_count: int) -> None:
        """Move the cursor by one row."""
        self._step(direction, 1, item_count)

    def navigate_page(self, direction: Direction, item_count: int) -> None:
        """Move the cursor by one window height."""
        self._step(direction, self.max_visible_items, item_count)

    def reset(self, item_count: int) -> None:
        """Clamp the cursor into a list of ``item_count`` rows, top-down."""
        self.cursor = max(0, min(self.cursor, item_count - 1))
        self.scroll_offset = 0
        if self.cursor >= self.max_visible_items:
            self.scroll_offset = self.cursor - self.max_visible_items + 1

    def clamp(self, item_count: int) -> None:
        """Like ``reset``, but keeps a position that is still valid for ``item_count``."""
        if self.cursor >= max(item_count, 1) or self.scroll_offset > max(
            0, item_count - self.max_visible_items
        ):
            self.reset(item_count)

    def get_visible_range(self) -> tuple[int, int]:
        """Return the half-open window ``(start, end)``.

        ``end`` may exceed the item count; slicing handles that.
        """
        return self.scroll_offset, self.scroll_offset + self.max_visible_items

    def get_scroll_indicators(self, item_count: int) -> ScrollIndicators:
        return ScrollIndicators(
            above=self.scroll_offset,
            below=max(0, item_count - self.scroll_offset - self.max_visible_items),
        )

    def get_state(self) -> ListState:
        return ListState(cursor=self.cursor, scroll_offset=self.scroll_offset)

    def set_state(self, state: ListState) -> None:
        self.cursor = max(0, state.cursor)
        self.scroll_offset = max(0, state.scroll_offset)
