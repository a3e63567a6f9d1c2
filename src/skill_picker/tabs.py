"""Tab navigation: an ordered set of tabs, each with its own scroll state.

Switching tabs never touches another tab's cursor, so every tab remembers
where the user left it.
"""

from __future__ import annotations

from typing import Iterable

from .scroll import ScrollableList
from .types import ALL_TAB_ID, ALL_TAB_LABEL, Direction, ListState, Tab


def navigate_left(current_index: int, tab_count: int) -> int:
    """Return the previous tab index, wrapping to the last tab."""
    if tab_count <= 0:
        return 0
    return current_index - 1 if current_index > 0 else tab_count - 1


def navigate_right(current_index: int, tab_count: int) -> int:
    """Return the next tab index, wrapping to the first tab."""
    if tab_count <= 0:
        return 0
    return current_index + 1 if current_index < tab_count - 1 else 0


def create_category_tabs(categories: Iterable[str]) -> list[Tab]:
    """Create the All tab followed by one tab per category.

    Tab ids are lowercased category names. When two categories collapse to
    the same id the first one keeps it.
    """
    tabs = [Tab(id=ALL_TAB_ID, label=ALL_TAB_LABEL)]
    seen = {ALL_TAB_ID}
    for category in categories:
        tab_id = category.lower()
        if tab_id in seen:
            continue
        seen.add(tab_id)
        tabs.append(Tab(id=tab_id, label=category, group=category))
    return tabs


class TabNavigation:
    """Active-tab tracking plus one ScrollableList per tab."""

    def __init__(
        self,
        tabs: list[Tab],
        max_visible_items: int,
        initial_tab_index: int = 0,
    ):
        self.tabs = tabs
        self.max_visible_items = max(1, int(max_visible_items))
        if tabs:
            self.active_tab_index = max(0, min(initial_tab_index, len(tabs) - 1))
        else:
            self.active_tab_index = 0
        self._lists: dict[str, ScrollableList] = {
            tab.id: ScrollableList(self.max_visible_items) for tab in tabs
        }

    def get_active_tab(self) -> Tab:
        return self.tabs[self.active_tab_index]

    def get_tab(self, tab_id: str) -> Tab | None:
        return next((tab for tab in self.tabs if tab.id == tab_id), None)

    def active_list(self) -> ScrollableList:
        """Return the active tab's ScrollableList, creating one if missing."""
        tab = self.get_active_tab()
        scroll = self._lists.get(tab.id)
        if scroll is None:
            scroll = self._lists[tab.id] = ScrollableList(self.max_visible_items)
        return scroll

    def list_for(self, tab_id: str) -> ScrollableList | None:
        return self._lists.get(tab_id)

    def get_active_tab_state(self) -> ListState:
        return self.active_list().get_state()

    def set_active_tab_state(
        self, cursor: int | None = None, scroll_offset: int | None = None
    ) -> None:
        """Replace the active tab's cursor and/or scroll offset."""
        current = self.get_active_tab_state()
        self.active_list().set_state(
            ListState(
                cursor=current.cursor if cursor is None else cursor,
                scroll_offset=current.scroll_offset if scroll_offset is None else scroll_offset,
            )
        )

    def navigate_left(self) -> None:
        self.active_tab_index = navigate_left(self.active_tab_index, len(self.tabs))

    def navigate_right(self) -> None:
        self.active_tab_index = navigate_right(self.active_tab_index, len(self.tabs))

    def navigate_content(self, direction: Direction, item_count: int) -> None:
        self.active_list().navigate(direction, item_count)

    def navigate_content_page(self, direction: Direction, item_count: int) -> None:
        self.active_list().navigate_page(direction, item_count)
