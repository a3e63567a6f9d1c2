"""Tabbed, searchable multi-select prompt.

The prompt owns every piece of mutable state (tabs and their scroll
positions, the search term, the search memos, the selection) and is the only
thing that mutates it. Key events arrive one at a time from a single key
source; each handler runs to completion and the frame is redrawn afterwards.

Example:
    from skill_picker import Choice, TabbedGroupMultiSelectPrompt, is_cancel

    prompt = TabbedGroupMultiSelectPrompt(
        message="Select skills to install:",
        groups={
            "Python": [Choice("ruff", "ruff", hint="linter")],
            "JS": [Choice("eslint", "eslint")],
        },
    )
    result = asyncio.run(prompt.run())
    if is_cancel(result):
        ...
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Generic, Iterable, Mapping, Sequence, TypeVar, Union

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .catalog import build_groups
from .config import DEFAULT_CONFIG, PickerConfig
from .errors import NotATTYError, SelectionCancelledError
from .flash import FlashTimer, Scheduler
from .input import KeySource, ReadcharKeySource
from .keys import KeyEvent, KeyKind, parse_key
from .render import render_frame
from .search import ChoiceLike, SearchFilterEngine
from .selection import SelectionSet
from .tabs import TabNavigation, create_category_tabs
from .theme import DEFAULT_THEME, Theme
from .types import CatalogNode, Direction, Option, PromptState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancelMarker:
    """Type of the unique value ``run()`` returns when the user cancels."""

    _instance: "CancelMarker | None" = None

    def __new__(cls) -> "CancelMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"


CANCEL = CancelMarker()


def is_cancel(value: object) -> bool:
    """True only for the cancellation marker, never for a real (even empty) result."""
    return value is CANCEL


class TabbedGroupMultiSelectPrompt(Generic[T]):
    """Multi-select over grouped options with tabs, search and paging.

    Keyboard controls:
        - a-z 0-9 - _ . /: type into the search box
        - Backspace: delete the last search character
        - Up/Down: move the cursor; PgUp/PgDn: move a page
        - Left/Right, Tab: switch tabs
        - Space: toggle the option under the cursor
        - Ctrl+R: clear the search
        - Esc: clear the search, or cancel when it is already empty
        - Ctrl+C: cancel
        - Enter: submit

    Args:
        message: Prompt message shown in the header.
        groups: Mapping of category name to its ordered choices.
        initial_values: Values selected when the prompt opens.
        max_items: Rows in the scroll window (overrides the config).
        key_source: Where key events come from (terminal by default).
        console: Rich Console to draw on.
        config: Prompt settings.
        theme: Colors and icons.
        scheduler: Timer backend for the search flash.
    """

    def __init__(
        self,
        message: str,
        groups: Mapping[str, Sequence[ChoiceLike]],
        initial_values: Iterable[T] | None = None,
        max_items: int | None = None,
        *,
        key_source: KeySource | None = None,
        console: Console | None = None,
        config: PickerConfig | None = None,
        theme: Theme | None = None,
        scheduler: Scheduler | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.theme = theme or DEFAULT_THEME
        self.message = message
        self.console = console or Console(highlight=False)
        self.max_visible_items = max(1, max_items or self.config.max_visible_items)

        self.engine = SearchFilterEngine(groups)
        self.tab_nav = TabNavigation(
            create_category_tabs(self.engine.tab_group_names),
            max_visible_items=self.max_visible_items,
        )
        self.selection: SelectionSet[T] = SelectionSet(initial_values)
        self.search_term = ""
        self.search_flash = False
        self.state = PromptState.ACTIVE

        self._flash = FlashTimer(self.config.flash_duration, scheduler)
        self._key_source = key_source
        self._live: Live | None = None
        self._cleaned_up = False

    # ── Queries ─────────────────────────────────────────────────────────

    def filtered_items(self) -> tuple[Option[Any], ...]:
        """Options shown on the active tab for the current search term."""
        return self.engine.get_filtered_items(self.tab_nav.get_active_tab().id, self.search_term)

    def current_option(self) -> Option[Any] | None:
        """Option under the active tab's cursor, if any."""
        items = self.filtered_items()
        cursor = self.tab_nav.get_active_tab_state().cursor
        if 0 <= cursor < len(items):
            return items[cursor]
        return None

    def selected_values(self) -> list[T]:
        return self.selection.values()

    def selected_labels(self) -> list[str]:
        """Labels of selected options, in catalog order."""
        return [
            option.label for option in self.engine.all_options if option.value in self.selection
        ]

    # ── Dispatch ────────────────────────────────────────────────────────

    def handle_key(self, key: str) -> None:
        """Parse a raw key string and dispatch it."""
        event = parse_key(key)
        if event is not None:
            self.handle_event(event)

    def handle_event(self, event: KeyEvent) -> None:
        """Apply one key event. Ignored once the prompt is finished."""
        if self.state.is_terminal:
            return

        kind = event.kind
        if kind is KeyKind.CHAR:
            self._type_char(event.char)
        elif kind is KeyKind.BACKSPACE:
            if self.search_term:
                self.search_term = self.search_term[:-1]
                self._refresh_search()
        elif kind is KeyKind.TAB:
            self._switch_tab(Direction.RIGHT)
        elif kind is KeyKind.TOGGLE:
            self.selection.toggle(self.current_option())
        elif kind is KeyKind.ARROW:
            if event.direction in (Direction.LEFT, Direction.RIGHT):
                self._switch_tab(event.direction)
            elif event.direction is not None:
                self.tab_nav.navigate_content(event.direction, len(self.filtered_items()))
        elif kind is KeyKind.PAGE:
            if event.direction in (Direction.UP, Direction.DOWN):
                self.tab_nav.navigate_content_page(event.direction, len(self.filtered_items()))
        elif kind is KeyKind.CLEAR_SEARCH:
            self._clear_search_with_flash()
        elif kind is KeyKind.CANCEL:
            if self.search_term:
                self.search_term = ""
                self._refresh_search()
            else:
                self._finish(PromptState.CANCELLED)
        elif kind is KeyKind.INTERRUPT:
            self._finish(PromptState.CANCELLED)
        elif kind is KeyKind.SUBMIT:
            self._finish(PromptState.SUBMITTED)

    def _type_char(self, char: str) -> None:
        if len(self.search_term) >= self.config.max_search_length:
            return
        self.search_term += char
        self._refresh_search()

    def _refresh_search(self) -> None:
        self.engine.update_tabs_for_search(self.tab_nav, self.search_term)

    def _switch_tab(self, direction: Direction) -> None:
        if direction is Direction.LEFT:
            self.tab_nav.navigate_left()
        else:
            self.tab_nav.navigate_right()
        # The newly active tab may hold a cursor from before the last filter change.
        self.tab_nav.active_list().clamp(len(self.filtered_items()))

    def _clear_search_with_flash(self) -> None:
        self.search_term = ""
        self.search_flash = True
        self._refresh_search()
        self._flash.arm(self._on_flash_expired)

    def _on_flash_expired(self) -> None:
        self.search_flash = False
        self._redraw()

    # ── Lifecycle ───────────────────────────────────────────────────────

    def cancel(self) -> None:
        """Cancel the prompt from outside (e.g. a process-level interrupt)."""
        self._finish(PromptState.CANCELLED)

    def _finish(self, state: PromptState) -> None:
        if self.state.is_terminal:
            return
        self.state = state
        logger.debug("Prompt %r finished: %s", self.message, state)
        self.cleanup()

    def cleanup(self) -> None:
        """Cancel the flash timer and detach from the key source.

        Runs its body once; later calls are no-ops.
        """
        if self._cleaned_up:
            return
        self._cleaned_up = True
        self._flash.cancel()
        self.search_flash = False
        if self._key_source is not None:
            try:
                self._key_source.close()
            except OSError as e:
                logger.debug("Key source already closed: %s", e)

    @property
    def flash_active(self) -> bool:
        return self._flash.active

    # ── Rendering ───────────────────────────────────────────────────────

    def render(self) -> str:
        """Current frame as Rich markup."""
        return render_frame(self)

    def _renderable(self) -> Text:
        return Text.from_markup(self.render())

    def _redraw(self) -> None:
        if self._live is not None:
            self._live.update(self._renderable(), refresh=True)

    async def run(self) -> Union[list[T], CancelMarker]:
        """Show the prompt until it is submitted or cancelled.

        Returns:
            Selected values in first-selected order, or ``CANCEL``.
        """
        if self._key_source is None:
            self._key_source = ReadcharKeySource()
        source = self._key_source

        try:
            with Live(
                self._renderable(),
                console=self.console,
                auto_refresh=False,
                transient=False,
            ) as live:
                self._live = live
                if not self.state.is_terminal:
                    async for event in source:
                        self.handle_event(event)
                        live.update(self._renderable(), refresh=True)
                        if self.state.is_terminal:
                            break
                if not self.state.is_terminal:
                    # Input ended without a decision.
                    self._finish(PromptState.CANCELLED)
                    live.update(self._renderable(), refresh=True)
        except asyncio.CancelledError:
            self._finish(PromptState.CANCELLED)
            raise
        finally:
            self._live = None
            self.cleanup()

        if self.state is PromptState.CANCELLED:
            return CANCEL
        return self.selection.values()


async def tabbed_group_multiselect(
    groups: Mapping[str, Sequence[ChoiceLike]],
    message: str = "Select skills to install:",
    **kwargs: Any,
) -> list[Any]:
    """Run a TabbedGroupMultiSelectPrompt, raising on cancel.

    Raises:
        SelectionCancelledError: If the user cancels.
    """
    prompt: TabbedGroupMultiSelectPrompt[Any] = TabbedGroupMultiSelectPrompt(
        message=message, groups=groups, **kwargs
    )
    result = await prompt.run()
    if is_cancel(result):
        raise SelectionCancelledError()
    return result


async def tree_select(
    nodes: Sequence[CatalogNode],
    message: str = "Select skills to install:",
    require_tty: bool = True,
    **kwargs: Any,
) -> list[Any]:
    """Pick leaves from a catalog tree.

    Uncategorized leaves join an "Other" tab when categories exist.

    Raises:
        NotATTYError: If stdin is not a terminal and ``require_tty`` is set.
        SelectionCancelledError: If the user cancels.
    """
    if require_tty and not sys.stdin.isatty():
        raise NotATTYError()

    groups = build_groups(nodes)
    if not groups:
        logger.warning("No skills available to select.")
        return []
    return await tabbed_group_multiselect(groups, message=message, **kwargs)
