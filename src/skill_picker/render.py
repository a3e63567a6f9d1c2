"""Frame rendering for the tabbed multi-select prompt.

Everything here is a pure function from state to Rich markup lines; the
prompt passes itself to ``render_frame`` and draws the result with Rich Live.
User-supplied text (message, labels, hints, search term) is always escaped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from rich.markup import escape

from .search import match_span
from .theme import DEFAULT_THEME, Theme
from .types import PromptState, Tab

if TYPE_CHECKING:
    from .prompt import TabbedGroupMultiSelectPrompt

NAV_HINT = "↑↓ nav • PgUp/Dn • ←→ tabs • space • ^R clear • Esc • enter"
SEARCH_PLACEHOLDER = "Filter..."


def _styled(text: str, style: str) -> str:
    """Wrap already-escaped markup in a style tag."""
    if not style or not text:
        return text
    return f"[{style}]{text}[/{style}]"


def bar(theme: Theme = DEFAULT_THEME, active: bool = True) -> str:
    return _styled(theme.bar_icon, theme.accent_color if active else theme.bar_color)


def state_symbol(state: PromptState, theme: Theme = DEFAULT_THEME) -> str:
    if state is PromptState.SUBMITTED:
        return _styled(theme.submit_icon, theme.selected_color)
    if state is PromptState.CANCELLED:
        return _styled(theme.cancel_icon, theme.cancel_color)
    return _styled(theme.active_icon, theme.selected_color)


def render_header(state: PromptState, message: str, theme: Theme = DEFAULT_THEME) -> list[str]:
    """State symbol + message."""
    return [
        bar(theme, active=False),
        f"{state_symbol(state, theme)}  {escape(message)}",
    ]


def render_submit_state(selected_labels: Sequence[str], theme: Theme = DEFAULT_THEME) -> list[str]:
    summary = ", ".join(escape(label) for label in selected_labels) or "none"
    return [f"{bar(theme, active=False)}  {_styled(summary, theme.dim_color)}"]


def render_cancel_state(selected_labels: Sequence[str], theme: Theme = DEFAULT_THEME) -> list[str]:
    lines = []
    if selected_labels:
        struck = ", ".join(
            _styled(escape(label), f"{theme.dim_color} strike") for label in selected_labels
        )
        lines.append(f"{bar(theme, active=False)}  {struck}")
    lines.append(bar(theme, active=False))
    return lines


def render_search_box(
    search_term: str,
    is_active: bool,
    width: int,
    theme: Theme = DEFAULT_THEME,
    flash: bool = False,
) -> list[str]:
    """Three-line rounded box holding the search term and a cursor block."""
    inner_width = width - 4
    cursor = "[reverse] [/reverse]" if is_active else ""

    if search_term:
        content = f"{theme.search_icon} {escape(search_term)}{cursor}"
        visible = len(theme.search_icon) + 1 + len(search_term) + (1 if is_active else 0)
    elif is_active:
        content = f"{theme.search_icon} {cursor}"
        visible = len(theme.search_icon) + 2
    else:
        content = _styled(f"{theme.search_icon} {SEARCH_PLACEHOLDER}", theme.dim_color)
        visible = len(theme.search_icon) + 1 + len(SEARCH_PLACEHOLDER)
    padding = max(0, inner_width - visible)

    if flash:
        border = theme.flash_style
    elif is_active:
        border = theme.accent_color
    else:
        border = theme.dim_color

    horizontal = theme.box_horizontal * (inner_width + 2)
    vertical = _styled(theme.box_vertical, border)
    return [
        _styled(f"{theme.box_top_left}{horizontal}{theme.box_top_right}", border),
        f"{vertical} {content}{' ' * padding} {vertical}",
        _styled(f"{theme.box_bottom_left}{horizontal}{theme.box_bottom_right}", border),
    ]


def tab_label(tab: Tab) -> str:
    """Tab text with its badge when the badge is positive."""
    if tab.badge is not None and tab.badge > 0:
        return f"{tab.label} ({tab.badge})"
    return tab.label


def tab_width(tab: Tab) -> int:
    # " label " plus the two-space gap between tabs
    return len(tab_label(tab)) + 2 + 2


def calculate_visible_tabs(
    tabs: Sequence[Tab],
    active_index: int,
    available_width: int,
    theme: Theme = DEFAULT_THEME,
) -> tuple[int, int, bool, bool]:
    """Pick the slice of tabs that fits, grown outward from the active tab.

    Returns:
        (start, end, more_left, more_right) with ``tabs[start:end]`` visible.
    """
    if not tabs:
        return 0, 0, False, False

    # Arrow space is always reserved so the bar does not shift when they appear.
    width = available_width - len(theme.overflow_left_icon) - len(theme.overflow_right_icon)
    widths = [tab_width(tab) for tab in tabs]
    if sum(widths) <= width:
        return 0, len(tabs), False, False

    active_index = max(0, min(active_index, len(tabs) - 1))
    start, end = active_index, active_index + 1
    current = widths[active_index]
    while True:
        grew = False
        if start > 0 and current + widths[start - 1] <= width:
            start -= 1
            current += widths[start]
            grew = True
        if end < len(tabs) and current + widths[end] <= width:
            current += widths[end]
            end += 1
            grew = True
        if not grew:
            break

    return start, end, start > 0, end < len(tabs)


def render_tab_bar(
    tabs: Sequence[Tab],
    active_index: int,
    width: int,
    theme: Theme = DEFAULT_THEME,
) -> list[str]:
    """Tab line plus separator."""
    if not tabs:
        return []

    start, end, more_left, more_right = calculate_visible_tabs(tabs, active_index, width, theme)
    parts = []
    for i in range(start, end):
        tab = tabs[i]
        label = escape(tab_label(tab))
        if i == active_index:
            parts.append(_styled(f" {label} ", theme.active_tab_style))
        elif tab.disabled:
            parts.append(f" {_styled(label, theme.disabled_tab_style)} ")
        else:
            parts.append(f" {_styled(label, theme.dim_color)} ")

    left = (
        _styled(theme.overflow_left_icon, theme.dim_color)
        if more_left
        else " " * len(theme.overflow_left_icon)
    )
    right = (
        _styled(theme.overflow_right_icon, theme.dim_color)
        if more_right
        else " " * len(theme.overflow_right_icon)
    )
    return [
        f"{left}{'  '.join(parts)}{right}",
        _styled(theme.box_horizontal * width, theme.dim_color),
    ]


def render_above_indicator(count: int, theme: Theme = DEFAULT_THEME) -> list[str]:
    if count <= 0:
        return []
    return [f"{bar(theme)}  {_styled(f'{theme.scroll_up_icon} {count} more above', theme.dim_color)}"]


def render_below_indicator(count: int, theme: Theme = DEFAULT_THEME) -> list[str]:
    if count <= 0:
        return []
    return [
        bar(theme),
        f"{bar(theme)}  {_styled(f'{theme.scroll_down_icon} {count} more below', theme.dim_color)}",
    ]


def render_no_results(search_term: str, theme: Theme = DEFAULT_THEME) -> list[str]:
    if search_term:
        text = f'No skills match "{escape(search_term)}"'
    else:
        text = "No skills in this category"
    return [f"{bar(theme)}  {_styled(text, theme.dim_color)}"]


def render_footer(theme: Theme = DEFAULT_THEME) -> list[str]:
    return [_styled(theme.bar_end_icon, theme.bar_color)]


def highlight_match(
    text: str, search_term: str, theme: Theme = DEFAULT_THEME, base_style: str = ""
) -> str:
    """Escape ``text`` and color its first match of ``search_term``."""
    span = match_span(text, search_term)
    if span is None:
        return _styled(escape(text), base_style)
    start, end = span
    return (
        _styled(escape(text[:start]), base_style)
        + _styled(escape(text[start:end]), theme.accent_color)
        + _styled(escape(text[end:]), base_style)
    )


def checkbox(is_selected: bool, is_active: bool, theme: Theme = DEFAULT_THEME) -> str:
    if is_selected:
        return _styled(theme.checked_icon, theme.selected_color)
    if is_active:
        return _styled(theme.unchecked_icon, theme.accent_color)
    return _styled(theme.unchecked_icon, theme.dim_color)


def fit_label(label: str, width: int, theme: Theme = DEFAULT_THEME) -> str:
    """Truncate with an ellipsis and pad to ``width`` columns."""
    if len(label) > width:
        label = label[: width - len(theme.ellipsis)] + theme.ellipsis
    return label.ljust(width)


def render_item_row(
    label: str,
    hint: str | None,
    is_selected: bool,
    is_active: bool,
    search_term: str = "",
    label_width: int = 30,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """One option row: checkbox, fixed-width label, dim hint."""
    padded = fit_label(label, label_width, theme)
    display_label = highlight_match(
        padded, search_term, theme, base_style="" if is_active else theme.dim_color
    )
    display_hint = _styled(escape(hint or ""), theme.dim_color)
    return f"{bar(theme)}  {checkbox(is_selected, is_active, theme)} {display_label} {display_hint}"


def render_frame(prompt: "TabbedGroupMultiSelectPrompt") -> str:
    """Render the whole prompt as Rich markup."""
    theme = prompt.theme
    config = prompt.config
    lines = render_header(prompt.state, prompt.message, theme)

    if prompt.state is PromptState.SUBMITTED:
        lines.extend(render_submit_state(prompt.selected_labels(), theme))
        return "\n".join(lines)
    if prompt.state is PromptState.CANCELLED:
        lines.extend(render_cancel_state(prompt.selected_labels(), theme))
        return "\n".join(lines)

    for line in render_search_box(
        prompt.search_term,
        is_active=True,
        width=config.tab_bar_width,
        theme=theme,
        flash=prompt.search_flash,
    ):
        lines.append(f"{bar(theme)}  {line}")

    selected_count = len(prompt.selection)
    if selected_count:
        lines.append(f"{bar(theme)}  {_styled(f' • {selected_count} selected', theme.selected_color)}")

    for line in render_tab_bar(
        prompt.tab_nav.tabs, prompt.tab_nav.active_tab_index, config.tab_bar_width, theme
    ):
        lines.append(f"{bar(theme)}  {line}")

    lines.append(f"{bar(theme)}  {_styled(NAV_HINT, theme.dim_color)}")
    lines.append(bar(theme))

    items = prompt.filtered_items()
    if not items:
        lines.extend(render_no_results(prompt.search_term, theme))
    else:
        scroll = prompt.tab_nav.active_list()
        indicators = scroll.get_scroll_indicators(len(items))
        start, end = scroll.get_visible_range()

        lines.extend(render_above_indicator(indicators.above, theme))
        for index in range(start, min(end, len(items))):
            option = items[index]
            lines.append(
                render_item_row(
                    label=option.label,
                    hint=option.hint,
                    is_selected=option.value in prompt.selection,
                    is_active=index == scroll.cursor,
                    search_term=prompt.search_term,
                    label_width=config.label_width,
                    theme=theme,
                )
            )
        lines.extend(render_below_indicator(indicators.below, theme))

    lines.extend(render_footer(theme))
    return "\n".join(lines)
