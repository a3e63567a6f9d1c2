"""Configurable theme for the picker frame.

The Theme dataclass holds every color and icon the renderer uses. Colors use
Rich markup style names (e.g. "green", "bold cyan", "dim").
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Visual theme for the picker.

    Attributes:
        accent_color: Search box border, bar and highlighted matches.
        selected_color: Selected checkboxes and the selection counter.
        bar_color: Frame bar in terminal states.
        cancel_color: Cancelled state symbol.
        dim_color: Secondary text.
        active_tab_style: Style for the active tab label.
        disabled_tab_style: Style for tabs without search matches.
        flash_style: Search box border right after Ctrl+R.

        bar_icon: Left frame bar.
        bar_end_icon: Frame footer.
        active_icon: Header symbol while active.
        submit_icon: Header symbol once submitted.
        cancel_icon: Header symbol once cancelled.
        checked_icon: Checkbox of a selected option.
        unchecked_icon: Checkbox of an unselected option.
        search_icon: Prefix inside the search box.
        scroll_up_icon: Prefix of "more above".
        scroll_down_icon: Prefix of "more below".
        overflow_left_icon: Tab bar has hidden tabs to the left.
        overflow_right_icon: Tab bar has hidden tabs to the right.
        ellipsis: Marks a truncated label.
    """

    # Colors
    accent_color: str = "cyan"
    selected_color: str = "green"
    bar_color: str = "grey50"
    cancel_color: str = "red"
    dim_color: str = "dim"
    active_tab_style: str = "black on cyan"
    disabled_tab_style: str = "dim strike"
    flash_style: str = "bold bright_cyan"

    # Icons
    bar_icon: str = "│"
    bar_end_icon: str = "└"
    active_icon: str = "◆"
    submit_icon: str = "◇"
    cancel_icon: str = "■"
    checked_icon: str = "◼"
    unchecked_icon: str = "◻"
    search_icon: str = "⌕"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"
    overflow_left_icon: str = "‹ "
    overflow_right_icon: str = " ›"
    ellipsis: str = "…"

    # Search box corners
    box_top_left: str = "╭"
    box_top_right: str = "╮"
    box_bottom_left: str = "╰"
    box_bottom_right: str = "╯"
    box_horizontal: str = "─"
    box_vertical: str = "│"


# Default theme used when none is specified
DEFAULT_THEME = Theme()
