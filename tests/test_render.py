"""Tests for frame rendering."""

from rich.text import Text

from skill_picker.render import (
    calculate_visible_tabs,
    fit_label,
    highlight_match,
    render_below_indicator,
    render_cancel_state,
    render_item_row,
    render_no_results,
    render_search_box,
    render_submit_state,
    render_tab_bar,
    tab_label,
)
from skill_picker.theme import Theme
from skill_picker.types import PromptState, Tab


def plain(markup) -> str:
    if isinstance(markup, list):
        markup = "\n".join(markup)
    return Text.from_markup(markup).plain


def test_tab_label_shows_positive_badge_only():
    assert tab_label(Tab("py", "Python", badge=3)) == "Python (3)"
    assert tab_label(Tab("py", "Python", badge=0)) == "Python"
    assert tab_label(Tab("py", "Python")) == "Python"


def test_all_tabs_fit():
    tabs = [Tab("all", "All"), Tab("a", "A"), Tab("b", "B")]
    assert calculate_visible_tabs(tabs, 0, 80) == (0, 3, False, False)


def test_visible_tabs_grow_around_active():
    tabs = [Tab(str(i), f"Category{i}") for i in range(10)]
    start, end, more_left, more_right = calculate_visible_tabs(tabs, 5, 40)
    assert start <= 5 < end
    assert more_left and more_right
    assert end - start < len(tabs)


def test_visible_tabs_at_edges():
    tabs = [Tab(str(i), f"Category{i}") for i in range(10)]
    start, _, more_left, more_right = calculate_visible_tabs(tabs, 0, 40)
    assert start == 0 and not more_left and more_right
    _, end, more_left, more_right = calculate_visible_tabs(tabs, 9, 40)
    assert end == 10 and more_left and not more_right


def test_tab_bar_marks_active_and_disabled():
    tabs = [Tab("all", "All", badge=2), Tab("js", "JS", badge=0, disabled=True)]
    lines = render_tab_bar(tabs, 0, 50)
    assert " All (2) " in lines[0]
    assert "black on cyan" in lines[0]
    assert "dim strike" in lines[0]
    assert plain(lines[1]) == "─" * 50


def test_search_box_has_cursor_block_and_fixed_width():
    lines = render_search_box("py", is_active=True, width=30)
    texts = [plain(line) for line in lines]
    assert all(len(text) == 30 for text in texts)
    assert "⌕ py" in texts[1]
    assert "[reverse]" in lines[1]


def test_search_box_placeholder_when_inactive():
    text = plain(render_search_box("", is_active=False, width=30)[1])
    assert "Filter..." in text


def test_search_box_flash_uses_flash_style():
    theme = Theme(flash_style="magenta")
    assert "magenta" in render_search_box("", True, 30, theme, flash=True)[0]
    assert "magenta" not in render_search_box("", True, 30, theme, flash=False)[0]


def test_search_term_is_escaped():
    lines = render_search_box("[red]x", is_active=True, width=30)
    assert "[red]x" in plain(lines[1])


def test_highlight_match_wraps_first_match():
    assert highlight_match("eslint", "LIN") == "es[cyan]lin[/cyan]t"
    assert highlight_match("eslint", "zzz") == "eslint"
    assert highlight_match("[b]", "") == "\\[b]"


def test_fit_label_truncates_and_pads():
    assert fit_label("abc", 5) == "abc  "
    assert fit_label("abcdefgh", 5) == "abcd…"


def test_item_row_contents():
    row = plain(
        render_item_row("ruff", "linter", is_selected=True, is_active=False, label_width=8)
    )
    assert row == "│  ◼ ruff     linter"
    row = plain(render_item_row("ruff", None, is_selected=False, is_active=True, label_width=8))
    assert row == "│  ◻ ruff     "


def test_below_indicator_and_no_results():
    assert "↓ 4 more below" in plain(render_below_indicator(4))
    assert render_below_indicator(0) == []
    assert 'No skills match "zz"' in plain(render_no_results("zz"))
    assert "No skills in this category" in plain(render_no_results(""))


def test_terminal_state_summaries():
    assert "ruff, mypy" in plain(render_submit_state(["ruff", "mypy"]))
    assert "none" in plain(render_submit_state([]))
    assert "ruff" in plain(render_cancel_state(["ruff"]))
    assert len(render_cancel_state([])) == 1


# ── Full frame ───────────────────────────────────────────────────────────


def test_active_frame(make_prompt, many_groups):
    prompt = make_prompt(many_groups, max_items=5)
    prompt.handle_key(" ")
    frame = plain(prompt.render())

    assert "◆  Pick:" in frame
    assert " All " in frame and "Big" in frame and "Small" in frame
    assert "item-00" in frame and "item-04" in frame
    assert "item-05" not in frame
    assert "↓ 10 more below" in frame
    assert "1 selected" in frame
    assert frame.splitlines()[-1] == "└"


def test_frame_scrolled_shows_above_indicator(make_prompt, many_groups):
    prompt = make_prompt(many_groups, max_items=5)
    for _ in range(7):
        prompt.handle_key("\x1b[B")
    frame = plain(prompt.render())
    assert "↑ 3 more above" in frame
    assert "item-03" in frame and "item-07" in frame
    assert "item-02" not in frame


def test_frame_with_search_shows_badges(make_prompt, small_groups):
    prompt = make_prompt(small_groups)
    for ch in "py":
        prompt.handle_key(ch)
    frame = plain(prompt.render())
    assert "All (2)" in frame
    assert "Python (2)" in frame
    assert "eslint" not in frame


def test_frame_after_submit(make_prompt, small_groups):
    prompt = make_prompt(small_groups)
    prompt.handle_key("\x1b[B")
    prompt.handle_key(" ")
    prompt.handle_key("\r")
    frame = plain(prompt.render())
    assert PromptState.SUBMITTED is prompt.state
    assert "◇  Pick:" in frame
    assert "flake8" in frame
    assert "⌕" not in frame


def test_frame_after_cancel(make_prompt, small_groups):
    prompt = make_prompt(small_groups)
    prompt.handle_key("\x1b")
    frame = plain(prompt.render())
    assert "■  Pick:" in frame


def test_labels_with_markup_are_escaped(make_prompt):
    prompt = make_prompt({"G": ["[bold]x[/bold]"]})
    assert "[bold]x[/bold]" in plain(prompt.render())
