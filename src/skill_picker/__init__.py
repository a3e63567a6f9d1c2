"""Tabbed, searchable multi-select prompt for the terminal.

Pick any number of options from a catalog grouped into categories, one tab
per category plus an "All" tab, while filtering with free-text search.

Example:
    import asyncio
    from skill_picker import Choice, TabbedGroupMultiSelectPrompt, is_cancel

    prompt = TabbedGroupMultiSelectPrompt(
        message="Select skills to install:",
        groups={
            "Python": [Choice("ruff", "ruff"), Choice("mypy", "mypy", hint="types")],
            "JS": [Choice("eslint", "eslint")],
        },
    )
    result = asyncio.run(prompt.run())  # ["ruff"] or CANCEL
"""

__version__ = "0.3.0"

from .catalog import build_groups, categorize_nodes, load_catalog
from .config import PickerConfig, load_config
from .errors import CatalogError, NotATTYError, SelectionCancelledError, SkillPickerError
from .input import ReadcharKeySource, ScriptedKeySource
from .keys import KeyEvent, KeyKind, parse_key
from .prompt import (
    CANCEL,
    TabbedGroupMultiSelectPrompt,
    is_cancel,
    tabbed_group_multiselect,
    tree_select,
)
from .scroll import ScrollableList
from .search import SearchFilterEngine
from .selection import SelectionSet
from .tabs import TabNavigation, create_category_tabs
from .theme import DEFAULT_THEME, Theme
from .types import CatalogNode, Choice, Direction, Option, PromptState, Tab

__all__ = [
    # Prompt
    "TabbedGroupMultiSelectPrompt",
    "tabbed_group_multiselect",
    "tree_select",
    "CANCEL",
    "is_cancel",
    # Engine
    "ScrollableList",
    "TabNavigation",
    "create_category_tabs",
    "SearchFilterEngine",
    "SelectionSet",
    # Types
    "Choice",
    "Option",
    "Tab",
    "Direction",
    "PromptState",
    "CatalogNode",
    # Input
    "KeyEvent",
    "KeyKind",
    "parse_key",
    "ReadcharKeySource",
    "ScriptedKeySource",
    # Catalog
    "load_catalog",
    "categorize_nodes",
    "build_groups",
    # Config / theming
    "PickerConfig",
    "load_config",
    "Theme",
    "DEFAULT_THEME",
    # Errors
    "SkillPickerError",
    "SelectionCancelledError",
    "NotATTYError",
    "CatalogError",
]
