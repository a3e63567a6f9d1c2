"""Search filtering with memoized results.

Filtering is a plain lowercase substring test against each option's
precomputed haystack. Results are memoized on their exact inputs:

- filtered items on ``(search_term, tab_id)``
- per-tab match counts on ``search_term``

A memo is only replaced when a lookup arrives with a different key, so two
lookups with the same key return the very same tuple object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Hashable, Mapping, Sequence, TypeVar, Union

from .tabs import TabNavigation
from .types import ALL_TAB_ID, Choice, Option

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

ChoiceLike = Union[Choice[Any], str]


@dataclass
class _Memo(Generic[K, V]):
    """Last key / last value holder."""

    key: K
    value: V


def to_choice(entry: ChoiceLike) -> Choice[Any]:
    """Accept bare strings as shorthand for ``Choice(value=s, label=s)``."""
    if isinstance(entry, Choice):
        return entry
    return Choice(value=entry, label=str(entry))


def build_grouped_options(
    groups: Mapping[str, Sequence[ChoiceLike]],
) -> list[tuple[str, tuple[Option[Any], ...]]]:
    """Turn ``{group: [choice, ...]}`` into searchable options, keeping order."""
    return [
        (name, tuple(Option.from_choice(to_choice(entry), name) for entry in entries))
        for name, entries in groups.items()
    ]


def match_span(text: str, search_term: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first case-insensitive match, or None."""
    if not search_term:
        return None
    index = text.lower().find(search_term.lower())
    if index == -1:
        return None
    return index, index + len(search_term)


class SearchFilterEngine:
    """Filtered views and match counts over a fixed grouped catalog."""

    def __init__(self, groups: Mapping[str, Sequence[ChoiceLike]]):
        self.grouped_options = build_grouped_options(groups)
        self._all_options: tuple[Option[Any], ...] = tuple(
            option for _, options in self.grouped_options for option in options
        )
        self._options_by_tab: dict[str, tuple[Option[Any], ...]] = {}
        # Tabs come in name order; on an id collision the first name wins.
        for name, options in sorted(self.grouped_options, key=lambda group: group[0]):
            self._options_by_tab.setdefault(name.lower(), options)
        self._filtered: _Memo[tuple[str, str], tuple[Option[Any], ...]] | None = None
        self._match_counts: _Memo[str, dict[str, int]] | None = None

    @property
    def all_options(self) -> tuple[Option[Any], ...]:
        return self._all_options

    @property
    def group_names(self) -> list[str]:
        return [name for name, _ in self.grouped_options]

    @property
    def tab_group_names(self) -> list[str]:
        """Group names in tab order."""
        return sorted(self.group_names)

    def _candidates(self, tab_id: str) -> tuple[Option[Any], ...]:
        if tab_id == ALL_TAB_ID:
            return self._all_options
        return self._options_by_tab.get(tab_id, ())

    def get_filtered_items(self, active_tab_id: str, search_term: str) -> tuple[Option[Any], ...]:
        """Options visible on ``active_tab_id`` for ``search_term``.

        Unknown tab ids yield an empty tuple.
        """
        key = (search_term, active_tab_id)
        if self._filtered is not None and self._filtered.key == key:
            return self._filtered.value

        items = self._candidates(active_tab_id)
        term = search_term.lower()
        if term:
            items = tuple(option for option in items if option.matches(term))

        self._filtered = _Memo(key, items)
        return items

    def get_match_count_by_tab(self, search_term: str) -> dict[str, int]:
        """Match count per tab id; ``"all"`` is the sum over every group."""
        if self._match_counts is not None and self._match_counts.key == search_term:
            return self._match_counts.value

        term = search_term.lower()
        counts: dict[str, int] = {}
        total = 0
        for name, options in sorted(self.grouped_options, key=lambda group: group[0]):
            if term:
                count = sum(1 for option in options if option.matches(term))
            else:
                count = len(options)
            counts.setdefault(name.lower(), count)
            total += count
        counts[ALL_TAB_ID] = total

        self._match_counts = _Memo(search_term, counts)
        return counts

    def update_tabs_for_search(self, tab_nav: TabNavigation, search_term: str) -> None:
        """Refresh tab badges/disabled flags and re-clamp the active tab.

        An empty term puts every tab back in its neutral state. Otherwise each
        tab shows its match count and every tab but All is disabled when it
        has none.
        """
        if not search_term:
            for tab in tab_nav.tabs:
                tab.badge = None
                tab.disabled = False
        else:
            counts = self.get_match_count_by_tab(search_term)
            for tab in tab_nav.tabs:
                count = counts.get(tab.id, 0)
                tab.badge = count
                tab.disabled = not tab.is_all and count == 0

        filtered = self.get_filtered_items(tab_nav.get_active_tab().id, search_term)
        tab_nav.active_list().reset(len(filtered))
