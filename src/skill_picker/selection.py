"""The set of chosen values, independent of filtering and tabs."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, TypeVar

from .types import Option

T = TypeVar("T")


class SelectionSet(Generic[T]):
    """Insertion-ordered set of selected values.

    Membership uses ``in`` on a list (identity, then equality), so values do
    not need to be hashable.
    """

    def __init__(self, initial: Iterable[T] | None = None):
        self._values: list[T] = []
        for value in initial or ():
            self.add(value)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SelectionSet({self._values!r})"

    def add(self, value: T) -> None:
        if value not in self._values:
            self._values.append(value)

    def discard(self, value: T) -> None:
        if value in self._values:
            self._values.remove(value)

    def toggle(self, option: Option[Any] | None) -> None:
        """Flip membership of the option's value; None is a no-op."""
        if option is None:
            return
        if option.value in self._values:
            self.discard(option.value)
        else:
            self.add(option.value)

    def values(self) -> list[T]:
        """Selected values, first-selected first."""
        return list(self._values)
