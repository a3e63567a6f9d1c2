"""Tests for SelectionSet."""

from __future__ import annotations

from dataclasses import dataclass

from skill_picker.selection import SelectionSet
from skill_picker.types import Choice, Option


@dataclass
class Skill:
    name: str


def _option(value, label="x") -> Option:
    return Option.from_choice(Choice(value, label), "Group")


def test_toggle_adds_then_removes():
    selection = SelectionSet(["a"])
    option = _option("b")
    selection.toggle(option)
    assert selection.values() == ["a", "b"]
    selection.toggle(option)
    assert selection.values() == ["a"]


def test_toggle_none_is_noop():
    selection = SelectionSet(["a"])
    selection.toggle(None)
    assert selection.values() == ["a"]


def test_values_keep_first_selected_order():
    selection = SelectionSet()
    for value in ("c", "a", "b"):
        selection.toggle(_option(value))
    assert selection.values() == ["c", "a", "b"]


def test_initial_values_are_deduplicated():
    selection = SelectionSet(["a", "a", "b"])
    assert len(selection) == 2


def test_unhashable_values_are_supported():
    skill = Skill("ruff")
    selection = SelectionSet()
    selection.toggle(_option(skill))
    assert skill in selection
    assert Skill("ruff") in selection
    selection.toggle(_option(skill))
    assert len(selection) == 0
