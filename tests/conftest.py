"""Pytest fixtures for skill-picker tests."""

from __future__ import annotations

import io
from dataclasses import dataclass

import pytest
from rich.console import Console

from skill_picker.config import PickerConfig
from skill_picker.prompt import TabbedGroupMultiSelectPrompt
from skill_picker.types import Choice


@dataclass
class Skill:
    """Unhashable stand-in for a caller-owned value (like a parsed skill)."""

    name: str
    description: str = ""


class FakeHandle:
    def __init__(self, scheduler: "FakeScheduler", callback):
        self.scheduler = scheduler
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records call_later requests; ``fire_all`` runs the pending ones."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(self, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_all(self, include_cancelled: bool = False) -> None:
        for handle in list(self.handles):
            if include_cancelled or not handle.cancelled:
                handle.callback()


def make_choice(name: str, hint: str | None = None, description: str = "") -> Choice:
    return Choice(value=Skill(name, description), label=name, hint=hint, description=description)


@pytest.fixture
def small_groups():
    """{"Python": [p1, p2], "JS": [j1]} with string values."""
    return {
        "Python": [Choice("p1", "black"), Choice("p2", "flake8")],
        "JS": [Choice("j1", "eslint")],
    }


@pytest.fixture
def skill_groups():
    return {
        "Backend": [
            make_choice("Python", "server", "Python for backend"),
            make_choice("Node.js", "server", "Node runtime"),
        ],
        "Frontend": [
            make_choice("React", "ui", "React library"),
            make_choice("Vue", "ui", "Vue framework"),
            make_choice("Angular", "ui", "Angular framework"),
        ],
        "DevOps": [
            make_choice("Docker", "containers", "Container runtime"),
            make_choice("Kubernetes", "orchestration", "K8s orchestration"),
        ],
    }


@pytest.fixture
def many_groups():
    """One group with 12 options and one with 3."""
    return {
        "Big": [Choice(f"big-{i}", f"item-{i:02d}") for i in range(12)],
        "Small": [Choice(f"small-{i}", f"tiny-{i}") for i in range(3)],
    }


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO(), force_terminal=False, width=100, highlight=False)


@pytest.fixture
def make_prompt(scheduler, quiet_console):
    """Factory for prompts drawing on a throwaway console."""

    def _make(groups, **kwargs):
        kwargs.setdefault("scheduler", scheduler)
        kwargs.setdefault("console", quiet_console)
        kwargs.setdefault("config", PickerConfig())
        return TabbedGroupMultiSelectPrompt(message="Pick:", groups=groups, **kwargs)

    return _make
