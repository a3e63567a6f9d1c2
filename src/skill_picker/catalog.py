"""Catalog loading and categorization.

A catalog file is YAML or JSON in one of two shapes:

1. Grouped mapping::

       Python:
         - ruff
         - name: mypy
           hint: types
           description: Static type checker
       JS:
         - eslint

2. Tree list, where nested categories become their own groups::

       - label: Backend
         children:
           - label: django
           - label: Databases
             children:
               - label: postgres
       - label: standalone-skill
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

import yaml

from .errors import CatalogError
from .types import CatalogNode, Choice

logger = logging.getLogger(__name__)

OTHER_GROUP = "Other"


def _node_choice(node: CatalogNode) -> Choice[Any]:
    return Choice(
        value=node.value,
        label=node.label,
        hint=node.hint,
        description=node.description,
    )


def add_children_to_group(
    children: Sequence[CatalogNode],
    current_group: list[Choice[Any]],
    all_groups: dict[str, list[Choice[Any]]],
) -> None:
    """Add leaves to ``current_group``; nested categories get their own group."""
    for child in children:
        if child.is_leaf:
            current_group.append(_node_choice(child))
        elif child.children:
            nested = all_groups.setdefault(child.label, [])
            add_children_to_group(child.children, nested, all_groups)


def categorize_nodes(
    nodes: Sequence[CatalogNode],
) -> tuple[list[Choice[Any]], dict[str, list[Choice[Any]]]]:
    """Split top-level leaves (uncategorized) from category groups."""
    uncategorized: list[Choice[Any]] = []
    groups: dict[str, list[Choice[Any]]] = {}

    for node in nodes:
        if node.is_leaf:
            uncategorized.append(_node_choice(node))
        elif node.children:
            group = groups.setdefault(node.label, [])
            add_children_to_group(node.children, group, groups)

    return uncategorized, groups


def build_groups(nodes: Sequence[CatalogNode]) -> dict[str, list[Choice[Any]]]:
    """Groups for the tabbed prompt; uncategorized leaves go to "Other"."""
    uncategorized, groups = categorize_nodes(nodes)
    groups = {name: choices for name, choices in groups.items() if choices}
    if uncategorized:
        groups.setdefault(OTHER_GROUP, []).extend(uncategorized)
    return groups


def count_total_options(groups: dict[str, list[Choice[Any]]]) -> int:
    return sum(len(choices) for choices in groups.values())


# ── File loading ─────────────────────────────────────────────────────────


def _entry_fields(entry: Any, path: Path) -> tuple[str, str | None, str]:
    if isinstance(entry, str):
        return entry, None, ""
    if isinstance(entry, dict):
        name = entry.get("name", entry.get("label"))
        if not isinstance(name, str) or not name:
            raise CatalogError(path, f"entry without a name: {entry!r}")
        hint = entry.get("hint")
        return name, str(hint) if hint is not None else None, str(entry.get("description", ""))
    raise CatalogError(path, f"unsupported entry: {entry!r}")


def _parse_node(raw: Any, path: Path) -> CatalogNode:
    label, hint, description = _entry_fields(raw, path)
    children_raw = raw.get("children") if isinstance(raw, dict) else None
    if children_raw:
        if not isinstance(children_raw, list):
            raise CatalogError(path, f"children of {label!r} must be a list")
        return CatalogNode(
            label=label,
            hint=hint,
            description=description,
            children=[_parse_node(child, path) for child in children_raw],
        )
    return CatalogNode(label=label, value=label, hint=hint, description=description)


def parse_catalog(data: Any, path: Path) -> dict[str, list[Choice[Any]]]:
    """Turn decoded catalog data into ``{group: [Choice, ...]}``."""
    if isinstance(data, dict):
        groups: dict[str, list[Choice[Any]]] = {}
        for group, entries in data.items():
            if entries is None:
                entries = []
            if not isinstance(entries, list):
                raise CatalogError(path, f"group {group!r} must be a list")
            choices = []
            for entry in entries:
                name, hint, description = _entry_fields(entry, path)
                choices.append(Choice(value=name, label=name, hint=hint, description=description))
            groups[str(group)] = choices
        return groups
    if isinstance(data, list):
        return build_groups([_parse_node(raw, path) for raw in data])
    raise CatalogError(path, "expected a mapping of groups or a list of nodes")


def load_catalog(path: Path) -> dict[str, list[Choice[Any]]]:
    """Load a YAML or JSON catalog file.

    Raises:
        CatalogError: If the file cannot be read or has the wrong shape.
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise CatalogError(path, str(e)) from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(path, f"parse error: {e}") from e

    groups = parse_catalog(data, path)
    logger.debug("Loaded %d option(s) in %d group(s) from %s",
                 count_total_options(groups), len(groups), path)
    return groups
