"""Configuration for skill-picker.

Layers, lowest precedence first:
1. Built-in defaults
2. ~/.config/skill-picker/config.yaml
3. Environment variables (SKILL_PICKER_MAX_ITEMS, SKILL_PICKER_TAB_WIDTH,
   SKILL_PICKER_LABEL_WIDTH)
4. Explicit overrides passed to ``load_config``
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

MIN_VISIBLE_ITEMS = 1
MIN_TAB_BAR_WIDTH = 20
MIN_LABEL_WIDTH = 8

ENV_OVERRIDES: dict[str, str] = {
    "SKILL_PICKER_MAX_ITEMS": "max_visible_items",
    "SKILL_PICKER_TAB_WIDTH": "tab_bar_width",
    "SKILL_PICKER_LABEL_WIDTH": "label_width",
}


@dataclass(frozen=True)
class PickerConfig:
    """Tunable prompt settings.

    Attributes:
        max_visible_items: Rows shown in the scroll window.
        max_search_length: Longest search term accepted.
        flash_duration: Seconds the search box stays highlighted after Ctrl+R.
        tab_bar_width: Width of the tab bar, search box and separators.
        label_width: Column width for option labels.
    """

    max_visible_items: int = 10
    max_search_length: int = 50
    flash_duration: float = 0.15
    tab_bar_width: int = 50
    label_width: int = 30

    def clamped(self) -> "PickerConfig":
        return replace(
            self,
            max_visible_items=max(MIN_VISIBLE_ITEMS, self.max_visible_items),
            max_search_length=max(1, self.max_search_length),
            flash_duration=max(0.0, self.flash_duration),
            tab_bar_width=max(MIN_TAB_BAR_WIDTH, self.tab_bar_width),
            label_width=max(MIN_LABEL_WIDTH, self.label_width),
        )


DEFAULT_CONFIG = PickerConfig()


def get_config_dir() -> Path:
    """Get the skill-picker config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "skill-picker"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _coerce(name: str, raw: Any) -> Any:
    """Convert ``raw`` to the type of field ``name``; raise ValueError if impossible."""
    default = getattr(DEFAULT_CONFIG, name)
    if isinstance(raw, bool):
        raise ValueError(f"{name}: expected a number, got {raw!r}")
    if isinstance(default, int):
        return int(raw)
    return float(raw)


def _apply(values: dict[str, Any], source: str, base: PickerConfig) -> PickerConfig:
    known = {f.name for f in fields(PickerConfig)}
    updates: dict[str, Any] = {}
    for name, raw in values.items():
        if name not in known:
            logger.debug("Ignoring unknown setting %r from %s", name, source)
            continue
        try:
            updates[name] = _coerce(name, raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s=%r from %s", name, raw, source)
    return replace(base, **updates)


def load_file_settings(path: Path | None = None) -> dict[str, Any]:
    """Load the YAML config file; missing or malformed files yield ``{}``."""
    config_path = path or get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Could not read %s: %s", config_path, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def load_env_settings(environ: dict[str, str] | None = None) -> dict[str, Any]:
    env = os.environ if environ is None else environ
    settings: dict[str, Any] = {}
    for var, name in ENV_OVERRIDES.items():
        raw = (env.get(var) or "").strip()
        if raw:
            settings[name] = raw
    return settings


def load_config(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
    **overrides: Any,
) -> PickerConfig:
    """Build the effective PickerConfig from every layer."""
    cfg = _apply(load_file_settings(path), str(path or get_config_path()), DEFAULT_CONFIG)
    cfg = _apply(load_env_settings(environ), "environment", cfg)
    cfg = _apply(
        {k: v for k, v in overrides.items() if v is not None}, "arguments", cfg
    )
    return cfg.clamped()
