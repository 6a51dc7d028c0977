from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


class RendererConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class RendererConfig:
    heading_base_rem: float = 1.4
    heading_step_rem: float = 0.1
    highlight_code: bool = True
    copy_label: str = "Copy"
    user_messages_markdown: bool = True
    show_sources: bool = True

    def __post_init__(self) -> None:
        if self.heading_base_rem <= 0:
            raise ValueError("heading_base_rem must be > 0")
        if self.heading_step_rem < 0:
            raise ValueError("heading_step_rem must be >= 0")
        if self.heading_size_rem(6) <= 0:
            raise ValueError("heading_base_rem - 5 * heading_step_rem must be > 0")
        if not self.copy_label.strip():
            raise ValueError("copy_label must be a non-empty string")

    def heading_size_rem(self, level: int) -> float:
        return round(self.heading_base_rem - (level - 1) * self.heading_step_rem, 3)


_FLOAT_KEYS = frozenset({"heading_base_rem", "heading_step_rem"})
_BOOL_KEYS = frozenset({"highlight_code", "user_messages_markdown", "show_sources"})
_STR_KEYS = frozenset({"copy_label"})


def global_config_path() -> Path:
    override = os.environ.get("CHAT_MARKDOWN_CONFIG")
    if override:
        return Path(override).expanduser()
    root = os.environ.get("XDG_CONFIG_HOME")
    if root:
        base = Path(root)
    else:
        base = Path.home() / ".config"
    return base / "chat-markdown" / "config.yaml"


def load_renderer_config(path: Path | None = None) -> RendererConfig:
    """Load the `renderer:` section of a YAML config file.

    Falls back to defaults when the file does not exist.
    """
    source = path if path is not None else global_config_path()
    data = _load_yaml_mapping(source)
    section = data.get("renderer")
    if section is None:
        return RendererConfig()
    if not isinstance(section, Mapping):
        raise RendererConfigError(f"Expected mapping for renderer in {source}")
    return _parse_renderer_config(section, source=source)


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise RendererConfigError(f"Invalid YAML at {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise RendererConfigError(f"Expected mapping YAML at {path}")
    return dict(loaded)


def _parse_renderer_config(raw: Mapping[str, Any], *, source: Path) -> RendererConfig:
    known = {f.name for f in fields(RendererConfig)}
    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            raise RendererConfigError(f"Unknown key renderer.{key} in {source}")
        values[key] = _parse_value(str(key), value, source=source)

    try:
        return RendererConfig(**values)
    except ValueError as exc:
        raise RendererConfigError(f"Invalid renderer config in {source}: {exc}") from exc


def _parse_value(key: str, value: object, *, source: Path) -> object:
    if key in _BOOL_KEYS:
        if not isinstance(value, bool):
            raise RendererConfigError(f"renderer.{key} must be a boolean in {source}")
        return value
    if key in _FLOAT_KEYS:
        # bool is an int subclass; reject `true` for sizes
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise RendererConfigError(f"renderer.{key} must be a number in {source}")
        return float(value)
    if key in _STR_KEYS:
        if not isinstance(value, str) or not value.strip():
            raise RendererConfigError(f"renderer.{key} must be a non-empty string in {source}")
        return value
    raise RendererConfigError(f"Unknown key renderer.{key} in {source}")
