"""Profile configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from priority_order.common.errors import ConfigError
from priority_order.common.fs import read_yaml
from priority_order.common.schema import validate_profiles_config


@dataclass(frozen=True)
class Profile:
    name: str
    priorities: tuple[str, ...]
    ignore_case: bool = False
    key_column: str | None = None


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if not isinstance(base, dict):
        raise ConfigError(f"Config file must hold a mapping: {path}")
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay file must hold a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_profiles(
    config_path: Path,
    *,
    allow_unknown: bool = False,
    overlay_path: Path | None = None,
) -> dict[str, Profile]:
    cfg = validate_profiles_config(
        _load_yaml_with_overlay(config_path, overlay_path),
        allow_unknown=allow_unknown,
    )
    profiles = {}
    for name, raw in cfg["profiles"].items():
        profiles[str(name)] = Profile(
            name=str(name),
            priorities=tuple(str(value) for value in raw["priorities"]),
            ignore_case=bool(raw.get("ignore_case", False)),
            key_column=raw.get("key_column"),
        )
    return profiles


def resolve_profile(profiles: dict[str, Profile], name: str) -> Profile:
    if name not in profiles:
        known = ", ".join(sorted(profiles))
        raise ConfigError(f"Unknown profile {name!r}; known profiles: {known}")
    return profiles[name]
