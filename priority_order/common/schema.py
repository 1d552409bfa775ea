"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from priority_order.common.errors import ConfigError

PROFILE_REQUIRED = {"priorities"}
PROFILE_KNOWN = PROFILE_REQUIRED | {"ignore_case", "key_column"}


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_profile(profile: dict, *, name: str, allow_unknown: bool = False) -> dict:
    ctx = f"profiles.{name}"
    _assert_mapping(profile, ctx)
    _assert_required_keys(profile, PROFILE_REQUIRED, ctx)
    _assert_no_unknown_keys(profile, PROFILE_KNOWN, ctx, allow_unknown)

    priorities = profile["priorities"]
    if not isinstance(priorities, list):
        raise ConfigError(f"{ctx}.priorities must be a list")
    if any(isinstance(value, (list, dict)) or value is None for value in priorities):
        raise ConfigError(f"{ctx}.priorities must hold scalar values")
    if not isinstance(profile.get("ignore_case", False), bool):
        raise ConfigError(f"{ctx}.ignore_case must be a boolean")
    key_column = profile.get("key_column")
    if key_column is not None and not isinstance(key_column, str):
        raise ConfigError(f"{ctx}.key_column must be a string")

    # Keys are matched as stripped text, so 1, "1" and " 1" collide.
    texts = [str(value).strip() for value in priorities]
    if profile.get("ignore_case"):
        texts = [value.casefold() for value in texts]
    dupes = {value for value in texts if texts.count(value) > 1}
    if dupes:
        raise ConfigError(f"Duplicate priorities in {ctx}: {', '.join(sorted(dupes))}")

    return profile


def validate_profiles_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "profiles config")
    _assert_required_keys(cfg, {"version", "profiles"}, "profiles config")
    _assert_no_unknown_keys(cfg, {"version", "profiles"}, "profiles config", allow_unknown)
    if not isinstance(cfg["profiles"], dict) or not cfg["profiles"]:
        raise ConfigError("profiles must be a non-empty mapping")

    for name, profile in cfg["profiles"].items():
        validate_profile(profile, name=str(name), allow_unknown=allow_unknown)
    return cfg
