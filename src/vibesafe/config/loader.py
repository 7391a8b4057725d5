"""Load and merge configuration from .vibesafe.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from vibesafe.config.schema import (
    OUTPUT_FORMATS,
    EntropyConfig,
    OutputConfig,
    RulesConfig,
    ScanConfig,
    VibeSafeConfig,
    normalize_severity,
)

CONFIG_FILENAME = ".vibesafe.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _merge_env_overrides(cfg: VibeSafeConfig) -> None:
    """Apply VIBESAFE_* environment variable overrides."""
    if val := os.environ.get("VIBESAFE_FAIL_ON"):
        if severity := normalize_severity(val):
            cfg.scan.fail_on = severity  # type: ignore[assignment]
    if val := os.environ.get("VIBESAFE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("VIBESAFE_IGNORE_PATTERNS"):
        cfg.scan.ignore_patterns.extend(_split_csv(val))
    if val := os.environ.get("VIBESAFE_DISABLE_RULES"):
        cfg.rules.disable.extend(_split_csv(val))
    if val := os.environ.get("VIBESAFE_WORKERS"):
        try:
            cfg.scan.workers = max(1, int(val))
        except ValueError:
            pass


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


_TYPED_FIELDS = (
    ("scan", "follow_symlinks", (bool,)),
    ("scan", "max_depth", (int,)),
    ("scan", "max_file_size_kb", (int,)),
    ("scan", "workers", (int,)),
    ("entropy", "enabled", (bool,)),
    ("entropy", "min_entropy", (int, float)),
    ("entropy", "min_length", (int,)),
    ("output", "redact", (bool,)),
)


def _check_types(cfg: VibeSafeConfig, source: Path) -> None:
    for section, name, types in _TYPED_FIELDS:
        value = getattr(getattr(cfg, section), name)
        # bool is an int subclass; only accept it where bool is expected
        if isinstance(value, bool) and bool not in types:
            value_ok = False
        else:
            value_ok = isinstance(value, types)
        if not value_ok:
            expected = " or ".join(t.__name__ for t in types)
            raise ConfigError(f"{source}: {section}.{name} must be {expected}, got {value!r}")
    if cfg.scan.workers < 1:
        raise ConfigError(f"{source}: scan.workers must be at least 1")
    if cfg.scan.max_file_size_kb < 0:
        raise ConfigError(f"{source}: scan.max_file_size_kb must not be negative")


def _validate(cfg: VibeSafeConfig, source: Path) -> None:
    _check_types(cfg, source)
    severity = normalize_severity(str(cfg.scan.fail_on))
    if severity is None:
        raise ConfigError(f"{source}: invalid scan.fail_on {cfg.scan.fail_on!r}")
    cfg.scan.fail_on = severity  # type: ignore[assignment]
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"{source}: invalid output.format {cfg.output.format!r}")
    if not isinstance(cfg.scan.ignore_patterns, list) or not all(
        isinstance(p, str) for p in cfg.scan.ignore_patterns
    ):
        raise ConfigError(f"{source}: scan.ignore_patterns must be a list of strings")


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> VibeSafeConfig:
    """Load, validate, and return a VibeSafeConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = VibeSafeConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = VibeSafeConfig(
                version=raw.get("version", "1.0"),
                scan=_build_section(raw, ScanConfig, "scan"),
                entropy=_build_section(raw, EntropyConfig, "entropy"),
                rules=_build_section(raw, RulesConfig, "rules"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except (AttributeError, TypeError) as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _validate(cfg, config_path)

    _merge_env_overrides(cfg)
    return cfg
