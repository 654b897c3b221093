"""Load and merge configuration from .mailpatch.toml and env vars."""

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

from mailpatch.config.defaults import CONFIG_FILENAME
from mailpatch.config.schema import (
    OUTPUT_FORMATS,
    ConvertConfig,
    MailPatchConfig,
    OutputConfig,
)

_TRUTHY = ("1", "true", "yes")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: MailPatchConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    suffixes = cfg.convert.lf_suffixes
    if not isinstance(suffixes, list) or not all(isinstance(s, str) for s in suffixes):
        raise ConfigError("convert.lf_suffixes must be a list of strings")
    if not isinstance(cfg.output.encoding, str):
        raise ConfigError("output.encoding must be a string")


def _merge_env_overrides(cfg: MailPatchConfig) -> None:
    """Apply MAILPATCH_* environment variable overrides."""
    if val := os.environ.get("MAILPATCH_OUTPUT_DIR"):
        cfg.output.directory = val
    if val := os.environ.get("MAILPATCH_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("MAILPATCH_OVERWRITE"):
        cfg.output.overwrite = val.lower() in _TRUTHY
    if val := os.environ.get("MAILPATCH_FAIL_ON_WARNING"):
        cfg.convert.fail_on_warning = val.lower() in _TRUTHY


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> MailPatchConfig:
    """Load, validate, and return a MailPatchConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = MailPatchConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = MailPatchConfig(
            version=str(raw.get("version", "1.0")),
            output=_build_section(raw, OutputConfig, "output"),
            convert=_build_section(raw, ConvertConfig, "convert"),
        )

    _validate(cfg)
    _merge_env_overrides(cfg)
    return cfg
