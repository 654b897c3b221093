"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json", "yaml"]

OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "yaml")


@dataclass
class OutputConfig:
    directory: str = "patches"
    format: OutputFormat = "terminal"
    overwrite: bool = False
    show_summary: bool = True
    encoding: str = "utf-8"  # patch file encoding


@dataclass
class ConvertConfig:
    keep_failed: bool = True  # still write unreliable patches, as *.warning.patch
    fail_on_warning: bool = False  # exit 1 if any message fails recognition
    lf_suffixes: List[str] = field(default_factory=lambda: [".sh"])


@dataclass
class MailPatchConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    convert: ConvertConfig = field(default_factory=ConvertConfig)
