"""Configuration loading, schema, and defaults."""

from mailpatch.config.loader import ConfigError, load_config
from mailpatch.config.schema import MailPatchConfig, OutputFormat

__all__ = [
    "ConfigError",
    "MailPatchConfig",
    "OutputFormat",
    "load_config",
]
