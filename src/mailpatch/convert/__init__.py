"""Conversion — engine and result models."""

from mailpatch.convert.engine import ConvertError, convert_message, convert_messages
from mailpatch.convert.models import ConversionRecord, ConversionReport

__all__ = [
    "ConversionRecord",
    "ConversionReport",
    "ConvertError",
    "convert_message",
    "convert_messages",
]
