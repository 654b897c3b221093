"""Data models for patch recognition."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Tuple, Union


class ParseState(str, Enum):
    START = "start"
    FILE_HEADER = "file_header"
    HUNK_HEADER = "hunk_header"
    HUNK = "hunk"
    HUNK_END = "hunk_end"
    END = "end"


class HunkKind(str, Enum):
    ASCII = "ascii"
    BINARY = "binary"


class FailureReason(str, Enum):
    PATH_MISMATCH = "path_mismatch"
    MIXED_HUNK = "mixed_hunk"
    COUNT_OVERFLOW = "count_overflow"
    TRUNCATED = "truncated"


@dataclass(frozen=True, slots=True)
class Failure:
    """One recorded reason why a body did not recognise cleanly."""

    reason: FailureReason
    line_no: int  # 1-based; 0 for end of input
    detail: str = ""


@dataclass(frozen=True)
class PatchResult:
    """Outcome of recognising a mail body.

    Unpacks as ``(success, text)``::

        ok, text = recognize(body)
    """

    success: bool
    text: str
    final_state: ParseState = ParseState.START
    failures: Tuple[Failure, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Union[bool, str]]:
        yield self.success
        yield self.text

    @property
    def reasons(self) -> list[str]:
        return [f.reason.value for f in self.failures]
