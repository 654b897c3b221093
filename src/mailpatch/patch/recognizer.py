"""Mail body → patch recogniser.

Mail clients mangle inline patches in a few predictable ways: ordinary
spaces become non-breaking spaces, CRLF line endings get normalised and
empty lines get injected after long whitespace lines. ``PatchRecognizer``
walks the body line by line through a small state machine, tracks hunk line
counts and rebuilds the patch text, undoing those artifacts as it goes.

Usage::

    ok, text = convert_to_patch(body)

    result = recognize(body)
    if not result.success:
        for failure in result.failures:
            ...
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from mailpatch.patch.models import (
    Failure,
    FailureReason,
    HunkKind,
    ParseState,
    PatchResult,
)

# --- Line patterns ---

# diff --git a/filepath_1 b/filepath_2  (captured paths keep their leading "/")
_FILE_HEADER_RE = re.compile(r"^diff\s+--git\s+a(/.*)\s+b(/.*)$")
# @@ -347,7 +347,8 @@ Field(GNVS,AnyAcc,Lock,Preserve)
# @@ -1 +1,3 @@
_HUNK_HEADER_RE = re.compile(r"^@@\s+-\d+(?:,(\d+))?\s+\+\d+(?:,(\d+))?\s+@@.*$")
_BINARY_HEADER = "GIT binary patch"
_BINARY_SUB_HEADER_RE = re.compile(r"^(delta|literal)\s+[0-9]+\s*$")
_BINARY_PAYLOAD_RE = re.compile(r"^[a-zA-Z]\S+$")
_NO_NEWLINE_MARKER = "\\ No newline at end of file"
_SIGNATURE = "-- "

_LINE_SPLIT_RE = re.compile(r"\r\n|\n")
_NBSP = "\u00a0"

LF = "\n"
CRLF = "\r\n"

DEFAULT_LF_SUFFIXES: Tuple[str, ...] = (".sh",)


def _despace(text: str) -> str:
    """Turn non-breaking spaces back into ASCII spaces."""
    return text.replace(_NBSP, " ")


@dataclass(frozen=True, slots=True)
class Step:
    """Outcome of feeding one line: the new state and how the line is emitted.

    ``eol`` is ``None`` when the line is an injected artifact and is dropped.
    """

    state: ParseState
    eol: Optional[str]

    @property
    def dropped(self) -> bool:
        return self.eol is None


class PatchRecognizer:
    """Incremental recogniser; one instance per mail body.

    Lines are fed one at a time with :meth:`feed`; :meth:`finish` returns the
    rebuilt text and the verdict. Violations never stop the scan, they are
    recorded and fold into ``success=False``.
    """

    def __init__(self, *, lf_suffixes: Sequence[str] = DEFAULT_LF_SUFFIXES) -> None:
        self.state = ParseState.START
        self.kind = HunkKind.BINARY
        self.remaining_added = 0
        self.remaining_deleted = 0
        self.file_path = ""
        self._lf_suffixes = tuple(lf_suffixes)
        self._overflowed = False
        self._line_no = 0
        self._failures: List[Failure] = []
        self._out: List[str] = []

    # ---- driving ----

    def feed(self, line: str) -> Step:
        """Consume one line (without its terminator) and emit it."""
        self._line_no += 1
        step = self._transition(line)
        self.state = step.state

        # Some clients inject an empty line after a long whitespace-only line
        if self.state in (ParseState.HUNK, ParseState.HUNK_END):
            if self.kind is HunkKind.ASCII and line == "":
                return Step(step.state, None)

        self._out.append(_despace(line) + (step.eol or LF))
        return step

    def finish(self) -> PatchResult:
        if self.state is not ParseState.END:
            self._fail(
                FailureReason.TRUNCATED,
                f"input ended in state {self.state.value}",
                line_no=0,
            )
        return PatchResult(
            success=not self._failures,
            text="".join(self._out),
            final_state=self.state,
            failures=tuple(self._failures),
        )

    @property
    def failures(self) -> List[Failure]:
        return list(self._failures)

    def _fail(self, reason: FailureReason, detail: str, *, line_no: Optional[int] = None) -> None:
        self._failures.append(
            Failure(reason=reason, line_no=self._line_no if line_no is None else line_no, detail=detail)
        )

    def _transition(self, line: str) -> Step:
        for eligible, rule in self._RULES:
            if self.state in eligible:
                step = rule(self, line)
                if step is not None:
                    return step
        # Unclaimed lines keep the state and use LF
        return Step(self.state, LF)

    # ---- rules (in priority order) ----

    def _on_file_header(self, line: str) -> Optional[Step]:
        m = _FILE_HEADER_RE.match(line)
        if not m:
            return None
        old_path, new_path = m.group(1), m.group(2)
        if old_path != new_path:
            self._fail(FailureReason.PATH_MISMATCH, f"a{old_path} != b{new_path}")
        self.file_path = old_path
        return Step(ParseState.FILE_HEADER, LF)

    def _on_hunk_header(self, line: str) -> Optional[Step]:
        m = _HUNK_HEADER_RE.match(line)
        if m:
            self.kind = HunkKind.ASCII
            self.remaining_deleted = int(m.group(1)) if m.group(1) is not None else 1
            self.remaining_added = int(m.group(2)) if m.group(2) is not None else 1
            self._overflowed = False
        elif line == _BINARY_HEADER:
            self.kind = HunkKind.BINARY
        else:
            return None
        return Step(ParseState.HUNK_HEADER, LF)

    def _on_binary_sub_header(self, line: str) -> Optional[Step]:
        if not _BINARY_SUB_HEADER_RE.match(line):
            return None
        if self.kind is HunkKind.ASCII:
            self._fail(FailureReason.MIXED_HUNK, "binary sub-header inside an ascii hunk")
        return Step(ParseState.HUNK_HEADER, LF)

    def _on_hunk_line(self, line: str) -> Optional[Step]:
        if self.kind is HunkKind.ASCII:
            return self._ascii_line(line)
        return self._binary_line(line)

    def _on_signature(self, line: str) -> Optional[Step]:
        if line != _SIGNATURE:
            return None
        return Step(ParseState.END, LF)

    _RULES: Tuple[Tuple[FrozenSet[ParseState], Callable[["PatchRecognizer", str], Optional[Step]]], ...] = (
        (frozenset({ParseState.START, ParseState.HUNK_END}), _on_file_header),
        (frozenset({ParseState.FILE_HEADER, ParseState.HUNK_END}), _on_hunk_header),
        (frozenset({ParseState.HUNK_HEADER, ParseState.HUNK_END}), _on_binary_sub_header),
        (frozenset({ParseState.HUNK_HEADER, ParseState.HUNK}), _on_hunk_line),
        (frozenset({ParseState.HUNK_END}), _on_signature),
    )

    # ---- hunk bodies ----

    def _ascii_line(self, line: str) -> Step:
        eol = LF if self.file_path.endswith(self._lf_suffixes) else CRLF

        if line != _NO_NEWLINE_MARKER and line != "":
            if line[0] in " +":
                self.remaining_added -= 1
            if line[0] in " -":
                self.remaining_deleted -= 1

        if self.remaining_added < 0 or self.remaining_deleted < 0:
            if not self._overflowed:
                self._overflowed = True
                self._fail(
                    FailureReason.COUNT_OVERFLOW,
                    f"hunk for {self.file_path} has more lines than its header announces",
                )

        if self.remaining_added == 0 and self.remaining_deleted == 0:
            return Step(ParseState.HUNK_END, eol)
        return Step(ParseState.HUNK, eol)

    def _binary_line(self, line: str) -> Step:
        # The first line outside the payload alphabet closes the hunk and is
        # still emitted as-is, without being re-checked against other rules.
        if _BINARY_PAYLOAD_RE.match(line):
            return Step(ParseState.HUNK, LF)
        return Step(ParseState.HUNK_END, LF)


def split_lines(body_text: str) -> List[str]:
    """Split on both LF and CRLF; a trailing terminator yields a final ``""``."""
    return _LINE_SPLIT_RE.split(body_text)


def recognize(body_text: str, *, lf_suffixes: Sequence[str] = DEFAULT_LF_SUFFIXES) -> PatchResult:
    """Recognise *body_text* as a patch and rebuild it. Never raises."""
    recognizer = PatchRecognizer(lf_suffixes=lf_suffixes)
    for line in split_lines(_despace(body_text)):
        recognizer.feed(line)
    return recognizer.finish()


def convert_to_patch(body_text: str) -> Tuple[bool, str]:
    """Return ``(success, patch_text)`` for a mail body."""
    result = recognize(body_text)
    return result.success, result.text
