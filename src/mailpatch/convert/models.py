"""Conversion result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from mailpatch.patch.models import Failure, ParseState


@dataclass
class ConversionRecord:
    """What happened to one mail message."""

    source: str
    subject: str
    file_name: str
    success: bool
    status: str  # 'written' | 'dry_run' | 'skipped' | 'exists'
    line_count: int = 0
    final_state: ParseState = ParseState.START
    failures: List[Failure] = field(default_factory=list)
    path: Optional[str] = None

    @property
    def notes(self) -> str:
        return ", ".join(f"{f.reason.value}@{f.line_no}" for f in self.failures)


@dataclass
class ConversionReport:
    """Complete result of a conversion run."""

    records: List[ConversionRecord] = field(default_factory=list)
    output_dir: str = ""
    fail_on_warning: bool = False
    duration_ms: float = 0.0

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def succeeded(self) -> List[ConversionRecord]:
        return [r for r in self.records if r.success]

    @property
    def warnings(self) -> List[ConversionRecord]:
        return [r for r in self.records if not r.success]

    @property
    def written(self) -> List[ConversionRecord]:
        return [r for r in self.records if r.status == "written"]

    @property
    def blocked(self) -> bool:
        return self.fail_on_warning and bool(self.warnings)
