"""JSON reporter for scripts and CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from mailpatch.convert.models import ConversionReport


def to_dict(report: ConversionReport) -> Dict[str, Any]:
    """Convert a ConversionReport to a JSON-serialisable dict."""
    records: List[Dict[str, Any]] = []
    for r in report.records:
        records.append({
            "source": r.source,
            "subject": r.subject,
            "file_name": r.file_name,
            "success": r.success,
            "status": r.status,
            "lines": r.line_count,
            "final_state": r.final_state.value,
            "failures": [
                {"reason": f.reason.value, "line": f.line_no, "detail": f.detail}
                for f in r.failures
            ],
            **({"path": r.path} if r.path else {}),
        })

    return {
        "version": "1.0",
        "output_dir": report.output_dir,
        "total": report.total,
        "succeeded": len(report.succeeded),
        "warnings": len(report.warnings),
        "written": len(report.written),
        "blocked": report.blocked,
        "patches": records,
        "duration_ms": report.duration_ms,
    }


def render(report: ConversionReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
