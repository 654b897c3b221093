"""YAML reporter — same document as the JSON report."""

from __future__ import annotations

import yaml

from mailpatch.convert.models import ConversionReport
from mailpatch.output.json_report import to_dict


def render(report: ConversionReport) -> str:
    return yaml.safe_dump(to_dict(report), sort_keys=False, allow_unicode=True)
