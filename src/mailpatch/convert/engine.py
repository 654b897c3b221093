"""Conversion engine — recognise, name and write a batch of mail messages."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, Tuple

from mailpatch.config.schema import MailPatchConfig
from mailpatch.convert.models import ConversionRecord, ConversionReport
from mailpatch.mail.reader import MailMessage
from mailpatch.output.writer import PatchExistsError, WriteError, write_patch
from mailpatch.patch.filename import derive_patch_filename
from mailpatch.patch.recognizer import recognize


class ConvertError(Exception):
    """Raised when a rebuilt patch cannot be written."""


def convert_message(message: MailMessage, config: MailPatchConfig) -> Tuple[ConversionRecord, str]:
    """Recognise one message and name its patch. Returns the record and the patch text."""
    result = recognize(message.body, lf_suffixes=config.convert.lf_suffixes)
    file_name = derive_patch_filename(message.subject, result.success)
    record = ConversionRecord(
        source=message.source,
        subject=message.subject,
        file_name=file_name,
        success=result.success,
        status="dry_run",
        line_count=result.text.count("\n"),
        final_state=result.final_state,
        failures=list(result.failures),
    )
    return record, result.text


def convert_messages(
    messages: Iterable[MailMessage],
    config: MailPatchConfig,
    *,
    dry_run: bool = False,
) -> ConversionReport:
    """Convert every message and write the patches under ``config.output.directory``."""
    start = time.perf_counter()
    out_dir = Path(config.output.directory)
    report = ConversionReport(
        output_dir=str(out_dir),
        fail_on_warning=config.convert.fail_on_warning,
    )

    for message in messages:
        record, text = convert_message(message, config)
        report.records.append(record)

        if dry_run:
            continue
        if not record.success and not config.convert.keep_failed:
            record.status = "skipped"
            continue

        try:
            path = write_patch(
                out_dir,
                record.file_name,
                text,
                overwrite=config.output.overwrite,
                encoding=config.output.encoding,
            )
        except PatchExistsError:
            record.status = "exists"
            continue
        except WriteError as exc:
            raise ConvertError(str(exc)) from exc

        record.status = "written"
        record.path = str(path)

    report.duration_ms = (time.perf_counter() - start) * 1000
    return report
