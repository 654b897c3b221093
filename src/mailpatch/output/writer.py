"""Write rebuilt patches to disk, byte for byte."""

from __future__ import annotations

from pathlib import Path


class WriteError(Exception):
    """Raised when a patch file cannot be written."""


class PatchExistsError(WriteError):
    """Raised when the target file exists and overwriting is off."""


def write_patch(
    directory: Path,
    file_name: str,
    text: str,
    *,
    overwrite: bool = False,
    encoding: str = "utf-8",
) -> Path:
    """Write *text* to ``directory / file_name`` and return the path.

    Line endings are written exactly as they appear in *text*: patches mix
    CRLF and LF on purpose.
    """
    target = directory / file_name
    if target.exists() and not overwrite:
        raise PatchExistsError(f"{target} already exists (use --overwrite to replace it)")

    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding=encoding, newline="") as f:
            f.write(text)
    except (OSError, LookupError) as exc:
        raise WriteError(f"Failed to write {target}: {exc}") from exc
    return target
