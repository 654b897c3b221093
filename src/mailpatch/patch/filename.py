"""Patch file names from mailing-list subjects.

``[edk2-devel] [PATCH V2 2/5] Add FooLib support.`` → ``0002-Add-FooLib-support.patch``
``[PATCH V2] Fix build``                            → ``0001-Fix-build.patch``
"""

from __future__ import annotations

import re

_SUBJECT_RE = re.compile(
    r"(?:\[edk2-devel\]\s*)?\[PATCH\s*(?:V\d+\s*)?(?:(\d+)/\d+)?\]\s*(.*?)[.\s]*$",
    re.IGNORECASE,
)
_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")
_RESERVED_RE = re.compile(r'[\\/*|"<>:#?]')
_SPACES_RE = re.compile(r" +")

WARNING_SUFFIX = ".warning"
PATCH_SUFFIX = ".patch"


def patch_stem(subject: str) -> str:
    """Return the ``NNNN-title`` stem, or *subject* itself if it is not a patch subject."""
    m = _SUBJECT_RE.search(subject)
    if not m:
        return subject
    index = int(m.group(1)) if m.group(1) is not None else 1
    return f"{index:04d}-{m.group(2)}"


def sanitize(stem: str) -> str:
    """Make *stem* safe as a file name component (ASCII, no reserved chars, no spaces)."""
    stem = _NON_ASCII_RE.sub(" ", stem)
    stem = _RESERVED_RE.sub(" ", stem)
    return _SPACES_RE.sub("-", stem)


def derive_patch_filename(subject: str, success: bool) -> str:
    """Derive the patch file name for a mail *subject*.

    Unreliable patches (``success`` false) get a ``.warning`` marker before
    the ``.patch`` extension so they stand out for manual review.
    """
    name = sanitize(patch_stem(subject))
    if not success:
        name += WARNING_SUFFIX
    return name + PATCH_SUFFIX
