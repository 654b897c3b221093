"""Patch layer — body recogniser, file name derivation, models."""

from mailpatch.patch.filename import derive_patch_filename
from mailpatch.patch.models import Failure, FailureReason, HunkKind, ParseState, PatchResult
from mailpatch.patch.recognizer import PatchRecognizer, Step, convert_to_patch, recognize

__all__ = [
    "Failure",
    "FailureReason",
    "HunkKind",
    "ParseState",
    "PatchRecognizer",
    "PatchResult",
    "Step",
    "convert_to_patch",
    "derive_patch_filename",
    "recognize",
]
