"""Read already-downloaded mail — single messages, mbox files, directories."""

from __future__ import annotations

import email
import mailbox
from dataclasses import dataclass
from email import policy
from email.message import EmailMessage
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List

_MBOX_SUFFIXES = (".mbox", ".mbx")
_MESSAGE_GLOB = "*.eml"


class MailError(Exception):
    """Raised when a mail input is missing or cannot be parsed."""


@dataclass(frozen=True)
class MailMessage:
    """Subject and decoded plain-text body of one mail."""

    subject: str
    body: str
    source: str  # file path, with "#N" for the Nth message of an mbox


def _parse_binary(fp: BinaryIO) -> EmailMessage:
    return email.message_from_binary_file(fp, policy=policy.default)  # type: ignore[return-value]


def _subject(msg: EmailMessage) -> str:
    subject = str(msg.get("Subject", "") or "")
    return " ".join(subject.replace("\r", " ").replace("\n", " ").split())


def _body(msg: EmailMessage) -> str:
    """Return the first text/plain part, decoded with its declared charset."""
    part = msg.get_body(preferencelist=("plain",))
    if part is None:
        if msg.is_multipart():
            return ""
        part = msg
    try:
        content = part.get_content()
    except (LookupError, KeyError):
        # Unknown charset: decode the raw payload leniently
        payload = part.get_payload(decode=True) or b""
        return payload.decode("utf-8", errors="replace")
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def _to_message(msg: EmailMessage, source: str) -> MailMessage:
    return MailMessage(subject=_subject(msg), body=_body(msg), source=source)


def read_message(path: Path) -> MailMessage:
    """Parse a single RFC 822 message file."""
    try:
        with open(path, "rb") as f:
            msg = _parse_binary(f)
    except OSError as exc:
        raise MailError(f"Cannot read {path}: {exc}") from exc
    return _to_message(msg, str(path))


def iter_mbox(path: Path) -> Iterator[MailMessage]:
    """Yield every message of an mbox file, in file order."""
    if not path.is_file():
        raise MailError(f"Mailbox not found: {path}")
    box = mailbox.mbox(str(path), factory=_parse_binary, create=False)
    try:
        for number, msg in enumerate(box, start=1):
            yield _to_message(msg, f"{path}#{number}")
    finally:
        box.close()


def is_mbox(path: Path) -> bool:
    """True for ``.mbox``/``.mbx`` files or files starting with a ``From `` line."""
    if path.suffix.lower() in _MBOX_SUFFIXES:
        return True
    try:
        with open(path, "rb") as f:
            return f.read(5) == b"From "
    except OSError:
        return False


def load_messages(paths: Iterable[Path]) -> List[MailMessage]:
    """Load messages from every input path, in argument order."""
    messages: List[MailMessage] = []
    for path in paths:
        if not path.exists():
            raise MailError(f"Input not found: {path}")
        if path.is_dir():
            for child in sorted(path.glob(_MESSAGE_GLOB)):
                messages.append(read_message(child))
        elif is_mbox(path):
            messages.extend(iter_mbox(path))
        else:
            messages.append(read_message(path))
    return messages
