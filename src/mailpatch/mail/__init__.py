"""Mail input layer."""

from mailpatch.mail.reader import MailError, MailMessage, iter_mbox, load_messages, read_message

__all__ = [
    "MailError",
    "MailMessage",
    "iter_mbox",
    "load_messages",
    "read_message",
]
