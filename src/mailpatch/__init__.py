"""mailpatch — rebuild git patches from mail bodies mangled by mail clients."""

__version__ = "0.1.0"
