"""
zcatr Errors
Every failure that aborts processing of a single input file.
"""


class ZcatError(Exception):
    """Base class for per-file failures"""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self):
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ReadError(ZcatError):
    """File is missing, unreadable, or cannot be opened"""


class UnsupportedFormatError(ZcatError):
    """Format was recognized but nothing can decode it"""


class CorruptStreamError(ZcatError):
    """Decompression failed a header, checksum, or length check"""


class MalformedHeaderError(ZcatError):
    """Archive structure could not be parsed"""


__all__ = [
    "ZcatError",
    "ReadError",
    "UnsupportedFormatError",
    "CorruptStreamError",
    "MalformedHeaderError"
]
