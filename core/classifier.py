"""
zcatr Content Classifier
Decides whether decoded bytes are safe to print to a console.
"""
import codecs
from pathlib import PurePosixPath
from typing import Iterable

import filetype

from .config import config
from .models import Verdict

# Control bytes that are still ordinary text
TEXT_WHITESPACE = frozenset(b'\t\n\r\f\v')


def decodes_as_utf8(prefix: bytes) -> bool:
    """True if `prefix` is valid UTF-8, allowing a sequence cut off at the end"""
    try:
        codecs.getincrementaldecoder('utf-8')().decode(prefix)
    except UnicodeDecodeError:
        return False
    return True


def is_printable_text(prefix: bytes) -> bool:
    """No NUL, no control bytes outside common whitespace, no binary signature"""
    if not prefix:
        return True
    if b'\0' in prefix:
        return False
    for byte in prefix:
        if (byte < 0x20 and byte not in TEXT_WHITESPACE) or byte == 0x7F:
            return False
    # Short signatures like "MZ" or "ID3" also start ordinary sentences
    if decodes_as_utf8(prefix):
        return True
    return filetype.guess(prefix) is None


class ContentClassifier:
    def __init__(self, text_extensions: Iterable[str] = None):
        extensions = config.text_extensions if text_extensions is None else text_extensions
        self.text_extensions = {ext.lower().lstrip('.') for ext in extensions}

    def has_text_extension(self, name: str) -> bool:
        suffix = PurePosixPath(name).suffix.lower().lstrip('.')
        return suffix in self.text_extensions

    def classify(self, name: str, prefix: bytes) -> Verdict:
        """Text if the extension is allow-listed or the bytes sniff as printable"""
        if self.has_text_extension(name) or is_printable_text(prefix):
            return Verdict.RENDER_AS_TEXT
        return Verdict.UNAVAILABLE


__all__ = ["ContentClassifier", "decodes_as_utf8", "is_printable_text"]
