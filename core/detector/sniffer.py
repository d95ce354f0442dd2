"""
zcatr Format Sniffer
Identifies a file's true format from its leading bytes, never its name.
Tar has no magic at offset 0, so it is recognised structurally:
either by the ustar marker or by a valid header checksum. Compressed
payloads are peeked once to tell a plain .gz/.bz2 from a .tar.gz/.tar.bz2.
"""
import bz2
import gzip
import zlib
from pathlib import Path
from typing import Union

import filetype

from ..config import config
from ..errors import ReadError
from ..models import FormatTag
from ..utils.logger import logger


TAR_BLOCK_SIZE = 512
USTAR_MAGIC = b'ustar'
USTAR_OFFSET = 257
CHECKSUM_OFFSET = 148
CHECKSUM_LENGTH = 8

# Local header, empty archive, spanned archive
ZIP_SIGNATURES = (b'PK\x03\x04', b'PK\x05\x06', b'PK\x07\x08')

MIME_MAP = {
    'application/gzip': FormatTag.PLAIN_GZIP,
    'application/x-bzip2': FormatTag.PLAIN_BZIP2,
    'application/zip': FormatTag.ZIP,
    'application/epub+zip': FormatTag.ZIP,
    'application/x-tar': FormatTag.TAR,
}


def looks_like_tar(block: bytes) -> bool:
    """
    Structural check on a single 512-byte tar header block.

    Accepts POSIX/GNU headers by their ustar marker and older v7
    headers by recomputing the checksum (field counted as spaces).
    """
    if len(block) < TAR_BLOCK_SIZE:
        return False
    block = block[:TAR_BLOCK_SIZE]

    if not block.strip(b'\0'):
        return False

    if block[USTAR_OFFSET:USTAR_OFFSET + len(USTAR_MAGIC)] == USTAR_MAGIC:
        return True

    field = block[CHECKSUM_OFFSET:CHECKSUM_OFFSET + CHECKSUM_LENGTH]
    digits = field.split(b'\0', 1)[0].strip()
    if not digits:
        return False
    try:
        stored = int(digits, 8)
    except ValueError:
        return False

    computed = (
        sum(block[:CHECKSUM_OFFSET])
        + CHECKSUM_LENGTH * ord(' ')
        + sum(block[CHECKSUM_OFFSET + CHECKSUM_LENGTH:])
    )
    return stored == computed


def sniff_bytes(head: bytes) -> FormatTag:
    """Map a byte prefix to a FormatTag without any further I/O"""
    if not head:
        return FormatTag.UNKNOWN

    kind = filetype.archive_match(head)
    if kind is not None and kind.mime in MIME_MAP:
        return MIME_MAP[kind.mime]

    # Office documents and other zip containers are matched as documents
    if head.startswith(ZIP_SIGNATURES):
        return FormatTag.ZIP

    if looks_like_tar(head):
        return FormatTag.TAR

    return FormatTag.UNKNOWN


class FormatSniffer:
    LAYERED = {
        FormatTag.PLAIN_GZIP: (gzip.GzipFile, FormatTag.TAR_GZIP),
        FormatTag.PLAIN_BZIP2: (bz2.BZ2File, FormatTag.TAR_BZIP2),
    }

    def __init__(self, prefix_size: int = None):
        self.prefix_size = max(prefix_size or config.prefix_size, TAR_BLOCK_SIZE)

    def sniff(self, path: Union[str, Path]) -> FormatTag:
        """
        Read the prefix of `path` once and return its FormatTag.
        Raises ReadError if the file cannot be opened or read.
        """
        try:
            with open(path, 'rb') as f:
                head = f.read(self.prefix_size)
        except OSError as e:
            raise ReadError(f"Cannot read file: {e.strerror or e}", path=str(path)) from e

        tag = sniff_bytes(head)

        if tag in self.LAYERED:
            opener, layered_tag = self.LAYERED[tag]
            if self._peek_tar(path, opener):
                tag = layered_tag

        logger.debug(f"🔍 {path}: detected {tag.value}")
        return tag

    def _peek_tar(self, path, opener) -> bool:
        """Decompress one header block from a fresh handle"""
        try:
            with opener(path, 'rb') as stream:
                block = stream.read(TAR_BLOCK_SIZE)
        except (OSError, EOFError, zlib.error) as e:
            # Corruption is reported by the decoder, not the sniffer
            logger.debug(f"Could not peek inside {path}: {e}")
            return False
        return looks_like_tar(block)


__all__ = ["FormatSniffer", "sniff_bytes", "looks_like_tar", "TAR_BLOCK_SIZE"]
