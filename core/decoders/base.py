"""
zcatr Decoder Interfaces
A compression stage turns a byte source into one decompressed stream.
An archive stage turns a byte source into (member, reader) pairs.
"""
import io
import zlib
from typing import BinaryIO, Iterator, Tuple

from ..errors import CorruptStreamError
from ..models import ArchiveMember

# Errors the standard codecs raise for bad headers, CRCs and truncation
CODEC_ERRORS = (OSError, EOFError, zlib.error)


class GuardedStream(io.RawIOBase):
    """
    Read-only wrapper that reports codec failures as CorruptStreamError
    (or `raise_as`) on the read that hits them.
    """

    def __init__(
        self,
        stream: BinaryIO,
        label: str,
        errors=CODEC_ERRORS,
        raise_as=CorruptStreamError
    ):
        super().__init__()
        self._stream = stream
        self._label = label
        self._errors = errors
        self._raise_as = raise_as

    def readable(self):
        return True

    def read(self, size=-1):
        try:
            return self._stream.read(size)
        except self._errors as e:
            raise self._raise_as(f"{self._label} stream is corrupt: {e}") from e

    def readinto(self, b):
        data = self.read(len(b))
        b[:len(data)] = data
        return len(data)

    def close(self):
        if not self.closed:
            try:
                self._stream.close()
            finally:
                super().close()


class CompressionDecoder:
    name = "compression"

    def open(self, source: BinaryIO) -> BinaryIO:
        raise NotImplementedError


class ArchiveDecoder:
    name = "archive"
    requires_seekable = False

    def members(self, source: BinaryIO) -> Iterator[Tuple[ArchiveMember, BinaryIO]]:
        raise NotImplementedError


__all__ = ["GuardedStream", "CompressionDecoder", "ArchiveDecoder", "CODEC_ERRORS"]
