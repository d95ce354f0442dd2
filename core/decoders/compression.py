"""
zcatr Compression Decoders
Single-stream gzip and bzip2 decompression, read lazily in chunks.
"""
import bz2
import gzip
from typing import BinaryIO

from .base import CompressionDecoder, GuardedStream


class GzipDecoder(CompressionDecoder):
    name = "gzip"

    def open(self, source: BinaryIO) -> BinaryIO:
        # Header problems surface on first read, CRC/length at end of stream
        return GuardedStream(gzip.GzipFile(fileobj=source, mode='rb'), self.name)


class Bzip2Decoder(CompressionDecoder):
    name = "bzip2"

    def open(self, source: BinaryIO) -> BinaryIO:
        return GuardedStream(bz2.BZ2File(source, mode='rb'), self.name)


__all__ = ["GzipDecoder", "Bzip2Decoder"]
