"""
zcatr Zip Decoder
Enumerates members from the central directory, so the source must be seekable.
"""
import zipfile
import zlib
from typing import BinaryIO, Iterator, Tuple

from .base import ArchiveDecoder, GuardedStream
from ..errors import MalformedHeaderError, UnsupportedFormatError
from ..models import ArchiveMember

ZIP_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, OSError)
MSDOS_DIR_ATTR = 0x10


class ZipDecoder(ArchiveDecoder):
    name = "zip"
    requires_seekable = True

    def members(self, source: BinaryIO) -> Iterator[Tuple[ArchiveMember, BinaryIO]]:
        """
        Yield (member, reader) for every central-directory entry, in order.

        Readers are opened lazily, so listing never touches member data.
        """
        if not source.seekable():
            raise UnsupportedFormatError("Zip archives need a seekable source")

        try:
            archive = zipfile.ZipFile(source, 'r')
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise MalformedHeaderError(f"Invalid zip archive: {e}") from e

        with archive:
            for info in archive.infolist():
                member = ArchiveMember(
                    name=info.filename,
                    size=info.file_size,
                    is_dir=info.is_dir() or bool(info.external_attr & MSDOS_DIR_ATTR)
                )
                yield member, _LazyMemberReader(archive, info)


class _LazyMemberReader:
    """Opens the member on first read; stored/deflated/etc. is handled by zipfile"""

    def __init__(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo):
        self._archive = archive
        self._info = info
        self._stream = None

    def _open(self):
        try:
            raw = self._archive.open(self._info, 'r')
        except NotImplementedError as e:
            raise UnsupportedFormatError(f"{self._info.filename}: {e}") from e
        except RuntimeError as e:
            # Raised for encrypted entries without a password
            raise UnsupportedFormatError(f"{self._info.filename}: {e}") from e
        except zipfile.BadZipFile as e:
            raise MalformedHeaderError(f"{self._info.filename}: {e}") from e
        return GuardedStream(raw, ZipDecoder.name, errors=ZIP_READ_ERRORS)

    def read(self, size=-1) -> bytes:
        if self._stream is None:
            self._stream = self._open()
        return self._stream.read(size)

    def close(self):
        if self._stream is not None:
            self._stream.close()
            self._stream = None


__all__ = ["ZipDecoder"]
