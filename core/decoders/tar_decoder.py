"""
zcatr Tar Decoder
Sequential walk over 512-byte header blocks in streaming mode,
so it also works on the output of a compression stage.
"""
import io
import tarfile
from typing import BinaryIO, Iterator, Tuple

from .base import ArchiveDecoder, GuardedStream
from ..errors import MalformedHeaderError
from ..models import ArchiveMember
from ..utils.logger import logger


class StrictTarInfo(tarfile.TarInfo):
    """Header parser that fails on a bad block instead of ending the archive"""

    @classmethod
    def frombuf(cls, buf, encoding, errors):
        try:
            return super().frombuf(buf, encoding, errors)
        except tarfile.InvalidHeaderError as e:
            # Zero blocks raise EOFHeaderError and still end the walk
            raise MalformedHeaderError(f"Invalid tar header: {e}") from e


class TarDecoder(ArchiveDecoder):
    name = "tar"

    def members(self, source: BinaryIO) -> Iterator[Tuple[ArchiveMember, BinaryIO]]:
        """
        Yield (member, reader) per header block until the zero-block terminator.

        Each reader is bounded to the member's declared size and must be
        consumed (or abandoned) before the next member is requested.
        Directories and other non-regular entries get an empty reader.
        """
        try:
            archive = tarfile.open(fileobj=source, mode='r|', tarinfo=StrictTarInfo)
        except tarfile.TarError as e:
            raise MalformedHeaderError(f"Invalid tar header: {e}") from e

        with archive:
            entries = iter(archive)
            while True:
                try:
                    info = next(entries)
                except StopIteration:
                    break
                except tarfile.TarError as e:
                    raise MalformedHeaderError(f"Invalid tar header: {e}") from e

                member = ArchiveMember(
                    name=info.name,
                    size=info.size if info.isfile() else 0,
                    is_dir=info.isdir()
                )

                if info.isfile():
                    reader = GuardedStream(
                        archive.extractfile(info),
                        self.name,
                        errors=(tarfile.TarError, EOFError),
                        raise_as=MalformedHeaderError
                    )
                else:
                    logger.debug(f"   tar: {info.name} is not a regular file")
                    reader = io.BytesIO(b"")

                yield member, reader


__all__ = ["TarDecoder"]
