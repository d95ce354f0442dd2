"""
zcatr Data Model
Format tags, decoding stages, archive members and render choices.
"""
import enum
from dataclasses import dataclass


class FormatTag(enum.Enum):
    PLAIN_GZIP = "gzip"
    PLAIN_BZIP2 = "bzip2"
    ZIP = "zip"
    TAR = "tar"
    TAR_GZIP = "tar+gzip"
    TAR_BZIP2 = "tar+bzip2"
    UNKNOWN = "unknown"


class Stage(enum.Enum):
    GZIP = "gzip"
    BZIP2 = "bzip2"
    TAR = "tar"
    ZIP = "zip"

    @property
    def is_archive(self) -> bool:
        return self in (Stage.TAR, Stage.ZIP)


class RenderMode(enum.Enum):
    CONTENT = "content"
    LIST = "list"


class Verdict(enum.Enum):
    RENDER_AS_TEXT = "text"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ArchiveMember:
    """One entry of an archive; size is always the uncompressed size"""
    name: str
    size: int
    is_dir: bool = False


__all__ = ["FormatTag", "Stage", "RenderMode", "Verdict", "ArchiveMember"]
