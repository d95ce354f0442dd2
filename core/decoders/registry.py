"""
zcatr Decoder Registry
Static FormatTag -> stage list mapping, and stage -> decoder lookup.
"""
from typing import Tuple

from .base import ArchiveDecoder, CompressionDecoder
from .compression import Bzip2Decoder, GzipDecoder
from .tar_decoder import TarDecoder
from .zip_decoder import ZipDecoder
from ..errors import UnsupportedFormatError
from ..models import FormatTag, Stage


STAGES = {
    FormatTag.UNKNOWN: (),
    FormatTag.PLAIN_GZIP: (Stage.GZIP,),
    FormatTag.PLAIN_BZIP2: (Stage.BZIP2,),
    FormatTag.ZIP: (Stage.ZIP,),
    FormatTag.TAR: (Stage.TAR,),
    FormatTag.TAR_GZIP: (Stage.GZIP, Stage.TAR),
    FormatTag.TAR_BZIP2: (Stage.BZIP2, Stage.TAR),
}

DECODERS = {
    Stage.GZIP: GzipDecoder(),
    Stage.BZIP2: Bzip2Decoder(),
    Stage.TAR: TarDecoder(),
    Stage.ZIP: ZipDecoder(),
}


def stages_for(tag: FormatTag) -> Tuple[Stage, ...]:
    """Ordered decoding stages for a tag; () means raw pass-through"""
    try:
        return STAGES[tag]
    except KeyError:
        raise UnsupportedFormatError(f"No decoder for format: {tag}") from None


def decoder_for(stage: Stage):
    try:
        return DECODERS[stage]
    except KeyError:
        raise UnsupportedFormatError(f"No decoder for stage: {stage}") from None


def split_stages(stages: Tuple[Stage, ...]) -> Tuple[CompressionDecoder, ArchiveDecoder]:
    """
    Split a stage list into its (compression, archive) decoders.
    Either side is None when the stage list has no such layer.
    """
    compression = None
    archive = None
    for stage in stages:
        if stage.is_archive:
            archive = decoder_for(stage)
        else:
            compression = decoder_for(stage)
    return compression, archive


__all__ = ["stages_for", "decoder_for", "split_stages", "STAGES"]
