from .compression import GzipDecoder, Bzip2Decoder
from .tar_decoder import TarDecoder
from .zip_decoder import ZipDecoder
from .registry import stages_for, decoder_for, split_stages

__all__ = [
    "GzipDecoder",
    "Bzip2Decoder",
    "TarDecoder",
    "ZipDecoder",
    "stages_for",
    "decoder_for",
    "split_stages"
]
