from .sniffer import FormatSniffer, sniff_bytes, looks_like_tar

__all__ = [
    "FormatSniffer",
    "sniff_bytes",
    "looks_like_tar"
]
