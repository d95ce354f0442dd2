"""
zcatr Size Formatting
Human-readable byte counts for listings.
"""

UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """
    Format a byte count with 1024-based units.

    Bytes are printed as integers; KB/MB/GB with two decimals.
    Anything at or beyond 1024 GB stays in GB.

    e.g. 1240 -> '1.21 KB', 2621440 -> '2.50 MB'
    """
    if size <= 0:
        return "0 Bytes"

    exp = 0
    value = float(size)
    while value >= 1024 and exp < len(UNITS) - 1:
        value /= 1024
        exp += 1

    if exp == 0:
        return f"{size} Bytes"
    return f"{size / 1024 ** exp:.2f} {UNITS[exp]}"


__all__ = ["format_file_size"]
