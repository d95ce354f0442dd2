"""
zcatr Renderer
Content mode streams decoded text between separators.
List mode prints one name/size/type block per archive member.
"""
import codecs
import sys
from typing import BinaryIO, TextIO

from .classifier import ContentClassifier
from .config import config
from .models import ArchiveMember, Verdict
from .utils.sizes import format_file_size


def read_prefix(stream: BinaryIO, size: int) -> bytes:
    """Read up to `size` bytes, looping over short reads"""
    parts = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b''.join(parts)


class Renderer:
    def __init__(
        self,
        out: TextIO = None,
        classifier: ContentClassifier = None,
        styling: bool = None
    ):
        self._out = out
        self.classifier = classifier or ContentClassifier()
        self.styling = config.styling if styling is None else styling
        self.prefix_size = config.prefix_size
        self.chunk_size = config.chunk_size
        self.separator = "─" * config.separator_width
        # Characters written so far; lets callers tell if a file produced output
        self.written = 0
        self._line_open = False

    @property
    def out(self) -> TextIO:
        # Resolved late so redirected stdout is honoured
        return self._out if self._out is not None else sys.stdout

    def _write(self, text: str):
        if text:
            self.written += len(text)
            self._line_open = not text.endswith('\n')
        self.out.write(text)

    # ── Content mode ───────────────────────────────────────────────────────

    def render_content(self, name: str, stream: BinaryIO) -> Verdict:
        """
        Classify `stream` from its first bytes, then either stream it as
        UTF-8 text or print the unavailable placeholder.

        The first read happens before anything is written, and a frame that
        was opened is always closed, even when decoding fails midway.
        """
        prefix = read_prefix(stream, self.prefix_size)
        verdict = self.classifier.classify(name, prefix)

        if self.styling:
            self._write(f'📄 Content from "{name}":\n')
            self._write(f"{self.separator}\n")

        try:
            if verdict is Verdict.RENDER_AS_TEXT:
                self._stream_text(prefix, stream)
            else:
                self._write(config.unavailable_message)
        finally:
            if self.styling:
                if self._line_open:
                    self._write('\n')
                self._write(f"{self.separator}\n")
            elif verdict is Verdict.UNAVAILABLE:
                self._write('\n')
            self.out.flush()

        return verdict

    def _stream_text(self, prefix: bytes, stream: BinaryIO):
        """Decode chunk by chunk; split multibyte sequences are carried over"""
        decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        chunk = prefix
        while chunk:
            self._write(decoder.decode(chunk))
            chunk = stream.read(self.chunk_size)
        self._write(decoder.decode(b'', final=True))

    # ── List mode ──────────────────────────────────────────────────────────

    def render_list_header(self, path: str):
        self._write(f"📂 {path}\n")

    def render_member(self, member: ArchiveMember):
        kind = "Directory" if member.is_dir else "File"
        self._write("|\n")
        self._write(f"├── {kind}: {member.name}\n")
        self._write(f"|   Size: {format_file_size(member.size)}\n")

    def render_empty(self):
        self._write("|\n└── (no entries)\n")

    def end_file(self):
        self._write("\n")
        self.out.flush()


__all__ = ["Renderer", "read_prefix"]
