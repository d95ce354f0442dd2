"""
zcatr Viewer
Per-file pipeline: sniff -> dispatch -> decode -> classify/render.
Files are processed one at a time; a failure only ends its own file.
"""
import os
import time
from contextlib import ExitStack, closing
from pathlib import Path
from typing import BinaryIO, Dict, List, Union

from .decoders.registry import split_stages, stages_for
from .detector.sniffer import FormatSniffer
from .errors import ReadError, ZcatError
from .models import ArchiveMember, FormatTag, RenderMode, Verdict
from .renderer import Renderer
from .config import config
from .utils.logger import logger


class Viewer:
    def __init__(
        self,
        mode: RenderMode = RenderMode.CONTENT,
        renderer: Renderer = None,
        sniffer: FormatSniffer = None
    ):
        self.mode = mode
        self.renderer = renderer or Renderer()
        self.sniffer = sniffer or FormatSniffer()

    def view(self, path: Union[str, Path]) -> Dict:
        """
        Render one file in the configured mode.

        Every handle opened here is closed before returning, whether the
        file succeeded or raised.
        """
        start_time = time.time()
        path = Path(path)

        tag = self.sniffer.sniff(path)
        stages = stages_for(tag)
        compression, archive = split_stages(stages)
        logger.debug(
            f"   {path}: stages {[s.value for s in stages] or 'pass-through'}"
        )

        written_before = self.renderer.written
        completed = False
        try:
            with ExitStack() as stack:
                try:
                    source = stack.enter_context(open(path, 'rb'))
                except OSError as e:
                    raise ReadError(f"Cannot open file: {e.strerror or e}", path=str(path)) from e

                stream = source
                if compression:
                    stream = stack.enter_context(compression.open(source))

                if self.mode is RenderMode.LIST:
                    self.renderer.render_list_header(str(path))

                if archive:
                    entries = stack.enter_context(closing(archive.members(stream)))
                    counts = self._render_members(entries)
                else:
                    counts = self._render_single(path, tag, stream)
            completed = True
        finally:
            # Separate this file from the next one if it printed anything
            if completed or self.renderer.written > written_before:
                self.renderer.end_file()

        return {
            'file': str(path),
            'format': tag.value,
            'stages': [s.value for s in stages],
            **counts,
            'time': time.time() - start_time
        }

    def view_files(self, paths: List[Union[str, Path]]) -> Dict:
        """
        View each path in order, collecting results and failures.

        Returns:
            summary dict with results and failures
        """
        results = []
        failures = []

        for path in paths:
            try:
                results.append(self.view(path))
            except ZcatError as e:
                failures.append({'file': str(path), 'error': e.message})
                logger.error(f"❌ {path}: {e.message}")
            except Exception as e:
                failures.append({'file': str(path), 'error': str(e)})
                logger.error(f"❌ {path}: {e}")
                logger.debug("Unexpected failure", exc_info=True)

        return self._build_summary(results, failures)

    # ── Internals ──────────────────────────────────────────────────────────

    def _render_members(self, entries) -> Dict:
        members = rendered = unavailable = 0

        for member, reader in entries:
            members += 1
            try:
                if self.mode is RenderMode.LIST:
                    self.renderer.render_member(member)
                elif not member.is_dir:
                    verdict = self.renderer.render_content(member.name, reader)
                    if verdict is Verdict.RENDER_AS_TEXT:
                        rendered += 1
                    else:
                        unavailable += 1
            finally:
                reader.close()

        if members == 0 and self.mode is RenderMode.LIST:
            self.renderer.render_empty()

        return {'members': members, 'rendered': rendered, 'unavailable': unavailable}

    def _render_single(self, path: Path, tag: FormatTag, stream: BinaryIO) -> Dict:
        """Bare compressed payload, or raw bytes for unknown formats"""
        if tag is FormatTag.UNKNOWN:
            name = str(path)
        else:
            name = str(path.with_suffix('')) if path.suffix else str(path)

        if self.mode is RenderMode.LIST:
            if tag is FormatTag.UNKNOWN:
                size = os.fstat(stream.fileno()).st_size
            else:
                size = self._count_bytes(stream)
            self.renderer.render_member(ArchiveMember(name=name, size=size))
            return {'members': 1, 'rendered': 0, 'unavailable': 0}

        verdict = self.renderer.render_content(name, stream)
        text = verdict is Verdict.RENDER_AS_TEXT
        return {'members': 1, 'rendered': int(text), 'unavailable': int(not text)}

    @staticmethod
    def _count_bytes(stream: BinaryIO) -> int:
        total = 0
        while chunk := stream.read(config.chunk_size):
            total += len(chunk)
        return total

    def _build_summary(self, results: List[Dict], failures: List[Dict]) -> Dict:
        total = len(results) + len(failures)
        logger.debug(
            f"✨ {len(results)} succeeded, {len(failures)} failed of {total}"
        )
        return {
            'success': len(failures) == 0,
            'total': total,
            'succeeded': len(results),
            'failed': len(failures),
            'failures': failures,
            'results': results
        }


__all__ = ["Viewer"]
