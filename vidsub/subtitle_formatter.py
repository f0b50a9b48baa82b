"""Handles formatting segments into subtitle text (SRT) and reading it back."""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Sequence

from .models import Segment
from .exceptions import FormattingError
from .utils import format_time_srt

logger = logging.getLogger(__name__)

TIMING_RE = re.compile(
    r"^\s*(\d+):(\d{2}):(\d{2}),(\d{3})\s*-->\s*(\d+):(\d{2}):(\d{2}),(\d{3})\s*$"
)

class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    @abstractmethod
    def format_segments(self, segments: Sequence[Segment]) -> str:
        """
        Renders segments into the text of a subtitle file.

        Args:
            segments: Segments in presentation order.

        Returns:
            The subtitle file content.
        """
        pass

    def write(self, content: str, output_path: str) -> None:
        """
        Saves already formatted subtitle content to a UTF-8 file.

        Raises:
            FormattingError: If the file cannot be written.
        """
        logger.info(f"Writing subtitle file: {output_path}")
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write subtitle file to {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not write subtitle file: {e}") from e


class SRTFormatter(SubtitleFormatter):
    """Formats subtitles into the SRT (SubRip Text) format."""

    def format_segments(self, segments: Sequence[Segment]) -> str:
        blocks = []
        for index, segment in enumerate(segments, start=1):
            start_time_str = format_time_srt(segment.start_time)
            end_time_str = format_time_srt(segment.end_time)
            blocks.append(f"{index}\n{start_time_str} --> {end_time_str}\n{segment.text}\n\n")
        return "".join(blocks).rstrip()


def _to_seconds(h: str, m: str, s: str, ms: str) -> float:
    return int(h) * 3600 + int(m) * 60 + int(s) + int(ms) / 1000


def _starts_block(lines: List[str], i: int) -> bool:
    return (
        i + 1 < len(lines)
        and lines[i].strip().isdigit()
        and TIMING_RE.match(lines[i + 1]) is not None
    )


def parse_srt(content: str) -> List[Segment]:
    """
    Parses SRT text back into segments.

    A blank line only ends a block when it is followed by the next index and
    timing line, so empty and multi-line texts survive.

    Raises:
        FormattingError: If a block has no valid timing line.
    """
    lines = content.replace('\r\n', '\n').split('\n')
    segments: List[Segment] = []
    i = 0
    while i < len(lines):
        if not lines[i].strip():
            i += 1
            continue
        if not _starts_block(lines, i):
            raise FormattingError(f"Invalid SRT block at line {i + 1}: {lines[i]!r}")
        match = TIMING_RE.match(lines[i + 1])
        i += 2
        text_lines = []
        while i < len(lines):
            if not lines[i] and (i + 1 >= len(lines) or _starts_block(lines, i + 1)):
                i += 1
                break
            text_lines.append(lines[i])
            i += 1
        segments.append(Segment(
            start_time=_to_seconds(*match.group(1, 2, 3, 4)),
            end_time=_to_seconds(*match.group(5, 6, 7, 8)),
            text="\n".join(text_lines),
        ))
    return segments
