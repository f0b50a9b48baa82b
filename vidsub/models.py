"""Data models for VidSub."""

import mimetypes
import os
from dataclasses import dataclass, field
from typing import List, Optional

# Extension -> MIME type as accepted by the upload surface.
VIDEO_MIME_TYPES = {
    '.mp4': 'video/mp4',
    '.mov': 'video/mov',
    '.avi': 'video/avi',
    '.mkv': 'video/mkv',
    '.webm': 'video/webm',
}

@dataclass
class Segment:
    """Represents a single timed chunk of text."""
    start_time: float
    end_time: float
    text: str

@dataclass
class TranscriptionResult:
    """Holds the structured output from the ASR process."""
    language: Optional[str]
    segments: List[Segment] = field(default_factory=list)
    original_audio_path: Optional[str] = None

@dataclass
class VideoFile:
    """A video handed to VidSub for processing."""
    name: str
    size: int
    mime_type: str
    path: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> "VideoFile":
        """
        Builds a VideoFile from a file on disk.

        Raises:
            FileNotFoundError: If the path does not point to a file.
        """
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Video file not found: {path}")
        name = os.path.basename(path)
        ext = os.path.splitext(name)[1].lower()
        mime_type = VIDEO_MIME_TYPES.get(ext)
        if mime_type is None:
            mime_type = mimetypes.guess_type(name)[0] or 'application/octet-stream'
        return cls(name=name, size=os.path.getsize(path), mime_type=mime_type, path=path)
