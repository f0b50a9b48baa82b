"""Validation of videos submitted for processing."""

import logging
import re

from .exceptions import ValidationError
from .models import VideoFile, VIDEO_MIME_TYPES

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset(VIDEO_MIME_TYPES.values())
MAX_UPLOAD_BYTES = 500 * 1024 * 1024 # 500 MiB

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def validate_video(video: VideoFile) -> VideoFile:
    """
    Checks the video's MIME type and size.

    Returns:
        The same video, for chaining.

    Raises:
        ValidationError: If the type is not supported or the file is too large.
    """
    if video.mime_type not in ALLOWED_MIME_TYPES:
        logger.warning(f"Rejected {video.name}: unsupported type {video.mime_type}")
        raise ValidationError(
            "Invalid file type",
            "Please upload a video file (MP4, MOV, AVI, MKV, WebM)",
        )
    if video.size > MAX_UPLOAD_BYTES:
        logger.warning(f"Rejected {video.name}: {format_file_size(video.size)} exceeds limit")
        raise ValidationError(
            "File too large",
            "Please upload a file smaller than 500MB",
        )
    logger.info(f"Accepted {video.name} ({format_file_size(video.size)}, {video.mime_type})")
    return video


def format_file_size(num_bytes: int) -> str:
    if num_bytes <= 0:
        return "0 Bytes"
    sizes = ["Bytes", "KB", "MB", "GB"]
    value = float(num_bytes)
    i = 0
    while value >= 1024 and i < len(sizes) - 1:
        value /= 1024
        i += 1
    return f"{round(value, 2):g} {sizes[i]}"


def srt_filename(video_name: str) -> str:
    """Name of the subtitle file offered for a video: its extension swapped for .srt."""
    if not video_name:
        return "transcript.srt"
    if _EXTENSION_RE.search(video_name):
        return _EXTENSION_RE.sub(".srt", video_name)
    return f"{video_name}.srt"
