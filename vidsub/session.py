"""One user's flow: pick a video, process it, then save or discard the subtitles."""

import logging
import os
from typing import Optional

from .context import ProcessingContext
from .exceptions import FileSystemError, FormattingError, ValidationError
from .models import VideoFile
from .notifications import Notifier, DESTRUCTIVE
from .progress import ProgressTracker, ProcessingState
from .subtitle_formatter import parse_srt
from .subtitle_generator import SubtitleGenerator
from .upload import validate_video, srt_filename, format_file_size
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

FALLBACK_ERROR_MESSAGE = "Video processing failed. Please try again."


class SubtitleSession:
    """
    Drives a single video through processing and holds the result.

    Only one run can be in flight; failures are reported through the notifier
    and leave the session idle with no video selected.
    """

    def __init__(self, context: ProcessingContext, notifier: Optional[Notifier] = None):
        self.generator = SubtitleGenerator(context)
        self.notifier = notifier or Notifier()
        self.tracker = ProgressTracker()
        self.video: Optional[VideoFile] = None
        self.srt_content: Optional[str] = None

    @property
    def state(self) -> ProcessingState:
        return self.tracker.state

    def select_video(self, path: str) -> Optional[VideoFile]:
        """Builds and validates a video from disk. Returns None when it is rejected."""
        try:
            video = validate_video(VideoFile.from_path(path))
        except FileNotFoundError as e:
            self.notifier.notify("File not found", str(e), DESTRUCTIVE)
            return None
        except ValidationError as e:
            self.notifier.notify(e.title, e.description, DESTRUCTIVE)
            return None
        logger.info(f"Selected {video.name} ({format_file_size(video.size)} - {video.mime_type})")
        return video

    def process(self, video: VideoFile) -> Optional[str]:
        """
        Runs the pipeline for a video, feeding progress into the tracker.

        Returns:
            The SRT content, or None if the video was rejected or processing failed.

        Raises:
            InvalidTransitionError: If a run is already in flight or a previous
                                    result has not been reset.
        """
        # Validate
        try:
            validate_video(video)
        except ValidationError as e:
            self.notifier.notify(e.title, e.description, DESTRUCTIVE)
            return None

        # Run
        self.tracker.begin(video.name)
        self.video = video
        self.srt_content = None
        try:
            srt_content = self.generator.process_video(video.path, self.tracker.on_progress)
        except Exception as e:
            logger.error(f"Processing failed for {video.name}: {e}")
            self.notifier.notify("Processing failed", str(e) or FALLBACK_ERROR_MESSAGE, DESTRUCTIVE)
            self.tracker.fail()
            self.video = None
            return None
        self.srt_content = srt_content
        return srt_content

    @property
    def output_filename(self) -> str:
        return srt_filename(self.video.name if self.video else "")

    @property
    def subtitle_count(self) -> int:
        if not self.srt_content:
            return 0
        return len(parse_srt(self.srt_content))

    def preview(self, max_blocks: Optional[int] = None) -> str:
        """The SRT content, optionally cut to the first ``max_blocks`` blocks."""
        if not self.srt_content:
            return ""
        if max_blocks is None:
            return self.srt_content
        return self.generator.formatter.format_segments(parse_srt(self.srt_content)[:max_blocks])

    def download(self, output_dir: str, filename: Optional[str] = None) -> Optional[str]:
        """
        Saves the subtitles as ``output_dir/<video name>.srt``.

        Args:
            output_dir: Directory to write into; created if missing.
            filename: Overrides the default ``<video name>.srt`` file name.

        Returns:
            The written path, or None if there is nothing to save or writing failed.
        """
        if self.srt_content is None:
            self.notifier.notify("Nothing to download", "No subtitles have been generated yet", DESTRUCTIVE)
            return None
        filename = filename or self.output_filename
        output_path = os.path.join(output_dir, filename)
        try:
            ensure_dir_exists(output_dir)
            self.generator.formatter.write(self.srt_content, output_path)
        except (FormattingError, FileSystemError) as e:
            logger.error(f"Could not save subtitles to {output_path}: {e}")
            self.notifier.notify("Download failed", f"Unable to save {filename}", DESTRUCTIVE)
            return None
        self.notifier.notify("Download started", f"{filename} has been downloaded successfully")
        return output_path

    def reset(self) -> None:
        """Discards the current video and result so another video can be processed."""
        self.tracker.reset()
        self.video = None
        self.srt_content = None
