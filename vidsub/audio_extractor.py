"""Pulls the audio track out of an uploaded video with ffmpeg."""

import ffmpeg
import os
import logging
from typing import Optional

from .exceptions import AudioExtractionError, FileSystemError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

# Whisper works on 16 kHz mono input.
SAMPLE_RATE = 16000

class AudioExtractor:
    """Extracts the audio track of a video into a WAV file."""

    def __init__(self, ffmpeg_path: Optional[str] = None):
        """
        Args:
            ffmpeg_path: Optional path to the ffmpeg executable.
                         If None, assumes ffmpeg is in the system PATH.
        """
        self.ffmpeg_cmd = ffmpeg_path or 'ffmpeg'
        logger.info(f"Using ffmpeg command: {self.ffmpeg_cmd}")

    def _remove(self, path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            raise FileSystemError(f"Could not remove existing audio file {path}: {e}") from e

    def extract_audio(self, video_filepath: str, output_audio_dir: str, output_filename: Optional[str] = None) -> str:
        """
        Extracts the audio stream from a video file to a 16 kHz mono WAV file.

        Args:
            video_filepath: Path to the input video file.
            output_audio_dir: Directory to save the extracted audio file.
            output_filename: Optional base name for the output audio file.
                             If None, uses the video filename.

        Returns:
            The full path to the extracted audio file.

        Raises:
            FileNotFoundError: If the input video file does not exist.
            AudioExtractionError: If ffmpeg fails to extract the audio.
            FileSystemError: If the output directory cannot be created/accessed.
        """
        logger.info(f"Starting audio extraction for: {video_filepath}")
        if not os.path.exists(video_filepath):
            raise FileNotFoundError(f"Input video file not found: {video_filepath}")

        ensure_dir_exists(output_audio_dir)

        source_name = output_filename or os.path.basename(video_filepath)
        base_name = os.path.splitext(source_name)[0]
        output_audio_path = os.path.join(output_audio_dir, f"{base_name}.wav")

        if os.path.exists(output_audio_path):
            logger.warning(f"Output audio file already exists, overwriting: {output_audio_path}")
            self._remove(output_audio_path)

        try:
            (
                ffmpeg
                .input(video_filepath)
                .output(output_audio_path, acodec='pcm_s16le', ar=SAMPLE_RATE, ac=1)
                .overwrite_output()
                .run(cmd=self.ffmpeg_cmd, capture_stdout=True, capture_stderr=True)
            )
        except ffmpeg.Error as e:
            stderr_output = e.stderr.decode('utf-8', errors='replace') if e.stderr else "No stderr output"
            logger.error(f"ffmpeg failed for {video_filepath}: {stderr_output}")
            if os.path.exists(output_audio_path):
                try:
                    os.remove(output_audio_path)
                except OSError:
                    logger.warning(f"Could not clean up partially created audio file: {output_audio_path}")
            raise AudioExtractionError(f"ffmpeg failed: {stderr_output}") from e
        except OSError as e:
            logger.error(f"Could not run ffmpeg '{self.ffmpeg_cmd}': {e}", exc_info=True)
            raise AudioExtractionError(f"Could not run ffmpeg: {e}") from e

        logger.info(f"Extracted audio to: {output_audio_path}")
        return output_audio_path
