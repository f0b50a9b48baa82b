"""Orchestrates the transcribe, translate and format pipeline for one video."""

import logging
import os
import time
import uuid
from typing import Callable, List, Optional

from .context import ProcessingContext
from .subtitle_formatter import SRTFormatter
from .models import Segment
from .exceptions import VidSubError
from .translator import ENGLISH, detect_language

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], object]

def _no_progress(step: str, percent: int) -> None:
    pass


class SubtitleGenerator:
    """
    Turns a video into English SRT text using the components of a ProcessingContext.
    """

    def __init__(self, context: ProcessingContext):
        self.context = context
        self.formatter = SRTFormatter()
        self.temp_dir = context.config.get('temp_dir') or 'temp'

    def _cleanup_temp_files(self, *file_paths: Optional[str]) -> None:
        for file_path in file_paths:
            if file_path and os.path.exists(file_path):
                try:
                    os.remove(file_path)
                    logger.info(f"Cleaned up temporary file: {file_path}")
                except OSError as e:
                    logger.warning(f"Could not remove temporary file {file_path}: {e}")

    def translate_segments(self, segments: List[Segment]) -> List[Segment]:
        """
        Translates segments one at a time, in order, keeping their timing.

        A segment whose translation fails keeps its original text.
        """
        translated = []
        total = len(segments)
        for i, segment in enumerate(segments):
            language = detect_language(segment.text)
            try:
                text = self.context.translator.translate(segment.text, language, ENGLISH)
            except Exception as e:
                logger.warning(f"Failed to translate segment {i + 1} ('{segment.text[:30]}'): {e}. Keeping original text.")
                text = segment.text
            translated.append(Segment(start_time=segment.start_time, end_time=segment.end_time, text=text))
            if (i + 1) % 20 == 0 or i == total - 1:
                logger.info(f"Translated segment {i + 1}/{total}")
        return translated

    def process_video(self, video_path: str, on_progress: ProgressCallback = _no_progress) -> str:
        """
        Runs the full pipeline and returns the SRT text.

        Args:
            video_path: Path to the input video file.
            on_progress: Called with (step name, percent hint) as each step starts.

        Raises:
            VidSubError: For any configuration or processing error.
            FileNotFoundError: If the input video is not found.
        """
        start_time = time.time()
        logger.info(f"--- Starting VidSub process for: {video_path} ---")
        extracted_audio_path = None

        try:
            self.context.initialize()

            # 1. Extract audio and transcribe
            on_progress("transcribing", 25)
            base_name = os.path.splitext(os.path.basename(video_path))[0]
            extracted_audio_path = self.context.audio_extractor.extract_audio(
                video_path, self.temp_dir, f"{base_name}_{uuid.uuid4().hex[:8]}"
            )
            transcription = self.context.transcriber.transcribe(extracted_audio_path)
            logger.info(f"Transcription complete. Found {len(transcription.segments)} segments.")

            # 2. Translate
            on_progress("translating", 60)
            segments = self.translate_segments(transcription.segments)

            # 3. Format SRT
            on_progress("generating", 90)
            srt_content = self.formatter.format_segments(segments)

            on_progress("completed", 100)
            logger.info(f"--- VidSub process completed in {time.time() - start_time:.2f} seconds ---")
            return srt_content

        except (VidSubError, FileNotFoundError) as e:
            logger.error(f"VidSub process failed: {e}")
            raise
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred during subtitle generation: {e}", exc_info=True)
            raise VidSubError(f"An unexpected critical error occurred: {e}") from e
        finally:
            # Cleanup
            self._cleanup_temp_files(extracted_audio_path)
