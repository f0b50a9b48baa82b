"""Handles Speech-to-Text transcription using Whisper."""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import TranscriptionResult, Segment
from .exceptions import TranscriptionError
from .utils import resolve_device

logger = logging.getLogger(__name__)

# Used when Whisper returns text without usable timestamps.
FALLBACK_SEGMENT_SECONDS = 5
FALLBACK_WORDS_PER_SEGMENT = 10

class Transcriber(ABC):
    """Abstract base class for transcription services."""

    @abstractmethod
    def transcribe(self, audio_path: str) -> TranscriptionResult:
        """
        Transcribes the given audio file.

        Raises:
            TranscriptionError: If transcription fails.
            FileNotFoundError: If the audio file doesn't exist.
        """
        pass


def segments_from_whisper_result(result: dict) -> List[Segment]:
    """
    Builds segments from a Whisper ``transcribe`` result.

    A segment without a start or end gets a 5 second slot derived from its
    position. A result with text but no segments is split every 10 words.
    """
    segments = []
    for index, seg_data in enumerate(result.get('segments') or []):
        if 'text' not in seg_data:
            logger.warning(f"Skipping segment without text: {seg_data}")
            continue
        start = seg_data.get('start')
        end = seg_data.get('end')
        segments.append(Segment(
            start_time=float(start) if start is not None else float(index * FALLBACK_SEGMENT_SECONDS),
            end_time=float(end) if end is not None else float((index + 1) * FALLBACK_SEGMENT_SECONDS),
            text=seg_data['text'].strip(),
        ))
    if segments:
        return segments

    words = (result.get('text') or "").split()
    if words:
        logger.warning("Transcription returned no timed segments. Splitting text into fixed-length segments.")
    for n, i in enumerate(range(0, len(words), FALLBACK_WORDS_PER_SEGMENT)):
        segments.append(Segment(
            start_time=float(n * FALLBACK_SEGMENT_SECONDS),
            end_time=float((n + 1) * FALLBACK_SEGMENT_SECONDS),
            text=" ".join(words[i:i + FALLBACK_WORDS_PER_SEGMENT]),
        ))
    return segments


class WhisperTranscriber(Transcriber):
    """Implements transcription using OpenAI's Whisper model."""

    def __init__(self, model_name: str = "tiny", device: str = "cuda", fp16: bool = True, language: Optional[str] = None):
        """
        Initializes the WhisperTranscriber.

        Args:
            model_name: The name of the Whisper model to use (e.g., "tiny", "medium").
            device: The device to run the model on ("cuda" or "cpu").
            fp16: Whether to use float16 precision. Only honoured on CUDA.
            language: Spoken language code to force, or None to auto-detect.

        Raises:
            ValueError: If the specified device is invalid.
            TranscriptionError: If the model fails to load.
        """
        self.model_name = model_name
        self.device = resolve_device(device)
        self.fp16 = fp16 and self.device == "cuda"
        self.language = language

        logger.info(f"Initializing WhisperTranscriber with model '{self.model_name}' on device '{self.device}' (FP16: {self.fp16})")
        try:
            import whisper
            self.model = whisper.load_model(self.model_name, device=self.device)
        except Exception as e:
            logger.error(f"Failed to load Whisper model '{self.model_name}': {e}", exc_info=True)
            raise TranscriptionError(f"Failed to load Whisper model '{self.model_name}': {e}") from e
        logger.info(f"Whisper model '{self.model_name}' loaded successfully.")

    def transcribe(self, audio_path: str) -> TranscriptionResult:
        logger.info(f"Starting transcription for: {audio_path}")
        if not os.path.exists(audio_path):
            raise FileNotFoundError(f"Audio file not found: {audio_path}")

        try:
            result = self.model.transcribe(
                audio_path,
                language=self.language,
                fp16=self.fp16,
                verbose=None
            )
        except Exception as e:
            logger.error(f"Error during Whisper transcription for {audio_path}: {e}", exc_info=True)
            raise TranscriptionError("Failed to transcribe audio. Please try again.") from e

        segments = segments_from_whisper_result(result)
        logger.info(f"Transcription completed. Language: {result.get('language', 'N/A')}, {len(segments)} segments.")
        return TranscriptionResult(
            language=result.get('language'),
            segments=segments,
            original_audio_path=audio_path
        )
