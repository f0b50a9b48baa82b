"""Caller-owned holder for the pipeline's lazily loaded components."""

import logging
from typing import Optional

from .audio_extractor import AudioExtractor
from .exceptions import ModelInitializationError, VidSubError
from .transcriber import Transcriber, WhisperTranscriber
from .translator import Translator, EnglishTranslator

logger = logging.getLogger(__name__)

INIT_FAILURE_MESSAGE = "Failed to initialize AI models. Please try again."


class ProcessingContext:
    """
    Owns the audio extractor, transcriber and translator used for processing.

    Components passed in are used as-is. The rest are built from ``config`` on
    the first call to :meth:`initialize` and kept for later runs.
    """

    def __init__(
        self,
        config: dict,
        audio_extractor: Optional[AudioExtractor] = None,
        transcriber: Optional[Transcriber] = None,
        translator: Optional[Translator] = None,
    ):
        self.config = config
        self.audio_extractor = audio_extractor
        self.transcriber = transcriber
        self.translator = translator

    @property
    def initialized(self) -> bool:
        return None not in (self.audio_extractor, self.transcriber, self.translator)

    def initialize(self) -> None:
        """
        Builds any missing component. Does nothing once everything is loaded.

        Raises:
            ModelInitializationError: If a component cannot be created.
        """
        if self.initialized:
            return

        logger.info("Initializing processing components...")
        device = self.config.get('device', 'cuda')
        try:
            if self.audio_extractor is None:
                self.audio_extractor = AudioExtractor(ffmpeg_path=self.config.get('ffmpeg_path'))
            if self.transcriber is None:
                self.transcriber = WhisperTranscriber(
                    model_name=self.config.get('whisper_model', 'tiny'),
                    device=device,
                    fp16=self.config.get('whisper_fp16', True),
                    language=self.config.get('source_language')
                )
            if self.translator is None:
                translator = EnglishTranslator(
                    models=self.config.get('translation_models') or {},
                    device=device
                )
                translator.load_all()
                self.translator = translator
        except (VidSubError, ValueError) as e:
            logger.error(f"Model initialization failed: {e}", exc_info=True)
            raise ModelInitializationError(INIT_FAILURE_MESSAGE) from e
        logger.info("Processing components initialized successfully.")
