"""Shared fixtures: fake pipeline components and a ready-made context.

The fakes subclass the real interfaces so the pipeline runs end to end
without loading Whisper, a translation model or ffmpeg.
"""

import logging
import os

import pytest

from vidsub.audio_extractor import AudioExtractor
from vidsub.context import ProcessingContext
from vidsub.exceptions import TranslationError
from vidsub.models import Segment, TranscriptionResult
from vidsub.transcriber import Transcriber
from vidsub.translator import ENGLISH, Translator

# "ni hao" written in Chinese characters.
CHINESE_HELLO = "你好"


class FakeAudioExtractor(AudioExtractor):
    def __init__(self):
        super().__init__(ffmpeg_path=None)
        self.calls = []

    def extract_audio(self, video_filepath, output_audio_dir, output_filename=None):
        if not os.path.exists(video_filepath):
            raise FileNotFoundError(f"Input video file not found: {video_filepath}")
        self.calls.append(video_filepath)
        os.makedirs(output_audio_dir, exist_ok=True)
        path = os.path.join(output_audio_dir, f"{output_filename}.wav")
        with open(path, "wb") as f:
            f.write(b"RIFF")
        return path


class FakeTranscriber(Transcriber):
    def __init__(self, segments=None, error=None, fail_when=None):
        self.segments = segments if segments is not None else []
        self.error = error
        self.fail_when = fail_when

    def transcribe(self, audio_path):
        if self.error is not None and (self.fail_when is None or self.fail_when in os.path.basename(audio_path)):
            raise self.error
        return TranscriptionResult(language="en", segments=list(self.segments), original_audio_path=audio_path)


class FakeTranslator(Translator):
    def __init__(self, translations=None, failing=()):
        self.translations = translations or {}
        self.failing = set(failing)
        self.calls = []

    def translate(self, text, source_lang, target_lang=ENGLISH):
        self.calls.append((text, source_lang))
        if text in self.failing:
            raise TranslationError(f"cannot translate {text!r}")
        return self.translations.get(text, text)


@pytest.fixture
def sample_segments():
    return [
        Segment(start_time=0.0, end_time=4.5, text="Hello"),
        Segment(start_time=4.5, end_time=8.0, text=CHINESE_HELLO),
    ]


@pytest.fixture
def video_path(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00" * 1024)
    return str(path)


@pytest.fixture
def make_context(tmp_path):
    """Factory for a ProcessingContext wired with fakes."""
    def factory(segments=None, transcriber=None, translator=None):
        config = {"temp_dir": str(tmp_path / "temp"), "device": "cpu", "translation_models": {}}
        return ProcessingContext(
            config,
            audio_extractor=FakeAudioExtractor(),
            transcriber=transcriber or FakeTranscriber(segments or []),
            translator=translator or FakeTranslator({CHINESE_HELLO: "Hello there"}),
        )
    return factory


@pytest.fixture
def restore_logging():
    """Puts back the root logger's handlers after a test reconfigures logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
