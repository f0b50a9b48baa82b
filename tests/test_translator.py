"""Tests for language detection and per-language translation routing."""

import pytest

from vidsub.exceptions import TranslationError
from vidsub.translator import ENGLISH, EnglishTranslator, detect_language

from conftest import CHINESE_HELLO, FakeTranslator


@pytest.mark.parametrize("text, expected", [
    ("Hello there", "English"),
    ("", "English"),
    (CHINESE_HELLO, "Chinese"),
    ("مرحبا", "Arabic"),
    ("สวัสดี", "Thai"),
    ("こんにちは", "Japanese"),
    ("안녕하세요", "Korean"),
    ("မင်္ဂလာပါ", "Myanmar"),
    ("OK " + CHINESE_HELLO, "Chinese"),
])
def test_detect_language(text, expected):
    assert detect_language(text) == expected


class RecordingFactory:
    def __init__(self):
        self.created = []

    def __call__(self, model_name, device):
        self.created.append((model_name, device))
        return FakeTranslator({CHINESE_HELLO: "Hello"})


def test_english_passes_through_without_loading():
    factory = RecordingFactory()
    translator = EnglishTranslator({"Chinese": "zh-en"}, device="cpu", factory=factory)
    assert translator.translate("Good morning", ENGLISH) == "Good morning"
    assert factory.created == []


def test_configured_language_is_translated_with_one_model():
    factory = RecordingFactory()
    translator = EnglishTranslator({"Chinese": "zh-en"}, device="cpu", factory=factory)
    assert translator.translate(CHINESE_HELLO, "Chinese") == "Hello"
    assert translator.translate(CHINESE_HELLO, "Chinese") == "Hello"
    assert factory.created == [("zh-en", "cpu")]


def test_unconfigured_language_keeps_original_text():
    translator = EnglishTranslator({}, device="cpu", factory=RecordingFactory())
    text = "안녕하세요"
    assert translator.translate(text, "Korean") == text


def test_other_targets_are_refused():
    translator = EnglishTranslator({}, device="cpu", factory=RecordingFactory())
    with pytest.raises(TranslationError):
        translator.translate("Hello", ENGLISH, "French")


def test_load_all_builds_every_model():
    factory = RecordingFactory()
    translator = EnglishTranslator({"Chinese": "zh-en", "Japanese": "ja-en"}, device="cpu", factory=factory)
    translator.load_all()
    assert sorted(factory.created) == [("ja-en", "cpu"), ("zh-en", "cpu")]
