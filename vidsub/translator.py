"""Handles text translation to English using Hugging Face models."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from .exceptions import TranslationError
from .utils import resolve_device

logger = logging.getLogger(__name__)

ENGLISH = "English"

# Checked in order; the first script found wins.
_SCRIPT_PATTERNS = [
    ("Chinese", re.compile(r"[\u4e00-\u9fff]")),
    ("Arabic", re.compile(r"[\u0600-\u06ff]")),
    ("Thai", re.compile(r"[\u0e00-\u0e7f]")),
    ("Japanese", re.compile(r"[\u3040-\u309f\u30a0-\u30ff]")),
    ("Korean", re.compile(r"[\uac00-\ud7af]")),
    ("Myanmar", re.compile(r"[\u1000-\u109f]")),
]


def detect_language(text: str) -> str:
    """Guesses a segment's language from the scripts it uses. Defaults to English."""
    for language, pattern in _SCRIPT_PATTERNS:
        if pattern.search(text):
            return language
    return ENGLISH


class Translator(ABC):
    """Abstract base class for translation services."""

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str = ENGLISH) -> str:
        """
        Translates text from source to target language.

        Raises:
            TranslationError: If translation fails.
        """
        pass


class HuggingFaceTranslator(Translator):
    """Implements translation using a Hugging Face seq2seq model."""

    def __init__(self, model_name: str = "Helsinki-NLP/opus-mt-zh-en", device: str = "cuda"):
        """
        Args:
            model_name: The name of the Hugging Face translation model.
            device: The device to run the model on ("cuda" or "cpu").

        Raises:
            ValueError: If the specified device is invalid.
            TranslationError: If the model or tokenizer fails to load.
        """
        self.model_name = model_name
        self.device = resolve_device(device)

        logger.info(f"Initializing HuggingFaceTranslator with model '{self.model_name}' on device '{self.device}'")
        try:
            from transformers import AutoTokenizer, AutoModelForSeq2SeqLM
            self.tokenizer = AutoTokenizer.from_pretrained(self.model_name)
            self.model = AutoModelForSeq2SeqLM.from_pretrained(self.model_name)
            self.model.to(self.device)
            self.model.eval()
        except Exception as e:
            logger.error(f"Failed to load translation model or tokenizer '{self.model_name}': {e}", exc_info=True)
            raise TranslationError(f"Failed to load translation model/tokenizer '{self.model_name}': {e}") from e
        logger.info(f"Hugging Face translation model '{self.model_name}' loaded successfully.")

    def translate(self, text: str, source_lang: str, target_lang: str = ENGLISH) -> str:
        if not text:
            return ""

        logger.debug(f"Translating ({source_lang}->{target_lang}): '{text[:50]}'")
        try:
            import torch
            inputs = self.tokenizer(text, return_tensors="pt", padding=True, truncation=True, max_length=512)
            inputs = {k: v.to(self.device) for k, v in inputs.items()}
            with torch.no_grad():
                translated_tokens = self.model.generate(**inputs)
            translated_text = self.tokenizer.decode(translated_tokens[0], skip_special_tokens=True)
        except Exception as e:
            logger.error(f"Error during translation of text '{text[:50]}': {e}", exc_info=True)
            raise TranslationError(f"Hugging Face translation failed: {e}") from e

        logger.debug(f"Translation result: '{translated_text[:50]}'")
        return translated_text


TranslatorFactory = Callable[[str, str], Translator]


class EnglishTranslator(Translator):
    """
    Routes each text to the model configured for its source language.

    English passes through untouched. Models are loaded on first use. A
    language with no configured model keeps its original text.
    """

    def __init__(
        self,
        models: Dict[str, str],
        device: str = "cuda",
        factory: Optional[TranslatorFactory] = None
    ):
        self.models = dict(models)
        self.device = device
        self.factory = factory or HuggingFaceTranslator
        self._loaded: Dict[str, Translator] = {}

    def _translator_for(self, language: str) -> Optional[Translator]:
        if language in self._loaded:
            return self._loaded[language]
        model_name = self.models.get(language)
        if model_name is None:
            return None
        translator = self.factory(model_name, self.device)
        self._loaded[language] = translator
        return translator

    def load_all(self) -> None:
        """Loads every configured model now instead of on first use."""
        for language in self.models:
            self._translator_for(language)

    def translate(self, text: str, source_lang: str, target_lang: str = ENGLISH) -> str:
        if target_lang != ENGLISH:
            raise TranslationError(f"Only translation to {ENGLISH} is supported, not {target_lang}.")
        if source_lang == ENGLISH:
            return text
        translator = self._translator_for(source_lang)
        if translator is None:
            logger.warning(f"No translation model configured for {source_lang}; keeping original text.")
            return text
        return translator.translate(text, source_lang, target_lang)
