"""Translation provider clients and the retrying translator."""

from .provider import GoogleTranslateProvider, TranslationProvider
from .translator import Translator

__all__ = ["GoogleTranslateProvider", "TranslationProvider", "Translator"]
