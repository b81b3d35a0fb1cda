"""
Language module for sanctions search.
Handles machine translation and transliteration of names.
"""

from .translator import AwsTranslator, Translator
from .transliterator import DEFAULT_SCHEME, get_scheme, transliterate

__all__ = [
    'AwsTranslator',
    'Translator',
    'DEFAULT_SCHEME',
    'get_scheme',
    'transliterate'
]
