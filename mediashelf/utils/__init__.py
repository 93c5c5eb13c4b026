"""
Utilitaires et constantes pour MediaShelf.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from mediashelf.utils.constants import (
    AUDIO_EXTENSIONS,
    DOCUMENT_EXTENSIONS,
    IGNORED_DIR_NAMES,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "VIDEO_EXTENSIONS",
    "AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "DOCUMENT_EXTENSIONS",
    "IGNORED_DIR_NAMES",
]
