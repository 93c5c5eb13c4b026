"""
Fonctions utilitaires partagees dans le projet MediaShelf.

Ce module centralise les fonctions reutilisees a travers le codebase :
- classify_file_type : classification d'un fichier par extension
- format_file_size : affichage lisible d'une taille en octets
- normalize_folder_path : forme canonique d'un dossier pour comparaison de prefixe
- utc_now / to_iso / parse_iso : horodatages UTC
"""

import ntpath
import posixpath
from datetime import datetime, timezone
from typing import Optional

from mediashelf.core.value_objects import FileType
from mediashelf.utils.constants import (
    AUDIO_EXTENSIONS,
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

_SIZE_UNITS = ("B", "K", "M", "G", "T", "P", "E", "Z", "Y")


def file_extension(path: str) -> str:
    """Extension en minuscules (sans le point) d'un chemin Windows ou POSIX."""
    name = ntpath.basename(path)
    _, ext = posixpath.splitext(name)
    return ext[1:].lower()


def classify_file_type(path: str) -> FileType:
    """
    Classe un fichier par son extension.

    Les extensions inconnues (ou absentes) sont classees OTHER.
    """
    ext = file_extension(path)
    if ext in VIDEO_EXTENSIONS:
        return FileType.VIDEO
    if ext in AUDIO_EXTENSIONS:
        return FileType.AUDIO
    if ext in IMAGE_EXTENSIONS:
        return FileType.IMAGE
    if ext in DOCUMENT_EXTENSIONS:
        return FileType.DOCUMENT
    return FileType.OTHER


def format_file_size(size: str | int) -> str:
    """
    Formate une taille en octets (entier ou chaine) pour l'affichage.

    Ex: "1536" -> "1.5 K", 0 ou valeur invalide -> "0 B"
    """
    try:
        value = int(size)
    except (TypeError, ValueError):
        return "0 B"
    if value <= 0:
        return "0 B"

    index = 0
    scaled = float(value)
    while scaled >= 1024 and index < len(_SIZE_UNITS) - 1:
        scaled /= 1024
        index += 1
    return f"{round(scaled, 2):g} {_SIZE_UNITS[index]}"


def normalize_folder_path(path: str) -> str:
    """
    Forme canonique d'un dossier pour les comparaisons de prefixe.

    Separateurs unifies en "/", casse ignoree, "/" final garanti.
    """
    text = path.replace("\\", "/").casefold()
    if not text.endswith("/"):
        text += "/"
    return text


def utc_now() -> datetime:
    """Date courante en UTC."""
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialise une date en ISO 8601 (None conserve)."""
    return value.isoformat() if value else None


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Deserialise une date ISO 8601, None si absente ou invalide."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
