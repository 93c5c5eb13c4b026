"""
Normalisation des noms de fichiers media via guessit.

Transforme un nom de fichier brut en titre comparable ("clean title")
et en extrait les indices utiles (annee, saison, episode).

guessit extrait titre, annee, saison et episode. Les traitements
complementaires couvrent ce que guessit ne connait pas:
- marqueurs CJK 第N季 / 第N集
- segments entre crochets pleine chasse (【】 （） 「」 『』 《》)
- termes techniques laisses dans le titre (3D, SBS...)

Aucune erreur n'est levee: un resultat vide donne simplement un
score nul au scoring.
"""

import re
from functools import lru_cache
from typing import Any, Optional

from guessit import guessit
from guessit.api import GuessitException
from loguru import logger

from mediashelf.core.value_objects import ParsedName
from mediashelf.utils.constants import (
    AUDIO_EXTENSIONS,
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)

_KNOWN_EXTENSIONS = VIDEO_EXTENSIONS | AUDIO_EXTENSIONS | IMAGE_EXTENSIONS | DOCUMENT_EXTENSIONS

_EXTENSION_RE = re.compile(r"\.([A-Za-z0-9]{1,5})$")

_FULLWIDTH_BRACKET_RE = re.compile(
    r"【[^【】]*】|（[^（）]*）|「[^「」]*」|『[^『』]*』|《[^《》]*》"
)
_ASCII_BRACKET_RE = re.compile(r"\[[^\[\]]*\]|\([^()]*\)|\{[^{}]*\}")
_BRACKET_CHARS_RE = re.compile(r"[\[\](){}【】（）「」『』《》]")

_CJK_EPISODE_RE = re.compile(r"第\s*(\d{1,4})\s*[集话話]")
_CJK_SEASON_RE = re.compile(r"第\s*(\d{1,2})\s*季")

_SEPARATOR_RE = re.compile(r"[._\-+\s]+")

# Termes techniques que guessit laisse dans le titre
_CLEANUP_TERMS = (
    r"\b3d\b",
    r"\btop[-\s]?bottom\b",
    r"\btop[-\s]?bot\b",
    r"\bh?sbs\b",
    r"\bhalf[-\s]?sbs\b",
)
_CLEANUP_RE = re.compile("|".join(_CLEANUP_TERMS), re.IGNORECASE)


def _base_name(raw_name: str) -> str:
    """Retire tout ce qui precede le dernier separateur de chemin (/ ou \\)."""
    return raw_name.replace("\\", "/").rsplit("/", 1)[-1].strip()


def _strip_extension(name: str) -> str:
    """
    Retire l'extension si elle est plausible.

    Une extension connue (quelle que soit la casse) ou un suffixe court
    en minuscules est retire; "Mr.Robot" est conserve.
    """
    match = _EXTENSION_RE.search(name)
    if not match or match.start() == 0:
        return name
    ext = match.group(1)
    if ext.lower() in _KNOWN_EXTENSIONS or ext == ext.lower():
        return name[: match.start()]
    return name


def _collapse(text: str) -> str:
    """Ramene separateurs et espaces multiples a un espace simple."""
    return _SEPARATOR_RE.sub(" ", text).strip()


def _first_int(value: Any) -> Optional[int]:
    """guessit retourne une liste pour les multi-saisons/episodes: garde le premier."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, int) else None


def _guess(stem: str) -> dict[str, Any]:
    try:
        return dict(guessit(stem))
    except GuessitException as e:
        logger.debug(f"guessit en echec sur {stem!r}: {e}")
        return {}


def _clean_guessed_title(title: Any) -> str:
    if isinstance(title, list):
        title = " ".join(str(part) for part in title)
    if not title:
        return ""
    return _collapse(_CLEANUP_RE.sub(" ", str(title)))


def _fallback_title(stem: str) -> str:
    """Titre de repli quand guessit ne trouve rien: "[流浪地球].mp4", "1917"."""
    title = _collapse(_ASCII_BRACKET_RE.sub(" ", stem))
    if not title:
        title = _collapse(_BRACKET_CHARS_RE.sub(" ", stem))
    return title


@lru_cache(maxsize=4096)
def parse_filename(raw_name: str, has_extension: bool = True) -> ParsedName:
    """
    Normalise un nom de fichier et en extrait les indices.

    Args:
        raw_name: Nom de fichier avec extension (un chemin est tolere)
        has_extension: False pour un nom de dossier (aucune extension retiree)

    Returns:
        ParsedName avec le titre nettoye (eventuellement vide),
        l'annee, la saison et l'episode detectes.
    """
    stem = _base_name(raw_name or "")
    if has_extension:
        stem = _strip_extension(stem)
    if not stem:
        return ParsedName(clean_title="")

    cjk_season = _CJK_SEASON_RE.search(stem)
    cjk_episode = _CJK_EPISODE_RE.search(stem)
    text = _CJK_SEASON_RE.sub(" ", _CJK_EPISODE_RE.sub(" ", stem))
    text = _FULLWIDTH_BRACKET_RE.sub(" ", text).strip()

    result = _guess(text) if text else {}
    title = _clean_guessed_title(result.get("title"))
    if not title:
        title = _fallback_title(text) or _fallback_title(stem)

    season = int(cjk_season.group(1)) if cjk_season else _first_int(result.get("season"))
    episode = int(cjk_episode.group(1)) if cjk_episode else _first_int(result.get("episode"))

    return ParsedName(
        clean_title=title,
        year=_first_int(result.get("year")),
        season=season,
        episode=episode,
    )


def normalize(raw_name: str, has_extension: bool = True) -> str:
    """
    Retourne le titre comparable d'un nom de fichier.

    Ex: "流浪地球.2019.1080p.mp4" -> "流浪地球"
        "[Group] Inception (2010) [1080p].mkv" -> "Inception"
    """
    return parse_filename(raw_name, has_extension).clean_title
