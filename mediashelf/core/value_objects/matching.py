"""
Objets valeur du matching de materiaux.

Objets valeur immutables decrivant le perimetre d'un scan (FolderSet),
les fichiers trouves sur le disque (FileEntry), les candidats produits
par le matching (MatchCandidate) et les avertissements de scan (ScanWarning).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional


class FileType(Enum):
    """Classification d'un fichier selon son extension.

    Valeurs:
        VIDEO: Fichier video (mkv, mp4, ...)
        AUDIO: Fichier audio (mp3, flac, ...)
        IMAGE: Image (jpg, png, ...)
        DOCUMENT: Document (pdf, nfo, txt, ...)
        OTHER: Extension inconnue
    """

    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"
    DOCUMENT = "doc"
    OTHER = "other"


# Seuls ces types participent au matching flou
MATCHABLE_FILE_TYPES: frozenset[FileType] = frozenset({FileType.VIDEO, FileType.AUDIO})


class FolderCategory(Enum):
    """Categorie d'un dossier surveille.

    Valeurs:
        DEFAULT: Dossiers generaux et temporaires (materiau non tagge)
        SOURCE: Rushes / fichiers originaux
        FINISHED: Fichiers finalises (montage termine)
    """

    DEFAULT = "default"
    SOURCE = "source"
    FINISHED = "finished"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "FolderCategory":
        """Convertit une valeur persistee (None ou chaine) en categorie."""
        if not value:
            return cls.DEFAULT
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


def _dedupe(folders: Iterable[str]) -> tuple[str, ...]:
    """Deduplique en conservant l'ordre d'insertion, ignore les entrees vides."""
    seen: dict[str, None] = {}
    for folder in folders:
        text = str(folder).strip()
        if text and text not in seen:
            seen[text] = None
    return tuple(seen)


@dataclass(frozen=True)
class FolderSet:
    """
    Perimetre d'un scan : dossiers a parcourir, par categorie.

    Le sous-ensemble temp n'existe que pour une session de matching.
    Il est fourni par l'appelant et n'est jamais conserve par le core.

    Attributs:
        default: Dossiers generaux
        source: Dossiers de fichiers originaux
        finished: Dossiers de fichiers finalises
        temp: Dossiers temporaires de la session (fusionnes avec default)
    """

    default: tuple[str, ...] = ()
    source: tuple[str, ...] = ()
    finished: tuple[str, ...] = ()
    temp: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        default: Iterable[str] = (),
        source: Iterable[str] = (),
        finished: Iterable[str] = (),
        temp: Iterable[str] = (),
    ) -> "FolderSet":
        """Construit un FolderSet normalise (ordre conserve, doublons retires)."""
        return cls(
            default=_dedupe(default),
            source=_dedupe(source),
            finished=_dedupe(finished),
            temp=_dedupe(temp),
        )

    @property
    def is_empty(self) -> bool:
        """True si aucune categorie ne contient de dossier."""
        return not (self.default or self.source or self.finished or self.temp)

    def snapshot(self) -> "FolderSet":
        """Copie independante, figee au debut d'un scan."""
        return FolderSet.build(self.default, self.source, self.finished, self.temp)

    def with_temp(self, folders: Iterable[str]) -> "FolderSet":
        """Retourne une copie avec des dossiers temporaires supplementaires."""
        return FolderSet.build(
            self.default, self.source, self.finished, (*self.temp, *folders)
        )

    def without_temp(self) -> "FolderSet":
        """Retourne une copie sans les dossiers temporaires."""
        return FolderSet.build(self.default, self.source, self.finished)

    def by_category(self) -> dict[FolderCategory, tuple[str, ...]]:
        """Dossiers par categorie, default et temp fusionnes sous DEFAULT."""
        return {
            FolderCategory.DEFAULT: _dedupe((*self.default, *self.temp)),
            FolderCategory.SOURCE: self.source,
            FolderCategory.FINISHED: self.finished,
        }

    def all_folders(self) -> tuple[str, ...]:
        """Tous les dossiers, toutes categories confondues."""
        return _dedupe((*self.default, *self.temp, *self.source, *self.finished))


@dataclass(frozen=True)
class FileEntry:
    """
    Fichier trouve par le parcours d'un dossier.

    Attributs:
        path: Chemin absolu du fichier
        name: Nom du fichier (avec extension)
        size: Taille en octets
        modified_at: Date de derniere modification (UTC)
        file_type: Classification par extension
        root: Dossier racine du parcours ayant produit l'entree
    """

    path: str
    name: str
    size: int
    modified_at: Optional[datetime]
    file_type: FileType
    root: str = ""


@dataclass(frozen=True)
class MatchCandidate:
    """
    Fichier candidat produit par un scan, jamais persiste directement.

    Attributs:
        key: Cle stable du candidat (le chemin)
        name: Nom affiche (nom du fichier)
        path: Chemin absolu
        size: Taille en octets, en chaine pour les tres gros fichiers
        score: Similarite 0-100
        file_type: Classification par extension
        category: Categorie du dossier d'origine
        modified_at: Date de derniere modification
    """

    key: str
    name: str
    path: str
    size: str
    score: int
    file_type: FileType
    category: FolderCategory = FolderCategory.DEFAULT
    modified_at: Optional[datetime] = None


@dataclass(frozen=True)
class ScanWarning:
    """
    Avertissement emis pendant un parcours (dossier ignore).

    Attributs:
        path: Chemin concerne
        reason: Cause (message du systeme de fichiers)
        is_root: True si c'est un dossier racine qui est inaccessible
    """

    path: str
    reason: str
    is_root: bool = False
