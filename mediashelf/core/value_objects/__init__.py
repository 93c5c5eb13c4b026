"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- FileType : Classification d'un fichier par extension
- FolderCategory : Categorie d'un dossier surveille (default, source, finished)
- FolderSet : Perimetre d'un scan
- FileEntry : Fichier trouve par le parcours
- MatchCandidate : Fichier candidat score
- ScanWarning : Dossier ignore pendant un parcours
- ParsedName : Resultat de la normalisation d'un nom de fichier
"""

from mediashelf.core.value_objects.matching import (
    MATCHABLE_FILE_TYPES,
    FileEntry,
    FileType,
    FolderCategory,
    FolderSet,
    MatchCandidate,
    ScanWarning,
)
from mediashelf.core.value_objects.parsed_name import ParsedName

__all__ = [
    "MATCHABLE_FILE_TYPES",
    "FileEntry",
    "FileType",
    "FolderCategory",
    "FolderSet",
    "MatchCandidate",
    "ScanWarning",
    "ParsedName",
]
