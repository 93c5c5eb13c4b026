"""
Services metier de MediaShelf.

- normalizer : nettoyage des noms de fichiers
- similarity : scoring flou 0-100
- scanner : parcours des dossiers surveilles
- material_matcher : matching unitaire et par lot
- association : materiaux (association, renommage, dossiers de matching)
"""

from mediashelf.services.association import AssociationService, SyncResult
from mediashelf.services.material_matcher import (
    BatchItemFailure,
    BatchItemResult,
    BatchReport,
    MatchReport,
    MaterialMatcherService,
    infer_category,
)
from mediashelf.services.normalizer import normalize, parse_filename
from mediashelf.services.scanner import DirectoryWalker
from mediashelf.services.similarity import score, score_pair

__all__ = [
    "AssociationService",
    "SyncResult",
    "BatchItemFailure",
    "BatchItemResult",
    "BatchReport",
    "MatchReport",
    "MaterialMatcherService",
    "infer_category",
    "normalize",
    "parse_filename",
    "DirectoryWalker",
    "score",
    "score_pair",
]
