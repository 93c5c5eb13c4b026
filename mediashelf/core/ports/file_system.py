"""
Interfaces ports pour le système de fichiers.

Interfaces abstraites (ports) définissant les contrats pour les opérations
fichiers dont le core a besoin : parcours récursif, métadonnées et renommage.
"""

import os
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional


class IFileSystem(ABC):
    """
    Interface pour les opérations sur les fichiers.

    Définit les opérations utilisées par le parcours des dossiers
    et par le renommage avec propagation.
    """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Vérifie si un chemin existe."""
        ...

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Vérifie si un chemin est un répertoire."""
        ...

    @abstractmethod
    def walk(
        self,
        root: str,
        onerror: Optional[Callable[[OSError], None]] = None,
    ) -> Iterator[tuple[str, list[str], list[str]]]:
        """
        Parcourt récursivement un répertoire (descendant, liens suivis).

        Même contrat que os.walk(topdown=True, followlinks=True) : l'appelant
        peut élaguer la liste des sous-répertoires en place.

        Args :
            root : Répertoire racine
            onerror : Appelé avec l'OSError de chaque répertoire illisible

        Retourne :
            Itérateur de tuples (dirpath, dirnames, filenames)
        """
        ...

    @abstractmethod
    def stat(self, path: str) -> os.stat_result:
        """
        Lit les métadonnées d'un chemin (liens suivis).

        Lève OSError si le chemin est inaccessible.
        """
        ...

    @abstractmethod
    def rename(self, path: str, new_name: str) -> str:
        """
        Renomme un fichier dans son répertoire.

        Args :
            path : Chemin actuel du fichier
            new_name : Nouveau nom (sans répertoire)

        Retourne :
            Le nouveau chemin complet

        Lève :
            RenameFailedError si la destination existe ou si le système refuse
        """
        ...
