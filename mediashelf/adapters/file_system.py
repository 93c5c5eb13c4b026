"""
Adaptateur pour les operations sur le systeme de fichiers.

Implementation concrete de IFileSystem : parcours recursif (os.walk),
metadonnees (os.stat) et renommage dans le meme repertoire.
"""

import os
from typing import Callable, Iterator, Optional

from loguru import logger

from mediashelf.core.errors import RenameFailedError
from mediashelf.core.ports.file_system import IFileSystem


class FileSystemAdapter(IFileSystem):
    """
    Implementation de IFileSystem pour le systeme de fichiers reel.

    Les liens symboliques sont suivis pendant le parcours ; la detection
    des cycles est a la charge de l'appelant (DirectoryWalker).
    """

    def exists(self, path: str) -> bool:
        """Verifie si un chemin existe."""
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        """Verifie si un chemin est un repertoire."""
        return os.path.isdir(path)

    def walk(
        self,
        root: str,
        onerror: Optional[Callable[[OSError], None]] = None,
    ) -> Iterator[tuple[str, list[str], list[str]]]:
        """Parcourt recursivement un repertoire (os.walk, liens suivis)."""
        return os.walk(root, topdown=True, onerror=onerror, followlinks=True)

    def stat(self, path: str) -> os.stat_result:
        """Lit les metadonnees d'un chemin (liens suivis)."""
        return os.stat(path)

    def rename(self, path: str, new_name: str) -> str:
        """
        Renomme un fichier dans son repertoire.

        Refuse d'ecraser un fichier existant.

        Args:
            path: Chemin actuel du fichier
            new_name: Nouveau nom (sans repertoire)

        Returns:
            Le nouveau chemin complet

        Raises:
            RenameFailedError: Source absente, destination existante ou refus du systeme
        """
        if not os.path.exists(path):
            raise RenameFailedError(path, new_name, "fichier introuvable")

        new_path = os.path.join(os.path.dirname(path), new_name)
        if os.path.exists(new_path):
            raise RenameFailedError(path, new_name, "la destination existe deja")

        try:
            os.rename(path, new_path)
        except OSError as e:
            raise RenameFailedError(path, new_name, e.strerror or str(e)) from e

        logger.info(f"Fichier renomme: {path} -> {new_path}")
        return new_path
