"""
Service de parcours des dossiers surveilles.

Enumere paresseusement les fichiers des dossiers racines, classes par
extension. Les dossiers inaccessibles (racine absente, permission refusee,
cycle de liens symboliques) sont ignores avec un avertissement : un
sous-arbre illisible n'interrompt jamais le parcours.
"""

import os
from datetime import datetime, timezone
from typing import Collection, Iterable, Iterator, Optional

from loguru import logger

from mediashelf.core.ports.file_system import IFileSystem
from mediashelf.core.value_objects import FileEntry, FileType, ScanWarning
from mediashelf.utils.constants import IGNORED_DIR_NAMES, SCAN_CHANNEL
from mediashelf.utils.helpers import classify_file_type

scan_logger = logger.bind(channel=SCAN_CHANNEL)


def _is_ignored_dir(name: str) -> bool:
    """Repertoires caches ou systeme, jamais parcourus."""
    return name.startswith(".") or name in IGNORED_DIR_NAMES


class DirectoryWalker:
    """
    Parcours recursif des dossiers racines.

    Chaque appel a walk() repart de zero : la sequence produite est finie
    et ne peut pas etre relancee.
    """

    def __init__(self, file_system: IFileSystem) -> None:
        """
        Initialise le parcours.

        Args:
            file_system: Implementation de IFileSystem (walk, stat)
        """
        self._file_system = file_system

    def walk(
        self,
        roots: Iterable[str],
        file_types: Optional[Collection[FileType]] = None,
        warnings: Optional[list[ScanWarning]] = None,
    ) -> Iterator[FileEntry]:
        """
        Enumere les fichiers des dossiers racines.

        Args:
            roots: Dossiers racines a parcourir
            file_types: Types a conserver (tous si None)
            warnings: Liste recevant les avertissements de parcours

        Yields:
            FileEntry pour chaque fichier retenu
        """
        for root in roots:
            yield from self._walk_root(root, file_types, warnings)

    def _walk_root(
        self,
        root: str,
        file_types: Optional[Collection[FileType]],
        warnings: Optional[list[ScanWarning]],
    ) -> Iterator[FileEntry]:
        if not self._file_system.exists(root):
            self._warn(warnings, ScanWarning(root, "dossier introuvable", is_root=True))
            return
        if not self._file_system.is_dir(root):
            self._warn(warnings, ScanWarning(root, "n'est pas un dossier", is_root=True))
            return

        def on_error(error: OSError) -> None:
            path = error.filename or root
            reason = error.strerror or str(error)
            self._warn(warnings, ScanWarning(str(path), reason, is_root=str(path) == root))

        visited: set[tuple[int, int]] = set()
        for dirpath, dirnames, filenames in self._file_system.walk(root, onerror=on_error):
            try:
                dir_stat = self._file_system.stat(dirpath)
            except OSError as e:
                self._warn(warnings, ScanWarning(dirpath, e.strerror or str(e), dirpath == root))
                dirnames[:] = []
                continue

            identity = (dir_stat.st_dev, dir_stat.st_ino)
            if identity in visited:
                self._warn(warnings, ScanWarning(dirpath, "cycle de liens symboliques"))
                dirnames[:] = []
                continue
            visited.add(identity)

            dirnames[:] = [name for name in dirnames if not _is_ignored_dir(name)]

            for filename in filenames:
                if filename.startswith("."):
                    continue
                file_type = classify_file_type(filename)
                if file_types is not None and file_type not in file_types:
                    continue

                path = os.path.join(dirpath, filename)
                try:
                    file_stat = self._file_system.stat(path)
                except OSError as e:
                    self._warn(warnings, ScanWarning(path, e.strerror or str(e)))
                    continue

                yield FileEntry(
                    path=path,
                    name=filename,
                    size=file_stat.st_size,
                    modified_at=datetime.fromtimestamp(file_stat.st_mtime, tz=timezone.utc),
                    file_type=file_type,
                    root=root,
                )

    @staticmethod
    def _warn(warnings: Optional[list[ScanWarning]], warning: ScanWarning) -> None:
        scan_logger.warning(
            f"Dossier ignore: {warning.path}",
            reason=warning.reason,
            is_root=warning.is_root,
        )
        if warnings is not None:
            warnings.append(warning)
