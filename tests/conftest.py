"""
Fixtures pytest partagees pour les tests MediaShelf.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock de l'interface IFileSystem
- Arborescence de fichiers media temporaire
- Base SQLite en memoire et repository du catalogue
- Services de matching et d'association branches sur le disque reel
"""

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from mediashelf.adapters.file_system import FileSystemAdapter
from mediashelf.config import Settings
from mediashelf.core.ports.file_system import IFileSystem
from mediashelf.infrastructure.persistence.database import create_db_engine, init_db
from mediashelf.infrastructure.persistence.repositories import SQLModelCatalogRepository
from mediashelf.services.association import AssociationService
from mediashelf.services.material_matcher import MaterialMatcherService
from mediashelf.services.scanner import DirectoryWalker


def make_stat(inode: int, size: int = 1024, mtime: float = 1_700_000_000.0) -> os.stat_result:
    """Construit un os.stat_result minimal (mode, ino, dev, nlink, uid, gid, size, atime, mtime, ctime)."""
    return os.stat_result((0o100644, inode, 1, 1, 0, 0, size, mtime, mtime, mtime))


def touch(path: Path, size: int = 16) -> Path:
    """Cree un fichier (et ses dossiers parents) avec un contenu de la taille donnee."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def mock_file_system() -> MagicMock:
    """
    Mock de IFileSystem pour les tests.

    exists/is_dir retournent True ; stat attribue un inode stable par chemin.
    walk et rename doivent etre configures dans chaque test.
    """
    mock = MagicMock(spec=IFileSystem)
    mock.exists.return_value = True
    mock.is_dir.return_value = True

    inodes: dict[str, int] = {}

    def fake_stat(path: str) -> os.stat_result:
        inode = inodes.setdefault(path, len(inodes) + 1)
        return make_stat(inode)

    mock.stat.side_effect = fake_stat
    return mock


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    """Dossier racine temporaire pour les fichiers media."""
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def file_system() -> FileSystemAdapter:
    """Adaptateur du systeme de fichiers reel."""
    return FileSystemAdapter()


@pytest.fixture
def walker(file_system: FileSystemAdapter) -> DirectoryWalker:
    """Parcours des dossiers sur le disque reel."""
    return DirectoryWalker(file_system)


@pytest.fixture
def matcher(walker: DirectoryWalker) -> MaterialMatcherService:
    """Service de matching branche sur le disque reel."""
    return MaterialMatcherService(walker, max_concurrent_scans=2, batch_workers=4)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Engine SQLite en memoire avec les tables creees."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    """Session SQLModel sur la base en memoire."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def catalog_repository(session: Session) -> SQLModelCatalogRepository:
    """Repository du catalogue sur la base en memoire."""
    return SQLModelCatalogRepository(session)


@pytest.fixture
def association_service(
    catalog_repository: SQLModelCatalogRepository,
    file_system: FileSystemAdapter,
    matcher: MaterialMatcherService,
) -> AssociationService:
    """Service d'association sur la base en memoire et le disque reel."""
    return AssociationService(catalog_repository, file_system, matcher)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler base et logs de chaque test.
    """
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'mediashelf.db'}",
        log_file=tmp_path / "logs" / "mediashelf.log",
    )
