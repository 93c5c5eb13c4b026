"""
Configuration de la base de donnees SQLite pour MediaShelf.

Ce module fournit :
- Engine SQLite avec configuration optimisee pour multi-thread
- Session factory
- Fonction d'initialisation des tables

La base de donnees est configuree via MEDIASHELF_DATABASE_URL (defaut: sqlite:///mediashelf.db).
"""

from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    Cree l'engine SQLModel pour l'URL donnee.

    Le repertoire parent d'un fichier SQLite est cree si necessaire.
    Une base en memoire partage une connexion unique (StaticPool)
    pour rester visible depuis tous les threads.
    """
    if _is_memory_url(database_url):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite:///"):
        db_path = Path(database_url.replace("sqlite:///", "", 1))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session(engine))

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(engine) as session:
        yield session


def init_db(engine: Engine) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Les modeles sont importes ici pour enregistrer leurs metadonnees
    dans SQLModel.metadata (evite les imports circulaires).
    """
    from mediashelf.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
