"""
Module de persistance SQLite pour MediaShelf.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from mediashelf.infrastructure.persistence import create_db_engine, get_session, init_db

    engine = create_db_engine("sqlite:///mediashelf.db")
    init_db(engine)  # Cree les tables si necessaire
    with next(get_session(engine)) as session:
        session.add(CatalogItemModel(title="Inception"))
        session.commit()
"""

from mediashelf.infrastructure.persistence.database import (
    create_db_engine,
    get_session,
    init_db,
)
from mediashelf.infrastructure.persistence.models import CatalogItemModel

__all__ = [
    "create_db_engine",
    "get_session",
    "init_db",
    "CatalogItemModel",
]
