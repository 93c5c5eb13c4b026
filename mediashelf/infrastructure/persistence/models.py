"""
Modeles SQLModel pour la base de donnees MediaShelf.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- catalog_items: Oeuvres cataloguees avec leurs materiaux associes

Les champs JSON (*_json) stockent des listes (alias, dossiers, materiaux)
de maniere serialisee dans SQLite.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CatalogItemModel(SQLModel, table=True):
    """
    Modele representant une oeuvre du catalogue.

    Les materiaux sont stockes en JSON avec l'oeuvre : chaque sauvegarde
    remplace la liste complete, ce qui rend la mise a jour atomique.
    """

    __tablename__ = "catalog_items"

    id: int | None = Field(default=None, primary_key=True)
    tmdb_id: int | None = Field(default=None, index=True)
    title: str = Field(default="", index=True)
    original_title: str | None = None
    media_kind: str = Field(default="movie", index=True)  # "movie" ou "tv"
    aliases_json: str | None = None  # JSON: ["The Wandering Earth"]
    matched_folders_json: str | None = None  # JSON: ["/media/films"]
    materials_json: str | None = None  # JSON: [{"id": ..., "path": ...}]
    created_at: datetime | None = Field(default_factory=_utc_now)
    updated_at: datetime | None = Field(default_factory=_utc_now)

    @property
    def aliases(self) -> list[str]:
        """Retourne les alias deserialises."""
        if self.aliases_json:
            return json.loads(self.aliases_json)
        return []

    @property
    def matched_folders(self) -> list[str]:
        """Retourne les dossiers de matching deserialises."""
        if self.matched_folders_json:
            return json.loads(self.matched_folders_json)
        return []

    @property
    def materials(self) -> list[dict[str, Any]]:
        """Retourne les materiaux deserialises (dictionnaires bruts)."""
        if self.materials_json:
            return json.loads(self.materials_json)
        return []
