"""
Implementation SQLModel du repository du catalogue.

Implemente l'interface ICatalogRepository pour la persistance des oeuvres
et de leurs materiaux dans la base de donnees SQLite via SQLModel.
"""

import json
from typing import Any, Optional

from sqlmodel import Session, or_, select

from mediashelf.core.entities import CatalogItem, Material
from mediashelf.core.ports.repositories import ICatalogRepository
from mediashelf.core.value_objects import FileType, FolderCategory
from mediashelf.infrastructure.persistence.models import CatalogItemModel
from mediashelf.utils.helpers import parse_iso, to_iso, utc_now


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {
        "id": material.id,
        "name": material.name,
        "path": material.path,
        "size": material.size,
        "file_type": material.file_type.value,
        "category": material.category.value,
        "added_at": to_iso(material.added_at),
        "modified_at": to_iso(material.modified_at),
    }


def _material_from_dict(data: dict[str, Any]) -> Material:
    try:
        file_type = FileType(data.get("file_type") or FileType.OTHER.value)
    except ValueError:
        file_type = FileType.OTHER
    return Material(
        id=str(data.get("id", "")),
        name=data.get("name", ""),
        path=data.get("path", ""),
        size=str(data.get("size", "0")),
        file_type=file_type,
        category=FolderCategory.from_value(data.get("category")),
        added_at=parse_iso(data.get("added_at")),
        modified_at=parse_iso(data.get("modified_at")),
    )


class SQLModelCatalogRepository(ICatalogRepository):
    """
    Repository SQLModel pour les oeuvres du catalogue.

    Implemente ICatalogRepository avec conversion bidirectionnelle
    entre l'entite CatalogItem (domaine) et CatalogItemModel (persistance).
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: CatalogItemModel) -> CatalogItem:
        """Convertit un modele DB en entite domaine."""
        return CatalogItem(
            id=model.id,
            tmdb_id=model.tmdb_id,
            title=model.title,
            original_title=model.original_title,
            aliases=model.aliases,
            media_kind=model.media_kind,
            matched_folders=model.matched_folders,
            materials=[_material_from_dict(data) for data in model.materials],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _apply(self, model: CatalogItemModel, entity: CatalogItem) -> None:
        """Copie les champs de l'entite dans le modele."""
        model.tmdb_id = entity.tmdb_id
        model.title = entity.title
        model.original_title = entity.original_title
        model.media_kind = entity.media_kind
        model.aliases_json = json.dumps(list(entity.aliases), ensure_ascii=False)
        model.matched_folders_json = json.dumps(
            list(entity.matched_folders), ensure_ascii=False
        )
        model.materials_json = json.dumps(
            [_material_to_dict(material) for material in entity.materials],
            ensure_ascii=False,
        )
        model.updated_at = utc_now()

    def get_by_id(self, item_id: int) -> Optional[CatalogItem]:
        """Recupere une oeuvre par son ID interne."""
        model = self._session.get(CatalogItemModel, int(item_id))
        if model:
            return self._to_entity(model)
        return None

    def list_all(self) -> list[CatalogItem]:
        """Liste toutes les oeuvres, par ID croissant."""
        statement = select(CatalogItemModel).order_by(CatalogItemModel.id)
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def search_by_title(self, title: str) -> list[CatalogItem]:
        """Recherche des oeuvres dont le titre ou le titre original contient le texte."""
        statement = (
            select(CatalogItemModel)
            .where(
                or_(
                    CatalogItemModel.title.contains(title),
                    CatalogItemModel.original_title.contains(title),
                )
            )
            .order_by(CatalogItemModel.id)
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def save(self, item: CatalogItem) -> CatalogItem:
        """Sauvegarde une oeuvre (insertion ou mise a jour)."""
        existing = None
        if item.id is not None:
            existing = self._session.get(CatalogItemModel, int(item.id))

        if existing:
            self._apply(existing, item)
            model = existing
        else:
            model = CatalogItemModel(id=item.id)
            self._apply(model, item)
            if item.created_at:
                model.created_at = item.created_at

        try:
            self._session.add(model)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(model)
        return self._to_entity(model)

    def delete(self, item_id: int) -> bool:
        """Supprime une oeuvre par ID. Retourne True si supprimee."""
        model = self._session.get(CatalogItemModel, int(item_id))
        if model is None:
            return False
        self._session.delete(model)
        self._session.commit()
        return True
