"""
Service de gestion des associations oeuvre / fichier (materiaux).

AssociationService convertit les candidats confirmes en materiaux,
propage les renommages du disque vers le catalogue et memorise les
dossiers utilises pour le matching.

Garanties:
- un chemin n'est associe qu'une fois par oeuvre
- le renommage disque precede la mise a jour du catalogue ; si la
  sauvegarde echoue ensuite, PartialRenameSyncError est levee
- la fusion des dossiers est idempotente
"""

import os
import uuid
from dataclasses import dataclass, field
from typing import Iterable

from loguru import logger
from pathvalidate import ValidationError, validate_filename

from mediashelf.core.entities import CatalogItem, Material
from mediashelf.core.errors import (
    DuplicateAssociationError,
    InvalidInputError,
    ItemNotFoundError,
    PartialRenameSyncError,
)
from mediashelf.core.ports.file_system import IFileSystem
from mediashelf.core.ports.repositories import ICatalogRepository
from mediashelf.core.value_objects import FileType, FolderSet, MatchCandidate, ScanWarning
from mediashelf.services.material_matcher import MaterialMatcherService, infer_category
from mediashelf.utils.helpers import classify_file_type, utc_now


@dataclass
class SyncResult:
    """
    Resultat d'un rafraichissement ou d'un matching automatique.

    Attributes:
        added: Materiaux crees
        updated: Materiaux existants mis a jour (categorie, taille)
        warnings: Dossiers ignores pendant le parcours
    """

    added: list[Material] = field(default_factory=list)
    updated: list[Material] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True si le catalogue a ete modifie."""
        return bool(self.added or self.updated)


def _material_from_candidate(candidate: MatchCandidate) -> Material:
    """Convertit un candidat confirme en materiau horodate."""
    return Material(
        id=candidate.key or uuid.uuid4().hex,
        name=candidate.name,
        path=candidate.path,
        size=candidate.size,
        file_type=candidate.file_type,
        category=candidate.category,
        added_at=utc_now(),
        modified_at=candidate.modified_at,
    )


def _merge_folders(item: CatalogItem, folders: Iterable[str]) -> bool:
    """Ajoute les dossiers absents, dans l'ordre. Retourne True si modifie."""
    changed = False
    for folder in FolderSet.build(temp=folders).temp:
        if folder not in item.matched_folders:
            item.matched_folders.append(folder)
            changed = True
    return changed


class AssociationService:
    """
    Service des associations entre oeuvres et fichiers du disque.

    Example:
        service = AssociationService(repository, file_system, matcher)
        material = service.associate(item_id, candidate)
        new_path = service.rename_propagate(item_id, material.path, "b.mkv")
    """

    def __init__(
        self,
        repository: ICatalogRepository,
        file_system: IFileSystem,
        matcher: MaterialMatcherService,
    ) -> None:
        """
        Initialise le service.

        Args:
            repository: Persistance du catalogue
            file_system: Acces au disque (renommage)
            matcher: Matching des materiaux (rafraichissement, matching automatique)
        """
        self._repository = repository
        self._file_system = file_system
        self._matcher = matcher

    def _get_item(self, item_id: int) -> CatalogItem:
        item = self._repository.get_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def associate(self, item_id: int, candidate: MatchCandidate) -> Material:
        """
        Associe un candidat confirme a une oeuvre.

        Raises:
            ItemNotFoundError: Oeuvre inconnue
            DuplicateAssociationError: Chemin deja associe (liste inchangee)
        """
        item = self._get_item(item_id)
        if item.has_material_path(candidate.path):
            raise DuplicateAssociationError(item_id, candidate.path)

        material = _material_from_candidate(candidate)
        item.materials.append(material)
        self._repository.save(item)
        logger.info(f"Materiau associe a '{item.title}': {material.path}")
        return material

    def associate_many(
        self, item_id: int, candidates: Iterable[MatchCandidate]
    ) -> list[Material]:
        """Associe plusieurs candidats ; les chemins deja associes sont ignores."""
        item = self._get_item(item_id)
        added = self._add_candidates(item, candidates)
        if added:
            self._repository.save(item)
        return added

    def confirm_match(
        self,
        item_id: int,
        candidates: Iterable[MatchCandidate],
        temp_folders: Iterable[str] = (),
    ) -> list[Material]:
        """
        Confirme les candidats d'une session de matching.

        Les dossiers temporaires de la session sont memorises dans
        matched_folders (promotion explicite), dans la meme sauvegarde.
        """
        item = self._get_item(item_id)
        added = self._add_candidates(item, candidates)
        folders_changed = _merge_folders(item, temp_folders)
        if added or folders_changed:
            self._repository.save(item)
        return added

    def remove_association(self, item_id: int, material_id: str) -> bool:
        """
        Retire un materiau par son ID.

        Idempotent : un ID absent n'est pas une erreur.

        Returns:
            True si un materiau a ete retire
        """
        item = self._get_item(item_id)
        remaining = [material for material in item.materials if material.id != material_id]
        if len(remaining) == len(item.materials):
            return False
        item.materials = remaining
        self._repository.save(item)
        logger.info(f"Materiau retire de '{item.title}': {material_id}")
        return True

    def rename_propagate(self, item_id: int, old_path: str, new_name: str) -> str:
        """
        Renomme un fichier sur le disque puis met a jour le materiau associe.

        L'extension d'origine est conservee si le nouveau nom l'omet.

        Args:
            item_id: ID de l'oeuvre
            old_path: Chemin actuel du fichier
            new_name: Nouveau nom (sans repertoire)

        Returns:
            Le nouveau chemin

        Raises:
            InvalidInputError: Nom vide, reserve ou contenant un caractere interdit
            ItemNotFoundError: Oeuvre inconnue
            RenameFailedError: Renommage refuse par le systeme (jamais retente)
            PartialRenameSyncError: Fichier renomme mais catalogue non mis a jour
        """
        name = new_name.strip()
        if not name or name in (".", ".."):
            raise InvalidInputError(f"Nom de fichier invalide: {new_name!r}")
        try:
            validate_filename(name, platform="universal")
        except ValidationError as e:
            raise InvalidInputError(f"Nom de fichier invalide: {new_name!r}") from e

        item = self._get_item(item_id)

        old_name = os.path.basename(old_path)
        extension = os.path.splitext(old_name)[1]
        if extension and not name.lower().endswith(extension.lower()):
            name += extension
        if name == old_name:
            return old_path

        new_path = self._file_system.rename(old_path, name)

        material = item.find_material_by_path(old_path)
        if material is None:
            return new_path

        material.name = name
        material.path = new_path
        try:
            self._repository.save(item)
        except Exception as e:
            logger.error(
                f"Fichier renomme mais catalogue non mis a jour: {old_path} -> {new_path}",
                item_id=item_id,
            )
            raise PartialRenameSyncError(item_id, old_path, new_path, e) from e
        return new_path

    def merge_matched_folders(self, item_id: int, folders: Iterable[str]) -> list[str]:
        """
        Ajoute a matched_folders les dossiers absents (ordre conserve).

        Returns:
            La liste matched_folders a jour
        """
        item = self._get_item(item_id)
        if _merge_folders(item, folders):
            self._repository.save(item)
        return list(item.matched_folders)

    async def refresh_materials(
        self, item_id: int, folders: FolderSet, threshold: int
    ) -> SyncResult:
        """
        Reparcourt les matched_folders de l'oeuvre.

        Les nouveaux fichiers sont associes ; la categorie (deduite des
        dossiers configures) et la taille des materiaux existants sont
        mises a jour.

        Args:
            item_id: ID de l'oeuvre
            folders: Dossiers configures (deduction de la categorie)
            threshold: Score minimum 0-100
        """
        item = self._get_item(item_id)
        result = SyncResult()
        if not item.matched_folders:
            return result

        report = await self._matcher.match_one(
            item.match_titles(), FolderSet.build(temp=item.matched_folders), threshold
        )
        result.warnings = report.warnings

        for candidate in report.candidates:
            category = infer_category(candidate.path, folders)
            existing = item.find_material_by_path(candidate.path)
            if existing is None:
                material = _material_from_candidate(candidate)
                material.category = category
                item.materials.append(material)
                result.added.append(material)
            elif existing.category != category or existing.size != candidate.size:
                existing.category = category
                existing.size = candidate.size
                existing.modified_at = candidate.modified_at
                result.updated.append(existing)

        if result.changed:
            self._repository.save(item)
        logger.info(
            f"Rafraichissement de '{item.title}': "
            f"{len(result.added)} ajout(s), {len(result.updated)} mise(s) a jour"
        )
        return result

    async def auto_associate(
        self, item_id: int, folders: FolderSet, threshold: int = 100
    ) -> SyncResult:
        """
        Associe automatiquement les correspondances exactes.

        Tous les candidats au-dessus du seuil (100 par defaut) sont associes.
        """
        item = self._get_item(item_id)
        report = await self._matcher.match_one(item.match_titles(), folders, threshold)
        result = SyncResult(warnings=report.warnings)
        result.added = self._add_candidates(item, report.candidates)
        if result.added:
            self._repository.save(item)
        logger.info(f"Matching automatique de '{item.title}': {len(result.added)} ajout(s)")
        return result

    @staticmethod
    def _add_candidates(
        item: CatalogItem, candidates: Iterable[MatchCandidate]
    ) -> list[Material]:
        added: list[Material] = []
        for candidate in candidates:
            if item.has_material_path(candidate.path):
                logger.debug(f"Deja associe, ignore: {candidate.path}")
                continue
            material = _material_from_candidate(candidate)
            if material.file_type is FileType.OTHER:
                material.file_type = classify_file_type(material.path)
            item.materials.append(material)
            added.append(material)
        return added
