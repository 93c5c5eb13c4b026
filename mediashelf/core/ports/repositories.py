"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance
du catalogue. Les implémentations fourniront les mécanismes de stockage
concrets (SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from mediashelf.core.entities import CatalogItem


class ICatalogRepository(ABC):
    """
    Interface de stockage du catalogue.

    Chaque appel est considéré atomique pour une oeuvre.
    """

    @abstractmethod
    def get_by_id(self, item_id: int) -> Optional[CatalogItem]:
        """Récupère une oeuvre par son ID interne."""
        ...

    @abstractmethod
    def list_all(self) -> list[CatalogItem]:
        """Instantané complet du catalogue (matching par lot)."""
        ...

    @abstractmethod
    def search_by_title(self, title: str) -> list[CatalogItem]:
        """Oeuvres dont le titre ou le titre original contient le texte donné."""
        ...

    @abstractmethod
    def save(self, item: CatalogItem) -> CatalogItem:
        """Sauvegarde une oeuvre (insertion ou mise à jour). Retourne l'oeuvre avec son ID."""
        ...

    @abstractmethod
    def delete(self, item_id: int) -> bool:
        """Supprime une oeuvre par ID. Retourne True si supprimée."""
        ...
