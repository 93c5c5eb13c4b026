"""
Entités du catalogue.

Entités représentant les oeuvres cataloguees (films, series) et les
materiaux (fichiers du disque) qui leur sont associes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from mediashelf.core.value_objects import FileType, FolderCategory


@dataclass
class Material:
    """
    Association confirmee entre une oeuvre et un fichier du disque.

    Un materiau est cree quand l'utilisateur confirme un MatchCandidate.
    Il n'est modifie en place que pour propager un renommage (name et path
    ensemble) ou lors d'un rafraichissement (category et size).

    Attributs :
        id : Identifiant unique dans la liste des materiaux de l'oeuvre
        name : Nom affiche (nom du fichier)
        path : Chemin absolu du fichier
        size : Taille en octets, en chaine pour les tres gros fichiers
        file_type : Classification par extension
        category : Categorie du dossier d'origine
        added_at : Date de creation de l'association
        modified_at : Date de derniere modification du fichier
    """

    id: str
    name: str
    path: str
    size: str = "0"
    file_type: FileType = FileType.OTHER
    category: FolderCategory = FolderCategory.DEFAULT
    added_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None


@dataclass
class CatalogItem:
    """
    Oeuvre cataloguee (film ou serie).

    Attributs :
        id : Identifiant interne, attribue par la persistance, immuable ensuite
        tmdb_id : Identifiant de metadonnees externe (optionnel)
        title : Titre principal
        original_title : Titre original (optionnel)
        aliases : Titres alternatifs
        media_kind : "movie" ou "tv"
        matched_folders : Dossiers deja utilises pour le matching (ordonnes, sans doublon)
        materials : Materiaux associes
        created_at : Date de creation
        updated_at : Date de derniere modification
    """

    id: Optional[int] = None
    tmdb_id: Optional[int] = None
    title: str = ""
    original_title: Optional[str] = None
    aliases: list[str] = field(default_factory=list)
    media_kind: str = "movie"
    matched_folders: list[str] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def match_titles(self) -> list[str]:
        """Titres candidats au matching : titre, titre original puis alias (non vides)."""
        titles: list[str] = []
        for title in (self.title, self.original_title, *self.aliases):
            if title and title.strip() and title.strip() not in titles:
                titles.append(title.strip())
        return titles

    def find_material_by_path(self, path: str) -> Optional[Material]:
        """Retourne le materiau associe a ce chemin, ou None."""
        for material in self.materials:
            if material.path == path:
                return material
        return None

    def has_material_path(self, path: str) -> bool:
        """Verifie si un chemin est deja associe a l'oeuvre."""
        return self.find_material_by_path(path) is not None

    def material_paths(self) -> set[str]:
        """Ensemble des chemins deja associes."""
        return {material.path for material in self.materials}
