"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance des données
- ICatalogRepository : Stockage des oeuvres et de leurs matériaux

Ports système de fichiers : Contrats pour les opérations fichiers
- IFileSystem : Parcours, métadonnées et renommage
"""

from mediashelf.core.ports.file_system import IFileSystem
from mediashelf.core.ports.repositories import ICatalogRepository

__all__ = [
    "ICatalogRepository",
    "IFileSystem",
]
