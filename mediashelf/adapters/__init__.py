"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes :

- cli/ : Interface ligne de commande (Typer + Rich)
- file_system.py : Parcours et renommage sur le disque

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from mediashelf.adapters.file_system import FileSystemAdapter

__all__ = [
    "FileSystemAdapter",
]
