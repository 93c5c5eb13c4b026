"""
MediaShelf - Organisation d'une mediatheque locale.

Ce package catalogue des films et series, retrouve les fichiers media
correspondants dans les dossiers surveilles par correspondance floue
des noms de fichiers, et conserve les associations (materiaux) en base.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (normalisation, scoring, scan, matching, associations)
- adapters/ : Couche infrastructure (CLI, système de fichiers)
- infrastructure/ : Persistance SQLite via SQLModel
"""

__version__ = "0.1.0"
