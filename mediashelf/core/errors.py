"""
Erreurs du domaine MediaShelf.

Les fonctions pures (normalisation, scoring) ne levent jamais d'erreur.
Les operations qui touchent au disque ou a la persistance levent les
erreurs structurees ci-dessous, que l'appelant peut afficher comme
message exploitable.
"""

from typing import Optional


class MediaShelfError(Exception):
    """Classe de base des erreurs MediaShelf."""


class InvalidInputError(MediaShelfError):
    """
    Entree invalide pour le matching.

    Levee quand il n'y a ni dossier a scanner ni titre a comparer,
    ou quand le seuil sort de l'intervalle 0-100.
    """


class ItemNotFoundError(MediaShelfError):
    """L'oeuvre demandee n'existe pas dans le catalogue."""

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"Oeuvre introuvable: {item_id}")


class DuplicateAssociationError(MediaShelfError):
    """
    Le chemin est deja associe a cette oeuvre.

    Erreur locale et recuperable : l'appelant peut la traiter comme "deja fait".

    Attributes:
        item_id: ID de l'oeuvre
        path: Chemin deja associe
    """

    def __init__(self, item_id: int, path: str) -> None:
        self.item_id = item_id
        self.path = path
        super().__init__(f"Fichier deja associe a l'oeuvre {item_id}: {path}")


class RenameFailedError(MediaShelfError):
    """
    Le systeme de fichiers a refuse le renommage.

    Jamais relance automatiquement : un renommage n'est pas idempotent.

    Attributes:
        path: Chemin du fichier a renommer
        new_name: Nouveau nom demande
        reason: Cause rapportee par le systeme
    """

    def __init__(self, path: str, new_name: str, reason: str) -> None:
        self.path = path
        self.new_name = new_name
        self.reason = reason
        super().__init__(f"Echec du renommage de {path} en {new_name}: {reason}")


class PartialRenameSyncError(MediaShelfError):
    """
    Le fichier a ete renomme mais le catalogue n'a pas pu etre mis a jour.

    Le disque et le catalogue divergent : l'appelant doit resynchroniser
    l'association (old_path -> new_path).

    Attributes:
        item_id: ID de l'oeuvre
        old_path: Ancien chemin (encore present dans le catalogue)
        new_path: Nouveau chemin (present sur le disque)
        cause: Exception de persistance d'origine
    """

    def __init__(
        self,
        item_id: int,
        old_path: str,
        new_path: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.item_id = item_id
        self.old_path = old_path
        self.new_path = new_path
        self.cause = cause
        super().__init__(
            f"Fichier renomme ({old_path} -> {new_path}) mais catalogue "
            f"non mis a jour pour l'oeuvre {item_id}: {cause}"
        )


class ScanRootUnavailableError(MediaShelfError):
    """
    Un dossier racine propre a une oeuvre est inaccessible.

    Utilisee par le matching par lot pour marquer l'oeuvre en echec.

    Attributes:
        path: Dossier inaccessible
        reason: Cause rapportee par le parcours
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Dossier inaccessible: {path} ({reason})")
