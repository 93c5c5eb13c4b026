"""
Objet valeur pour le resultat de la normalisation d'un nom de fichier.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedName:
    """
    Informations extraites d'un nom de fichier media.

    Attributs:
        clean_title: Titre nettoye, utilise comme entree du scoring (peut etre vide)
        year: Annee detectee (optionnel)
        season: Numero de saison detecte (optionnel)
        episode: Numero d'episode detecte (optionnel)
    """

    clean_title: str
    year: Optional[int] = None
    season: Optional[int] = None
    episode: Optional[int] = None
