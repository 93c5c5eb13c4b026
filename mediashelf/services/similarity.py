"""
Scoring de similarite entre un nom de fichier normalise et des titres cibles.

Le score est un entier 0-100, deterministe:
- 100 si et seulement si les deux chaines sont identiques (casse,
  ponctuation et espaces ignores)
- 95 si l'une contient l'autre (au moins 2 caracteres)
- sinon le meilleur de ratio / Jaro-Winkler, et token_sort / token_set
  quand l'une des chaines contient plusieurs mots, plafonne a 99

Un seuil de 100 ne retient donc que les titres identiques ("The Matrix"
ne vaut pas 100 contre "The Matrix Reloaded").

La comparaison caractere par caractere couvre les titres CJK
(sans espaces entre les mots).
"""

from typing import Iterable

from rapidfuzz import fuzz, utils
from rapidfuzz.distance import JaroWinkler

# Score attribue quand une chaine contient l'autre
CONTAINMENT_SCORE = 95
MIN_CONTAINMENT_LENGTH = 2
# Score maximal hors egalite
MAX_FUZZY_SCORE = 99


def _containment_score(a: str, b: str) -> float:
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if len(shorter) >= MIN_CONTAINMENT_LENGTH and shorter in longer:
        return float(CONTAINMENT_SCORE)
    return 0.0


def score_pair(candidate: str, target: str) -> int:
    """
    Similarite entre un titre de fichier nettoye et un titre cible.

    Returns:
        Score entier entre 0 et 100 (0 si une chaine est vide, 100
        uniquement pour deux titres identiques).
    """
    if not candidate or not target:
        return 0
    if candidate == target:
        return 100
    if candidate.strip() and candidate.strip().casefold() == target.strip().casefold():
        return 100

    left = utils.default_process(candidate)
    right = utils.default_process(target)
    if not left or not right:
        return 0
    if left == right:
        return 100

    best = max(
        fuzz.ratio(left, right),
        JaroWinkler.normalized_similarity(left, right) * 100,
        _containment_score(left, right),
    )
    if " " in left or " " in right:
        best = max(
            best,
            fuzz.token_sort_ratio(left, right),
            fuzz.token_set_ratio(left, right),
        )

    return max(0, min(MAX_FUZZY_SCORE, int(round(best))))


def score(candidate: str, targets: Iterable[str]) -> int:
    """
    Meilleur score d'un titre de fichier contre plusieurs titres cibles.

    Args:
        candidate: Titre nettoye du fichier (sortie de normalize)
        targets: Titres de l'oeuvre (titre, titre original, alias)

    Returns:
        Maximum des scores, 0 sans cible.
    """
    best = 0
    for target in targets:
        best = max(best, score_pair(candidate, target))
        if best == 100:
            break
    return best
