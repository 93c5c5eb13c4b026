"""
Utilitaires partages pour les commandes CLI de MediaShelf.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- render_candidates / render_materials / render_warnings : tableaux Rich
"""

from contextlib import contextmanager
from typing import Iterable

from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table

from mediashelf.core.entities import Material
from mediashelf.core.value_objects import FolderCategory, MatchCandidate, ScanWarning
from mediashelf.utils.helpers import format_file_size

# Console globale pour tous les affichages
console = Console()

CATEGORY_LABELS = {
    FolderCategory.DEFAULT: "",
    FolderCategory.SOURCE: "source",
    FolderCategory.FINISHED: "finished",
}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("mediashelf")
    try:
        yield
    finally:
        loguru_logger.enable("mediashelf")


def render_candidates(candidates: list[MatchCandidate], title: str = "Candidats") -> Table:
    """Tableau des candidats, tries par score decroissant."""
    table = Table(title=title, show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Fichier", style="cyan")
    table.add_column("Categorie")
    table.add_column("Taille", justify="right")
    table.add_column("Chemin", style="dim")

    ordered = sorted(candidates, key=lambda candidate: (-candidate.score, candidate.path))
    for index, candidate in enumerate(ordered, start=1):
        table.add_row(
            str(index),
            str(candidate.score),
            candidate.name,
            CATEGORY_LABELS[candidate.category],
            format_file_size(candidate.size),
            candidate.path,
        )
    return table


def render_materials(materials: list[Material], title: str = "Materiaux") -> Table:
    """Tableau des materiaux associes a une oeuvre."""
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Nom", style="cyan")
    table.add_column("Type")
    table.add_column("Categorie")
    table.add_column("Taille", justify="right")
    table.add_column("Chemin", style="dim")

    for material in materials:
        table.add_row(
            material.id,
            material.name,
            material.file_type.value,
            CATEGORY_LABELS[material.category],
            format_file_size(material.size),
            material.path,
        )
    return table


def render_warnings(warnings: Iterable[ScanWarning]) -> None:
    """Affiche les dossiers ignores pendant un parcours."""
    for warning in warnings:
        prefix = "Dossier racine inaccessible" if warning.is_root else "Dossier ignore"
        console.print(f"[yellow]{prefix}: {warning.path} ({warning.reason})[/yellow]")
