"""
Commandes Typer du catalogue et du matching de materiaux.

Ce module fournit les commandes CLI:
- add / list / show / find / remove : gestion des oeuvres du catalogue
- match : matching d'une oeuvre (dossiers temporaires, association directe)
- match-all : matching par lot de tout le catalogue
- unlink / rename : gestion des materiaux associes
- refresh : rafraichissement des materiaux depuis les dossiers memorises
- auto-match : association automatique des correspondances exactes
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from mediashelf.adapters.cli.helpers import (
    console,
    render_candidates,
    render_materials,
    render_warnings,
    suppress_loguru,
)
from mediashelf.container import Container
from mediashelf.core.entities import CatalogItem
from mediashelf.core.errors import MediaShelfError, PartialRenameSyncError


class MediaKind(str, Enum):
    """Type d'oeuvre accepte par la commande add."""

    movie = "movie"
    tv = "tv"


ThresholdOption = Annotated[
    Optional[int],
    typer.Option(
        "--threshold",
        "-t",
        min=0,
        max=100,
        help="Score minimum 0-100 (defaut: match_threshold de la config)",
    ),
]


def _init_container() -> Container:
    container = Container()
    container.database.init()
    return container


def _load_item(container: Container, item_id: int) -> CatalogItem:
    item = container.catalog_repository().get_by_id(item_id)
    if item is None:
        console.print(f"[red]Erreur: oeuvre introuvable: {item_id}[/red]")
        raise typer.Exit(1)
    return item


def _fail(error: MediaShelfError) -> NoReturn:
    console.print(f"[red]Erreur: {error}[/red]")
    raise typer.Exit(1)


def _catalog_table(items: list[CatalogItem], title: str) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Titre", style="cyan")
    table.add_column("Titre original")
    table.add_column("Type")
    table.add_column("Materiaux", justify="right")
    for item in items:
        table.add_row(
            str(item.id),
            item.title,
            item.original_title or "",
            item.media_kind,
            str(len(item.materials)),
        )
    return table


def add(
    title: Annotated[str, typer.Argument(help="Titre principal")],
    original_title: Annotated[
        Optional[str], typer.Option("--original", "-o", help="Titre original")
    ] = None,
    aliases: Annotated[
        Optional[list[str]],
        typer.Option("--alias", "-a", help="Titre alternatif (option repetable)"),
    ] = None,
    kind: Annotated[MediaKind, typer.Option("--kind", "-k", help="Type d'oeuvre")] = MediaKind.movie,
    tmdb_id: Annotated[Optional[int], typer.Option("--tmdb-id", help="ID TMDB")] = None,
) -> None:
    """Ajoute une oeuvre au catalogue."""
    if not title.strip():
        console.print("[red]Erreur: le titre ne peut pas etre vide[/red]")
        raise typer.Exit(1)

    container = _init_container()
    item = container.catalog_repository().save(
        CatalogItem(
            tmdb_id=tmdb_id,
            title=title.strip(),
            original_title=original_title,
            aliases=[alias.strip() for alias in aliases or [] if alias.strip()],
            media_kind=kind.value,
        )
    )
    console.print(f"[green]Oeuvre ajoutee:[/green] #{item.id} {item.title}")


def list_items() -> None:
    """Liste les oeuvres du catalogue."""
    container = _init_container()
    items = container.catalog_repository().list_all()
    if not items:
        console.print("[yellow]Catalogue vide.[/yellow]")
        return

    console.print(_catalog_table(items, "Catalogue"))


def find(query: Annotated[str, typer.Argument(help="Texte cherche dans les titres")]) -> None:
    """Cherche des oeuvres par titre ou titre original."""
    if not query.strip():
        console.print("[red]Erreur: la recherche ne peut pas etre vide[/red]")
        raise typer.Exit(1)

    container = _init_container()
    items = container.catalog_repository().search_by_title(query.strip())
    if not items:
        console.print(f"[yellow]Aucune oeuvre pour '{query}'.[/yellow]")
        return
    console.print(_catalog_table(items, f"Recherche: {query}"))


def remove(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Ne pas demander confirmation")] = False,
) -> None:
    """Supprime une oeuvre du catalogue (les fichiers ne sont pas touches)."""
    container = _init_container()
    item = _load_item(container, item_id)
    if not yes:
        typer.confirm(
            f"Supprimer '{item.title}' et ses {len(item.materials)} materiau(x) ?",
            abort=True,
        )
    container.catalog_repository().delete(item_id)
    console.print(f"[green]Oeuvre supprimee:[/green] #{item_id} {item.title}")


def show(item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")]) -> None:
    """Affiche une oeuvre, ses dossiers de matching et ses materiaux."""
    container = _init_container()
    item = _load_item(container, item_id)

    lines = [f"[bold]{item.title}[/bold] ({item.media_kind})"]
    if item.original_title:
        lines.append(f"Titre original : {item.original_title}")
    if item.aliases:
        lines.append(f"Alias : {', '.join(item.aliases)}")
    if item.tmdb_id:
        lines.append(f"TMDB : {item.tmdb_id}")
    if item.matched_folders:
        lines.append("Dossiers de matching :")
        lines.extend(f"  {folder}" for folder in item.matched_folders)
    console.print(Panel("\n".join(lines), title=f"Oeuvre #{item.id}"))

    if item.materials:
        console.print(render_materials(item.materials))
    else:
        console.print("[dim]Aucun materiau associe.[/dim]")


def match(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    folders: Annotated[
        Optional[list[Path]],
        typer.Option("--folder", "-f", help="Dossier temporaire a parcourir (option repetable)"),
    ] = None,
    threshold: ThresholdOption = None,
    link: Annotated[
        bool,
        typer.Option("--link", help="Associe tous les candidats et memorise les dossiers"),
    ] = False,
) -> None:
    """
    Cherche les fichiers correspondant a une oeuvre.

    Exemples:
      mediashelf match 3
      mediashelf match 3 --folder ~/Downloads --threshold 70
      mediashelf match 3 --folder /mnt/nas/rushes --link
    """
    temp_folders = [str(folder.expanduser()) for folder in folders or []]
    asyncio.run(_match_async(item_id, temp_folders, threshold, link))


async def _match_async(
    item_id: int, temp_folders: list[str], threshold: Optional[int], link: bool
) -> None:
    """Implementation async de la commande match."""
    container = _init_container()
    config = container.config()
    item = _load_item(container, item_id)

    scope = config.folder_set().with_temp([*item.matched_folders, *temp_folders])
    matcher = container.material_matcher()
    try:
        with console.status(f"[cyan]Recherche des fichiers pour {item.title}..."):
            with suppress_loguru():
                report = await matcher.match_one(
                    item.match_titles(),
                    scope,
                    threshold if threshold is not None else config.match_threshold,
                )
    except MediaShelfError as e:
        _fail(e)

    render_warnings(report.warnings)
    candidates = [
        candidate for candidate in report.candidates if not item.has_material_path(candidate.path)
    ]
    if not candidates:
        console.print("[yellow]Aucun fichier correspondant.[/yellow]")
        return

    console.print(render_candidates(candidates, title=f"Candidats pour {item.title}"))

    if link:
        added = container.association_service().confirm_match(item_id, candidates, temp_folders)
        console.print(f"[green]{len(added)} materiau(x) associe(s).[/green]")


def match_all(
    threshold: ThresholdOption = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Oeuvres traitees en parallele"),
    ] = None,
) -> None:
    """Cherche les fichiers correspondant a toutes les oeuvres du catalogue."""
    asyncio.run(_match_all_async(threshold, workers))


async def _match_all_async(threshold: Optional[int], workers: Optional[int]) -> None:
    """Implementation async de la commande match-all."""
    container = _init_container()
    config = container.config()
    items = container.catalog_repository().list_all()
    if not items:
        console.print("[yellow]Catalogue vide.[/yellow]")
        return

    matcher = container.material_matcher()
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Matching", total=len(items))
        try:
            with suppress_loguru():
                report = await matcher.match_all(
                    items,
                    config.folder_set(),
                    threshold if threshold is not None else config.match_threshold,
                    max_workers=workers,
                    on_result=lambda result: progress.advance(task),
                )
        except MediaShelfError as e:
            _fail(e)
        progress.update(task, completed=len(items))

    render_warnings(report.warnings)

    table = Table(title="Resultats du matching", show_header=True)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Oeuvre", style="cyan")
    table.add_column("Candidats", justify="right", style="green")
    table.add_column("Meilleur fichier", style="dim")
    for result in report.results:
        best = max(result.candidates, key=lambda candidate: candidate.score, default=None)
        table.add_row(
            str(result.item.id),
            result.item.title,
            str(len(result.candidates)),
            f"{best.name} ({best.score})" if best else "",
        )
    console.print(table)

    for failure in report.failures:
        where = f" [{failure.path}]" if failure.path else ""
        console.print(f"[red]Echec #{failure.item_id} {failure.title}{where}: {failure.reason}[/red]")
    console.print(
        f"[bold]{report.candidate_count}[/bold] candidat(s), "
        f"[bold]{report.failure_count}[/bold] echec(s)"
    )


def unlink(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    material_id: Annotated[str, typer.Argument(help="ID du materiau")],
) -> None:
    """Retire un materiau d'une oeuvre."""
    container = _init_container()
    try:
        removed = container.association_service().remove_association(item_id, material_id)
    except MediaShelfError as e:
        _fail(e)
    if removed:
        console.print("[green]Materiau retire.[/green]")
    else:
        console.print("[yellow]Materiau deja absent.[/yellow]")


def rename(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    path: Annotated[str, typer.Argument(help="Chemin actuel du fichier")],
    new_name: Annotated[str, typer.Argument(help="Nouveau nom (extension conservee si omise)")],
) -> None:
    """Renomme un fichier associe et met a jour le catalogue."""
    container = _init_container()
    try:
        new_path = container.association_service().rename_propagate(item_id, path, new_name)
    except PartialRenameSyncError as e:
        console.print(
            Panel(
                f"Le fichier a ete renomme en {e.new_path}\n"
                f"mais le catalogue reference toujours {e.old_path}.\n"
                f"Cause : {e.cause}",
                title="[red]Catalogue desynchronise[/red]",
                border_style="red",
            )
        )
        raise typer.Exit(2)
    except MediaShelfError as e:
        _fail(e)
    console.print(f"[green]Renomme:[/green] {new_path}")


def refresh(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    threshold: ThresholdOption = None,
) -> None:
    """Reparcourt les dossiers memorises d'une oeuvre."""
    asyncio.run(_refresh_async(item_id, threshold))


async def _refresh_async(item_id: int, threshold: Optional[int]) -> None:
    """Implementation async de la commande refresh."""
    container = _init_container()
    config = container.config()
    try:
        with suppress_loguru():
            result = await container.association_service().refresh_materials(
                item_id,
                config.folder_set(),
                threshold if threshold is not None else config.match_threshold,
            )
    except MediaShelfError as e:
        _fail(e)

    render_warnings(result.warnings)
    console.print(
        f"[green]{len(result.added)} ajout(s), {len(result.updated)} mise(s) a jour.[/green]"
    )


def auto_match(
    item_id: Annotated[int, typer.Argument(help="ID de l'oeuvre")],
    threshold: ThresholdOption = None,
) -> None:
    """Associe automatiquement les correspondances exactes d'une oeuvre."""
    asyncio.run(_auto_match_async(item_id, threshold))


async def _auto_match_async(item_id: int, threshold: Optional[int]) -> None:
    """Implementation async de la commande auto-match."""
    container = _init_container()
    config = container.config()
    try:
        with suppress_loguru():
            result = await container.association_service().auto_associate(
                item_id,
                config.folder_set(),
                threshold if threshold is not None else config.auto_match_threshold,
            )
    except MediaShelfError as e:
        _fail(e)

    render_warnings(result.warnings)
    if result.added:
        console.print(render_materials(result.added, title="Materiaux associes"))
    else:
        console.print("[yellow]Aucune correspondance exacte.[/yellow]")
