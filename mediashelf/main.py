"""
Point d'entrée CLI de MediaShelf.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from mediashelf import __version__

from .adapters.cli.commands import (
    add,
    auto_match,
    find,
    list_items,
    match,
    match_all,
    refresh,
    remove,
    rename,
    show,
    unlink,
)
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="mediashelf",
    help="Organisation de mediatheque locale",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """MediaShelf - Catalogue et matching de fichiers media."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose

    settings = get_config()
    configure_logging(
        log_level=_console_level(settings),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Monter les commandes depuis commands.py
app.command()(add)
app.command(name="list")(list_items)
app.command()(show)
app.command()(find)
app.command()(remove)
app.command()(match)
app.command(name="match-all")(match_all)
app.command()(unlink)
app.command()(rename)
app.command()(refresh)
app.command(name="auto-match")(auto_match)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


def _console_level(settings: Settings) -> str:
    """Niveau de log console selon les options -v / -q."""
    if state["quiet"]:
        return "ERROR"
    if state["verbose"] >= 2:
        return "DEBUG"
    if state["verbose"] == 1:
        return "INFO"
    return settings.log_level


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    folders = config.folder_set()
    logger.info("Configuration MediaShelf")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Dossiers généraux : {', '.join(folders.default) or '-'}")
    typer.echo(f"Dossiers source : {', '.join(folders.source) or '-'}")
    typer.echo(f"Dossiers finalisés : {', '.join(folders.finished) or '-'}")
    typer.echo(f"Seuil de matching : {config.match_threshold}")
    typer.echo(f"Seuil automatique : {config.auto_match_threshold}")
    typer.echo(f"Parcours simultanés : {config.max_concurrent_scans}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MediaShelf v{__version__}")


def main() -> None:
    """Point d'entrée de l'application (logging configuré par le callback)."""
    app()


if __name__ == "__main__":
    main()
