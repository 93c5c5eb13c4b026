"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEDIASHELF_,
et peut optionnellement être fournie via un fichier .env.

Les listes de dossiers s'écrivent en JSON dans l'environnement :
MEDIASHELF_SOURCE_FOLDERS='["/media/rushes", "~/Videos/source"]'
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediashelf.core.value_objects import FolderSet

# Trouver le fichier .env à la racine du projet (parent de mediashelf/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIASHELF_.
    Exemple : MEDIASHELF_MATCH_THRESHOLD=70

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASHELF_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de données
    database_url: str = Field(default="sqlite:///mediashelf.db")

    # Dossiers surveillés, par catégorie (avec expansion ~)
    default_folders: list[str] = Field(default_factory=list)
    source_folders: list[str] = Field(default_factory=list)
    finished_folders: list[str] = Field(default_factory=list)

    # Matching
    match_threshold: int = Field(default=80, ge=0, le=100)
    auto_match_threshold: int = Field(default=100, ge=0, le=100)
    max_concurrent_scans: int = Field(default=4, ge=1)
    batch_workers: int = Field(default=4, ge=1)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediashelf.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("default_folders", "source_folders", "finished_folders", mode="after")
    @classmethod
    def expand_folders(cls, v: list[str]) -> list[str]:
        """Étend ~ dans chaque dossier et retire les entrées vides."""
        return [str(Path(folder).expanduser()) for folder in v if folder and folder.strip()]

    def folder_set(self) -> FolderSet:
        """Construit le périmètre de scan à partir des dossiers configurés."""
        return FolderSet.build(
            default=self.default_folders,
            source=self.source_folders,
            finished=self.finished_folders,
        )
