"""
Tests pour la configuration pydantic-settings.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mediashelf.config import Settings
from mediashelf.core.value_objects import FolderSet

_ENV_KEYS = [
    "MEDIASHELF_DATABASE_URL",
    "MEDIASHELF_DEFAULT_FOLDERS",
    "MEDIASHELF_SOURCE_FOLDERS",
    "MEDIASHELF_FINISHED_FOLDERS",
    "MEDIASHELF_MATCH_THRESHOLD",
    "MEDIASHELF_AUTO_MATCH_THRESHOLD",
    "MEDIASHELF_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isole les tests des variables MEDIASHELF_ de l'environnement."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    """Tests des valeurs par defaut et des surcharges."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.match_threshold == 80
        assert settings.auto_match_threshold == 100
        assert settings.max_concurrent_scans >= 1
        assert settings.folder_set().is_empty

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MEDIASHELF_MATCH_THRESHOLD", "70")
        monkeypatch.setenv("MEDIASHELF_SOURCE_FOLDERS", '["/media/rushes", "/media/rushes"]')

        settings = Settings()

        assert settings.match_threshold == 70
        assert settings.folder_set() == FolderSet.build(source=["/media/rushes"])

    def test_home_expanded(self) -> None:
        settings = Settings(default_folders=["~/Videos", ""], log_file="~/logs/app.log")

        assert settings.default_folders == [str(Path("~/Videos").expanduser())]
        assert settings.log_file == Path("~/logs/app.log").expanduser()

    @pytest.mark.parametrize("threshold", [-1, 101])
    def test_threshold_bounds(self, threshold: int) -> None:
        with pytest.raises(ValidationError):
            Settings(match_threshold=threshold)
