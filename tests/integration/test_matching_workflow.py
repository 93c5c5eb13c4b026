"""
Tests d'integration du workflow de matching avec les vrais adaptateurs.

Ces tests utilisent les implementations reelles (pas de mocks) cablees par
le Container : FileSystemAdapter, DirectoryWalker, MaterialMatcherService,
AssociationService et le repository SQLModel sur une base SQLite temporaire.
"""

from pathlib import Path

import pytest
from dependency_injector import providers

from mediashelf.config import Settings
from mediashelf.container import Container
from mediashelf.core.entities import CatalogItem
from mediashelf.core.value_objects import FolderCategory

from conftest import touch


@pytest.fixture
def library(tmp_path: Path) -> dict[str, Path]:
    """Mediatheque de test : rushes, exports et telechargements."""
    folders = {name: tmp_path / name for name in ("rushes", "exports", "downloads")}
    touch(folders["rushes"] / "流浪地球" / "A001_C003.mov")
    touch(folders["rushes"] / "流浪地球.2019.1080p.mp4")
    touch(folders["exports"] / "The.Wandering.Earth.2019.FINAL.mp4")
    touch(folders["exports"] / "poster.jpg")
    touch(folders["downloads"] / "[Group] The Wandering Earth (2019) [1080p].mkv")
    touch(folders["downloads"] / "unrelated_clip.mov")
    return folders


@pytest.fixture
def container(test_settings: Settings, library: dict[str, Path]) -> Container:
    settings = test_settings.model_copy(
        update={
            "source_folders": [str(library["rushes"])],
            "finished_folders": [str(library["exports"])],
        }
    )
    container = Container()
    container.config.override(providers.Object(settings))
    container.database.init()
    yield container
    container.config.reset_override()


class TestMatchingWorkflow:
    """Flux complet : matching, confirmation, renommage, rafraichissement."""

    @pytest.mark.asyncio
    async def test_full_flow(self, container: Container, library: dict[str, Path]) -> None:
        config = container.config()
        repository = container.catalog_repository()
        item = repository.save(
            CatalogItem(title="流浪地球", original_title="The Wandering Earth")
        )

        scope = config.folder_set().with_temp([str(library["downloads"])])
        report = await container.material_matcher().match_one(
            item.match_titles(), scope, config.match_threshold
        )

        by_name = {candidate.name: candidate for candidate in report.candidates}
        assert set(by_name) == {
            "A001_C003.mov",
            "流浪地球.2019.1080p.mp4",
            "The.Wandering.Earth.2019.FINAL.mp4",
            "[Group] The Wandering Earth (2019) [1080p].mkv",
        }
        assert by_name["A001_C003.mov"].category is FolderCategory.SOURCE
        assert by_name["The.Wandering.Earth.2019.FINAL.mp4"].category is FolderCategory.FINISHED
        assert (
            by_name["[Group] The Wandering Earth (2019) [1080p].mkv"].category
            is FolderCategory.DEFAULT
        )

        service = container.association_service()
        added = service.confirm_match(
            item.id, report.candidates, temp_folders=[str(library["downloads"])]
        )
        assert len(added) == 4

        download = by_name["[Group] The Wandering Earth (2019) [1080p].mkv"]
        new_path = service.rename_propagate(item.id, download.path, "The Wandering Earth (2019)")
        assert Path(new_path).name == "The Wandering Earth (2019).mkv"

        stored = container.catalog_repository().get_by_id(item.id)
        assert stored.matched_folders == [str(library["downloads"])]
        assert stored.find_material_by_path(new_path) is not None
        assert stored.find_material_by_path(download.path) is None

        touch(library["downloads"] / "The.Wandering.Earth.Trailer.mp4")
        result = await container.association_service().refresh_materials(
            item.id, config.folder_set(), config.match_threshold
        )
        assert [Path(material.path).name for material in result.added] == [
            "The.Wandering.Earth.Trailer.mp4"
        ]

    @pytest.mark.asyncio
    async def test_batch_over_catalog(self, container: Container, library: dict[str, Path]) -> None:
        repository = container.catalog_repository()
        repository.save(CatalogItem(title="流浪地球"))
        repository.save(CatalogItem(title="Inception", matched_folders=[str(library["downloads"])]))
        repository.save(CatalogItem(title="Offline", matched_folders=["/nonexistent/nas"]))
        config = container.config()

        report = await container.material_matcher().match_all(
            container.catalog_repository().list_all(), config.folder_set(), 80
        )

        assert [result.item.title for result in report.results] == ["流浪地球", "Inception"]
        assert report.failure_count == 1
        assert report.failures[0].path == "/nonexistent/nas"
        assert report.results[1].candidates == []
