"""
Tests pour le container d'injection de dependances.
"""

import pytest
from dependency_injector import providers

from mediashelf.config import Settings
from mediashelf.container import Container
from mediashelf.infrastructure.persistence.repositories import SQLModelCatalogRepository
from mediashelf.services.association import AssociationService
from mediashelf.services.material_matcher import MaterialMatcherService


@pytest.fixture
def container(tmp_path) -> Container:
    container = Container()
    container.config.override(
        providers.Object(
            Settings(database_url="sqlite://", log_file=tmp_path / "logs" / "test.log")
        )
    )
    container.database.init()
    yield container
    container.config.reset_override()


class TestContainer:
    """Tests du cablage des providers."""

    def test_repository_factory(self, container: Container) -> None:
        first = container.catalog_repository()
        second = container.catalog_repository()

        assert isinstance(first, SQLModelCatalogRepository)
        assert first is not second

    def test_matcher_is_singleton(self, container: Container) -> None:
        assert isinstance(container.material_matcher(), MaterialMatcherService)
        assert container.material_matcher() is container.material_matcher()

    def test_association_service_wired(self, container: Container) -> None:
        assert isinstance(container.association_service(), AssociationService)
