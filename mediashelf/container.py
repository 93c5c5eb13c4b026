"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
configuration, base de donnees, adaptateurs et services de matching.
"""

from dependency_injector import containers, providers

from .adapters.file_system import FileSystemAdapter
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, get_session, init_db
from .infrastructure.persistence.repositories import SQLModelCatalogRepository
from .services.association import AssociationService
from .services.material_matcher import MaterialMatcherService
from .services.scanner import DirectoryWalker


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        matcher = container.material_matcher()
        repository = container.catalog_repository()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine SQLModel - singleton construit depuis database_url
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, engine=engine)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda engine: next(get_session(engine)), engine=engine)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)

    # Repositories - Factory pour nouvelle instance avec session fraiche
    catalog_repository = providers.Factory(
        SQLModelCatalogRepository,
        session=session,
    )

    # Services de scan et matching (stateless - Singletons)
    directory_walker = providers.Singleton(
        DirectoryWalker,
        file_system=file_system,
    )
    material_matcher = providers.Singleton(
        MaterialMatcherService,
        walker=directory_walker,
        max_concurrent_scans=config.provided.max_concurrent_scans,
        batch_workers=config.provided.batch_workers,
    )

    # Service d'association - Factory car depend du repository (session fraiche)
    association_service = providers.Factory(
        AssociationService,
        repository=catalog_repository,
        file_system=file_system,
        matcher=material_matcher,
    )
