"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.party_booking.app.service.policy_resolver import PolicyResolver
from src.service.party_booking.app.service.reservation_validator import ReservationValidator
from src.service.party_booking.driven_adapter.repo.catalog_query_repo_impl import (
    CatalogQueryRepoImpl,
)
from src.service.party_booking.driven_adapter.repo.tenant_directory_impl import (
    TenantDirectoryImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (engine bound to the running event loop, see AsyncEngineManager)
    database = providers.Singleton(Database)

    # Read-only collaborators (stateless - use session_factory per call)
    tenant_directory = providers.Singleton(
        TenantDirectoryImpl, session_factory=database.provided.session
    )
    catalog_query_repo = providers.Singleton(
        CatalogQueryRepoImpl, session_factory=database.provided.session
    )

    # Tenant/policy lookups, cached for a few seconds
    policy_resolver = providers.Singleton(
        PolicyResolver,
        tenant_directory=tenant_directory,
        ttl_seconds=config_service.provided.POLICY_CACHE_TTL_SECONDS,
    )
    reservation_validator = providers.Singleton(
        ReservationValidator, catalog_query_repo=catalog_query_repo
    )

    # One UoW (session + transaction) per use case invocation
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_maker=database.provided.session_maker.call()
    )


container = Container()
