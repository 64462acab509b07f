"""Relational schema management for SQL-backed deployments.

The memory provider keeps no schema; only providers listed in
``SQL_PROVIDERS`` are touched.
"""

from collections.abc import Iterator

import structlog
from protean.domain import Domain
from sqlalchemy import Engine, create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain) -> Iterator[tuple[object, Engine]]:
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider, create_engine(provider.conn_info["database_uri"])


def _persisted_elements(domain: Domain, provider_name: str) -> list[type]:
    """Aggregates and entities (order items) stored by ``provider_name``."""
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    return [record.cls for record in records if record.cls.meta_.provider == provider_name]


def setup_db(domain: Domain) -> list[str]:
    """Create tables for every SQL provider and return their names."""
    created = []
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            # A table joins the provider metadata once its DAO is built
            for element in _persisted_elements(domain, provider.name):
                domain.repository_for(element)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            created.extend(sorted(provider._metadata.tables))
            logger.info("schema_created", provider=provider.name, tables=len(provider._metadata.tables))
    return created


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)
            logger.info("schema_dropped", provider=provider.name)
