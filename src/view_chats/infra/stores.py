"""Factories dos stores de mensagens e de configurações de sessão.

Backends:
- "memory": apenas dev/testes
- "firestore": coleções chat_messages / visitors_settings
- "postgres": tabelas chat_messages / visitors_settings
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.infra.message_store_memory import (
    InMemoryCategorySettingsStore,
    InMemoryMessageStore,
)
from view_chats.observability.logging import get_logger

if TYPE_CHECKING:
    from view_chats.config.settings import Settings
    from view_chats.infra.postgres import PostgresConnectionFactory

logger: logging.Logger = get_logger(__name__)


def create_firestore_client(settings: Settings) -> Any:
    """Cria cliente Firestore (import tardio)."""
    from google.cloud import firestore

    return firestore.Client(
        project=settings.firestore_project_id,
        database=settings.firestore_database_id,
    )


def create_postgres_connections(settings: Settings) -> PostgresConnectionFactory:
    """Cria a fábrica de conexões Postgres (import tardio)."""
    from view_chats.infra.postgres import PostgresConnectionFactory

    return PostgresConnectionFactory.from_settings(settings)


def create_message_store(
    settings: Settings,
    firestore_client: Any = None,
    connections: PostgresConnectionFactory | None = None,
) -> MessageStoreProtocol:
    """Factory do store de mensagens conforme settings.message_store_backend.

    Raises:
        ValueError: Se backend não reconhecido
    """
    backend = settings.message_store_backend.lower()

    if backend == "memory":
        logger.info("Usando InMemoryMessageStore (apenas dev/testes)")
        return InMemoryMessageStore()

    if backend == "firestore":
        from view_chats.infra.message_store_firestore import FirestoreMessageStore

        logger.info(
            "Usando FirestoreMessageStore",
            extra={"collection": settings.chat_messages_collection},
        )
        return FirestoreMessageStore(
            client=firestore_client or create_firestore_client(settings),
            collection=settings.chat_messages_collection,
        )

    if backend == "postgres":
        from view_chats.infra.message_store_postgres import PostgresMessageStore

        logger.info("Usando PostgresMessageStore", extra={"table": settings.chat_table})
        return PostgresMessageStore(
            connections or create_postgres_connections(settings),
            table=settings.chat_table,
        )

    raise ValueError(f"Backend de mensagens não reconhecido: {backend}")


def create_settings_store(
    settings: Settings,
    firestore_client: Any = None,
    connections: PostgresConnectionFactory | None = None,
) -> CategorySettingsStoreProtocol:
    """Factory do store de configurações conforme settings.settings_store_backend.

    Raises:
        ValueError: Se backend não reconhecido
    """
    backend = settings.settings_store_backend.lower()

    if backend == "memory":
        logger.info("Usando InMemoryCategorySettingsStore (apenas dev/testes)")
        return InMemoryCategorySettingsStore()

    if backend == "firestore":
        from view_chats.infra.message_store_firestore import FirestoreCategorySettingsStore

        logger.info(
            "Usando FirestoreCategorySettingsStore",
            extra={"collection": settings.visitor_settings_collection},
        )
        return FirestoreCategorySettingsStore(
            client=firestore_client or create_firestore_client(settings),
            collection=settings.visitor_settings_collection,
        )

    if backend == "postgres":
        from view_chats.infra.message_store_postgres import PostgresCategorySettingsStore

        logger.info(
            "Usando PostgresCategorySettingsStore",
            extra={"table": settings.visitor_settings_table},
        )
        return PostgresCategorySettingsStore(
            connections or create_postgres_connections(settings),
            table=settings.visitor_settings_table,
        )

    raise ValueError(f"Backend de configurações não reconhecido: {backend}")
