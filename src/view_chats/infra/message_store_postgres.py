"""Implementação PostgreSQL dos stores de mensagens e configurações.

Tabelas (ver sql/schema.sql):
- chat_messages(id, session_id, message jsonb, created_at timestamptz)
- visitors_settings(session_id, is_whatsapp, type)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import psycopg
from psycopg import sql

from view_chats.domain.chats import ChatMessage, MessageQueryHints, VisitorSettings
from view_chats.domain.errors import StoreUnavailableError
from view_chats.domain.protocols import CategorySettingsStoreProtocol, MessageStoreProtocol
from view_chats.infra.postgres import PostgresConnectionFactory, table_identifier
from view_chats.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class PostgresMessageStore(MessageStoreProtocol):
    """Log de mensagens em Postgres; session_id e prefixo ILIKE são aplicados no SQL."""

    def __init__(self, connections: PostgresConnectionFactory, table: str = "chat_messages") -> None:
        self._connections = connections
        self._table = table_identifier(table)

    def build_query(self, hints: MessageQueryHints) -> tuple[sql.Composed, list[Any]]:
        conditions: list[sql.Composable] = []
        params: list[Any] = []

        if hints.session_id is not None:
            conditions.append(sql.SQL("session_id = %s"))
            params.append(hints.session_id)
        if hints.session_id_like:
            conditions.append(sql.SQL("session_id ILIKE %s"))
            params.append(hints.session_id_like)

        query = sql.SQL("SELECT id, session_id, message, created_at FROM {table}").format(
            table=self._table
        )
        if conditions:
            query = query + sql.SQL(" WHERE ") + sql.SQL(" AND ").join(conditions)
        query = query + sql.SQL(" ORDER BY session_id, created_at")
        return query, params

    def fetch_all_messages(self, hints: MessageQueryHints) -> list[ChatMessage]:
        query, params = self.build_query(hints)
        try:
            with self._connections.connection() as conn:
                rows = conn.execute(query, params).fetchall()
        except psycopg.Error as e:
            logger.error(
                "Failed to fetch messages from Postgres",
                extra={"error": type(e).__name__},
            )
            raise StoreUnavailableError(
                f"Postgres fetch failed: {type(e).__name__}", backend="postgres"
            ) from e

        return [_to_message(row) for row in rows]


def _to_message(row: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=str(row["id"]),
        session_id=row["session_id"],
        created_at=row["created_at"],
        payload=row["message"],
    )


class PostgresCategorySettingsStore(CategorySettingsStoreProtocol):
    """Configurações por sessão na tabela visitors_settings."""

    def __init__(
        self, connections: PostgresConnectionFactory, table: str = "visitors_settings"
    ) -> None:
        self._connections = connections
        self._table = table_identifier(table)

    def lookup(self, session_id: str) -> VisitorSettings | None:
        return self.lookup_many([session_id]).get(session_id)

    def lookup_many(self, session_ids: Iterable[str]) -> dict[str, VisitorSettings]:
        ids = list(dict.fromkeys(session_ids))
        if not ids:
            return {}

        query = sql.SQL(
            "SELECT session_id, is_whatsapp, type FROM {table} WHERE session_id = ANY(%s)"
        ).format(table=self._table)
        try:
            with self._connections.connection() as conn:
                rows = conn.execute(query, [ids]).fetchall()
        except psycopg.Error as e:
            logger.error(
                "Failed to load visitor settings from Postgres",
                extra={"batch_size": len(ids), "error": type(e).__name__},
            )
            raise StoreUnavailableError(
                f"Postgres lookup failed: {type(e).__name__}", backend="postgres"
            ) from e

        return {
            row["session_id"]: VisitorSettings(
                session_id=row["session_id"],
                is_whatsapp=row["is_whatsapp"],
                type=row["type"],
            )
            for row in rows
        }
