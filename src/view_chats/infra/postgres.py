"""Conexões PostgreSQL (psycopg 3).

Uma conexão por operação, aberta via context manager.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from view_chats.config.settings import split_identifier

if TYPE_CHECKING:
    from view_chats.config.settings import Settings


def table_identifier(name: str) -> sql.Identifier:
    """Identificador SQL citado para "tabela" ou "schema"."tabela"."""

    return sql.Identifier(*split_identifier(name))


class PostgresConnectionFactory:
    """Abre conexões com row_factory=dict_row."""

    def __init__(self, conninfo: str = "", **params: Any) -> None:
        self._conninfo = conninfo
        self._params = {key: value for key, value in params.items() if value is not None}

    @classmethod
    def from_settings(cls, settings: Settings) -> PostgresConnectionFactory:
        params: dict[str, Any] = {"connect_timeout": settings.pg_connect_timeout_seconds}
        if not settings.database_url:
            params.update(
                host=settings.pghost,
                port=settings.pgport,
                dbname=settings.pgdatabase,
                user=settings.pguser,
                password=settings.pgpassword,
            )
        if settings.pgsslmode:
            params["sslmode"] = settings.pgsslmode.strip().lower()
        return cls(settings.database_url or "", **params)

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection]:
        conn = psycopg.connect(self._conninfo, row_factory=dict_row, **self._params)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
