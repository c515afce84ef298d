"""Configurações da aplicação via variáveis de ambiente.

Nunca hardcode secrets (senha do Postgres, client id do Google).
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_IDENTIFIER_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

VALID_STORE_BACKENDS = {"memory", "firestore", "postgres"}
VALID_PG_SSLMODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


def split_identifier(value: str) -> list[str]:
    """Divide um nome de tabela (schema.tabela) em segmentos validados.

    Raises:
        ValueError: nome vazio ou segmento fora de [A-Za-z_][A-Za-z0-9_]*
    """

    parts = [part.strip() for part in value.split(".") if part.strip()]
    if not parts:
        raise ValueError("Nome de tabela não pode ser vazio")
    for part in parts:
        if not _IDENTIFIER_SEGMENT.match(part):
            raise ValueError(
                f'Segmento de identificador inválido "{part}": use letras, dígitos ou '
                "underscore, começando por letra ou underscore"
            )
    return parts


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    # Aplicação
    service_name: str = "view_chats"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text
    cors_origin: str | None = None  # lista separada por vírgula

    # Backends de armazenamento
    message_store_backend: str = "memory"  # memory | firestore | postgres
    settings_store_backend: str = "memory"  # memory | firestore | postgres

    # PostgreSQL (DATABASE_URL ou PG*)
    database_url: str | None = None
    pghost: str | None = None
    pgport: int = 5432
    pgdatabase: str | None = None
    pguser: str | None = None
    pgpassword: str | None = None
    pgsslmode: str | None = Field(
        default=None, validation_alias=AliasChoices("pgsslmode", "pgssl")
    )
    pg_connect_timeout_seconds: int = 10
    chat_table: str = Field(
        default="chat_messages", validation_alias=AliasChoices("chat_table", "chat_table_name")
    )
    visitor_settings_table: str = Field(
        default="visitors_settings",
        validation_alias=AliasChoices("visitor_settings_table", "visitors_settings_table"),
    )

    # Firestore
    firestore_project_id: str | None = None
    firestore_database_id: str = "(default)"
    chat_messages_collection: str = "chat_messages"
    visitor_settings_collection: str = "visitors_settings"

    # Autenticação (Google ID token)
    google_client_id: str | None = None
    google_allowed_domain: str = "kiv.chat"
    google_tokeninfo_url: str = "https://oauth2.googleapis.com/tokeninfo"
    auth_token_timeout_seconds: float = 10.0

    # Listagem e busca
    min_search_length: int = 3
    chat_list_default_limit: int = 50
    chat_list_max_limit: int = 200
    chat_summary_default_limit: int = 25
    chat_summary_max_limit: int = 200

    @property
    def cors_origins(self) -> list[str] | None:
        """Origens CORS permitidas (None = qualquer origem)."""
        if not self.cors_origin:
            return None
        origins = [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]
        return origins or None

    @property
    def uses_postgres(self) -> bool:
        return "postgres" in {
            self.message_store_backend.lower(),
            self.settings_store_backend.lower(),
        }

    @property
    def uses_firestore(self) -> bool:
        return "firestore" in {
            self.message_store_backend.lower(),
            self.settings_store_backend.lower(),
        }

    def validate_store_backends(self) -> list[str]:
        """Valida backends de mensagens e de configurações de sessão.

        Em staging/prod, memory é proibido (não há dados reais em memória).
        """
        errors: list[str] = []
        for name, backend in (
            ("MESSAGE_STORE_BACKEND", self.message_store_backend.lower()),
            ("SETTINGS_STORE_BACKEND", self.settings_store_backend.lower()),
        ):
            if backend not in VALID_STORE_BACKENDS:
                errors.append(
                    f"{name} '{backend}' inválido. Valores válidos: {sorted(VALID_STORE_BACKENDS)}"
                )
            elif backend == "memory" and (self.is_staging or self.is_production):
                errors.append(f"{name}=memory é proibido em staging/production")
        return errors

    def validate_postgres_config(self) -> list[str]:
        """Valida conexão e nomes de tabela quando algum backend usa Postgres."""
        errors: list[str] = []
        if not self.uses_postgres:
            return errors

        has_fields = bool(self.pghost and self.pgdatabase and self.pguser)
        if not self.database_url and not has_fields:
            errors.append(
                "Postgres não configurado: defina DATABASE_URL ou PGHOST, PGDATABASE e PGUSER"
            )

        if self.pgsslmode and self.pgsslmode.strip().lower() not in VALID_PG_SSLMODES:
            errors.append(
                f"PGSSLMODE '{self.pgsslmode}' inválido. Valores válidos: "
                f"{sorted(VALID_PG_SSLMODES)}"
            )

        for name, value in (
            ("CHAT_TABLE", self.chat_table),
            ("VISITOR_SETTINGS_TABLE", self.visitor_settings_table),
        ):
            try:
                split_identifier(value)
            except ValueError as exc:
                errors.append(f"{name}: {exc}")
        return errors

    def validate_firestore_config(self) -> list[str]:
        """Valida projeto Firestore fora de development."""
        errors: list[str] = []
        if self.uses_firestore and not self.firestore_project_id and not self.is_development:
            errors.append("Backend firestore requer FIRESTORE_PROJECT_ID configurado")
        return errors

    def validate_auth_config(self) -> list[str]:
        """Valida autenticação; client id é obrigatório fora de development."""
        errors: list[str] = []
        if not self.google_client_id and not self.is_development:
            errors.append("GOOGLE_CLIENT_ID é obrigatório para autenticação")
        if not self.google_allowed_domain.strip():
            errors.append("GOOGLE_ALLOWED_DOMAIN não pode ser vazio")
        if self.auth_token_timeout_seconds <= 0:
            errors.append("AUTH_TOKEN_TIMEOUT_SECONDS deve ser > 0")
        return errors

    def validate_pagination(self) -> list[str]:
        """Valida limites de página e tamanho mínimo de busca."""
        errors: list[str] = []
        if self.min_search_length < 1:
            errors.append("MIN_SEARCH_LENGTH deve ser >= 1")
        for name, default, maximum in (
            ("CHAT_LIST", self.chat_list_default_limit, self.chat_list_max_limit),
            ("CHAT_SUMMARY", self.chat_summary_default_limit, self.chat_summary_max_limit),
        ):
            if maximum < 1:
                errors.append(f"{name}_MAX_LIMIT deve ser >= 1")
            if not 1 <= default <= max(maximum, 1):
                errors.append(f"{name}_DEFAULT_LIMIT deve estar entre 1 e {name}_MAX_LIMIT")
        return errors

    def validation_errors(self) -> list[str]:
        """Agrega todos os erros de configuração (vazia = OK)."""
        errors: list[str] = []
        errors.extend(self.validate_store_backends())
        errors.extend(self.validate_postgres_config())
        errors.extend(self.validate_firestore_config())
        errors.extend(self.validate_auth_config())
        errors.extend(self.validate_pagination())
        return errors

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local", "test")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
