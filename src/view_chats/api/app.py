"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from view_chats.api.routes import chats_router, router
from view_chats.config.settings import Settings, get_settings
from view_chats.infra.google_auth import GoogleTokenVerifier
from view_chats.infra.stores import (
    create_firestore_client,
    create_message_store,
    create_postgres_connections,
    create_settings_store,
)
from view_chats.observability.logging import configure_logging, get_logger
from view_chats.observability.middleware import CORRELATION_ID_HEADER, CorrelationIdMiddleware

logger = get_logger(__name__)


def _add_cors(app: FastAPI, settings: Settings) -> None:
    """CORS restrito às origens configuradas ou aberto quando não há lista."""
    origins = settings.cors_origins
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[CORRELATION_ID_HEADER],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[CORRELATION_ID_HEADER],
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Cria a aplicação FastAPI."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name, settings.log_format)

    validation_errors = settings.validation_errors()
    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    if not settings.google_client_id:
        logger.warning(
            "GOOGLE_CLIENT_ID ausente: todas as requisições autenticadas serão rejeitadas",
            extra={"environment": settings.environment},
        )

    app = FastAPI(title=settings.service_name, version=settings.version)
    app.add_middleware(CorrelationIdMiddleware)
    _add_cors(app, settings)
    app.include_router(router)
    app.include_router(chats_router)

    firestore_client = create_firestore_client(settings) if settings.uses_firestore else None
    connections = create_postgres_connections(settings) if settings.uses_postgres else None

    app.state.settings = settings
    app.state.message_store = create_message_store(
        settings, firestore_client=firestore_client, connections=connections
    )
    app.state.settings_store = create_settings_store(
        settings, firestore_client=firestore_client, connections=connections
    )
    app.state.token_verifier = GoogleTokenVerifier(
        client_id=settings.google_client_id,
        allowed_domain=settings.google_allowed_domain,
        tokeninfo_url=settings.google_tokeninfo_url,
        timeout_seconds=settings.auth_token_timeout_seconds,
    )

    logger.info(
        "app_created",
        extra={
            "environment": settings.environment,
            "message_store_backend": settings.message_store_backend,
            "settings_store_backend": settings.settings_store_backend,
        },
    )
    return app


# Instância padrão para uvicorn/Cloud Run
app = create_app()
