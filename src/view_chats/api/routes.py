"""Rotas HTTP (health + API de chats)."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from view_chats.api.auth import require_auth
from view_chats.api.dependencies import (
    get_list_chats_use_case,
    get_lookup_summaries_use_case,
    get_session_messages_use_case,
    get_settings,
)
from view_chats.application.chat_list import ListChatsUseCase
from view_chats.application.chat_messages import GetSessionMessagesUseCase
from view_chats.application.chat_summaries import LookupChatSummariesUseCase
from view_chats.config.settings import Settings
from view_chats.domain.auth import AuthUser
from view_chats.domain.errors import ChatNotFoundError, ChatValidationError, StoreUnavailableError
from view_chats.observability.logging import get_logger
from view_chats.observability.middleware import get_correlation_id

logger = get_logger(__name__)

router = APIRouter()
chats_router = APIRouter(prefix="/api/chats")


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@contextmanager
def _domain_errors() -> Iterator[None]:
    """Converte erros de domínio em respostas HTTP."""
    try:
        yield
    except ChatValidationError as exc:
        logger.info("chat_request_rejected", extra={"code": exc.code})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": exc.code, "message": exc.message},
        ) from exc
    except ChatNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "chat_not_found", "message": str(exc)},
        ) from exc
    except StoreUnavailableError as exc:
        logger.error(
            "chat_store_unavailable",
            extra={"backend": exc.backend, "error": str(exc)},
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "store_unavailable", "correlation_id": get_correlation_id()},
        ) from exc


@chats_router.get("/list")
def list_chats(
    search: str | None = Query(None),
    only_sales: bool = Query(False, alias="onlySales"),
    only_whatsapp: bool = Query(False, alias="onlyWhatsapp"),
    cursor_last_message_at: str | None = Query(None, alias="cursorLastMessageAt"),
    cursor_session_id: str | None = Query(None, alias="cursorSessionId"),
    limit: str | None = Query(None),
    user: AuthUser = Depends(require_auth),
    use_case: ListChatsUseCase = Depends(get_list_chats_use_case),
) -> dict[str, Any]:
    """Listagem paginada por keyset, mais recentes primeiro."""
    with _domain_errors():
        response = use_case.execute(
            search=search,
            only_sales=only_sales,
            only_whatsapp=only_whatsapp,
            cursor_last_message_at=cursor_last_message_at,
            cursor_session_id=cursor_session_id,
            limit=limit,
            principal=user,
        )
    return {"data": response.to_payload()}


@chats_router.get("")
def lookup_chat_summaries(
    session_id: str | None = Query(None, alias="sessionId"),
    search: str | None = Query(None),
    limit: str | None = Query(None),
    user: AuthUser = Depends(require_auth),
    use_case: LookupChatSummariesUseCase = Depends(get_lookup_summaries_use_case),
) -> dict[str, Any]:
    """Resumos com preview por sessionId exato ou busca por prefixo."""
    with _domain_errors():
        summaries = use_case.execute(
            session_id=session_id,
            search=search,
            limit=limit,
            principal=user,
        )
    return {"data": [summary.model_dump(by_alias=True, mode="json") for summary in summaries]}


@chats_router.get("/{session_id}/messages")
def session_messages(
    session_id: str,
    user: AuthUser = Depends(require_auth),
    use_case: GetSessionMessagesUseCase = Depends(get_session_messages_use_case),
) -> dict[str, Any]:
    """Mensagens da sessão em ordem cronológica."""
    with _domain_errors():
        messages = use_case.execute(session_id=session_id, principal=user)
    return {"data": [message.model_dump(by_alias=True, mode="json") for message in messages]}
